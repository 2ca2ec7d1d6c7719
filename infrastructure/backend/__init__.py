"""
Hosted Backend Abstraction Layer
================================

Provides a unified interface to the hosted database-and-auth service
(REST data endpoints and password authentication).
"""

from .factory import BackendFactory
from .gotrue_adapter import GoTrueAuthProvider
from .interface import (
    AuthenticationError,
    AuthProviderInterface,
    AuthSession,
    AuthUser,
    HostedBackendError,
    HostedBackendInterface,
    Op,
    in_,
)
from .memory_adapter import InMemoryAuthProvider, InMemoryBackend
from .postgrest_adapter import PostgrestBackend

__all__ = [
    "HostedBackendInterface",
    "AuthProviderInterface",
    "AuthSession",
    "AuthUser",
    "HostedBackendError",
    "AuthenticationError",
    "Op",
    "in_",
    "BackendFactory",
    "PostgrestBackend",
    "GoTrueAuthProvider",
    "InMemoryBackend",
    "InMemoryAuthProvider",
]
