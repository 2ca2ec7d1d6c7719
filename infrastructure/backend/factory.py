"""
Hosted Backend Factory
======================

Factory pattern for creating hosted backend data and auth adapters.
Implements the Dependency Inversion Principle.
"""

import logging
from typing import Optional

from django.conf import settings

from .interface import AuthProviderInterface, HostedBackendInterface

logger = logging.getLogger(__name__)

BACKEND_TYPES = ("postgrest", "memory")


def _configured_type(backend_type: Optional[str]) -> str:
    backend_type = backend_type or getattr(settings, "INFRASTRUCTURE", {}).get("BACKEND_TYPE", "postgrest")
    if backend_type not in BACKEND_TYPES:
        raise ValueError(f"Unknown hosted backend type: {backend_type}")
    return backend_type


class BackendFactory:
    """
    Factory for creating hosted backend adapters.

    Usage:
        backend = BackendFactory.create()            # from settings
        auth = BackendFactory.create_auth("memory")  # explicit
    """

    @staticmethod
    def create(backend_type: Optional[str] = None) -> HostedBackendInterface:
        """
        Create a data backend instance.

        Args:
            backend_type: 'postgrest' or 'memory'. If None, uses
                INFRASTRUCTURE["BACKEND_TYPE"].
        """
        backend_type = _configured_type(backend_type)
        logger.info(f"Creating hosted data backend: {backend_type}")

        if backend_type == "memory":
            from .memory_adapter import InMemoryBackend

            return InMemoryBackend()

        from .postgrest_adapter import PostgrestBackend

        return PostgrestBackend()

    @staticmethod
    def create_auth(backend_type: Optional[str] = None) -> AuthProviderInterface:
        """
        Create an auth provider instance.

        Args:
            backend_type: 'postgrest' or 'memory'. If None, uses
                INFRASTRUCTURE["BACKEND_TYPE"].
        """
        backend_type = _configured_type(backend_type)
        logger.info(f"Creating hosted auth provider: {backend_type}")

        if backend_type == "memory":
            from .memory_adapter import InMemoryAuthProvider

            return InMemoryAuthProvider(
                require_confirmation=getattr(settings, "INFRASTRUCTURE", {}).get("REQUIRE_EMAIL_CONFIRMATION", False)
            )

        from .gotrue_adapter import GoTrueAuthProvider

        return GoTrueAuthProvider()
