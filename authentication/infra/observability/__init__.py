"""
Observability Infrastructure

Prometheus metrics for the authentication flow.
"""

from .metrics import login_duration, login_failed, login_total, registration_total, token_validation_total

__all__ = [
    "login_total",
    "login_failed",
    "login_duration",
    "registration_total",
    "token_validation_total",
]
