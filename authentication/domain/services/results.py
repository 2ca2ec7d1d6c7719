"""
Result objects for the authentication service layer.

Using dataclasses to return structured results from service methods
instead of mixed tuples or dicts.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from authentication.domain.models import StorefrontUser


@dataclass
class LoginResult:
    """Result of a sign-in attempt."""

    success: bool
    user: Optional[StorefrontUser] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None


@dataclass
class RegisterResult:
    """Result of a sign-up attempt."""

    success: bool
    user: Optional[StorefrontUser] = None  # carries tokens only when no confirmation is required
    requires_confirmation: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None
    errors: Optional[Dict[str, str]] = None  # Field-level errors
    message: Optional[str] = None
