"""
Signed-in storefront user.

Accounts live in the hosted backend; the storefront only carries the
identity and tokens of the current session.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StorefrontUser:
    """
    Request user backed by a hosted auth session.

    Quacks like ``django.contrib.auth`` users where views and DRF look
    (``is_authenticated``, ``is_anonymous``, ``pk``).
    """

    id: str
    email: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[float] = None

    is_authenticated = True
    is_anonymous = False
    is_active = True
    is_staff = False

    @property
    def pk(self) -> str:
        return self.id

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and time.time() >= self.expires_at

    def __str__(self):
        return self.email

    def to_session(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_session(cls, data: Dict[str, Any]) -> "StorefrontUser":
        return cls(
            id=str(data["id"]),
            email=data.get("email") or "",
            access_token=data.get("access_token"),
            refresh_token=data.get("refresh_token"),
            expires_at=data.get("expires_at"),
        )
