"""
GoTrue Auth Adapter
===================

Concrete implementation of AuthProviderInterface over the hosted backend's
auth endpoints (``/auth/v1``), using ``requests``.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .interface import AuthenticationError, AuthProviderInterface, AuthSession, AuthUser, HostedBackendError
from .metrics import backend_requests_total
from .postgrest_adapter import error_from_response, load_backend_settings

logger = logging.getLogger(__name__)


def _user_from_payload(payload: Dict[str, Any]) -> AuthUser:
    return AuthUser(id=str(payload["id"]), email=payload.get("email") or "")


def session_from_payload(payload: Dict[str, Any]) -> AuthSession:
    """
    Build an AuthSession from a token or sign-up response.

    Sign-ups that require email confirmation return the bare user object
    instead of a token payload.
    """
    if "access_token" in payload:
        return AuthSession(
            user=_user_from_payload(payload["user"]),
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_in=payload.get("expires_in"),
        )
    if "user" in payload and payload["user"]:
        return AuthSession(user=_user_from_payload(payload["user"]))
    return AuthSession(user=_user_from_payload(payload))


class GoTrueAuthProvider(AuthProviderInterface):
    """Password authentication against the hosted auth service."""

    def __init__(self, session: Optional[requests.Session] = None):
        config = load_backend_settings()
        self.base_url = f"{config['url']}/auth/v1"
        self.anon_key = config["anon_key"]
        self.timeout = config["timeout"]
        self.session = session or requests.Session()

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token or self.anon_key}",
            "Content-Type": "application/json",
        }

    def _post(self, path: str, operation: str, access_token: Optional[str] = None, **kwargs) -> requests.Response:
        try:
            response = self.session.post(
                f"{self.base_url}/{path}", headers=self._headers(access_token), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            backend_requests_total.labels(operation=operation, status="network_error").inc()
            logger.error(f"[AUTH] {operation} failed: {e}")
            raise HostedBackendError(f"Auth service unreachable: {e}", code="network_error") from e

        backend_requests_total.labels(operation=operation, status=str(response.status_code)).inc()
        return response

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = self._post(
            "token", "sign_in", params={"grant_type": "password"}, json={"email": email, "password": password}
        )
        if not response.ok:
            raise error_from_response(response, AuthenticationError)
        return session_from_payload(response.json())

    def sign_up(self, email: str, password: str) -> AuthSession:
        response = self._post("signup", "sign_up", json={"email": email, "password": password})
        if not response.ok:
            raise error_from_response(response, AuthenticationError)
        return session_from_payload(response.json())

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        try:
            response = self.session.get(
                f"{self.base_url}/user", headers=self._headers(access_token), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"[AUTH] get_user failed: {e}")
            raise HostedBackendError(f"Auth service unreachable: {e}", code="network_error") from e

        backend_requests_total.labels(operation="get_user", status=str(response.status_code)).inc()

        if response.status_code in (401, 403):
            return None
        if not response.ok:
            raise error_from_response(response)
        return _user_from_payload(response.json())

    def refresh_session(self, refresh_token: str) -> AuthSession:
        response = self._post(
            "token", "refresh", params={"grant_type": "refresh_token"}, json={"refresh_token": refresh_token}
        )
        if not response.ok:
            raise error_from_response(response, AuthenticationError)
        return session_from_payload(response.json())

    def sign_out(self, access_token: str) -> None:
        response = self._post("logout", "sign_out", access_token=access_token)
        # An expired token means the session is already gone
        if response.status_code in (401, 403):
            logger.info("[AUTH] sign_out with expired token ignored")
            return
        if not response.ok:
            raise error_from_response(response)
