"""Custom middleware helpers for the Bloom storefront."""

from __future__ import annotations

import logging
from typing import Callable

from django.contrib.auth.models import AnonymousUser

from authentication.session import get_session_user, logout_session, update_session_user
from infrastructure.backend import HostedBackendError
from infrastructure.container import container

logger = logging.getLogger(__name__)


class BearerCSRFBypassMiddleware:
    """Skip CSRF enforcement for requests authenticated with a Bearer token.

    API clients that send the hosted backend's access token in the
    Authorization header do not use the session cookie, so CSRF protection
    only needs to guard the cookie-based pages and API calls.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        authorization = request.META.get("HTTP_AUTHORIZATION", "")
        if authorization.lower().startswith("bearer "):
            request._dont_enforce_csrf_checks = True  # type: ignore[attr-defined]
            request.META.setdefault("CSRF_SKIP_REASON", "hosted-bearer")
        return self.get_response(request)


class HostedSessionMiddleware:
    """Expose the session's hosted auth user as ``request.user``.

    Expired access tokens are exchanged with the refresh token; when the
    refresh is rejected the session is dropped and the request continues
    anonymously. Must run after SessionMiddleware.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        request.user = self._resolve_user(request)
        return self.get_response(request)

    def _resolve_user(self, request):
        user = get_session_user(request)
        if user is None:
            return AnonymousUser()

        if not user.is_expired:
            return user

        try:
            refreshed = container.auth_service().refresh(user)
        except HostedBackendError as e:
            # Keep the stale session; the next request retries the refresh
            logger.warning(f"Could not refresh session for user {user.id}: {e}")
            return user

        if refreshed is None:
            logger.info(f"Session for user {user.id} expired and could not be refreshed")
            logout_session(request)
            return request.user

        update_session_user(request, refreshed)
        logger.debug(f"Refreshed session for user {user.id}")
        return refreshed
