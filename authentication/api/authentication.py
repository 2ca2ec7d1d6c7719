"""
DRF authentication against the hosted auth service.

Bearer tokens are validated with the auth service; browser requests reuse
the ``request.user`` that HostedSessionMiddleware restored from the session.
"""

import logging

from rest_framework.authentication import BaseAuthentication, SessionAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from authentication.infra.observability import token_validation_total
from infrastructure.backend import HostedBackendError

logger = logging.getLogger(__name__)


class HostedBackendTokenAuthentication(BaseAuthentication):
    """
    ``Authorization: Bearer <access token>`` issued by the hosted auth service.

    The token is validated by asking the auth service for its user.
    """

    keyword = "bearer"

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.encode():
            return None

        if len(auth) != 2:
            raise AuthenticationFailed("Invalid bearer header.")

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise AuthenticationFailed("Invalid bearer header.")

        from infrastructure.container import container

        try:
            user = container.auth_service().get_user(token)
        except HostedBackendError as e:
            logger.error(f"Token validation failed: {e}")
            raise AuthenticationFailed("Authentication service unavailable.")

        if user is None:
            token_validation_total.labels(status="invalid").inc()
            raise AuthenticationFailed("Invalid or expired token.")

        token_validation_total.labels(status="valid").inc()
        return (user, token)

    def authenticate_header(self, request):
        return 'Bearer realm="api"'


class HostedSessionAuthentication(SessionAuthentication):
    """Session cookie login; CSRF is enforced like DRF's SessionAuthentication."""

    def authenticate(self, request):
        user = getattr(request._request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return None

        self.enforce_csrf(request)
        return (user, None)
