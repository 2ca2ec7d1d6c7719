"""
Django session storage for the hosted auth session.

The signed-in user's id, email and tokens are kept under one session key;
``HostedSessionMiddleware`` turns them back into ``request.user``.
"""

import logging
from typing import Optional

from django.contrib.auth.models import AnonymousUser

from authentication.domain.models import StorefrontUser

logger = logging.getLogger(__name__)

SESSION_KEY = "storefront_user"
LAST_ORDER_SESSION_KEY = "storefront_last_order"


def login_session(request, user: StorefrontUser) -> None:
    """Store ``user`` in the session (rotating the session key) and attach it to the request."""
    request.session.cycle_key()
    request.session[SESSION_KEY] = user.to_session()
    request.user = user


def update_session_user(request, user: StorefrontUser) -> None:
    request.session[SESSION_KEY] = user.to_session()
    request.user = user


def logout_session(request) -> None:
    request.session.flush()
    request.user = AnonymousUser()


def get_session_user(request) -> Optional[StorefrontUser]:
    data = request.session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return StorefrontUser.from_session(data)
    except (KeyError, TypeError) as e:
        logger.warning(f"Discarding malformed session user: {e}")
        request.session.pop(SESSION_KEY, None)
        return None
