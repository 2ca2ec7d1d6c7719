"""
AuthService - Storefront Authentication Logic.

Email/password sign-in and sign-up against the hosted backend's auth
service, plus recording new accounts in the ``users`` table.
"""

import logging
import time
from typing import Optional

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.utils import timezone

from authentication.domain.models import StorefrontUser
from authentication.infra.observability import login_duration, login_failed, login_total, registration_total
from infrastructure.backend import (
    AuthenticationError,
    AuthProviderInterface,
    AuthSession,
    HostedBackendError,
    HostedBackendInterface,
)
from storefront.services.base import ErrorCodes
from utils.logging_utils import mask_value

from .results import LoginResult, RegisterResult

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
USERS_TABLE = "users"


def _user_from_session(session: AuthSession) -> StorefrontUser:
    return StorefrontUser(
        id=session.user.id,
        email=session.user.email,
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=time.time() + session.expires_in if session.expires_in else None,
    )


class AuthService:
    """
    Authentication service encapsulating the sign-in/sign-up flow.

    Dependencies:
    - AuthProviderInterface: hosted auth endpoints
    - HostedBackendInterface: ``users`` table writes
    """

    def __init__(self, auth_provider: AuthProviderInterface, backend: HostedBackendInterface):
        """
        Initialize AuthService with injected dependencies.

        Args:
            auth_provider: Hosted auth provider implementation
            backend: Hosted data backend implementation
        """
        self.auth_provider = auth_provider
        self.backend = backend

    def sign_in(self, email: str, password: str) -> LoginResult:
        """
        Authenticate with email and password.

        Returns:
            LoginResult carrying a StorefrontUser with session tokens
        """
        if not email or not password:
            login_failed.labels(reason="validation_error").inc()
            return LoginResult(
                success=False, error="Email and password are required.", error_code=ErrorCodes.INVALID_INPUT
            )

        try:
            with login_duration.time():
                session = self.auth_provider.sign_in_with_password(email, password)
        except AuthenticationError as e:
            login_total.labels(status="failed").inc()
            login_failed.labels(reason="invalid_credentials").inc()
            logger.info(f"Sign-in rejected for {mask_value(email)}: {e.message}")
            return LoginResult(success=False, error=e.message, error_code=ErrorCodes.AUTHENTICATION_FAILED)
        except HostedBackendError as e:
            login_total.labels(status="failed").inc()
            login_failed.labels(reason="backend_error").inc()
            logger.error(f"Sign-in failed for {mask_value(email)}: {e}")
            return LoginResult(
                success=False,
                error="Authentication service unavailable. Please try again later.",
                error_code=ErrorCodes.BACKEND_ERROR,
            )

        login_total.labels(status="success").inc()
        logger.info(f"User {session.user.id} signed in")
        return LoginResult(success=True, user=_user_from_session(session), message="Successfully logged in!")

    def _validate_registration(self, email: str, password: str) -> dict:
        errors = {}
        if not email:
            errors["email"] = "Email is required."
        else:
            try:
                validate_email(email)
            except ValidationError:
                errors["email"] = "Enter a valid email address."
        if not password:
            errors["password"] = "Password is required."
        elif len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        return errors

    def sign_up(self, email: str, password: str) -> RegisterResult:
        """
        Create an account and record it in the ``users`` table.

        When the hosted backend requires email confirmation the result has
        ``requires_confirmation=True`` and no session tokens.
        """
        errors = self._validate_registration(email, password)
        if errors:
            registration_total.labels(status="failed").inc()
            return RegisterResult(
                success=False, error="Invalid registration data.", error_code=ErrorCodes.INVALID_INPUT, errors=errors
            )

        try:
            session = self.auth_provider.sign_up(email, password)
        except AuthenticationError as e:
            registration_total.labels(status="failed").inc()
            logger.info(f"Sign-up rejected for {mask_value(email)}: {e.message}")
            return RegisterResult(success=False, error=e.message, error_code=ErrorCodes.AUTHENTICATION_FAILED)
        except HostedBackendError as e:
            registration_total.labels(status="failed").inc()
            logger.error(f"Sign-up failed for {mask_value(email)}: {e}")
            return RegisterResult(
                success=False,
                error="Authentication service unavailable. Please try again later.",
                error_code=ErrorCodes.BACKEND_ERROR,
            )

        try:
            self.backend.insert(
                USERS_TABLE,
                [{"id": session.user.id, "email": session.user.email, "created_at": timezone.now().isoformat()}],
                access_token=session.access_token,
            )
        except HostedBackendError as e:
            registration_total.labels(status="failed").inc()
            logger.error(f"Error inserting user data for {session.user.id}: {e}")
            return RegisterResult(success=False, error=e.message, error_code=ErrorCodes.BACKEND_ERROR)

        user = _user_from_session(session)
        if not session.is_active:
            registration_total.labels(status="pending_confirmation").inc()
            logger.info(f"User {session.user.id} registered, awaiting email confirmation")
            return RegisterResult(
                success=True,
                user=user,
                requires_confirmation=True,
                message="Check your email for the confirmation link!",
            )

        registration_total.labels(status="success").inc()
        logger.info(f"User {session.user.id} registered and signed in")
        return RegisterResult(success=True, user=user, message="Account created successfully!")

    def sign_out(self, user: StorefrontUser) -> bool:
        """
        Revoke the user's session at the hosted backend.

        Returns:
            False if the backend could not be reached; the caller still
            drops the local session.
        """
        if not user.access_token:
            return True
        try:
            self.auth_provider.sign_out(user.access_token)
        except HostedBackendError as e:
            logger.warning(f"Sign-out for user {user.id} not confirmed by backend: {e}")
            return False
        logger.info(f"User {user.id} signed out")
        return True

    def get_user(self, access_token: str) -> Optional[StorefrontUser]:
        """Resolve a bearer access token to a StorefrontUser (None if invalid)."""
        auth_user = self.auth_provider.get_user(access_token)
        if auth_user is None:
            return None
        return StorefrontUser(id=auth_user.id, email=auth_user.email, access_token=access_token)

    def refresh(self, user: StorefrontUser) -> Optional[StorefrontUser]:
        """Exchange the user's refresh token for a new session (None if rejected)."""
        if not user.refresh_token:
            return None
        try:
            session = self.auth_provider.refresh_session(user.refresh_token)
        except AuthenticationError as e:
            logger.info(f"Session refresh rejected for user {user.id}: {e.message}")
            return None
        return _user_from_session(session)
