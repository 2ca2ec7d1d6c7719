from unittest.mock import MagicMock

import pytest

from authentication.domain.services import AuthService
from infrastructure.backend import HostedBackendError, InMemoryAuthProvider, InMemoryBackend
from storefront.services.base import ErrorCodes
from storefront.tests.factories import StorefrontUserFactory


@pytest.mark.unit
class TestAuthServiceUnit:
    def setup_method(self):
        self.provider = InMemoryAuthProvider()
        self.backend = InMemoryBackend()
        self.service = AuthService(auth_provider=self.provider, backend=self.backend)

    def test_sign_up_records_user_row(self):
        result = self.service.sign_up("shopper@example.com", "secret1")

        assert result.success
        assert result.message == "Account created successfully!"
        assert result.user.access_token
        rows = self.backend.select("users", filters={"id": result.user.id})
        assert rows[0]["email"] == "shopper@example.com"
        assert rows[0]["created_at"]

    def test_sign_up_requiring_confirmation(self):
        service = AuthService(auth_provider=InMemoryAuthProvider(require_confirmation=True), backend=self.backend)

        result = service.sign_up("shopper@example.com", "secret1")

        assert result.success
        assert result.requires_confirmation
        assert result.message == "Check your email for the confirmation link!"
        assert result.user.access_token is None

    def test_sign_up_validation(self):
        result = self.service.sign_up("not-an-email", "123")

        assert not result.success
        assert set(result.errors) == {"email", "password"}
        assert "6" in result.errors["password"]

    def test_sign_up_duplicate_email(self):
        self.service.sign_up("shopper@example.com", "secret1")

        result = self.service.sign_up("shopper@example.com", "secret1")

        assert not result.success
        assert result.error == "User already registered"

    def test_sign_up_fails_when_user_row_cannot_be_written(self):
        backend = MagicMock()
        backend.insert.side_effect = HostedBackendError("permission denied for table users", code="42501")
        service = AuthService(auth_provider=self.provider, backend=backend)

        result = service.sign_up("shopper@example.com", "secret1")

        assert not result.success
        assert "permission denied" in result.error
        assert result.error_code == ErrorCodes.BACKEND_ERROR

    def test_sign_up_backend_unavailable(self):
        provider = MagicMock()
        provider.sign_up.side_effect = HostedBackendError("connection refused", code="network_error")
        service = AuthService(auth_provider=provider, backend=self.backend)

        result = service.sign_up("shopper@example.com", "secret1")

        assert not result.success
        assert result.error_code == ErrorCodes.BACKEND_ERROR
        assert self.backend.select("users") == []

    def test_sign_in(self):
        self.service.sign_up("shopper@example.com", "secret1")

        result = self.service.sign_in("shopper@example.com", "secret1")

        assert result.success
        assert result.message == "Successfully logged in!"
        assert result.user.email == "shopper@example.com"
        assert result.user.expires_at is not None

    def test_sign_in_requires_both_fields(self):
        result = self.service.sign_in("", "")
        assert not result.success
        assert result.error == "Email and password are required."

    def test_sign_in_wrong_password(self):
        self.service.sign_up("shopper@example.com", "secret1")

        result = self.service.sign_in("shopper@example.com", "wrong-password")

        assert not result.success
        assert result.error == "Invalid login credentials"
        assert result.error_code == ErrorCodes.AUTHENTICATION_FAILED

    def test_sign_in_backend_unavailable(self):
        provider = MagicMock()
        provider.sign_in_with_password.side_effect = HostedBackendError("timeout", code="network_error")
        service = AuthService(auth_provider=provider, backend=self.backend)

        result = service.sign_in("shopper@example.com", "secret1")

        assert not result.success
        assert "unavailable" in result.error
        assert result.error_code == ErrorCodes.BACKEND_ERROR

    def test_get_user_and_sign_out(self):
        user = self.service.sign_up("shopper@example.com", "secret1").user

        assert self.service.get_user(user.access_token).id == user.id
        assert self.service.sign_out(user) is True
        assert self.service.get_user(user.access_token) is None

    def test_sign_out_without_token(self):
        assert self.service.sign_out(StorefrontUserFactory(access_token=None)) is True

    def test_refresh(self):
        user = self.service.sign_up("shopper@example.com", "secret1").user

        refreshed = self.service.refresh(user)

        assert refreshed.id == user.id
        assert refreshed.access_token != user.access_token
        assert self.service.refresh(user) is None
