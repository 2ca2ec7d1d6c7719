from unittest.mock import MagicMock

from django.test import TestCase, override_settings

from infrastructure.backend import AuthenticationError, GoTrueAuthProvider, HostedBackendError
from infrastructure.backend.gotrue_adapter import session_from_payload

from .test_postgrest_adapter import HOSTED_BACKEND, make_response

TOKEN_PAYLOAD = {
    "access_token": "access-1",
    "refresh_token": "refresh-1",
    "expires_in": 3600,
    "user": {"id": "user-1", "email": "shopper@example.com"},
}


class SessionFromPayloadTest(TestCase):
    def test_token_payload(self):
        session = session_from_payload(TOKEN_PAYLOAD)
        self.assertTrue(session.is_active)
        self.assertEqual(session.user.id, "user-1")
        self.assertEqual(session.expires_in, 3600)

    def test_unconfirmed_sign_up_returns_user_only(self):
        session = session_from_payload({"id": "user-2", "email": "new@example.com"})
        self.assertFalse(session.is_active)
        self.assertEqual(session.user.email, "new@example.com")


@override_settings(HOSTED_BACKEND=HOSTED_BACKEND)
class GoTrueAuthProviderTest(TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.provider = GoTrueAuthProvider(session=self.session)

    def test_sign_in_with_password(self):
        self.session.post.return_value = make_response(200, TOKEN_PAYLOAD)

        session = self.provider.sign_in_with_password("shopper@example.com", "secret1")

        self.assertEqual(session.access_token, "access-1")
        url = self.session.post.call_args.args[0]
        kwargs = self.session.post.call_args.kwargs
        self.assertEqual(url, "https://project.example.com/auth/v1/token")
        self.assertEqual(kwargs["params"], {"grant_type": "password"})
        self.assertEqual(kwargs["json"], {"email": "shopper@example.com", "password": "secret1"})
        self.assertEqual(kwargs["headers"]["apikey"], "anon-key")

    def test_invalid_credentials(self):
        self.session.post.return_value = make_response(
            400, {"error": "invalid_grant", "error_description": "Invalid login credentials"}
        )

        with self.assertRaises(AuthenticationError) as ctx:
            self.provider.sign_in_with_password("shopper@example.com", "wrong")

        self.assertEqual(ctx.exception.message, "Invalid login credentials")

    def test_sign_up(self):
        self.session.post.return_value = make_response(200, TOKEN_PAYLOAD)

        session = self.provider.sign_up("shopper@example.com", "secret1")

        self.assertEqual(session.user.id, "user-1")
        self.assertEqual(self.session.post.call_args.args[0], "https://project.example.com/auth/v1/signup")

    def test_get_user_with_expired_token(self):
        self.session.get.return_value = make_response(401, {"msg": "JWT expired"})

        self.assertIsNone(self.provider.get_user("expired"))

    def test_get_user(self):
        self.session.get.return_value = make_response(200, {"id": "user-1", "email": "shopper@example.com"})

        user = self.provider.get_user("access-1")

        self.assertEqual(user.id, "user-1")
        headers = self.session.get.call_args.kwargs["headers"]
        self.assertEqual(headers["Authorization"], "Bearer access-1")

    def test_refresh_session(self):
        self.session.post.return_value = make_response(200, TOKEN_PAYLOAD)

        self.provider.refresh_session("refresh-0")

        kwargs = self.session.post.call_args.kwargs
        self.assertEqual(kwargs["params"], {"grant_type": "refresh_token"})
        self.assertEqual(kwargs["json"], {"refresh_token": "refresh-0"})

    def test_sign_out_ignores_expired_token(self):
        self.session.post.return_value = make_response(401, {"msg": "expired"})

        self.provider.sign_out("expired")

    def test_sign_out_server_error(self):
        self.session.post.return_value = make_response(500, text="boom")

        with self.assertRaises(HostedBackendError):
            self.provider.sign_out("access-1")
