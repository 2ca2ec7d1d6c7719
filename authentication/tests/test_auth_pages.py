import time
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse

from authentication.session import SESSION_KEY
from infrastructure.backend import HostedBackendError
from infrastructure.container import container
from storefront.tests.factories import StorefrontUserFactory
from storefront.tests.integration.helpers import login_client


class AuthPageTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.auth_url = reverse("authentication:auth")

    def test_sign_in_page(self):
        response = self.client.get(self.auth_url)
        self.assertContains(response, "Sign In")
        self.assertEqual(response.context["mode"], "login")

    def test_sign_up_mode(self):
        response = self.client.get(self.auth_url, {"mode": "signup"})
        self.assertContains(response, "Create Account")

    def test_sign_up_and_redirect(self):
        response = self.client.post(
            self.auth_url, {"mode": "signup", "email": "shopper@example.com", "password": "secret1"}
        )

        self.assertRedirects(response, reverse("storefront:home"))
        self.assertEqual(self.client.session[SESSION_KEY]["email"], "shopper@example.com")

    def test_sign_in_redirects_to_next(self):
        container.auth_provider().sign_up("shopper@example.com", "secret1")

        response = self.client.post(
            self.auth_url,
            {"mode": "login", "email": "shopper@example.com", "password": "secret1", "next": "/cart/"},
        )

        self.assertRedirects(response, "/cart/", fetch_redirect_response=False)

    def test_sign_in_ignores_offsite_next(self):
        container.auth_provider().sign_up("shopper@example.com", "secret1")

        response = self.client.post(
            self.auth_url,
            {"mode": "login", "email": "shopper@example.com", "password": "secret1", "next": "https://evil.example"},
        )

        self.assertRedirects(response, reverse("storefront:home"))

    def test_sign_in_invalid_credentials(self):
        response = self.client.post(
            self.auth_url, {"mode": "login", "email": "shopper@example.com", "password": "secret1"}
        )

        self.assertContains(response, "Invalid login credentials", status_code=400)
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_sign_in_auth_service_unreachable(self):
        error = HostedBackendError("Connection refused", code="network_error")

        with patch.object(container.auth_provider(), "sign_in_with_password", side_effect=error):
            response = self.client.post(
                self.auth_url, {"mode": "login", "email": "shopper@example.com", "password": "secret1"}
            )

        self.assertContains(response, "Authentication service unavailable", status_code=502)
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_short_password(self):
        response = self.client.post(self.auth_url, {"mode": "signup", "email": "shopper@example.com", "password": "123"})
        self.assertEqual(response.status_code, 400)

    def test_sign_up_awaiting_confirmation(self):
        container.auth_provider().require_confirmation = True

        response = self.client.post(
            self.auth_url, {"mode": "signup", "email": "shopper@example.com", "password": "secret1"}
        )

        self.assertContains(response, "Check your email for the confirmation link!")
        self.assertEqual(response.context["mode"], "login")
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_logout(self):
        login_client(self.client, StorefrontUserFactory())

        response = self.client.post(reverse("authentication:logout"))

        self.assertRedirects(response, reverse("storefront:home"))
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_logout_requires_post(self):
        self.assertEqual(self.client.get(reverse("authentication:logout")).status_code, 405)


class HostedSessionMiddlewareTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.user = container.auth_service().sign_up("shopper@example.com", "secret1").user

    def test_signed_in_header(self):
        login_client(self.client, self.user)

        response = self.client.get(reverse("storefront:home"))

        self.assertContains(response, "Sign Out")
        self.assertContains(response, "shopper@example.com")
        self.assertContains(response, "Cart (0)")
        self.assertNotContains(response, ">Sign In</a>")

    def test_expired_session_is_refreshed(self):
        self.user.expires_at = time.time() - 10
        login_client(self.client, self.user)

        response = self.client.get(reverse("storefront:cart"))

        self.assertEqual(response.status_code, 200)
        stored = self.client.session[SESSION_KEY]
        self.assertNotEqual(stored["access_token"], self.user.access_token)
        self.assertGreater(stored["expires_at"], time.time())

    def test_unrefreshable_session_is_dropped(self):
        self.user.expires_at = time.time() - 10
        self.user.refresh_token = "revoked"
        login_client(self.client, self.user)

        response = self.client.get(reverse("storefront:cart"))

        self.assertEqual(response.status_code, 302)
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_malformed_session_is_ignored(self):
        session = self.client.session
        session[SESSION_KEY] = {"email": "no-id@example.com"}
        session.save()

        response = self.client.get(reverse("storefront:home"))

        self.assertEqual(response.status_code, 200)
        self.assertNotContains(response, "Sign Out")
