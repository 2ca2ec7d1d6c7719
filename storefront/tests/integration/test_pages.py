from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse

from authentication.session import LAST_ORDER_SESSION_KEY
from infrastructure.backend import HostedBackendError
from infrastructure.container import container
from storefront.tests.factories import StorefrontUserFactory, create_category, create_product

from .helpers import login_client


class CatalogPagesTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        backend = container.backend()
        self.jeans = create_product(backend, name="Straight Jeans", category="Jeans", price="59.99")
        self.tee = create_product(
            backend, name="Crew Tee", category="T-Shirts", price="19.99", original_price="24.99", discount=20
        )
        create_category(backend, name="T-Shirts", slug="t-shirts")

    def test_home_lists_every_product(self):
        response = self.client.get(reverse("storefront:home"))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Straight Jeans")
        self.assertContains(response, "Crew Tee")
        self.assertContains(response, "$24.99")
        self.assertContains(response, "-20%")

    def test_category_pages(self):
        response = self.client.get(reverse("storefront:jeans"))
        self.assertContains(response, "Straight Jeans")
        self.assertNotContains(response, "Crew Tee")

        response = self.client.get(reverse("storefront:tshirts"))
        self.assertContains(response, "Crew Tee")
        self.assertNotContains(response, "Straight Jeans")

    def test_collection_page(self):
        response = self.client.get(reverse("storefront:collection", args=["t-shirts"]))
        self.assertContains(response, "Crew Tee")

    def test_unknown_collection(self):
        response = self.client.get(reverse("storefront:collection", args=["hats"]))
        self.assertEqual(response.status_code, 404)

    def test_collection_backend_outage(self):
        outage = HostedBackendError("down", code="network_error")
        with patch.object(container.backend(), "select", side_effect=outage):
            response = self.client.get(reverse("storefront:collection", args=["t-shirts"]))

        self.assertEqual(response.status_code, 502)
        self.assertTemplateUsed(response, "storefront/error.html")

    def test_product_detail(self):
        response = self.client.get(reverse("storefront:product-detail", args=[self.tee.id]))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Crew Tee")
        self.assertContains(response, "Choose The Size")
        self.assertEqual(response.context["discount_percentage"], Decimal("20.01"))

    def test_product_detail_not_found(self):
        response = self.client.get(reverse("storefront:product-detail", args=["missing"]))
        self.assertEqual(response.status_code, 404)

    def test_add_to_cart_requires_login(self):
        url = reverse("storefront:product-detail", args=[self.tee.id])
        response = self.client.post(url, {"size": "M"})

        self.assertRedirects(response, f"{reverse('authentication:auth')}?next={url}", fetch_redirect_response=False)

    def test_add_to_cart_requires_size(self):
        login_client(self.client, StorefrontUserFactory())

        response = self.client.post(reverse("storefront:product-detail", args=[self.tee.id]), {"quantity": 1})

        self.assertEqual(response.status_code, 400)
        self.assertContains(response, "Please select a size", status_code=400)

    def test_add_to_cart(self):
        user = StorefrontUserFactory()
        login_client(self.client, user)
        url = reverse("storefront:product-detail", args=[self.tee.id])

        response = self.client.post(url, {"size": "L"})

        self.assertRedirects(response, url)
        cart = container.cart_service().get_cart(user).value
        self.assertEqual(cart["items"][0].size, "L")
        self.assertEqual(cart["items"][0].quantity, 1)


class CartAndCheckoutPagesTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.user = StorefrontUserFactory()
        self.product = create_product(container.backend(), name="Oxford Shirt", price="50.00")
        self.cart_service = container.cart_service()

    def test_cart_requires_login(self):
        response = self.client.get(reverse("storefront:cart"))
        self.assertRedirects(
            response, f"{reverse('authentication:auth')}?next={reverse('storefront:cart')}", fetch_redirect_response=False
        )

    def test_cart_page(self):
        login_client(self.client, self.user)
        self.cart_service.add_to_cart(self.user, self.product.id, 2, "M")

        response = self.client.get(reverse("storefront:cart"))

        self.assertContains(response, "Oxford Shirt")
        self.assertContains(response, "Total: $100.00")
        self.assertContains(response, "Cart (2)")

    def test_update_remove_and_clear(self):
        login_client(self.client, self.user)
        self.cart_service.add_to_cart(self.user, self.product.id, 1, "M")
        self.cart_service.add_to_cart(self.user, self.product.id, 1, "S")

        self.client.post(reverse("storefront:cart-update"), {"product_id": self.product.id, "size": "M", "quantity": 3})
        lines = {line.size: line.quantity for line in self.cart_service.get_cart(self.user).value["items"]}
        self.assertEqual(lines, {"M": 3, "S": 1})

        self.client.post(reverse("storefront:cart-remove"), {"product_id": self.product.id, "size": "S"})
        lines = {line.size: line.quantity for line in self.cart_service.get_cart(self.user).value["items"]}
        self.assertEqual(lines, {"M": 3})

        response = self.client.post(reverse("storefront:cart-clear"))
        self.assertRedirects(response, reverse("storefront:cart"), fetch_redirect_response=False)
        self.assertEqual(self.cart_service.get_cart(self.user).value["items"], [])

    def test_checkout_with_empty_cart_redirects_to_cart(self):
        login_client(self.client, self.user)

        response = self.client.get(reverse("storefront:checkout"))

        self.assertRedirects(response, reverse("storefront:cart"), fetch_redirect_response=False)

    def test_checkout_summary(self):
        login_client(self.client, self.user)
        self.cart_service.add_to_cart(self.user, self.product.id, 1, "M")

        response = self.client.get(reverse("storefront:checkout"))

        self.assertContains(response, "$50.00")
        self.assertContains(response, "$10.00")
        self.assertContains(response, "$5.00")
        self.assertContains(response, "$65.00")

    def test_place_order_and_confirmation(self):
        login_client(self.client, self.user)
        self.cart_service.add_to_cart(self.user, self.product.id, 1, "M")

        response = self.client.post(reverse("storefront:checkout"))

        self.assertRedirects(response, reverse("storefront:order-confirmation"))
        order = self.client.session[LAST_ORDER_SESSION_KEY]
        self.assertEqual(order["totals"]["total"], "65.00")
        self.assertEqual(self.cart_service.get_cart(self.user).value["items"], [])

        confirmation = self.client.get(reverse("storefront:order-confirmation"))
        self.assertContains(confirmation, "Order Confirmed!")
        self.assertContains(confirmation, order["order_reference"])

    def test_confirmation_without_order_redirects_home(self):
        response = self.client.get(reverse("storefront:order-confirmation"))
        self.assertRedirects(response, reverse("storefront:home"), fetch_redirect_response=False)


class StaticPagesTest(TestCase):
    def setUp(self):
        container.configure_for_testing()

    def test_about(self):
        response = self.client.get(reverse("storefront:about"))
        self.assertContains(response, "Our Story")

    def test_contact_form(self):
        with self.assertLogs("storefront.views.static_pages", level="INFO") as logs:
            response = self.client.post(
                reverse("storefront:contact"),
                {"name": "Ada", "email": "ada@example.com", "location": "Lisbon", "message": "Hello!"},
            )

        self.assertRedirects(response, reverse("storefront:contact"))
        self.assertIn("ad***@example.com", logs.output[0])
        self.assertNotIn("ada@example.com", logs.output[0])

    def test_contact_form_invalid(self):
        response = self.client.post(reverse("storefront:contact"), {"name": "Ada", "email": "nope"})
        self.assertEqual(response.status_code, 400)
