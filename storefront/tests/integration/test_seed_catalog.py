from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from infrastructure.backend import HostedBackendError
from infrastructure.container import container
from storefront.management.commands.seed_catalog import CATEGORIES, PRODUCTS


class SeedCatalogCommandTest(TestCase):
    def setUp(self):
        container.configure_for_testing()

    def test_seeds_categories_and_products(self):
        out = StringIO()
        call_command("seed_catalog", stdout=out)

        backend = container.backend()
        self.assertEqual(len(backend.select("categories")), len(CATEGORIES))
        self.assertEqual(len(backend.select("products")), len(PRODUCTS))
        self.assertEqual(backend.select("categories", filters={"slug": "t-shirts"})[0]["name"], "T-Shirts")
        self.assertIn("Catalog seeding complete", out.getvalue())

    def test_seeding_is_idempotent(self):
        call_command("seed_catalog", stdout=StringIO())
        out = StringIO()
        call_command("seed_catalog", stdout=out)

        self.assertEqual(len(container.backend().select("products")), len(PRODUCTS))
        self.assertIn("Created 0 categories and 0 products", out.getvalue())

    def test_seeded_products_show_on_category_page(self):
        call_command("seed_catalog", stdout=StringIO())

        result = container.catalog_service().list_products(category="Jeans")

        self.assertEqual(len(result.value), 2)

    def test_backend_failure(self):
        with patch.object(container.backend(), "select", side_effect=HostedBackendError("down")):
            with self.assertRaises(CommandError):
                call_command("seed_catalog", stdout=StringIO())

    def test_original_price_uses_schema_column(self):
        call_command("seed_catalog", stdout=StringIO())

        row = container.backend().select("products", filters={"name": "Straight Leg Denim"})[0]

        self.assertEqual(row["originalPrice"], "79.99")
        self.assertNotIn("original_price", row)
        product = container.catalog_service().get_product(row["id"]).value
        self.assertTrue(product.is_on_sale)

    def test_original_price_column_is_configurable(self):
        call_command("seed_catalog", "--original-price-column", "original_price", stdout=StringIO())

        row = container.backend().select("products", filters={"name": "Straight Leg Denim"})[0]

        self.assertEqual(row["original_price"], "79.99")
        self.assertNotIn("originalPrice", row)
