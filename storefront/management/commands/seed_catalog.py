import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils.text import slugify

from infrastructure.backend import HostedBackendError
from infrastructure.container import container

logger = logging.getLogger(__name__)

CATEGORIES = ["Jeans", "Shirts", "T-Shirts"]

# The products schema names this column originalPrice; some projects use snake case
ORIGINAL_PRICE_COLUMNS = ("originalPrice", "original_price")

PRODUCTS = [
    {
        "name": "Straight Leg Denim",
        "price": "59.99",
        "original_price": "79.99",
        "discount": 25,
        "category": "Jeans",
        "description": "Classic straight leg jeans in a mid-blue wash.",
        "material": "98% cotton, 2% elastane",
        "delivery": "Free delivery on orders over $100. Returns within 30 days.",
    },
    {
        "name": "Slim Fit Black Jeans",
        "price": "64.99",
        "original_price": None,
        "discount": 0,
        "category": "Jeans",
        "description": "Slim fit jeans with a clean black finish.",
        "material": "99% cotton, 1% elastane",
        "delivery": "Ships within 2 business days.",
    },
    {
        "name": "Oxford Button-Down",
        "price": "44.99",
        "original_price": "54.99",
        "discount": 18,
        "category": "Shirts",
        "description": "A breathable oxford shirt for everyday wear.",
        "material": "100% cotton",
        "delivery": "Ships within 2 business days.",
    },
    {
        "name": "Linen Summer Shirt",
        "price": "49.99",
        "original_price": None,
        "discount": 0,
        "category": "Shirts",
        "description": "Lightweight linen shirt with a relaxed fit.",
        "material": "100% linen",
        "delivery": "Ships within 2 business days.",
    },
    {
        "name": "Essential Crew Tee",
        "price": "19.99",
        "original_price": "24.99",
        "discount": 20,
        "category": "T-Shirts",
        "description": "Soft crew neck t-shirt, our everyday essential.",
        "material": "100% organic cotton",
        "delivery": "Free delivery on orders over $100.",
    },
    {
        "name": "Heavyweight Pocket Tee",
        "price": "29.99",
        "original_price": None,
        "discount": 0,
        "category": "T-Shirts",
        "description": "Boxy heavyweight tee with a chest pocket.",
        "material": "100% cotton",
        "delivery": "Free delivery on orders over $100.",
    },
]


class Command(BaseCommand):
    help = "Seeds the sample categories and products into the hosted backend."

    def add_arguments(self, parser):
        parser.add_argument(
            "--image-url",
            default=settings.STOREFRONT.get("PLACEHOLDER_IMAGE"),
            help="Image URL used for every seeded product",
        )
        parser.add_argument(
            "--original-price-column",
            choices=ORIGINAL_PRICE_COLUMNS,
            default="originalPrice",
            help="Column name of the pre-discount price in the products table",
        )

    def handle(self, *args, **options):
        backend = container.backend()
        # Writes need the service role key when row level security is on
        token = settings.HOSTED_BACKEND.get("SERVICE_KEY") or None

        self.stdout.write(self.style.SUCCESS("Seeding categories..."))
        try:
            created_categories = self._seed_categories(backend, token)
            created_products = self._seed_products(
                backend, token, options["image_url"], options["original_price_column"]
            )
        except HostedBackendError as e:
            logger.error(f"Catalog seeding failed: {e}")
            raise CommandError(f"Catalog seeding failed: {e.message}") from e

        self.stdout.write(
            self.style.SUCCESS(
                f"Catalog seeding complete. Created {created_categories} categories and {created_products} products."
            )
        )

    def _seed_categories(self, backend, token):
        created_count = 0
        for name in CATEGORIES:
            slug = slugify(name)
            if backend.select("categories", columns="id", filters={"slug": slug}, limit=1, access_token=token):
                self.stdout.write(self.style.WARNING(f"Category already exists: {name}"))
                continue

            backend.insert(
                "categories",
                [{"name": name, "slug": slug, "description": f"Category for {name.lower()}"}],
                access_token=token,
            )
            self.stdout.write(self.style.SUCCESS(f"Created category: {name}"))
            created_count += 1
        return created_count

    def _seed_products(self, backend, token, image_url, original_price_column):
        created_count = 0
        for product in PRODUCTS:
            if backend.select("products", columns="id", filters={"name": product["name"]}, limit=1, access_token=token):
                self.stdout.write(self.style.WARNING(f"Product already exists: {product['name']}"))
                continue

            row = {key: value for key, value in product.items() if key != "original_price"}
            row[original_price_column] = product["original_price"]
            row["images"] = [image_url] if image_url else []
            backend.insert("products", [row], access_token=token)
            self.stdout.write(self.style.SUCCESS(f"Created product: {product['name']}"))
            created_count += 1
        return created_count
