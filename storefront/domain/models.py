"""
Storefront records.

Rows live in the hosted backend; these dataclasses are the typed view the
services and templates work with.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.conf import settings

# Sizes offered on every garment
SIZES = ("S", "M", "L", "XL")

# Category landing pages: URL slug -> category name stored on products
CATEGORY_PAGES = {
    "jeans": "Jeans",
    "shirts": "Shirts",
    "tshirts": "T-Shirts",
}

DEFAULT_PLACEHOLDER_IMAGE = "https://placehold.co/600x800?text=Bloom"


def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


@dataclass
class Product:
    id: str
    name: str
    price: Decimal
    original_price: Optional[Decimal] = None
    discount: int = 0
    images: List[str] = field(default_factory=list)
    category: str = ""
    description: str = ""
    material: str = ""
    delivery: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Product":
        """Build a Product from a ``products`` row (snake or camel case price column)."""
        original = record.get("original_price", record.get("originalPrice"))
        images = record.get("images") or []
        if isinstance(images, str):
            images = [images]

        return cls(
            id=str(record["id"]),
            name=record.get("name") or "",
            price=to_decimal(record.get("price")),
            original_price=to_decimal(original) if original not in (None, "") else None,
            discount=int(record.get("discount") or 0),
            images=[str(url) for url in images if url],
            category=record.get("category") or "",
            description=record.get("description") or "",
            material=record.get("material") or "",
            delivery=record.get("delivery") or "",
            created_at=record.get("created_at"),
        )

    @property
    def image_url(self) -> str:
        """First product image, or the configured placeholder."""
        if self.images:
            return self.images[0]
        return getattr(settings, "STOREFRONT", {}).get("PLACEHOLDER_IMAGE", DEFAULT_PLACEHOLDER_IMAGE)

    @property
    def is_on_sale(self) -> bool:
        return self.original_price is not None and self.original_price > self.price


@dataclass
class Category:
    id: str
    name: str
    slug: str
    description: str = ""

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Category":
        return cls(
            id=str(record["id"]),
            name=record.get("name") or "",
            slug=record.get("slug") or "",
            description=record.get("description") or "",
        )


@dataclass
class CartLine:
    """A cart_items row joined to its product."""

    id: str
    product_id: str
    quantity: int
    size: str
    product: Product

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity
