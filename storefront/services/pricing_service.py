"""
PricingService - Price Calculations

Handles product discounts, cart totals and checkout totals (flat shipping
plus tax). All calculations use Decimal for precision.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from django.conf import settings

from storefront.domain.models import CartLine, Product

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


class PricingService(BaseService):
    """
    Service for calculating prices, discounts, and totals.

    Responsibilities:
    - Calculate product discount percentages
    - Calculate cart totals (subtotal of price x quantity)
    - Calculate checkout totals (subtotal + shipping + tax)

    All methods are stateless.
    """

    def __init__(self):
        """Initialize PricingService from the STOREFRONT settings block."""
        super().__init__()
        config = getattr(settings, "STOREFRONT", {})
        self.tax_rate = Decimal(str(config.get("TAX_RATE", "0.10")))
        self.shipping_flat_rate = Decimal(str(config.get("SHIPPING_FLAT_RATE", "10.00")))
        self.currency = config.get("CURRENCY", "USD")

    def calculate_discount_percentage(self, product: Product) -> ServiceResult[Decimal]:
        """
        Discount of the current price against the original price (0-100).

        Example:
            >>> result = pricing_service.calculate_discount_percentage(product)
            >>> if result.ok:
            ...     print(f"Discount: {result.value}%")
        """
        if not product.is_on_sale:
            return service_ok(Decimal("0"))

        original = product.original_price
        discount_percentage = quantize((original - product.price) / original * Decimal("100"))
        return service_ok(discount_percentage)

    def is_on_sale(self, product: Product) -> ServiceResult[bool]:
        return service_ok(product.is_on_sale)

    def calculate_cart_total(self, lines: List[CartLine]) -> ServiceResult[Dict]:
        """
        Calculate the total shown on the cart page.

        The cart total is the plain subtotal; shipping and tax are added at
        checkout.

        Returns:
            ServiceResult with subtotal, total, items_count, savings, currency
        """
        subtotal = Decimal("0")
        original_subtotal = Decimal("0")

        for line in lines:
            if line.quantity <= 0:
                return service_err(ErrorCodes.INVALID_QUANTITY, f"Invalid quantity: {line.quantity}")

            line_total = line.product.price * line.quantity
            subtotal += line_total
            if line.product.is_on_sale:
                original_subtotal += line.product.original_price * line.quantity
            else:
                original_subtotal += line_total

        return service_ok(
            {
                "subtotal": quantize(subtotal),
                "total": quantize(subtotal),
                "items_count": len(lines),
                "savings": quantize(original_subtotal - subtotal),
                "currency": self.currency,
            }
        )

    @BaseService.log_performance
    def calculate_order_total(self, lines: List[CartLine]) -> ServiceResult[Dict]:
        """
        Calculate checkout totals.

        subtotal = sum(price * quantity)
        shipping = flat rate (STOREFRONT["SHIPPING_FLAT_RATE"])
        tax      = subtotal * STOREFRONT["TAX_RATE"]
        total    = subtotal + shipping + tax

        Example:
            >>> result = pricing_service.calculate_order_total(lines)
            >>> result.value["total"]
            Decimal('120.00')  # 100.00 + 10.00 + 10.00
        """
        cart_result = self.calculate_cart_total(lines)
        if not cart_result.ok:
            return cart_result

        cart_total = cart_result.value
        subtotal = cart_total["subtotal"]
        tax = quantize(subtotal * self.tax_rate)
        shipping = quantize(self.shipping_flat_rate)
        total = quantize(subtotal + shipping + tax)

        self.logger.info(f"Order total calculated: items={cart_total['items_count']}, total=${total}")

        return service_ok(
            {
                "subtotal": subtotal,
                "shipping": shipping,
                "tax": tax,
                "tax_rate": self.tax_rate,
                "total": total,
                "items_count": cart_total["items_count"],
                "savings": cart_total["savings"],
                "currency": self.currency,
            }
        )
