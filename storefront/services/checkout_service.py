"""
CheckoutService - Order Summary and Placement

Builds the checkout summary (subtotal, shipping, tax, total) from the cart
and places orders. Placing an order issues an order reference and empties
the cart; orders themselves are not stored in the hosted backend.
"""

import logging
import uuid
from typing import Dict, Optional

from django.utils import timezone

from storefront.infra.observability.metrics import order_value, orders_placed_total

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .cart_service import CartService
from .pricing_service import PricingService

logger = logging.getLogger(__name__)


class CheckoutService(BaseService):
    """
    Service for the checkout flow.

    Dependencies:
    - CartService: Cart contents
    - PricingService: Order totals
    """

    def __init__(self, cart_service: Optional[CartService] = None, pricing_service: Optional[PricingService] = None):
        super().__init__()
        self.cart_service = cart_service or CartService()
        self.pricing_service = pricing_service or PricingService()

    @BaseService.log_performance
    def get_summary(self, user) -> ServiceResult[Dict]:
        """
        Checkout summary for the user's cart.

        Returns:
            ServiceResult with cart_id, items and totals, or cart_empty
        """
        cart_result = self.cart_service.get_cart(user)
        if not cart_result.ok:
            return cart_result

        cart = cart_result.value
        if not cart["items"]:
            return service_err(ErrorCodes.CART_EMPTY, "Your cart is empty")

        totals_result = self.pricing_service.calculate_order_total(cart["items"])
        if not totals_result.ok:
            return totals_result

        return service_ok({"cart_id": cart["id"], "items": cart["items"], "totals": totals_result.value})

    @BaseService.log_performance
    def place_order(self, user) -> ServiceResult[Dict]:
        """
        Place an order for the current cart and empty it.

        Returns:
            ServiceResult with order_reference, placed_at, items and totals
        """
        summary_result = self.get_summary(user)
        if not summary_result.ok:
            orders_placed_total.labels(status="rejected").inc()
            return summary_result

        summary = summary_result.value
        order = {
            "order_reference": uuid.uuid4().hex[:12].upper(),
            "placed_at": timezone.now(),
            "email": getattr(user, "email", ""),
            "items": summary["items"],
            "totals": summary["totals"],
        }

        clear_result = self.cart_service.clear_cart(user)
        if not clear_result.ok:
            orders_placed_total.labels(status="failed").inc()
            return clear_result

        orders_placed_total.labels(status="placed").inc()
        order_value.observe(float(order["totals"]["total"]))
        self.logger.info(
            f"Order {order['order_reference']} placed for user {user.id}: "
            f"{order['totals']['items_count']} items, total=${order['totals']['total']}"
        )

        return service_ok(order)
