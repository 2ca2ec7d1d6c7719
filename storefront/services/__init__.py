"""
Storefront Service Layer

Business logic for the storefront, organized into domain services that talk
to the hosted backend through the infrastructure container.

Services:
- CatalogService: Product and category browsing
- PricingService: Discounts, cart totals, checkout totals
- CartService: Shopping cart operations
- CheckoutService: Checkout summary and order placement

Usage:
    from infrastructure.container import container

    result = container.cart_service().get_cart(request.user)
    if result.ok:
        cart = result.value
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .cart_service import CartService
from .catalog_service import CatalogService
from .checkout_service import CheckoutService
from .pricing_service import PricingService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error codes
    "ErrorCodes",
    # Services
    "CatalogService",
    "CartService",
    "CheckoutService",
    "PricingService",
]
