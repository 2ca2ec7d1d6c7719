"""
CartService - Shopping Cart Operations

Handles the per-user cart persisted in the hosted backend's ``carts`` and
``cart_items`` tables: read-or-create cart, add, update, remove and clear,
and cart totals via PricingService.
"""

import logging
from typing import Any, Dict, List, Optional

from infrastructure.backend import HostedBackendError, HostedBackendInterface
from storefront.domain.models import SIZES, CartLine
from storefront.infra.observability.metrics import cart_operations_total

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .catalog_service import CatalogService
from .pricing_service import PricingService

logger = logging.getLogger(__name__)

CARTS_TABLE = "carts"
CART_ITEMS_TABLE = "cart_items"


def _token(user) -> Optional[str]:
    return getattr(user, "access_token", None)


class CartService(BaseService):
    """
    Service for managing shopping cart operations.

    Responsibilities:
    - Read the user's most recent cart, creating one when none exists
    - Add items (per product and size) to the cart
    - Update quantities, remove items, clear the cart
    - Calculate cart totals

    Dependencies:
    - CatalogService: Product lookups
    - PricingService: Cart totals
    """

    def __init__(
        self,
        backend: Optional[HostedBackendInterface] = None,
        catalog_service: Optional[CatalogService] = None,
        pricing_service: Optional[PricingService] = None,
    ):
        """
        Initialize CartService.

        Args:
            backend: Hosted backend (injected)
            catalog_service: Service for product lookups (injected)
            pricing_service: Service for price calculations (injected)
        """
        super().__init__()
        if backend is None:
            from infrastructure.container import container

            backend = container.backend()
        self.backend = backend
        self.catalog_service = catalog_service or CatalogService(backend=backend)
        self.pricing_service = pricing_service or PricingService()

    def _read_or_create_cart(self, user) -> Dict[str, Any]:
        """
        Return the user's most recent cart row, inserting one if none exists.

        Raises:
            HostedBackendError: If a backend call fails
        """
        rows = self.backend.select(
            CARTS_TABLE,
            columns="id,user_id,created_at",
            filters={"user_id": user.id},
            order_by="created_at",
            ascending=False,
            limit=1,
            access_token=_token(user),
        )
        if rows:
            return rows[0]

        self.logger.info(f"Creating new cart for user {user.id}")
        created = self.backend.insert(CARTS_TABLE, [{"user_id": user.id}], access_token=_token(user))
        if not created:
            raise HostedBackendError("Failed to create cart", code="cart_not_created")
        return created[0]

    def _load_lines(self, user, cart_id: str) -> List[CartLine]:
        rows = self.backend.select(
            CART_ITEMS_TABLE,
            columns="id,product_id,quantity,size",
            filters={"cart_id": cart_id},
            access_token=_token(user),
        )
        products = {p.id: p for p in self.catalog_service.get_products([str(row["product_id"]) for row in rows])}

        lines = []
        for row in rows:
            product = products.get(str(row["product_id"]))
            if product is None:
                self.logger.warning(f"Cart {cart_id} references missing product {row['product_id']}, skipping")
                continue
            lines.append(
                CartLine(
                    id=str(row["id"]),
                    product_id=product.id,
                    quantity=int(row["quantity"]),
                    size=row.get("size") or "",
                    product=product,
                )
            )
        return lines

    def _backend_failure(self, action: str, user, error: HostedBackendError) -> ServiceResult:
        cart_operations_total.labels(operation=action, status="error").inc()
        self.logger.error(f"Error during cart {action} for user {user.id}: {error}")
        return service_err(ErrorCodes.BACKEND_ERROR, f"Failed to {action.replace('_', ' ')}: {error.message}")

    @BaseService.log_performance
    def get_cart(self, user) -> ServiceResult[Dict]:
        """
        Get the user's cart with lines and totals.

        Example:
            >>> result = cart_service.get_cart(user)
            >>> if result.ok:
            ...     lines = result.value["items"]
            ...     total = result.value["totals"]["total"]
        """
        try:
            cart = self._read_or_create_cart(user)
            lines = self._load_lines(user, str(cart["id"]))
        except HostedBackendError as e:
            return self._backend_failure("fetch_cart", user, e)

        totals_result = self.pricing_service.calculate_cart_total(lines)
        if not totals_result.ok:
            return totals_result

        self.logger.info(f"Retrieved cart for user {user.id}: {len(lines)} items")

        return service_ok(
            {
                "id": str(cart["id"]),
                "user_id": str(user.id),
                "items": lines,
                "items_count": len(lines),
                "totals": totals_result.value,
            }
        )

    @BaseService.log_performance
    def add_to_cart(self, user, product_id: str, quantity: int = 1, size: str = "") -> ServiceResult[Dict]:
        """
        Add a product in a given size to the cart.

        An existing line for the same product and size has its quantity
        increased; otherwise a new line is inserted.

        Args:
            user: Signed-in user
            product_id: Product id
            quantity: Quantity to add (default: 1)
            size: One of SIZES

        Returns:
            ServiceResult with the refreshed cart
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be positive")
        if size not in SIZES:
            return service_err(ErrorCodes.INVALID_SIZE, "Please select a size")

        product_result = self.catalog_service.get_product(product_id)
        if not product_result.ok:
            return product_result
        product = product_result.value

        try:
            cart = self._read_or_create_cart(user)
            line_filters = {"cart_id": cart["id"], "product_id": product.id, "size": size}
            existing = self.backend.select(
                CART_ITEMS_TABLE, columns="quantity", filters=line_filters, limit=1, access_token=_token(user)
            )

            if existing:
                new_quantity = int(existing[0]["quantity"]) + quantity
                self.backend.update(
                    CART_ITEMS_TABLE, {"quantity": new_quantity}, line_filters, access_token=_token(user)
                )
                self.logger.info(
                    f"Updated cart item for user {user.id}: {product.name} ({size}) "
                    f"quantity {new_quantity - quantity} -> {new_quantity}"
                )
            else:
                self.backend.insert(
                    CART_ITEMS_TABLE,
                    [{"cart_id": cart["id"], "product_id": product.id, "quantity": quantity, "size": size}],
                    access_token=_token(user),
                )
                self.logger.info(f"Added to cart for user {user.id}: {quantity}x {product.name} ({size})")
        except HostedBackendError as e:
            return self._backend_failure("add_to_cart", user, e)

        cart_operations_total.labels(operation="add_to_cart", status="success").inc()
        return self.get_cart(user)

    @BaseService.log_performance
    def update_quantity(self, user, product_id: str, quantity: int, size: Optional[str] = None) -> ServiceResult[Dict]:
        """
        Set the quantity of a product in the cart.

        Without ``size`` every size of the product is updated.
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be positive")

        try:
            cart = self._read_or_create_cart(user)
            filters = {"cart_id": cart["id"], "product_id": str(product_id)}
            if size:
                filters["size"] = size
            updated = self.backend.update(CART_ITEMS_TABLE, {"quantity": quantity}, filters, access_token=_token(user))
        except HostedBackendError as e:
            if e.is_invalid_value:
                return service_err(ErrorCodes.ITEM_NOT_IN_CART, f"Product {product_id} not in cart")
            return self._backend_failure("update_quantity", user, e)

        if not updated:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, f"Product {product_id} not in cart")

        self.logger.info(f"Updated cart quantity for user {user.id}: product {product_id} -> {quantity}")
        cart_operations_total.labels(operation="update_quantity", status="success").inc()
        return self.get_cart(user)

    @BaseService.log_performance
    def remove_from_cart(self, user, product_id: str, size: Optional[str] = None) -> ServiceResult[Dict]:
        """
        Remove a product from the cart.

        Without ``size`` every size of the product is removed.
        """
        try:
            cart = self._read_or_create_cart(user)
            filters = {"cart_id": cart["id"], "product_id": str(product_id)}
            if size:
                filters["size"] = size
            deleted = self.backend.delete(CART_ITEMS_TABLE, filters, access_token=_token(user))
        except HostedBackendError as e:
            if e.is_invalid_value:
                return service_err(ErrorCodes.ITEM_NOT_IN_CART, f"Product {product_id} not in cart")
            return self._backend_failure("remove_from_cart", user, e)

        if not deleted:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, f"Product {product_id} not in cart")

        self.logger.info(f"Removed from cart for user {user.id}: product {product_id} ({len(deleted)} lines)")
        cart_operations_total.labels(operation="remove_from_cart", status="success").inc()
        return self.get_cart(user)

    @BaseService.log_performance
    def clear_cart(self, user) -> ServiceResult[bool]:
        """Delete every line of the user's cart."""
        try:
            cart = self._read_or_create_cart(user)
            deleted = self.backend.delete(CART_ITEMS_TABLE, {"cart_id": cart["id"]}, access_token=_token(user))
        except HostedBackendError as e:
            return self._backend_failure("clear_cart", user, e)

        self.logger.info(f"Cleared cart for user {user.id}: {len(deleted)} items removed")
        cart_operations_total.labels(operation="clear_cart", status="success").inc()
        return service_ok(True)
