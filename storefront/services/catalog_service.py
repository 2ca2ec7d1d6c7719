"""
CatalogService - Product Browsing

Reads products and categories from the hosted backend for the product grid,
category pages and product detail pages.
"""

import logging
from typing import List, Optional

from infrastructure.backend import HostedBackendError, HostedBackendInterface, in_
from storefront.domain.models import Category, Product

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"
CATEGORIES_TABLE = "categories"


class CatalogService(BaseService):
    """
    Service for catalog reads.

    Responsibilities:
    - List products, newest first, optionally by category
    - Get product details
    - List categories and resolve a category slug
    """

    def __init__(self, backend: Optional[HostedBackendInterface] = None):
        """
        Initialize CatalogService.

        Args:
            backend: Hosted backend (injected via DI container)
        """
        super().__init__()
        if backend is None:
            from infrastructure.container import container

            backend = container.backend()
        self.backend = backend

    @BaseService.log_performance
    def list_products(self, category: Optional[str] = None) -> ServiceResult[List[Product]]:
        """
        List products ordered by creation date, newest first.

        Args:
            category: Optional category name (e.g. "Jeans")

        Returns:
            ServiceResult with a list of Product
        """
        filters = {"category": category} if category else None
        try:
            rows = self.backend.select(PRODUCTS_TABLE, filters=filters, order_by="created_at", ascending=False)
        except HostedBackendError as e:
            self.logger.error(f"Error listing products (category={category}): {e}")
            return service_err(ErrorCodes.BACKEND_ERROR, f"Failed to load products: {e.message}")

        products = [Product.from_record(row) for row in rows]
        self.logger.info(f"Listed {len(products)} products (category={category})")
        return service_ok(products)

    def list_products_by_category(self, category: str) -> ServiceResult[List[Product]]:
        """List products of one category, newest first."""
        if not category:
            return service_err(ErrorCodes.INVALID_INPUT, "Category is required")
        return self.list_products(category=category)

    @BaseService.log_performance
    def get_product(self, product_id: str) -> ServiceResult[Product]:
        """
        Get a single product.

        Returns:
            ServiceResult with the Product, or product_not_found
        """
        try:
            rows = self.backend.select(PRODUCTS_TABLE, filters={"id": str(product_id)}, limit=1)
        except HostedBackendError as e:
            if e.is_invalid_value:
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
            self.logger.error(f"Error loading product {product_id}: {e}")
            return service_err(ErrorCodes.BACKEND_ERROR, f"Failed to load product: {e.message}")

        if not rows:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        return service_ok(Product.from_record(rows[0]))

    def get_products(self, product_ids: List[str]) -> List[Product]:
        """
        Fetch several products in one request.

        Raises:
            HostedBackendError: If the request fails
        """
        if not product_ids:
            return []
        rows = self.backend.select(PRODUCTS_TABLE, filters={"id": in_(sorted(set(product_ids)))})
        return [Product.from_record(row) for row in rows]

    @BaseService.log_performance
    def list_categories(self) -> ServiceResult[List[Category]]:
        """List categories in alphabetical order."""
        try:
            rows = self.backend.select(CATEGORIES_TABLE, order_by="name", ascending=True)
        except HostedBackendError as e:
            self.logger.error(f"Error listing categories: {e}")
            return service_err(ErrorCodes.BACKEND_ERROR, f"Failed to load categories: {e.message}")

        return service_ok([Category.from_record(row) for row in rows])

    @BaseService.log_performance
    def get_category_by_slug(self, slug: str) -> ServiceResult[Category]:
        try:
            rows = self.backend.select(CATEGORIES_TABLE, filters={"slug": slug}, limit=1)
        except HostedBackendError as e:
            self.logger.error(f"Error loading category {slug}: {e}")
            return service_err(ErrorCodes.BACKEND_ERROR, f"Failed to load category: {e.message}")

        if not rows:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, f"Category {slug} not found")

        return service_ok(Category.from_record(rows[0]))
