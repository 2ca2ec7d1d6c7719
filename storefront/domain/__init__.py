from .models import CATEGORY_PAGES, SIZES, CartLine, Category, Product

__all__ = ["Product", "Category", "CartLine", "SIZES", "CATEGORY_PAGES"]
