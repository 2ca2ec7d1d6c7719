from .cart_pages import cart_clear_view, cart_remove_view, cart_update_view, cart_view
from .catalog_pages import CategoryPageView, CollectionPageView, ProductDetailView, ProductListView
from .checkout_pages import CheckoutView, order_confirmation_view
from .static_pages import AboutView, ContactView

__all__ = [
    "AboutView",
    "CategoryPageView",
    "CheckoutView",
    "CollectionPageView",
    "ContactView",
    "ProductDetailView",
    "ProductListView",
    "cart_clear_view",
    "cart_remove_view",
    "cart_update_view",
    "cart_view",
    "order_confirmation_view",
]
