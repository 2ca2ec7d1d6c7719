from .cart_views import CartViewSet
from .catalog_views import CategoryViewSet, ProductViewSet
from .checkout_views import CheckoutSummaryAPIView, PlaceOrderAPIView
from .prometheus_metrics import storefront_prometheus_metrics

__all__ = [
    "CartViewSet",
    "CategoryViewSet",
    "CheckoutSummaryAPIView",
    "PlaceOrderAPIView",
    "ProductViewSet",
    "storefront_prometheus_metrics",
]
