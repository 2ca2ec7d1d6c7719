from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    CartViewSet,
    CategoryViewSet,
    CheckoutSummaryAPIView,
    PlaceOrderAPIView,
    ProductViewSet,
    storefront_prometheus_metrics,
)

router = DefaultRouter()
router.register(r"catalog/products", ProductViewSet, basename="product")
router.register(r"catalog/categories", CategoryViewSet, basename="category")
router.register(r"cart", CartViewSet, basename="cart")

app_name = "storefront_api"

urlpatterns = [
    path("", include(router.urls)),
    path("checkout/summary/", CheckoutSummaryAPIView.as_view(), name="checkout-summary"),
    path("checkout/place-order/", PlaceOrderAPIView.as_view(), name="checkout-place-order"),
    # Prometheus metrics endpoint
    path("metrics/", storefront_prometheus_metrics, name="metrics"),
]
