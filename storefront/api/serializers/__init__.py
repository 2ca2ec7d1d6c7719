from .cart_serializers import (
    AddToCartRequestSerializer,
    CartLineSerializer,
    CartResponseSerializer,
    CartStatusSerializer,
    CartTotalsSerializer,
    RemoveFromCartRequestSerializer,
    UpdateCartRequestSerializer,
)
from .catalog_serializers import CategorySerializer, ProductSerializer
from .checkout_serializers import CheckoutSummarySerializer, OrderConfirmationSerializer, OrderTotalsSerializer
from .response_serializers import ErrorResponseSerializer

__all__ = [
    "AddToCartRequestSerializer",
    "CartLineSerializer",
    "CartResponseSerializer",
    "CartStatusSerializer",
    "CartTotalsSerializer",
    "CategorySerializer",
    "CheckoutSummarySerializer",
    "ErrorResponseSerializer",
    "OrderConfirmationSerializer",
    "OrderTotalsSerializer",
    "ProductSerializer",
    "RemoveFromCartRequestSerializer",
    "UpdateCartRequestSerializer",
]
