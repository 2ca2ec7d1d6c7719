from rest_framework import serializers

from .cart_serializers import CartLineSerializer


class OrderTotalsSerializer(serializers.Serializer):
    """Checkout totals: subtotal + flat shipping + tax"""

    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2)
    shipping = serializers.DecimalField(max_digits=10, decimal_places=2)
    tax = serializers.DecimalField(max_digits=10, decimal_places=2)
    tax_rate = serializers.DecimalField(max_digits=5, decimal_places=4)
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
    items_count = serializers.IntegerField()
    savings = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()


class CheckoutSummarySerializer(serializers.Serializer):
    cart_id = serializers.CharField(read_only=True)
    items = CartLineSerializer(many=True, read_only=True)
    totals = OrderTotalsSerializer(read_only=True)


class OrderConfirmationSerializer(serializers.Serializer):
    order_reference = serializers.CharField(read_only=True)
    placed_at = serializers.DateTimeField(read_only=True)
    email = serializers.EmailField(read_only=True)
    items = CartLineSerializer(many=True, read_only=True)
    totals = OrderTotalsSerializer(read_only=True)
