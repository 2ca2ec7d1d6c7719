from rest_framework import serializers

from storefront.domain.models import SIZES

from .catalog_serializers import ProductSerializer


class AddToCartRequestSerializer(serializers.Serializer):
    """Request body for adding item to cart"""

    product_id = serializers.CharField(help_text="Product id to add")
    quantity = serializers.IntegerField(min_value=1, default=1, help_text="Quantity to add (default: 1)")
    size = serializers.ChoiceField(
        choices=SIZES,
        help_text="Garment size",
        error_messages={"required": "Please select a size", "invalid_choice": "Please select a size"},
    )


class UpdateCartRequestSerializer(serializers.Serializer):
    """Request body for updating cart item"""

    product_id = serializers.CharField(help_text="Product id to update")
    quantity = serializers.IntegerField(min_value=1, help_text="New quantity")
    size = serializers.ChoiceField(choices=SIZES, required=False, help_text="Only update this size")


class RemoveFromCartRequestSerializer(serializers.Serializer):
    """Request body for removing item from cart"""

    product_id = serializers.CharField(help_text="Product id to remove")
    size = serializers.ChoiceField(choices=SIZES, required=False, help_text="Only remove this size")


class CartLineSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    product_id = serializers.CharField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    size = serializers.CharField(read_only=True)
    product = ProductSerializer(read_only=True)
    line_total = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)


class CartTotalsSerializer(serializers.Serializer):
    """Cart totals breakdown"""

    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2, help_text="Sum of all items")
    total = serializers.DecimalField(max_digits=10, decimal_places=2, help_text="Cart total (subtotal)")
    items_count = serializers.IntegerField(help_text="Number of cart lines")
    savings = serializers.DecimalField(max_digits=10, decimal_places=2, help_text="Savings against original prices")
    currency = serializers.CharField()


class CartResponseSerializer(serializers.Serializer):
    """Complete cart response"""

    id = serializers.CharField(read_only=True)
    user_id = serializers.CharField(read_only=True)
    items = CartLineSerializer(many=True, read_only=True)
    items_count = serializers.IntegerField(read_only=True)
    totals = CartTotalsSerializer(read_only=True)


class CartStatusSerializer(serializers.Serializer):
    id = serializers.CharField()
    total_items = serializers.IntegerField()
    total_quantity = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
