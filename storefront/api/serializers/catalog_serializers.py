from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    """Read-only view of a Product record."""

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    original_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True, allow_null=True)
    discount = serializers.IntegerField(read_only=True)
    is_on_sale = serializers.BooleanField(read_only=True)
    images = serializers.ListField(child=serializers.CharField(), read_only=True)
    image_url = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    material = serializers.CharField(read_only=True)
    delivery = serializers.CharField(read_only=True)
    created_at = serializers.CharField(read_only=True, allow_null=True)


class CategorySerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    slug = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
