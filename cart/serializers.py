"""Cart serializers for read and write operations."""

from rest_framework import serializers

from .models import Cart, CartItem


class CartItemReadSerializer(serializers.ModelSerializer):
    """Read serializer for a cart item."""

    product_id = serializers.IntegerField(read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = ["product_id", "name", "slug", "image", "unit_price", "quantity", "line_total"]


class CartReadSerializer(serializers.ModelSerializer):
    """Cart with items and the four derived money fields."""

    items = CartItemReadSerializer(many=True, read_only=True)

    class Meta:
        model = Cart
        fields = [
            "id",
            "session_cart_id",
            "items",
            "items_price",
            "shipping_price",
            "tax_price",
            "total_price",
        ]
        read_only_fields = fields


class AddItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
