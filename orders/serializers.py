"""DRF serializers for Orders.

Orders are read-only over the API; they are created from the cart by
`orders.services.create_order`.
"""

from rest_framework import serializers

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """Order line item with computed line_total."""

    product_id = serializers.IntegerField(read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product_id", "name", "slug", "image", "unit_price", "quantity", "line_total"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    shipping_address = serializers.SerializerMethodField()
    payment_result = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "user_id",
            "created_at",
            "shipping_address",
            "payment_method",
            "items",
            "items_price",
            "shipping_price",
            "tax_price",
            "total_price",
            "is_paid",
            "paid_at",
            "is_delivered",
            "delivered_at",
            "payment_result",
        ]
        read_only_fields = fields

    def get_shipping_address(self, obj: Order) -> dict:
        return obj.shipping_address.as_dict()

    def get_payment_result(self, obj: Order) -> dict | None:
        result = obj.payment_result
        if result is None:
            return None
        return {
            "id": result.id,
            "status": result.status,
            "email_address": result.email_address,
            "price_paid": f"{result.price_paid:.2f}",
        }


class LatestSaleSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.name", default=None, read_only=True)

    class Meta:
        model = Order
        fields = ["id", "user_name", "created_at", "total_price", "is_paid", "is_delivered"]
        read_only_fields = fields


class SalesPointSerializer(serializers.Serializer):
    month = serializers.CharField()
    total_sales = serializers.DecimalField(max_digits=14, decimal_places=2)


class OrderSummarySerializer(serializers.Serializer):
    orders_count = serializers.IntegerField()
    products_count = serializers.IntegerField()
    users_count = serializers.IntegerField()
    total_sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    sales_data = SalesPointSerializer(many=True)
    latest_sales = LatestSaleSerializer(many=True)
