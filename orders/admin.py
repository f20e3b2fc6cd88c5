from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "name", "quantity", "unit_price")
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "total_price", "payment_method", "is_paid", "is_delivered", "created_at")
    list_filter = ("is_paid", "is_delivered", "payment_method", "created_at")
    search_fields = ("id", "user__email", "user__name", "payment_intent_id")
    date_hierarchy = "created_at"
    readonly_fields = (
        "items_price",
        "shipping_price",
        "tax_price",
        "total_price",
        "is_paid",
        "paid_at",
        "is_delivered",
        "delivered_at",
        "payment_intent_id",
        "payment_status",
        "payer_email",
        "amount_paid",
    )
    inlines = [OrderItemInline]


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "product", "quantity", "unit_price")
    search_fields = ("name", "slug")
    raw_id_fields = ("order", "product")
