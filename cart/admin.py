"""Admin registration for cart models.

Carts are shown with their items inline; prices are read-only because they
are derived from the items.
"""

from django.contrib import admin

from .models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ("product", "name", "quantity", "unit_price", "created_at", "updated_at")
    readonly_fields = ("name", "unit_price", "created_at", "updated_at")
    raw_id_fields = ("product",)


class OwnerTypeFilter(admin.SimpleListFilter):
    title = "owner type"
    parameter_name = "owner_type"

    def lookups(self, request, model_admin):
        return (
            ("user", "User carts"),
            ("guest", "Guest carts"),
        )

    def queryset(self, request, queryset):
        value = self.value()
        if value == "user":
            return queryset.filter(user__isnull=False)
        if value == "guest":
            return queryset.filter(user__isnull=True)
        return queryset


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "session_cart_id", "total_price", "updated_at", "created_at")
    list_filter = (OwnerTypeFilter,)
    search_fields = ("session_cart_id", "user__username", "user__email")
    ordering = ("-updated_at",)
    readonly_fields = ("items_price", "shipping_price", "tax_price", "total_price", "created_at", "updated_at")
    inlines = [CartItemInline]
    raw_id_fields = ("user",)
    list_select_related = ("user",)
