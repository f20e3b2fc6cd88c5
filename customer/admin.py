from django.contrib import admin

from .models import Address, Profile


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "full_name", "city", "postal_code", "country", "updated_at")
    search_fields = ("full_name", "city", "postal_code", "user__email")
    raw_id_fields = ("user",)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "payment_method", "default_shipping_address")
    list_filter = ("payment_method",)
    raw_id_fields = ("user", "default_shipping_address")
