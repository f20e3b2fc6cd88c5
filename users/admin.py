"""Admin registration for the custom User model."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Default Django user admin with the storefront name and role fields."""

    list_display = ("username", "email", "name", "role", "is_active", "last_login", "date_joined")
    list_filter = ("role", "is_superuser", "is_active")
    search_fields = ("username", "email", "name")
    ordering = ("-date_joined",)
    readonly_fields = ("last_login", "date_joined")

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("Personal info", {"fields": ("name", "first_name", "last_name", "email")}),
        ("Permissions", {"fields": ("role", "is_active", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "name", "password1", "password2"),
            },
        ),
    )

    filter_horizontal = ("groups", "user_permissions")
