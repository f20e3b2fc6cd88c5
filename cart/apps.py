"""Django app configuration for the Cart app."""

from django.apps import AppConfig


class CartConfig(AppConfig):
    """Shopping carts for signed-in and anonymous shoppers."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "cart"
