from django.apps import AppConfig


class CustomerConfig(AppConfig):
    """Shipping addresses and the saved payment method used at checkout."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "customer"
    verbose_name = "Customer checkout profile"
