from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Payment gateway integration and order payment settlement."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
