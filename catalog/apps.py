"""Django app configuration for catalog."""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Products and reviews."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"
