"""Aggregate user namespaces under /api/v1/."""

from django.urls import include, path

urlpatterns = [
    path("auth/", include("users.auth_urls")),
    path("account/", include("users.account_urls")),
    path("admin/", include("users.admin_urls")),
]
