"""Administrator user management under /api/v1/admin."""

from django.urls import path

from .views import AdminUserDetailView

urlpatterns = [
    path("users/<int:user_id>/", AdminUserDetailView.as_view(), name="admin-user-detail"),
]
