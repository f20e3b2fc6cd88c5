"""URL routes for the payments app (v1)."""

from django.urls import path

from .views import PayPalApproveView, PayPalCreateView

app_name = "payments"

urlpatterns = [
    path("orders/<int:order_id>/paypal/", PayPalCreateView.as_view(), name="paypal-create"),
    path("orders/<int:order_id>/paypal/approve/", PayPalApproveView.as_view(), name="paypal-approve"),
]
