"""URL routes for the customer app."""

from django.urls import path

from .views import CheckoutProfileView, PaymentMethodView, ShippingAddressView

urlpatterns = [
    path("checkout-profile/", CheckoutProfileView.as_view(), name="checkout-profile"),
    path("address/", ShippingAddressView.as_view(), name="shipping-address"),
    path("payment-method/", PaymentMethodView.as_view(), name="payment-method"),
]
