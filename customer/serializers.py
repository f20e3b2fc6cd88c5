"""Serializers for the customer domain."""

from rest_framework import serializers

from .models import Address, Profile


class AddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = ("id", "full_name", "street_address", "city", "postal_code", "country", "lat", "lng")
        read_only_fields = ("id",)


class ShippingAddressSerializer(serializers.Serializer):
    full_name = serializers.CharField(min_length=3, max_length=120)
    street_address = serializers.CharField(min_length=3, max_length=200)
    city = serializers.CharField(min_length=3, max_length=80)
    postal_code = serializers.CharField(min_length=3, max_length=20)
    country = serializers.CharField(min_length=3, max_length=80)
    lat = serializers.FloatField(required=False, allow_null=True)
    lng = serializers.FloatField(required=False, allow_null=True)


class ProfileSerializer(serializers.ModelSerializer):
    """Checkout preferences: default shipping address and payment method."""

    shipping_address = AddressSerializer(source="default_shipping_address", read_only=True)

    class Meta:
        model = Profile
        fields = ("id", "shipping_address", "payment_method")
        read_only_fields = fields


class PaymentMethodSerializer(serializers.Serializer):
    type = serializers.CharField(max_length=32)
