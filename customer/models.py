"""Customer domain models.

A user keeps postal addresses and a profile pointing at the default
shipping address and the preferred payment method. Orders never reference
these rows directly; they copy a snapshot at creation time.
"""

from common.choices import PaymentMethod
from common.values import ShippingAddress
from django.conf import settings
from django.core.validators import MinLengthValidator
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Address(TimeStampedModel):
    """Postal address tied to a user."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="addresses")
    full_name = models.CharField(max_length=120, validators=[MinLengthValidator(3)])
    street_address = models.CharField(max_length=200, validators=[MinLengthValidator(3)])
    city = models.CharField(max_length=80, validators=[MinLengthValidator(3)])
    postal_code = models.CharField(max_length=20, validators=[MinLengthValidator(3)])
    country = models.CharField(max_length=80, validators=[MinLengthValidator(3)])
    lat = models.FloatField(null=True, blank=True)
    lng = models.FloatField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "country", "postal_code"], name="customer_addr_user_country_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.full_name} - {self.street_address}, {self.city}, {self.postal_code}, {self.country}"

    def as_snapshot(self) -> ShippingAddress:
        return ShippingAddress(
            full_name=self.full_name,
            street_address=self.street_address,
            city=self.city,
            postal_code=self.postal_code,
            country=self.country,
            lat=self.lat,
            lng=self.lng,
        )


class Profile(TimeStampedModel):
    """Per-user checkout preferences.

    `payment_method` is blank until the customer picks one.
    """

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    default_shipping_address = models.ForeignKey(
        Address,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="shipping_profiles",
    )
    payment_method = models.CharField(max_length=32, choices=PaymentMethod.choices, blank=True)

    def __str__(self) -> str:  # pragma: no cover
        return f"Profile<{self.user_id}>"
