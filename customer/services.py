"""Customer domain services for checkout preferences.

Keep business rules here and keep views thin.
"""

from common.exceptions import ValidationFailed
from common.results import ActionResult, as_action_result
from django.conf import settings
from django.db import transaction

from .models import Address, Profile

ADDRESS_FIELDS = ("full_name", "street_address", "city", "postal_code", "country")


def enabled_payment_methods() -> list[str]:
    return [m.strip() for m in getattr(settings, "PAYMENT_METHODS", []) if m.strip()]


def validate_address(data: dict) -> dict:
    """Check the required address fields; returns the cleaned subset.

    Raises ValidationFailed listing every offending field.
    """

    cleaned: dict = {}
    errors: dict = {}
    for field in ADDRESS_FIELDS:
        value = str(data.get(field) or "").strip()
        if len(value) < 3:
            errors[field] = ["Must be at least 3 characters."]
        cleaned[field] = value
    for field in ("lat", "lng"):
        value = data.get(field)
        if value in (None, ""):
            cleaned[field] = None
            continue
        try:
            cleaned[field] = float(value)
        except (TypeError, ValueError):
            errors[field] = ["Must be a number."]
    if errors:
        raise ValidationFailed("Invalid shipping address.", errors=errors)
    return cleaned


@as_action_result
def update_user_address(*, user, data: dict) -> ActionResult:
    """Store the shipping address and make it the profile default.

    Updates the current default in place rather than piling up addresses.
    """

    cleaned = validate_address(data)
    with transaction.atomic():
        profile, _ = Profile.objects.select_for_update().get_or_create(user=user)
        address = profile.default_shipping_address
        if address is None:
            address = Address.objects.create(user=user, **cleaned)
            profile.default_shipping_address = address
            profile.save(update_fields=["default_shipping_address", "updated_at"])
        else:
            for field, value in cleaned.items():
                setattr(address, field, value)
            address.save()
    return ActionResult.ok("User address updated successfully.", data={"address_id": address.id})


@as_action_result
def update_user_payment_method(*, user, method: str) -> ActionResult:
    method = (method or "").strip()
    if method not in enabled_payment_methods():
        raise ValidationFailed("Invalid payment method.", errors={"type": ["Unsupported payment method."]})
    profile, _ = Profile.objects.get_or_create(user=user)
    profile.payment_method = method
    profile.save(update_fields=["payment_method", "updated_at"])
    return ActionResult.ok("Payment method updated successfully.")
