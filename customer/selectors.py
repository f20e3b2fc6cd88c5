"""Read-only data access helpers for the customer app."""

from typing import Optional

from common.values import ShippingAddress

from .models import Profile


def get_profile(user_id: int) -> Optional[Profile]:
    """Return a profile for the given user id, if it exists."""

    return Profile.objects.select_related("default_shipping_address").filter(user_id=user_id).first()


def get_shipping_address(user_id: int) -> Optional[ShippingAddress]:
    """Snapshot of the user's default shipping address, or None if none is on file."""

    profile = get_profile(user_id)
    if profile is None or profile.default_shipping_address is None:
        return None
    return profile.default_shipping_address.as_snapshot()


def get_payment_method(user_id: int) -> Optional[str]:
    profile = get_profile(user_id)
    if profile is None or not profile.payment_method:
        return None
    return profile.payment_method
