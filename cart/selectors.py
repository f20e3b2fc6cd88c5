"""Selectors for cart domain read operations."""

from typing import Optional

from common.exceptions import NotFound
from common.values import SessionIdentity

from .models import Cart


def resolve_cart(identity: SessionIdentity, *, for_update: bool = False) -> Optional[Cart]:
    """Return the caller's cart, or None when no cart exists yet.

    A signed-in user's cart is looked up by user; otherwise by session token.
    Raises NotFound when the identity carries neither.
    """

    if identity.is_empty:
        raise NotFound("Cart session not found.")
    qs = Cart.objects.select_for_update() if for_update else Cart.objects.all()
    if identity.user_id is not None:
        return qs.filter(user_id=identity.user_id).first()
    return qs.filter(session_cart_id=identity.session_cart_id, user__isnull=True).first()


def get_cart_with_items(identity: SessionIdentity) -> Optional[Cart]:
    cart = resolve_cart(identity)
    if cart is None:
        return None
    return Cart.objects.prefetch_related("items").get(pk=cart.pk)
