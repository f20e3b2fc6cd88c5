"""Cart services: line item mutations with advisory stock checks.

Stock is only validated here; it is decremented when an order is paid.
Every mutation re-derives the cart's money fields from its items.
"""

import logging
import uuid

from catalog.models import Product
from catalog.selectors import get_product, invalidate_product_cache
from common.exceptions import NotFound, OutOfStock
from common.results import ActionResult, as_action_result
from common.values import SessionIdentity
from django.db import transaction

from .models import Cart, CartItem
from .pricing import calc_price
from .selectors import resolve_cart

logger = logging.getLogger("storefront.cart")


def new_session_cart_id() -> str:
    return uuid.uuid4().hex


def reprice_cart(cart: Cart) -> Cart:
    """Recompute and persist the four money fields from the current items."""

    summary = calc_price(cart.lines())
    cart.items_price = summary.items_price
    cart.shipping_price = summary.shipping_price
    cart.tax_price = summary.tax_price
    cart.total_price = summary.total_price
    cart.save(update_fields=["items_price", "shipping_price", "tax_price", "total_price", "updated_at"])
    return cart


def clear_cart(cart: Cart) -> Cart:
    """Empty the cart and zero its prices. Runs inside the caller's transaction."""

    cart.items.all().delete()
    return reprice_cart(cart)


def _get_product(product_id) -> Product:
    product = get_product(product_id)
    if product is None:
        raise NotFound("Product not found.")
    return product


def _cart_for_update(identity: SessionIdentity) -> Cart:
    """Lock the caller's cart, creating it on first use.

    A signed-in user's cart is created with `get_or_create` so a concurrent
    first add reuses the cart the other request just inserted.
    """

    cart = resolve_cart(identity, for_update=True)
    if cart is not None:
        return cart
    session_cart_id = identity.session_cart_id or new_session_cart_id()
    if identity.user_id is None:
        return Cart.objects.create(session_cart_id=session_cart_id)
    cart, _ = Cart.objects.get_or_create(user_id=identity.user_id, defaults={"session_cart_id": session_cart_id})
    return Cart.objects.select_for_update().get(pk=cart.pk)


@as_action_result
def add_item(identity: SessionIdentity, product_id: int) -> ActionResult:
    """Add one unit of a product to the caller's cart.

    The cart is created on first add. Fails with OutOfStock when the product
    cannot cover the resulting quantity.
    """

    product = _get_product(product_id)
    with transaction.atomic():
        cart = _cart_for_update(identity)
        item =CartItem.objects.select_for_update().filter(cart=cart, product=product).first()
        existed = item is not None
        desired = (item.quantity if existed else 0) + 1
        if product.stock < desired:
            raise OutOfStock("Not enough stock.")
        if existed:
            item.quantity = desired
            item.save(update_fields=["quantity", "updated_at"])
        else:
            item = CartItem.objects.create(
                cart=cart,
                product=product,
                name=product.name,
                slug=product.slug,
                image=product.image,
                unit_price=product.price,
                quantity=1,
            )
        reprice_cart(cart)

    invalidate_product_cache(product.slug)
    logger.info(
        "cart.item_updated" if existed else "cart.item_added",
        extra={
            "event": "cart.item_updated" if existed else "cart.item_added",
            "cart_id": cart.id,
            "user_id": identity.user_id,
            "product_id": product.id,
            "quantity": item.quantity,
            "guest": not identity.is_authenticated,
        },
    )
    verb = "updated in" if existed else "added to"
    return ActionResult.ok(
        f"{product.name} {verb} cart.",
        data={"cart_id": cart.id, "session_cart_id": cart.session_cart_id, "quantity": item.quantity},
    )


@as_action_result
def remove_item(identity: SessionIdentity, product_id: int) -> ActionResult:
    """Take one unit of a product out of the cart; the line goes at zero."""

    product = _get_product(product_id)
    with transaction.atomic():
        cart = resolve_cart(identity, for_update=True)
        if cart is None:
            raise NotFound("Cart not found.")
        item = CartItem.objects.select_for_update().filter(cart=cart, product=product).first()
        if item is None:
            raise NotFound("Item not found in cart.")
        if item.quantity <= 1:
            item.delete()
            remaining = 0
        else:
            item.quantity -= 1
            item.save(update_fields=["quantity", "updated_at"])
            remaining = item.quantity
        reprice_cart(cart)

    invalidate_product_cache(product.slug)
    logger.info(
        "cart.item_removed",
        extra={
            "event": "cart.item_removed",
            "cart_id": cart.id,
            "user_id": identity.user_id,
            "product_id": product.id,
            "quantity": remaining,
        },
    )
    return ActionResult.ok(f"{product.name} removed from cart.", data={"cart_id": cart.id, "quantity": remaining})


def delete_cart(identity: SessionIdentity) -> bool:
    """Delete the caller's cart outright. Returns False when there was none."""

    if identity.is_empty:
        return False
    deleted = False
    if identity.user_id is not None:
        count, _ = Cart.objects.filter(user_id=identity.user_id).delete()
        deleted = count > 0
    if identity.session_cart_id:
        count, _ = Cart.objects.filter(session_cart_id=identity.session_cart_id, user__isnull=True).delete()
        deleted = deleted or count > 0
    if deleted:
        logger.info("cart.deleted", extra={"event": "cart.deleted", "user_id": identity.user_id})
    return deleted


@transaction.atomic
def merge_session_cart(identity: SessionIdentity) -> Cart | None:
    """Hand an anonymous session cart to the user who just signed in.

    Only applies when the user has no cart of their own; an existing user
    cart wins and the session cart is left untouched.
    """

    if identity.user_id is None or not identity.session_cart_id:
        return None
    if Cart.objects.filter(user_id=identity.user_id).exists():
        return None
    cart = (
        Cart.objects.select_for_update()
        .filter(session_cart_id=identity.session_cart_id, user__isnull=True)
        .first()
    )
    if cart is None:
        return None
    cart.user_id = identity.user_id
    cart.save(update_fields=["user", "updated_at"])
    logger.info(
        "cart.merged",
        extra={"event": "cart.merged", "cart_id": cart.id, "user_id": identity.user_id},
    )
    return cart
