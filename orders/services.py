"""Order workflow: checkout, payment settlement and fulfillment.

Order creation and settlement each run in a single transaction. Settlement
locks the order row and re-checks `is_paid` under the lock, so concurrent
attempts produce exactly one paid transition.
"""

import logging
from functools import partial
from typing import Optional

from cart.models import Cart
from cart.pricing import calc_price
from cart.selectors import resolve_cart
from cart.services import clear_cart
from catalog.models import Product
from catalog.selectors import invalidate_product_cache
from common.exceptions import AlreadyPaid, NotFound, NotPaid, OutOfStock, TransactionFailed, Unauthenticated
from common.results import ActionResult, as_action_result
from common.values import PaymentResult, SessionIdentity
from customer.selectors import get_payment_method, get_shipping_address
from django.db import DatabaseError, transaction
from django.utils import timezone

from .emails import send_purchase_receipt
from .models import Order, OrderItem

logger = logging.getLogger("storefront.orders")


@as_action_result
def create_order(identity: SessionIdentity) -> ActionResult:
    """Place an order from the signed-in user's cart.

    Checks run in order and the first failure is returned with a redirect to
    the page that fixes it: cart, shipping address, payment method. The order,
    its items and the emptied cart are committed together.
    """

    if not identity.is_authenticated:
        raise Unauthenticated()
    user_id = identity.user_id

    cart = resolve_cart(identity)
    if cart is None or not cart.items.exists():
        return ActionResult.fail("Your cart is empty.", redirect_to="/cart")
    address = get_shipping_address(user_id)
    if address is None:
        return ActionResult.fail("No shipping address.", redirect_to="/shipping-address")
    payment_method = get_payment_method(user_id)
    if payment_method is None:
        return ActionResult.fail("No payment method.", redirect_to="/payment-method")

    try:
        order, items = _place_order_locked(cart.pk, user_id, address, payment_method)
    except DatabaseError as exc:
        logger.exception(
            "order.create_failed",
            extra={"event": "order.create_failed", "user_id": user_id, "cart_id": cart.pk},
        )
        raise TransactionFailed("Your order could not be placed. Please try again.") from exc
    if order is None:
        return ActionResult.fail("Your cart is empty.", redirect_to="/cart")

    logger.info(
        "order.created",
        extra={
            "event": "order.created",
            "order_id": order.id,
            "user_id": user_id,
            "items": len(items),
            "total_price": str(order.total_price),
        },
    )
    return ActionResult.ok(
        "Order created successfully.",
        data={"order_id": order.id},
        redirect_to=f"/order/{order.id}",
    )


def _place_order_locked(cart_id: int, user_id: int, address, payment_method: str):
    """Copy the locked cart into a new order and empty the cart, atomically.

    Returns `(None, [])` when the cart was emptied before the lock was taken.
    """

    with transaction.atomic():
        cart = Cart.objects.select_for_update().get(pk=cart_id)
        items = list(cart.items.all())
        if not items:
            return None, []
        summary = calc_price(cart.lines())
        order = Order(
            user_id=user_id,
            payment_method=payment_method,
            items_price=summary.items_price,
            shipping_price=summary.shipping_price,
            tax_price=summary.tax_price,
            total_price=summary.total_price,
        )
        order.set_shipping_address(address)
        order.save()
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    product_id=item.product_id,
                    name=item.name,
                    slug=item.slug,
                    image=item.image,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                )
                for item in items
            ]
        )
        clear_cart(cart)
    return order, items


def _dispatch_receipt(order_id: int) -> None:
    """Post-commit hook: email the receipt; failures are logged, never raised."""

    order = Order.objects.select_related("user").prefetch_related("items").filter(pk=order_id).first()
    if order is None:
        return
    try:
        send_purchase_receipt(order)
    except Exception:
        logger.exception(
            "order.receipt_failed",
            extra={"event": "order.receipt_failed", "order_id": order_id},
        )


def settle_order_payment(order_id: int, payment_result: Optional[PaymentResult] = None) -> Order:
    """Transition an order from unpaid to paid and decrement stock.

    Raises NotFound, AlreadyPaid, or OutOfStock when a product can no longer
    cover its line, and TransactionFailed on a database fault; nothing is
    written in any of those cases. `payment_result` is None for cash on
    delivery.
    """

    try:
        order = _settle_locked(order_id, payment_result)
    except DatabaseError as exc:
        logger.exception(
            "order.settlement_failed",
            extra={
                "event": "order.settlement_failed",
                "order_id": order_id,
                "payment_intent_id": payment_result.id if payment_result else None,
            },
        )
        raise TransactionFailed("Payment could not be recorded. Please try again.") from exc

    logger.info(
        "order.paid",
        extra={
            "event": "order.paid",
            "order_id": order.id,
            "user_id": order.user_id,
            "cash_on_delivery": payment_result is None,
        },
    )
    return order


def _settle_locked(order_id: int, payment_result: Optional[PaymentResult]) -> Order:
    with transaction.atomic():
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFound("Order not found.")
        if order.is_paid:
            raise AlreadyPaid("Order is already paid.")

        items = list(order.items.all())
        # Lock products in id order to keep lock acquisition consistent
        products = {
            p.id: p
            for p in Product.objects.select_for_update()
            .filter(id__in=[i.product_id for i in items])
            .order_by("id")
        }
        for item in items:
            product = products[item.product_id]
            if product.stock < item.quantity:
                logger.error(
                    "order.settlement_out_of_stock",
                    extra={
                        "event": "order.settlement_out_of_stock",
                        "order_id": order.id,
                        "product_id": product.id,
                        "stock": product.stock,
                        "quantity": item.quantity,
                        "payment_intent_id": payment_result.id if payment_result else order.payment_intent_id,
                    },
                )
                raise OutOfStock(f"Not enough stock for {product.name}.")
            product.stock -= item.quantity
            product.save(update_fields=["stock", "updated_at"])

        order.is_paid = True
        order.paid_at = timezone.now()
        update_fields = ["is_paid", "paid_at", "updated_at"]
        if payment_result is not None:
            order.payment_intent_id = payment_result.id
            order.payment_status = payment_result.status
            order.payer_email = payment_result.email_address
            order.amount_paid = payment_result.price_paid
            update_fields += ["payment_intent_id", "payment_status", "payer_email", "amount_paid"]
        order.save(update_fields=update_fields)

        for product in products.values():
            transaction.on_commit(partial(invalidate_product_cache, product.slug))
        transaction.on_commit(partial(_dispatch_receipt, order.id))
    return order


@as_action_result
def mark_order_paid_cod(order_id: int) -> ActionResult:
    """Administrator override: mark a cash-on-delivery order as paid."""

    settle_order_payment(order_id)
    return ActionResult.ok("Order has been marked as paid.")


@as_action_result
def deliver_order(order_id: int) -> ActionResult:
    with transaction.atomic():
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFound("Order not found.")
        if not order.is_paid:
            raise NotPaid("Order is not paid.")
        if not order.is_delivered:
            order.is_delivered = True
            order.delivered_at = timezone.now()
            order.save(update_fields=["is_delivered", "delivered_at", "updated_at"])
    logger.info(
        "order.delivered",
        extra={"event": "order.delivered", "order_id": order.id, "user_id": order.user_id},
    )
    return ActionResult.ok("Order has been marked as delivered.")


@as_action_result
def delete_order(order_id: int) -> ActionResult:
    """Administrator delete; order items go with the order."""

    deleted, _ = Order.objects.filter(pk=order_id).delete()
    if not deleted:
        raise NotFound("Order not found.")
    logger.info("order.deleted", extra={"event": "order.deleted", "order_id": order_id})
    return ActionResult.ok("Order deleted successfully.")
