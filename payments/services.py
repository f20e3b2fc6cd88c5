"""Payment services: create a gateway intent for an order, then verify and
settle the captured payment.

The gateway is passed in explicitly; callers that don't pass one get a
`PayPalGateway` built from settings.
"""

import logging

from common.exceptions import AlreadyPaid, NotFound, PaymentVerificationFailed
from common.results import ActionResult, as_action_result
from common.values import PaymentResult
from orders.models import Order
from orders.services import settle_order_payment
from requests import RequestException

from .gateway import COMPLETED, PaymentGatewayError, PayPalGateway

logger = logging.getLogger("storefront.payments")


def _get_order(order_id: int) -> Order:
    order = Order.objects.filter(pk=order_id).first()
    if order is None:
        raise NotFound("Order not found.")
    return order


@as_action_result
def create_payment_order(order_id: int, gateway=None) -> ActionResult:
    """Create a gateway intent for the order total and remember its id.

    The stored payment result is a placeholder until capture.
    """

    order = _get_order(order_id)
    if order.is_paid:
        raise AlreadyPaid("Order is already paid.")
    gateway = gateway or PayPalGateway()
    try:
        intent_id = gateway.create_order(order.total_price)
    except (RequestException, PaymentGatewayError) as exc:
        logger.warning(
            "payments.create_failed",
            extra={"event": "payments.create_failed", "order_id": order.id, "error": str(exc)},
        )
        return ActionResult.fail("Could not create payment.", error="gateway_error")

    Order.objects.filter(pk=order.pk, is_paid=False).update(
        payment_intent_id=intent_id,
        payment_status="",
        payer_email="",
        amount_paid=None,
    )
    logger.info(
        "payments.intent_created",
        extra={"event": "payments.intent_created", "order_id": order.id, "intent_id": intent_id},
    )
    return ActionResult.ok("Payment order created successfully.", data=intent_id)


@as_action_result
def approve_payment(order_id: int, client_payment_id: str, gateway=None) -> ActionResult:
    """Capture the client-approved payment and settle the order.

    The capture must exist, carry the intent id stored on this order, and be
    completed; otherwise nothing is settled.
    """

    order = _get_order(order_id)
    if order.is_paid:
        raise AlreadyPaid("Order is already paid.")
    gateway = gateway or PayPalGateway()
    try:
        capture = gateway.capture_payment(client_payment_id)
    except (RequestException, PaymentGatewayError) as exc:
        logger.warning(
            "payments.capture_failed",
            extra={"event": "payments.capture_failed", "order_id": order.id, "error": str(exc)},
        )
        return ActionResult.fail("Error capturing payment.", error="gateway_error")

    if (
        not isinstance(capture, dict)
        or not order.payment_intent_id
        or capture.get("id") != order.payment_intent_id
        or capture.get("status") != COMPLETED
    ):
        captured = capture if isinstance(capture, dict) else {}
        logger.warning(
            "payments.verification_failed",
            extra={
                "event": "payments.verification_failed",
                "order_id": order.id,
                "intent_id": order.payment_intent_id,
                "capture_id": captured.get("id"),
                "status": captured.get("status"),
            },
        )
        raise PaymentVerificationFailed("Error in PayPal payment.")

    try:
        payment_result = PaymentResult.from_capture(capture)
    except PaymentVerificationFailed:
        # Captured at the gateway but unreadable; keep the id for reconciliation
        logger.error(
            "payments.capture_malformed",
            extra={"event": "payments.capture_malformed", "order_id": order.id, "capture_id": capture.get("id")},
        )
        raise

    settle_order_payment(order.id, payment_result)
    return ActionResult.ok("Your order has been paid.")
