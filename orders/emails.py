"""Email utilities for the orders app.

Uses Django's email backend, with links composed from FRONTEND_URL.
"""

from django.conf import settings
from django.core.mail import send_mail


def _receipt_body(order) -> str:
    lines = ["Thank you for your purchase!", "", f"Order: {order.id}", ""]
    for item in order.items.all():
        lines.append(f"{item.name} x {item.quantity} @ {item.unit_price:.2f} = {item.line_total:.2f}")
    lines += [
        "",
        f"Items: {order.items_price:.2f}",
        f"Shipping: {order.shipping_price:.2f}",
        f"Tax: {order.tax_price:.2f}",
        f"Total: {order.total_price:.2f}",
    ]
    frontend = getattr(settings, "FRONTEND_URL", "")
    if frontend:
        lines += ["", f"You can view your order here: {frontend.rstrip('/')}/order/{order.id}"]
    return "\n".join(lines) + "\n"


def send_purchase_receipt(order) -> None:
    """Send a purchase receipt for a paid order to its owner.

    No-op when the order has no user with an email address. Errors from the
    mail backend propagate to the caller.
    """
    to_email = getattr(order.user, "email", None) or order.payer_email
    if not to_email:
        return

    send_mail(
        f"Purchase receipt for order {order.id}",
        _receipt_body(order),
        getattr(settings, "DEFAULT_FROM_EMAIL", None),
        [to_email],
        fail_silently=False,
    )
