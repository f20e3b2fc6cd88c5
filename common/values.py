"""Immutable value types passed between the cart, order and payment apps."""

from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from .exceptions import PaymentVerificationFailed


@dataclass(frozen=True)
class SessionIdentity:
    """Who is calling: an authenticated user id and/or an anonymous cart token."""

    user_id: Optional[int] = None
    session_cart_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_empty(self) -> bool:
        return self.user_id is None and not self.session_cart_id


@dataclass(frozen=True)
class CartLine:
    """Priced line used as input to the pricing engine."""

    unit_price: Decimal
    quantity: int


@dataclass(frozen=True)
class PriceSummary:
    items_price: Decimal
    shipping_price: Decimal
    tax_price: Decimal
    total_price: Decimal

    def as_strings(self) -> dict:
        return {
            "itemsPrice": f"{self.items_price:.2f}",
            "shippingPrice": f"{self.shipping_price:.2f}",
            "taxPrice": f"{self.tax_price:.2f}",
            "totalPrice": f"{self.total_price:.2f}",
        }


@dataclass(frozen=True)
class ShippingAddress:
    full_name: str
    street_address: str
    city: str
    postal_code: str
    country: str
    lat: Optional[float] = None
    lng: Optional[float] = None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PaymentResult:
    """Settled payment as reported by the gateway."""

    id: str
    status: str
    email_address: str
    price_paid: Decimal

    @classmethod
    def from_capture(cls, capture: dict) -> "PaymentResult":
        """Build a result from a gateway capture payload.

        Missing nested fields fall back to blanks; the caller has already
        verified id and status. A payload whose nested fields have the wrong
        shape, or whose amount is not a finite number, raises
        `PaymentVerificationFailed`.
        """
        units = _nested(capture.get("purchase_units"), list) or [{}]
        payments = _nested(_nested(units[0], dict).get("payments"), dict)
        captures = _nested(payments.get("captures"), list) or [{}]
        amount = _nested(_nested(captures[0], dict).get("amount"), dict).get("value") or "0"
        payer = _nested(capture.get("payer"), dict)
        email = payer.get("email_address") or ""
        if not isinstance(amount, (str, int, float, Decimal)) or not isinstance(email, str):
            raise PaymentVerificationFailed("Malformed payment capture.")
        try:
            price_paid = Decimal(str(amount))
        except (InvalidOperation, TypeError) as exc:
            raise PaymentVerificationFailed("Malformed payment capture.") from exc
        if not price_paid.is_finite() or price_paid < 0:
            raise PaymentVerificationFailed("Malformed payment capture.")
        return cls(
            id=str(capture.get("id", "")),
            status=str(capture.get("status", "")),
            email_address=email,
            price_paid=price_paid,
        )


def _nested(value, kind):
    """Return `value` if it is a `kind`, an empty one if missing, else fail."""
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise PaymentVerificationFailed("Malformed payment capture.")
    return value
