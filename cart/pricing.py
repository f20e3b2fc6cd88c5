"""Cart pricing.

Money is computed with `Decimal` and rounded half-up to cents at each step.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from common.values import CartLine, PriceSummary
from django.conf import settings

CENTS = Decimal("0.01")


def round2(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def calc_price(lines: Iterable[CartLine]) -> PriceSummary:
    """Items, shipping, tax and total for the given lines.

    Shipping is free strictly above the threshold. Tax applies to the items
    price only.
    """

    threshold = Decimal(str(getattr(settings, "STOREFRONT_FREE_SHIPPING_THRESHOLD", "50.00")))
    flat_shipping = Decimal(str(getattr(settings, "STOREFRONT_FLAT_SHIPPING_PRICE", "2.00")))
    tax_rate = Decimal(str(getattr(settings, "STOREFRONT_TAX_RATE", "0.15")))

    items_price = round2(sum((Decimal(line.unit_price) * line.quantity for line in lines), Decimal("0")))
    shipping_price = round2(0 if items_price > threshold else flat_shipping)
    tax_price = round2(tax_rate * items_price)
    total_price = round2(items_price + tax_price + shipping_price)
    return PriceSummary(
        items_price=items_price,
        shipping_price=shipping_price,
        tax_price=tax_price,
        total_price=total_price,
    )
