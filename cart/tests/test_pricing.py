from decimal import Decimal

import pytest
from cart.pricing import calc_price, round2
from common.values import CartLine


def line(price: str, qty: int) -> CartLine:
    return CartLine(unit_price=Decimal(price), quantity=qty)


def test_free_shipping_strictly_above_threshold():
    summary = calc_price([line("30.00", 2)])
    assert summary.items_price == Decimal("60.00")
    assert summary.shipping_price == Decimal("0.00")


def test_flat_shipping_at_threshold():
    summary = calc_price([line("25.00", 2)])
    assert summary.items_price == Decimal("50.00")
    assert summary.shipping_price == Decimal("2.00")


def test_tax_and_total_for_twenty():
    summary = calc_price([line("20.00", 1)])
    assert summary.tax_price == Decimal("3.00")
    assert summary.total_price == Decimal("25.00")
    assert summary.as_strings() == {
        "itemsPrice": "20.00",
        "shippingPrice": "2.00",
        "taxPrice": "3.00",
        "totalPrice": "25.00",
    }


def test_empty_cart_still_charges_flat_shipping():
    summary = calc_price([])
    assert summary.items_price == Decimal("0.00")
    assert summary.shipping_price == Decimal("2.00")
    assert summary.total_price == Decimal("2.00")


def test_round2_is_half_up():
    assert round2(Decimal("0.005")) == Decimal("0.01")
    assert round2(Decimal("2.675")) == Decimal("2.68")
    assert round2("1.004") == Decimal("1.00")


@pytest.mark.parametrize(
    "lines",
    [
        [line("19.99", 3)],
        [line("0.33", 7), line("12.10", 1)],
        [line("49.99", 1), line("0.01", 1)],
        [line("49.99", 1), line("0.02", 1)],
        [line("7.77", 9), line("1.05", 13), line("3.33", 2)],
    ],
)
def test_total_is_sum_of_parts_with_two_places(lines):
    summary = calc_price(lines)
    assert summary.total_price == summary.items_price + summary.tax_price + summary.shipping_price
    for value in (summary.items_price, summary.shipping_price, summary.tax_price, summary.total_price):
        assert value.as_tuple().exponent == -2
    for text in summary.as_strings().values():
        assert len(text.split(".")[1]) == 2


def test_rates_come_from_settings(settings):
    settings.STOREFRONT_TAX_RATE = "0.10"
    settings.STOREFRONT_FLAT_SHIPPING_PRICE = "5.00"
    summary = calc_price([line("20.00", 1)])
    assert summary.tax_price == Decimal("2.00")
    assert summary.shipping_price == Decimal("5.00")
    assert summary.total_price == Decimal("27.00")
