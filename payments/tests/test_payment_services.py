from decimal import Decimal
from unittest import mock

import pytest
import requests
from catalog.tests.factories import ProductFactory
from django.db import OperationalError
from orders.tests.factories import OrderFactory, OrderItemFactory
from payments.gateway import PaymentGatewayError
from payments.services import approve_payment, create_payment_order


class FakeGateway:
    """In-memory stand-in for PayPalGateway."""

    def __init__(self, intent_id="PAY-123", capture=None, error=None):
        self.intent_id = intent_id
        self.capture = capture
        self.error = error
        self.created_for = []
        self.captured = []

    def create_order(self, amount):
        if self.error:
            raise self.error
        self.created_for.append(amount)
        return self.intent_id

    def capture_payment(self, intent_id):
        if self.error:
            raise self.error
        self.captured.append(intent_id)
        return self.capture


def completed_capture(capture_id="PAY-123", value="48.00"):
    return {
        "id": capture_id,
        "status": "COMPLETED",
        "payer": {"email_address": "buyer@example.com"},
        "purchase_units": [{"payments": {"captures": [{"amount": {"value": value, "currency_code": "USD"}}]}}],
    }


@pytest.mark.django_db
def test_create_payment_order_stores_intent_placeholder():
    order = OrderFactory()
    gateway = FakeGateway()

    result = create_payment_order(order.id, gateway=gateway)

    assert result.success is True
    assert result.data == "PAY-123"
    assert gateway.created_for == [Decimal("48.00")]
    order.refresh_from_db()
    assert order.payment_intent_id == "PAY-123"
    assert order.payment_status == ""
    assert order.is_paid is False


@pytest.mark.django_db
def test_create_payment_order_unknown_order():
    result = create_payment_order(999, gateway=FakeGateway())
    assert result.success is False
    assert result.error == "not_found"


@pytest.mark.django_db
def test_create_payment_order_gateway_failure_is_a_failure_result():
    order = OrderFactory()
    result = create_payment_order(order.id, gateway=FakeGateway(error=requests.ConnectionError("down")))
    assert result.success is False
    order.refresh_from_db()
    assert order.payment_intent_id == ""


@pytest.mark.django_db
def test_approve_settles_order_and_records_payment_result():
    order = OrderFactory(payment_intent_id="PAY-123")
    product = OrderItemFactory(order=order, product=ProductFactory(stock=5), quantity=2).product
    gateway = FakeGateway(capture=completed_capture())

    result = approve_payment(order.id, "PAY-123", gateway=gateway)

    assert result.success is True
    assert gateway.captured == ["PAY-123"]
    order.refresh_from_db()
    product.refresh_from_db()
    assert order.is_paid is True
    assert order.payment_result.id == "PAY-123"
    assert order.payment_result.status == "COMPLETED"
    assert order.payment_result.email_address == "buyer@example.com"
    assert order.payment_result.price_paid == Decimal("48.00")
    assert product.stock == 3


@pytest.mark.django_db
def test_approve_rejects_capture_for_another_intent_even_if_completed():
    order = OrderFactory(payment_intent_id="PAY-123")
    product = OrderItemFactory(order=order, product=ProductFactory(stock=5)).product
    gateway = FakeGateway(capture=completed_capture(capture_id="PAY-OTHER"))

    result = approve_payment(order.id, "PAY-OTHER", gateway=gateway)

    assert result.success is False
    assert result.error == "payment_verification_failed"
    order.refresh_from_db()
    product.refresh_from_db()
    assert order.is_paid is False
    assert product.stock == 5


@pytest.mark.django_db
@pytest.mark.parametrize(
    "capture",
    [
        None,
        {},
        {**completed_capture(), "status": "PENDING"},
    ],
)
def test_approve_rejects_missing_or_incomplete_capture(capture):
    order = OrderFactory(payment_intent_id="PAY-123")
    OrderItemFactory(order=order)

    result = approve_payment(order.id, "PAY-123", gateway=FakeGateway(capture=capture))

    assert result.success is False
    assert result.error == "payment_verification_failed"
    order.refresh_from_db()
    assert order.is_paid is False


@pytest.mark.django_db
def test_approve_without_stored_intent_fails_verification():
    order = OrderFactory()
    OrderItemFactory(order=order)
    result = approve_payment(order.id, "", gateway=FakeGateway(intent_id="", capture={"id": "", "status": "COMPLETED"}))
    assert result.error == "payment_verification_failed"


@pytest.mark.django_db
@pytest.mark.parametrize("error", [requests.Timeout("slow"), PaymentGatewayError("bad body")])
def test_approve_gateway_errors_leave_order_unpaid(error):
    order = OrderFactory(payment_intent_id="PAY-123")
    OrderItemFactory(order=order)

    result = approve_payment(order.id, "PAY-123", gateway=FakeGateway(error=error))

    assert result.success is False
    order.refresh_from_db()
    assert order.is_paid is False


@pytest.mark.django_db
def test_approve_already_paid_order_does_not_capture_again():
    order = OrderFactory(payment_intent_id="PAY-123")
    OrderItemFactory(order=order)
    approve_payment(order.id, "PAY-123", gateway=FakeGateway(capture=completed_capture()))
    gateway = FakeGateway(capture=completed_capture())

    result = approve_payment(order.id, "PAY-123", gateway=gateway)

    assert result.success is False
    assert result.error == "already_paid"
    assert gateway.captured == []


@pytest.mark.django_db
@pytest.mark.parametrize(
    "capture",
    [
        completed_capture(value="forty-eight"),
        completed_capture(value="NaN"),
        {**completed_capture(), "purchase_units": {"payments": {}}},
        {**completed_capture(), "purchase_units": ["unit"]},
        {**completed_capture(), "payer": "buyer@example.com"},
        {**completed_capture(), "payer": {"email_address": ["buyer@example.com"]}},
    ],
)
def test_approve_rejects_malformed_completed_capture(capture):
    order = OrderFactory(payment_intent_id="PAY-123")
    product = OrderItemFactory(order=order, product=ProductFactory(stock=5)).product

    result = approve_payment(order.id, "PAY-123", gateway=FakeGateway(capture=capture))

    assert result.success is False
    assert result.error == "payment_verification_failed"
    order.refresh_from_db()
    product.refresh_from_db()
    assert order.is_paid is False
    assert product.stock == 5


@pytest.mark.django_db
def test_approve_reports_database_fault_as_failure_result():
    order = OrderFactory(payment_intent_id="PAY-123")
    OrderItemFactory(order=order)

    with mock.patch("orders.services._settle_locked", side_effect=OperationalError("database is locked")):
        result = approve_payment(order.id, "PAY-123", gateway=FakeGateway(capture=completed_capture()))

    assert result.success is False
    assert result.error == "transaction_failed"
    order.refresh_from_db()
    assert order.is_paid is False
