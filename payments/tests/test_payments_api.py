from unittest import mock

import pytest
from cart.tests.factories import UserFactory
from orders.tests.factories import OrderFactory, OrderItemFactory
from rest_framework.test import APIClient


def client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.mark.django_db
def test_create_and_approve_paypal_payment():
    order = OrderFactory()
    OrderItemFactory(order=order)
    client = client_for(order.user)
    fake = mock.Mock()
    fake.create_order.return_value = "PAY-9"
    fake.capture_payment.return_value = {
        "id": "PAY-9",
        "status": "COMPLETED",
        "payer": {"email_address": "buyer@example.com"},
        "purchase_units": [{"payments": {"captures": [{"amount": {"value": "48.00"}}]}}],
    }

    with mock.patch("payments.services.PayPalGateway", return_value=fake):
        created = client.post(f"/api/v1/payments/orders/{order.id}/paypal/")
        assert created.status_code == 200
        assert created.json()["data"] == "PAY-9"

        approved = client.post(
            f"/api/v1/payments/orders/{order.id}/paypal/approve/", {"orderID": "PAY-9"}, format="json"
        )

    assert approved.status_code == 200
    assert approved.json()["success"] is True
    order.refresh_from_db()
    assert order.is_paid is True
    fake.capture_payment.assert_called_once_with("PAY-9")


@pytest.mark.django_db
def test_paypal_endpoints_hide_other_users_orders():
    order = OrderFactory()
    client = client_for(UserFactory())
    assert client.post(f"/api/v1/payments/orders/{order.id}/paypal/").status_code == 404
    resp = client.post(f"/api/v1/payments/orders/{order.id}/paypal/approve/", {"orderID": "x"}, format="json")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_approve_requires_order_id_in_body():
    order = OrderFactory()
    resp = client_for(order.user).post(f"/api/v1/payments/orders/{order.id}/paypal/approve/", {}, format="json")
    assert resp.status_code == 400
