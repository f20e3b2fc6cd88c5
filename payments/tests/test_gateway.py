from decimal import Decimal
from unittest import mock

import pytest
import requests
from payments.gateway import PaymentGatewayError, PayPalGateway


def response(payload, status_code=200):
    resp = mock.Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code}")
    else:
        resp.raise_for_status.return_value = None
    return resp


def gateway(session) -> PayPalGateway:
    return PayPalGateway(base_url="https://paypal.test/", client_id="cid", app_secret="secret", session=session)


def test_create_order_authenticates_and_posts_amount():
    session = mock.Mock()
    session.post.side_effect = [response({"access_token": "tok"}), response({"id": "PAY-1"})]

    intent_id = gateway(session).create_order(Decimal("25"))

    assert intent_id == "PAY-1"
    token_call, create_call = session.post.call_args_list
    assert token_call.args[0] == "https://paypal.test/v1/oauth2/token"
    assert token_call.kwargs["auth"] == ("cid", "secret")
    assert create_call.args[0] == "https://paypal.test/v2/checkout/orders"
    assert create_call.kwargs["json"]["purchase_units"][0]["amount"]["value"] == "25.00"
    assert create_call.kwargs["headers"]["Authorization"] == "Bearer tok"


def test_create_order_retries_transport_errors():
    session = mock.Mock()
    session.post.side_effect = [
        response({"access_token": "tok"}),
        requests.ConnectionError("reset"),
        response({"access_token": "tok"}),
        response({"id": "PAY-2"}),
    ]

    assert gateway(session).create_order(Decimal("10.00")) == "PAY-2"
    assert session.post.call_count == 4


def test_create_order_without_id_is_gateway_error():
    session = mock.Mock()
    session.post.side_effect = [response({"access_token": "tok"}), response({})]

    with pytest.raises(PaymentGatewayError):
        gateway(session).create_order(Decimal("10.00"))


def test_capture_is_not_retried():
    session = mock.Mock()
    session.post.side_effect = [response({"access_token": "tok"}), requests.ConnectionError("reset")]

    with pytest.raises(requests.ConnectionError):
        gateway(session).capture_payment("PAY-1")
    assert session.post.call_count == 2


def test_capture_returns_payload_and_surfaces_http_errors():
    session = mock.Mock()
    session.post.side_effect = [
        response({"access_token": "tok"}),
        response({"id": "PAY-1", "status": "COMPLETED"}),
        response({"access_token": "tok"}),
        response({"name": "UNPROCESSABLE_ENTITY"}, status_code=422),
    ]
    gw = gateway(session)

    assert gw.capture_payment("PAY-1") == {"id": "PAY-1", "status": "COMPLETED"}
    assert session.post.call_args_list[1].args[0] == "https://paypal.test/v2/checkout/orders/PAY-1/capture"
    with pytest.raises(requests.HTTPError):
        gw.capture_payment("PAY-1")
