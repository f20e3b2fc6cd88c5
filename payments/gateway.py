"""PayPal REST client.

Authenticates with OAuth client credentials and talks to the Orders v2 API.
Token and create-order calls are retried on transport errors; capture is
never retried because a repeated capture is not safe.
"""

import logging
from decimal import Decimal

import requests
from django.conf import settings
from requests import RequestException
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

logger = logging.getLogger("storefront.payments")

COMPLETED = "COMPLETED"


class PaymentGatewayError(Exception):
    """The gateway answered, but not with what we expected."""


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


class PayPalGateway:
    def __init__(
        self,
        base_url: str | None = None,
        client_id: str | None = None,
        app_secret: str | None = None,
        timeout: int | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or settings.PAYPAL_API_URL).rstrip("/")
        self.client_id = client_id if client_id is not None else settings.PAYPAL_CLIENT_ID
        self.app_secret = app_secret if app_secret is not None else settings.PAYPAL_APP_SECRET
        self.timeout = timeout or getattr(settings, "PAYPAL_TIMEOUT_SECONDS", 10)
        self.session = session or requests.Session()

    @http_retry()
    def access_token(self) -> str:
        url = f"{self.base_url}/v1/oauth2/token"
        resp = self.session.post(
            url,
            data={"grant_type": "client_credentials"},
            auth=(self.client_id, self.app_secret),
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        token = resp.json().get("access_token")
        if not token:
            raise PaymentGatewayError("PayPal token response has no access_token")
        return token

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.access_token()}",
            "Content-Type": "application/json",
        }

    @http_retry()
    def create_order(self, amount: Decimal) -> str:
        """Create a payment intent for `amount` and return its id."""

        url = f"{self.base_url}/v2/checkout/orders"
        payload = {
            "intent": "CAPTURE",
            "purchase_units": [{"amount": {"currency_code": "USD", "value": f"{Decimal(amount):.2f}"}}],
        }
        logger.info("PayPal POST %s", url, extra={"event": "payments.create_order", "amount": f"{amount:.2f}"})
        resp = self.session.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
        resp.raise_for_status()
        intent_id = resp.json().get("id")
        if not intent_id:
            raise PaymentGatewayError("PayPal create order response has no id")
        return str(intent_id)

    def capture_payment(self, intent_id: str) -> dict:
        """Capture an approved intent and return the raw capture payload."""

        url = f"{self.base_url}/v2/checkout/orders/{intent_id}/capture"
        logger.info("PayPal POST %s", url, extra={"event": "payments.capture", "intent_id": intent_id})
        resp = self.session.post(url, headers=self._headers(), timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise PaymentGatewayError("PayPal capture response is not an object")
        return data
