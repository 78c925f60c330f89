"""StripePaymentGateway against a mocked Stripe API (httpx.MockTransport)."""

from urllib.parse import parse_qs

import httpx
import pytest

from assetverse.application.interfaces import CheckoutRequest
from assetverse.domain.exceptions import (
    PaymentProviderException,
    PaymentProviderUnavailableException,
    ResourceNotFoundException,
)
from assetverse.infrastructure.payments import StripePaymentGateway

CHECKOUT = CheckoutRequest(
    amount_cents=800,
    currency="usd",
    product_name="Standard Package",
    success_url="http://app.test/payment-success?session_id={CHECKOUT_SESSION_ID}",
    cancel_url="http://app.test/upgrade-package",
    customer_email="hr@acme.com",
    metadata={"hrEmail": "hr@acme.com", "employeeLimit": "10"},
)


def _gateway(handler, key: str | None = "sk_test_123") -> StripePaymentGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StripePaymentGateway(key, http_client=client)


async def test_create_checkout_session_sends_form() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "id": "cs_1",
                "url": "https://checkout.stripe.com/c/cs_1",
                "payment_status": "unpaid",
                "amount_total": 800,
                "currency": "usd",
                "metadata": {"hrEmail": "hr@acme.com", "employeeLimit": "10"},
            },
        )

    session = await _gateway(handler).create_checkout_session(CHECKOUT)

    assert session.id == "cs_1"
    assert session.metadata["employeeLimit"] == "10"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/checkout/sessions"
    assert request.headers["Authorization"] == "Bearer sk_test_123"
    form = parse_qs(request.content.decode())
    assert form["line_items[0][price_data][unit_amount]"] == ["800"]
    assert form["metadata[hrEmail]"] == ["hr@acme.com"]
    assert form["mode"] == ["payment"]


async def test_retrieve_reads_expanded_payment_intent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/checkout/sessions/cs_1"
        return httpx.Response(
            200,
            json={
                "id": "cs_1",
                "url": None,
                "payment_status": "paid",
                "payment_intent": {"id": "pi_9"},
                "metadata": {"employeeLimit": 10},
            },
        )

    session = await _gateway(handler).retrieve_checkout_session("cs_1")
    assert session.payment_status == "paid"
    assert session.payment_intent == "pi_9"
    assert session.metadata == {"employeeLimit": "10"}


async def test_error_response_raises_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "No such checkout.session"}})

    with pytest.raises(PaymentProviderException) as exc_info:
        await _gateway(handler).retrieve_checkout_session("cs_bad")
    assert exc_info.value.details == {"reason": "No such checkout.session"}


async def test_transport_error_raises_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(PaymentProviderException):
        await _gateway(handler).create_checkout_session(CHECKOUT)


async def test_missing_key_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(PaymentProviderUnavailableException):
        await _gateway(handler, key=None).create_checkout_session(CHECKOUT)


async def test_malformed_session_id_is_not_found() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ResourceNotFoundException):
        await _gateway(handler).retrieve_checkout_session("../customers")
