"""Stripe Checkout gateway over the Stripe REST API (implements IPaymentGateway).

Stripe takes form-encoded bodies with bracketed keys for nested objects
(``line_items[0][price_data][currency]``). Calls use httpx so they do not
block the event loop; the shared client is owned by the app lifespan.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx

from assetverse.application.interfaces.services import CheckoutRequest, CheckoutSession
from assetverse.domain.exceptions import (
    PaymentProviderException,
    PaymentProviderUnavailableException,
    ResourceNotFoundException,
)
from assetverse.shared.logging import get_logger

logger = get_logger(__name__)


def _checkout_form(request: CheckoutRequest) -> dict[str, Any]:
    form: dict[str, Any] = {
        "mode": "payment",
        "payment_method_types[0]": "card",
        "customer_email": request.customer_email,
        "success_url": request.success_url,
        "cancel_url": request.cancel_url,
        "line_items[0][quantity]": "1",
        "line_items[0][price_data][currency]": request.currency,
        "line_items[0][price_data][unit_amount]": str(request.amount_cents),
        "line_items[0][price_data][product_data][name]": request.product_name,
    }
    for key, value in request.metadata.items():
        form[f"metadata[{key}]"] = value
    return form


def _session_from_json(body: dict[str, Any]) -> CheckoutSession:
    intent = body.get("payment_intent")
    if isinstance(intent, dict):
        intent = intent.get("id")
    return CheckoutSession(
        id=body["id"],
        url=body.get("url"),
        payment_status=body.get("payment_status"),
        amount_total=body.get("amount_total"),
        currency=body.get("currency"),
        payment_intent=intent,
        metadata={k: str(v) for k, v in (body.get("metadata") or {}).items()},
    )


def _stripe_error_message(resp: httpx.Response) -> str:
    try:
        return (resp.json().get("error") or {}).get("message") or resp.text
    except ValueError:
        return resp.text


class StripePaymentGateway:
    """Creates and retrieves Stripe Checkout sessions."""

    def __init__(
        self,
        secret_key: str | None,
        *,
        api_base: str = "https://api.stripe.com/v1",
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._shared_http = http_client

    @asynccontextmanager
    async def _http_cm(self):
        """Yield shared HTTP client or a short-lived one."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    def _headers(self) -> dict[str, str]:
        if not self._secret_key:
            raise PaymentProviderUnavailableException()
        return {"Authorization": f"Bearer {self._secret_key}"}

    async def _send(self, method: str, path: str, data: dict[str, Any] | None = None) -> dict:
        headers = self._headers()
        url = f"{self._api_base}{path}"
        try:
            async with self._http_cm() as client:
                resp = await client.request(
                    method, url, headers=headers, data=data, timeout=self._timeout
                )
        except httpx.HTTPError as e:
            logger.error("Stripe request failed: %s %s: %s", method, path, e)
            raise PaymentProviderException(
                "Payment processor request failed", reason=str(e)
            ) from e
        if resp.status_code >= 400:
            message = _stripe_error_message(resp)
            logger.error("Stripe returned %s for %s %s: %s", resp.status_code, method, path, message)
            raise PaymentProviderException("Payment processor rejected the request", reason=message)
        return resp.json()

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        body = await self._send("POST", "/checkout/sessions", _checkout_form(request))
        session = _session_from_json(body)
        logger.info("Created checkout session %s for %s", session.id, request.customer_email)
        return session

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        if not session_id or "/" in session_id:
            raise ResourceNotFoundException("checkout_session", session_id)
        body = await self._send("GET", f"/checkout/sessions/{session_id}")
        return _session_from_json(body)
