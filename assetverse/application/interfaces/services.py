"""Service interfaces (ports) for external collaborators.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class CheckoutRequest:
    """What to charge for one package purchase."""

    amount_cents: int
    currency: str
    product_name: str
    success_url: str
    cancel_url: str
    customer_email: str
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckoutSession:
    """Processor-side checkout session (the subset the app reads)."""

    id: str
    url: str | None
    payment_status: str | None
    amount_total: int | None = None
    currency: str | None = None
    payment_intent: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


class IPaymentGateway(Protocol):
    """Protocol for the external payment processor."""

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        """Create a hosted checkout session and return it (with redirect url)."""

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """Fetch the current state of a checkout session."""
