"""Pytest configuration and fixtures for assetverse.

Environment is set before the app is imported so settings select the
in-memory store. HTTP tests run against assetverse.main:app over ASGI with
the store and payment gateway overridden per test (the lifespan does not
run under ASGITransport).
"""

import os

os.environ["DATABASE_BACKEND"] = "memory"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["SEED_PACKAGES_ON_STARTUP"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("STRIPE_SECRET_KEY", None)

import itertools  # noqa: E402
from collections.abc import Awaitable, Callable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from assetverse.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from assetverse.api.dependencies import (  # noqa: E402
    get_document_store,
    get_payment_gateway,
)
from assetverse.application.interfaces import CheckoutRequest, CheckoutSession  # noqa: E402
from assetverse.application.services import AccessPolicy  # noqa: E402
from assetverse.core.limiter import limiter  # noqa: E402
from assetverse.domain.exceptions import ResourceNotFoundException  # noqa: E402
from assetverse.infrastructure.memory import InMemoryDocumentStore  # noqa: E402
from assetverse.main import app  # noqa: E402

limiter.enabled = False


class FakePaymentGateway:
    """In-process stand-in for Stripe Checkout; sessions start unpaid."""

    def __init__(self) -> None:
        self.sessions: dict[str, CheckoutSession] = {}
        self.requests: list[CheckoutRequest] = []
        self._ids = itertools.count(1)

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        self.requests.append(request)
        session_id = f"cs_test_{next(self._ids)}"
        session = CheckoutSession(
            id=session_id,
            url=f"https://checkout.stripe.test/{session_id}",
            payment_status="unpaid",
            amount_total=request.amount_cents,
            currency=request.currency,
            metadata=dict(request.metadata),
        )
        self.sessions[session_id] = session
        return session

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        if session_id not in self.sessions:
            raise ResourceNotFoundException("checkout_session", session_id)
        return self.sessions[session_id]

    def mark_paid(self, session_id: str) -> None:
        s = self.sessions[session_id]
        self.sessions[session_id] = CheckoutSession(
            id=s.id,
            url=s.url,
            payment_status="paid",
            amount_total=s.amount_total,
            currency=s.currency,
            payment_intent=f"pi_{s.id}",
            metadata=s.metadata,
        )


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store per test."""
    return InMemoryDocumentStore()


@pytest.fixture
def gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def policy() -> AccessPolicy:
    return AccessPolicy()


@pytest.fixture
async def client(store: InMemoryDocumentStore, gateway: FakePaymentGateway) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with test store and gateway."""
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


Register = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def register(client: AsyncClient) -> Register:
    """Sign up an account via POST /users and return bearer headers from POST /jwt."""

    async def _register(
        email: str,
        role: str = "employee",
        name: str | None = None,
        company_name: str = "Acme Corp",
    ) -> dict[str, str]:
        body: dict[str, str] = {
            "email": email,
            "name": name or email.split("@")[0].title(),
            "role": role,
        }
        if role == "hr":
            body["companyName"] = company_name
        resp = await client.post("/users", json=body)
        assert resp.status_code == 201, resp.text
        token_resp = await client.post("/jwt", json={"email": email})
        assert token_resp.status_code == 200, token_resp.text
        return {"Authorization": f"Bearer {token_resp.json()['token']}"}

    return _register


@pytest.fixture
async def hr_headers(register: Register) -> dict[str, str]:
    return await register("hr@acme.com", role="hr", name="Hana Reyes")


@pytest.fixture
async def employee_headers(register: Register) -> dict[str, str]:
    return await register("emp@acme.com", name="Eli Moss")


@pytest.fixture
def create_asset(client: AsyncClient) -> Callable[..., Awaitable[dict]]:
    """POST /assets as the given HR and return the created asset JSON."""

    async def _create(
        headers: dict[str, str],
        name: str = "Laptop",
        quantity: int = 3,
        product_type: str = "Returnable",
    ) -> dict:
        resp = await client.post(
            "/assets",
            json={"productName": name, "productType": product_type, "productQuantity": quantity},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
