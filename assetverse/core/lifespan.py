"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: the document store, the shared
HTTP client used by the payment gateway, and the package catalog seed.
No business logic here.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from assetverse.application.interfaces.store import IDocumentStore
from assetverse.core.config import Settings, get_settings
from assetverse.shared.logging import get_logger

logger = get_logger(__name__)


def build_document_store(settings: Settings) -> IDocumentStore:
    """Return the store selected by settings.database_backend."""
    if settings.database_backend == "memory":
        from assetverse.infrastructure.memory import InMemoryDocumentStore

        logger.warning("Using in-memory document store; data is lost on restart")
        return InMemoryDocumentStore()

    from assetverse.infrastructure.firebase import (
        FirestoreDocumentStore,
        create_firestore_client,
    )

    return FirestoreDocumentStore(create_firestore_client(settings))


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: document store, payment HTTP client and gateway, package
    seed. Shutdown closes the payment HTTP client, then the store.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.document_store = build_document_store(settings)

    from assetverse.infrastructure.payments import StripePaymentGateway

    app.state.payment_http_client = httpx.AsyncClient(
        timeout=settings.stripe_timeout_seconds
    )
    app.state.payment_gateway = StripePaymentGateway(
        settings.stripe_secret_key.get_secret_value() if settings.stripe_configured else None,
        api_base=settings.stripe_api_base,
        timeout=settings.stripe_timeout_seconds,
        http_client=app.state.payment_http_client,
    )
    if not settings.stripe_configured:
        logger.warning("STRIPE_SECRET_KEY not set; checkout endpoints will return 503")

    if settings.seed_packages_on_startup:
        from assetverse.application.use_cases.packages import PackageService

        await PackageService(app.state.document_store).seed_default_packages()

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "payment_http_client", None) is not None:
        await app.state.payment_http_client.aclose()
        app.state.payment_http_client = None
        logger.info("Payment HTTP client closed")

    if getattr(app.state, "document_store", None) is not None:
        await app.state.document_store.aclose()
        app.state.document_store = None
        logger.info("Document store closed")
