"""Ports: protocols the application layer depends on (store, payment gateway)."""

from assetverse.application.interfaces.services import (
    CheckoutRequest,
    CheckoutSession,
    IPaymentGateway,
)
from assetverse.application.interfaces.store import (
    DocumentWrite,
    IDocumentStore,
    StoredDocument,
    WriteKind,
)

__all__ = [
    "CheckoutRequest",
    "CheckoutSession",
    "DocumentWrite",
    "IDocumentStore",
    "IPaymentGateway",
    "StoredDocument",
    "WriteKind",
]
