"""Firestore integration over the REST API (google-auth + httpx)."""

from assetverse.infrastructure.firebase.client import create_firestore_client
from assetverse.infrastructure.firebase.document_store import FirestoreDocumentStore

__all__ = [
    "FirestoreDocumentStore",
    "create_firestore_client",
]
