"""In-memory implementations of application ports."""

from assetverse.infrastructure.memory.document_store import InMemoryDocumentStore

__all__ = ["InMemoryDocumentStore"]
