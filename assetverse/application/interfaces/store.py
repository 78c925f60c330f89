"""Document store port for the application layer.

Use cases receive an IDocumentStore explicitly (no global collection handles)
so Firestore and the in-memory store are interchangeable, including in tests.

Every document carries an opaque ``version`` that changes on each write.
Multi-document changes go through ``commit``: all writes apply or none do,
and a write whose precondition fails (version changed, document exists or
is missing) makes the whole commit raise WriteConflictException.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


@dataclass(frozen=True)
class StoredDocument:
    """A document as read from the store (id, field data and version token)."""

    id: str
    data: dict[str, Any]
    version: str


class WriteKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class DocumentWrite:
    """One write inside an atomic commit.

    CREATE requires the document to be absent. UPDATE merges ``data`` into an
    existing document and, when ``expected_version`` is set, requires that
    version. DELETE is unconditional unless ``expected_version`` is set.
    """

    kind: WriteKind
    collection: str
    doc_id: str
    data: dict[str, Any] = field(default_factory=dict)
    expected_version: str | None = None

    @classmethod
    def create(cls, collection: str, doc_id: str, data: dict[str, Any]) -> DocumentWrite:
        return cls(WriteKind.CREATE, collection, doc_id, data)

    @classmethod
    def update(
        cls,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        expected_version: str | None = None,
    ) -> DocumentWrite:
        return cls(WriteKind.UPDATE, collection, doc_id, data, expected_version)

    @classmethod
    def delete(
        cls, collection: str, doc_id: str, expected_version: str | None = None
    ) -> DocumentWrite:
        return cls(WriteKind.DELETE, collection, doc_id, {}, expected_version)


class IDocumentStore(Protocol):
    """Protocol for the shared document store (DIP)."""

    async def get(self, collection: str, doc_id: str) -> StoredDocument | None:
        """Return the document or None if it does not exist."""

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        """Return documents whose fields equal every value in ``filters``."""

    async def create(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> StoredDocument:
        """Create a document (generated ID when doc_id is None). Raises WriteConflictException if it exists."""

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        """Apply all writes atomically or raise WriteConflictException and apply none."""

    async def aclose(self) -> None:
        """Release connections held by the store."""
