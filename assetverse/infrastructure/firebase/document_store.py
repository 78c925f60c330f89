"""Firestore-backed document store (implements IDocumentStore).

Versions are Firestore ``updateTime`` values; conditional writes pass them back
as ``currentDocument.updateTime`` preconditions, so a concurrent write between
read and commit fails the whole commit.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from assetverse.application.interfaces.store import (
    DocumentWrite,
    StoredDocument,
    WriteKind,
)
from assetverse.domain.exceptions import WriteConflictException
from assetverse.infrastructure.firebase._rest_client import (
    DocumentSnapshot,
    FirestoreRESTClient,
    PreconditionFailedError,
)
from assetverse.shared.utils.generators import generate_cuid


def _stored(snapshot: DocumentSnapshot) -> StoredDocument:
    return StoredDocument(
        id=snapshot.id, data=snapshot.to_dict(), version=snapshot.update_time or ""
    )


def _sort_key(value: Any) -> tuple[int, Any]:
    return (0, 0) if value is None else (1, value)


class FirestoreDocumentStore:
    """Document store on the Firestore REST client."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def get(self, collection: str, doc_id: str) -> StoredDocument | None:
        snapshot = await self._client.collection(collection).document(doc_id).get()
        if snapshot is None:
            return None
        return _stored(snapshot)

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        """Equality query on the server; ordering and limit are applied here when ordered."""
        q = self._client.collection(collection).query()
        for field, value in (filters or {}).items():
            q = q.where(field, value)
        if order_by is None and limit:
            q = q.limit(limit)
        out = [_stored(s) async for s in q.stream()]
        if order_by is not None:
            out.sort(key=lambda d: _sort_key(d.data.get(order_by)), reverse=descending)
            if limit is not None:
                out = out[:limit]
        return out

    async def create(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> StoredDocument:
        doc_id = doc_id or generate_cuid()
        try:
            snapshot = await self._client.collection(collection).create(doc_id, data)
        except PreconditionFailedError:
            raise WriteConflictException(f"{collection}/{doc_id} already exists") from None
        return _stored(snapshot)

    def _to_rest_write(self, w: DocumentWrite) -> dict:
        name = self._client.document_name(w.collection, w.doc_id)
        if w.kind == WriteKind.CREATE:
            return FirestoreRESTClient.create_write(name, w.data)
        if w.kind == WriteKind.UPDATE:
            return FirestoreRESTClient.update_write(name, w.data, w.expected_version)
        return FirestoreRESTClient.delete_write(name, w.expected_version)

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        try:
            await self._client.commit([self._to_rest_write(w) for w in writes])
        except PreconditionFailedError:
            raise WriteConflictException() from None

    async def aclose(self) -> None:
        await self._client.aclose()
