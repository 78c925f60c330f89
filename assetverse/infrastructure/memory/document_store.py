"""Process-local document store (implements IDocumentStore).

Used for local development (DATABASE_BACKEND=memory) and as the store in tests.
Same contract as FirestoreDocumentStore: versioned documents, equality queries,
and all-or-nothing commits guarded by preconditions.
"""

from __future__ import annotations

import asyncio
import copy
import itertools
from collections.abc import Sequence
from typing import Any

from assetverse.application.interfaces.store import (
    DocumentWrite,
    StoredDocument,
    WriteKind,
)
from assetverse.domain.exceptions import WriteConflictException
from assetverse.shared.utils.generators import generate_cuid

_Key = tuple[str, str]
_Entry = tuple[dict[str, Any], str]


def _sort_key(value: Any) -> tuple[int, Any]:
    # None sorts first; mixed types are not expected within one field.
    return (0, 0) if value is None else (1, value)


class InMemoryDocumentStore:
    """Dict-backed document store; an asyncio lock serializes writes."""

    def __init__(self) -> None:
        self._docs: dict[_Key, _Entry] = {}
        self._versions = itertools.count(1)
        self._lock = asyncio.Lock()

    def _next_version(self) -> str:
        return str(next(self._versions))

    def _snapshot(self, key: _Key, entry: _Entry) -> StoredDocument:
        data, version = entry
        return StoredDocument(id=key[1], data=copy.deepcopy(data), version=version)

    async def get(self, collection: str, doc_id: str) -> StoredDocument | None:
        entry = self._docs.get((collection, doc_id))
        if entry is None:
            return None
        return self._snapshot((collection, doc_id), entry)

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        filters = filters or {}
        out = [
            self._snapshot(key, entry)
            for key, entry in self._docs.items()
            if key[0] == collection
            and all(entry[0].get(f) == v for f, v in filters.items())
        ]
        if order_by is not None:
            out.sort(key=lambda d: _sort_key(d.data.get(order_by)), reverse=descending)
        if limit is not None:
            out = out[:limit]
        return out

    async def create(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> StoredDocument:
        doc_id = doc_id or generate_cuid()
        async with self._lock:
            key = (collection, doc_id)
            if key in self._docs:
                raise WriteConflictException(f"{collection}/{doc_id} already exists")
            entry = (copy.deepcopy(data), self._next_version())
            self._docs[key] = entry
            return self._snapshot(key, entry)

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        """Stage every write against a private view, then publish all at once."""
        async with self._lock:
            staged: dict[_Key, _Entry | None] = {}

            def current(key: _Key) -> _Entry | None:
                if key in staged:
                    return staged[key]
                return self._docs.get(key)

            for w in writes:
                key = (w.collection, w.doc_id)
                existing = current(key)
                if w.kind == WriteKind.CREATE:
                    if existing is not None:
                        raise WriteConflictException(
                            f"{w.collection}/{w.doc_id} already exists"
                        )
                    staged[key] = (copy.deepcopy(w.data), self._next_version())
                elif w.kind == WriteKind.UPDATE:
                    if existing is None:
                        raise WriteConflictException(
                            f"{w.collection}/{w.doc_id} does not exist"
                        )
                    if w.expected_version is not None and existing[1] != w.expected_version:
                        raise WriteConflictException()
                    merged = {**existing[0], **copy.deepcopy(w.data)}
                    staged[key] = (merged, self._next_version())
                elif w.kind == WriteKind.DELETE:
                    if w.expected_version is not None and (
                        existing is None or existing[1] != w.expected_version
                    ):
                        raise WriteConflictException()
                    staged[key] = None

            for key, entry in staged.items():
                if entry is None:
                    self._docs.pop(key, None)
                else:
                    self._docs[key] = entry

    async def aclose(self) -> None:
        return None
