"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.

Besides single-document reads and creates it exposes ``commit`` (atomic batch
of writes with per-write preconditions), which the document store uses for
compare-and-swap updates across several documents.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from assetverse.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_fields,
    encode_document,
    encode_fields,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"

# Error statuses Firestore uses when a write precondition does not hold.
_PRECONDITION_STATUSES = frozenset({"FAILED_PRECONDITION", "ALREADY_EXISTS", "ABORTED"})


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class PreconditionFailedError(Exception):
    """Raised when a write precondition fails (document changed, exists, or is missing)."""


class DocumentExistsError(PreconditionFailedError):
    """Raised when createDocument returns 409 (document ID already exists)."""


def _error_status(resp: httpx.Response) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, list):
        body = body[0] if body else {}
    return (body.get("error") or {}).get("status")


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    *,
    missing_is_conflict: bool = False,
) -> dict | list | None:
    """Perform async HTTP request to Firestore REST API.

    404 returns None unless missing_is_conflict is set (conditional writes),
    in which case it raises PreconditionFailedError like other precondition errors.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404:
        if missing_is_conflict:
            raise PreconditionFailedError("Document does not exist")
        return None
    if resp.status_code == 409:
        if _error_status(resp) == "ALREADY_EXISTS":
            raise DocumentExistsError("Document already exists")
        raise PreconditionFailedError("Write conflict")
    if resp.status_code == 400 and _error_status(resp) in _PRECONDITION_STATUSES:
        raise PreconditionFailedError("Write precondition failed")
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentSnapshot:
    """Snapshot of a document (id + data + server update time)."""

    def __init__(self, id_: str, data: dict, update_time: str | None = None):
        self.id = id_
        self._data = data
        self.update_time = update_time

    def to_dict(self) -> dict:
        return self._data


def _snapshot_from_rest(doc: dict) -> DocumentSnapshot:
    name = doc.get("name", "")
    doc_id = name.split("/")[-1] if name else ""
    return DocumentSnapshot(doc_id, decode_fields(doc.get("fields")), doc.get("updateTime"))


def _precondition(expected_update_time: str | None, must_exist: bool) -> dict | None:
    if expected_update_time is not None:
        return {"updateTime": expected_update_time}
    if must_exist:
        return {"exists": True}
    return None


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        url = f"{_BASE}/{self._path}"
        out = await _request_async(
            self._client._http, url, access_token=await self._client.get_token()
        )
        if not out:
            return None
        return _snapshot_from_rest(out)


class _Query:
    """Equality query on one collection, run through runQuery."""

    def __init__(self, client: "FirestoreRESTClient", parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[tuple[str, Any]] = []
        self._limit: int | None = None

    def where(self, field: str, value: Any) -> "_Query":
        self._filters.append((field, value))
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def _where_clause(self) -> dict | None:
        field_filters = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": "EQUAL",
                    "value": _encode_value(value),
                }
            }
            for field, value in self._filters
        ]
        if not field_filters:
            return None
        if len(field_filters) == 1:
            return field_filters[0]
        return {"compositeFilter": {"op": "AND", "filters": field_filters}}

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        where = self._where_clause()
        if where is not None:
            structured["where"] = where
        if self._limit:
            structured["limit"] = self._limit

        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": structured},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            yield _snapshot_from_rest(item["document"])


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def create(self, document_id: str, data: dict[str, Any]) -> DocumentSnapshot:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        doc = encode_document(data)
        url = f"{_BASE}/{self._path}?documentId={quote(document_id, safe='')}"
        out = await _request_async(
            self._client._http,
            url,
            method="POST",
            body=doc,
            access_token=await self._client.get_token(),
        )
        return _snapshot_from_rest(out or {})

    def query(self) -> _Query:
        """Start a query. Chain .where(), .limit(), then .stream()."""
        parent = self._path.rsplit("/", 1)[0]
        collection_id = self._path.split("/")[-1]
        return _Query(self._client, parent, collection_id)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def document_name(self, collection_id: str, document_id: str) -> str:
        return f"{self._prefix}/{collection_id}/{document_id}"

    @staticmethod
    def create_write(name: str, data: dict[str, Any]) -> dict:
        """Write entry for commit: create, failing if the document exists."""
        return {
            "update": {"name": name, "fields": encode_fields(data)},
            "currentDocument": {"exists": False},
        }

    @staticmethod
    def update_write(
        name: str, data: dict[str, Any], expected_update_time: str | None = None
    ) -> dict:
        """Write entry for commit: merge fields into an existing document."""
        write: dict[str, Any] = {
            "update": {"name": name, "fields": encode_fields(data)},
            "updateMask": {"fieldPaths": list(data)},
        }
        write["currentDocument"] = _precondition(expected_update_time, must_exist=True)
        return write

    @staticmethod
    def delete_write(name: str, expected_update_time: str | None = None) -> dict:
        """Write entry for commit: delete (conditional on update time when given)."""
        write: dict[str, Any] = {"delete": name}
        precondition = _precondition(expected_update_time, must_exist=False)
        if precondition is not None:
            write["currentDocument"] = precondition
        return write

    async def commit(self, writes: list[dict]) -> None:
        """Apply writes atomically (documents:commit). Any failed precondition rejects all."""
        if not writes:
            return
        url = f"{_BASE}/{self._prefix}:commit"
        await _request_async(
            self._http,
            url,
            method="POST",
            body={"writes": writes},
            access_token=await self.get_token(),
            missing_is_conflict=True,
        )
