"""InMemoryDocumentStore: versions, queries and all-or-nothing commits."""

import pytest

from assetverse.application.interfaces.store import DocumentWrite
from assetverse.domain.exceptions import WriteConflictException
from assetverse.infrastructure.memory import InMemoryDocumentStore


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


async def test_create_get_and_version_bump(store: InMemoryDocumentStore) -> None:
    created = await store.create("assets", {"name": "Laptop", "qty": 2}, doc_id="a1")
    assert created.id == "a1"
    await store.commit([DocumentWrite.update("assets", "a1", {"qty": 1}, created.version)])
    updated = await store.get("assets", "a1")
    assert updated.data == {"name": "Laptop", "qty": 1}
    assert updated.version != created.version
    assert await store.get("assets", "missing") is None


async def test_create_generates_id(store: InMemoryDocumentStore) -> None:
    created = await store.create("assets", {"name": "Laptop"})
    assert created.id
    assert (await store.get("assets", created.id)).data == {"name": "Laptop"}


async def test_create_existing_conflicts(store: InMemoryDocumentStore) -> None:
    await store.create("users", {"email": "a@mail.com"}, doc_id="u1")
    with pytest.raises(WriteConflictException):
        await store.create("users", {"email": "a@mail.com"}, doc_id="u1")


async def test_stale_version_conflicts(store: InMemoryDocumentStore) -> None:
    first = await store.create("assets", {"qty": 2}, doc_id="a1")
    await store.commit([DocumentWrite.update("assets", "a1", {"qty": 1}, first.version)])
    with pytest.raises(WriteConflictException):
        await store.commit([DocumentWrite.update("assets", "a1", {"qty": 0}, first.version)])
    assert (await store.get("assets", "a1")).data["qty"] == 1


async def test_failed_commit_applies_nothing(store: InMemoryDocumentStore) -> None:
    asset = await store.create("assets", {"qty": 2}, doc_id="a1")
    await store.create("requests", {"status": "pending"}, doc_id="r1")

    with pytest.raises(WriteConflictException):
        await store.commit(
            [
                DocumentWrite.update("assets", "a1", {"qty": 1}, asset.version),
                DocumentWrite.create("assignments", "s1", {"assetId": "a1"}),
                DocumentWrite.create("requests", "r1", {"status": "approved"}),
            ]
        )

    after = await store.get("assets", "a1")
    assert after.data["qty"] == 2
    assert after.version == asset.version
    assert await store.get("assignments", "s1") is None


async def test_commit_create_then_delete_in_one_batch(store: InMemoryDocumentStore) -> None:
    await store.commit(
        [
            DocumentWrite.create("guards", "g1", {"k": 1}),
            DocumentWrite.delete("guards", "g1"),
        ]
    )
    assert await store.get("guards", "g1") is None


async def test_query_filters_orders_and_limits(store: InMemoryDocumentStore) -> None:
    await store.create("requests", {"hr": "a", "date": 3}, doc_id="r3")
    await store.create("requests", {"hr": "a", "date": 1}, doc_id="r1")
    await store.create("requests", {"hr": "b", "date": 2}, doc_id="r2")
    await store.create("requests", {"hr": "a", "date": None}, doc_id="r0")

    docs = await store.query("requests", {"hr": "a"}, order_by="date", descending=True)
    assert [d.id for d in docs] == ["r3", "r1", "r0"]
    docs = await store.query("requests", {"hr": "a"}, order_by="date", limit=2)
    assert [d.id for d in docs] == ["r0", "r1"]


async def test_returned_documents_are_copies(store: InMemoryDocumentStore) -> None:
    await store.create("packages", {"features": ["a"]}, doc_id="p1")
    doc = await store.get("packages", "p1")
    doc.data["features"].append("b")
    assert (await store.get("packages", "p1")).data["features"] == ["a"]


async def test_update_of_missing_document_conflicts(store: InMemoryDocumentStore) -> None:
    with pytest.raises(WriteConflictException):
        await store.commit([DocumentWrite.update("assets", "ghost", {"qty": 1})])


async def test_conditional_delete_with_stale_version_conflicts(
    store: InMemoryDocumentStore,
) -> None:
    first = await store.create("assets", {"qty": 2}, doc_id="a1")
    await store.commit([DocumentWrite.update("assets", "a1", {"qty": 1}, first.version)])
    with pytest.raises(WriteConflictException):
        await store.commit([DocumentWrite.delete("assets", "a1", first.version)])
    assert await store.get("assets", "a1") is not None
