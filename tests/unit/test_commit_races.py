"""Workflows that lose a commit race re-read and retry, or fail with nothing applied."""

from collections.abc import Awaitable, Callable, Sequence

import pytest

from assetverse.application.dtos import CreateAssetCommand, CreateUserCommand
from assetverse.application.interfaces.store import DocumentWrite
from assetverse.application.services import AccessPolicy
from assetverse.application.use_cases import (
    AffiliationService,
    AssetRequestService,
    AssetService,
    AssignmentService,
    UserService,
)
from assetverse.application.use_cases.users import user_doc_id
from assetverse.core.constants import (
    COLLECTION_AFFILIATIONS,
    COLLECTION_ASSETS,
    COLLECTION_ASSIGNMENTS,
    COLLECTION_USERS,
)
from assetverse.domain.entities import UserEntity
from assetverse.domain.enums import ProductType, UserRole
from assetverse.domain.exceptions import WriteConflictException
from assetverse.infrastructure.memory import InMemoryDocumentStore

RivalWrites = Callable[[], Awaitable[list[DocumentWrite]]]


class RacingStore(InMemoryDocumentStore):
    """Commits a rival change just before each of the next ``races`` commits."""

    def __init__(self) -> None:
        super().__init__()
        self.races = 0
        self.rival: RivalWrites | None = None
        self.commits = 0

    def race(self, rival: RivalWrites, times: int = 1) -> None:
        self.rival = rival
        self.races = times

    async def commit(self, writes: Sequence[DocumentWrite]) -> None:
        if self.races and self.rival is not None:
            self.races -= 1
            await super().commit(await self.rival())
        self.commits += 1
        await super().commit(writes)


@pytest.fixture
def store() -> RacingStore:
    return RacingStore()


@pytest.fixture
async def hr(store: RacingStore) -> UserEntity:
    users = UserService(store, AccessPolicy(), base_package_limit=5)
    return await users.create_user(
        CreateUserCommand(
            email="hr@acme.com", name="Hana", role=UserRole.HR, company_name="Acme Corp"
        )
    )


@pytest.fixture
async def employee(store: RacingStore) -> UserEntity:
    users = UserService(store, AccessPolicy(), base_package_limit=5)
    return await users.create_user(
        CreateUserCommand(email="emp@acme.com", name="Eli", role=UserRole.EMPLOYEE)
    )


async def _asset(store: RacingStore, hr: UserEntity, quantity: int = 5) -> str:
    asset = await AssetService(store, AccessPolicy()).create_asset(
        hr, CreateAssetCommand("Laptop", ProductType.RETURNABLE, quantity)
    )
    return asset.id


async def _approve(store: RacingStore, hr: UserEntity, employee: UserEntity, asset_id: str):
    requests = AssetRequestService(store, AccessPolicy())
    request = await requests.create_request(employee, asset_id)
    return await requests.approve_request(hr, request.id)


def _take_unit(store: RacingStore, asset_id: str) -> RivalWrites:
    async def writes() -> list[DocumentWrite]:
        doc = await store.get(COLLECTION_ASSETS, asset_id)
        return [
            DocumentWrite.update(
                COLLECTION_ASSETS,
                asset_id,
                {"availableQuantity": doc.data["availableQuantity"] - 1},
            )
        ]

    return writes


def _count_employee(store: RacingStore) -> RivalWrites:
    async def writes() -> list[DocumentWrite]:
        doc = await store.get(COLLECTION_USERS, user_doc_id("hr@acme.com"))
        return [
            DocumentWrite.update(
                COLLECTION_USERS,
                doc.id,
                {"currentEmployees": doc.data["currentEmployees"] + 1},
            )
        ]

    return writes


async def _available(store: RacingStore, asset_id: str) -> int:
    return (await store.get(COLLECTION_ASSETS, asset_id)).data["availableQuantity"]


async def _employees(store: RacingStore) -> int:
    doc = await store.get(COLLECTION_USERS, user_doc_id("hr@acme.com"))
    return doc.data["currentEmployees"]


async def test_approve_retries_on_stock_change(store, hr, employee) -> None:
    asset_id = await _asset(store, hr)
    requests = AssetRequestService(store, AccessPolicy())
    request = await requests.create_request(employee, asset_id)
    store.commits = 0
    store.race(_take_unit(store, asset_id))

    approved = await requests.approve_request(hr, request.id)

    assert approved.status.value == "approved"
    assert store.commits == 2
    assert await _available(store, asset_id) == 3
    assert await _employees(store) == 1


async def test_approve_retries_on_employee_counter_change(store, hr, employee) -> None:
    asset_id = await _asset(store, hr)
    requests = AssetRequestService(store, AccessPolicy())
    request = await requests.create_request(employee, asset_id)
    store.race(_count_employee(store))

    await requests.approve_request(hr, request.id)

    assert await _employees(store) == 2


async def test_approve_gives_up_with_nothing_applied(store, hr, employee) -> None:
    asset_id = await _asset(store, hr)
    requests = AssetRequestService(store, AccessPolicy(), max_attempts=3)
    request = await requests.create_request(employee, asset_id)
    store.race(_take_unit(store, asset_id), times=3)

    with pytest.raises(WriteConflictException):
        await requests.approve_request(hr, request.id)

    assert (await requests.list_requests(employee))[0].status.value == "pending"
    assert await _available(store, asset_id) == 2
    assert await _employees(store) == 0
    assert await store.query(COLLECTION_ASSIGNMENTS) == []
    assert await store.query(COLLECTION_AFFILIATIONS) == []


async def test_direct_assign_retries_on_stock_change(store, hr, employee) -> None:
    first = await _asset(store, hr)
    await _approve(store, hr, employee, first)
    second = await _asset(store, hr, quantity=3)
    store.race(_take_unit(store, second))

    assignment = await AssignmentService(store, AccessPolicy()).assign_directly(
        hr, second, "emp@acme.com"
    )

    assert assignment.asset_id == second
    assert await _available(store, second) == 1


async def test_return_retries_without_losing_a_concurrent_take(store, hr, employee) -> None:
    asset_id = await _asset(store, hr, quantity=3)
    await _approve(store, hr, employee, asset_id)
    assignments = AssignmentService(store, AccessPolicy())
    held = await assignments.list_my_assignments(employee)
    store.race(_take_unit(store, asset_id))

    await assignments.return_assignment(employee, held[0].id)

    assert await _available(store, asset_id) == 2


async def test_return_gives_up_with_nothing_applied(store, hr, employee) -> None:
    asset_id = await _asset(store, hr)
    await _approve(store, hr, employee, asset_id)
    assignments = AssignmentService(store, AccessPolicy(), max_attempts=2)
    held = await assignments.list_my_assignments(employee)
    store.race(_take_unit(store, asset_id), times=2)

    with pytest.raises(WriteConflictException):
        await assignments.return_assignment(employee, held[0].id)

    assert (await assignments.list_my_assignments(employee))[0].status.value == "assigned"
    assert await _available(store, asset_id) == 2


async def test_remove_employee_retries_on_counter_change(store, hr, employee) -> None:
    asset_id = await _asset(store, hr)
    await _approve(store, hr, employee, asset_id)
    store.race(_count_employee(store))

    affiliation = await AffiliationService(store, AccessPolicy()).remove_employee(
        hr, "emp@acme.com"
    )

    assert affiliation.status.value == "inactive"
    assert await _employees(store) == 1
    assert await _available(store, asset_id) == 5
