"""Assignment operations: return, direct assignment, listings."""

from __future__ import annotations

from assetverse.application.interfaces.store import DocumentWrite, IDocumentStore
from assetverse.application.mappers import (
    affiliation_from_doc,
    asset_from_doc,
    asset_to_data,
    assignment_from_doc,
    assignment_to_data,
)
from assetverse.application.services.access_policy import AccessPolicy
from assetverse.application.services.conflict_retry import retry_on_conflict
from assetverse.application.services.listing import matches_search, paginate
from assetverse.application.use_cases.asset_requests import affiliation_doc_id
from assetverse.application.use_cases.users import normalize_email
from assetverse.core.constants import (
    COLLECTION_AFFILIATIONS,
    COLLECTION_ASSETS,
    COLLECTION_ASSIGNMENTS,
    DEFAULT_PAGE_LIMIT,
)
from assetverse.domain.entities import AssignmentEntity, UserEntity
from assetverse.domain.enums import AssignmentStatus, ProductType
from assetverse.domain.exceptions import (
    AlreadyAssignedException,
    NotAffiliatedException,
    ResourceNotFoundException,
)
from assetverse.shared.logging import get_logger
from assetverse.shared.utils.datetime import utc_now
from assetverse.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


class AssignmentService:
    """Units held by employees: handing them out directly and taking them back."""

    def __init__(
        self, store: IDocumentStore, policy: AccessPolicy, *, max_attempts: int = 3
    ) -> None:
        self.store = store
        self.policy = policy
        self.max_attempts = max_attempts

    async def return_assignment(
        self, actor: UserEntity, assignment_id: str
    ) -> AssignmentEntity:
        """Return a held unit to stock.

        Ownership is checked before state, so a non-assignee always gets 403.

        Raises:
            ResourceNotFoundException: Unknown assignment.
            AuthorizationException: Caller is not the assignee.
            InvalidStateException: Assignment already returned.
        """

        async def attempt() -> AssignmentEntity:
            doc = await self.store.get(COLLECTION_ASSIGNMENTS, assignment_id)
            if doc is None:
                raise ResourceNotFoundException("assignment", assignment_id)
            assignment = assignment_from_doc(doc)
            self.policy.enforce(self.policy.can_return_assignment(actor, assignment))
            now = utc_now()
            assignment.mark_returned(now)
            writes = [
                DocumentWrite.update(
                    COLLECTION_ASSIGNMENTS,
                    assignment.id,
                    assignment_to_data(assignment),
                    doc.version,
                )
            ]
            asset_doc = await self.store.get(COLLECTION_ASSETS, assignment.asset_id)
            if asset_doc is not None:
                asset = asset_from_doc(asset_doc)
                asset.release_unit()
                asset.updated_at = now
                writes.append(
                    DocumentWrite.update(
                        COLLECTION_ASSETS, asset.id, asset_to_data(asset), asset_doc.version
                    )
                )
            await self.store.commit(writes)
            return assignment

        assignment = await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="return_assignment"
        )
        logger.info("Assignment %s returned by %s", assignment_id, actor.email)
        return assignment

    async def assign_directly(
        self, actor: UserEntity, asset_id: str, employee_email: str
    ) -> AssignmentEntity:
        """HR hands one unit to an employee of its company, bypassing requests.

        Raises:
            NotAffiliatedException: Employee has no active affiliation with the company.
            AlreadyAssignedException: Employee already holds this asset.
            OutOfStockException: No unit available.
        """
        self.policy.enforce(self.policy.can_manage_inventory(actor))
        employee_email = normalize_email(employee_email)
        company_name = actor.company_name or ""

        async def attempt() -> AssignmentEntity:
            asset_doc = await self.store.get(COLLECTION_ASSETS, asset_id)
            if asset_doc is None:
                raise ResourceNotFoundException("asset", asset_id)
            asset = asset_from_doc(asset_doc)
            self.policy.enforce(self.policy.can_manage_asset(actor, asset))

            aff_doc = await self.store.get(
                COLLECTION_AFFILIATIONS, affiliation_doc_id(employee_email, company_name)
            )
            affiliation = affiliation_from_doc(aff_doc) if aff_doc else None
            if affiliation is None or not affiliation.is_active():
                raise NotAffiliatedException(employee_email, company_name)

            held = await self.store.query(
                COLLECTION_ASSIGNMENTS,
                {
                    "assetId": asset.id,
                    "employeeEmail": employee_email,
                    "status": AssignmentStatus.ASSIGNED.value,
                },
                limit=1,
            )
            if held:
                raise AlreadyAssignedException(asset.id, employee_email)

            now = utc_now()
            asset.take_unit()
            asset.updated_at = now
            assignment = AssignmentEntity(
                id=generate_cuid(),
                asset_id=asset.id,
                product_name=asset.product_name,
                product_type=asset.product_type,
                employee_email=employee_email,
                employee_name=affiliation.employee_name,
                hr_email=actor.email,
                company_name=company_name,
                status=AssignmentStatus.ASSIGNED,
                assignment_date=now,
            )
            await self.store.commit(
                [
                    DocumentWrite.update(
                        COLLECTION_ASSETS, asset.id, asset_to_data(asset), asset_doc.version
                    ),
                    DocumentWrite.create(
                        COLLECTION_ASSIGNMENTS, assignment.id, assignment_to_data(assignment)
                    ),
                ]
            )
            return assignment

        assignment = await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="assign_directly"
        )
        logger.info(
            "Asset %s assigned to %s by %s", asset_id, employee_email, actor.email
        )
        return assignment

    async def list_my_assignments(
        self,
        actor: UserEntity,
        *,
        status: AssignmentStatus | None = None,
        search: str | None = None,
        product_type: ProductType | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> list[AssignmentEntity]:
        """Assignments held (or once held) by the caller, newest first."""
        filters: dict[str, str] = {"employeeEmail": actor.email}
        if status is not None:
            filters["status"] = status.value
        if product_type is not None:
            filters["productType"] = product_type.value
        docs = await self.store.query(
            COLLECTION_ASSIGNMENTS, filters, order_by="assignmentDate", descending=True
        )
        items = [
            a
            for a in (assignment_from_doc(d) for d in docs)
            if matches_search(search, a.product_name, a.company_name)
        ]
        return paginate(items, skip, limit)

    async def list_company_assignments(
        self,
        actor: UserEntity,
        *,
        status: AssignmentStatus | None = None,
        employee_email: str | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> list[AssignmentEntity]:
        """Every assignment of the caller's company, newest first."""
        self.policy.enforce(self.policy.can_manage_inventory(actor))
        filters: dict[str, str] = {"hrEmail": actor.email}
        if status is not None:
            filters["status"] = status.value
        if employee_email:
            filters["employeeEmail"] = normalize_email(employee_email)
        docs = await self.store.query(
            COLLECTION_ASSIGNMENTS, filters, order_by="assignmentDate", descending=True
        )
        return paginate([assignment_from_doc(d) for d in docs], skip, limit)
