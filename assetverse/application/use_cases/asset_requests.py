"""Asset request workflow: create, list, approve, reject.

Approval touches five documents (request, asset, HR account, affiliation,
new assignment) plus the pending-request guard. All of them go into one
commit whose updates are conditional on the versions read in the same
attempt, so concurrent approvals cannot oversell stock or overrun the
package limit.
"""

from __future__ import annotations

from datetime import datetime

from assetverse.application.interfaces.store import (
    DocumentWrite,
    IDocumentStore,
    StoredDocument,
)
from assetverse.application.mappers import (
    affiliation_from_doc,
    affiliation_to_data,
    asset_from_doc,
    asset_to_data,
    assignment_to_data,
    request_from_doc,
    request_to_data,
    user_from_doc,
    user_to_data,
)
from assetverse.application.services.access_policy import AccessPolicy
from assetverse.application.services.conflict_retry import retry_on_conflict
from assetverse.application.services.listing import matches_search, paginate
from assetverse.application.use_cases.users import user_doc_id
from assetverse.core.constants import (
    COLLECTION_AFFILIATIONS,
    COLLECTION_ASSETS,
    COLLECTION_ASSIGNMENTS,
    COLLECTION_REQUEST_GUARDS,
    COLLECTION_REQUESTS,
    COLLECTION_USERS,
    DEFAULT_PAGE_LIMIT,
)
from assetverse.domain.entities import (
    AffiliationEntity,
    AssetRequestEntity,
    AssignmentEntity,
    UserEntity,
)
from assetverse.domain.enums import AffiliationStatus, AssignmentStatus, RequestStatus
from assetverse.domain.exceptions import (
    DuplicateRequestException,
    OutOfStockException,
    ResourceNotFoundException,
    ValidationException,
)
from assetverse.shared.logging import get_logger
from assetverse.shared.utils.datetime import utc_now
from assetverse.shared.utils.generators import generate_cuid, key_id

logger = get_logger(__name__)


def request_guard_id(employee_email: str, asset_id: str) -> str:
    """One guard document exists per (employee, asset) while a request is pending."""
    return key_id("request_guard", employee_email, asset_id)


def affiliation_doc_id(employee_email: str, company_name: str) -> str:
    return key_id("affiliation", employee_email, company_name)


class AssetRequestService:
    """Employees request units; the owning HR approves or rejects."""

    def __init__(
        self, store: IDocumentStore, policy: AccessPolicy, *, max_attempts: int = 3
    ) -> None:
        self.store = store
        self.policy = policy
        self.max_attempts = max_attempts

    async def create_request(
        self, actor: UserEntity, asset_id: str, note: str | None = None
    ) -> AssetRequestEntity:
        """File a pending request for one unit.

        Raises:
            ResourceNotFoundException: Unknown asset.
            OutOfStockException: No unit available right now.
            DuplicateRequestException: Caller already has a pending request for it.
        """
        self.policy.enforce(self.policy.can_request_assets(actor))

        async def attempt() -> AssetRequestEntity:
            asset_doc = await self.store.get(COLLECTION_ASSETS, asset_id)
            if asset_doc is None:
                raise ResourceNotFoundException("asset", asset_id)
            asset = asset_from_doc(asset_doc)
            if not asset.is_available():
                raise OutOfStockException(asset.id)
            guard_id = request_guard_id(actor.email, asset.id)
            if await self.store.get(COLLECTION_REQUEST_GUARDS, guard_id) is not None:
                raise DuplicateRequestException(asset.id)
            request = AssetRequestEntity(
                id=generate_cuid(),
                asset_id=asset.id,
                product_name=asset.product_name,
                product_type=asset.product_type,
                requester_email=actor.email,
                requester_name=actor.name,
                hr_email=asset.hr_email,
                company_name=asset.company_name,
                status=RequestStatus.PENDING,
                request_date=utc_now(),
                note=note.strip() if note and note.strip() else None,
            )
            await self.store.commit(
                [
                    DocumentWrite.create(COLLECTION_REQUESTS, request.id, request_to_data(request)),
                    DocumentWrite.create(
                        COLLECTION_REQUEST_GUARDS,
                        guard_id,
                        {
                            "requestId": request.id,
                            "employeeEmail": actor.email,
                            "assetId": asset.id,
                        },
                    ),
                ]
            )
            return request

        request = await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="create_request"
        )
        logger.info("Request %s filed by %s for asset %s", request.id, actor.email, asset_id)
        return request

    async def list_requests(
        self,
        actor: UserEntity,
        *,
        status: RequestStatus | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> list[AssetRequestEntity]:
        """HR: requests against its company. Employee: its own. Newest first."""
        filters: dict[str, str] = (
            {"hrEmail": actor.email} if actor.is_hr() else {"requesterEmail": actor.email}
        )
        if status is not None:
            filters["status"] = status.value
        docs = await self.store.query(
            COLLECTION_REQUESTS, filters, order_by="requestDate", descending=True
        )
        requests = [
            r
            for r in (request_from_doc(d) for d in docs)
            if matches_search(search, r.product_name, r.requester_name, r.requester_email)
        ]
        return paginate(requests, skip, limit)

    async def decide_request(
        self,
        actor: UserEntity,
        request_id: str,
        status: RequestStatus,
        note: str | None = None,
    ) -> AssetRequestEntity:
        """Approve or reject a pending request."""
        if status == RequestStatus.APPROVED:
            return await self.approve_request(actor, request_id)
        if status == RequestStatus.REJECTED:
            return await self.reject_request(actor, request_id, note)
        raise ValidationException("Status must be 'approved' or 'rejected'", field="status")

    async def _load_request(
        self, actor: UserEntity, request_id: str
    ) -> tuple[StoredDocument, AssetRequestEntity]:
        doc = await self.store.get(COLLECTION_REQUESTS, request_id)
        if doc is None:
            raise ResourceNotFoundException("request", request_id)
        request = request_from_doc(doc)
        self.policy.enforce(self.policy.can_decide_request(actor, request))
        request.ensure_pending()
        return doc, request

    async def _count_new_employee(
        self, hr_email: str, now: datetime, writes: list[DocumentWrite]
    ) -> UserEntity:
        """Load the HR account, add one employee under its limit and queue the update."""
        hr_doc = await self.store.get(COLLECTION_USERS, user_doc_id(hr_email))
        if hr_doc is None:
            raise ResourceNotFoundException("user", hr_email)
        hr = user_from_doc(hr_doc)
        hr.add_employee()
        hr.updated_at = now
        writes.append(
            DocumentWrite.update(COLLECTION_USERS, hr.id, user_to_data(hr), hr_doc.version)
        )
        return hr

    async def approve_request(self, actor: UserEntity, request_id: str) -> AssetRequestEntity:
        """Approve: affiliate the employee, assign one unit, close the request.

        Checks run in order (ownership, pending, stock, package limit) and all
        happen before any write, so a failed check changes nothing.

        Raises:
            InvalidStateException: Request is not pending.
            OutOfStockException: No unit available.
            PackageLimitException: Affiliating the employee would exceed the limit.
        """

        async def attempt() -> AssetRequestEntity:
            request_doc, request = await self._load_request(actor, request_id)
            now = utc_now()

            asset_doc = await self.store.get(COLLECTION_ASSETS, request.asset_id)
            if asset_doc is None:
                raise ResourceNotFoundException("asset", request.asset_id)
            asset = asset_from_doc(asset_doc)
            asset.take_unit()
            asset.updated_at = now

            writes: list[DocumentWrite] = []
            aff_id = affiliation_doc_id(request.requester_email, request.company_name)
            aff_doc = await self.store.get(COLLECTION_AFFILIATIONS, aff_id)
            if aff_doc is None:
                hr = await self._count_new_employee(request.hr_email, now, writes)
                affiliation = AffiliationEntity(
                    id=aff_id,
                    employee_email=request.requester_email,
                    employee_name=request.requester_name,
                    hr_email=request.hr_email,
                    company_name=request.company_name,
                    status=AffiliationStatus.ACTIVE,
                    company_logo=hr.company_logo,
                    affiliation_date=now,
                )
                writes.append(
                    DocumentWrite.create(
                        COLLECTION_AFFILIATIONS, aff_id, affiliation_to_data(affiliation)
                    )
                )
            else:
                affiliation = affiliation_from_doc(aff_doc)
                if not affiliation.is_active():
                    hr = await self._count_new_employee(request.hr_email, now, writes)
                    affiliation.activate(now)
                    affiliation.company_logo = hr.company_logo
                    writes.append(
                        DocumentWrite.update(
                            COLLECTION_AFFILIATIONS,
                            aff_id,
                            affiliation_to_data(affiliation),
                            aff_doc.version,
                        )
                    )

            assignment = AssignmentEntity(
                id=generate_cuid(),
                asset_id=asset.id,
                product_name=asset.product_name,
                product_type=asset.product_type,
                employee_email=request.requester_email,
                employee_name=request.requester_name,
                hr_email=request.hr_email,
                company_name=request.company_name,
                status=AssignmentStatus.ASSIGNED,
                assignment_date=now,
                request_id=request.id,
            )
            request.approve(actor.email, now)
            writes.extend(
                [
                    DocumentWrite.update(
                        COLLECTION_ASSETS, asset.id, asset_to_data(asset), asset_doc.version
                    ),
                    DocumentWrite.create(
                        COLLECTION_ASSIGNMENTS, assignment.id, assignment_to_data(assignment)
                    ),
                    DocumentWrite.update(
                        COLLECTION_REQUESTS, request.id, request_to_data(request), request_doc.version
                    ),
                    DocumentWrite.delete(
                        COLLECTION_REQUEST_GUARDS,
                        request_guard_id(request.requester_email, request.asset_id),
                    ),
                ]
            )
            await self.store.commit(writes)
            return request

        request = await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="approve_request"
        )
        logger.info("Request %s approved by %s", request_id, actor.email)
        return request

    async def reject_request(
        self, actor: UserEntity, request_id: str, note: str | None = None
    ) -> AssetRequestEntity:
        """Reject a pending request; no inventory side effects."""

        async def attempt() -> AssetRequestEntity:
            request_doc, request = await self._load_request(actor, request_id)
            request.reject(actor.email, utc_now(), note.strip() if note else None)
            await self.store.commit(
                [
                    DocumentWrite.update(
                        COLLECTION_REQUESTS, request.id, request_to_data(request), request_doc.version
                    ),
                    DocumentWrite.delete(
                        COLLECTION_REQUEST_GUARDS,
                        request_guard_id(request.requester_email, request.asset_id),
                    ),
                ]
            )
            return request

        request = await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="reject_request"
        )
        logger.info("Request %s rejected by %s", request_id, actor.email)
        return request
