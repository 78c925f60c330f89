"""Affiliation operations: list and remove an employee from a company."""

from __future__ import annotations

from assetverse.application.interfaces.store import DocumentWrite, IDocumentStore
from assetverse.application.mappers import (
    affiliation_from_doc,
    affiliation_to_data,
    asset_from_doc,
    asset_to_data,
    assignment_from_doc,
    assignment_to_data,
    user_from_doc,
    user_to_data,
)
from assetverse.application.services.access_policy import AccessPolicy
from assetverse.application.services.conflict_retry import retry_on_conflict
from assetverse.application.use_cases.asset_requests import affiliation_doc_id
from assetverse.application.use_cases.users import normalize_email, user_doc_id
from assetverse.core.constants import (
    COLLECTION_AFFILIATIONS,
    COLLECTION_ASSETS,
    COLLECTION_ASSIGNMENTS,
    COLLECTION_USERS,
)
from assetverse.domain.entities import AffiliationEntity, AssetEntity, UserEntity
from assetverse.domain.enums import AffiliationStatus, AssignmentStatus
from assetverse.domain.exceptions import ResourceNotFoundException
from assetverse.shared.logging import get_logger
from assetverse.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class AffiliationService:
    def __init__(
        self, store: IDocumentStore, policy: AccessPolicy, *, max_attempts: int = 3
    ) -> None:
        self.store = store
        self.policy = policy
        self.max_attempts = max_attempts

    async def list_affiliations(
        self,
        actor: UserEntity,
        status: AffiliationStatus | None = AffiliationStatus.ACTIVE,
    ) -> list[AffiliationEntity]:
        """HR: its company's employees. Employee: its companies. Active only by default."""
        filters: dict[str, str] = (
            {"hrEmail": actor.email} if actor.is_hr() else {"employeeEmail": actor.email}
        )
        if status is not None:
            filters["status"] = status.value
        docs = await self.store.query(
            COLLECTION_AFFILIATIONS, filters, order_by="affiliationDate", descending=True
        )
        return [affiliation_from_doc(d) for d in docs]

    async def remove_employee(
        self, actor: UserEntity, employee_email: str
    ) -> AffiliationEntity:
        """Deactivate the affiliation and return every unit the employee still holds.

        One commit covers the affiliation, each open assignment, each affected
        asset and the HR employee counter (decremented once).

        Raises:
            ResourceNotFoundException: No affiliation with this employee.
            InvalidStateException: Affiliation already inactive.
        """
        self.policy.enforce(self.policy.can_manage_affiliation(actor))
        employee_email = normalize_email(employee_email)
        aff_id = affiliation_doc_id(employee_email, actor.company_name or "")
        returned_count = 0

        async def attempt() -> AffiliationEntity:
            nonlocal returned_count
            aff_doc = await self.store.get(COLLECTION_AFFILIATIONS, aff_id)
            if aff_doc is None:
                raise ResourceNotFoundException("affiliation", employee_email)
            affiliation = affiliation_from_doc(aff_doc)
            self.policy.enforce(self.policy.can_manage_affiliation(actor, affiliation))
            now = utc_now()
            affiliation.deactivate(now)

            hr_doc = await self.store.get(COLLECTION_USERS, user_doc_id(actor.email))
            if hr_doc is None:
                raise ResourceNotFoundException("user", actor.email)
            hr = user_from_doc(hr_doc)
            hr.remove_employee()
            hr.updated_at = now

            writes = [
                DocumentWrite.update(
                    COLLECTION_AFFILIATIONS,
                    aff_id,
                    affiliation_to_data(affiliation),
                    aff_doc.version,
                ),
                DocumentWrite.update(COLLECTION_USERS, hr.id, user_to_data(hr), hr_doc.version),
            ]

            held = await self.store.query(
                COLLECTION_ASSIGNMENTS,
                {
                    "employeeEmail": employee_email,
                    "hrEmail": actor.email,
                    "status": AssignmentStatus.ASSIGNED.value,
                },
            )
            assets: dict[str, tuple[AssetEntity, str]] = {}
            for doc in held:
                assignment = assignment_from_doc(doc)
                assignment.mark_returned(now)
                writes.append(
                    DocumentWrite.update(
                        COLLECTION_ASSIGNMENTS,
                        assignment.id,
                        assignment_to_data(assignment),
                        doc.version,
                    )
                )
                if assignment.asset_id not in assets:
                    asset_doc = await self.store.get(COLLECTION_ASSETS, assignment.asset_id)
                    if asset_doc is None:
                        continue
                    assets[assignment.asset_id] = (asset_from_doc(asset_doc), asset_doc.version)
                assets[assignment.asset_id][0].release_unit()
            for asset, version in assets.values():
                asset.updated_at = now
                writes.append(
                    DocumentWrite.update(COLLECTION_ASSETS, asset.id, asset_to_data(asset), version)
                )

            await self.store.commit(writes)
            returned_count = len(held)
            return affiliation

        affiliation = await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="remove_employee"
        )
        logger.info(
            "Employee %s removed from %s by %s (%s assignments returned)",
            employee_email,
            affiliation.company_name,
            actor.email,
            returned_count,
        )
        return affiliation
