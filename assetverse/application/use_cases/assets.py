"""Asset inventory operations: create, read, list, edit, delete."""

from __future__ import annotations

from assetverse.application.dtos.asset import CreateAssetCommand, UpdateAssetCommand
from assetverse.application.interfaces.store import DocumentWrite, IDocumentStore
from assetverse.application.mappers import (
    affiliation_from_doc,
    asset_from_doc,
    asset_to_data,
    request_from_doc,
    request_to_data,
)
from assetverse.application.services.access_policy import AccessPolicy
from assetverse.application.services.conflict_retry import retry_on_conflict
from assetverse.application.services.listing import matches_search, paginate
from assetverse.application.use_cases.asset_requests import request_guard_id
from assetverse.core.constants import (
    COLLECTION_AFFILIATIONS,
    COLLECTION_ASSETS,
    COLLECTION_REQUEST_GUARDS,
    COLLECTION_REQUESTS,
    DEFAULT_PAGE_LIMIT,
)
from assetverse.domain.entities import AssetEntity, UserEntity
from assetverse.domain.enums import AffiliationStatus, ProductType, RequestStatus
from assetverse.domain.exceptions import AssetInUseException, ResourceNotFoundException
from assetverse.shared.logging import get_logger
from assetverse.shared.utils.datetime import utc_now
from assetverse.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


def _newest_first(assets: list[AssetEntity]) -> list[AssetEntity]:
    return sorted(assets, key=lambda a: (a.date_added is not None, a.date_added), reverse=True)


class AssetService:
    """Inventory owned by HR accounts; employees read it through their affiliations."""

    def __init__(
        self, store: IDocumentStore, policy: AccessPolicy, *, max_attempts: int = 3
    ) -> None:
        self.store = store
        self.policy = policy
        self.max_attempts = max_attempts

    async def create_asset(self, actor: UserEntity, command: CreateAssetCommand) -> AssetEntity:
        """Add stock to the caller's company; every unit starts available."""
        self.policy.enforce(self.policy.can_manage_inventory(actor))
        now = utc_now()
        asset = AssetEntity(
            id=generate_cuid(),
            product_name=command.product_name.strip(),
            product_type=command.product_type,
            product_quantity=command.product_quantity,
            available_quantity=command.product_quantity,
            hr_email=actor.email,
            company_name=actor.company_name or "",
            product_image=command.product_image,
            date_added=now,
            updated_at=now,
        )
        await self.store.create(COLLECTION_ASSETS, asset_to_data(asset), doc_id=asset.id)
        logger.info("Asset %s created by %s (%s units)", asset.id, actor.email, asset.product_quantity)
        return asset

    async def get_asset(self, asset_id: str) -> AssetEntity:
        doc = await self.store.get(COLLECTION_ASSETS, asset_id)
        if doc is None:
            raise ResourceNotFoundException("asset", asset_id)
        return asset_from_doc(doc)

    async def _assets_for(self, actor: UserEntity) -> list[AssetEntity]:
        if actor.is_hr():
            docs = await self.store.query(COLLECTION_ASSETS, {"hrEmail": actor.email})
            return [asset_from_doc(d) for d in docs]
        affiliations = await self.store.query(
            COLLECTION_AFFILIATIONS,
            {"employeeEmail": actor.email, "status": AffiliationStatus.ACTIVE.value},
        )
        hr_emails = sorted({affiliation_from_doc(d).hr_email for d in affiliations})
        assets: list[AssetEntity] = []
        for hr_email in hr_emails:
            docs = await self.store.query(COLLECTION_ASSETS, {"hrEmail": hr_email})
            assets.extend(asset_from_doc(d) for d in docs)
        return assets

    async def list_assets(
        self,
        actor: UserEntity,
        *,
        search: str | None = None,
        product_type: ProductType | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> list[AssetEntity]:
        """HR: own inventory. Employee: inventory of companies with an active affiliation."""
        assets = [
            a
            for a in await self._assets_for(actor)
            if (product_type is None or a.product_type == product_type)
            and matches_search(search, a.product_name)
        ]
        return paginate(_newest_first(assets), skip, limit)

    async def list_available(
        self,
        *,
        search: str | None = None,
        product_type: ProductType | None = None,
        company_name: str | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> list[AssetEntity]:
        """Assets with at least one unit in stock, across companies."""
        filters: dict[str, str] = {}
        if product_type is not None:
            filters["productType"] = product_type.value
        if company_name:
            filters["companyName"] = company_name
        docs = await self.store.query(COLLECTION_ASSETS, filters)
        assets = [
            a
            for a in (asset_from_doc(d) for d in docs)
            if a.is_available() and matches_search(search, a.product_name)
        ]
        return paginate(_newest_first(assets), skip, limit)

    async def update_asset(
        self, actor: UserEntity, asset_id: str, command: UpdateAssetCommand
    ) -> AssetEntity:
        """Edit an owned asset; a quantity change keeps the units that are out.

        Raises:
            ValidationException: New quantity below the units out on assignment.
        """

        async def attempt() -> AssetEntity:
            doc = await self.store.get(COLLECTION_ASSETS, asset_id)
            if doc is None:
                raise ResourceNotFoundException("asset", asset_id)
            asset = asset_from_doc(doc)
            self.policy.enforce(self.policy.can_manage_asset(actor, asset))
            if command.product_name is not None:
                asset.product_name = command.product_name.strip()
            if command.product_type is not None:
                asset.product_type = command.product_type
            if command.product_image is not None:
                asset.product_image = command.product_image
            if command.product_quantity is not None:
                asset.resize(command.product_quantity)
            asset.updated_at = utc_now()
            asset.validate()
            await self.store.commit(
                [
                    DocumentWrite.update(
                        COLLECTION_ASSETS, asset.id, asset_to_data(asset), doc.version
                    )
                ]
            )
            return asset

        asset = await retry_on_conflict(attempt, attempts=self.max_attempts, label="update_asset")
        logger.info("Asset %s updated by %s", asset_id, actor.email)
        return asset

    async def delete_asset(self, actor: UserEntity, asset_id: str) -> None:
        """Delete an owned asset; refused while any unit is out on assignment.

        Pending requests for the asset are rejected and their guards removed
        in the same commit.
        """
        rejected = 0

        async def attempt() -> None:
            nonlocal rejected
            doc = await self.store.get(COLLECTION_ASSETS, asset_id)
            if doc is None:
                raise ResourceNotFoundException("asset", asset_id)
            asset = asset_from_doc(doc)
            self.policy.enforce(self.policy.can_manage_asset(actor, asset))
            if asset.assigned_units > 0:
                raise AssetInUseException(asset.id, asset.assigned_units)
            writes = [DocumentWrite.delete(COLLECTION_ASSETS, asset.id, doc.version)]
            pending = await self.store.query(
                COLLECTION_REQUESTS,
                {"assetId": asset.id, "status": RequestStatus.PENDING.value},
            )
            now = utc_now()
            for request_doc in pending:
                request = request_from_doc(request_doc)
                request.reject(actor.email, now, "Asset was removed from inventory")
                writes.append(
                    DocumentWrite.update(
                        COLLECTION_REQUESTS,
                        request.id,
                        request_to_data(request),
                        request_doc.version,
                    )
                )
                writes.append(
                    DocumentWrite.delete(
                        COLLECTION_REQUEST_GUARDS,
                        request_guard_id(request.requester_email, asset.id),
                    )
                )
            await self.store.commit(writes)
            rejected = len(pending)

        await retry_on_conflict(attempt, attempts=self.max_attempts, label="delete_asset")
        logger.info(
            "Asset %s deleted by %s (%s pending requests rejected)",
            asset_id,
            actor.email,
            rejected,
        )
