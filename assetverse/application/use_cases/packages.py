"""Package catalog: list and seed."""

from __future__ import annotations

from assetverse.application.interfaces.store import IDocumentStore
from assetverse.application.mappers import package_from_doc, package_to_data
from assetverse.core.constants import COLLECTION_PACKAGES, DEFAULT_PACKAGES
from assetverse.domain.entities import PackageEntity
from assetverse.domain.exceptions import ResourceNotFoundException, WriteConflictException
from assetverse.shared.logging import get_logger
from assetverse.shared.utils.generators import key_id

logger = get_logger(__name__)


def package_doc_id(name: str) -> str:
    return key_id("package", name)


class PackageService:
    def __init__(self, store: IDocumentStore) -> None:
        self.store = store

    async def list_packages(self) -> list[PackageEntity]:
        """Catalog sorted by price, cheapest first."""
        docs = await self.store.query(COLLECTION_PACKAGES, order_by="price")
        return [package_from_doc(d) for d in docs]

    async def get_package(self, package_id: str) -> PackageEntity:
        doc = await self.store.get(COLLECTION_PACKAGES, package_id)
        if doc is None:
            raise ResourceNotFoundException("package", package_id)
        return package_from_doc(doc)

    async def seed_default_packages(self) -> int:
        """Insert the default packages that are missing. Returns how many were created."""
        created = 0
        for raw in DEFAULT_PACKAGES:
            package = PackageEntity(
                id=package_doc_id(raw["name"]),
                name=raw["name"],
                employee_limit=raw["employeeLimit"],
                price=float(raw["price"]),
                features=list(raw["features"]),
            )
            try:
                await self.store.create(
                    COLLECTION_PACKAGES, package_to_data(package), doc_id=package.id
                )
            except WriteConflictException:
                continue
            created += 1
        if created:
            logger.info("Seeded %s default packages", created)
        return created
