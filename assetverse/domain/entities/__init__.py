"""Domain entities and aggregates.

Pure domain models; no persistence concerns.
"""

from assetverse.domain.entities.affiliation import AffiliationEntity
from assetverse.domain.entities.asset import AssetEntity
from assetverse.domain.entities.asset_request import AssetRequestEntity
from assetverse.domain.entities.assignment import AssignmentEntity
from assetverse.domain.entities.subscription import PackageEntity, PaymentEntity
from assetverse.domain.entities.user import UserEntity

__all__ = [
    "AffiliationEntity",
    "AssetEntity",
    "AssetRequestEntity",
    "AssignmentEntity",
    "PackageEntity",
    "PaymentEntity",
    "UserEntity",
]
