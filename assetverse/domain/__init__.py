"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from assetverse.domain.entities import (
    AffiliationEntity,
    AssetEntity,
    AssetRequestEntity,
    AssignmentEntity,
    PackageEntity,
    PaymentEntity,
    UserEntity,
)
from assetverse.domain.enums import (
    AffiliationStatus,
    AssignmentStatus,
    PaymentStatus,
    ProductType,
    RequestStatus,
    UserRole,
)
from assetverse.domain.exceptions import (
    AssetverseException,
    AuthenticationException,
    AuthorizationException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
    WriteConflictException,
)

__all__ = [
    "AffiliationEntity",
    "AffiliationStatus",
    "AssetEntity",
    "AssetRequestEntity",
    "AssetverseException",
    "AssignmentEntity",
    "AssignmentStatus",
    "AuthenticationException",
    "AuthorizationException",
    "InvalidStateException",
    "PackageEntity",
    "PaymentEntity",
    "PaymentStatus",
    "ProductType",
    "RequestStatus",
    "ResourceNotFoundException",
    "UserEntity",
    "UserRole",
    "ValidationException",
    "WriteConflictException",
]
