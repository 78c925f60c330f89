"""Use cases: one service per resource, each taking the store explicitly."""

from assetverse.application.use_cases.affiliations import AffiliationService
from assetverse.application.use_cases.asset_requests import AssetRequestService
from assetverse.application.use_cases.assets import AssetService
from assetverse.application.use_cases.assignments import AssignmentService
from assetverse.application.use_cases.packages import PackageService
from assetverse.application.use_cases.payments import PaymentService
from assetverse.application.use_cases.users import UserService

__all__ = [
    "AffiliationService",
    "AssetRequestService",
    "AssetService",
    "AssignmentService",
    "PackageService",
    "PaymentService",
    "UserService",
]
