"""Application services shared by use cases (access policy, retries, listing)."""

from assetverse.application.services.access_policy import (
    AccessPolicy,
    AuthorizationResult,
)
from assetverse.application.services.conflict_retry import retry_on_conflict
from assetverse.application.services.listing import matches_search, paginate

__all__ = [
    "AccessPolicy",
    "AuthorizationResult",
    "matches_search",
    "paginate",
    "retry_on_conflict",
]
