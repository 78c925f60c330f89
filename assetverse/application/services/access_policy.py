"""Access policy: who may do what to which document.

Checks return an AuthorizationResult rather than raising, so callers (and
tests) can inspect the decision; ``enforce`` turns a denial into
AuthorizationException.
"""

from __future__ import annotations

from dataclasses import dataclass

from assetverse.application.interfaces.services import CheckoutSession
from assetverse.domain.entities import (
    AffiliationEntity,
    AssetEntity,
    AssetRequestEntity,
    AssignmentEntity,
    UserEntity,
)
from assetverse.domain.enums import UserRole
from assetverse.domain.exceptions import AuthorizationException


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of one access check."""

    allowed: bool
    reason: str | None = None
    code: str = "FORBIDDEN"

    @classmethod
    def allow(cls) -> AuthorizationResult:
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> AuthorizationResult:
        return cls(False, reason)


_ALLOW = AuthorizationResult.allow()


class AccessPolicy:
    """Role and ownership rules for every state-changing operation."""

    def can_view_profile(self, actor: UserEntity, email: str) -> AuthorizationResult:
        if actor.email != email.strip().lower():
            return AuthorizationResult.deny("You can only view your own profile")
        return _ALLOW

    def can_edit_profile(self, actor: UserEntity, email: str) -> AuthorizationResult:
        if actor.email != email.strip().lower():
            return AuthorizationResult.deny("You can only update your own profile")
        return _ALLOW

    def can_list_users(self, actor: UserEntity) -> AuthorizationResult:
        if not actor.is_hr():
            return AuthorizationResult.deny("Only HR can browse accounts")
        return _ALLOW

    def can_request_assets(self, actor: UserEntity) -> AuthorizationResult:
        if actor.role != UserRole.EMPLOYEE:
            return AuthorizationResult.deny("Only employees can request assets")
        return _ALLOW

    def can_manage_inventory(self, actor: UserEntity) -> AuthorizationResult:
        if not actor.is_hr():
            return AuthorizationResult.deny("HR access required")
        return _ALLOW

    def can_manage_asset(self, actor: UserEntity, asset: AssetEntity) -> AuthorizationResult:
        if not actor.is_hr():
            return AuthorizationResult.deny("HR access required")
        if not asset.is_owned_by(actor.email):
            return AuthorizationResult.deny("Asset belongs to another company")
        return _ALLOW

    def can_decide_request(
        self, actor: UserEntity, request: AssetRequestEntity
    ) -> AuthorizationResult:
        if not actor.is_hr():
            return AuthorizationResult.deny("HR access required")
        if request.hr_email != actor.email:
            return AuthorizationResult.deny("Request belongs to another company")
        return _ALLOW

    def can_return_assignment(
        self, actor: UserEntity, assignment: AssignmentEntity
    ) -> AuthorizationResult:
        if not assignment.is_held_by(actor.email):
            return AuthorizationResult.deny("Only the assignee can return this asset")
        return _ALLOW

    def can_manage_affiliation(
        self, actor: UserEntity, affiliation: AffiliationEntity | None = None
    ) -> AuthorizationResult:
        """HR role always; company ownership when the affiliation is known."""
        if not actor.is_hr():
            return AuthorizationResult.deny("HR access required")
        if affiliation is not None and affiliation.hr_email != actor.email:
            return AuthorizationResult.deny("Affiliation belongs to another company")
        return _ALLOW

    def can_confirm_payment(
        self, actor: UserEntity, session: CheckoutSession
    ) -> AuthorizationResult:
        if not actor.is_hr():
            return AuthorizationResult.deny("HR access required")
        if (session.metadata.get("hrEmail") or "").lower() != actor.email:
            return AuthorizationResult.deny("Checkout session belongs to another account")
        return _ALLOW

    @staticmethod
    def enforce(result: AuthorizationResult) -> None:
        """Raise AuthorizationException if the check denied access."""
        if not result.allowed:
            raise AuthorizationException(result.reason or "Forbidden")
