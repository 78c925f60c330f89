"""AccessPolicy role and ownership checks."""

import pytest

from assetverse.application.interfaces import CheckoutSession
from assetverse.application.services import AccessPolicy
from assetverse.domain.entities import AssetEntity, AssignmentEntity, UserEntity
from assetverse.domain.enums import AssignmentStatus, ProductType, UserRole
from assetverse.domain.exceptions import AuthorizationException

policy = AccessPolicy()

HR = UserEntity(
    id="u1", email="hr@acme.com", name="Hana", role=UserRole.HR, company_name="Acme"
)
EMPLOYEE = UserEntity(id="u2", email="emp@acme.com", name="Eli", role=UserRole.EMPLOYEE)


def _asset(hr_email: str) -> AssetEntity:
    return AssetEntity(
        id="a1",
        product_name="Laptop",
        product_type=ProductType.RETURNABLE,
        product_quantity=1,
        available_quantity=1,
        hr_email=hr_email,
        company_name="Acme",
    )


def test_profile_is_self_only() -> None:
    assert policy.can_view_profile(HR, "hr@acme.com").allowed
    assert not policy.can_view_profile(HR, "emp@acme.com").allowed
    assert not policy.can_edit_profile(EMPLOYEE, "hr@acme.com").allowed


def test_roles() -> None:
    assert policy.can_request_assets(EMPLOYEE).allowed
    assert not policy.can_request_assets(HR).allowed
    assert policy.can_manage_inventory(HR).allowed
    assert not policy.can_manage_inventory(EMPLOYEE).allowed
    assert policy.can_list_users(HR).allowed
    assert not policy.can_list_users(EMPLOYEE).allowed


def test_asset_ownership() -> None:
    assert policy.can_manage_asset(HR, _asset("hr@acme.com")).allowed
    result = policy.can_manage_asset(HR, _asset("other@acme.com"))
    assert not result.allowed
    assert result.code == "FORBIDDEN"


def test_return_only_by_assignee() -> None:
    assignment = AssignmentEntity(
        id="s1",
        asset_id="a1",
        product_name="Laptop",
        product_type=ProductType.RETURNABLE,
        employee_email="emp@acme.com",
        employee_name="Eli",
        hr_email="hr@acme.com",
        company_name="Acme",
        status=AssignmentStatus.ASSIGNED,
    )
    assert policy.can_return_assignment(EMPLOYEE, assignment).allowed
    assert not policy.can_return_assignment(HR, assignment).allowed


def test_confirm_payment_requires_session_owner() -> None:
    session = CheckoutSession(
        id="cs_1", url=None, payment_status="paid", metadata={"hrEmail": "HR@acme.com"}
    )
    assert policy.can_confirm_payment(HR, session).allowed
    other = CheckoutSession(
        id="cs_2", url=None, payment_status="paid", metadata={"hrEmail": "x@acme.com"}
    )
    assert not policy.can_confirm_payment(HR, other).allowed
    assert not policy.can_confirm_payment(EMPLOYEE, session).allowed


def test_enforce_raises_on_deny() -> None:
    AccessPolicy.enforce(policy.can_manage_inventory(HR))
    with pytest.raises(AuthorizationException) as exc_info:
        AccessPolicy.enforce(policy.can_manage_inventory(EMPLOYEE))
    assert exc_info.value.message == "HR access required"
