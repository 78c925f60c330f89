"""Assignment API: held assets, returns, direct assignment, company view."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from assetverse.api.dependencies import CurrentUser, HRUser, get_assignment_service
from assetverse.application.use_cases import AssignmentService
from assetverse.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from assetverse.core.limiter import limit_writes
from assetverse.domain.enums import AssignmentStatus, ProductType
from assetverse.schemas.asset import AssignmentResponse, DirectAssignRequest

router = APIRouter()

AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]
SkipQuery = Annotated[int, Query(ge=0)]
LimitQuery = Annotated[int, Query(ge=1, le=MAX_PAGE_LIMIT)]


@router.get("/assigned-assets", response_model=list[AssignmentResponse])
async def list_assigned_assets(
    current_user: CurrentUser,
    assignment_service: AssignmentServiceDep,
    status: AssignmentStatus | None = None,
    search: str | None = None,
    product_type: Annotated[ProductType | None, Query(alias="productType")] = None,
    skip: SkipQuery = 0,
    limit: LimitQuery = DEFAULT_PAGE_LIMIT,
) -> list[AssignmentResponse]:
    """The caller's assignments."""
    items = await assignment_service.list_my_assignments(
        current_user,
        status=status,
        search=search,
        product_type=product_type,
        skip=skip,
        limit=limit,
    )
    return [AssignmentResponse.from_entity(a) for a in items]


@router.patch("/assigned-assets/{assignment_id}/return", response_model=AssignmentResponse)
@limit_writes
async def return_assigned_asset(
    request: Request,
    assignment_id: str,
    current_user: CurrentUser,
    assignment_service: AssignmentServiceDep,
) -> AssignmentResponse:
    """Assignee returns a held unit to stock."""
    assignment = await assignment_service.return_assignment(current_user, assignment_id)
    return AssignmentResponse.from_entity(assignment)


@router.post("/assign-asset", response_model=AssignmentResponse, status_code=201)
@limit_writes
async def assign_asset(
    request: Request,
    body: DirectAssignRequest,
    current_user: HRUser,
    assignment_service: AssignmentServiceDep,
) -> AssignmentResponse:
    """HR assigns a unit directly to an affiliated employee."""
    assignment = await assignment_service.assign_directly(
        current_user, body.asset_id, body.employee_email
    )
    return AssignmentResponse.from_entity(assignment)


@router.get("/company-assignments", response_model=list[AssignmentResponse])
async def list_company_assignments(
    current_user: HRUser,
    assignment_service: AssignmentServiceDep,
    status: AssignmentStatus | None = None,
    employee_email: Annotated[str | None, Query(alias="employeeEmail")] = None,
    skip: SkipQuery = 0,
    limit: LimitQuery = DEFAULT_PAGE_LIMIT,
) -> list[AssignmentResponse]:
    """Every assignment of the caller's company."""
    items = await assignment_service.list_company_assignments(
        current_user,
        status=status,
        employee_email=employee_email,
        skip=skip,
        limit=limit,
    )
    return [AssignmentResponse.from_entity(a) for a in items]
