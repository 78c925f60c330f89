"""Affiliation API: list and remove employees."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from assetverse.api.dependencies import CurrentUser, get_affiliation_service
from assetverse.application.use_cases import AffiliationService
from assetverse.core.limiter import limit_writes
from assetverse.domain.enums import AffiliationStatus
from assetverse.schemas.affiliation import AffiliationResponse, AffiliationUpdateRequest

router = APIRouter()

AffiliationServiceDep = Annotated[AffiliationService, Depends(get_affiliation_service)]


@router.get("", response_model=list[AffiliationResponse])
async def list_affiliations(
    current_user: CurrentUser,
    affiliation_service: AffiliationServiceDep,
    status: AffiliationStatus = AffiliationStatus.ACTIVE,
) -> list[AffiliationResponse]:
    """HR: its employees. Employee: its companies. Active by default."""
    items = await affiliation_service.list_affiliations(current_user, status)
    return [AffiliationResponse.from_entity(a) for a in items]


@router.patch("", response_model=AffiliationResponse)
@limit_writes
async def update_affiliation(
    request: Request,
    body: AffiliationUpdateRequest,
    current_user: CurrentUser,
    affiliation_service: AffiliationServiceDep,
) -> AffiliationResponse:
    """Remove an employee: deactivate and return all of its held units."""
    affiliation = await affiliation_service.remove_employee(current_user, body.employee_email)
    return AffiliationResponse.from_entity(affiliation)
