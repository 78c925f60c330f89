"""Asset request API: file, list and decide requests."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from assetverse.api.dependencies import CurrentUser, get_request_service
from assetverse.application.use_cases import AssetRequestService
from assetverse.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from assetverse.core.limiter import limit_writes
from assetverse.domain.enums import RequestStatus
from assetverse.schemas.request import (
    RequestCreateRequest,
    RequestDecisionRequest,
    RequestResponse,
)

router = APIRouter()

RequestServiceDep = Annotated[AssetRequestService, Depends(get_request_service)]


@router.post("", response_model=RequestResponse, status_code=201)
@limit_writes
async def create_request(
    request: Request,
    body: RequestCreateRequest,
    current_user: CurrentUser,
    request_service: RequestServiceDep,
) -> RequestResponse:
    """Employee requests one unit of an asset."""
    created = await request_service.create_request(current_user, body.asset_id, body.note)
    return RequestResponse.from_entity(created)


@router.get("", response_model=list[RequestResponse])
async def list_requests(
    current_user: CurrentUser,
    request_service: RequestServiceDep,
    status: RequestStatus | None = None,
    search: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_LIMIT)] = DEFAULT_PAGE_LIMIT,
) -> list[RequestResponse]:
    """HR: requests against its company. Employee: its own."""
    items = await request_service.list_requests(
        current_user, status=status, search=search, skip=skip, limit=limit
    )
    return [RequestResponse.from_entity(r) for r in items]


@router.patch("/{request_id}", response_model=RequestResponse)
@limit_writes
async def decide_request(
    request: Request,
    request_id: str,
    body: RequestDecisionRequest,
    current_user: CurrentUser,
    request_service: RequestServiceDep,
) -> RequestResponse:
    """Approve or reject a pending request (owning HR only)."""
    decided = await request_service.decide_request(
        current_user, request_id, RequestStatus(body.status), body.note
    )
    return RequestResponse.from_entity(decided)
