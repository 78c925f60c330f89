"""Asset request API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from assetverse.domain.enums import ProductType, RequestStatus
from assetverse.schemas.common import CamelModel


class RequestCreateRequest(CamelModel):
    asset_id: str = Field(..., min_length=1)
    note: str | None = Field(default=None, max_length=1000)


class RequestDecisionRequest(CamelModel):
    """Request body for PATCH /requests/{id}."""

    status: Literal["approved", "rejected"]
    note: str | None = Field(default=None, max_length=1000)


class RequestResponse(CamelModel):
    id: str
    asset_id: str
    product_name: str
    product_type: ProductType
    requester_email: str
    requester_name: str
    hr_email: str
    company_name: str
    status: RequestStatus
    request_date: datetime | None = None
    note: str | None = None
    processed_date: datetime | None = None
    processed_by: str | None = None
