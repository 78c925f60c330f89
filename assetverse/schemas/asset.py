"""Asset and assignment API schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from assetverse.domain.enums import AssignmentStatus, ProductType
from assetverse.schemas.common import CamelModel


class AssetCreateRequest(CamelModel):
    product_name: str = Field(..., min_length=1, max_length=256)
    product_type: ProductType
    product_quantity: int = Field(..., ge=1)
    product_image: str | None = None


class AssetUpdateRequest(CamelModel):
    """Partial edit; availableQuantity is derived, never set directly."""

    product_name: str | None = Field(default=None, min_length=1, max_length=256)
    product_type: ProductType | None = None
    product_quantity: int | None = Field(default=None, ge=1)
    product_image: str | None = None


class AssetResponse(CamelModel):
    id: str
    product_name: str
    product_type: ProductType
    product_quantity: int
    available_quantity: int
    hr_email: str
    company_name: str
    product_image: str | None = None
    date_added: datetime | None = None
    updated_at: datetime | None = None


class DirectAssignRequest(CamelModel):
    """Request body for POST /assign-asset."""

    asset_id: str = Field(..., min_length=1)
    employee_email: EmailStr


class AssignmentResponse(CamelModel):
    id: str
    asset_id: str
    product_name: str
    product_type: ProductType
    employee_email: str
    employee_name: str
    hr_email: str
    company_name: str
    status: AssignmentStatus
    assignment_date: datetime | None = None
    request_id: str | None = None
    return_date: datetime | None = None
