"""Affiliation API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr

from assetverse.domain.enums import AffiliationStatus
from assetverse.schemas.common import CamelModel


class AffiliationUpdateRequest(CamelModel):
    """Request body for PATCH /affiliations (only removal is supported)."""

    employee_email: EmailStr
    status: Literal["inactive"]


class AffiliationResponse(CamelModel):
    id: str
    employee_email: str
    employee_name: str
    hr_email: str
    company_name: str
    status: AffiliationStatus
    company_logo: str | None = None
    affiliation_date: datetime | None = None
    removed_date: datetime | None = None
