"""User API schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from assetverse.domain.enums import UserRole
from assetverse.schemas.common import CamelModel


class UserCreateRequest(CamelModel):
    """Request body for signup. companyName is required for HR accounts."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=128)
    role: UserRole
    company_name: str | None = Field(default=None, max_length=256)
    company_logo: str | None = None
    profile_image: str | None = None
    date_of_birth: str | None = None

    @model_validator(mode="after")
    def _company_for_hr(self) -> "UserCreateRequest":
        if self.role == UserRole.HR and not (self.company_name and self.company_name.strip()):
            raise ValueError("companyName is required for HR accounts")
        return self


class UserUpdateRequest(CamelModel):
    """Request body for profile edit (partial). Other fields are ignored."""

    name: str | None = Field(default=None, min_length=1, max_length=128)
    profile_image: str | None = None
    date_of_birth: str | None = None
    company_logo: str | None = None


class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    company_name: str | None = None
    company_logo: str | None = None
    package_limit: int | None = None
    current_employees: int | None = None
    subscription: str | None = None
    profile_image: str | None = None
    date_of_birth: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
