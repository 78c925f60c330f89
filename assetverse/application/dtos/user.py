"""DTOs for user use cases."""

from dataclasses import dataclass

from assetverse.domain.enums import UserRole


@dataclass(frozen=True)
class CreateUserCommand:
    """Signup input. company_name is required when role is HR."""

    email: str
    name: str
    role: UserRole
    company_name: str | None = None
    company_logo: str | None = None
    profile_image: str | None = None
    date_of_birth: str | None = None


@dataclass(frozen=True)
class UpdateProfileCommand:
    """Editable profile fields; None leaves a field unchanged."""

    name: str | None = None
    profile_image: str | None = None
    date_of_birth: str | None = None
    company_logo: str | None = None
