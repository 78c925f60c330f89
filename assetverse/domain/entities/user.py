"""User domain entity (HR or employee account)."""

from dataclasses import dataclass
from datetime import datetime

from assetverse.core.constants import UNLIMITED_PACKAGE_LIMIT
from assetverse.domain.enums import UserRole
from assetverse.domain.exceptions import PackageLimitException, ValidationException


@dataclass
class UserEntity:
    """Domain entity for a user account.

    HR accounts carry the company and its subscription counters
    (package_limit, current_employees). Employees leave those unset.
    """

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

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate account rules. Raises ValidationException if invalid."""
        if not self.name or not self.name.strip():
            raise ValidationException("Name is required", field="name")
        if self.is_hr() and not (self.company_name and self.company_name.strip()):
            raise ValidationException(
                "Company name is required for HR accounts", field="companyName"
            )

    def is_hr(self) -> bool:
        return self.role == UserRole.HR

    def has_employee_capacity(self) -> bool:
        """Return whether one more employee can be affiliated (0 limit = unlimited)."""
        limit = self.package_limit or UNLIMITED_PACKAGE_LIMIT
        if limit == UNLIMITED_PACKAGE_LIMIT:
            return True
        return (self.current_employees or 0) < limit

    def add_employee(self) -> None:
        """Count a newly active affiliation.

        Raises:
            PackageLimitException: If the package limit is already reached.
        """
        if not self.has_employee_capacity():
            raise PackageLimitException(
                self.package_limit or 0, self.current_employees or 0
            )
        self.current_employees = (self.current_employees or 0) + 1

    def remove_employee(self) -> None:
        """Uncount a removed affiliation (floored at zero)."""
        self.current_employees = max(0, (self.current_employees or 0) - 1)

    def apply_package(self, base_limit: int, employee_limit: int, package_name: str) -> None:
        """Raise the employee allowance after a paid upgrade."""
        self.package_limit = base_limit + employee_limit
        self.subscription = package_name.lower()
