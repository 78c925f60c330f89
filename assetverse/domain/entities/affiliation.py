"""Affiliation domain entity: the link between an employee and the company they work for.

Unique per (employee, company). Created active on the first approved request,
deactivated on removal, reactivated by a later approval.
"""

from dataclasses import dataclass
from datetime import datetime

from assetverse.domain.enums import AffiliationStatus
from assetverse.domain.exceptions import InvalidStateException


@dataclass
class AffiliationEntity:
    """Domain entity for an employee/company affiliation."""

    id: str
    employee_email: str
    employee_name: str
    hr_email: str
    company_name: str
    status: AffiliationStatus
    company_logo: str | None = None
    affiliation_date: datetime | None = None
    removed_date: datetime | None = None

    def is_active(self) -> bool:
        return self.status == AffiliationStatus.ACTIVE

    def activate(self, at: datetime) -> None:
        """Reactivate an inactive affiliation. No-op when already active."""
        if self.is_active():
            return
        self.status = AffiliationStatus.ACTIVE
        self.affiliation_date = at
        self.removed_date = None

    def deactivate(self, at: datetime) -> None:
        """Remove the employee from the company.

        Raises:
            InvalidStateException: If the affiliation is already inactive.
        """
        if not self.is_active():
            raise InvalidStateException(
                "affiliation", self.status.value, AffiliationStatus.ACTIVE.value
            )
        self.status = AffiliationStatus.INACTIVE
        self.removed_date = at
