"""Assignment domain entity: one unit of an asset held by one employee."""

from dataclasses import dataclass
from datetime import datetime

from assetverse.domain.enums import AssignmentStatus, ProductType
from assetverse.domain.exceptions import InvalidStateException


@dataclass
class AssignmentEntity:
    """Domain entity for an assignment. assigned -> returned (terminal)."""

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

    def is_held_by(self, email: str) -> bool:
        return self.employee_email == email

    def is_assigned(self) -> bool:
        return self.status == AssignmentStatus.ASSIGNED

    def mark_returned(self, at: datetime) -> None:
        """Close the assignment.

        Raises:
            InvalidStateException: If the assignment is already returned.
        """
        if not self.is_assigned():
            raise InvalidStateException(
                "assignment", self.status.value, AssignmentStatus.ASSIGNED.value
            )
        self.status = AssignmentStatus.RETURNED
        self.return_date = at
