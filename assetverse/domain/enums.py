"""Domain enumerations for the AssetVerse application.

Enums represent fixed sets of domain values (roles, product types, and the
status of requests, assignments and affiliations).
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation or serialization)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class UserRole(_ValuesMixin, str, Enum):
    """Account role. HR accounts own a company and its inventory."""

    HR = "hr"
    EMPLOYEE = "employee"


class ProductType(_ValuesMixin, str, Enum):
    RETURNABLE = "Returnable"
    NON_RETURNABLE = "Non-returnable"


class RequestStatus(_ValuesMixin, str, Enum):
    """Asset request status. APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AssignmentStatus(_ValuesMixin, str, Enum):
    """Assignment status. RETURNED is terminal."""

    ASSIGNED = "assigned"
    RETURNED = "returned"


class AffiliationStatus(_ValuesMixin, str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PaymentStatus(_ValuesMixin, str, Enum):
    COMPLETED = "completed"
