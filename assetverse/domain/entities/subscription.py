"""Package catalog and payment ledger entities (read-only / append-only)."""

from dataclasses import dataclass, field
from datetime import datetime

from assetverse.domain.enums import PaymentStatus


@dataclass
class PackageEntity:
    """Subscription tier: how many employees an upgrade adds, and its price."""

    id: str
    name: str
    employee_limit: int
    price: float
    features: list[str] = field(default_factory=list)


@dataclass
class PaymentEntity:
    """Immutable record of a confirmed package purchase."""

    id: str
    hr_email: str
    package_id: str
    package_name: str
    employee_limit: int
    amount: float
    currency: str
    session_id: str
    status: PaymentStatus
    transaction_id: str | None = None
    payment_date: datetime | None = None
