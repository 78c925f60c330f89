"""Asset request domain entity.

An employee asks for one unit of an asset; HR approves or rejects.
pending -> approved | rejected, both terminal.
"""

from dataclasses import dataclass
from datetime import datetime

from assetverse.domain.enums import ProductType, RequestStatus
from assetverse.domain.exceptions import InvalidStateException


@dataclass
class AssetRequestEntity:
    """Domain entity for an asset request."""

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

    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def ensure_pending(self) -> None:
        """Raise InvalidStateException unless the request can still be decided."""
        if not self.is_pending():
            raise InvalidStateException(
                "request", self.status.value, RequestStatus.PENDING.value
            )

    def approve(self, processed_by: str, at: datetime) -> None:
        self.ensure_pending()
        self.status = RequestStatus.APPROVED
        self.processed_by = processed_by
        self.processed_date = at

    def reject(self, processed_by: str, at: datetime, note: str | None = None) -> None:
        self.ensure_pending()
        self.status = RequestStatus.REJECTED
        self.processed_by = processed_by
        self.processed_date = at
        if note:
            self.note = note
