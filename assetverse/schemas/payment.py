"""Package and payment API schemas."""

from datetime import datetime

from pydantic import Field

from assetverse.domain.enums import PaymentStatus
from assetverse.schemas.common import CamelModel


class PackageResponse(CamelModel):
    id: str
    name: str
    employee_limit: int
    price: float
    features: list[str] = Field(default_factory=list)


class CheckoutSessionRequest(CamelModel):
    package_id: str = Field(..., min_length=1)


class CheckoutSessionResponse(CamelModel):
    session_id: str
    url: str | None = None


class ConfirmPaymentRequest(CamelModel):
    session_id: str = Field(..., min_length=1)


class PaymentResponse(CamelModel):
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


class ConfirmPaymentResponse(CamelModel):
    success: bool = True
    package_limit: int
    subscription: str
    payment: PaymentResponse
