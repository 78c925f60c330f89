"""Package and payment API: catalog, checkout, confirmation, history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from assetverse.api.dependencies import HRUser, get_package_service, get_payment_service
from assetverse.application.use_cases import PackageService, PaymentService
from assetverse.core.limiter import limit_writes
from assetverse.schemas.payment import (
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    PackageResponse,
    PaymentResponse,
)

router = APIRouter()

PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]


@router.get("/packages", response_model=list[PackageResponse])
async def list_packages(
    current_user: HRUser,
    package_service: Annotated[PackageService, Depends(get_package_service)],
) -> list[PackageResponse]:
    """Package catalog, cheapest first."""
    return [PackageResponse.from_entity(p) for p in await package_service.list_packages()]


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
@limit_writes
async def create_checkout_session(
    request: Request,
    body: CheckoutSessionRequest,
    current_user: HRUser,
    payment_service: PaymentServiceDep,
) -> CheckoutSessionResponse:
    """Start a hosted checkout for a package upgrade."""
    result = await payment_service.create_checkout(current_user, body.package_id)
    return CheckoutSessionResponse(session_id=result.session_id, url=result.url)


@router.post("/confirm-payment", response_model=ConfirmPaymentResponse)
@limit_writes
async def confirm_payment(
    request: Request,
    body: ConfirmPaymentRequest,
    current_user: HRUser,
    payment_service: PaymentServiceDep,
) -> ConfirmPaymentResponse:
    """Record a paid checkout session and raise the employee limit."""
    confirmation = await payment_service.confirm_payment(current_user, body.session_id)
    return ConfirmPaymentResponse(
        package_limit=confirmation.user.package_limit or 0,
        subscription=confirmation.user.subscription or "",
        payment=PaymentResponse.from_entity(confirmation.payment),
    )


@router.get("/payments", response_model=list[PaymentResponse])
async def list_payments(
    current_user: HRUser, payment_service: PaymentServiceDep
) -> list[PaymentResponse]:
    """The caller's payment history, newest first."""
    return [PaymentResponse.from_entity(p) for p in await payment_service.list_payments(current_user)]
