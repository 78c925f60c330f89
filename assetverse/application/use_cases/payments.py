"""Package purchase: checkout, confirmation, history.

A confirmed payment is stored under an ID derived from the checkout session,
created with a must-not-exist precondition in the same commit as the limit
raise. Confirming a session twice therefore records it once. The same commit
creates a per-account upgrade guard, so two different sessions opened before
either was paid cannot both be applied.
"""

from __future__ import annotations

from assetverse.application.dtos.payment import CheckoutResult, PaymentConfirmation
from assetverse.application.interfaces.services import CheckoutRequest, IPaymentGateway
from assetverse.application.interfaces.store import DocumentWrite, IDocumentStore
from assetverse.application.mappers import (
    payment_from_doc,
    payment_to_data,
    user_from_doc,
    user_to_data,
)
from assetverse.application.services.access_policy import AccessPolicy
from assetverse.application.services.conflict_retry import retry_on_conflict
from assetverse.application.use_cases.packages import PackageService
from assetverse.application.use_cases.users import user_doc_id
from assetverse.core.constants import (
    COLLECTION_PAYMENTS,
    COLLECTION_UPGRADE_GUARDS,
    COLLECTION_USERS,
)
from assetverse.domain.entities import PaymentEntity, UserEntity
from assetverse.domain.enums import PaymentStatus
from assetverse.domain.exceptions import (
    AlreadyUpgradedException,
    PaymentAlreadyRecordedException,
    PaymentNotCompletedException,
    ResourceNotFoundException,
    ValidationException,
)
from assetverse.shared.logging import get_logger
from assetverse.shared.utils.datetime import utc_now
from assetverse.shared.utils.generators import key_id

logger = get_logger(__name__)

_PAID = "paid"


def payment_doc_id(session_id: str) -> str:
    return key_id("payment", session_id)


def upgrade_guard_id(hr_email: str) -> str:
    return key_id("upgrade", hr_email)


class PaymentService:
    def __init__(
        self,
        store: IDocumentStore,
        gateway: IPaymentGateway,
        policy: AccessPolicy,
        *,
        base_package_limit: int,
        currency: str = "usd",
        client_url: str = "http://localhost:5173",
        max_attempts: int = 3,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.policy = policy
        self.packages = PackageService(store)
        self.base_package_limit = base_package_limit
        self.currency = currency
        self.client_url = client_url.rstrip("/")
        self.max_attempts = max_attempts

    async def create_checkout(self, actor: UserEntity, package_id: str) -> CheckoutResult:
        """Start a hosted checkout for a package.

        Raises:
            AlreadyUpgradedException: The account already has a payment on record.
            ResourceNotFoundException: Unknown package.
        """
        self.policy.enforce(self.policy.can_manage_inventory(actor))
        if await self.store.get(COLLECTION_UPGRADE_GUARDS, upgrade_guard_id(actor.email)):
            raise AlreadyUpgradedException(actor.email)
        package = await self.packages.get_package(package_id)
        session = await self.gateway.create_checkout_session(
            CheckoutRequest(
                amount_cents=int(round(package.price * 100)),
                currency=self.currency,
                product_name=f"{package.name} Package",
                success_url=f"{self.client_url}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{self.client_url}/upgrade-package",
                customer_email=actor.email,
                metadata={
                    "hrEmail": actor.email,
                    "packageId": package.id,
                    "packageName": package.name,
                    "employeeLimit": str(package.employee_limit),
                },
            )
        )
        return CheckoutResult(session_id=session.id, url=session.url)

    async def confirm_payment(self, actor: UserEntity, session_id: str) -> PaymentConfirmation:
        """Record a paid session and raise the account's employee limit.

        Raises:
            AuthorizationException: Session was started by another account.
            PaymentNotCompletedException: Session is not paid.
            PaymentAlreadyRecordedException: Session was already confirmed.
            AlreadyUpgradedException: Another session was already applied to the account.
        """
        session = await self.gateway.retrieve_checkout_session(session_id)
        self.policy.enforce(self.policy.can_confirm_payment(actor, session))
        if session.payment_status != _PAID:
            raise PaymentNotCompletedException(session.id, session.payment_status)
        try:
            employee_limit = int(session.metadata.get("employeeLimit", ""))
        except ValueError:
            raise ValidationException(
                "Checkout session has no employee limit", field="employeeLimit"
            ) from None
        package_name = session.metadata.get("packageName", "")
        pay_id = payment_doc_id(session.id)

        async def attempt() -> PaymentConfirmation:
            if await self.store.get(COLLECTION_PAYMENTS, pay_id) is not None:
                raise PaymentAlreadyRecordedException(session.id)
            guard_id = upgrade_guard_id(actor.email)
            if await self.store.get(COLLECTION_UPGRADE_GUARDS, guard_id) is not None:
                raise AlreadyUpgradedException(actor.email)
            user_doc = await self.store.get(COLLECTION_USERS, user_doc_id(actor.email))
            if user_doc is None:
                raise ResourceNotFoundException("user", actor.email)
            user = user_from_doc(user_doc)
            now = utc_now()
            user.apply_package(self.base_package_limit, employee_limit, package_name)
            user.updated_at = now
            amount = (
                session.amount_total / 100 if session.amount_total is not None else 0.0
            )
            payment = PaymentEntity(
                id=pay_id,
                hr_email=actor.email,
                package_id=session.metadata.get("packageId", ""),
                package_name=package_name,
                employee_limit=employee_limit,
                amount=amount,
                currency=session.currency or self.currency,
                session_id=session.id,
                status=PaymentStatus.COMPLETED,
                transaction_id=session.payment_intent,
                payment_date=now,
            )
            await self.store.commit(
                [
                    DocumentWrite.create(COLLECTION_PAYMENTS, pay_id, payment_to_data(payment)),
                    DocumentWrite.create(
                        COLLECTION_UPGRADE_GUARDS,
                        guard_id,
                        {"hrEmail": actor.email, "sessionId": session.id},
                    ),
                    DocumentWrite.update(
                        COLLECTION_USERS, user.id, user_to_data(user), user_doc.version
                    ),
                ]
            )
            return PaymentConfirmation(payment=payment, user=user)

        result = await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="confirm_payment"
        )
        logger.info(
            "Payment %s recorded for %s: %s package, limit now %s",
            session.id,
            actor.email,
            package_name,
            result.user.package_limit,
        )
        return result

    async def list_payments(self, actor: UserEntity) -> list[PaymentEntity]:
        """Caller's payment history, newest first."""
        docs = await self.store.query(
            COLLECTION_PAYMENTS,
            {"hrEmail": actor.email},
            order_by="paymentDate",
            descending=True,
        )
        return [payment_from_doc(d) for d in docs]
