"""DTOs for package purchase use cases."""

from dataclasses import dataclass

from assetverse.domain.entities import PaymentEntity, UserEntity


@dataclass(frozen=True)
class CheckoutResult:
    """Hosted checkout session the client redirects to."""

    session_id: str
    url: str | None


@dataclass(frozen=True)
class PaymentConfirmation:
    """Recorded payment plus the HR account with its raised limit."""

    payment: PaymentEntity
    user: UserEntity
