"""Application DTOs (commands and results passed across the use-case boundary)."""

from assetverse.application.dtos.asset import CreateAssetCommand, UpdateAssetCommand
from assetverse.application.dtos.payment import CheckoutResult, PaymentConfirmation
from assetverse.application.dtos.user import CreateUserCommand, UpdateProfileCommand

__all__ = [
    "CheckoutResult",
    "CreateAssetCommand",
    "CreateUserCommand",
    "PaymentConfirmation",
    "UpdateAssetCommand",
    "UpdateProfileCommand",
]
