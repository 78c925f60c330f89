"""Payment processor adapters."""

from assetverse.infrastructure.payments.stripe_gateway import StripePaymentGateway

__all__ = ["StripePaymentGateway"]
