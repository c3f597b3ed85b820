"""Payment gateway implementations."""
from .base import LedgerEntry, PaymentGateway
from .paypal_gateway import PayPalGateway
from .stripe_gateway import StripeGateway

__all__ = ["LedgerEntry", "PaymentGateway", "PayPalGateway", "StripeGateway"]
