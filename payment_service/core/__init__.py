"""Core payment processing logic."""
from .factory import create_gateway, create_payment_processor
from .payment_processor import FRAUD_DECLINED_MESSAGE, PaymentProcessor

__all__ = [
    "FRAUD_DECLINED_MESSAGE",
    "PaymentProcessor",
    "create_gateway",
    "create_payment_processor",
]
