"""
Payment Service

Payment processing with a pluggable gateway, heuristic fraud screening,
an append-only audit trail and retrying notifications.
"""

from .audit import AuditLogger, AuditStorage, InMemoryAuditStorage
from .core import PaymentProcessor, create_payment_processor
from .gateways import PaymentGateway, PayPalGateway, StripeGateway
from .models import (
    AuditEvent,
    AuditOutcome,
    Customer,
    FraudCheckResult,
    GatewayErrorCode,
    NotificationPayload,
    PaymentRequest,
    PaymentResult,
    RiskDecision,
)
from .notifications import NotificationService
from .security import FraudDetector

__version__ = "1.0.0"

__all__ = [
    "AuditEvent",
    "AuditLogger",
    "AuditOutcome",
    "AuditStorage",
    "Customer",
    "FraudCheckResult",
    "FraudDetector",
    "GatewayErrorCode",
    "InMemoryAuditStorage",
    "NotificationPayload",
    "NotificationService",
    "PaymentGateway",
    "PaymentProcessor",
    "PaymentRequest",
    "PaymentResult",
    "PayPalGateway",
    "RiskDecision",
    "StripeGateway",
    "create_payment_processor",
]
