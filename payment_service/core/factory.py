"""Build a fully wired PaymentProcessor from settings."""
from typing import Optional

from ..audit import AuditLogger, AuditStorage, InMemoryAuditStorage
from ..config import Settings, get_settings
from ..gateways import PaymentGateway, PayPalGateway, StripeGateway
from ..notifications import NotificationService
from ..security import FraudDetector
from .payment_processor import PaymentProcessor


def create_gateway(settings: Settings) -> PaymentGateway:
    """Instantiate the configured default gateway."""
    if settings.default_gateway == "paypal":
        return PayPalGateway(
            client_id=settings.paypal_client_id,
            client_secret=settings.paypal_client_secret,
        )
    return StripeGateway(api_key=settings.stripe_api_key)


def create_payment_processor(
    settings: Optional[Settings] = None,
    audit_storage: Optional[AuditStorage] = None,
) -> PaymentProcessor:
    """
    Factory function to create a configured PaymentProcessor.

    Args:
        settings: Optional settings (defaults to cached settings)
        audit_storage: Optional audit backend (defaults to in-memory)

    Returns:
        PaymentProcessor: Processor with its own gateway, detector,
            audit logger and notification service
    """
    settings = settings or get_settings()

    fraud_detector = FraudDetector(
        velocity_window=settings.fraud_velocity_window,
        max_transactions_per_window=settings.fraud_max_transactions_per_window,
        high_risk_threshold=settings.fraud_high_risk_threshold,
    )

    audit_logger = AuditLogger(
        audit_storage or InMemoryAuditStorage(),
        service_name=settings.app_name,
        environment=settings.app_env,
    )

    notification_service = NotificationService(
        retry_attempts=settings.notification_retry_attempts,
        retry_delay=settings.notification_retry_delay,
    )

    return PaymentProcessor(
        gateway=create_gateway(settings),
        fraud_detector=fraud_detector,
        audit_logger=audit_logger,
        notification_service=notification_service,
    )
