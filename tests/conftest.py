"""
Pytest configuration and fixtures.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, List

import pytest

from payment_service.audit import AuditLogger, InMemoryAuditStorage
from payment_service.core import PaymentProcessor
from payment_service.gateways import PayPalGateway, StripeGateway
from payment_service.models import Customer, NotificationPayload, PaymentRequest
from payment_service.notifications import NotificationService
from payment_service.security import FraudDetector


class FakeClock:
    """Manually advanced clock for velocity window tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FlakyProvider:
    """Provider that fails a fixed number of times before succeeding."""

    def __init__(self, channel: str = "email", failures: int = 0, raises: bool = False) -> None:
        self.channel = channel
        self.failures = failures
        self.raises = raises
        self.calls = 0

    async def send(self, payload: NotificationPayload) -> bool:
        self.calls += 1
        if self.calls <= self.failures:
            if self.raises:
                raise ConnectionError("provider unavailable")
            return False
        return True


def create_request(**overrides: Any) -> PaymentRequest:
    """Create a payment request with sensible defaults."""
    data = {
        "id": "pay_123",
        "amount": Decimal("100"),
        "currency": "USD",
        "customer_id": "cust_123",
        "payment_method_id": "pm_test",
    }
    data.update(overrides)
    return PaymentRequest(**data)


@pytest.fixture
def customer() -> Customer:
    return Customer(id="cust_123", email="test@example.com", name="Test User", risk_score=0.1)


@pytest.fixture
def payment_request() -> PaymentRequest:
    return create_request()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def stripe_gateway() -> StripeGateway:
    return StripeGateway("sk_test_xxx")


@pytest.fixture
def paypal_gateway() -> PayPalGateway:
    return PayPalGateway("client_id", "client_secret")


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage: InMemoryAuditStorage) -> AuditLogger:
    return AuditLogger(audit_storage)


@pytest.fixture
def notification_service(recording_sleep: RecordingSleep) -> NotificationService:
    return NotificationService(sleep=recording_sleep)


@pytest.fixture
def processor(
    stripe_gateway: StripeGateway,
    audit_logger: AuditLogger,
    notification_service: NotificationService,
) -> PaymentProcessor:
    return PaymentProcessor(
        gateway=stripe_gateway,
        fraud_detector=FraudDetector(),
        audit_logger=audit_logger,
        notification_service=notification_service,
    )
