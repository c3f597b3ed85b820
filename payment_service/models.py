"""
Data models for the payment service.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GatewayErrorCode(str, Enum):
    """Failure kinds reported in a PaymentResult."""
    INVALID_AMOUNT = "invalid_amount"
    LIMIT_EXCEEDED = "limit_exceeded"
    NOT_FOUND = "not_found"
    AMOUNT_EXCEEDS_ORIGINAL = "amount_exceeds_original"
    FRAUD_REJECTED = "fraud_rejected"


class RiskDecision(str, Enum):
    """Risk decision types."""
    APPROVE = "approve"
    REVIEW = "review"
    REJECT = "reject"


class AuditOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


NotificationChannel = Literal["email", "sms", "push", "webhook"]


class PaymentRequest(BaseModel):
    """
    Incoming payment request.

    The amount is deliberately not range-checked here: gateways own amount
    validation and report it as a failed PaymentResult.
    """
    id: str
    amount: Decimal
    currency: str
    customer_id: str
    payment_method_id: str
    metadata: Optional[Dict[str, str]] = None

    model_config = ConfigDict(frozen=True)


class PaymentResult(BaseModel):
    """Outcome of a gateway or processor operation."""
    success: bool
    transaction_id: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[GatewayErrorCode] = None
    gateway_response: Optional[Any] = None

    @classmethod
    def failure(cls, error_code: GatewayErrorCode, error: str) -> "PaymentResult":
        return cls(success=False, error=error, error_code=error_code)


class Customer(BaseModel):
    id: str
    email: str
    name: str
    risk_score: float = Field(ge=0, le=1, description="Caller-supplied baseline risk 0-1")


class AuditEvent(BaseModel):
    """Append-only audit record."""
    timestamp: datetime = Field(default_factory=utc_now)
    event_type: str
    actor: str
    resource: str
    action: str
    outcome: AuditOutcome
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True)


class FraudCheckResult(BaseModel):
    """Per-call fraud assessment."""
    approved: bool
    risk_score: float = Field(ge=0, le=1, description="Clamped risk score 0-1")
    reasons: List[str] = Field(default_factory=list)
    requires_review: bool = False

    @property
    def decision(self) -> RiskDecision:
        if not self.approved:
            return RiskDecision.REJECT
        if self.requires_review:
            return RiskDecision.REVIEW
        return RiskDecision.APPROVE


class NotificationPayload(BaseModel):
    channel: NotificationChannel
    recipient: str
    subject: str
    body: str
    metadata: Optional[Dict[str, str]] = None
