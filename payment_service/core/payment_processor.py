"""
Main payment processor.

Orchestrates the payment flow:
1. Audit the attempt
2. Fraud check (rejection ends the flow)
3. Charge through the gateway
4. Audit the gateway outcome
5. Email a confirmation on success
"""
from decimal import Decimal

from ..audit import AuditLogger
from ..gateways import PaymentGateway
from ..models import (
    AuditEvent,
    AuditOutcome,
    Customer,
    GatewayErrorCode,
    NotificationPayload,
    PaymentRequest,
    PaymentResult,
)
from ..monitoring import get_logger, metrics
from ..notifications import NotificationService
from ..security import FraudDetector

logger = get_logger(__name__)

FRAUD_DECLINED_MESSAGE = "Payment declined due to fraud check"


def _outcome(success: bool) -> AuditOutcome:
    return AuditOutcome.SUCCESS if success else AuditOutcome.FAILURE


class PaymentProcessor:
    """
    Payment processing orchestrator.

    Business failures come back as PaymentResult values; the gateway's
    result is returned unchanged unless the fraud check rejects the payment.
    """

    def __init__(
        self,
        gateway: PaymentGateway,
        fraud_detector: FraudDetector,
        audit_logger: AuditLogger,
        notification_service: NotificationService,
    ):
        self.gateway = gateway
        self.fraud_detector = fraud_detector
        self.audit_logger = audit_logger
        self.notification_service = notification_service

        logger.info("payment_processor_initialized", gateway=gateway.name)

    async def process_payment(self, request: PaymentRequest, customer: Customer) -> PaymentResult:
        """
        Run a payment through fraud screening and the gateway.

        Args:
            request: Payment request
            customer: Paying customer with baseline risk score

        Returns:
            PaymentResult: Gateway result, or a fraud rejection
        """
        log = logger.bind(payment_id=request.id, customer_id=customer.id)
        log.info(
            "payment_processing_started",
            amount=str(request.amount),
            currency=request.currency,
        )

        # Step 1: Log payment attempt
        await self.audit_logger.log(
            AuditEvent(
                event_type="PAYMENT_INITIATED",
                actor=customer.id,
                resource=request.id,
                action="process_payment",
                outcome=AuditOutcome.SUCCESS,
                details={"amount": request.amount, "currency": request.currency},
            )
        )

        # Step 2: Fraud check
        fraud_result = await self.fraud_detector.check_transaction(request, customer)
        if not fraud_result.approved:
            await self.audit_logger.log(
                AuditEvent(
                    event_type="FRAUD_REJECTED",
                    actor=customer.id,
                    resource=request.id,
                    action="fraud_check",
                    outcome=AuditOutcome.FAILURE,
                    details={"reasons": fraud_result.reasons},
                )
            )
            metrics.payment_requests_total.labels(
                gateway=self.gateway.name, status="fraud_rejected"
            ).inc()
            log.warning(
                "payment_fraud_rejected",
                risk_score=fraud_result.risk_score,
                reasons=fraud_result.reasons,
            )
            return PaymentResult.failure(GatewayErrorCode.FRAUD_REJECTED, FRAUD_DECLINED_MESSAGE)

        if fraud_result.requires_review:
            log.warning("payment_flagged_for_review", risk_score=fraud_result.risk_score)

        # Step 3: Process through gateway
        result = await self.gateway.charge(request)

        # Step 4: Log result
        await self.audit_logger.log(
            AuditEvent(
                event_type="PAYMENT_SUCCESS" if result.success else "PAYMENT_FAILED",
                actor=customer.id,
                resource=request.id,
                action="charge",
                outcome=_outcome(result.success),
                details={"transaction_id": result.transaction_id},
            )
        )
        metrics.payment_requests_total.labels(
            gateway=self.gateway.name, status="success" if result.success else "failed"
        ).inc()

        # Step 5: Send notifications
        if result.success:
            metrics.payment_amount.observe(float(request.amount))
            delivered = await self.notification_service.send(
                NotificationPayload(
                    channel="email",
                    recipient=customer.email,
                    subject="Payment Confirmation",
                    body=f"Your payment of {request.amount} {request.currency} was successful.",
                )
            )
            if not delivered:
                log.warning("payment_confirmation_not_delivered", recipient=customer.email)
            log.info("payment_completed", transaction_id=result.transaction_id)
        else:
            log.warning("payment_failed", error=result.error, error_code=result.error_code)

        return result

    async def refund_payment(self, transaction_id: str, amount: Decimal, reason: str) -> PaymentResult:
        """
        Refund a charged transaction.

        Args:
            transaction_id: Transaction returned by the charge
            amount: Amount to refund
            reason: Free-text reason kept in the audit trail

        Returns:
            PaymentResult: Gateway refund result
        """
        await self.audit_logger.log(
            AuditEvent(
                event_type="REFUND_INITIATED",
                actor="system",
                resource=transaction_id,
                action="refund",
                outcome=AuditOutcome.SUCCESS,
                details={"amount": amount, "reason": reason},
            )
        )

        result = await self.gateway.refund(transaction_id, amount)

        await self.audit_logger.log(
            AuditEvent(
                event_type="REFUND_SUCCESS" if result.success else "REFUND_FAILED",
                actor="system",
                resource=transaction_id,
                action="refund_complete",
                outcome=_outcome(result.success),
            )
        )
        metrics.refund_requests_total.labels(
            gateway=self.gateway.name, status="success" if result.success else "failed"
        ).inc()

        logger.info(
            "refund_processed",
            transaction_id=transaction_id,
            success=result.success,
            error=result.error,
        )
        return result

    async def get_transaction_status(self, transaction_id: str) -> str:
        return await self.gateway.get_status(transaction_id)
