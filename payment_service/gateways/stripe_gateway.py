"""
Simulated Stripe gateway.

Charges and refunds are recorded in an in-memory ledger owned by the
instance; transaction ids resolve for the lifetime of that instance.
"""
import time
import uuid
from decimal import Decimal
from typing import Dict

from ..models import GatewayErrorCode, PaymentRequest, PaymentResult
from ..monitoring import get_logger
from .base import LedgerEntry

logger = get_logger(__name__)


class StripeGateway:
    """Stripe-flavoured gateway with a 10,000 per-charge ceiling."""

    name = "Stripe"
    max_amount = Decimal("10000")

    def __init__(self, api_key: str):
        """
        Initialize Stripe gateway.

        Args:
            api_key: Stripe secret API key
        """
        self.api_key = api_key
        self._transactions: Dict[str, LedgerEntry] = {}

    @staticmethod
    def _new_transaction_id() -> str:
        return f"stripe_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"

    async def charge(self, request: PaymentRequest) -> PaymentResult:
        """
        Charge the request amount.

        Args:
            request: Payment request

        Returns:
            PaymentResult: Success with transaction id, or a typed failure
        """
        if request.amount <= 0:
            logger.warning("stripe_charge_rejected", payment_id=request.id, reason="invalid_amount")
            return PaymentResult.failure(GatewayErrorCode.INVALID_AMOUNT, "Invalid amount")

        if request.amount > self.max_amount:
            logger.warning("stripe_charge_rejected", payment_id=request.id, reason="limit_exceeded")
            return PaymentResult.failure(GatewayErrorCode.LIMIT_EXCEEDED, "Amount exceeds limit")

        transaction_id = self._new_transaction_id()
        self._transactions[transaction_id] = LedgerEntry(status="completed", amount=request.amount)

        logger.info(
            "stripe_charge_completed",
            payment_id=request.id,
            transaction_id=transaction_id,
            amount=str(request.amount),
            currency=request.currency,
        )

        return PaymentResult(
            success=True,
            transaction_id=transaction_id,
            gateway_response={"provider": "stripe", "charge_id": transaction_id},
        )

    async def refund(self, transaction_id: str, amount: Decimal) -> PaymentResult:
        """
        Refund part or all of a completed charge.

        Args:
            transaction_id: Transaction returned by charge
            amount: Positive amount to refund, at most the remaining balance

        Returns:
            PaymentResult: Success with refund id, or a typed failure
        """
        transaction = self._transactions.get(transaction_id)

        if transaction is None:
            return PaymentResult.failure(GatewayErrorCode.NOT_FOUND, "Transaction not found")

        amount = Decimal(str(amount))
        if amount <= 0:
            return PaymentResult.failure(GatewayErrorCode.INVALID_AMOUNT, "Invalid amount")

        if amount > transaction.amount:
            return PaymentResult.failure(
                GatewayErrorCode.AMOUNT_EXCEEDS_ORIGINAL, "Refund amount exceeds original charge"
            )

        transaction.status = "refunded"
        transaction.amount -= amount

        logger.info(
            "stripe_refund_completed",
            transaction_id=transaction_id,
            amount=str(amount),
            remaining=str(transaction.amount),
        )

        return PaymentResult(success=True, transaction_id=f"refund_{transaction_id}")

    async def get_status(self, transaction_id: str) -> str:
        transaction = self._transactions.get(transaction_id)
        return transaction.status if transaction else "not_found"

    async def validate_payment_method(self, payment_method_id: str) -> bool:
        return payment_method_id.startswith("pm_")
