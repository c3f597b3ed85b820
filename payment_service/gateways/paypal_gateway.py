"""Simulated PayPal gateway (order creation and capture in one step)."""
import time
import uuid
from decimal import Decimal
from typing import Dict

from ..models import GatewayErrorCode, PaymentRequest, PaymentResult
from ..monitoring import get_logger
from .base import LedgerEntry

logger = get_logger(__name__)


class PayPalGateway:
    """PayPal-flavoured gateway; allows larger charges than Stripe."""

    name = "PayPal"
    max_amount = Decimal("25000")

    def __init__(self, client_id: str, client_secret: str):
        self.client_id = client_id
        self.client_secret = client_secret
        self._orders: Dict[str, LedgerEntry] = {}

    async def charge(self, request: PaymentRequest) -> PaymentResult:
        if request.amount <= 0:
            logger.warning("paypal_charge_rejected", payment_id=request.id, reason="invalid_amount")
            return PaymentResult.failure(GatewayErrorCode.INVALID_AMOUNT, "Invalid amount")

        if request.amount > self.max_amount:
            logger.warning("paypal_charge_rejected", payment_id=request.id, reason="limit_exceeded")
            return PaymentResult.failure(
                GatewayErrorCode.LIMIT_EXCEEDED, "Amount exceeds PayPal limit"
            )

        order_id = f"paypal_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
        self._orders[order_id] = LedgerEntry(status="COMPLETED", amount=request.amount)

        logger.info(
            "paypal_order_captured",
            payment_id=request.id,
            order_id=order_id,
            amount=str(request.amount),
            currency=request.currency,
        )

        return PaymentResult(
            success=True,
            transaction_id=order_id,
            gateway_response={
                "provider": "paypal",
                "order_id": order_id,
                "capture_id": f"capture_{order_id}",
            },
        )

    async def refund(self, transaction_id: str, amount: Decimal) -> PaymentResult:
        order = self._orders.get(transaction_id)

        if order is None:
            return PaymentResult.failure(GatewayErrorCode.NOT_FOUND, "Order not found")

        amount = Decimal(str(amount))
        if amount <= 0:
            return PaymentResult.failure(GatewayErrorCode.INVALID_AMOUNT, "Invalid amount")

        if amount > order.amount:
            return PaymentResult.failure(
                GatewayErrorCode.AMOUNT_EXCEEDS_ORIGINAL, "Refund amount exceeds original payment"
            )

        order.status = "REFUNDED"
        order.amount -= amount

        logger.info(
            "paypal_refund_completed",
            order_id=transaction_id,
            amount=str(amount),
            remaining=str(order.amount),
        )

        return PaymentResult(success=True, transaction_id=f"refund_{transaction_id}")

    async def get_status(self, transaction_id: str) -> str:
        order = self._orders.get(transaction_id)
        return order.status if order else "NOT_FOUND"

    async def validate_payment_method(self, payment_method_id: str) -> bool:
        # PayPal accepts vaulted ids or account emails
        return payment_method_id.startswith("paypal_") or "@" in payment_method_id
