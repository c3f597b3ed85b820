"""Payment gateway contract and shared ledger record."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable

from ..models import PaymentRequest, PaymentResult


@dataclass
class LedgerEntry:
    """Status and remaining refundable amount of one transaction."""
    status: str
    amount: Decimal


@runtime_checkable
class PaymentGateway(Protocol):
    """Capability set every payment provider implements."""

    name: str

    async def charge(self, request: PaymentRequest) -> PaymentResult:
        ...

    async def refund(self, transaction_id: str, amount: Decimal) -> PaymentResult:
        ...

    async def get_status(self, transaction_id: str) -> str:
        ...

    async def validate_payment_method(self, payment_method_id: str) -> bool:
        ...
