"""
Heuristic fraud detection.

Risk score = customer baseline + fixed penalties:
- velocity: too many attempts in the trailing window   (+0.20)
- amount anomaly: unusually large or round amount      (+0.15)
- geography: request metadata country is high risk     (+0.25)

Every check is recorded for velocity tracking, including rejected attempts.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..models import Customer, FraudCheckResult, PaymentRequest, utc_now
from ..monitoring import get_logger, metrics

logger = get_logger(__name__)

VELOCITY_PENALTY = 0.2
AMOUNT_PENALTY = 0.15
GEOGRAPHY_PENALTY = 0.25
REVIEW_THRESHOLD = 0.5

LARGE_AMOUNT = Decimal("5000")
ROUND_AMOUNT_UNIT = Decimal("1000")

# Placeholder region codes
HIGH_RISK_COUNTRIES = frozenset({"XX", "YY", "ZZ"})

CheckOutcome = Tuple[bool, str]


class FraudDetector:
    """
    Per-transaction fraud heuristics with in-memory velocity tracking.

    Velocity history is owned by the instance; share one detector across
    processors to share history.
    """

    def __init__(
        self,
        velocity_window: int = 3600,
        max_transactions_per_window: int = 10,
        high_risk_threshold: float = 0.7,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize fraud detector.

        Args:
            velocity_window: Trailing window in seconds
            max_transactions_per_window: Attempts allowed inside the window
            high_risk_threshold: Score at or above which payments are rejected
            clock: Source of the current time
        """
        if velocity_window <= 0:
            raise ValueError("velocity_window must be positive")
        if not 0 <= high_risk_threshold <= 1:
            raise ValueError("Threshold must be between 0 and 1")

        self.velocity_window = velocity_window
        self.max_transactions_per_window = max_transactions_per_window
        self.high_risk_threshold = high_risk_threshold
        self._clock = clock
        self._recent_transactions: Dict[str, List[datetime]] = {}

    def _window_start(self) -> datetime:
        return self._clock() - timedelta(seconds=self.velocity_window)

    async def check_transaction(
        self, request: PaymentRequest, customer: Customer
    ) -> FraudCheckResult:
        """
        Assess a payment request for the given customer.

        Returns:
            FraudCheckResult with clamped score, reasons in check order,
            and approval/review flags
        """
        reasons: List[str] = []
        risk_score = customer.risk_score

        checks = (
            (self._check_velocity(customer.id), VELOCITY_PENALTY),
            (self._check_amount_anomaly(request.amount), AMOUNT_PENALTY),
            (self._check_geographic(request.metadata), GEOGRAPHY_PENALTY),
        )
        for (passed, reason), penalty in checks:
            if not passed:
                reasons.append(reason)
                risk_score += penalty

        self._record_transaction(customer.id)

        risk_score = min(risk_score, 1.0)
        result = FraudCheckResult(
            approved=risk_score < self.high_risk_threshold,
            risk_score=risk_score,
            reasons=reasons,
            requires_review=REVIEW_THRESHOLD <= risk_score < self.high_risk_threshold,
        )

        metrics.fraud_checks_total.labels(decision=result.decision.value).inc()
        metrics.fraud_risk_score.observe(result.risk_score)

        logger.info(
            "fraud_check_completed",
            payment_id=request.id,
            customer_id=customer.id,
            risk_score=round(result.risk_score, 3),
            decision=result.decision.value,
            reasons=reasons,
        )
        return result

    def _check_velocity(self, customer_id: str) -> CheckOutcome:
        window_start = self._window_start()
        transactions = self._recent_transactions.get(customer_id, [])
        recent_count = sum(1 for t in transactions if t > window_start)

        if recent_count >= self.max_transactions_per_window:
            return False, "Too many transactions in short time period"
        return True, ""

    @staticmethod
    def _check_amount_anomaly(amount: Decimal) -> CheckOutcome:
        if amount > LARGE_AMOUNT:
            return False, "Unusually large transaction amount"
        if amount % ROUND_AMOUNT_UNIT == 0 and amount > ROUND_AMOUNT_UNIT:
            return False, "Suspicious round amount"
        return True, ""

    @staticmethod
    def _check_geographic(metadata: Optional[Mapping[str, str]]) -> CheckOutcome:
        country = (metadata or {}).get("country")
        if not country:
            return True, ""
        if country in HIGH_RISK_COUNTRIES:
            return False, "Transaction from high-risk region"
        return True, ""

    def _record_transaction(self, customer_id: str) -> None:
        transactions = self._recent_transactions.get(customer_id, [])
        transactions.append(self._clock())

        window_start = self._window_start()
        self._recent_transactions[customer_id] = [t for t in transactions if t > window_start]

    def get_risk_score(self, customer_id: str) -> float:
        """More recorded transactions means a higher base risk, capped at 0.5."""
        transactions = self._recent_transactions.get(customer_id, [])
        return min(len(transactions) * 0.05, 0.5)
