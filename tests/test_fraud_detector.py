"""
Test fraud heuristics.

Penalties on top of the customer's baseline:
- velocity breach           +0.20
- large / round amount      +0.15
- high-risk country         +0.25
"""
from decimal import Decimal

import pytest

from payment_service.models import Customer, RiskDecision
from payment_service.security import FraudDetector
from tests.conftest import FakeClock, create_request


def make_customer(risk_score: float = 0.1, customer_id: str = "cust_1") -> Customer:
    return Customer(id=customer_id, email="test@example.com", name="Test", risk_score=risk_score)


class TestFraudDetector:
    """Test suite for FraudDetector."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_approves_low_risk_transaction(self) -> None:
        detector = FraudDetector(velocity_window=60, max_transactions_per_window=3)

        result = await detector.check_transaction(create_request(amount=Decimal("50")), make_customer())

        assert result.approved is True
        assert result.requires_review is False
        assert result.reasons == []
        assert result.risk_score == pytest.approx(0.1)
        assert result.decision == RiskDecision.APPROVE

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejects_high_risk_customer(self) -> None:
        detector = FraudDetector()

        result = await detector.check_transaction(
            create_request(amount=Decimal("100")), make_customer(risk_score=0.9)
        )

        assert result.approved is False
        assert result.decision == RiskDecision.REJECT

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_flags_velocity_violations(self) -> None:
        detector = FraudDetector(velocity_window=60, max_transactions_per_window=3)
        customer = make_customer(customer_id="cust_velocity")

        for i in range(4):
            await detector.check_transaction(create_request(id=f"pay_{i}", amount=Decimal("50")), customer)

        result = await detector.check_transaction(create_request(id="pay_final", amount=Decimal("50")), customer)

        assert result.risk_score > 0.1
        assert "Too many transactions in short time period" in result.reasons

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_velocity_window_expires(self, clock: FakeClock) -> None:
        detector = FraudDetector(velocity_window=60, max_transactions_per_window=2, clock=clock)
        customer = make_customer()

        for _ in range(2):
            await detector.check_transaction(create_request(amount=Decimal("50")), customer)
            clock.advance(10)

        breached = await detector.check_transaction(create_request(amount=Decimal("50")), customer)
        clock.advance(61)
        recovered = await detector.check_transaction(create_request(amount=Decimal("50")), customer)

        assert breached.risk_score == pytest.approx(0.3)
        assert recovered.risk_score == pytest.approx(0.1)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_velocity_is_tracked_per_customer(self) -> None:
        detector = FraudDetector(velocity_window=60, max_transactions_per_window=1)

        await detector.check_transaction(create_request(), make_customer(customer_id="a"))
        result = await detector.check_transaction(create_request(), make_customer(customer_id="b"))

        assert result.reasons == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejected_attempts_count_towards_velocity(self) -> None:
        detector = FraudDetector(velocity_window=60, max_transactions_per_window=2)
        risky = make_customer(risk_score=0.95)

        for _ in range(2):
            result = await detector.check_transaction(create_request(), risky)
            assert result.approved is False

        assert detector.get_risk_score(risky.id) == pytest.approx(0.1)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_large_amount_penalty(self) -> None:
        detector = FraudDetector()

        result = await detector.check_transaction(create_request(amount=Decimal("6000")), make_customer())

        assert result.reasons == ["Unusually large transaction amount"]
        assert result.risk_score == pytest.approx(0.25)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_round_amount_penalty(self) -> None:
        detector = FraudDetector()

        result = await detector.check_transaction(create_request(amount=Decimal("2000")), make_customer())

        assert result.reasons == ["Suspicious round amount"]
        assert result.risk_score == pytest.approx(0.25)

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [Decimal("1000"), Decimal("1500"), Decimal("999")])
    async def test_amounts_without_anomaly(self, amount: Decimal) -> None:
        detector = FraudDetector()

        result = await detector.check_transaction(create_request(amount=amount), make_customer())

        assert result.reasons == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_large_round_amount_penalised_once(self) -> None:
        detector = FraudDetector()

        result = await detector.check_transaction(create_request(amount=Decimal("8000")), make_customer())

        assert result.reasons == ["Unusually large transaction amount"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_high_risk_country_penalty_and_review(self) -> None:
        detector = FraudDetector()

        result = await detector.check_transaction(
            create_request(metadata={"country": "XX"}), make_customer(risk_score=0.3)
        )

        assert result.reasons == ["Transaction from high-risk region"]
        assert result.risk_score == pytest.approx(0.55)
        assert result.approved is True
        assert result.requires_review is True
        assert result.decision == RiskDecision.REVIEW

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_safe_country_and_missing_metadata_pass(self) -> None:
        detector = FraudDetector()

        with_country = await detector.check_transaction(create_request(metadata={"country": "US"}), make_customer())
        without_country = await detector.check_transaction(create_request(metadata={"ip": "1.2.3.4"}), make_customer())

        assert with_country.reasons == []
        assert without_country.reasons == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_score_is_clamped(self) -> None:
        detector = FraudDetector(velocity_window=60, max_transactions_per_window=1)
        customer = make_customer(risk_score=0.9)
        await detector.check_transaction(create_request(), customer)

        result = await detector.check_transaction(
            create_request(amount=Decimal("9000"), metadata={"country": "ZZ"}), customer
        )

        assert len(result.reasons) == 3
        assert result.risk_score == 1.0
        assert result.approved is False

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_custom_threshold(self) -> None:
        detector = FraudDetector(high_risk_threshold=0.95)

        result = await detector.check_transaction(create_request(), make_customer(risk_score=0.9))

        assert result.approved is True
        assert result.requires_review is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_get_risk_score_grows_and_caps(self) -> None:
        detector = FraudDetector()
        customer = make_customer()

        assert detector.get_risk_score(customer.id) == 0

        for _ in range(3):
            await detector.check_transaction(create_request(), customer)
        assert detector.get_risk_score(customer.id) == pytest.approx(0.15)

        for _ in range(20):
            await detector.check_transaction(create_request(), customer)
        assert detector.get_risk_score(customer.id) == 0.5

    @pytest.mark.unit
    def test_rejects_invalid_threshold(self) -> None:
        with pytest.raises(ValueError, match="between 0 and 1"):
            FraudDetector(high_risk_threshold=1.5)
