"""Tests for core data models."""

import dataclasses

import pytest

from kelly_tools.core.models import (
    BetRecommendation,
    BetRecommendationFull,
    CalculatorSettings,
    Outcome,
    PortfolioBetRecommendation,
    PositionModel,
    SimulatedBet,
)


class TestOutcome:
    """Tests for Outcome enum."""

    def test_values(self) -> None:
        """Test the wire values of each side."""
        assert Outcome.YES.value == "YES"
        assert Outcome.NO.value == "NO"

    def test_lookup_by_value(self) -> None:
        """Test constructing an outcome from its string value."""
        assert Outcome("NO") is Outcome.NO


class TestRecommendations:
    """Tests for the recommendation dataclasses."""

    def test_full_extends_basic(self) -> None:
        """Test a full recommendation is also a basic one."""
        full = BetRecommendationFull(
            amount=10.0, outcome=Outcome.YES, shares=19.0, probability_after=0.52
        )
        assert isinstance(full, BetRecommendation)
        assert full.shares == 19.0  # noqa: PLR2004

    def test_portfolio_extends_full(self) -> None:
        """Test the portfolio recommendation carries the bracket."""
        rec = PortfolioBetRecommendation(
            amount=10.0,
            outcome=Outcome.NO,
            shares=19.0,
            probability_after=0.48,
            amount_low=8.0,
            amount_high=12.0,
        )
        assert isinstance(rec, BetRecommendationFull)
        assert rec.amount_low < rec.amount < rec.amount_high

    def test_frozen(self) -> None:
        """Test recommendations are immutable."""
        rec = BetRecommendation(amount=1.0, outcome=Outcome.YES)
        with pytest.raises(dataclasses.FrozenInstanceError):
            rec.amount = 2.0  # type: ignore[misc]


class TestPositionModel:
    """Tests for PositionModel."""

    @pytest.mark.parametrize("probability", [0.0, 0.3, 1.0])
    def test_valid(self, probability: float) -> None:
        """Test probabilities in [0, 1] are accepted."""
        assert PositionModel(probability=probability, payout=5.0).probability == probability

    @pytest.mark.parametrize("probability", [-0.1, 1.1])
    def test_invalid_probability(self, probability: float) -> None:
        """Test probabilities outside [0, 1] are rejected."""
        with pytest.raises(ValueError, match="probability must be between 0 and 1"):
            PositionModel(probability=probability, payout=5.0)


class TestSimulatedBet:
    """Tests for SimulatedBet."""

    def test_probability_optional(self) -> None:
        """Test a simulator may omit the post-trade probability."""
        assert SimulatedBet(new_shares=3.0, probability_after=None).probability_after is None


class TestCalculatorSettings:
    """Tests for CalculatorSettings."""

    def test_defaults(self) -> None:
        """Test the default solver parameters."""
        settings = CalculatorSettings()
        assert settings.iterations == 10  # noqa: PLR2004
        assert settings.tolerance == pytest.approx(1e-6)
        assert settings.odds_step == pytest.approx(0.1)
        assert settings.deference_factor == pytest.approx(0.5)

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("iterations", 0, "iterations must be positive"),
            ("tolerance", 0.0, "tolerance must be positive"),
            ("odds_step", -0.1, "odds_step must be positive"),
            ("deference_factor", 1.5, "deference_factor must be between 0 and 1"),
        ],
    )
    def test_invalid(self, field: str, value: float, message: str) -> None:
        """Test each parameter is validated."""
        with pytest.raises(ValueError, match=message):
            CalculatorSettings(**{field: value})  # type: ignore[arg-type]
