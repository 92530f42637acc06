"""Core data models shared across the Kelly tools application.

Define the immutable value objects (Outcome, BetRecommendation,
PositionModel, SimulatedBet, CalculatorSettings) that flow between the
market sources, the payout distribution engine, and the bet optimizers.
"""

from dataclasses import dataclass
from enum import Enum

_DEFAULT_ITERATIONS = 10
_DEFAULT_TOLERANCE = 1e-6
_DEFAULT_ODDS_STEP = 0.1
_DEFAULT_DEFERENCE = 0.5


class Outcome(Enum):
    """Side of a binary market being bought."""

    YES = "YES"
    NO = "NO"


@dataclass(frozen=True)
class BetRecommendation:
    """Recommended stake and side, ignoring what the trade does to the market."""

    amount: float
    outcome: Outcome


@dataclass(frozen=True)
class BetRecommendationFull(BetRecommendation):
    """Recommended stake plus the simulated result of placing it.

    ``shares`` is the number of winning-outcome shares the stake buys and
    ``probability_after`` the market-implied probability once the trade
    has moved the pool.
    """

    shares: float
    probability_after: float


@dataclass(frozen=True)
class PortfolioBetRecommendation(BetRecommendationFull):
    """Recommendation from the portfolio-aware optimizer with its bracket.

    ``amount_low`` is the optimum when illiquid holdings are ignored and
    ``amount_high`` the optimum when they are treated as certain cash. The
    recommended ``amount`` lies between the two.
    """

    amount_low: float
    amount_high: float


@dataclass(frozen=True)
class PositionModel:
    """Independent binary bet paying ``payout`` with ``probability``, else nothing."""

    probability: float
    payout: float

    def __post_init__(self) -> None:
        """Validate probability is between 0 and 1."""
        if not (0.0 <= self.probability <= 1.0):
            msg = f"probability must be between 0 and 1, got {self.probability}"
            raise ValueError(msg)


@dataclass(frozen=True)
class SimulatedBet:
    """Result of simulating a hypothetical trade against an AMM without placing it."""

    new_shares: float
    probability_after: float | None


@dataclass(frozen=True)
class CalculatorSettings:
    """Tunable parameters for the liquidity-aware optimizers.

    Attributes:
        iterations: Newton iteration cap for each root find.
        tolerance: Step size below which the root finder reports convergence.
        odds_step: Central-difference step used when differentiating the
            English odds returned by the AMM simulator. Steps much finer
            than this are unstable against simulator rounding.
        deference_factor: Default weight given to the personal estimate
            over the market probability.

    """

    iterations: int = _DEFAULT_ITERATIONS
    tolerance: float = _DEFAULT_TOLERANCE
    odds_step: float = _DEFAULT_ODDS_STEP
    deference_factor: float = _DEFAULT_DEFERENCE

    def __post_init__(self) -> None:
        """Validate the solver parameters."""
        if self.iterations <= 0:
            msg = f"iterations must be positive, got {self.iterations}"
            raise ValueError(msg)
        if self.tolerance <= 0:
            msg = f"tolerance must be positive, got {self.tolerance}"
            raise ValueError(msg)
        if self.odds_step <= 0:
            msg = f"odds_step must be positive, got {self.odds_step}"
            raise ValueError(msg)
        if not (0.0 <= self.deference_factor <= 1.0):
            msg = f"deference_factor must be between 0 and 1, got {self.deference_factor}"
            raise ValueError(msg)
