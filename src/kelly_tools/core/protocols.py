"""Structural protocol for the market data the optimizers depend on.

Define the ``MarketSource`` interface that decouples the bet optimizers
from concrete market implementations. Any class whose shape matches the
protocol can be used without explicit inheritance (structural subtyping).
"""

from typing import Protocol, runtime_checkable

from kelly_tools.core.models import Outcome, SimulatedBet


@runtime_checkable
class MarketSource(Protocol):
    """Async provider of market probabilities and AMM bet simulations.

    Implementors look up a binary market by slug. Every call is treated as
    a potential round-trip to an external service, so the optimizers await
    each one in sequence.
    """

    async def get_probability(self, slug: str) -> float | None:
        """Return the current market probability, or ``None`` when unavailable."""
        ...

    async def simulate_bet(self, outcome: Outcome, amount: float, slug: str) -> SimulatedBet:
        """Return the shares and post-trade probability of a hypothetical bet."""
        ...
