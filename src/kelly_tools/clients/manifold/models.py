"""Typed data models for Manifold Markets API responses.

Convert the JSON market payload into an immutable dataclass so the rest of
the application never handles raw dictionaries.
"""

from dataclasses import dataclass

from kelly_tools.amm.cpmm import CpmmPool

CPMM_MECHANISM = "cpmm-1"
BINARY_OUTCOME_TYPE = "BINARY"


@dataclass(frozen=True)
class ManifoldMarket:
    """Immutable snapshot of a Manifold market.

    Attributes:
        id: Manifold contract identifier.
        slug: URL slug used to look the market up.
        question: Market question text.
        url: Public web URL of the market.
        mechanism: Market maker mechanism (``"cpmm-1"`` for binary CPMM).
        outcome_type: ``"BINARY"`` for yes/no markets.
        probability: Current YES probability, ``None`` when the API omits it.
        pool_yes: YES shares in the liquidity pool.
        pool_no: NO shares in the liquidity pool.
        p: CPMM weight parameter.
        total_liquidity: Liquidity subsidy in mana.
        is_resolved: Whether the market has resolved.

    """

    id: str
    slug: str
    question: str
    url: str
    mechanism: str
    outcome_type: str
    probability: float | None
    pool_yes: float
    pool_no: float
    p: float
    total_liquidity: float
    is_resolved: bool

    @property
    def is_binary_cpmm(self) -> bool:
        """Return True when the market can be simulated as a binary CPMM."""
        return (
            self.mechanism == CPMM_MECHANISM
            and self.outcome_type == BINARY_OUTCOME_TYPE
            and self.pool_yes > 0
            and self.pool_no > 0
        )

    def pool(self) -> CpmmPool:
        """Return the market's liquidity pool for bet simulation.

        Raises:
            ValueError: If the market is not a binary CPMM market.

        """
        if not self.is_binary_cpmm:
            msg = f"Market {self.slug} is not a binary CPMM market"
            raise ValueError(msg)
        return CpmmPool(yes=self.pool_yes, no=self.pool_no, p=self.p)
