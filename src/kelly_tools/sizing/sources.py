"""Concrete ``MarketSource`` implementations.

``CpmmMarketSource`` simulates bets against fixed in-memory pools and needs
no network access. ``ManifoldMarketSource`` reads the live pool of a
Manifold market through ``ManifoldClient`` and simulates bets against it
locally; the client's cache keeps the repeated lookups of one optimization
to a single request.
"""

import logging

from kelly_tools.amm.cpmm import CpmmPool, cpmm_probability, simulate_cpmm_bet
from kelly_tools.clients.manifold.client import ManifoldClient
from kelly_tools.clients.manifold.exceptions import ManifoldAPIError, ManifoldError
from kelly_tools.core.models import Outcome, SimulatedBet

logger = logging.getLogger(__name__)

_HTTP_NOT_FOUND = 404


class CpmmMarketSource:
    """Market source backed by static CPMM pools keyed by slug.

    Args:
        pools: Mapping from market slug to its liquidity pool.

    """

    def __init__(self, pools: dict[str, CpmmPool]) -> None:
        """Initialize with a fixed set of pools."""
        self._pools = dict(pools)

    async def get_probability(self, slug: str) -> float | None:
        """Return the pool's YES probability, or ``None`` for an unknown slug."""
        pool = self._pools.get(slug)
        if pool is None:
            return None
        return cpmm_probability(pool)

    async def simulate_bet(self, outcome: Outcome, amount: float, slug: str) -> SimulatedBet:
        """Simulate a bet against the named pool.

        Raises:
            ValueError: If the slug is unknown.

        """
        pool = self._pools.get(slug)
        if pool is None:
            msg = f"Unknown market: {slug}"
            raise ValueError(msg)
        return simulate_cpmm_bet(pool, outcome, amount)


class ManifoldMarketSource:
    """Market source that reads live pools from the Manifold API.

    Args:
        client: Client used to fetch markets; its cache should outlive a
            single optimization.

    """

    def __init__(self, client: ManifoldClient) -> None:
        """Initialize with a Manifold client."""
        self._client = client

    async def get_probability(self, slug: str) -> float | None:
        """Return the market's YES probability.

        A market that does not exist, or is not a binary CPMM market, is
        reported as unavailable (``None``). Other API failures propagate.
        """
        try:
            market = await self._client.get_market(slug)
        except ManifoldAPIError as exc:
            if exc.status_code == _HTTP_NOT_FOUND:
                logger.info("Market %s not found", slug)
                return None
            raise
        if not market.is_binary_cpmm:
            logger.info("Market %s is not a binary CPMM market", slug)
            return None
        return market.probability

    async def simulate_bet(self, outcome: Outcome, amount: float, slug: str) -> SimulatedBet:
        """Simulate a bet against the market's current pool.

        Raises:
            ManifoldError: If the market cannot be simulated as a binary CPMM.

        """
        market = await self._client.get_market(slug)
        try:
            pool = market.pool()
        except ValueError as exc:
            raise ManifoldError(str(exc)) from exc
        return simulate_cpmm_bet(pool, outcome, amount)
