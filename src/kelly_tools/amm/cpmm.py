"""Binary constant-product market maker (CPMM) simulation.

Model the weighted constant-product pool used by Manifold binary markets.
The pool holds YES and NO shares and keeps ``YES^p * NO^(1-p)`` constant.
Buying YES with ``amount`` mints ``amount`` of each share, adds the NO
shares to the pool and takes out enough YES shares to restore the
invariant; the buyer receives ``amount`` plus those YES shares.

Trading fees are ignored. The formulas stay valid for negative amounts
(a sale) as long as both pools remain positive, which lets a central
difference straddle a zero-sized bet.
"""

from dataclasses import dataclass

from kelly_tools.core.models import Outcome, SimulatedBet

_DEFAULT_P = 0.5


@dataclass(frozen=True)
class CpmmPool:
    """Immutable snapshot of a binary CPMM pool.

    Attributes:
        yes: YES shares held by the pool.
        no: NO shares held by the pool.
        p: Weight of the YES pool in the invariant; 0.5 is an unweighted
            constant-product pool.

    """

    yes: float
    no: float
    p: float = _DEFAULT_P

    def __post_init__(self) -> None:
        """Validate pool sizes are positive and the weight is inside (0, 1)."""
        if self.yes <= 0 or self.no <= 0:
            msg = f"pool sizes must be positive, got YES={self.yes} NO={self.no}"
            raise ValueError(msg)
        if not (0.0 < self.p < 1.0):
            msg = f"p must be strictly between 0 and 1, got {self.p}"
            raise ValueError(msg)

    @property
    def invariant(self) -> float:
        """Return ``YES^p * NO^(1-p)``."""
        return self.yes**self.p * self.no ** (1 - self.p)


def cpmm_probability(pool: CpmmPool) -> float:
    """Return the YES probability implied by a pool."""
    return pool.p * pool.no / ((1 - pool.p) * pool.yes + pool.p * pool.no)


def pool_after_bet(pool: CpmmPool, outcome: Outcome, amount: float) -> CpmmPool:
    """Return the pool left behind by a bet of ``amount`` on ``outcome``.

    Raises:
        ValueError: If the bet would empty either side of the pool.

    """
    k = pool.invariant
    if outcome is Outcome.YES:
        new_no = pool.no + amount
        if new_no <= 0:
            msg = f"bet of {amount} would drain the NO pool"
            raise ValueError(msg)
        new_yes = (k / new_no ** (1 - pool.p)) ** (1 / pool.p)
    else:
        new_yes = pool.yes + amount
        if new_yes <= 0:
            msg = f"bet of {amount} would drain the YES pool"
            raise ValueError(msg)
        new_no = (k / new_yes**pool.p) ** (1 / (1 - pool.p))
    return CpmmPool(yes=new_yes, no=new_no, p=pool.p)


def _shares_bought(pool: CpmmPool, after: CpmmPool, outcome: Outcome, amount: float) -> float:
    if outcome is Outcome.YES:
        return pool.yes + amount - after.yes
    return pool.no + amount - after.no


def calculate_cpmm_shares(pool: CpmmPool, outcome: Outcome, amount: float) -> float:
    """Return the number of ``outcome`` shares a bet of ``amount`` buys."""
    return _shares_bought(pool, pool_after_bet(pool, outcome, amount), outcome, amount)


def simulate_cpmm_bet(pool: CpmmPool, outcome: Outcome, amount: float) -> SimulatedBet:
    """Simulate a bet without committing it.

    Args:
        pool: Pool before the trade.
        outcome: Side being bought.
        amount: Stake in mana; may be slightly negative for differencing.

    Returns:
        Shares received and the YES probability after the trade.

    """
    after = pool_after_bet(pool, outcome, amount)
    return SimulatedBet(
        new_shares=_shares_bought(pool, after, outcome, amount),
        probability_after=cpmm_probability(after),
    )
