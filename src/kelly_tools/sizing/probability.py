"""Payout distributions for sets of independent binary positions.

A probability mass function (PMF) maps each achievable total payout to its
probability. A cumulative distribution function (CDF) maps each payout to
the probability of receiving that payout or less: with a CDF of
``{0: 0.35, 2: 0.5, 3: 0.85, 5: 1}`` the chance of a payout of 2.5 or less
is 0.5.

Both are plain dictionaries keyed by payout. Only the CDF depends on key
order, and it is built from an explicitly sorted list.
"""

import itertools
import math
from collections.abc import Iterable
from enum import Enum

from kelly_tools.core.models import PositionModel
from kelly_tools.sizing.exceptions import InvalidDistributionError, UnsupportedMethodError
from kelly_tools.sizing.numerics import UnivariateFunction

PMF = dict[float, float]
CDF = dict[float, float]

_DEFAULT_TOLERANCE = 1e-9


class PayoutMethod(Enum):
    """Algorithm used to combine position payouts into a distribution."""

    CONVOLUTION = "convolution"
    CARTESIAN = "cartesian"


def _branches(position: PositionModel) -> tuple[tuple[float, float], ...]:
    """Return the ``(payout, probability)`` pairs for losing and winning."""
    return ((0.0, 1 - position.probability), (position.payout, position.probability))


def _enumerate_outcomes(positions: Iterable[PositionModel]) -> list[tuple[float, float]]:
    """Enumerate every win/lose combination as a ``(payout, probability)`` pair.

    The outcome space has ``2 ** n`` entries, which is fine for the handful
    of positions callers pass.
    """
    outcomes: list[tuple[float, float]] = []
    for combination in itertools.product(*(_branches(p) for p in positions)):
        payout = sum((branch[0] for branch in combination), 0.0)
        probability = math.prod(branch[1] for branch in combination)
        outcomes.append((payout, probability))
    return outcomes


def _convolve(pmf1: PMF, pmf2: PMF) -> PMF:
    """Return the PMF of the sum of two independent random payouts."""
    result: PMF = {}
    for payout1, prob1 in pmf1.items():
        for payout2, prob2 in pmf2.items():
            combined = payout1 + payout2
            result[combined] = result.get(combined, 0.0) + prob1 * prob2
    return result


def _payout_pmf_cartesian(positions: list[PositionModel]) -> PMF:
    result: PMF = {}
    for payout, probability in _enumerate_outcomes(positions):
        result[payout] = result.get(payout, 0.0) + probability
    return result


def _payout_pmf_convolution(positions: list[PositionModel]) -> PMF:
    result: PMF = {0.0: 1.0}
    for position in positions:
        position_pmf: PMF = {}
        for payout, prob in _branches(position):
            position_pmf[payout] = position_pmf.get(payout, 0.0) + prob
        result = _convolve(result, position_pmf)
    return result


def compute_payout_distribution(
    positions: Iterable[PositionModel],
    method: PayoutMethod = PayoutMethod.CONVOLUTION,
) -> PMF:
    """Compute the PMF of the combined payout of independent positions.

    The cartesian method enumerates every outcome, which costs ``2 ** n``.
    The convolution method folds one position at a time into the running
    distribution, so its cost tracks the number of distinct payout totals.
    Both produce the same distribution.

    Args:
        positions: Independent binary positions.
        method: Combination algorithm.

    Returns:
        Mapping from total payout to probability.

    """
    position_list = list(positions)
    if method is PayoutMethod.CARTESIAN:
        return _payout_pmf_cartesian(position_list)
    return _payout_pmf_convolution(position_list)


def compute_expected_value(pmf: PMF) -> float:
    """Return the expected payout of a PMF."""
    return sum((payout * prob for payout, prob in pmf.items()), 0.0)


def compute_cumulative_distribution(
    positions: Iterable[PositionModel],
    method: PayoutMethod = PayoutMethod.CARTESIAN,
) -> CDF:
    """Compute the CDF of the combined payout of independent positions.

    Args:
        positions: Independent binary positions.
        method: Only ``PayoutMethod.CARTESIAN`` is supported.

    Returns:
        Mapping from payout to the probability of that payout or less,
        in ascending payout order.

    Raises:
        UnsupportedMethodError: If the convolution method is requested.

    """
    if method is PayoutMethod.CONVOLUTION:
        msg = "Cumulative distribution is not implemented for the convolution method"
        raise UnsupportedMethodError(msg)

    outcomes = sorted(_enumerate_outcomes(positions), key=lambda outcome: outcome[0])
    result: CDF = {}
    cumulative = 0.0
    for payout, probability in outcomes:
        cumulative += probability
        result[payout] = cumulative
    return result


def integrate_over_pmf(f: UnivariateFunction, pmf: PMF) -> float:
    """Return the expectation of ``f(payout)`` when payout is drawn from ``pmf``."""
    return sum((f(payout) * prob for payout, prob in pmf.items()), 0.0)


def check_pmf(pmf: PMF, tolerance: float = _DEFAULT_TOLERANCE) -> None:
    """Validate that a PMF has masses in ``[0, 1]`` summing to one.

    Args:
        pmf: Distribution to validate.
        tolerance: Allowed floating-point error.

    Raises:
        InvalidDistributionError: If any invariant is broken.

    """
    for payout, prob in pmf.items():
        if prob < -tolerance or prob > 1 + tolerance:
            msg = f"mass for payout {payout} must be between 0 and 1, got {prob}"
            raise InvalidDistributionError(msg)
    total = math.fsum(pmf.values())
    if abs(total - 1) > tolerance:
        msg = f"masses must sum to 1, got {total}"
        raise InvalidDistributionError(msg)
