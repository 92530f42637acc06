"""Liquidity-aware Kelly optimizers.

Find the stake that maximises expected log-wealth when the bet itself moves
the market. The English odds on offer, ``e(x)``, fall as the stake ``x``
grows; they are read from the market source's AMM simulator and their slope
``e'(x)`` is taken by central difference.

For a bankroll ``B``, win probability ``p`` and loss probability ``q``, the
first-order condition in the bet fraction ``f = x / B`` reduces to

    A f^2 + B' f + C = 0,   A = p B e'(x),  B' = e(x) - A,  C = -(p e(x) - q)

with ``e`` and ``e'`` frozen at the current estimate. Solving the quadratic
gives an updated estimate, and the root finder drives the update step to
zero. Root-finding on the update step is much more stable against the
simulator than differentiating the objective directly.

The portfolio-aware variant adds illiquid holdings ``I`` (relative to the
liquid balance) to both wealth outcomes and averages the marginal expected
log-wealth over a distribution of ``I``.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from kelly_tools.core.models import (
    BetRecommendation,
    BetRecommendationFull,
    CalculatorSettings,
    Outcome,
    PortfolioBetRecommendation,
    PositionModel,
)
from kelly_tools.core.protocols import MarketSource
from kelly_tools.sizing.kelly import calculate_naive_kelly_bet
from kelly_tools.sizing.numerics import async_derivative, divide, find_root, sqrt
from kelly_tools.sizing.probability import (
    PayoutMethod,
    compute_payout_distribution,
    integrate_over_pmf,
)

logger = logging.getLogger(__name__)

_ILLIQUID_WIN_PROB = 0.5
_LOWER_BRACKET = 0.5
_UPPER_BRACKET = 2.0


@dataclass(frozen=True)
class _PriceImpactCurve:
    """English odds offered by a market as a function of stake size."""

    source: MarketSource
    outcome: Outcome
    market_slug: str
    odds_step: float

    async def english_odds(self, amount: float) -> float:
        simulated = await self.source.simulate_bet(self.outcome, amount, self.market_slug)
        return divide(simulated.new_shares - amount, amount)

    async def odds_and_slope(self, amount: float) -> tuple[float, float]:
        odds = await self.english_odds(amount)
        slope = await async_derivative(self.english_odds, amount, self.odds_step)
        return odds, slope

    async def settle(self, amount: float) -> tuple[float, float]:
        """Return ``(shares, probability_after)`` for a final stake."""
        simulated = await self.source.simulate_bet(self.outcome, amount, self.market_slug)
        probability_after = simulated.probability_after
        return simulated.new_shares, probability_after if probability_after is not None else 0.0


def win_probability(
    estimated_prob: float,
    deference_factor: float,
    market_prob: float,
    outcome: Outcome,
) -> float:
    """Blend the estimate with the market and return the chance ``outcome`` wins."""
    p_yes = estimated_prob * deference_factor + (1 - deference_factor) * market_prob
    return p_yes if outcome is Outcome.YES else 1 - p_yes


def solve_bet_fraction(p_win: float, bankroll: float, odds: float, slope: float) -> float:
    """Solve the optimality quadratic for the fraction of bankroll to bet.

    Args:
        p_win: Probability the chosen outcome wins.
        bankroll: Bankroll the fraction applies to.
        odds: English odds at the current estimate.
        slope: Derivative of the English odds with respect to stake.

    Returns:
        The positive root of ``A f^2 + B f + C = 0``, or ``-C / B`` when
        ``A`` is zero. Degenerate coefficients give ``nan`` or ``inf``.

    """
    q_win = 1 - p_win
    a = p_win * bankroll * slope
    b = odds - a
    c = -(p_win * odds - q_win)
    if a == 0:
        return divide(-c, b)
    return divide(-b + sqrt(b * b - 4 * a * c), 2 * a)


def marginal_expected_log_wealth(  # noqa: PLR0913
    p_win: float,
    fraction: float,
    odds: float,
    slope: float,
    balance: float,
    illiquid: float,
) -> float:
    """Return d(expected log-wealth)/d(fraction) with illiquid wealth ``illiquid``.

    Wealth is measured in units of the liquid balance: winning leaves
    ``1 + I + f e``, losing leaves ``1 + I - f``. Denominators are not
    guarded, so extreme fractions produce ``inf`` or ``nan``.
    """
    q_win = 1 - p_win
    win_wealth = 1 + illiquid + fraction * odds
    lose_wealth = 1 + illiquid - fraction
    return (
        divide(p_win * odds, win_wealth)
        - divide(q_win, lose_wealth)
        + divide(p_win * fraction * slope * balance, win_wealth)
    )


def _bet_update_step(
    curve: _PriceImpactCurve,
    p_win: float,
    bankroll: float,
) -> Callable[[float], Awaitable[float]]:
    """Build the residual ``new_estimate - estimate`` for the root finder."""

    async def update_step(bet_estimate: float) -> float:
        odds, slope = await curve.odds_and_slope(bet_estimate)
        new_bet_estimate = solve_bet_fraction(p_win, bankroll, odds, slope) * bankroll
        return new_bet_estimate - bet_estimate

    return update_step


async def _prepare(  # noqa: PLR0913
    source: MarketSource,
    *,
    estimated_prob: float,
    deference_factor: float,
    market_slug: str,
    bankroll: float,
    settings: CalculatorSettings,
) -> tuple[BetRecommendation, float, _PriceImpactCurve] | None:
    """Fetch the starting probability and build the naive bound and odds curve.

    Returns ``None`` when the market probability is unavailable.
    """
    starting_prob = await source.get_probability(market_slug)
    if not starting_prob:
        logger.info("Could not get market probability for %s", market_slug)
        return None

    naive = calculate_naive_kelly_bet(
        market_prob=starting_prob,
        estimated_prob=estimated_prob,
        deference_factor=deference_factor,
        bankroll=bankroll,
    )
    p_win = win_probability(estimated_prob, deference_factor, starting_prob, naive.outcome)
    curve = _PriceImpactCurve(
        source=source,
        outcome=naive.outcome,
        market_slug=market_slug,
        odds_step=settings.odds_step,
    )
    return naive, p_win, curve


async def calculate_full_kelly_bet(  # noqa: PLR0913
    source: MarketSource,
    *,
    estimated_prob: float,
    deference_factor: float,
    market_slug: str,
    bankroll: float,
    settings: CalculatorSettings | None = None,
) -> BetRecommendationFull:
    """Calculate the Kelly optimal bet accounting for market liquidity.

    Assume a fixed bankroll and a portfolio of this one bet. Price impact
    only ever shrinks the optimum, so the search runs between zero and the
    naive Kelly stake.

    Args:
        source: Provider of the market probability and bet simulations.
        estimated_prob: Estimated true probability of YES (0-1).
        deference_factor: Weight given to the estimate over the market (0-1).
        market_slug: Market to bet on.
        bankroll: Total funds available.
        settings: Solver parameters; defaults when omitted.

    Returns:
        The recommended stake with the simulated shares and post-trade
        probability. An unavailable market yields a zero YES stake, and no
        edge over the market yields a zero stake on the chosen side.

    """
    settings = settings or CalculatorSettings()
    prepared = await _prepare(
        source,
        estimated_prob=estimated_prob,
        deference_factor=deference_factor,
        market_slug=market_slug,
        bankroll=bankroll,
        settings=settings,
    )
    if prepared is None:
        return BetRecommendationFull(
            amount=0.0, outcome=Outcome.YES, shares=0.0, probability_after=0.0
        )
    naive, p_win, curve = prepared

    optimal_bet = 0.0
    if naive.amount > 0:
        optimal_bet = await find_root(
            _bet_update_step(curve, p_win, bankroll),
            0.0,
            naive.amount,
            settings.iterations,
            settings.tolerance,
        )

    shares, probability_after = await curve.settle(optimal_bet)
    return BetRecommendationFull(
        amount=optimal_bet,
        outcome=naive.outcome,
        shares=shares,
        probability_after=probability_after,
    )


async def calculate_full_kelly_bet_with_portfolio(  # noqa: PLR0913
    source: MarketSource,
    *,
    estimated_prob: float,
    deference_factor: float,
    market_slug: str,
    balance: float,
    portfolio_value: float,
    settings: CalculatorSettings | None = None,
) -> PortfolioBetRecommendation:
    """Calculate the Kelly optimal bet accounting for liquidity and illiquid holdings.

    Model the illiquid part of the portfolio (``portfolio_value - balance``)
    as one synthetic position that pays twice its expected value half the
    time. Three marginal conditions are solved:

    - balance only, ignoring illiquid holdings, which gives an optimum that
      is too low;
    - illiquid holdings treated as cash equal to their expected value, which
      gives an optimum that is too high, because log-wealth penalises the
      scenarios where the holdings pay little more than it rewards the rest;
    - the marginal condition averaged over the illiquid payout distribution,
      which is the true optimum and lies between the other two.

    Args:
        source: Provider of the market probability and bet simulations.
        estimated_prob: Estimated true probability of YES (0-1).
        deference_factor: Weight given to the estimate over the market (0-1).
        market_slug: Market to bet on.
        balance: Liquid funds available to bet.
        portfolio_value: Balance plus the expected value of illiquid holdings.
        settings: Solver parameters; defaults when omitted.

    Returns:
        The recommended stake, its simulated result, and the low/high
        bracket. An unavailable market yields a zero YES stake.

    Raises:
        ValueError: If ``balance`` is not positive.

    """
    if balance <= 0:
        msg = f"balance must be positive, got {balance}"
        raise ValueError(msg)
    settings = settings or CalculatorSettings()

    illiquid_ev = max(portfolio_value - balance, 0.0)
    relative_illiquid_ev = illiquid_ev / balance
    illiquid_pmf = compute_payout_distribution(
        [
            PositionModel(
                probability=_ILLIQUID_WIN_PROB,
                payout=relative_illiquid_ev / _ILLIQUID_WIN_PROB,
            )
        ],
        PayoutMethod.CARTESIAN,
    )

    prepared = await _prepare(
        source,
        estimated_prob=estimated_prob,
        deference_factor=deference_factor,
        market_slug=market_slug,
        bankroll=balance,
        settings=settings,
    )
    if prepared is None:
        return PortfolioBetRecommendation(
            amount=0.0,
            outcome=Outcome.YES,
            shares=0.0,
            probability_after=0.0,
            amount_low=0.0,
            amount_high=0.0,
        )
    naive, p_win, curve = prepared
    if naive.amount <= 0:
        shares, probability_after = await curve.settle(0.0)
        return PortfolioBetRecommendation(
            amount=0.0,
            outcome=naive.outcome,
            shares=shares,
            probability_after=probability_after,
            amount_low=0.0,
            amount_high=0.0,
        )

    async def marginal_illiquid_cashed_out(bet_estimate: float) -> float:
        odds, slope = await curve.odds_and_slope(bet_estimate)
        return marginal_expected_log_wealth(
            p_win, bet_estimate / balance, odds, slope, balance, relative_illiquid_ev
        )

    async def marginal_integrated(bet_estimate: float) -> float:
        odds, slope = await curve.odds_and_slope(bet_estimate)
        fraction = bet_estimate / balance
        return integrate_over_pmf(
            lambda illiquid: marginal_expected_log_wealth(
                p_win, fraction, odds, slope, balance, illiquid
            ),
            illiquid_pmf,
        )

    optimal_bet_initial = await find_root(
        _bet_update_step(curve, p_win, balance),
        0.0,
        naive.amount,
        settings.iterations,
        settings.tolerance,
    )
    lower = optimal_bet_initial * _LOWER_BRACKET
    upper = optimal_bet_initial * _UPPER_BRACKET
    optimal_bet = await find_root(
        marginal_integrated, lower, upper, settings.iterations, settings.tolerance
    )
    optimal_bet_high = await find_root(
        marginal_illiquid_cashed_out, lower, upper, settings.iterations, settings.tolerance
    )
    logger.info(
        "Optimal bet %.4g (balance only %.4g, illiquid cashed out %.4g)",
        optimal_bet,
        optimal_bet_initial,
        optimal_bet_high,
    )

    shares, probability_after = await curve.settle(optimal_bet)
    return PortfolioBetRecommendation(
        amount=optimal_bet,
        outcome=naive.outcome,
        shares=shares,
        probability_after=probability_after,
        amount_low=optimal_bet_initial,
        amount_high=optimal_bet_high,
    )
