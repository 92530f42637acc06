"""Naive Kelly criterion sizer for binary outcome markets.

Provide pure functions that compute the fraction of bankroll to wager on a
binary bet, scaled by a deference factor. The result ignores price impact,
so it overstates the stake on a market with finite liquidity and serves as
the upper bound for the liquidity-aware search.
"""

from kelly_tools.core.models import BetRecommendation, Outcome


def calculate_naive_kelly_fraction(
    market_prob: float,
    estimated_prob: float,
    deference_factor: float,
) -> tuple[float, Outcome]:
    """Return the recommended fraction of bankroll and the side to buy.

    Compute the deference-scaled Kelly criterion:

        fraction = k * |estimated_prob - market_prob| / (1 - market_prob)

    A deference factor of 0.5 says "there is a 50% chance I am right and a
    50% chance the market is right". The fraction is clamped to ``[0, 1]``.

    Args:
        market_prob: Probability implied by the market (0-1).
        estimated_prob: Estimated true probability of YES (0-1).
        deference_factor: Weight given to the personal estimate (0-1).

    Returns:
        ``(fraction, outcome)`` where outcome is YES when the estimate is
        above the market and NO otherwise.

    """
    outcome = Outcome.YES if estimated_prob > market_prob else Outcome.NO
    if market_prob >= 1:
        return 0.0, outcome
    fraction = deference_factor * (abs(estimated_prob - market_prob) / (1 - market_prob))
    return min(max(fraction, 0.0), 1.0), outcome


def calculate_naive_kelly_bet(
    market_prob: float,
    estimated_prob: float,
    deference_factor: float,
    bankroll: float,
) -> BetRecommendation:
    """Multiply the naive Kelly fraction by the bankroll to get a stake."""
    fraction, outcome = calculate_naive_kelly_fraction(
        market_prob, estimated_prob, deference_factor
    )
    return BetRecommendation(amount=bankroll * fraction, outcome=outcome)
