"""Liquidity-aware Kelly bet sizing for binary prediction markets."""

from kelly_tools.sizing.kelly import calculate_naive_kelly_bet, calculate_naive_kelly_fraction
from kelly_tools.sizing.odds import OddsType, convert_odds
from kelly_tools.sizing.optimizer import (
    calculate_full_kelly_bet,
    calculate_full_kelly_bet_with_portfolio,
)
from kelly_tools.sizing.probability import (
    PayoutMethod,
    compute_cumulative_distribution,
    compute_expected_value,
    compute_payout_distribution,
    integrate_over_pmf,
)

__all__ = [
    "OddsType",
    "PayoutMethod",
    "calculate_full_kelly_bet",
    "calculate_full_kelly_bet_with_portfolio",
    "calculate_naive_kelly_bet",
    "calculate_naive_kelly_fraction",
    "compute_cumulative_distribution",
    "compute_expected_value",
    "compute_payout_distribution",
    "convert_odds",
    "integrate_over_pmf",
]
