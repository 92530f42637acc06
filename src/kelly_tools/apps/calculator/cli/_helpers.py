"""Shared helpers for calculator CLI commands.

Centralise utility functions reused across command modules: verbose
logging setup, configured client construction, position parsing, and
recommendation output.
"""

import logging

import typer

from kelly_tools.clients.manifold.client import ManifoldClient
from kelly_tools.core.config import get_config
from kelly_tools.core.models import BetRecommendationFull, PortfolioBetRecommendation, PositionModel


def configure_verbose_logging() -> None:
    """Enable INFO-level logging for optimizer output."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%H:%M:%S",
    )


def build_manifold_client() -> ManifoldClient:
    """Build a ManifoldClient from the ``manifold`` configuration section.

    Returns:
        Client configured with base URL, timeout, and cache TTL.

    """
    manifold_config = get_config().get_manifold_config()
    return ManifoldClient(
        base_url=str(manifold_config.get("base_url", ManifoldClient.BASE_URL)),
        timeout=float(manifold_config.get("timeout", 30.0)),
        cache_ttl_seconds=float(manifold_config.get("cache_ttl_seconds", 60.0)),
    )


def parse_position(spec: str) -> PositionModel:
    """Parse a ``PROBABILITY:PAYOUT`` string into a PositionModel.

    Args:
        spec: Position such as ``"0.3:10"``.

    Returns:
        The parsed position.

    Raises:
        ValueError: If the string is malformed or the probability is out of range.

    """
    probability, sep, payout = spec.partition(":")
    if not sep:
        msg = f"position must look like PROBABILITY:PAYOUT, got {spec!r}"
        raise ValueError(msg)
    return PositionModel(probability=float(probability), payout=float(payout))


def echo_recommendation(result: BetRecommendationFull) -> None:
    """Print a recommendation, including the bracket for portfolio results."""
    typer.echo(f"Outcome:           {result.outcome.value}")
    typer.echo(f"Amount:            {result.amount:,.2f}")
    typer.echo(f"Shares:            {result.shares:,.2f}")
    typer.echo(f"Probability after: {result.probability_after:.2%}")
    if isinstance(result, PortfolioBetRecommendation):
        typer.echo(f"Balance only:      {result.amount_low:,.2f}")
        typer.echo(f"Illiquid as cash:  {result.amount_high:,.2f}")
