"""CLI command for the liquidity-aware Kelly stake on a live Manifold market.

Fetch the market's pool, then search for the stake that maximises expected
log-wealth once price impact is taken into account. With
``--portfolio-value`` the search also accounts for illiquid holdings.
"""

import asyncio
from typing import Annotated

import typer

from kelly_tools.apps.calculator.cli._helpers import (
    build_manifold_client,
    configure_verbose_logging,
    echo_recommendation,
)
from kelly_tools.clients.manifold.exceptions import ManifoldError
from kelly_tools.core.config import get_config
from kelly_tools.core.models import BetRecommendationFull
from kelly_tools.sizing.optimizer import (
    calculate_full_kelly_bet,
    calculate_full_kelly_bet_with_portfolio,
)
from kelly_tools.sizing.sources import ManifoldMarketSource


def optimal(  # noqa: PLR0913
    slug: Annotated[str, typer.Argument(help="Manifold market slug")],
    estimated_prob: Annotated[float, typer.Option(help="Your estimated probability (0-1)")],
    bankroll: Annotated[float, typer.Option(help="Liquid balance available to bet")],
    portfolio_value: Annotated[
        float | None,
        typer.Option(help="Balance plus expected value of illiquid holdings"),
    ] = None,
    deference: Annotated[
        float | None,
        typer.Option(help="Weight given to your estimate over the market (default from config)"),
    ] = None,
    verbose: Annotated[  # noqa: FBT002
        bool, typer.Option("--verbose", "-v", help="Enable optimizer logging")
    ] = False,
) -> None:
    """Calculate the Kelly optimal bet on a Manifold market, accounting for liquidity."""
    if verbose:
        configure_verbose_logging()

    asyncio.run(
        _optimal(
            slug=slug,
            estimated_prob=estimated_prob,
            bankroll=bankroll,
            portfolio_value=portfolio_value,
            deference=deference,
        )
    )


async def _optimal(
    *,
    slug: str,
    estimated_prob: float,
    bankroll: float,
    portfolio_value: float | None,
    deference: float | None,
) -> None:
    """Run the optimizer against the live market and print the result.

    Args:
        slug: Manifold market slug.
        estimated_prob: Estimated probability of YES.
        bankroll: Liquid balance.
        portfolio_value: Total portfolio value, or ``None`` to ignore illiquid holdings.
        deference: Deference factor, or ``None`` for the configured default.

    """
    settings = get_config().get_calculator_settings()
    deference_factor = deference if deference is not None else settings.deference_factor

    result: BetRecommendationFull
    try:
        async with build_manifold_client() as client:
            source = ManifoldMarketSource(client)
            if portfolio_value is None:
                result = await calculate_full_kelly_bet(
                    source,
                    estimated_prob=estimated_prob,
                    deference_factor=deference_factor,
                    market_slug=slug,
                    bankroll=bankroll,
                    settings=settings,
                )
            else:
                result = await calculate_full_kelly_bet_with_portfolio(
                    source,
                    estimated_prob=estimated_prob,
                    deference_factor=deference_factor,
                    market_slug=slug,
                    balance=bankroll,
                    portfolio_value=portfolio_value,
                    settings=settings,
                )
    except ManifoldError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"\nMarket: {slug}")
    echo_recommendation(result)
