"""CLI command for the naive Kelly stake, ignoring price impact."""

from typing import Annotated

import typer

from kelly_tools.core.config import get_config
from kelly_tools.sizing.kelly import calculate_naive_kelly_fraction


def naive(
    market_prob: Annotated[float, typer.Option(help="Probability implied by the market (0-1)")],
    estimated_prob: Annotated[float, typer.Option(help="Your estimated probability (0-1)")],
    bankroll: Annotated[float, typer.Option(help="Funds available to bet")],
    deference: Annotated[
        float | None,
        typer.Option(help="Weight given to your estimate over the market (default from config)"),
    ] = None,
) -> None:
    """Show the naive Kelly fraction and stake for a binary market."""
    if deference is None:
        deference = get_config().get_calculator_settings().deference_factor

    fraction, outcome = calculate_naive_kelly_fraction(market_prob, estimated_prob, deference)
    typer.echo(f"Outcome:  {outcome.value}")
    typer.echo(f"Fraction: {fraction:.4f}")
    typer.echo(f"Amount:   {fraction * bankroll:,.2f}")
