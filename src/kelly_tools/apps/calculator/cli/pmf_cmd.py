"""CLI command for the payout distribution of independent binary positions.

Show the probability mass function, expected value, and cumulative
distribution of the combined payout.
"""

from typing import Annotated

import typer

from kelly_tools.apps.calculator.cli._helpers import parse_position
from kelly_tools.sizing.probability import (
    PayoutMethod,
    compute_cumulative_distribution,
    compute_expected_value,
    compute_payout_distribution,
)


def pmf(
    positions: Annotated[
        list[str],
        typer.Option("--position", "-p", help="Position as PROBABILITY:PAYOUT (repeatable)"),
    ],
    method: Annotated[
        str, typer.Option(help="Combination method: convolution or cartesian")
    ] = PayoutMethod.CONVOLUTION.value,
) -> None:
    """Display the payout distribution of a set of independent positions."""
    try:
        parsed = [parse_position(p) for p in positions]
        payout_method = PayoutMethod(method)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    distribution = compute_payout_distribution(parsed, payout_method)
    cumulative = compute_cumulative_distribution(parsed)

    typer.echo(f"\n{'Payout':>12} {'Probability':>12} {'Cumulative':>12}")
    typer.echo("-" * 38)
    for payout in sorted(distribution):
        typer.echo(
            f"{payout:>12,.2f} {distribution[payout]:>12.4f} {cumulative.get(payout, 0.0):>12.4f}"
        )
    typer.echo(f"\nExpected value: {compute_expected_value(distribution):,.4f}")
