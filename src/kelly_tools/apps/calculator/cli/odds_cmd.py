"""CLI command for converting betting odds between representations."""

from typing import Annotated

import typer

from kelly_tools.sizing.exceptions import InvalidOddsTypeError
from kelly_tools.sizing.odds import OddsType, convert_odds

_ODDS_TYPES = ", ".join(t.value for t in OddsType)


def odds(
    value: Annotated[float, typer.Argument(help="Odds value to convert")],
    from_type: Annotated[
        str, typer.Option("--from", help=f"Representation of VALUE: {_ODDS_TYPES}")
    ] = OddsType.DECIMAL_ODDS.value,
    to_type: Annotated[
        str, typer.Option("--to", help=f"Representation to convert into: {_ODDS_TYPES}")
    ] = OddsType.IMPLIED_PROBABILITY.value,
) -> None:
    """Convert an odds value from one representation to another."""
    try:
        result = convert_odds(from_type, to_type, value)
    except InvalidOddsTypeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"{value:g} {from_type} = {result:.6g} {to_type}")
