"""CLI subpackage for the Kelly bet calculator app.

Create the Typer application and register all command modules.
"""

import typer

from kelly_tools.apps.calculator.cli.naive_cmd import naive
from kelly_tools.apps.calculator.cli.odds_cmd import odds
from kelly_tools.apps.calculator.cli.optimal_cmd import optimal
from kelly_tools.apps.calculator.cli.pmf_cmd import pmf

app = typer.Typer(help="Liquidity-aware Kelly bet calculator")

app.command()(odds)
app.command()(naive)
app.command()(optimal)
app.command()(pmf)

__all__ = ["app"]
