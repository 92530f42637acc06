"""Tests for the Kelly calculator CLI commands."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from kelly_tools.amm.cpmm import CpmmPool
from kelly_tools.apps.calculator.cli import app
from kelly_tools.apps.calculator.cli._helpers import build_manifold_client, parse_position
from kelly_tools.clients.manifold.client import ManifoldClient
from kelly_tools.clients.manifold.exceptions import ManifoldAPIError
from kelly_tools.sizing.sources import CpmmMarketSource

_SLUG = "balanced-market"
_OPTIMAL_CMD = "kelly_tools.apps.calculator.cli.optimal_cmd"
_STATUS_SERVER_ERROR = 500


@pytest.fixture
def runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


def _balanced_source(_client: object) -> CpmmMarketSource:
    """Stand in for ManifoldMarketSource with a fixed 1000/1000 pool."""
    return CpmmMarketSource({_SLUG: CpmmPool(yes=1000.0, no=1000.0)})


class TestOddsCommand:
    """Tests for the odds command."""

    def test_converts_decimal_to_english(self, runner: CliRunner) -> None:
        """Test decimal odds 2.5 print as English odds 1.5."""
        result = runner.invoke(app, ["odds", "2.5", "--from", "decimalOdds", "--to", "englishOdds"])
        assert result.exit_code == 0
        assert "2.5 decimalOdds = 1.5 englishOdds" in result.output

    def test_default_target_is_implied_probability(self, runner: CliRunner) -> None:
        """Test decimal odds convert to implied probability by default."""
        result = runner.invoke(app, ["odds", "4"])
        assert result.exit_code == 0
        assert "= 0.25 impliedProbability" in result.output

    def test_invalid_type(self, runner: CliRunner) -> None:
        """Test an unknown representation exits with an error."""
        result = runner.invoke(app, ["odds", "2", "--from", "americanOdds"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestNaiveCommand:
    """Tests for the naive command."""

    def test_documented_example(self, runner: CliRunner) -> None:
        """Test market 0.4, estimate 0.6, deference 0.5 on a 1000 bankroll."""
        result = runner.invoke(
            app,
            [
                "naive",
                "--market-prob",
                "0.4",
                "--estimated-prob",
                "0.6",
                "--bankroll",
                "1000",
                "--deference",
                "0.5",
            ],
        )
        assert result.exit_code == 0
        assert "YES" in result.output
        assert "0.1667" in result.output
        assert "166.67" in result.output

    def test_deference_from_config(self, runner: CliRunner) -> None:
        """Test the configured deference factor is used when the option is omitted."""
        result = runner.invoke(
            app,
            ["naive", "--market-prob", "0.5", "--estimated-prob", "0.3", "--bankroll", "100"],
        )
        assert result.exit_code == 0
        assert "NO" in result.output
        assert "0.2000" in result.output


class TestPmfCommand:
    """Tests for the pmf command."""

    def test_two_positions(self, runner: CliRunner) -> None:
        """Test the table and expected value for two even positions."""
        result = runner.invoke(app, ["pmf", "-p", "0.5:4", "-p", "0.5:6"])
        assert result.exit_code == 0
        assert "Expected value: 5.0000" in result.output
        assert "0.2500" in result.output
        assert "1.0000" in result.output

    def test_cartesian_method(self, runner: CliRunner) -> None:
        """Test the cartesian method gives the same expected value."""
        result = runner.invoke(
            app, ["pmf", "-p", "0.5:4", "-p", "0.5:6", "--method", "cartesian"]
        )
        assert result.exit_code == 0
        assert "Expected value: 5.0000" in result.output

    def test_malformed_position(self, runner: CliRunner) -> None:
        """Test a position without a payout exits with an error."""
        result = runner.invoke(app, ["pmf", "-p", "0.5"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_method(self, runner: CliRunner) -> None:
        """Test an unknown combination method exits with an error."""
        result = runner.invoke(app, ["pmf", "-p", "0.5:4", "--method", "magic"])
        assert result.exit_code == 1


class TestOptimalCommand:
    """Tests for the optimal command."""

    def test_single_bankroll(self, runner: CliRunner) -> None:
        """Test the liquidity-aware recommendation is printed."""
        with (
            patch(f"{_OPTIMAL_CMD}.build_manifold_client", return_value=MagicMock()),
            patch(f"{_OPTIMAL_CMD}.ManifoldMarketSource", side_effect=_balanced_source),
        ):
            result = runner.invoke(
                app,
                [
                    "optimal",
                    _SLUG,
                    "--estimated-prob",
                    "0.7",
                    "--bankroll",
                    "1000",
                    "--deference",
                    "0.5",
                ],
            )

        assert result.exit_code == 0
        assert f"Market: {_SLUG}" in result.output
        assert "Outcome:           YES" in result.output
        assert "Amount:" in result.output
        assert "Balance only:" not in result.output

    def test_with_portfolio(self, runner: CliRunner) -> None:
        """Test the portfolio variant prints the bracket."""
        with (
            patch(f"{_OPTIMAL_CMD}.build_manifold_client", return_value=MagicMock()),
            patch(f"{_OPTIMAL_CMD}.ManifoldMarketSource", side_effect=_balanced_source),
        ):
            result = runner.invoke(
                app,
                [
                    "optimal",
                    _SLUG,
                    "--estimated-prob",
                    "0.7",
                    "--bankroll",
                    "1000",
                    "--portfolio-value",
                    "1500",
                ],
            )

        assert result.exit_code == 0
        assert "Balance only:" in result.output
        assert "Illiquid as cash:" in result.output

    def test_api_error(self, runner: CliRunner) -> None:
        """Test Manifold failures exit with an error."""
        failing_source = AsyncMock()
        failing_source.get_probability.side_effect = ManifoldAPIError(
            msg="Service unavailable", status_code=_STATUS_SERVER_ERROR
        )
        with (
            patch(f"{_OPTIMAL_CMD}.build_manifold_client", return_value=MagicMock()),
            patch(f"{_OPTIMAL_CMD}.ManifoldMarketSource", return_value=failing_source),
        ):
            result = runner.invoke(
                app, ["optimal", _SLUG, "--estimated-prob", "0.7", "--bankroll", "1000"]
            )

        assert result.exit_code == 1
        assert "Service unavailable" in result.output


class TestHelpers:
    """Tests for the CLI helper functions."""

    def test_parse_position(self) -> None:
        """Test PROBABILITY:PAYOUT parsing."""
        position = parse_position("0.3:10")
        assert position.probability == pytest.approx(0.3)
        assert position.payout == pytest.approx(10.0)

    def test_parse_position_out_of_range(self) -> None:
        """Test an invalid probability is rejected."""
        with pytest.raises(ValueError, match="probability must be between 0 and 1"):
            parse_position("1.5:10")

    def test_build_manifold_client_uses_config(self) -> None:
        """Test the client is built from the manifold configuration section."""
        mock_config = MagicMock()
        mock_config.get_manifold_config.return_value = {
            "base_url": "https://staging.example.com/",
            "timeout": "5",
            "cache_ttl_seconds": "0",
        }
        with patch(
            "kelly_tools.apps.calculator.cli._helpers.get_config", return_value=mock_config
        ):
            client = build_manifold_client()

        assert isinstance(client, ManifoldClient)
        assert client.base_url == "https://staging.example.com"
        assert client.cache_ttl_seconds == 0.0
