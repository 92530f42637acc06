"""Conversions between the three representations of betting odds.

Each representation is convenient for a different equation:

- decimal odds: total return per unit staked, stake included (2.5 returns
  2.5x the stake);
- English odds: decimal odds minus one, the profit on top of the stake;
- implied probability: the reciprocal of decimal odds.
"""

from enum import Enum

from kelly_tools.sizing.exceptions import InvalidOddsTypeError
from kelly_tools.sizing.numerics import divide


class OddsType(Enum):
    """Representation an odds value is expressed in."""

    DECIMAL_ODDS = "decimalOdds"
    ENGLISH_ODDS = "englishOdds"
    IMPLIED_PROBABILITY = "impliedProbability"


def _parse_odds_type(value: OddsType | str, role: str) -> OddsType:
    """Coerce an ``OddsType`` or its string value, rejecting anything else."""
    if isinstance(value, OddsType):
        return value
    try:
        return OddsType(value)
    except ValueError as exc:
        msg = f"Invalid '{role}' odds type: {value!r}"
        raise InvalidOddsTypeError(msg) from exc


def convert_odds(
    from_type: OddsType | str,
    to_type: OddsType | str,
    value: float,
) -> float:
    """Convert an odds value from one representation to another.

    Normalise to decimal odds first, then project onto the target
    representation. An implied probability of zero converts to infinite
    decimal odds rather than raising.

    Args:
        from_type: Representation of ``value``.
        to_type: Representation to convert into.
        value: The odds value to convert.

    Returns:
        The converted odds value.

    Raises:
        InvalidOddsTypeError: If either representation is not recognised.

    """
    source = _parse_odds_type(from_type, "from")
    target = _parse_odds_type(to_type, "to")
    if source is target:
        return value

    if source is OddsType.DECIMAL_ODDS:
        decimal_odds = value
    elif source is OddsType.ENGLISH_ODDS:
        decimal_odds = value + 1
    else:
        decimal_odds = divide(1.0, value)

    if target is OddsType.DECIMAL_ODDS:
        return decimal_odds
    if target is OddsType.ENGLISH_ODDS:
        return decimal_odds - 1
    return divide(1.0, decimal_odds)
