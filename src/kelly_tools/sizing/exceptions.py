"""Exception hierarchy for the bet sizing engine.

A single base class lets callers catch every sizing failure at once, while
the concrete errors also subclass the matching built-in so generic handlers
(``ValueError``, ``NotImplementedError``) keep working.
"""


class KellyToolsError(Exception):
    """Base exception for all bet sizing errors."""


class InvalidOddsTypeError(KellyToolsError, ValueError):
    """Raise when an odds conversion is given an unrecognised representation."""


class InvalidDistributionError(KellyToolsError, ValueError):
    """Raise when a probability mass function breaks its invariants."""


class UnsupportedMethodError(KellyToolsError, NotImplementedError):
    """Raise when a distribution method is not available for an operation."""
