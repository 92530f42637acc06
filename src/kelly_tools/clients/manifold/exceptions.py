"""Exception hierarchy for Manifold client errors.

A base exception class with a specialised API error that carries status
code and message attributes.
"""


class ManifoldError(Exception):
    """Base exception for all Manifold client errors."""


class ManifoldAPIError(ManifoldError):
    """Error returned by a Manifold API call.

    Carry a human-readable message and an HTTP status code so callers
    can distinguish a missing market from a transient failure.

    Args:
        msg: Human-readable description of the error.
        status_code: HTTP status code from the API response.

    """

    def __init__(self, msg: str, status_code: int) -> None:
        """Initialize Manifold API error.

        Args:
            msg: Human-readable description of the error.
            status_code: HTTP status code from the API response.

        """
        super().__init__(f"[{status_code}] {msg}")
        self.msg = msg
        self.status_code = status_code
