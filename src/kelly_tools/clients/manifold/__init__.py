"""Manifold Markets client for binary CPMM market data."""

from kelly_tools.clients.manifold.client import ManifoldClient
from kelly_tools.clients.manifold.exceptions import ManifoldAPIError, ManifoldError
from kelly_tools.clients.manifold.models import ManifoldMarket

__all__ = [
    "ManifoldAPIError",
    "ManifoldClient",
    "ManifoldError",
    "ManifoldMarket",
]
