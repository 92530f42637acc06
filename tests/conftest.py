"""Shared test configuration and fixtures."""

from collections.abc import Iterator

import pytest

import kelly_tools.core.config as config_module
from kelly_tools.amm.cpmm import CpmmPool
from kelly_tools.sizing.sources import CpmmMarketSource

BALANCED_SLUG = "balanced-market"
BALANCED_POOL = CpmmPool(yes=1000.0, no=1000.0, p=0.5)


@pytest.fixture(autouse=True)
def _reset_config_singleton() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Drop the cached ``get_config()`` loader around every test.

    CLI commands read settings through the lazy singleton, so a loader
    created by one test would otherwise leak into the next.
    """
    config_module._config = None
    yield
    config_module._config = None


@pytest.fixture
def balanced_source() -> CpmmMarketSource:
    """Provide a source with one 1000/1000 pool at probability 0.5."""
    return CpmmMarketSource({BALANCED_SLUG: BALANCED_POOL})
