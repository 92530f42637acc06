"""Numerical differentiation and bounded Newton root finding.

The optimizers differentiate and solve functions that wrap an AMM
simulator, so every evaluation may be a suspension point. The helpers here
accept plain callables as well as coroutine functions and await results
only when they are awaitable.

Division and square roots follow IEEE 754 semantics (``inf`` / ``nan``)
instead of raising, so a degenerate derivative propagates through the
solver as a non-finite value rather than aborting it.
"""

import inspect
import logging
import math
from collections.abc import Awaitable, Callable
from typing import cast

logger = logging.getLogger(__name__)

UnivariateFunction = Callable[[float], float]
AsyncUnivariateFunction = Callable[[float], Awaitable[float]]
MaybeAsyncFunction = Callable[[float], float | Awaitable[float]]

_DEFAULT_STEP = 1e-3
_DEFAULT_ITERATIONS = 10
_DEFAULT_TOLERANCE = 1e-6


def divide(numerator: float, denominator: float) -> float:
    """Divide two floats, returning ``inf`` or ``nan`` on a zero denominator.

    Args:
        numerator: Dividend.
        denominator: Divisor, possibly zero (signed).

    Returns:
        The quotient, ``±inf`` for a non-zero numerator over zero, or
        ``nan`` for ``0 / 0``.

    """
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def sqrt(value: float) -> float:
    """Return the square root of ``value``, or ``nan`` when it is negative."""
    if math.isnan(value) or value < 0:
        return math.nan
    return math.sqrt(value)


async def _evaluate(f: MaybeAsyncFunction, x: float) -> float:
    result = f(x)
    if inspect.isawaitable(result):
        return await result
    return cast("float", result)


def derivative(f: UnivariateFunction, x: float, h: float = _DEFAULT_STEP) -> float:
    """Differentiate ``f`` at ``x`` with a central difference.

    Args:
        f: Function to differentiate.
        x: Point at which to take the derivative.
        h: Half-width of the difference stencil.

    Returns:
        ``(f(x + h) - f(x - h)) / 2h``.

    """
    return divide(f(x + h) - f(x - h), 2 * h)


async def async_derivative(
    f: MaybeAsyncFunction,
    x: float,
    h: float = _DEFAULT_STEP,
) -> float:
    """Differentiate a possibly asynchronous function with a central difference.

    The two evaluations run sequentially, ``x + h`` first.

    Args:
        f: Function to differentiate; may return an awaitable.
        x: Point at which to take the derivative.
        h: Half-width of the difference stencil. Use a coarser step when
            ``f`` wraps a discrete simulation.

    Returns:
        ``(f(x + h) - f(x - h)) / 2h``.

    """
    f_plus = await _evaluate(f, x + h)
    f_minus = await _evaluate(f, x - h)
    return divide(f_plus - f_minus, 2 * h)


async def find_root(
    f: MaybeAsyncFunction,
    lower_bound: float,
    upper_bound: float,
    iterations: int = _DEFAULT_ITERATIONS,
    tolerance: float = _DEFAULT_TOLERANCE,
) -> float:
    """Solve ``f(x) = 0`` with Newton's method inside ``[lower_bound, upper_bound]``.

    Start from the midpoint of the bounds. A Newton step that leaves the
    interval is clamped to the nearest bound; there is no bisection
    fallback. Convergence is declared as soon as a step moves less than
    ``tolerance``, which includes a clamped step landing on the bound it
    already sits at.

    Running out of iterations is not an error: the last estimate is
    returned and should be treated as an approximation.

    Args:
        f: Function believed to cross zero inside the bounds; may return
            an awaitable.
        lower_bound: Smallest admissible root.
        upper_bound: Largest admissible root.
        iterations: Maximum number of Newton steps.
        tolerance: Step size below which the iteration stops.

    Returns:
        The root estimate. A zero derivative can make this ``nan``.

    """
    x = (lower_bound + upper_bound) / 2

    for i in range(iterations):
        fx = await _evaluate(f, x)
        dfx = await async_derivative(f, x)

        x_next = x - divide(fx, dfx)

        if x_next < lower_bound or x_next > upper_bound:
            x_next = lower_bound if x_next < lower_bound else upper_bound

        if abs(x_next - x) < tolerance:
            logger.debug("Found root %.6g after %d iterations", x_next, i + 1)
            return x_next

        x = x_next

    logger.debug("No convergence after %d iterations, returning %.6g", iterations, x)
    return x
