"""Root finders: bounded Newton-Raphson with a bracketed Brent fallback.

Used for IRR, but kept independent of cash flows so they can be exercised
on their own. Neither raises for numerical trouble: every exit path is
described by ``RootResult.converged`` and ``RootResult.reason``, and
``RootResult.method`` records which algorithm produced the root.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from scipy import optimize

logger = logging.getLogger(__name__)

CONVERGED = "converged"
MAX_ITERATIONS = "max_iterations"
ZERO_DERIVATIVE = "zero_derivative"
NON_FINITE = "non_finite"
OUT_OF_BOUNDS = "out_of_bounds"

NEWTON = "newton"
BRENT = "brent"


@dataclass(frozen=True)
class RootResult:
    """Outcome of a root search."""

    root: float
    converged: bool
    iterations: int
    value: float
    reason: str
    method: str = NEWTON


def numeric_derivative(
    func: Callable[[float], float], x: float, h: float = 1e-7
) -> float:
    """Central-difference approximation of f'(x)."""
    step = h * max(1.0, abs(x))
    return (func(x + step) - func(x - step)) / (2 * step)


def newton_raphson(
    func: Callable[[float], float],
    seed: float,
    derivative: Optional[Callable[[float], float]] = None,
    tolerance: float = 1e-5,
    step_tolerance: float = 1e-12,
    max_iterations: int = 100,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> RootResult:
    """Find x with func(x) ≈ 0 starting from ``seed``.

    Converges when |func(x)| < tolerance or when an unclamped update moves
    x by less than step_tolerance. Updates are clamped to [lower, upper]
    when bounds are given; a search that stays pinned to a bound is
    reported as OUT_OF_BOUNDS.
    """
    x = seed
    fx = func(x)

    for iteration in range(1, max_iterations + 1):
        if not math.isfinite(fx):
            return RootResult(x, False, iteration - 1, fx, NON_FINITE)
        if abs(fx) < tolerance:
            return RootResult(x, True, iteration - 1, fx, CONVERGED)

        dfx = derivative(x) if derivative is not None else numeric_derivative(func, x)
        if dfx == 0 or not math.isfinite(dfx):
            return RootResult(x, False, iteration - 1, fx, ZERO_DERIVATIVE)

        x_new = x - fx / dfx
        clamped = False
        if lower is not None and x_new < lower:
            x_new, clamped = lower, True
        if upper is not None and x_new > upper:
            x_new, clamped = upper, True

        step = abs(x_new - x)
        x = x_new
        fx = func(x)

        if step < step_tolerance:
            if clamped:
                return RootResult(x, False, iteration, fx, OUT_OF_BOUNDS)
            if math.isfinite(fx):
                return RootResult(x, True, iteration, fx, CONVERGED)

    if math.isfinite(fx) and abs(fx) < tolerance:
        return RootResult(x, True, max_iterations, fx, CONVERGED)

    logger.debug(
        f"Newton-Raphson gave up after {max_iterations} iterations "
        f"(x={x:.6g}, f(x)={fx:.6g})"
    )
    return RootResult(x, False, max_iterations, fx, MAX_ITERATIONS)


def find_brackets(
    func: Callable[[float], float], grid: Sequence[float]
) -> list[tuple[float, float]]:
    """Adjacent grid intervals over which ``func`` changes sign.

    Points where ``func`` is not finite are skipped. An exact zero on a grid
    point opens a bracket starting at that point.
    """
    values = [(x, func(x)) for x in grid]
    finite = [(x, fx) for x, fx in values if math.isfinite(fx)]
    brackets = []
    for (a, fa), (b, fb) in zip(finite, finite[1:]):
        if fa == 0 or math.copysign(1, fa) != math.copysign(1, fb):
            brackets.append((a, b))
    return brackets


def brent(
    func: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float = 1e-12,
    max_iterations: int = 100,
) -> RootResult:
    """Brent's method on an interval whose endpoints bracket a root.

    Raises ValueError when func(lower) and func(upper) share a sign.
    """
    root, info = optimize.brentq(
        func,
        lower,
        upper,
        xtol=tolerance,
        maxiter=max_iterations,
        full_output=True,
        disp=False,
    )
    return RootResult(
        root=root,
        converged=info.converged,
        iterations=info.iterations,
        value=func(root),
        reason=CONVERGED if info.converged else MAX_ITERATIONS,
        method=BRENT,
    )
