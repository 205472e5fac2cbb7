"""Standard normal distribution helpers backed by scipy."""

from __future__ import annotations

from scipy.stats import norm

from decision_engine.models.enums import TestDirection
from decision_engine.models.errors import InvalidInputError


def normal_cdf(z: float) -> float:
    """Φ(z), the standard normal cumulative distribution function."""
    return float(norm.cdf(z))


def normal_ppf(p: float) -> float:
    """Φ⁻¹(p), the inverse standard normal CDF.

    Only defined on the open interval (0, 1); the endpoints map to ±inf,
    which no caller can use, so they are rejected.
    """
    if not (0 < p < 1):
        raise InvalidInputError("probability", f"must be between 0 and 1 (exclusive), got {p}")
    return float(norm.ppf(p))


def z_critical(
    confidence_level: float,
    direction: TestDirection = TestDirection.TWO_TAILED,
) -> float:
    """Critical z value for a confidence level given in percent (e.g. 95).

    Two-tailed: Φ⁻¹(1 - α/2). One-tailed: Φ⁻¹(1 - α).
    """
    alpha = 1 - confidence_level / 100
    if direction == TestDirection.TWO_TAILED:
        return normal_ppf(1 - alpha / 2)
    return normal_ppf(1 - alpha)
