"""Scalar ROI metrics derived from a monthly cash-flow series."""

from __future__ import annotations

from typing import Optional

import numpy as np

from decision_engine.roi.result import RoiCategory


def simple_roi(total_benefits: float, total_costs: float) -> Optional[float]:
    """(benefits - costs) / costs * 100; undefined (None) for a zero cost base."""
    if total_costs <= 0:
        return None
    return (total_benefits - total_costs) / total_costs * 100


def profitability_index(npv: float, initial_cost: float) -> Optional[float]:
    """NPV / initial investment; None without an initial investment."""
    if initial_cost <= 0:
        return None
    return npv / initial_cost


def economic_value_added(npv: float, initial_cost: float, discount_rate: float) -> float:
    """NPV less a one-period capital charge on the initial investment."""
    return npv - initial_cost * (discount_rate / 100)


def modified_irr(
    cash_flows: np.ndarray,
    finance_rate: float,
    reinvestment_rate: float,
) -> Optional[float]:
    """Monthly MIRR.

    Negative flows are discounted to month 1 at ``finance_rate``, positive
    flows compounded to the last month at ``reinvestment_rate`` (both
    monthly). Needs at least two months and flows of both signs.
    """
    flows = np.asarray(cash_flows, dtype=float)
    n = len(flows)
    if n < 2:
        return None

    t = np.arange(n)
    negative = np.where(flows < 0, flows, 0.0)
    positive = np.where(flows > 0, flows, 0.0)

    pv_negative = float(np.sum(negative / (1 + finance_rate) ** t))
    fv_positive = float(np.sum(positive * (1 + reinvestment_rate) ** (n - 1 - t)))

    if pv_negative == 0 or fv_positive == 0:
        return None

    return (fv_positive / abs(pv_negative)) ** (1 / (n - 1)) - 1


def payback_period(cumulative: np.ndarray) -> Optional[float]:
    """Months until the cumulative series first turns non-negative.

    Interpolates linearly inside the crossing month. None means the series
    never recovers within the horizon.
    """
    series = np.asarray(cumulative, dtype=float)
    crossed = np.flatnonzero(series >= 0)
    if crossed.size == 0:
        return None

    i = int(crossed[0])
    if i == 0:
        return 1.0

    previous = series[i - 1]
    month_flow = series[i] - previous
    return float(i + abs(previous) / month_flow)


def break_even_month(cumulative: np.ndarray) -> Optional[int]:
    """1-based month in which cumulative cash flow first reaches zero."""
    crossed = np.flatnonzero(np.asarray(cumulative, dtype=float) >= 0)
    if crossed.size == 0:
        return None
    return int(crossed[0]) + 1


def get_roi_category(roi: Optional[float]) -> RoiCategory:
    if roi is None:
        return RoiCategory(
            label="N/A",
            color="gray",
            description="No cost base to measure a return against",
        )
    if roi >= 200:
        return RoiCategory(
            label="Excellent", color="green", description="Exceptional return on investment"
        )
    if roi >= 100:
        return RoiCategory(
            label="Good", color="blue", description="Strong return on investment"
        )
    if roi >= 50:
        return RoiCategory(
            label="Moderate", color="yellow", description="Acceptable return on investment"
        )
    if roi >= 0:
        return RoiCategory(
            label="Low", color="orange", description="Minimal return on investment"
        )
    return RoiCategory(label="Negative", color="red", description="Loss on investment")
