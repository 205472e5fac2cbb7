"""Monthly cash-flow construction and discounting.

Months are 1-based. Month 1 carries the initial cost and is the undiscounted
base period, so month m is discounted by (1 + r)^(m - 1) where
r = annual_rate / 100 / 12. The IRR solver uses the same indexing and is
annualised by multiplying the monthly rate by 12, keeping NPV and IRR on
one (linear) convention.
"""

from __future__ import annotations

import logging
from typing import Union

import numpy as np

from decision_engine.config.settings import EngineSettings
from decision_engine.models.errors import raise_for_issues
from decision_engine.numeric.solver import RootResult, brent, find_brackets, newton_raphson
from decision_engine.roi.result import MonthlyProjection
from decision_engine.roi.schema import BenefitItem, CostItem, RoiCalculation
from decision_engine.roi.validation import validate_roi_calculation

logger = logging.getLogger(__name__)

NO_SIGN_CHANGE = "no_sign_change"


def monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100 / 12


def item_weight(item: Union[CostItem, BenefitItem]) -> float:
    """Probability weight: benefits are risk-adjusted, costs are certain."""
    if item.kind == "benefit":
        return item.probability / 100
    return 1.0


def item_schedule(item: Union[CostItem, BenefitItem], time_horizon: int) -> np.ndarray:
    """Per-month amounts for one line item over the horizon.

    Recurring items apply ``amount`` in every active month; one-off items
    apply the full ``amount`` once, in ``start_month``.
    """
    schedule = np.zeros(time_horizon)
    start = item.start_month - 1
    if item.is_recurring:
        schedule[start:start + item.months] = item.amount
    else:
        schedule[start] = item.amount
    return schedule * item_weight(item)


def item_total(item: Union[CostItem, BenefitItem]) -> float:
    amount = item.amount * item.months if item.is_recurring else item.amount
    return amount * item_weight(item)


def total_costs(calculation: RoiCalculation) -> float:
    return calculation.initial_cost + sum(item_total(c) for c in calculation.costs)


def total_benefits(calculation: RoiCalculation) -> float:
    return sum(item_total(b) for b in calculation.benefits)


def monthly_costs(calculation: RoiCalculation) -> np.ndarray:
    horizon = calculation.time_horizon
    costs = np.zeros(horizon)
    costs[0] = calculation.initial_cost
    for item in calculation.costs:
        costs += item_schedule(item, horizon)
    return costs


def monthly_benefits(calculation: RoiCalculation) -> np.ndarray:
    horizon = calculation.time_horizon
    benefits = np.zeros(horizon)
    for item in calculation.benefits:
        benefits += item_schedule(item, horizon)
    return benefits


def net_cash_flows(calculation: RoiCalculation) -> np.ndarray:
    raise_for_issues(validate_roi_calculation(calculation))
    return monthly_benefits(calculation) - monthly_costs(calculation)


def discount_factors(n_months: int, rate: float) -> np.ndarray:
    """(1 + rate)^t for t = 0..n-1, ``rate`` being a monthly rate."""
    return (1 + rate) ** np.arange(n_months)


def calculate_monthly_projections(calculation: RoiCalculation) -> list[MonthlyProjection]:
    raise_for_issues(validate_roi_calculation(calculation))

    costs = monthly_costs(calculation)
    benefits = monthly_benefits(calculation)
    net = benefits - costs
    cumulative = np.cumsum(net)
    discounted = net / discount_factors(len(net), monthly_rate(calculation.discount_rate))
    discounted_cumulative = np.cumsum(discounted)

    return [
        MonthlyProjection(
            month=i + 1,
            costs=float(costs[i]),
            benefits=float(benefits[i]),
            net_cash_flow=float(net[i]),
            cumulative_cash_flow=float(cumulative[i]),
            discounted_cash_flow=float(discounted[i]),
            discounted_cumulative=float(discounted_cumulative[i]),
        )
        for i in range(len(net))
    ]


def net_present_value(cash_flows: np.ndarray, annual_rate_pct: float) -> float:
    """NPV of a monthly series at an annual percentage rate (monthly = annual / 12)."""
    flows = np.asarray(cash_flows, dtype=float)
    return float(np.sum(flows / discount_factors(len(flows), monthly_rate(annual_rate_pct))))


def _npv_at_monthly_rate(flows: np.ndarray, rate: float) -> float:
    with np.errstate(all="ignore"):
        return float(np.sum(flows / discount_factors(len(flows), rate)))


def _npv_derivative(flows: np.ndarray, rate: float) -> float:
    t = np.arange(len(flows))
    with np.errstate(all="ignore"):
        return float(np.sum(-t * flows / (1 + rate) ** (t + 1)))


def has_sign_change(cash_flows: np.ndarray) -> bool:
    flows = np.asarray(cash_flows, dtype=float)
    return bool(np.any(flows > 0) and np.any(flows < 0))


def _pick_bracket(brackets: list[tuple[float, float]]) -> tuple[float, float]:
    """Lowest bracket reaching non-negative rates, else the one nearest zero."""
    non_negative = [b for b in brackets if b[1] >= 0]
    if non_negative:
        return min(non_negative, key=lambda b: b[0])
    return max(brackets, key=lambda b: b[1])


def solve_irr(cash_flows: np.ndarray, settings: EngineSettings) -> RootResult:
    """Monthly IRR of a cash-flow series.

    Bounded Newton-Raphson runs first. If it does not converge, the rate
    range is scanned for sign changes of NPV and Brent's method is run on
    the chosen bracket. A series that never changes sign has no IRR; that
    is reported as a non-converged result without running either solver.
    """
    flows = np.asarray(cash_flows, dtype=float)
    seed = settings.irr_seed_rate / 12

    def npv(rate: float) -> float:
        return _npv_at_monthly_rate(flows, rate)

    if not has_sign_change(flows):
        return RootResult(
            root=seed,
            converged=False,
            iterations=0,
            value=npv(seed),
            reason=NO_SIGN_CHANGE,
        )

    result = newton_raphson(
        func=npv,
        derivative=lambda r: _npv_derivative(flows, r),
        seed=seed,
        tolerance=settings.irr_tolerance,
        step_tolerance=settings.irr_step_tolerance,
        max_iterations=settings.irr_max_iterations,
        lower=settings.irr_min_rate,
        upper=settings.irr_max_rate,
    )
    if result.converged:
        return result

    grid = np.linspace(settings.irr_min_rate, settings.irr_max_rate, settings.irr_bracket_points)
    brackets = find_brackets(npv, grid)
    if not brackets:
        return result

    lower, upper = _pick_bracket(brackets)
    fallback = brent(
        npv,
        lower,
        upper,
        tolerance=settings.irr_step_tolerance,
        max_iterations=settings.irr_max_iterations,
    )
    if not fallback.converged:
        return result

    logger.debug(
        f"Newton-Raphson stopped with {result.reason}; Brent found monthly IRR "
        f"{fallback.root:.6g} in [{lower:.4g}, {upper:.4g}]"
    )
    return fallback
