"""Risk adjustment and Monte Carlo uncertainty analysis for ROI inputs."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from decision_engine.models.errors import InvalidInputError, raise_for_issues
from decision_engine.roi import cash_flows, metrics
from decision_engine.roi.result import MetricStatistics, MonteCarloResults
from decision_engine.roi.schema import RiskFactor, RoiCalculation
from decision_engine.roi.validation import validate_risk_factors, validate_roi_calculation

logger = logging.getLogger(__name__)


def risk_multiplier(risk: RiskFactor) -> float:
    """Expected multiplier a risk applies to each affected amount.

    Mitigation shrinks the impact's deviation from 1 by its effectiveness;
    the result is then weighted by the probability of the risk occurring.
    """
    effectiveness = risk.mitigation.effectiveness if risk.mitigation else 0.0
    effective_impact = 1 + (risk.impact - 1) * (1 - effectiveness)
    return 1 + (effective_impact - 1) * risk.probability


def apply_risk_factors(
    calculation: RoiCalculation, risks: list[RiskFactor]
) -> RoiCalculation:
    """Return a new calculation with affected line items risk-adjusted.

    Several risks on one item compound multiplicatively. Mitigation costs
    are added to the initial cost.
    """
    raise_for_issues(validate_risk_factors(risks))

    multipliers: dict[str, float] = {}
    mitigation_cost = 0.0
    known_ids = {item.id for item in calculation.line_items()}

    for risk in risks:
        factor = risk_multiplier(risk)
        for item_id in risk.affected_items:
            if item_id not in known_ids:
                logger.warning(f"Risk '{risk.id}' references unknown line item '{item_id}'")
                continue
            multipliers[item_id] = multipliers.get(item_id, 1.0) * factor
        if risk.mitigation is not None:
            mitigation_cost += risk.mitigation.cost

    costs = [
        c.model_copy(update={"amount": c.amount * multipliers[c.id]})
        if c.id in multipliers
        else c
        for c in calculation.costs
    ]
    benefits = [
        b.model_copy(update={"amount": b.amount * multipliers[b.id]})
        if b.id in multipliers
        else b
        for b in calculation.benefits
    ]

    return calculation.model_copy(
        update={
            "costs": costs,
            "benefits": benefits,
            "initial_cost": calculation.initial_cost + mitigation_cost,
        }
    )


def _statistics(values: np.ndarray) -> MetricStatistics:
    p10, p50, p90 = np.percentile(values, [10, 50, 90])
    return MetricStatistics(
        p10=float(p10),
        p50=float(p50),
        p90=float(p90),
        mean=float(np.mean(values)),
        std_dev=float(np.std(values)),
    )


def run_monte_carlo(
    calculation: RoiCalculation,
    iterations: int = 1000,
    uncertainty: float = 0.2,
    seed: Optional[int] = None,
) -> MonteCarloResults:
    """Simulate NPV, simple ROI and payback under uniform input noise.

    Every amount (initial cost and each line item) is scaled independently
    by a factor drawn from U(1 - uncertainty, 1 + uncertainty). Results are
    reproducible for a given ``seed``.
    """
    raise_for_issues(validate_roi_calculation(calculation))
    if iterations < 1:
        raise InvalidInputError("iterations", "must be at least 1")
    if not (0 <= uncertainty <= 1):
        raise InvalidInputError("uncertainty", "must be between 0 and 1")

    horizon = calculation.time_horizon
    rng = np.random.default_rng(seed)

    initial_row = np.zeros(horizon)
    initial_row[0] = calculation.initial_cost
    cost_rows = np.vstack(
        [initial_row] + [cash_flows.item_schedule(c, horizon) for c in calculation.costs]
    )
    benefit_rows = np.vstack(
        [np.zeros(horizon)]
        + [cash_flows.item_schedule(b, horizon) for b in calculation.benefits]
    )

    low, high = 1 - uncertainty, 1 + uncertainty
    cost_factors = rng.uniform(low, high, size=(iterations, cost_rows.shape[0]))
    benefit_factors = rng.uniform(low, high, size=(iterations, benefit_rows.shape[0]))

    costs = cost_factors @ cost_rows
    benefits = benefit_factors @ benefit_rows
    net = benefits - costs

    discount = cash_flows.discount_factors(
        horizon, cash_flows.monthly_rate(calculation.discount_rate)
    )
    npv = net @ (1 / discount)

    cost_totals = costs.sum(axis=1)
    benefit_totals = benefits.sum(axis=1)
    has_cost = cost_totals > 0
    roi = (benefit_totals[has_cost] - cost_totals[has_cost]) / cost_totals[has_cost] * 100

    cumulative = np.cumsum(net, axis=1)
    paybacks = [metrics.payback_period(row) for row in cumulative]
    paid_back = np.array([p for p in paybacks if p is not None])

    logger.debug(
        f"Monte Carlo for '{calculation.name}': {iterations} iterations, "
        f"mean NPV {float(np.mean(npv)):.2f}"
    )

    return MonteCarloResults(
        iterations=iterations,
        seed=seed,
        npv=_statistics(npv),
        roi=_statistics(roi) if roi.size else None,
        payback=_statistics(paid_back) if paid_back.size else None,
        success_probability=float(np.mean(npv > 0)),
        payback_probability=paid_back.size / iterations,
    )
