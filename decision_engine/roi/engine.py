"""ROI calculation engine.

Takes an RoiCalculation -> builds the monthly cash-flow series -> derives
NPV, IRR, MIRR, payback, break-even, PI and EVA.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from decision_engine.config.settings import EngineSettings
from decision_engine.models.errors import raise_for_issues
from decision_engine.roi import cash_flows, metrics
from decision_engine.roi.result import MonteCarloResults, RoiMetrics, RoiResult
from decision_engine.roi.risk import apply_risk_factors, run_monte_carlo
from decision_engine.roi.schema import RiskFactor, RoiCalculation
from decision_engine.roi.validation import validate_roi_calculation

logger = logging.getLogger(__name__)


class RoiEngine:
    """Stateless engine that runs ROI calculations."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self._settings = settings or EngineSettings()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def calculate(self, calculation: RoiCalculation) -> RoiResult:
        """Run the full analysis: metrics plus the monthly projection series."""
        projections = cash_flows.calculate_monthly_projections(calculation)
        roi_metrics = self.calculate_metrics(calculation)
        return RoiResult(
            name=calculation.name,
            metrics=roi_metrics,
            projections=projections,
            category=metrics.get_roi_category(roi_metrics.simple_roi),
        )

    def calculate_metrics(self, calculation: RoiCalculation) -> RoiMetrics:
        raise_for_issues(validate_roi_calculation(calculation))

        flows = cash_flows.net_cash_flows(calculation)
        costs_total = cash_flows.total_costs(calculation)
        benefits_total = cash_flows.total_benefits(calculation)
        warnings: list[str] = []

        simple_roi = metrics.simple_roi(benefits_total, costs_total)
        if simple_roi is None:
            warnings.append("Total costs are zero; simple ROI is undefined.")

        npv = cash_flows.net_present_value(flows, calculation.discount_rate)

        irr_result = cash_flows.solve_irr(flows, self._settings)
        irr: Optional[float] = None
        if irr_result.converged:
            irr = irr_result.root * 12 * 100
        elif irr_result.reason == cash_flows.NO_SIGN_CHANGE:
            warnings.append("Cash flows never change sign; IRR is undefined.")
        else:
            logger.warning(
                f"IRR did not converge for '{calculation.name}' "
                f"({irr_result.reason} after {irr_result.iterations} iterations)"
            )
            warnings.append(
                f"IRR did not converge ({irr_result.reason} after "
                f"{irr_result.iterations} iterations)."
            )

        finance_rate = cash_flows.monthly_rate(calculation.discount_rate)
        reinvestment_rate = (
            cash_flows.monthly_rate(calculation.reinvestment_rate)
            if calculation.reinvestment_rate is not None
            else finance_rate
        )
        monthly_mirr = metrics.modified_irr(flows, finance_rate, reinvestment_rate)
        mirr = monthly_mirr * 12 * 100 if monthly_mirr is not None else None

        cumulative = np.cumsum(flows)
        discounted_cumulative = np.cumsum(
            flows / cash_flows.discount_factors(len(flows), finance_rate)
        )
        payback = metrics.payback_period(cumulative)
        if payback is None:
            warnings.append("Investment is not paid back within the time horizon.")

        pi = metrics.profitability_index(npv, calculation.initial_cost)
        eva = metrics.economic_value_added(
            npv, calculation.initial_cost, calculation.discount_rate
        )

        logger.debug(
            f"ROI metrics for '{calculation.name}': npv={npv:.2f}, "
            f"irr={irr}, payback={payback}"
        )

        return RoiMetrics(
            total_costs=costs_total,
            total_benefits=benefits_total,
            simple_roi=simple_roi,
            npv=npv,
            irr=irr,
            irr_converged=irr_result.converged,
            mirr=mirr,
            payback_period=payback,
            discounted_payback_period=metrics.payback_period(discounted_cumulative),
            break_even_month=metrics.break_even_month(cumulative),
            pi=pi,
            eva=eva,
            warnings=warnings,
        )

    def run_monte_carlo(
        self,
        calculation: RoiCalculation,
        iterations: Optional[int] = None,
        uncertainty: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> MonteCarloResults:
        return run_monte_carlo(
            calculation,
            iterations=(
                iterations
                if iterations is not None
                else self._settings.monte_carlo_iterations
            ),
            uncertainty=(
                uncertainty
                if uncertainty is not None
                else self._settings.monte_carlo_uncertainty
            ),
            seed=seed,
        )

    def calculate_with_risks(
        self, calculation: RoiCalculation, risks: list[RiskFactor]
    ) -> RoiResult:
        return self.calculate(apply_risk_factors(calculation, risks))


def calculate_roi_metrics(
    calculation: RoiCalculation, settings: Optional[EngineSettings] = None
) -> RoiMetrics:
    """Convenience wrapper around ``RoiEngine().calculate_metrics``."""
    return RoiEngine(settings).calculate_metrics(calculation)
