"""ROI analysis: cash flows, NPV/IRR/MIRR, payback, risk and Monte Carlo."""

from .engine import RoiEngine, calculate_roi_metrics
from .metrics import (
    break_even_month,
    economic_value_added,
    get_roi_category,
    modified_irr,
    payback_period,
    profitability_index,
    simple_roi,
)
from .cash_flows import (
    calculate_monthly_projections,
    net_cash_flows,
    net_present_value,
    solve_irr,
)
from .result import (
    MetricStatistics,
    MonteCarloResults,
    MonthlyProjection,
    RoiCategory,
    RoiMetrics,
    RoiResult,
)
from .risk import apply_risk_factors, risk_multiplier, run_monte_carlo
from .schema import (
    BenefitItem,
    CostItem,
    LineItem,
    RiskFactor,
    RiskMitigation,
    RoiCalculation,
)
from .validation import roi_input_warnings, validate_risk_factors, validate_roi_calculation

__all__ = [
    "BenefitItem",
    "CostItem",
    "LineItem",
    "MetricStatistics",
    "MonteCarloResults",
    "MonthlyProjection",
    "RiskFactor",
    "RiskMitigation",
    "RoiCalculation",
    "RoiCategory",
    "RoiEngine",
    "RoiMetrics",
    "RoiResult",
    "apply_risk_factors",
    "break_even_month",
    "calculate_monthly_projections",
    "calculate_roi_metrics",
    "economic_value_added",
    "get_roi_category",
    "modified_irr",
    "net_cash_flows",
    "net_present_value",
    "payback_period",
    "profitability_index",
    "risk_multiplier",
    "roi_input_warnings",
    "run_monte_carlo",
    "simple_roi",
    "solve_irr",
    "validate_risk_factors",
    "validate_roi_calculation",
]
