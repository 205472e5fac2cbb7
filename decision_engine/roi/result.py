"""Immutable ROI result structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class MonthlyProjection:
    """One month of the cash-flow series (1-based ``month``)."""

    month: int
    costs: float
    benefits: float
    net_cash_flow: float
    cumulative_cash_flow: float
    discounted_cash_flow: float
    discounted_cumulative: float


@dataclass(frozen=True)
class RoiMetrics:
    """Derived metrics for one calculation.

    Percent-valued: simple_roi, irr, mirr. ``None`` marks a metric that is
    undefined for the inputs (zero cost base, no IRR, no payback within the
    horizon).
    """

    total_costs: float
    total_benefits: float
    simple_roi: Optional[float]
    npv: float
    irr: Optional[float]
    irr_converged: bool
    mirr: Optional[float]
    payback_period: Optional[float]
    discounted_payback_period: Optional[float]
    break_even_month: Optional[int]
    pi: Optional[float]
    eva: float
    warnings: list[str] = field(default_factory=list)

    @property
    def pays_back_within_horizon(self) -> bool:
        return self.payback_period is not None


@dataclass(frozen=True)
class RoiCategory:
    label: str
    color: str
    description: str


@dataclass(frozen=True)
class RoiResult:
    """Top-level result: metrics plus the monthly series used for charting."""

    name: str
    metrics: RoiMetrics
    projections: list[MonthlyProjection]
    category: RoiCategory


@dataclass(frozen=True)
class MetricStatistics:
    p10: float
    p50: float
    p90: float
    mean: float
    std_dev: float


@dataclass(frozen=True)
class MonteCarloResults:
    iterations: int
    seed: Optional[int]
    npv: MetricStatistics
    roi: Optional[MetricStatistics]
    payback: Optional[MetricStatistics]
    success_probability: float
    payback_probability: float
