"""Immutable experiment analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TestResult:
    __test__ = False

    variant_id: str
    p_value: float
    is_significant: bool
    confidence_interval: tuple[float, float]
    uplift: float
    absolute_uplift: float
    power: float
    effect_size: float
    z_score: float
    winner: Optional[str] = None
    multiple_testing_adjusted: bool = False
    # significant and |relative uplift| >= TestConfig.minimum_effect
    practically_significant: bool = False


@dataclass(frozen=True)
class SampleSizeResult:
    per_variation: int
    total: int
    power_target: float
    duration_days: Optional[int] = None
    duration_weeks: Optional[int] = None
    cost: Optional[float] = None
    notes: list[str] = field(default_factory=list)
