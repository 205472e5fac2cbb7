"""Pydantic input models for experiment analysis and planning."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from decision_engine.models.enums import CorrectionMethod, EffectType, TestDirection

SUPPORTED_CONFIDENCE_LEVELS = (90, 95, 99)


class Variation(BaseModel):
    """Observed traffic for one arm of an experiment.

    Counts are not range-checked here; the statistics engine rejects
    negative counts and conversions above visitors with a field-level error.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    name: str = ""
    visitors: int
    conversions: int
    revenue: Optional[float] = None

    @property
    def conversion_rate(self) -> float:
        if self.visitors <= 0:
            return 0.0
        return self.conversions / self.visitors


class TestConfig(BaseModel):
    __test__ = False

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    confidence_level: float = 95
    test_direction: TestDirection = TestDirection.TWO_TAILED
    minimum_effect: float = Field(
        default=0.0, ge=0, description="Smallest relative uplift (percent) worth acting on"
    )
    correction_method: CorrectionMethod = CorrectionMethod.NONE

    @field_validator("confidence_level")
    @classmethod
    def supported_level(cls, v: float) -> float:
        if v not in SUPPORTED_CONFIDENCE_LEVELS:
            raise ValueError(
                f"confidence_level must be one of {SUPPORTED_CONFIDENCE_LEVELS}, got {v}"
            )
        return v


class SampleSizeInputs(BaseModel):
    """Planning inputs for a two-proportion test.

    ``baseline_rate`` and ``power`` are percentages. ``minimum_effect`` is a
    percentage of the baseline when ``effect_type`` is relative and
    percentage points when it is absolute.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    baseline_rate: float = Field(gt=0, lt=100)
    minimum_effect: float = Field(gt=0)
    effect_type: EffectType = EffectType.RELATIVE
    confidence_level: float = Field(default=95, gt=0, lt=100)
    power: float = Field(default=80, gt=0, lt=100)
    test_direction: TestDirection = TestDirection.TWO_TAILED
    variations: int = Field(default=2, ge=2)
    comparisons: int = Field(default=1, ge=1)
    daily_traffic: Optional[float] = Field(default=None, gt=0)
    cost_per_sample: Optional[float] = Field(default=None, ge=0)

    @property
    def variant_rate(self) -> float:
        """Expected variant conversion rate as a fraction."""
        p1 = self.baseline_rate / 100
        if self.effect_type == EffectType.RELATIVE:
            return p1 * (1 + self.minimum_effect / 100)
        return p1 + self.minimum_effect / 100
