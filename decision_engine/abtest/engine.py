"""Frequentist analysis and planning for conversion-rate experiments.

Significance uses a pooled two-proportion z-test; the confidence interval on
the difference uses the unpooled standard error with a two-sided critical
value. Sample sizes come from the closed-form two-proportion formula.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Optional

from decision_engine.abtest.result import SampleSizeResult, TestResult
from decision_engine.abtest.schema import SampleSizeInputs, TestConfig, Variation
from decision_engine.config.settings import EngineSettings
from decision_engine.models.enums import CorrectionMethod, TestDirection
from decision_engine.models.errors import (
    InvalidInputError,
    ValidationIssue,
    raise_for_issues,
)
from decision_engine.numeric.normal import normal_cdf, normal_ppf, z_critical

logger = logging.getLogger(__name__)


def validate_variation(variation: Variation, prefix: str = "") -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if variation.visitors < 0:
        issues.append(ValidationIssue(f"{prefix}visitors", "cannot be negative"))
    if variation.conversions < 0:
        issues.append(ValidationIssue(f"{prefix}conversions", "cannot be negative"))
    if variation.conversions > variation.visitors:
        issues.append(ValidationIssue(f"{prefix}conversions", "cannot exceed visitors"))
    return issues


def _critical_value(alpha: float, direction: TestDirection) -> float:
    if direction == TestDirection.TWO_TAILED:
        return normal_ppf(1 - alpha / 2)
    return normal_ppf(1 - alpha)


def pooled_standard_error(p1: float, n1: int, p2: float, n2: int) -> float:
    """Standard error of p2 - p1 under H0 (both arms share one rate)."""
    pooled = (p1 * n1 + p2 * n2) / (n1 + n2)
    return math.sqrt(pooled * (1 - pooled) * (1 / n1 + 1 / n2))


def unpooled_standard_error(p1: float, n1: int, p2: float, n2: int) -> float:
    return math.sqrt(p1 * (1 - p1) / n1 + p2 * (1 - p2) / n2)


def p_value_from_z(z: float, direction: TestDirection) -> float:
    if direction == TestDirection.TWO_TAILED:
        return 2 * (1 - normal_cdf(abs(z)))
    return 1 - normal_cdf(z)


def cohens_h(p1: float, p2: float) -> float:
    """Effect size for two proportions via the arcsine transform."""
    return 2 * math.asin(math.sqrt(p2)) - 2 * math.asin(math.sqrt(p1))


def calculate_power(
    n1: int,
    n2: int,
    p1: float,
    p2: float,
    alpha: float = 0.05,
    direction: TestDirection = TestDirection.TWO_TAILED,
) -> float:
    """Probability of detecting the difference between p1 and p2.

    ``alpha`` is the significance level as a fraction (0.05, not 95).
    """
    if n1 <= 0 or n2 <= 0:
        return 0.0
    if not (0 < alpha < 1):
        raise InvalidInputError("alpha", f"must be between 0 and 1 (exclusive), got {alpha}")

    delta = abs(p2 - p1)
    se0 = pooled_standard_error(p1, n1, p2, n2)
    se1 = unpooled_standard_error(p1, n1, p2, n2)
    threshold = _critical_value(alpha, direction) * se0

    if se1 == 0:
        return 1.0 if delta > threshold else 0.0
    return normal_cdf((delta - threshold) / se1)


def adjust_p_values(p_values: list[float], method: CorrectionMethod) -> list[float]:
    """Family-wise (Bonferroni, Holm) or false-discovery (BH) adjustment.

    Adjusted values keep the order of ``p_values`` and are capped at 1.
    """
    m = len(p_values)
    if m == 0 or method == CorrectionMethod.NONE:
        return list(p_values)

    if method == CorrectionMethod.BONFERRONI:
        return [min(p * m, 1.0) for p in p_values]

    order = sorted(range(m), key=lambda i: p_values[i])
    adjusted = [0.0] * m

    if method == CorrectionMethod.HOLM:
        running = 0.0
        for rank, i in enumerate(order):
            running = max(running, min((m - rank) * p_values[i], 1.0))
            adjusted[i] = running
        return adjusted

    if method == CorrectionMethod.FDR:
        running = 1.0
        for rank in range(m - 1, -1, -1):
            i = order[rank]
            running = min(running, p_values[i] * m / (rank + 1))
            adjusted[i] = running
        return adjusted

    raise ValueError(f"Unknown correction method: {method}")


def _empty_result(variant: Variation) -> TestResult:
    return TestResult(
        variant_id=variant.id,
        p_value=1.0,
        is_significant=False,
        confidence_interval=(0.0, 0.0),
        uplift=0.0,
        absolute_uplift=0.0,
        power=0.0,
        effect_size=0.0,
        z_score=0.0,
    )


def _practically_significant(
    is_significant: bool, uplift: float, config: TestConfig
) -> bool:
    return is_significant and abs(uplift) >= config.minimum_effect


def calculate_mde(
    sample_size: int,
    baseline_rate: float,
    alpha: float = 0.05,
    power: float = 0.8,
    direction: TestDirection = TestDirection.TWO_TAILED,
) -> float:
    """Smallest absolute difference detectable with ``sample_size`` per arm.

    ``baseline_rate``, ``alpha`` and ``power`` are fractions; the result is
    an absolute difference in conversion rate (0.01 = one point).
    """
    if sample_size <= 0:
        raise InvalidInputError("sample_size", "must be greater than 0")
    if not (0 < baseline_rate < 1):
        raise InvalidInputError("baseline_rate", "must be between 0 and 1 (exclusive)")

    z_alpha = _critical_value(alpha, direction)
    z_beta = normal_ppf(power)
    p = baseline_rate
    return math.sqrt(2 * p * (1 - p) * (z_alpha + z_beta) ** 2 / sample_size)


def is_sample_size_sufficient(
    sample_size: int,
    baseline_rate: float,
    mde: float,
    alpha: float = 0.05,
    desired_power: float = 0.8,
    direction: TestDirection = TestDirection.TWO_TAILED,
) -> bool:
    achieved = calculate_power(
        sample_size, sample_size, baseline_rate, baseline_rate + mde, alpha, direction
    )
    return achieved >= desired_power


def calculate_sample_size(inputs: SampleSizeInputs) -> SampleSizeResult:
    """Required visitors per variation for a two-proportion test.

    n = 2 (z_alpha + z_beta)^2 p(1 - p) / (p2 - p1)^2 with p the mean of the
    two rates, rounded up. With several comparisons alpha is split
    Bonferroni-style before the critical value is taken.
    """
    p1 = inputs.baseline_rate / 100
    p2 = inputs.variant_rate
    if not (0 < p2 < 1):
        raise InvalidInputError(
            "minimum_effect",
            f"implies a variant conversion rate of {p2 * 100:.2f}%, outside (0, 100)",
        )

    alpha = 1 - inputs.confidence_level / 100
    notes: list[str] = []
    if inputs.comparisons > 1:
        alpha /= inputs.comparisons
        notes.append(f"Sample size adjusted for {inputs.comparisons} comparisons")

    z_alpha = _critical_value(alpha, inputs.test_direction)
    z_beta = normal_ppf(inputs.power / 100)
    pooled = (p1 + p2) / 2

    per_variation = math.ceil(
        2 * (z_alpha + z_beta) ** 2 * pooled * (1 - pooled) / (p2 - p1) ** 2
    )
    total = per_variation * inputs.variations

    duration_days: Optional[int] = None
    duration_weeks: Optional[int] = None
    if inputs.daily_traffic is not None:
        duration_days = math.ceil(total / inputs.daily_traffic)
        duration_weeks = math.ceil(duration_days / 7)
        if duration_days < 7:
            notes.append("Run for at least one full week to cover weekly cycles")

    cost = total * inputs.cost_per_sample if inputs.cost_per_sample is not None else None

    logger.debug(
        f"Sample size: {per_variation} per variation, {total} total "
        f"(baseline {inputs.baseline_rate}%, variant {p2 * 100:.3f}%)"
    )

    return SampleSizeResult(
        per_variation=per_variation,
        total=total,
        power_target=inputs.power,
        duration_days=duration_days,
        duration_weeks=duration_weeks,
        cost=cost,
        notes=notes,
    )


class StatisticsEngine:
    """Stateless engine that analyzes and plans A/B tests."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self._settings = settings or EngineSettings()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def analyze(
        self, control: Variation, variant: Variation, config: TestConfig
    ) -> TestResult:
        """Compare one variant against the control.

        Either arm having no visitors yields a non-significant result with
        p = 1 and zeroed statistics instead of an error.
        """
        raise_for_issues(
            validate_variation(control, "control.") + validate_variation(variant, "variant.")
        )

        if control.visitors == 0 or variant.visitors == 0:
            logger.debug(f"Variation without visitors in '{variant.id}', returning empty result")
            return _empty_result(variant)

        n1, n2 = control.visitors, variant.visitors
        p1, p2 = control.conversion_rate, variant.conversion_rate
        difference = p2 - p1

        se_pooled = pooled_standard_error(p1, n1, p2, n2)
        z = difference / se_pooled if se_pooled > 0 else 0.0
        p_value = p_value_from_z(z, config.test_direction)

        margin = z_critical(config.confidence_level) * unpooled_standard_error(p1, n1, p2, n2)
        alpha = 1 - config.confidence_level / 100
        is_significant = p_value < alpha
        uplift = difference / p1 * 100 if p1 > 0 else 0.0

        return TestResult(
            variant_id=variant.id,
            p_value=p_value,
            is_significant=is_significant,
            confidence_interval=(difference - margin, difference + margin),
            uplift=uplift,
            absolute_uplift=difference,
            power=calculate_power(n1, n2, p1, p2, alpha, config.test_direction),
            effect_size=cohens_h(p1, p2),
            z_score=z,
            winner=variant.id if is_significant and difference > 0 else None,
            practically_significant=_practically_significant(is_significant, uplift, config),
        )

    def analyze_variations(
        self, variations: list[Variation], config: TestConfig
    ) -> list[TestResult]:
        """Compare every variation against the first one (the control).

        With more than one comparison the configured correction is applied
        across the whole family of p-values.
        """
        if len(variations) < 2:
            raise InvalidInputError("variations", "at least 2 variations required")

        control, variants = variations[0], variations[1:]
        results = [self.analyze(control, v, config) for v in variants]

        if len(results) < 2 or config.correction_method == CorrectionMethod.NONE:
            return results

        adjusted = adjust_p_values([r.p_value for r in results], config.correction_method)
        alpha = 1 - config.confidence_level / 100
        corrected = []
        for result, p_value in zip(results, adjusted):
            significant = p_value < alpha
            corrected.append(
                dataclasses.replace(
                    result,
                    p_value=p_value,
                    is_significant=significant,
                    winner=result.variant_id if significant and result.absolute_uplift > 0 else None,
                    multiple_testing_adjusted=True,
                    practically_significant=_practically_significant(
                        significant, result.uplift, config
                    ),
                )
            )
        return corrected

    def calculate_power(
        self,
        n1: int,
        n2: int,
        p1: float,
        p2: float,
        alpha: float = 0.05,
        direction: TestDirection = TestDirection.TWO_TAILED,
    ) -> float:
        return calculate_power(n1, n2, p1, p2, alpha, direction)

    def calculate_sample_size(self, inputs: SampleSizeInputs) -> SampleSizeResult:
        return calculate_sample_size(inputs)

    def calculate_mde(
        self,
        sample_size: int,
        baseline_rate: float,
        alpha: float = 0.05,
        power: Optional[float] = None,
        direction: TestDirection = TestDirection.TWO_TAILED,
    ) -> float:
        return calculate_mde(
            sample_size,
            baseline_rate,
            alpha,
            power if power is not None else self._settings.default_power,
            direction,
        )

    def is_sample_size_sufficient(
        self,
        sample_size: int,
        baseline_rate: float,
        mde: float,
        alpha: float = 0.05,
        desired_power: Optional[float] = None,
        direction: TestDirection = TestDirection.TWO_TAILED,
    ) -> bool:
        return is_sample_size_sufficient(
            sample_size,
            baseline_rate,
            mde,
            alpha,
            desired_power if desired_power is not None else self._settings.default_power,
            direction,
        )
