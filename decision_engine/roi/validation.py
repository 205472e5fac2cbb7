"""Range and horizon checks for ROI inputs."""

from __future__ import annotations

from typing import Union

from decision_engine.models.errors import ValidationIssue
from decision_engine.roi.schema import BenefitItem, CostItem, RiskFactor, RoiCalculation

MAX_TIME_HORIZON = 120
MAX_DISCOUNT_RATE = 50.0
# keeps cumulative and Monte Carlo-scaled sums finite
MAX_GROSS_AMOUNT = 1e300


def _validate_item(
    issues: list[ValidationIssue],
    prefix: str,
    item: Union[CostItem, BenefitItem],
    time_horizon: int,
) -> None:
    if item.amount < 0:
        issues.append(ValidationIssue(f"{prefix}.amount", "cannot be negative"))
    if item.start_month < 1 or item.start_month > time_horizon:
        issues.append(
            ValidationIssue(f"{prefix}.start_month", f"must be within 1-{time_horizon}")
        )
    if item.months < 1:
        issues.append(ValidationIssue(f"{prefix}.months", "must be at least 1 month"))
    elif item.start_month + item.months - 1 > time_horizon:
        issues.append(ValidationIssue(f"{prefix}.months", "extends beyond time horizon"))
    if item.kind == "benefit" and not (0 <= item.probability <= 100):
        issues.append(
            ValidationIssue(f"{prefix}.probability", "must be between 0 and 100")
        )


def validate_roi_calculation(calculation: RoiCalculation) -> list[ValidationIssue]:
    """Collect every input problem without raising."""
    issues: list[ValidationIssue] = []

    if calculation.initial_cost < 0:
        issues.append(ValidationIssue("initial_cost", "cannot be negative"))

    horizon = calculation.time_horizon
    if horizon < 1:
        issues.append(ValidationIssue("time_horizon", "must be at least 1 month"))
    elif horizon > MAX_TIME_HORIZON:
        issues.append(
            ValidationIssue(
                "time_horizon", f"cannot exceed {MAX_TIME_HORIZON} months (10 years)"
            )
        )

    if calculation.discount_rate < 0:
        issues.append(ValidationIssue("discount_rate", "cannot be negative"))
    elif calculation.discount_rate > MAX_DISCOUNT_RATE:
        issues.append(
            ValidationIssue("discount_rate", f"cannot exceed {MAX_DISCOUNT_RATE:g}%")
        )

    if calculation.reinvestment_rate is not None and not (
        0 <= calculation.reinvestment_rate <= MAX_DISCOUNT_RATE
    ):
        issues.append(
            ValidationIssue(
                "reinvestment_rate", f"must be between 0 and {MAX_DISCOUNT_RATE:g}%"
            )
        )

    # item month checks only make sense against a usable horizon
    if 1 <= horizon <= MAX_TIME_HORIZON:
        for i, cost in enumerate(calculation.costs):
            _validate_item(issues, f"costs[{i}]", cost, horizon)
        for i, benefit in enumerate(calculation.benefits):
            _validate_item(issues, f"benefits[{i}]", benefit, horizon)

    gross = abs(calculation.initial_cost) + sum(
        abs(item.amount) * max(item.months, 1) for item in calculation.line_items()
    )
    if not gross < MAX_GROSS_AMOUNT:
        issues.append(ValidationIssue("amounts", "combined amounts are too large to represent"))

    return issues


def validate_risk_factors(risks: list[RiskFactor]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for i, risk in enumerate(risks):
        prefix = f"risk_factors[{i}]"
        if not (0 <= risk.probability <= 1):
            issues.append(ValidationIssue(f"{prefix}.probability", "must be between 0 and 1"))
        if risk.impact < 0:
            issues.append(ValidationIssue(f"{prefix}.impact", "cannot be negative"))
        if risk.mitigation is not None:
            if not (0 <= risk.mitigation.effectiveness <= 1):
                issues.append(
                    ValidationIssue(
                        f"{prefix}.mitigation.effectiveness", "must be between 0 and 1"
                    )
                )
            if risk.mitigation.cost < 0:
                issues.append(
                    ValidationIssue(f"{prefix}.mitigation.cost", "cannot be negative")
                )
    return issues


def roi_input_warnings(calculation: RoiCalculation) -> list[ValidationIssue]:
    """Non-blocking notes on inputs that are valid but likely mistaken."""
    warnings: list[ValidationIssue] = []
    has_items = bool(calculation.costs or calculation.benefits)

    if calculation.discount_rate > 20:
        warnings.append(
            ValidationIssue("discount_rate", "Discount rate seems high. Typical rates are 8-15%")
        )
    if calculation.time_horizon < 12 and has_items:
        warnings.append(
            ValidationIssue(
                "time_horizon",
                "Consider a longer time horizon (12+ months) for more accurate ROI",
            )
        )
    if not calculation.benefits and (calculation.initial_cost > 0 or calculation.costs):
        warnings.append(ValidationIssue("benefits", "No benefits defined - ROI will be negative"))
    for i, benefit in enumerate(calculation.benefits):
        if benefit.probability < 50:
            warnings.append(
                ValidationIssue(
                    f"benefits[{i}].probability",
                    f"Benefit #{i + 1} has low probability ({benefit.probability:g}%)",
                )
            )
    return warnings
