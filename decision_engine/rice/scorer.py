"""RICE prioritization scoring.

Formula: (Reach x Impact x Confidence%) / Effort, rounded half-up to one
decimal place. Every function here is pure; identical inputs always give
identical results.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from decision_engine.models.errors import (
    InvalidInputError,
    ValidationIssue,
    raise_for_issues,
)
from decision_engine.rice.result import (
    ComponentContributions,
    RiceCategory,
    RiceResult,
    ScoreComparison,
    ScoreDistribution,
)
from decision_engine.rice.schema import RiceInputs

logger = logging.getLogger(__name__)

MUST_DO = RiceCategory(
    label="Must Do",
    color="green",
    priority=1,
    description="Critical priority - implement immediately",
)
SHOULD_DO = RiceCategory(
    label="Should Do",
    color="yellow",
    priority=2,
    description="High priority - implement soon",
)
COULD_DO = RiceCategory(
    label="Could Do",
    color="orange",
    priority=3,
    description="Medium priority - consider for roadmap",
)
WONT_DO = RiceCategory(
    label="Won't Do",
    color="red",
    priority=4,
    description="Low priority - defer or decline",
)

# (lower bound, category), checked top to bottom
_THRESHOLDS = [(100.0, MUST_DO), (50.0, SHOULD_DO), (20.0, COULD_DO)]


def _round1(value: float) -> float:
    """Round half away from zero to one decimal place."""
    return math.copysign(math.floor(abs(value) * 10 + 0.5) / 10, value)


def validate_rice_inputs(inputs: RiceInputs) -> list[ValidationIssue]:
    """Collect every range problem without raising."""
    issues: list[ValidationIssue] = []
    if inputs.reach < 0:
        issues.append(ValidationIssue("reach", "cannot be negative"))
    if inputs.impact < 0:
        issues.append(ValidationIssue("impact", "cannot be negative"))
    if inputs.confidence < 0:
        issues.append(ValidationIssue("confidence", "cannot be negative"))
    elif inputs.confidence > 100:
        issues.append(ValidationIssue("confidence", "cannot exceed 100%"))
    if inputs.effort <= 0:
        issues.append(ValidationIssue("effort", "must be greater than 0"))
    return issues


def rice_input_warnings(inputs: RiceInputs) -> list[str]:
    """Non-blocking notes on plausible but unusual inputs.

    Only meaningful once ``validate_rice_inputs`` reports no issues.
    """
    warnings: list[str] = []

    if inputs.reach == 0:
        warnings.append("Reach is 0 - this feature won't impact any users")
    elif not float(inputs.reach).is_integer():
        warnings.append("Reach is typically a whole number of users")
    elif inputs.reach > 1_000_000:
        warnings.append("Reach seems very high - double-check your estimate")

    if inputs.confidence < 20:
        warnings.append("Very low confidence - consider more research before implementing")
    elif inputs.confidence == 100:
        warnings.append("100% confidence is rare - are you sure about this estimate?")

    if inputs.effort > 24:
        warnings.append("Very high effort (2+ years) - consider breaking into smaller features")
    elif inputs.effort > 12:
        warnings.append("High effort (1+ year) - ensure resources are available")

    if min(inputs.reach, inputs.impact, inputs.confidence) > 0 and inputs.effort > 0:
        estimate = inputs.reach * inputs.impact * (inputs.confidence / 100) / inputs.effort
        if estimate < 1 and inputs.effort > 3:
            warnings.append("Very low score with high effort - reconsider prioritization")
        elif estimate > 1000:
            warnings.append("Extremely high score - verify all inputs are realistic")

    return warnings


def calculate_rice_score(
    reach: float,
    impact: float,
    confidence: float,
    effort: float,
) -> float:
    """RICE = reach * impact * (confidence / 100) / effort, one decimal."""
    raise_for_issues(
        validate_rice_inputs(
            RiceInputs(reach=reach, impact=impact, confidence=confidence, effort=effort)
        )
    )
    raw = reach * impact * (confidence / 100) / effort
    if not math.isfinite(raw):
        raise InvalidInputError("score", "is too large to represent; check reach and impact")
    return _round1(raw)


def get_category(score: float) -> RiceCategory:
    for lower_bound, category in _THRESHOLDS:
        if score >= lower_bound:
            return category
    return WONT_DO


def format_score(score: float) -> str:
    return f"{score:.1f}"


def calculate_component_contributions(inputs: RiceInputs) -> ComponentContributions:
    """Heuristic attribution of the score to its four factors.

    Reach, impact and confidence (as a fraction) are each expressed as a
    share of their sum, so the three numerator terms total 100%. Effort is a
    negative drag of ((effort - 1) / effort) * 100 once it exceeds one
    person-month. This is a display aid, not an exact decomposition.
    """
    score = calculate_rice_score(
        inputs.reach, inputs.impact, inputs.confidence, inputs.effort
    )
    if score == 0:
        return ComponentContributions(reach=0.0, impact=0.0, confidence=0.0, effort=0.0)

    confidence_fraction = inputs.confidence / 100
    numerator_total = inputs.reach + inputs.impact + confidence_fraction
    effort_drag = (
        -((inputs.effort - 1) / inputs.effort) * 100 if inputs.effort > 1 else 0.0
    )

    return ComponentContributions(
        reach=_round1(inputs.reach / numerator_total * 100),
        impact=_round1(inputs.impact / numerator_total * 100),
        confidence=_round1(confidence_fraction / numerator_total * 100),
        effort=_round1(effort_drag),
    )


def generate_insights(inputs: RiceInputs, score: float) -> list[str]:
    """Plain-language observations about a scored feature."""
    category = get_category(score)
    insights = [
        f'This feature is a "{category.label}" priority with a score of {format_score(score)}'
    ]

    if inputs.reach < 100:
        insights.append("Limited reach - suitable for testing or niche features")
    elif inputs.reach >= 10_000:
        insights.append("Excellent reach! This will impact a large user base")

    if inputs.impact <= 0.5:
        insights.append("Low impact score - ensure this aligns with strategic goals")
    elif inputs.impact >= 2:
        insights.append(
            "High impact feature that will significantly improve user experience"
        )

    if inputs.confidence < 50:
        insights.append("Low confidence - consider more research or prototyping")
    elif inputs.confidence >= 80:
        insights.append("High confidence level indicates good validation")

    if inputs.effort >= 6:
        insights.append(
            "High effort requirement - consider breaking into smaller features"
        )
    elif inputs.effort <= 1:
        insights.append("Low effort - great candidate for quick wins")

    if score < 20 and inputs.effort > 3:
        insights.append("High effort for low score - reconsider scope or deprioritize")
    if score >= 100 and inputs.effort <= 2:
        insights.append("Excellent ROI - low effort with high impact")

    return insights


def score(inputs: RiceInputs) -> RiceResult:
    """Score a feature and attach its category, contributions and insights."""
    raise_for_issues(validate_rice_inputs(inputs))

    value = calculate_rice_score(
        inputs.reach, inputs.impact, inputs.confidence, inputs.effort
    )
    category = get_category(value)
    logger.debug(f"RICE score for '{inputs.name}': {value} ({category.label})")

    return RiceResult(
        name=inputs.name,
        score=value,
        category=category,
        contributions=calculate_component_contributions(inputs),
        insights=generate_insights(inputs, value),
    )


def compare_scores(a: RiceResult, b: RiceResult) -> ScoreComparison:
    """Pick the higher-scoring feature (ties go to ``a``) and explain why."""
    difference = _round1(abs(a.score - b.score))
    winner, loser = (a, b) if a.score >= b.score else (b, a)

    if difference < 5:
        recommendation = (
            "Scores are very close - consider other factors like strategic alignment"
        )
    elif difference < 20:
        recommendation = f"{winner.name} is moderately better than {loser.name}"
    else:
        recommendation = f"{winner.name} is significantly better than {loser.name}"

    if winner.category.priority != loser.category.priority:
        recommendation += (
            f'. {winner.name} is a "{winner.category.label}" while '
            f'{loser.name} is a "{loser.category.label}"'
        )

    return ScoreComparison(
        winner=winner, loser=loser, difference=difference, recommendation=recommendation
    )


def average_score(results: Iterable[RiceResult]) -> float:
    scores = [r.score for r in results]
    if not scores:
        return 0.0
    return _round1(sum(scores) / len(scores))


def score_distribution(results: Iterable[RiceResult]) -> ScoreDistribution:
    counts = {MUST_DO.label: 0, SHOULD_DO.label: 0, COULD_DO.label: 0, WONT_DO.label: 0}
    for result in results:
        counts[get_category(result.score).label] += 1
    return ScoreDistribution(
        must_do=counts[MUST_DO.label],
        should_do=counts[SHOULD_DO.label],
        could_do=counts[COULD_DO.label],
        wont_do=counts[WONT_DO.label],
    )
