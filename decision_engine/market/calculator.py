"""TAM/SAM/SOM market sizing.

Top-down: TAM -> SAM (% of TAM) -> SOM (% of SAM).
Bottom-up: segments (users x price) -> SAM via penetration -> SOM via
target share split across competitors.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from decision_engine.market.formatting import format_currency
from decision_engine.market.result import MarketSizeCategory, MarketSizes, SegmentSize
from decision_engine.market.schema import (
    BottomUpParams,
    MarketContext,
    MarketSegment,
    TopDownParams,
)
from decision_engine.models.enums import (
    GeographicScope,
    MarketMaturity,
    MarketMethod,
    TimePeriod,
)
from decision_engine.models.errors import (
    InvalidInputError,
    ValidationIssue,
    raise_for_issues,
)

logger = logging.getLogger(__name__)

MATURITY_MULTIPLIERS = {
    MarketMaturity.EMERGING: 1.3,
    MarketMaturity.GROWING: 1.1,
    MarketMaturity.MATURE: 1.0,
    MarketMaturity.DECLINING: 0.9,
}

PERIOD_DIVIDERS = {
    TimePeriod.MONTHLY: 12,
    TimePeriod.QUARTERLY: 4,
    TimePeriod.ANNUAL: 1,
}


def _check_percentage(
    issues: list[ValidationIssue], field_name: str, value: float
) -> None:
    if not (0 <= value <= 100):
        issues.append(ValidationIssue(field_name, f"must be between 0 and 100, got {value}"))


def validate_top_down(params: TopDownParams) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if params.tam < 0:
        issues.append(ValidationIssue("tam", "cannot be negative"))
    _check_percentage(issues, "sam_percentage", params.sam_percentage)
    _check_percentage(issues, "som_percentage", params.som_percentage)
    return issues


def validate_bottom_up(params: BottomUpParams) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for i, segment in enumerate(params.segments):
        prefix = f"segments[{i}]"
        if segment.users < 0:
            issues.append(ValidationIssue(f"{prefix}.users", "cannot be negative"))
        if segment.avg_price < 0:
            issues.append(ValidationIssue(f"{prefix}.avg_price", "cannot be negative"))
        if segment.growth_rate < -100:
            issues.append(ValidationIssue(f"{prefix}.growth_rate", "cannot be below -100%"))
        _check_percentage(issues, f"{prefix}.penetration_rate", segment.penetration_rate)
    if params.competitor_count < 0:
        issues.append(ValidationIssue("competitor_count", "cannot be negative"))
    _check_percentage(issues, "market_share_target", params.market_share_target)
    return issues


def calculate_confidence(context: MarketContext, segment_count: Optional[int] = None) -> int:
    """Score 0-100 for how much an estimate can be trusted.

    Base 70; narrower geography and steadier markets add, declining markets
    subtract, and detailed bottom-up segmentation adds.
    """
    confidence = 70

    if context.geographic_scope == GeographicScope.COUNTRY:
        confidence += 10
    elif context.geographic_scope == GeographicScope.REGIONAL:
        confidence += 5

    if context.market_maturity == MarketMaturity.MATURE:
        confidence += 10
    elif context.market_maturity == MarketMaturity.GROWING:
        confidence += 5
    elif context.market_maturity == MarketMaturity.DECLINING:
        confidence -= 10

    if segment_count is not None:
        if segment_count > 3:
            confidence += 10
        if segment_count > 5:
            confidence += 5

    return max(0, min(100, confidence))


def _empty_market(method: MarketMethod, context: MarketContext) -> MarketSizes:
    return MarketSizes(
        tam=0.0,
        sam=0.0,
        som=0.0,
        method=method,
        assumptions=[],
        confidence=0,
        currency=context.currency,
        time_period=context.time_period,
    )


def _context_assumptions(context: MarketContext) -> list[str]:
    assumptions = [
        f"Market defined as {context.geographic_scope.value} scope",
        f"{context.market_maturity.value.capitalize()} market maturity level",
    ]
    if context.time_period != TimePeriod.ANNUAL:
        assumptions.append(f"Values expressed per {context.time_period.value} period")
    return assumptions


def calculate_top_down(params: TopDownParams) -> MarketSizes:
    raise_for_issues(validate_top_down(params))
    context = params.market

    if params.tam == 0:
        logger.debug("Top-down sizing with zero TAM, returning empty market")
        return _empty_market(MarketMethod.TOP_DOWN, context)

    divider = PERIOD_DIVIDERS[context.time_period]
    tam = params.tam
    sam = tam * (params.sam_percentage / 100)
    som = sam * (params.som_percentage / 100)

    assumptions = _context_assumptions(context) + [
        f"SAM represents {params.sam_percentage:g}% of total market",
        f"SOM represents {params.som_percentage:g}% of serviceable market",
    ]

    return MarketSizes(
        tam=tam / divider,
        sam=sam / divider,
        som=som / divider,
        method=MarketMethod.TOP_DOWN,
        assumptions=assumptions,
        confidence=calculate_confidence(context),
        currency=context.currency,
        time_period=context.time_period,
    )


def _average_penetration(segments: list[MarketSegment]) -> float:
    if not segments:
        return 0.0
    return sum(s.penetration_rate for s in segments) / len(segments)


def calculate_bottom_up(params: BottomUpParams) -> MarketSizes:
    raise_for_issues(validate_bottom_up(params))
    context = params.market

    multiplier = MATURITY_MULTIPLIERS[context.market_maturity]
    divider = PERIOD_DIVIDERS[context.time_period]
    scale = multiplier / divider

    segment_sizes: list[SegmentSize] = []
    for segment in params.segments:
        segment_tam = segment.users * segment.avg_price
        segment_sizes.append(
            SegmentSize(
                name=segment.name,
                tam=segment_tam * scale,
                sam=segment_tam * (segment.penetration_rate / 100) * scale,
                projected_tam=segment_tam * (1 + segment.growth_rate / 100) * scale,
            )
        )

    tam = sum(s.tam for s in segment_sizes)
    if tam == 0:
        logger.debug("Bottom-up sizing with no addressable value, returning empty market")
        return _empty_market(MarketMethod.BOTTOM_UP, context)

    sam = sum(s.sam for s in segment_sizes)
    competitive_share = 1 / (params.competitor_count + 1)
    som = sam * (params.market_share_target / 100) * competitive_share
    projected_tam = sum(s.projected_tam for s in segment_sizes)
    if not (math.isfinite(tam) and math.isfinite(projected_tam)):
        raise InvalidInputError("segments", "market value is too large to represent")

    assumptions = _context_assumptions(context) + [
        f"{len(params.segments)} market segments analyzed",
        f"Average penetration rate: {_average_penetration(params.segments):.1f}%",
        f"{params.competitor_count} major competitors considered",
        f"Target market share: {params.market_share_target:g}%",
        f"Market maturity factor: {multiplier:g}x",
    ]
    if projected_tam != tam:
        assumptions.append(
            "Projected TAM at segment growth rates: "
            f"{format_currency(projected_tam, context.currency)}"
        )

    return MarketSizes(
        tam=tam,
        sam=sam,
        som=som,
        method=MarketMethod.BOTTOM_UP,
        assumptions=assumptions,
        confidence=calculate_confidence(context, segment_count=len(params.segments)),
        currency=context.currency,
        time_period=context.time_period,
        segments=segment_sizes,
        projected_tam=projected_tam,
    )


def calculate_market_size(params: Union[TopDownParams, BottomUpParams]) -> MarketSizes:
    """Size a market with whichever method the parameters are tagged with."""
    if params.method == MarketMethod.TOP_DOWN:
        return calculate_top_down(params)
    if params.method == MarketMethod.BOTTOM_UP:
        return calculate_bottom_up(params)
    raise ValueError(f"Unknown market sizing method: {params.method}")


def market_efficiency(tam: float, som: float) -> float:
    """SOM / TAM as a ratio; 0.0 when TAM is zero."""
    if tam <= 0:
        return 0.0
    return som / tam


def efficiency_label(tam: float, som: float) -> str:
    percent = market_efficiency(tam, som) * 100
    if percent > 10:
        return "High"
    if percent > 5:
        return "Medium"
    return "Low"


def calculate_cagr(begin_value: float, end_value: float, years: float) -> float:
    """Compound annual growth rate in percent; 0.0 for undefined inputs."""
    if begin_value <= 0 or years <= 0 or end_value < 0:
        return 0.0
    return ((end_value / begin_value) ** (1 / years) - 1) * 100


def market_size_category(tam: float) -> MarketSizeCategory:
    if tam >= 100e9:
        return MarketSizeCategory(label="Mega Market", color="purple")
    if tam >= 10e9:
        return MarketSizeCategory(label="Large Market", color="blue")
    if tam >= 1e9:
        return MarketSizeCategory(label="Medium Market", color="green")
    if tam >= 100e6:
        return MarketSizeCategory(label="Small Market", color="yellow")
    return MarketSizeCategory(label="Niche Market", color="orange")


def validate_market_sizes(sizes: MarketSizes) -> list[ValidationIssue]:
    """Check funnel ordering on an already computed or externally stored result."""
    issues: list[ValidationIssue] = []
    if sizes.tam <= 0:
        issues.append(ValidationIssue("tam", "must be greater than 0"))
    if sizes.sam > sizes.tam:
        issues.append(ValidationIssue("sam", "cannot exceed TAM"))
    if sizes.som > sizes.sam:
        issues.append(ValidationIssue("som", "cannot exceed SAM"))
    if sizes.som < 0:
        issues.append(ValidationIssue("som", "cannot be negative"))
    return issues
