"""RICE (Reach x Impact x Confidence / Effort) prioritization."""

from .result import (
    ComponentContributions,
    RiceCategory,
    RiceResult,
    ScoreComparison,
    ScoreDistribution,
)
from .schema import RiceInputs
from .scorer import (
    average_score,
    calculate_component_contributions,
    calculate_rice_score,
    compare_scores,
    format_score,
    generate_insights,
    get_category,
    rice_input_warnings,
    score,
    score_distribution,
    validate_rice_inputs,
)

__all__ = [
    "ComponentContributions",
    "RiceCategory",
    "RiceInputs",
    "RiceResult",
    "ScoreComparison",
    "ScoreDistribution",
    "average_score",
    "calculate_component_contributions",
    "calculate_rice_score",
    "compare_scores",
    "format_score",
    "generate_insights",
    "get_category",
    "rice_input_warnings",
    "score",
    "score_distribution",
    "validate_rice_inputs",
]
