"""Immutable RICE result structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RiceCategory:
    label: str
    color: str
    priority: int
    description: str


@dataclass(frozen=True)
class ComponentContributions:
    """Heuristic per-factor attribution, in percent.

    Not an exact decomposition of the score: reach, impact and confidence
    share 100% between them and effort is shown as a negative drag.
    """

    reach: float
    impact: float
    confidence: float
    effort: float


@dataclass(frozen=True)
class RiceResult:
    name: str
    score: float
    category: RiceCategory
    contributions: ComponentContributions
    insights: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScoreComparison:
    winner: RiceResult
    loser: RiceResult
    difference: float
    recommendation: str


@dataclass(frozen=True)
class ScoreDistribution:
    must_do: int = 0
    should_do: int = 0
    could_do: int = 0
    wont_do: int = 0
