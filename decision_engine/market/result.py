"""Immutable market-sizing results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from decision_engine.models.enums import Currency, MarketMethod, TimePeriod


@dataclass(frozen=True)
class SegmentSize:
    """One bottom-up segment after maturity and period adjustment."""

    name: str
    tam: float
    sam: float
    projected_tam: float


@dataclass(frozen=True)
class MarketSizes:
    """TAM/SAM/SOM funnel. Always satisfies 0 <= som <= sam <= tam."""

    tam: float
    sam: float
    som: float
    method: MarketMethod
    assumptions: list[str]
    confidence: int
    currency: Currency = Currency.USD
    time_period: TimePeriod = TimePeriod.ANNUAL
    segments: list[SegmentSize] = field(default_factory=list)
    projected_tam: Optional[float] = None

    @property
    def efficiency(self) -> float:
        """SOM as a fraction of TAM, 0.0 for an empty market."""
        return self.som / self.tam if self.tam > 0 else 0.0


@dataclass(frozen=True)
class MarketSizeCategory:
    label: str
    color: str
