"""Pydantic input models for market sizing.

Top-down and bottom-up parameters form a tagged union on ``method`` so a
stored calculation can be re-parsed without knowing its shape up front.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from decision_engine.models.enums import (
    Currency,
    GeographicScope,
    MarketMaturity,
    TimePeriod,
)


class MarketContext(BaseModel):
    """Descriptive parameters shared by both sizing methods."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    currency: Currency = Currency.USD
    time_period: TimePeriod = TimePeriod.ANNUAL
    geographic_scope: GeographicScope = GeographicScope.GLOBAL
    market_maturity: MarketMaturity = MarketMaturity.MATURE


class MarketSegment(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    users: float
    avg_price: float
    growth_rate: float = Field(default=0.0, description="Annual growth %")
    penetration_rate: float = Field(default=100.0, description="% of segment addressable")
    id: Optional[str] = None


class TopDownParams(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    method: Literal["top_down"] = "top_down"
    tam: float
    sam_percentage: float
    som_percentage: float
    market: MarketContext = Field(default_factory=MarketContext)


class BottomUpParams(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    method: Literal["bottom_up"] = "bottom_up"
    segments: list[MarketSegment] = Field(default_factory=list)
    competitor_count: int = 0
    market_share_target: float = Field(default=100.0, description="Target share %")
    market: MarketContext = Field(default_factory=MarketContext)


MarketParams = Annotated[
    Union[TopDownParams, BottomUpParams], Field(discriminator="method")
]

_PARAMS_ADAPTER: TypeAdapter[MarketParams] = TypeAdapter(MarketParams)


def parse_market_params(data: dict[str, Any]) -> Union[TopDownParams, BottomUpParams]:
    """Build the right parameter model from a plain mapping."""
    return _PARAMS_ADAPTER.validate_python(data)
