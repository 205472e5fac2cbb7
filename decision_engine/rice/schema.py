"""Pydantic input model for RICE scoring."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RiceInputs(BaseModel):
    """Raw RICE inputs as entered by the user.

    Reach is a user count, impact a continuous multiplier (conventionally
    0.25-3), confidence a percentage and effort person-months. Range checks
    happen in the scorer so that errors carry the offending field.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    reach: float
    impact: float
    confidence: float = Field(description="Percentage, 0-100")
    effort: float = Field(description="Person-months, must be > 0")
    name: str = ""
