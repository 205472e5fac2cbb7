"""Pydantic input models for ROI analysis.

Cost and benefit line items are a tagged union on ``kind``. Range and
horizon checks live in ``validation`` so each problem can be reported
against its field.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from decision_engine.models.enums import (
    BenefitCategory,
    CostCategory,
    Currency,
    RiskCategory,
)


class CostItem(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kind: Literal["cost"] = "cost"
    id: str
    category: CostCategory = CostCategory.OTHER
    description: str = ""
    amount: float
    start_month: int = Field(default=1, description="1-based month the item starts")
    months: int = Field(default=1, description="Duration in months")
    is_recurring: bool = True


class BenefitItem(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kind: Literal["benefit"] = "benefit"
    id: str
    category: BenefitCategory = BenefitCategory.OTHER
    description: str = ""
    amount: float
    start_month: int = Field(default=1, description="1-based month the item starts")
    months: int = Field(default=1, description="Duration in months")
    is_recurring: bool = True
    probability: float = Field(default=100.0, description="0-100 likelihood weight")


LineItem = Annotated[Union[CostItem, BenefitItem], Field(discriminator="kind")]


class RiskMitigation(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    description: str = ""
    cost: float = 0.0
    effectiveness: float = Field(default=0.0, description="0-1 share of the risk removed")


class RiskFactor(BaseModel):
    """A risk that scales the amounts of the line items it affects.

    ``impact`` is a multiplier on affected amounts (1.5 inflates a cost by
    half, 0.7 cuts a benefit by 30%); ``probability`` is 0-1.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str
    name: str = ""
    category: RiskCategory = RiskCategory.OPERATIONAL
    probability: float
    impact: float
    affected_items: list[str] = Field(default_factory=list)
    mitigation: Optional[RiskMitigation] = None


class RoiCalculation(BaseModel):
    """Everything needed to project cash flows and derive ROI metrics.

    ``discount_rate`` and ``reinvestment_rate`` are annual percentages;
    ``time_horizon`` is in months.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = ""
    initial_cost: float = 0.0
    costs: list[CostItem] = Field(default_factory=list)
    benefits: list[BenefitItem] = Field(default_factory=list)
    time_horizon: int = 12
    discount_rate: float = 10.0
    reinvestment_rate: Optional[float] = None
    currency: Currency = Currency.USD

    def line_items(self) -> list[Union[CostItem, BenefitItem]]:
        return [*self.costs, *self.benefits]
