from .enums import (
    BenefitCategory,
    CorrectionMethod,
    CostCategory,
    Currency,
    EffectType,
    GeographicScope,
    MarketMaturity,
    MarketMethod,
    RiskCategory,
    TestDirection,
    TimePeriod,
)
from .errors import InvalidInputError, ValidationIssue, raise_for_issues

__all__ = [
    "BenefitCategory",
    "CorrectionMethod",
    "CostCategory",
    "Currency",
    "EffectType",
    "GeographicScope",
    "InvalidInputError",
    "MarketMaturity",
    "MarketMethod",
    "RiskCategory",
    "TestDirection",
    "TimePeriod",
    "ValidationIssue",
    "raise_for_issues",
]
