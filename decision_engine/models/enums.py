from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    INR = "INR"


class TimePeriod(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class GeographicScope(str, Enum):
    GLOBAL = "global"
    REGIONAL = "regional"
    COUNTRY = "country"


class MarketMaturity(str, Enum):
    EMERGING = "emerging"
    GROWING = "growing"
    MATURE = "mature"
    DECLINING = "declining"


class MarketMethod(str, Enum):
    TOP_DOWN = "top_down"
    BOTTOM_UP = "bottom_up"


class CostCategory(str, Enum):
    DEVELOPMENT = "development"
    MARKETING = "marketing"
    OPERATIONS = "operations"
    INFRASTRUCTURE = "infrastructure"
    LICENSING = "licensing"
    OTHER = "other"


class BenefitCategory(str, Enum):
    REVENUE = "revenue"
    COST_SAVINGS = "cost_savings"
    EFFICIENCY = "efficiency"
    STRATEGIC = "strategic"
    OTHER = "other"


class RiskCategory(str, Enum):
    TECHNICAL = "technical"
    MARKET = "market"
    OPERATIONAL = "operational"
    FINANCIAL = "financial"


class TestDirection(str, Enum):
    __test__ = False

    ONE_TAILED = "one-tailed"
    TWO_TAILED = "two-tailed"


class CorrectionMethod(str, Enum):
    NONE = "none"
    BONFERRONI = "bonferroni"
    HOLM = "holm"
    FDR = "fdr"


class EffectType(str, Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
