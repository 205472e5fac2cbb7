"""Shared test fixtures for the decision engine test suite."""

import pytest

from decision_engine.abtest import StatisticsEngine, Variation
from decision_engine.config import EngineSettings
from decision_engine.roi import BenefitItem, CostItem, RoiCalculation, RoiEngine


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def roi_engine(settings) -> RoiEngine:
    return RoiEngine(settings)


@pytest.fixture
def stats_engine(settings) -> StatisticsEngine:
    return StatisticsEngine(settings)


@pytest.fixture
def flat_benefit_calc() -> RoiCalculation:
    """$10k up front, $1k/month back for a year, no discounting."""
    return RoiCalculation(
        name="Flat benefit",
        initial_cost=10_000,
        benefits=[BenefitItem(id="savings", amount=1_000, months=12)],
        time_horizon=12,
        discount_rate=0,
    )


@pytest.fixture
def product_launch_calc() -> RoiCalculation:
    """Mixed recurring and one-off items over two years at 10%."""
    return RoiCalculation(
        name="Product launch",
        initial_cost=50_000,
        costs=[
            CostItem(id="dev", amount=8_000, months=6),
            CostItem(id="launch", amount=15_000, start_month=7, is_recurring=False),
            CostItem(id="ops", amount=1_500, start_month=7, months=18),
        ],
        benefits=[
            BenefitItem(id="revenue", amount=12_000, start_month=7, months=18),
            BenefitItem(
                id="upsell", amount=4_000, start_month=10, months=15, probability=50
            ),
        ],
        time_horizon=24,
        discount_rate=10,
    )


@pytest.fixture
def worked_control() -> Variation:
    return Variation(id="control", name="Control", visitors=15_000, conversions=675)


@pytest.fixture
def worked_variant() -> Variation:
    return Variation(id="variant_b", name="New checkout", visitors=15_000, conversions=743)
