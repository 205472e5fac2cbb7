"""Tests for ROI metrics and the engine that assembles them."""

import numpy as np
import pytest

from decision_engine.config import EngineSettings
from decision_engine.roi import (
    BenefitItem,
    CostItem,
    RoiCalculation,
    RoiEngine,
    break_even_month,
    calculate_roi_metrics,
    economic_value_added,
    get_roi_category,
    modified_irr,
    net_present_value,
    payback_period,
    profitability_index,
    roi_input_warnings,
    simple_roi,
)
from decision_engine.roi.cash_flows import net_cash_flows


class TestScalarMetrics:
    def test_simple_roi(self):
        assert simple_roi(12_000, 10_000) == pytest.approx(20.0)

    def test_simple_roi_undefined_without_costs(self):
        assert simple_roi(5_000, 0) is None

    def test_profitability_index(self):
        assert profitability_index(2_000, 10_000) == pytest.approx(0.2)
        assert profitability_index(2_000, 0) is None

    def test_eva_charges_capital(self):
        # 5,000 NPV less 10% on 20,000 invested
        assert economic_value_added(5_000, 20_000, 10) == pytest.approx(3_000)

    def test_mirr_single_terminal_inflow(self):
        # 1000 grows to 1331 over three periods -> 10% per period
        flows = np.array([-1_000.0, 0.0, 0.0, 1_331.0])
        assert modified_irr(flows, 0.01, 0.01) == pytest.approx(0.10)

    def test_mirr_reinvests_interim_inflows(self):
        flows = np.array([-1_000.0, 600.0, 600.0])
        low = modified_irr(flows, 0.0, 0.0)
        high = modified_irr(flows, 0.0, 0.05)
        assert high > low

    @pytest.mark.parametrize(
        "flows", [[-100.0], [100.0, 200.0], [-100.0, -200.0]]
    )
    def test_mirr_undefined(self, flows):
        assert modified_irr(np.array(flows), 0.01, 0.01) is None


class TestPayback:
    def test_interpolates_inside_crossing_month(self):
        cumulative = np.cumsum([-1_000.0, 400.0, 400.0, 400.0])
        # crosses during month 4: 3 + 200 / 400
        assert payback_period(cumulative) == pytest.approx(3.5)
        assert break_even_month(cumulative) == 4

    def test_immediate_payback(self):
        assert payback_period(np.array([50.0, 100.0])) == 1.0
        assert break_even_month(np.array([50.0, 100.0])) == 1

    def test_never_pays_back(self):
        cumulative = np.cumsum([-1_000.0, 10.0, 10.0])
        assert payback_period(cumulative) is None
        assert break_even_month(cumulative) is None


class TestRoiCategory:
    @pytest.mark.parametrize(
        "roi, label",
        [
            (250, "Excellent"),
            (200, "Excellent"),
            (150, "Good"),
            (50, "Moderate"),
            (0, "Low"),
            (-10, "Negative"),
            (None, "N/A"),
        ],
    )
    def test_bands(self, roi, label):
        assert get_roi_category(roi).label == label


class TestRoiEngine:
    def test_zero_rate_npv_identity(self, roi_engine, flat_benefit_calc):
        metrics = roi_engine.calculate_metrics(flat_benefit_calc)
        assert metrics.npv == metrics.total_benefits - flat_benefit_calc.initial_cost
        assert metrics.npv == 2_000

    def test_flat_benefit_metrics(self, roi_engine, flat_benefit_calc):
        metrics = roi_engine.calculate_metrics(flat_benefit_calc)
        assert metrics.simple_roi == pytest.approx(20.0)
        assert metrics.payback_period == pytest.approx(10.0)
        assert metrics.discounted_payback_period == pytest.approx(10.0)
        assert metrics.break_even_month == 10
        assert metrics.pi == pytest.approx(0.2)
        assert metrics.eva == pytest.approx(2_000)
        assert metrics.pays_back_within_horizon

    def test_irr_satisfies_npv_zero(self, roi_engine, settings, flat_benefit_calc):
        metrics = roi_engine.calculate_metrics(flat_benefit_calc)
        assert metrics.irr_converged
        flows = net_cash_flows(flat_benefit_calc)
        assert abs(net_present_value(flows, metrics.irr)) < settings.irr_tolerance

    def test_irr_above_discount_rate_means_positive_npv(self, roi_engine, product_launch_calc):
        metrics = roi_engine.calculate_metrics(product_launch_calc)
        assert metrics.npv > 0
        assert metrics.irr > product_launch_calc.discount_rate

    def test_mirr_between_finance_rate_and_irr(self, roi_engine, product_launch_calc):
        metrics = roi_engine.calculate_metrics(product_launch_calc)
        assert product_launch_calc.discount_rate < metrics.mirr < metrics.irr

    def test_discounted_payback_later_than_simple(self, roi_engine, product_launch_calc):
        metrics = roi_engine.calculate_metrics(product_launch_calc)
        assert metrics.discounted_payback_period > metrics.payback_period

    def test_never_paying_back_is_beyond_horizon(self, roi_engine):
        calc = RoiCalculation(
            initial_cost=10_000,
            benefits=[BenefitItem(id="b", amount=100, months=12)],
            time_horizon=12,
        )
        metrics = roi_engine.calculate_metrics(calc)
        assert metrics.payback_period is None
        assert metrics.discounted_payback_period is None
        assert metrics.break_even_month is None
        assert not metrics.pays_back_within_horizon
        assert any("not paid back" in w for w in metrics.warnings)

    def test_all_negative_flows(self, roi_engine):
        calc = RoiCalculation(
            initial_cost=1_000, costs=[CostItem(id="c", amount=100, months=12)]
        )
        metrics = roi_engine.calculate_metrics(calc)
        assert metrics.irr is None
        assert not metrics.irr_converged
        assert metrics.mirr is None
        assert metrics.simple_roi == pytest.approx(-100.0)
        assert any("never change sign" in w for w in metrics.warnings)

    def test_all_positive_flows(self, roi_engine):
        calc = RoiCalculation(benefits=[BenefitItem(id="b", amount=100, months=12)])
        metrics = roi_engine.calculate_metrics(calc)
        assert metrics.irr is None
        assert metrics.simple_roi is None
        assert metrics.pi is None
        assert metrics.payback_period == 1.0
        assert any("Total costs are zero" in w for w in metrics.warnings)

    def test_solver_cap_surfaces_as_warning(self, flat_benefit_calc):
        engine = RoiEngine(EngineSettings(irr_max_iterations=1))
        metrics = engine.calculate_metrics(flat_benefit_calc)
        assert metrics.irr is None
        assert not metrics.irr_converged
        assert any("did not converge" in w for w in metrics.warnings)

    def test_reinvestment_rate_changes_mirr(self, roi_engine, product_launch_calc):
        base = roi_engine.calculate_metrics(product_launch_calc)
        richer = roi_engine.calculate_metrics(
            product_launch_calc.model_copy(update={"reinvestment_rate": 30})
        )
        assert richer.mirr > base.mirr
        assert richer.npv == base.npv

    def test_full_result(self, roi_engine, product_launch_calc):
        result = roi_engine.calculate(product_launch_calc)
        assert result.name == "Product launch"
        assert len(result.projections) == 24
        assert result.category == get_roi_category(result.metrics.simple_roi)

    def test_module_level_helper(self, flat_benefit_calc):
        assert calculate_roi_metrics(flat_benefit_calc).npv == 2_000


class TestInputWarnings:
    def test_clean_inputs_have_no_warnings(self, flat_benefit_calc):
        assert roi_input_warnings(flat_benefit_calc) == []

    def test_short_expensive_cost_only_plan(self):
        calc = RoiCalculation(
            initial_cost=1_000,
            costs=[CostItem(id="c", amount=10, months=6)],
            time_horizon=6,
            discount_rate=25,
        )
        fields = [w.field for w in roi_input_warnings(calc)]
        assert fields == ["discount_rate", "time_horizon", "benefits"]

    def test_low_probability_benefit(self):
        calc = RoiCalculation(
            initial_cost=1_000,
            benefits=[BenefitItem(id="b", amount=500, months=12, probability=30)],
        )
        warnings = roi_input_warnings(calc)
        assert [w.field for w in warnings] == ["benefits[0].probability"]
        assert "low probability (30%)" in warnings[0].message

    def test_warnings_do_not_block_calculation(self, roi_engine):
        calc = RoiCalculation(initial_cost=1_000, time_horizon=6, discount_rate=30)
        assert roi_input_warnings(calc)
        assert roi_engine.calculate_metrics(calc).npv == pytest.approx(-1_000)


class TestLateOutflowIrr:
    def test_engine_reports_bracketed_irr(self, roi_engine):
        calc = RoiCalculation(
            initial_cost=120_000,
            benefits=[BenefitItem(id="b", amount=42_000, start_month=18, months=28)],
            costs=[CostItem(id="c", amount=70_000, start_month=102, months=9)],
            time_horizon=118,
            discount_rate=4,
        )
        metrics = roi_engine.calculate_metrics(calc)
        assert metrics.irr_converged
        assert metrics.irr == pytest.approx(102.08, abs=0.5)
        assert not any("did not converge" in w for w in metrics.warnings)
