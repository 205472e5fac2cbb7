"""Tests for top-down and bottom-up market sizing."""

import itertools

import pytest
from pydantic import ValidationError

from decision_engine.market import (
    BottomUpParams,
    MarketContext,
    MarketSegment,
    TopDownParams,
    calculate_bottom_up,
    calculate_cagr,
    calculate_confidence,
    calculate_market_size,
    calculate_top_down,
    efficiency_label,
    market_efficiency,
    market_size_category,
    parse_market_params,
    validate_market_sizes,
)
from decision_engine.models import (
    Currency,
    GeographicScope,
    InvalidInputError,
    MarketMaturity,
    MarketMethod,
    TimePeriod,
)


@pytest.fixture
def two_segments():
    return [
        MarketSegment(name="SMB", users=1_000, avg_price=100, penetration_rate=50),
        MarketSegment(
            name="Mid-market",
            users=500,
            avg_price=200,
            penetration_rate=20,
            growth_rate=10,
        ),
    ]


class TestTopDown:
    def test_percentage_cascade(self):
        result = calculate_top_down(
            TopDownParams(tam=1_000_000_000, sam_percentage=10, som_percentage=5)
        )
        assert result.tam == pytest.approx(1_000_000_000)
        assert result.sam == pytest.approx(100_000_000)
        assert result.som == pytest.approx(5_000_000)
        assert result.method == MarketMethod.TOP_DOWN

    def test_assumptions_describe_percentages(self):
        result = calculate_top_down(
            TopDownParams(tam=1_000_000, sam_percentage=25, som_percentage=2.5)
        )
        assert "SAM represents 25% of total market" in result.assumptions
        assert "SOM represents 2.5% of serviceable market" in result.assumptions
        assert "Market defined as global scope" in result.assumptions

    def test_zero_tam_returns_empty_market(self):
        result = calculate_top_down(
            TopDownParams(tam=0, sam_percentage=10, som_percentage=5)
        )
        assert result.tam == 0
        assert result.sam == 0
        assert result.som == 0
        assert result.confidence == 0
        assert result.assumptions == []
        assert result.efficiency == 0.0

    @pytest.mark.parametrize(
        "sam_pct, som_pct",
        list(itertools.product([0, 0.5, 25, 50, 99.9, 100], repeat=2)),
    )
    def test_funnel_ordering(self, sam_pct, som_pct):
        result = calculate_top_down(
            TopDownParams(tam=7_300_000, sam_percentage=sam_pct, som_percentage=som_pct)
        )
        assert 0 <= result.som <= result.sam <= result.tam

    def test_monthly_period_divides_values(self):
        result = calculate_top_down(
            TopDownParams(
                tam=1_200_000,
                sam_percentage=50,
                som_percentage=10,
                market=MarketContext(time_period=TimePeriod.MONTHLY),
            )
        )
        assert result.tam == pytest.approx(100_000)
        assert result.sam == pytest.approx(50_000)
        assert result.som == pytest.approx(5_000)
        assert "Values expressed per monthly period" in result.assumptions

    def test_negative_tam_raises(self):
        with pytest.raises(InvalidInputError, match="tam: cannot be negative"):
            calculate_top_down(TopDownParams(tam=-1, sam_percentage=10, som_percentage=5))

    @pytest.mark.parametrize("bad", [-1, 100.1, 250])
    def test_percentage_out_of_range_raises(self, bad):
        with pytest.raises(InvalidInputError, match="sam_percentage"):
            calculate_top_down(
                TopDownParams(tam=1_000, sam_percentage=bad, som_percentage=5)
            )


class TestBottomUp:
    def test_segment_aggregation(self, two_segments):
        result = calculate_bottom_up(
            BottomUpParams(
                segments=two_segments, competitor_count=1, market_share_target=20
            )
        )
        # TAM 100k + 100k; SAM 50k + 20k; SOM 70k * 20% / (1 + 1)
        assert result.tam == pytest.approx(200_000)
        assert result.sam == pytest.approx(70_000)
        assert result.som == pytest.approx(7_000)
        assert result.projected_tam == pytest.approx(210_000)
        assert result.method == MarketMethod.BOTTOM_UP

    def test_segment_breakdown(self, two_segments):
        result = calculate_bottom_up(BottomUpParams(segments=two_segments))
        assert [s.name for s in result.segments] == ["SMB", "Mid-market"]
        assert result.segments[1].projected_tam == pytest.approx(110_000)

    def test_emerging_market_multiplier(self, two_segments):
        result = calculate_bottom_up(
            BottomUpParams(
                segments=two_segments,
                market=MarketContext(market_maturity=MarketMaturity.EMERGING),
            )
        )
        assert result.tam == pytest.approx(260_000)
        assert "Market maturity factor: 1.3x" in result.assumptions

    def test_assumptions(self, two_segments):
        result = calculate_bottom_up(
            BottomUpParams(
                segments=two_segments, competitor_count=3, market_share_target=15
            )
        )
        assert "2 market segments analyzed" in result.assumptions
        assert "Average penetration rate: 35.0%" in result.assumptions
        assert "3 major competitors considered" in result.assumptions
        assert "Target market share: 15%" in result.assumptions
        assert any(a.startswith("Projected TAM") for a in result.assumptions)

    def test_no_segments_is_empty_market(self):
        result = calculate_bottom_up(BottomUpParams(segments=[]))
        assert result.tam == result.sam == result.som == 0
        assert result.assumptions == []

    def test_funnel_ordering(self, two_segments):
        for competitors, share in itertools.product([0, 1, 5], [0, 10, 100]):
            result = calculate_bottom_up(
                BottomUpParams(
                    segments=two_segments,
                    competitor_count=competitors,
                    market_share_target=share,
                )
            )
            assert 0 <= result.som <= result.sam <= result.tam

    def test_invalid_segment_reports_index(self, two_segments):
        bad = two_segments + [MarketSegment(name="Bad", users=-10, avg_price=5)]
        with pytest.raises(InvalidInputError, match=r"segments\[2\]\.users"):
            calculate_bottom_up(BottomUpParams(segments=bad))

    def test_negative_competitors_raise(self, two_segments):
        with pytest.raises(InvalidInputError, match="competitor_count"):
            calculate_bottom_up(
                BottomUpParams(segments=two_segments, competitor_count=-1)
            )


class TestDispatch:
    def test_parse_top_down_mapping(self):
        params = parse_market_params(
            {"method": "top_down", "tam": 5_000, "sam_percentage": 40, "som_percentage": 10}
        )
        assert isinstance(params, TopDownParams)
        assert calculate_market_size(params).som == pytest.approx(200)

    def test_parse_bottom_up_mapping(self):
        params = parse_market_params(
            {
                "method": "bottom_up",
                "segments": [{"name": "All", "users": 10, "avg_price": 10}],
                "market": {"currency": "EUR"},
            }
        )
        assert isinstance(params, BottomUpParams)
        result = calculate_market_size(params)
        assert result.tam == pytest.approx(100)
        assert result.currency == Currency.EUR

    def test_unknown_method_rejected(self):
        with pytest.raises(ValueError):
            parse_market_params({"method": "sideways", "tam": 1})


class TestConfidence:
    def test_global_mature(self):
        assert calculate_confidence(MarketContext()) == 80

    def test_country_growing(self):
        context = MarketContext(
            geographic_scope=GeographicScope.COUNTRY,
            market_maturity=MarketMaturity.GROWING,
        )
        assert calculate_confidence(context) == 85

    def test_declining_regional(self):
        context = MarketContext(
            geographic_scope=GeographicScope.REGIONAL,
            market_maturity=MarketMaturity.DECLINING,
        )
        assert calculate_confidence(context) == 65

    def test_detailed_segmentation_capped_at_100(self):
        context = MarketContext(geographic_scope=GeographicScope.COUNTRY)
        assert calculate_confidence(context, segment_count=6) == 100


class TestHelpers:
    def test_efficiency_guarded_for_zero_tam(self):
        assert market_efficiency(0, 0) == 0.0

    def test_efficiency_ratio(self):
        assert market_efficiency(1_000, 50) == pytest.approx(0.05)

    @pytest.mark.parametrize(
        "som, label", [(15, "High"), (6, "Medium"), (5, "Low"), (0, "Low")]
    )
    def test_efficiency_label(self, som, label):
        assert efficiency_label(100, som) == label

    def test_cagr(self):
        assert calculate_cagr(100, 121, 2) == pytest.approx(10.0)

    @pytest.mark.parametrize("begin, end, years", [(0, 100, 2), (100, 200, 0), (100, -1, 3)])
    def test_cagr_degenerate_inputs(self, begin, end, years):
        assert calculate_cagr(begin, end, years) == 0.0

    @pytest.mark.parametrize(
        "tam, label",
        [
            (200e9, "Mega Market"),
            (10e9, "Large Market"),
            (5e9, "Medium Market"),
            (100e6, "Small Market"),
            (1e6, "Niche Market"),
        ],
    )
    def test_size_category(self, tam, label):
        assert market_size_category(tam).label == label

    def test_validate_sizes_flags_inverted_funnel(self):
        result = calculate_top_down(
            TopDownParams(tam=1_000, sam_percentage=50, som_percentage=10)
        )
        assert validate_market_sizes(result) == []
        broken = type(result)(
            tam=100, sam=200, som=300, method=result.method, assumptions=[], confidence=50
        )
        fields = [issue.field for issue in validate_market_sizes(broken)]
        assert fields == ["sam", "som"]


class TestNonFiniteInputs:
    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_top_down_rejects_non_finite_tam(self, value):
        with pytest.raises(ValidationError):
            TopDownParams(tam=value, sam_percentage=10, som_percentage=5)

    def test_segment_rejects_nan_price(self):
        with pytest.raises(ValidationError):
            MarketSegment(name="SMB", users=1_000, avg_price=float("nan"))

    def test_overflowing_segment_value_raises(self):
        segments = [
            MarketSegment(name="Huge", users=1e200, avg_price=1e200, penetration_rate=10)
        ]
        with pytest.raises(InvalidInputError, match="too large"):
            calculate_bottom_up(BottomUpParams(segments=segments))
