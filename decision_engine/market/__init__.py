"""TAM/SAM/SOM market sizing."""

from .benchmarks import BenchmarkSet, IndustryBenchmark, get_default_benchmarks, load_benchmarks
from .calculator import (
    calculate_bottom_up,
    calculate_cagr,
    calculate_confidence,
    calculate_market_size,
    calculate_top_down,
    efficiency_label,
    market_efficiency,
    market_size_category,
    validate_bottom_up,
    validate_market_sizes,
    validate_top_down,
)
from .formatting import format_currency, parse_currency_input
from .result import MarketSizeCategory, MarketSizes, SegmentSize
from .schema import (
    BottomUpParams,
    MarketContext,
    MarketParams,
    MarketSegment,
    TopDownParams,
    parse_market_params,
)

__all__ = [
    "BenchmarkSet",
    "BottomUpParams",
    "IndustryBenchmark",
    "MarketContext",
    "MarketParams",
    "MarketSegment",
    "MarketSizeCategory",
    "MarketSizes",
    "SegmentSize",
    "TopDownParams",
    "calculate_bottom_up",
    "calculate_cagr",
    "calculate_confidence",
    "calculate_market_size",
    "calculate_top_down",
    "efficiency_label",
    "format_currency",
    "get_default_benchmarks",
    "load_benchmarks",
    "market_efficiency",
    "market_size_category",
    "parse_currency_input",
    "parse_market_params",
    "validate_bottom_up",
    "validate_market_sizes",
    "validate_top_down",
]
