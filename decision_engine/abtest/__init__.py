"""Conversion-rate experiment statistics: z-tests, power and sample size."""

from .engine import (
    StatisticsEngine,
    adjust_p_values,
    calculate_mde,
    calculate_power,
    calculate_sample_size,
    cohens_h,
    is_sample_size_sufficient,
    p_value_from_z,
    pooled_standard_error,
    unpooled_standard_error,
    validate_variation,
)
from .result import SampleSizeResult, TestResult
from .schema import SampleSizeInputs, TestConfig, Variation

__all__ = [
    "SampleSizeInputs",
    "SampleSizeResult",
    "StatisticsEngine",
    "TestConfig",
    "TestResult",
    "Variation",
    "adjust_p_values",
    "calculate_mde",
    "calculate_power",
    "calculate_sample_size",
    "cohens_h",
    "is_sample_size_sufficient",
    "p_value_from_z",
    "pooled_standard_error",
    "unpooled_standard_error",
    "validate_variation",
]
