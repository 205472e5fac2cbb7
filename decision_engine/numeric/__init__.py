"""Numeric primitives shared by the ROI and experiment engines."""

from .normal import normal_cdf, normal_ppf, z_critical
from .solver import RootResult, brent, find_brackets, newton_raphson

__all__ = [
    "RootResult",
    "brent",
    "find_brackets",
    "newton_raphson",
    "normal_cdf",
    "normal_ppf",
    "z_critical",
]
