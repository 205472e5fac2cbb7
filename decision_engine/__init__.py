"""Calculation engine for product-management prioritization, market sizing,
ROI analysis and experiment statistics."""

__version__ = "0.1.0"
