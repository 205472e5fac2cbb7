"""Industry benchmark percentages for SAM and SOM.

Benchmarks live in JSON files under ``configs/`` and are validated with
pydantic on load.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator

_CONFIG_DIR = Path(__file__).parent / "configs"

BenchmarkKind = Literal["sam", "som"]


class IndustryBenchmark(BaseModel):
    """A named reference percentage for one funnel stage."""

    label: str
    value: float = Field(ge=0, le=100, description="Percentage of the parent market")
    description: str
    industries: list[str] = Field(min_length=1)

    def applies_to(self, industry: str) -> bool:
        tags = {tag.lower() for tag in self.industries}
        return "all" in tags or industry.lower() in tags


class BenchmarkSet(BaseModel):
    """SAM and SOM benchmark collections."""

    version: str
    sam: list[IndustryBenchmark] = Field(min_length=1)
    som: list[IndustryBenchmark] = Field(min_length=1)

    @model_validator(mode="after")
    def labels_unique_per_stage(self) -> BenchmarkSet:
        for stage in ("sam", "som"):
            labels = [b.label for b in getattr(self, stage)]
            duplicates = sorted({label for label in labels if labels.count(label) > 1})
            if duplicates:
                raise ValueError(f"Duplicate {stage} benchmark labels: {duplicates}")
        return self

    def for_stage(self, kind: BenchmarkKind) -> list[IndustryBenchmark]:
        return list(getattr(self, kind))

    def typical_range(self, kind: BenchmarkKind) -> tuple[float, float]:
        """(min, max) benchmark percentage for a stage."""
        values = [b.value for b in self.for_stage(kind)]
        return min(values), max(values)

    def for_industry(self, kind: BenchmarkKind, industry: str) -> list[IndustryBenchmark]:
        return [b for b in self.for_stage(kind) if b.applies_to(industry)]


def load_benchmarks(file_path: Path | None = None) -> BenchmarkSet:
    """Load and validate a benchmark set from a JSON file.

    If no path is provided, loads the bundled default set.
    """
    if file_path is None:
        file_path = _CONFIG_DIR / "benchmarks.json"

    if not file_path.exists():
        raise FileNotFoundError(f"Benchmark config not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    return BenchmarkSet.model_validate(raw)


def get_default_benchmarks() -> BenchmarkSet:
    """Load the bundled SAM/SOM benchmark set."""
    return load_benchmarks()
