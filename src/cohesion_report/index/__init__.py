"""Aggregator: population statistics, diffs, defects and overall scores."""

from .builder import (
    NORMALIZATIONS,
    build_entry,
    build_index,
    build_report,
    overall_score,
    percent_diff,
    population_statistics,
    zscore_diff,
)
from .models import Index, IndexEntry, IndexReport, PopulationStatistics

__all__ = [
    "Index",
    "IndexEntry",
    "IndexReport",
    "PopulationStatistics",
    "NORMALIZATIONS",
    "build_entry",
    "build_index",
    "build_report",
    "overall_score",
    "percent_diff",
    "population_statistics",
    "zscore_diff",
]
