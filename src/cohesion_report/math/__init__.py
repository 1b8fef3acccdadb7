"""Statistical helpers for population-level aggregation."""

from .statistics import Statistics

__all__ = ["Statistics"]
