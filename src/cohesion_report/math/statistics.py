"""Descriptive statistics and deviation normalizations used by the index."""

import statistics as stdlib_stats

import numpy as np


class Statistics:
    """Statistical analysis methods."""

    @staticmethod
    def mean(values: list[float]) -> float:
        """Compute arithmetic mean."""
        if not values:
            return 0.0
        return float(stdlib_stats.fmean(values))

    @staticmethod
    def stdev(values: list[float]) -> float:
        """Compute sample standard deviation."""
        if len(values) < 2:
            return 0.0
        return float(stdlib_stats.stdev(values))

    @staticmethod
    def z_score(x: float, mean: float, std: float) -> float:
        """Compute single z-score: z = (x - mu) / sigma."""
        if std == 0:
            return 0.0
        return (x - mean) / std

    @staticmethod
    def percent_deviation(x: float, mean: float) -> float:
        """Deviation from the mean as a percentage of |mean|.

        100 * (x - mu) / |mu|, 0.0 when mu is 0 (no scale to express it in).
        """
        if mean == 0:
            return 0.0
        return 100.0 * (x - mean) / abs(mean)

    @staticmethod
    def summary(values: list[float]) -> dict[str, float]:
        """Min/max/median/quartiles for report display. Empty input gives zeros."""
        if not values:
            return {"min": 0.0, "q1": 0.0, "median": 0.0, "q3": 0.0, "max": 0.0}
        arr = np.asarray(values, dtype=float)
        q1, median, q3 = (float(v) for v in np.percentile(arr, [25, 50, 75]))
        return {
            "min": float(arr.min()),
            "q1": q1,
            "median": median,
            "q3": q3,
            "max": float(arr.max()),
        }

