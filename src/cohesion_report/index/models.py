"""Index models: population statistics and defect-annotated entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..config import Thresholds


@dataclass(frozen=True)
class PopulationStatistics:
    """Mean and sample stddev over the applicable raw values of one metric."""

    mean: float = 0.0
    stddev: float = 0.0
    count: int = 0  # number of applicable values


@dataclass(frozen=True)
class IndexEntry:
    class_name: str
    raw_value: Optional[float]  # None = not applicable
    diff: float
    defect: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "value": self.raw_value,
            "diff": self.diff,
            "defect": self.defect,
        }


@dataclass(frozen=True)
class Index:
    """Aggregated view of one metric over all classes, in skeleton order."""

    metric: str
    statistics: PopulationStatistics
    entries: tuple[IndexEntry, ...]
    overall_score: float

    @property
    def defects(self) -> tuple[IndexEntry, ...]:
        return tuple(e for e in self.entries if e.defect)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.metric,
            "mean": self.statistics.mean,
            "stddev": self.statistics.stddev,
            "applicable": self.statistics.count,
            "defects": len(self.defects),
            "score": self.overall_score,
            "classes": [e.to_dict() for e in self.entries],
        }


@dataclass(frozen=True)
class IndexReport:
    """All per-metric indexes of one run plus the report-level score."""

    indexes: tuple[Index, ...]
    thresholds: Thresholds
    normalization: str
    score: float

    def get(self, metric: str) -> Optional[Index]:
        for index in self.indexes:
            if index.metric == metric:
                return index
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "normalization": self.normalization,
            "thresholds": {"high": self.thresholds.high, "low": self.thresholds.low},
            "metrics": [index.to_dict() for index in self.indexes],
        }
