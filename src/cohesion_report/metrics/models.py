"""Metric models: per-class incidence input and immutable score output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

import numpy as np

from ..skeleton.models import ClassInfo


@dataclass(frozen=True)
class Incidence:
    """Bipartite method/attribute incidence of one class.

    ``uses[i]`` is the set of the class's own attributes referenced by
    ``methods[i]``. Methods referencing nothing stay in the relation.
    """

    class_name: str
    methods: tuple[str, ...]
    attributes: tuple[str, ...]
    uses: tuple[frozenset[str], ...]

    @classmethod
    def of(cls, info: ClassInfo, exclude_constructors: bool = False) -> "Incidence":
        methods = [m for m in info.methods if not (exclude_constructors and m.is_constructor)]
        return cls(
            class_name=info.name,
            methods=tuple(m.name for m in methods),
            attributes=tuple(info.attributes),
            uses=tuple(info.own_accesses(m) for m in methods),
        )

    @property
    def applicable(self) -> bool:
        """Cohesion is undefined without at least one method and one attribute."""
        return bool(self.methods) and bool(self.attributes)

    def matrix(self) -> np.ndarray:
        """Boolean (methods x attributes) incidence matrix."""
        column = {name: j for j, name in enumerate(self.attributes)}
        m = np.zeros((len(self.methods), len(self.attributes)), dtype=bool)
        for i, used in enumerate(self.uses):
            for name in used:
                m[i, column[name]] = True
        return m

    def sharing(self) -> np.ndarray:
        """Symmetric boolean (methods x methods): True where two methods share an attribute."""
        m = self.matrix().astype(np.int64)
        return (m @ m.T) > 0


@dataclass(frozen=True)
class MetricScore:
    """Score of one class. ``raw_value`` is None when the metric is not applicable."""

    class_name: str
    raw_value: Optional[float]

    @property
    def applicable(self) -> bool:
        return self.raw_value is not None

    def to_dict(self, metric: str) -> dict[str, Any]:
        return {
            "metric": metric,
            "class": self.class_name,
            "value": self.raw_value,
            "applicable": self.applicable,
        }


@dataclass(frozen=True)
class MetricScoreSet:
    """All class scores for one metric, in skeleton order."""

    metric: str
    scores: tuple[MetricScore, ...] = ()

    def __iter__(self) -> Iterator[MetricScore]:
        return iter(self.scores)

    def __len__(self) -> int:
        return len(self.scores)

    def applicable_values(self) -> list[float]:
        return [s.raw_value for s in self.scores if s.raw_value is not None]
