"""Matrix model: sparse cross-class attribute usage."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Matrix:
    """Rows are classes in skeleton order; columns are classes too.

    ``cells[(row, column)]`` counts the distinct (method, attribute) accesses
    from ``row``'s methods into attributes declared by ``column``. A missing
    key means no relation, which ``weight`` reports as None.
    """

    rows: tuple[str, ...]
    cells: Mapping[tuple[str, str], int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    def weight(self, row: str, column: str) -> Optional[int]:
        return self.cells.get((row, column))

    def columns_of(self, row: str) -> list[str]:
        """Columns related to ``row``, in row order."""
        return [col for col in self.rows if (row, col) in self.cells]

    def to_dict(self) -> dict[str, Any]:
        order = {name: i for i, name in enumerate(self.rows)}
        ordered = sorted(self.cells.items(), key=lambda kv: (order[kv[0][0]], order[kv[0][1]]))
        return {
            "rows": list(self.rows),
            "cells": [
                {"row": row, "column": column, "weight": weight}
                for (row, column), weight in ordered
            ],
        }
