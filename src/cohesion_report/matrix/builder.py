"""Matrix builder: cross-class attribute usage, independent of any metric."""

from __future__ import annotations

from collections import Counter

from ..logging_config import get_logger
from ..skeleton.models import Skeleton
from .models import Matrix

logger = get_logger(__name__)


def build_matrix(skeleton: Skeleton) -> Matrix:
    """Count, per (class, class) pair, the distinct (method, attribute)
    references from one into the other.

    An own attribute referenced both with and without an explicit owner is
    one reference. References to attributes no class declares are ignored.
    """
    declared = skeleton.declared_attributes()
    resolved = set()

    for cls in skeleton:
        for method in cls.methods:
            for ref in method.accesses:
                target = ref.resolve(cls.name)
                if ref.name in declared.get(target, ()):
                    resolved.add((cls.name, method.name, target, ref.name))

    cells = Counter((source, target) for source, _, target, _ in resolved)

    matrix = Matrix(rows=skeleton.class_names, cells=dict(cells))
    logger.info(f"Matrix: {len(matrix.rows)} classes, {len(matrix.cells)} related pairs")
    return matrix
