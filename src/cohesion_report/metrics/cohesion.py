"""Built-in cohesion metrics over the method/attribute incidence.

Notation: m = methods, a = attributes, m(A) = number of methods referencing
attribute A.

- LCOM  (Chidamber & Kemerer): max(P - Q, 0), P = method pairs sharing no
        attribute, Q = pairs sharing at least one
- LCOM2: 1 - sum(m(A)) / (m * a)
- LCOM3 (Henderson-Sellers): (m - sum(m(A)) / a) / (m - 1)
- LCOM4 (Hitz & Montazeri): connected components of the method graph
- TCC   (Bieman & Kang): directly connected pairs / all pairs
"""

from __future__ import annotations

import numpy as np

from .models import Incidence
from .registry import register_metric


def _pair_counts(incidence: Incidence) -> tuple[int, int]:
    """Return (pairs sharing nothing, pairs sharing something)."""
    n = len(incidence.methods)
    if n < 2:
        return 0, 0
    upper = np.triu_indices(n, k=1)
    shared = incidence.sharing()[upper]
    q = int(np.count_nonzero(shared))
    return shared.size - q, q


@register_metric(
    "LCOM",
    display_name="Lack of Cohesion in Methods",
    description="Method pairs sharing no attribute minus pairs sharing one (floored at 0)",
)
def lcom(incidence: Incidence) -> float:
    p, q = _pair_counts(incidence)
    return float(max(p - q, 0))


@register_metric(
    "LCOM2",
    display_name="LCOM2",
    description="1 - average fraction of methods referencing each attribute",
)
def lcom2(incidence: Incidence) -> float:
    m, a = len(incidence.methods), len(incidence.attributes)
    total = int(incidence.matrix().sum())
    return 1.0 - total / (m * a)


@register_metric(
    "LCOM3",
    display_name="LCOM3 (Henderson-Sellers)",
    description="Henderson-Sellers lack of cohesion, 0 = every method uses every attribute",
)
def lcom3(incidence: Incidence) -> float:
    m, a = len(incidence.methods), len(incidence.attributes)
    if m == 1:
        return 0.0
    total = int(incidence.matrix().sum())
    return (m - total / a) / (m - 1)


@register_metric(
    "LCOM4",
    display_name="LCOM4",
    description="Number of method groups connected through shared attributes",
)
def lcom4(incidence: Incidence) -> float:
    sharing = incidence.sharing()
    n = len(incidence.methods)
    seen = np.zeros(n, dtype=bool)
    components = 0
    for start in range(n):
        if seen[start]:
            continue
        components += 1
        stack = [start]
        seen[start] = True
        while stack:
            node = stack.pop()
            for neighbour in np.flatnonzero(sharing[node] & ~seen):
                seen[neighbour] = True
                stack.append(int(neighbour))
    return float(components)


@register_metric(
    "TCC",
    display_name="Tight Class Cohesion",
    description="Fraction of method pairs directly sharing an attribute",
    direction="low_is_bad",
)
def tcc(incidence: Incidence) -> float:
    p, q = _pair_counts(incidence)
    if p + q == 0:
        return 1.0
    return q / (p + q)
