"""Skeleton models: the structural description of a codebase's classes.

A skeleton lists classes in a fixed order. Each class declares attributes and
methods; each method records the attributes it references. References are
either to the method's own class (``owner=None``) or to another class named
by ``owner``. A reference that does not resolve to a declared attribute is
*external*: it is kept in the skeleton but ignored by every metric.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..exceptions import StructuralInvariantError

CONSTRUCTOR_NAMES = frozenset({"__init__", "<init>"})


@dataclass(frozen=True, order=True)
class AttributeRef:
    """Reference from a method body to an attribute."""

    name: str
    owner: Optional[str] = None  # None = the class declaring the method

    def resolve(self, current_class: str) -> str:
        """Name of the class this reference points into."""
        return self.owner if self.owner is not None else current_class


@dataclass(frozen=True)
class Method:
    name: str
    accesses: frozenset[AttributeRef] = field(default_factory=frozenset)

    @property
    def is_constructor(self) -> bool:
        return self.name in CONSTRUCTOR_NAMES


@dataclass(frozen=True)
class ClassInfo:
    name: str
    methods: tuple[Method, ...] = ()
    attributes: tuple[str, ...] = ()

    def own_accesses(self, method: Method) -> frozenset[str]:
        """Attributes of this class referenced by ``method``.

        References into other classes and undeclared names are dropped.
        """
        declared = set(self.attributes)
        return frozenset(
            ref.name
            for ref in method.accesses
            if ref.resolve(self.name) == self.name and ref.name in declared
        )


@dataclass(frozen=True)
class Skeleton:
    """Ordered, immutable collection of classes."""

    classes: tuple[ClassInfo, ...] = ()

    def __iter__(self) -> Iterator[ClassInfo]:
        return iter(self.classes)

    def __len__(self) -> int:
        return len(self.classes)

    @property
    def class_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.classes)

    def get(self, name: str) -> Optional[ClassInfo]:
        for cls in self.classes:
            if cls.name == name:
                return cls
        return None

    def declared_attributes(self) -> dict[str, frozenset[str]]:
        """Map class name -> attributes it declares."""
        return {c.name: frozenset(c.attributes) for c in self.classes}


def validate_skeleton(skeleton: Skeleton) -> None:
    """Check the structural invariants every downstream stage relies on.

    Checks:
        - class names are non-empty and unique
        - method names are non-empty

    Raises:
        StructuralInvariantError: If an invariant is violated
    """
    counts = Counter(skeleton.class_names)
    dupes = sorted(name for name, n in counts.items() if n > 1)
    if dupes:
        raise StructuralInvariantError(
            f"duplicate class names: {dupes[:5]}{'...' if len(dupes) > 5 else ''}",
            class_name=dupes[0],
        )

    for cls in skeleton.classes:
        if not cls.name:
            raise StructuralInvariantError("class with empty name")
        for method in cls.methods:
            if not method.name:
                raise StructuralInvariantError("method with empty name", class_name=cls.name)
