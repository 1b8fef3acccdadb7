"""Skeleton <-> JSON document conversion.

Document shape::

    {"classes": [
        {"name": "pkg.Foo",
         "attributes": ["x", "y"],
         "methods": [{"name": "bar", "accesses": ["x", {"name": "z", "owner": "pkg.Baz"}]}]}
    ]}

A plain string access refers to the method's own class.
"""

from __future__ import annotations

from typing import Any

from .models import AttributeRef, ClassInfo, Method, Skeleton


def skeleton_from_dict(data: dict[str, Any]) -> Skeleton:
    """Build a Skeleton from an already schema-validated document."""
    classes = []
    for cls in data.get("classes", []):
        methods = tuple(
            Method(
                name=m["name"],
                accesses=frozenset(_ref_from_json(a) for a in m.get("accesses", [])),
            )
            for m in cls.get("methods", [])
        )
        classes.append(
            ClassInfo(
                name=cls["name"],
                methods=methods,
                attributes=tuple(dict.fromkeys(cls.get("attributes", []))),
            )
        )
    return Skeleton(classes=tuple(classes))


def skeleton_to_dict(skeleton: Skeleton) -> dict[str, Any]:
    """Serialize with a stable ordering so identical skeletons give identical JSON."""
    return {
        "classes": [
            {
                "name": cls.name,
                "attributes": list(cls.attributes),
                "methods": [
                    {
                        "name": m.name,
                        "accesses": [_ref_to_json(r) for r in sorted(m.accesses, key=_ref_key)],
                    }
                    for m in cls.methods
                ],
            }
            for cls in skeleton.classes
        ]
    }


def _ref_key(ref: AttributeRef) -> tuple[str, str]:
    return (ref.owner or "", ref.name)


def _ref_from_json(raw: Any) -> AttributeRef:
    if isinstance(raw, str):
        return AttributeRef(name=raw)
    return AttributeRef(name=raw["name"], owner=raw.get("owner"))


def _ref_to_json(ref: AttributeRef) -> Any:
    if ref.owner is None:
        return ref.name
    return {"name": ref.name, "owner": ref.owner}
