"""Tests for cohesion_report.skeleton models and JSON documents."""

import json

import pytest

from cohesion_report.exceptions import StructuralInvariantError
from cohesion_report.skeleton import (
    AttributeRef,
    JsonSkeletonSource,
    Method,
    PythonSourceExtractor,
    Skeleton,
    skeleton_from_dict,
    skeleton_source_for,
    skeleton_to_dict,
    validate_skeleton,
)


class TestAttributeRef:
    """Test reference resolution."""

    def test_own_reference_resolves_to_current_class(self):
        assert AttributeRef("x").resolve("pkg.A") == "pkg.A"

    def test_owned_reference_resolves_to_owner(self):
        assert AttributeRef("x", "pkg.B").resolve("pkg.A") == "pkg.B"


class TestClassInfo:
    """Test per-class access filtering."""

    def test_own_accesses_drop_foreign_and_undeclared(self, make_class):
        cls = make_class(
            "A",
            ["x", "y"],
            {"m": ["x", "undeclared", ("y", "B"), ("x", "A")]},
        )
        assert cls.own_accesses(cls.methods[0]) == frozenset({"x"})

    def test_constructor_detection(self):
        assert Method("__init__").is_constructor
        assert Method("<init>").is_constructor
        assert not Method("run").is_constructor


class TestSkeleton:
    """Test Skeleton container behaviour."""

    def test_order_preserved(self, two_class_skeleton):
        assert two_class_skeleton.class_names == ("X", "Y")
        assert [c.name for c in two_class_skeleton] == ["X", "Y"]
        assert len(two_class_skeleton) == 2

    def test_get(self, two_class_skeleton):
        assert two_class_skeleton.get("Y").name == "Y"
        assert two_class_skeleton.get("Z") is None

    def test_declared_attributes(self, two_class_skeleton):
        assert two_class_skeleton.declared_attributes() == {
            "X": frozenset({"a", "b"}),
            "Y": frozenset({"a", "b"}),
        }


class TestValidateSkeleton:
    """Test structural invariant checks."""

    def test_valid_skeleton_passes(self, mixed_skeleton):
        validate_skeleton(mixed_skeleton)

    def test_empty_skeleton_passes(self):
        validate_skeleton(Skeleton())

    def test_duplicate_class_names_rejected(self, make_class):
        skeleton = Skeleton(classes=(make_class("A"), make_class("B"), make_class("A")))
        with pytest.raises(StructuralInvariantError) as exc_info:
            validate_skeleton(skeleton)
        assert exc_info.value.class_name == "A"
        assert "duplicate" in exc_info.value.reason

    def test_empty_class_name_rejected(self, make_class):
        with pytest.raises(StructuralInvariantError):
            validate_skeleton(Skeleton(classes=(make_class(""),)))

    def test_empty_method_name_rejected(self, make_class):
        skeleton = Skeleton(classes=(make_class("A", ["x"], {"": ["x"]}),))
        with pytest.raises(StructuralInvariantError) as exc_info:
            validate_skeleton(skeleton)
        assert exc_info.value.class_name == "A"


class TestSkeletonDocument:
    """Test Skeleton <-> dict conversion."""

    def test_from_dict(self):
        skeleton = skeleton_from_dict(
            {
                "classes": [
                    {
                        "name": "pkg.A",
                        "attributes": ["x", "y", "x"],
                        "methods": [
                            {"name": "m", "accesses": ["x", {"name": "z", "owner": "pkg.B"}]},
                            {"name": "n"},
                        ],
                    },
                    {"name": "pkg.B"},
                ]
            }
        )
        a = skeleton.get("pkg.A")
        assert a.attributes == ("x", "y")
        assert a.methods[0].accesses == frozenset(
            {AttributeRef("x"), AttributeRef("z", "pkg.B")}
        )
        assert a.methods[1].accesses == frozenset()
        assert skeleton.get("pkg.B").methods == ()

    def test_to_dict_is_stable(self, related_skeleton):
        first = json.dumps(skeleton_to_dict(related_skeleton))
        second = json.dumps(skeleton_to_dict(skeleton_from_dict(skeleton_to_dict(related_skeleton))))
        assert first == second

    def test_to_dict_sorts_accesses(self, make_class):
        cls = make_class("A", ["b", "a"], {"m": ["b", "a", ("z", "C")]})
        doc = skeleton_to_dict(Skeleton(classes=(cls,)))
        assert doc["classes"][0]["methods"][0]["accesses"] == ["a", "b", {"name": "z", "owner": "C"}]


class TestJsonSkeletonSource:
    """Test reading skeleton documents from disk."""

    def test_reads_valid_document(self, tmp_path):
        path = tmp_path / "skeleton.json"
        path.write_text(
            json.dumps({"classes": [{"name": "A", "attributes": ["x"], "methods": [{"name": "m", "accesses": ["x"]}]}]})
        )
        skeleton = JsonSkeletonSource(path).extract()
        assert skeleton.class_names == ("A",)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "skeleton.json"
        path.write_text("{not json")
        with pytest.raises(StructuralInvariantError, match="invariants"):
            JsonSkeletonSource(path).extract()

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "skeleton.json"
        path.write_text(json.dumps({"classes": [{"attributes": []}]}))
        with pytest.raises(StructuralInvariantError) as exc_info:
            JsonSkeletonSource(path).extract()
        assert "name" in exc_info.value.reason

    def test_non_utf8_bytes(self, tmp_path):
        path = tmp_path / "skeleton.json"
        path.write_bytes(b"\xff\xfe{\x00")
        with pytest.raises(StructuralInvariantError, match="not UTF-8"):
            JsonSkeletonSource(path).extract()

    def test_missing_file(self, tmp_path):
        with pytest.raises(StructuralInvariantError):
            JsonSkeletonSource(tmp_path / "absent.json").extract()


class TestSkeletonSourceFor:
    """Test source selection from a CLI path."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text('{"classes": []}')
        assert isinstance(skeleton_source_for(path), JsonSkeletonSource)

    def test_directory(self, tmp_path):
        assert isinstance(skeleton_source_for(tmp_path), PythonSourceExtractor)
