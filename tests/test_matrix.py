"""Tests for the cross-class attribute usage matrix."""

import pytest

from cohesion_report.matrix import Matrix, build_matrix
from cohesion_report.skeleton import Skeleton


class TestBuildMatrix:
    """Test matrix construction from a skeleton."""

    def test_rows_follow_skeleton_order(self, related_skeleton):
        matrix = build_matrix(related_skeleton)
        assert matrix.rows == ("pkg.Store", "pkg.Service")

    def test_self_accesses_on_diagonal(self, related_skeleton):
        matrix = build_matrix(related_skeleton)
        # add/items and size/items
        assert matrix.weight("pkg.Store", "pkg.Store") == 2
        # run/store and label/name
        assert matrix.weight("pkg.Service", "pkg.Service") == 2

    def test_cross_class_access(self, related_skeleton):
        matrix = build_matrix(related_skeleton)
        assert matrix.weight("pkg.Service", "pkg.Store") == 1

    def test_absent_relation(self, related_skeleton):
        matrix = build_matrix(related_skeleton)
        assert matrix.weight("pkg.Store", "pkg.Service") is None
        assert matrix.columns_of("pkg.Store") == ["pkg.Store"]
        assert matrix.columns_of("pkg.Service") == ["pkg.Store", "pkg.Service"]

    def test_unresolved_references_ignored(self, related_skeleton):
        matrix = build_matrix(related_skeleton)
        assert all(column in matrix.rows for _, column in matrix.cells)
        assert len(matrix.cells) == 3

    def test_own_attribute_with_and_without_owner_counted_once(self, make_class):
        cls = make_class("A", ["x", "y"], {"m": ["x", ("x", "A")], "n": ["x", ("y", "A")]})
        matrix = build_matrix(Skeleton(classes=(cls,)))
        # m/x, n/x and n/y
        assert matrix.weight("A", "A") == 3

    def test_same_attribute_from_two_methods(self, make_class):
        store = make_class("Store", ["items"], {})
        user = make_class("User", [], {"a": [("items", "Store")], "b": [("items", "Store")]})
        matrix = build_matrix(Skeleton(classes=(store, user)))
        assert matrix.weight("User", "Store") == 2

    def test_empty_skeleton(self):
        matrix = build_matrix(Skeleton())
        assert matrix.rows == ()
        assert matrix.to_dict() == {"rows": [], "cells": []}

    def test_independent_of_metrics(self, two_class_skeleton):
        """Same skeleton, same matrix, whatever else happened."""
        assert build_matrix(two_class_skeleton) == build_matrix(two_class_skeleton)


class TestMatrixModel:
    """Test the Matrix value object."""

    def test_cells_are_read_only(self):
        matrix = Matrix(rows=("A",), cells={("A", "A"): 1})
        with pytest.raises(TypeError):
            matrix.cells[("A", "A")] = 2

    def test_to_dict_orders_cells_by_rows(self):
        matrix = Matrix(
            rows=("B", "A"),
            cells={("A", "A"): 1, ("B", "A"): 3, ("B", "B"): 2},
        )
        assert matrix.to_dict() == {
            "rows": ["B", "A"],
            "cells": [
                {"row": "B", "column": "B", "weight": 2},
                {"row": "B", "column": "A", "weight": 3},
                {"row": "A", "column": "A", "weight": 1},
            ],
        }
