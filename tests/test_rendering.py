"""Tests for HTML pages and the SVG badge."""

import pytest

from cohesion_report.config import Thresholds
from cohesion_report.index import build_report
from cohesion_report.matrix import build_matrix
from cohesion_report.metrics import compute_scores
from cohesion_report.rendering import (
    BADGE_STYLES,
    badge_colour,
    render_badge_svg,
    render_index_html,
    render_matrix_html,
)
from cohesion_report.skeleton import Skeleton


@pytest.fixture
def index_doc(mixed_skeleton):
    return build_report([compute_scores(mixed_skeleton, "LCOM")], Thresholds()).to_dict()


class TestIndexPage:
    """index.html rendering."""

    def test_lists_every_class(self, index_doc):
        page = render_index_html(index_doc)
        for name in ("X", "Y", "Mixed", "Empty"):
            assert f"<td>{name}</td>" in page

    def test_not_applicable_marked(self, index_doc):
        page = render_index_html(index_doc)
        assert '<tr class="na"><td>Empty</td><td>n/a</td>' in page

    def test_deterministic(self, index_doc):
        assert render_index_html(index_doc) == render_index_html(index_doc)

    def test_title_param_escaped(self, index_doc):
        page = render_index_html(index_doc, {"title": "<My & Project>"})
        assert "<title>&lt;My &amp; Project&gt;</title>" in page
        assert "<My & Project>" not in page

    def test_default_title(self, index_doc):
        assert "<title>Cohesion report</title>" in render_index_html(index_doc)

    def test_links_stylesheet_and_badge(self, index_doc):
        page = render_index_html(index_doc)
        assert 'href="cohesion.css"' in page
        assert 'src="badge.svg"' in page

    def test_no_metrics(self):
        doc = build_report([]).to_dict()
        assert "No metrics were computed." in render_index_html(doc)


class TestMatrixPage:
    """matrix.html rendering."""

    def test_cells(self, related_skeleton):
        page = render_matrix_html(build_matrix(related_skeleton).to_dict())
        assert '<td class="self">2</td>' in page
        assert '<td class="cross">1</td>' in page
        assert '<td class="none"></td>' in page

    def test_class_names_escaped(self, make_class):
        skeleton = Skeleton(classes=(make_class("List<String>", ["x"], {"m": ["x"]}),))
        page = render_matrix_html(build_matrix(skeleton).to_dict())
        assert "List&lt;String&gt;" in page
        assert "List<String>" not in page

    def test_empty(self):
        page = render_matrix_html({"rows": [], "cells": []})
        assert "The skeleton has no classes." in page


class TestBadge:
    """badge.svg rendering."""

    @pytest.mark.parametrize(
        "score,colour",
        [(100.0, "#44cc11"), (90.0, "#44cc11"), (80.0, "#97ca00"), (60.0, "#dfb317"), (10.0, "#e05d44")],
    )
    def test_colour_bands(self, score, colour):
        assert badge_colour(score) == colour

    def test_contains_score(self):
        svg = render_badge_svg(87.5)
        assert svg.startswith("<svg")
        assert "87.5%" in svg
        assert "#97ca00" in svg

    def test_styles(self):
        assert 'rx="0"' in render_badge_svg(50.0, style="flat")
        assert 'rx="3"' in render_badge_svg(50.0, style="round")
        assert set(BADGE_STYLES) == {"flat", "round"}

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            render_badge_svg(50.0, style="plastic")
