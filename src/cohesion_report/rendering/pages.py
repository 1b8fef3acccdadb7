"""HTML pages rendered from validated index and matrix documents.

Both renderers are pure: the same document and params always give the same
page. They take the JSON documents (not the dataclasses) so that only data
that passed the schema gate can reach a page.
"""

from __future__ import annotations

from html import escape
from typing import Any, Mapping, Optional

from ..math.statistics import Statistics

DEFAULT_TITLE = "Cohesion report"
STYLESHEET = "cohesion.css"


def render_index_html(document: Mapping[str, Any], params: Optional[Mapping[str, Any]] = None) -> str:
    """Render ``index.html``: one section per metric, one row per class."""
    params = params or {}
    title = str(params.get("title", DEFAULT_TITLE))
    thresholds = document["thresholds"]

    sections = "\n".join(
        _metric_section(metric, document["normalization"]) for metric in document["metrics"]
    )
    if not document["metrics"]:
        sections = '<p class="empty">No metrics were computed.</p>'

    body = f"""<header>
  <h1>{escape(title)}</h1>
  <p class="score">Overall score: <strong>{_fmt(document["score"], 1)}</strong> / 100
    <img src="badge.svg" alt="cohesion score badge"/></p>
  <p class="thresholds">Defect when diff &gt; {_fmt(thresholds["high"], 2)}
    or diff &lt; {_fmt(thresholds["low"], 2)} ({escape(document["normalization"])} normalization).
    See also the <a href="matrix.html">attribute usage matrix</a>.</p>
</header>
{sections}"""
    return _page(title, body)


def render_matrix_html(document: Mapping[str, Any], params: Optional[Mapping[str, Any]] = None) -> str:
    """Render ``matrix.html``: classes x classes, cells = attribute accesses."""
    params = params or {}
    title = str(params.get("title", DEFAULT_TITLE))
    rows = list(document["rows"])
    weights = {(c["row"], c["column"]): c["weight"] for c in document["cells"]}

    if not rows:
        table = '<p class="empty">The skeleton has no classes.</p>'
    else:
        positions = {name: i + 1 for i, name in enumerate(rows)}
        head = "".join(
            f'<th title="{escape(name)}">{positions[name]}</th>' for name in rows
        )
        lines = []
        for row in rows:
            cells = []
            for column in rows:
                weight = weights.get((row, column))
                if weight is None:
                    cells.append('<td class="none"></td>')
                else:
                    css = "self" if row == column else "cross"
                    cells.append(f'<td class="{css}">{weight}</td>')
            lines.append(
                f'<tr><th scope="row">{positions[row]}</th>'
                f'<td class="name">{escape(row)}</td>{"".join(cells)}</tr>'
            )
        rows_html = "\n".join(lines)
        table = f"""<table class="matrix">
<thead><tr><th>#</th><th>Class</th>{head}</tr></thead>
<tbody>
{rows_html}
</tbody>
</table>"""

    body = f"""<header>
  <h1>{escape(title)}: attribute usage matrix</h1>
  <p>Each cell counts accesses from the row class's methods to attributes declared by the
    column class. Empty cells mean no relation. Back to the <a href="index.html">index</a>.</p>
</header>
{table}"""
    return _page(f"{title}: matrix", body)


# ── Private helpers ──────────────────────────────────────────────────


def _metric_section(metric: Mapping[str, Any], normalization: str) -> str:
    values = [c["value"] for c in metric["classes"] if c["value"] is not None]
    summary = Statistics.summary(values)
    rows = "\n".join(_class_row(c) for c in metric["classes"])
    if not rows:
        rows = '<tr><td colspan="4" class="empty">No classes.</td></tr>'
    name = escape(metric["name"])
    return f"""<section id="{name}">
  <h2>{name}</h2>
  <dl class="stats">
    <dt>Score</dt><dd>{_fmt(metric["score"], 1)}</dd>
    <dt>Mean</dt><dd>{_fmt(metric["mean"])}</dd>
    <dt>Stddev</dt><dd>{_fmt(metric["stddev"])}</dd>
    <dt>Median</dt><dd>{_fmt(summary["median"])}</dd>
    <dt>Range</dt><dd>{_fmt(summary["min"])} .. {_fmt(summary["max"])}</dd>
    <dt>Applicable</dt><dd>{metric["applicable"]} of {len(metric["classes"])}</dd>
    <dt>Defects</dt><dd>{metric["defects"]}</dd>
  </dl>
  <table class="index">
    <thead><tr><th>Class</th><th>Value</th><th>Diff ({escape(normalization)})</th><th>Defect</th></tr></thead>
    <tbody>
{rows}
    </tbody>
  </table>
</section>"""


def _class_row(entry: Mapping[str, Any]) -> str:
    if entry["value"] is None:
        css = "na"
    elif entry["defect"]:
        css = "defect"
    else:
        css = "ok"
    value = "n/a" if entry["value"] is None else _fmt(entry["value"])
    flag = "yes" if entry["defect"] else ""
    return (
        f'      <tr class="{css}"><td>{escape(entry["class"])}</td><td>{value}</td>'
        f'<td>{_fmt(entry["diff"], 2)}</td><td>{flag}</td></tr>'
    )


def _fmt(value: float, digits: int = 3) -> str:
    return f"{value:.{digits}f}"


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>{escape(title)}</title>
<link rel="stylesheet" href="{STYLESHEET}"/>
</head>
<body>
{body}
</body>
</html>
"""
