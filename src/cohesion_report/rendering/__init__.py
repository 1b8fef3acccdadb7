"""Deterministic renderers: validated documents in, pages and badge out."""

from pathlib import Path

from .badge import BADGE_STYLES, badge_colour, render_badge_svg
from .pages import render_index_html, render_matrix_html

ASSETS_DIR = Path(__file__).parent / "assets"

__all__ = [
    "ASSETS_DIR",
    "BADGE_STYLES",
    "badge_colour",
    "render_badge_svg",
    "render_index_html",
    "render_matrix_html",
]
