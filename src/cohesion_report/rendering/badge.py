"""Status badge (SVG) parameterized by the overall score."""

from __future__ import annotations

from html import escape

BADGE_STYLES = ("flat", "round")

# (minimum score, colour), checked top-down
_COLOURS = (
    (90.0, "#44cc11"),
    (75.0, "#97ca00"),
    (50.0, "#dfb317"),
    (0.0, "#e05d44"),
)


def badge_colour(score: float) -> str:
    for minimum, colour in _COLOURS:
        if score >= minimum:
            return colour
    return _COLOURS[-1][1]


def render_badge_svg(score: float, label: str = "cohesion", style: str = "flat") -> str:
    """Shields-style two-part badge: ``label | 87.5%``."""
    if style not in BADGE_STYLES:
        raise ValueError(f"Unknown badge style: {style!r}")
    value = f"{score:.1f}%"
    left = 6 * len(label) + 12
    right = 6 * len(value) + 12
    width = left + right
    radius = 3 if style == "round" else 0
    colour = badge_colour(score)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="20" role="img" aria-label="{escape(label)}: {value}">
<title>{escape(label)}: {value}</title>
<clipPath id="r"><rect width="{width}" height="20" rx="{radius}" fill="#fff"/></clipPath>
<g clip-path="url(#r)">
<rect width="{left}" height="20" fill="#555"/>
<rect x="{left}" width="{right}" height="20" fill="{colour}"/>
</g>
<g fill="#fff" text-anchor="middle" font-family="Verdana,Geneva,DejaVu Sans,sans-serif" font-size="11">
<text x="{left / 2:.1f}" y="14">{escape(label)}</text>
<text x="{left + right / 2:.1f}" y="14">{value}</text>
</g>
</svg>
"""
