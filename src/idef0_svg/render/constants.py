"""Render constants used by the SVG writer.

Theme-dependent values (colours, fonts, stroke widths) live in style.py.
"""

# ---------------------------------------------------------------------------
# Line drawing
# ---------------------------------------------------------------------------
CURVE_RADIUS: float = 10.0
"""Distance from a corner at which a routed line starts to bend."""

CURVE_CONTROL: float = 5.0
"""Distance from a corner of the cubic control points."""

DASH_PATTERN: str = "5,5"
"""Stroke dash pattern for unsatisfied lines."""

# ---------------------------------------------------------------------------
# Arrowheads
# ---------------------------------------------------------------------------
ARROW_LENGTH: float = 6.0
"""Arrowhead length along the line."""

ARROW_HALF_WIDTH: float = 3.0
"""Half the arrowhead's width across the line."""
