"""Layout constants used across layout and routing modules.

All distances are in SVG user units; the renderer writes them out as
points.
"""

# ---------------------------------------------------------------------------
# Text metrics
# ---------------------------------------------------------------------------
CHAR_WIDTH: float = 6.0
"""Approximate pixel width of a single character at the 12px font size."""

LINE_HEIGHT: float = 20.0
"""Height of a label's bounding box, measured up from its baseline."""

# ---------------------------------------------------------------------------
# Box sizing
# ---------------------------------------------------------------------------
MIN_BOX_HEIGHT: float = 60.0
"""A process box is never shorter than this."""

BOX_LABEL_PADDING: float = 40.0
"""Horizontal room added around a process box's name."""

BOX_ANCHOR_PADDING: float = 20.0
"""Extra length added to a side beyond its anchor pitch."""

ANCHOR_PITCH: float = 20.0
"""Distance between neighbouring anchors on one side."""

# ---------------------------------------------------------------------------
# Clearance lanes
# ---------------------------------------------------------------------------
CLEARANCE_BASE: float = 20.0
"""Stand-off of the first lane in a clearance group."""

CLEARANCE_PITCH: float = 20.0
"""Spacing between consecutive lanes in a clearance group."""

EXTERNAL_STANDOFF: float = 20.0
"""Initial stand-off of a boundary line from its box side."""

# ---------------------------------------------------------------------------
# Boundary lines
# ---------------------------------------------------------------------------
BOUNDS_OVERSHOOT: float = 40.0
"""How far past the diagram bounds a boundary line's free end reaches."""

AVOID_STEP: float = 20.0
"""Step used when sliding a boundary label clear of other labels."""

TERMINAL_LABEL_GAP: float = 20.0
"""Gap left between a vertical boundary line's free end and its label."""

MIN_LINE_RUN: float = 10.0
"""Length a boundary line keeps beyond its label text."""

# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------
LABEL_OFFSET: float = 5.0
"""Distance between a label baseline and the segment it names."""

LABEL_INSET: float = 10.0
"""Horizontal inset of a label from the vertical segment it sits beside."""

# ---------------------------------------------------------------------------
# Diagram
# ---------------------------------------------------------------------------
DIAGRAM_PADDING: float = 20.0
"""Blank border kept around the finished drawing."""
