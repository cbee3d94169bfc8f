"""Theme and style settings for IDEF0 rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for an IDEF0 diagram."""

    name: str
    background_color: str
    box_fill: str
    box_stroke: str
    box_stroke_width: float
    line_color: str
    line_width: float
    label_color: str
    font_family: str
    font_size: float
    # Focus view
    highlight_fill: str = "none"
    highlight_stroke_width: float = 2.0
    # Unsatisfied ICOMs; empty = inherit line_color
    unsatisfied_color: str = ""
