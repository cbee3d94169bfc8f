"""Text labels and their approximate bounding boxes.

There are no real font metrics: every character is ``CHAR_WIDTH`` wide and
a label is ``LINE_HEIGHT`` tall, sitting on its baseline ``y``.
"""

from __future__ import annotations

from dataclasses import dataclass

from idef0_svg.layout.constants import CHAR_WIDTH, LINE_HEIGHT

START = "start"
END = "end"
MIDDLE = "middle"
ALIGNMENTS = (START, END, MIDDLE)
"""SVG ``text-anchor`` values: left aligned, right aligned, centred."""


def text_width(text: str) -> float:
    return len(text) * CHAR_WIDTH


@dataclass(frozen=True)
class Label:
    """A piece of text anchored at (x, y) with the given alignment."""

    text: str
    x: float
    y: float
    align: str = START

    def __post_init__(self) -> None:
        if self.align not in ALIGNMENTS:
            raise ValueError(f"Unknown label alignment: {self.align!r}")

    @property
    def width(self) -> float:
        return text_width(self.text)

    @property
    def left_edge(self) -> float:
        if self.align == END:
            return self.x - self.width
        if self.align == MIDDLE:
            return self.x - self.width / 2
        return self.x

    @property
    def right_edge(self) -> float:
        return self.left_edge + self.width

    @property
    def top_edge(self) -> float:
        return self.y - LINE_HEIGHT

    @property
    def bottom_edge(self) -> float:
        return self.y

    def overlapping(self, other: Label) -> bool:
        """True when the two bounding boxes share interior area."""
        return (
            self.left_edge < other.right_edge
            and self.right_edge > other.left_edge
            and self.top_edge < other.bottom_edge
            and self.bottom_edge > other.top_edge
        )
