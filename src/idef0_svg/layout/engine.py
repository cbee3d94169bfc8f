"""Layout coordinator: builds lines, sequences boxes and anchors, places everything.

One call to ``create_diagram`` is one render pass. Nothing it allocates is
reused by the next pass.
"""

from __future__ import annotations

__all__ = ["Diagram", "create_diagram"]

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from idef0_svg.layout.boxes import Box, ProcessBox
from idef0_svg.layout.constants import DIAGRAM_PADDING
from idef0_svg.layout.geometry import Bounds, BoundsExtension, Point
from idef0_svg.layout.ordering import sequence_boxes
from idef0_svg.layout.routing import (
    EXTERNAL_KINDS,
    RULES,
    UNSATISFIED_KINDS,
    Line,
    LineKind,
)
from idef0_svg.ordered_set import OrderedSet

if TYPE_CHECKING:
    from idef0_svg.render.style import Theme

logger = logging.getLogger(__name__)


def create_diagram(name: str, populate: Callable[[Diagram], None]) -> Diagram:
    """Run a full layout pass for the boxes and ICOMs *populate* declares."""
    diagram = Diagram(name)
    populate(diagram)
    diagram.create_lines()
    diagram.sequence_boxes()
    diagram.sequence_anchors()
    diagram.layout()
    return diagram


@dataclass(eq=False)
class Diagram(Box):
    """The drawing: its process boxes, every line, and its boundary ICOMs.

    The diagram's own sides hold the names it exchanges with the outside
    world. They are never sequenced or laid out.
    """

    boxes: OrderedSet[ProcessBox] = field(default_factory=OrderedSet, repr=False)
    lines: OrderedSet[Line] = field(default_factory=OrderedSet, repr=False)
    size: tuple[float, float] = (0.0, 0.0)

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def height(self) -> float:
        return self.size[1]

    def box(self, name: str) -> ProcessBox:
        """Return the box called *name*, adding it if needed."""
        return self.boxes.get(
            lambda box: box.name == name,
            lambda: ProcessBox(name),
        )

    def lines_of(self, *kinds: LineKind) -> list[Line]:
        return [line for line in self.lines if line.kind in kinds]

    @property
    def unsatisfied_lines(self) -> list[Line]:
        return self.lines_of(*UNSATISFIED_KINDS)

    # -- Render pass -------------------------------------------------------

    def create_lines(self) -> None:
        """Order the boxes, then connect them to each other and the boundary."""
        self.boxes, self.lines = sequence_boxes(self.boxes)
        for line in self.lines:
            line.attach()

        for kind in (*EXTERNAL_KINDS, *UNSATISFIED_KINDS):
            for box in self.boxes:
                for line in RULES[kind].connect(self, box, None):
                    self.lines.add(line.attach())

        logger.debug(
            "Diagram %r: %d boxes, %d lines (%d backward, %d unsatisfied)",
            self.name,
            len(self.boxes),
            len(self.lines),
            sum(1 for line in self.lines if line.is_backward),
            len(self.unsatisfied_lines),
        )

    def sequence_boxes(self) -> None:
        for box, rank in self.boxes.ranks().items():
            box.sequence = rank

    def sequence_anchors(self) -> None:
        for box in self.boxes:
            box.sequence_anchors()

    def layout(self) -> None:
        """Place boxes diagonally, route lines and size the drawing."""
        point = self.top_left
        for box in self.boxes:
            box.move_to(point)
            box.layout(self.lines)
            point = Point(box.x2 + box.right.margin, box.y2 + box.bottom.margin)

        bounds = self._content_bounds()
        for line in self.lines:
            line.bounds(bounds)

        extension = BoundsExtension()
        for line in self.lines:
            others = self.lines.delete(line).to_list()
            line.avoid(others, extension)

        for line in self.lines:
            line.extend_bounds(extension)

        dx = max([0.0, *(-line.left_edge for line in self.lines if line.left_edge <= 0)])
        dy = max([0.0, *(-line.top_edge for line in self.lines if line.top_edge <= 0)])
        for box in self.boxes:
            box.translate(dx + DIAGRAM_PADDING, dy + DIAGRAM_PADDING)

        content = self._content_bounds()
        self.size = (content.x2 + DIAGRAM_PADDING, content.y2 + DIAGRAM_PADDING)
        logger.debug("Diagram %r laid out at %gx%g", self.name, *self.size)

    def _content_bounds(self) -> Bounds:
        items = [*self.boxes, *self.lines]
        if not items:
            return Bounds(0.0, 0.0, 0.0, 0.0)
        return Bounds(
            min(item.left_edge for item in items),
            min(item.top_edge for item in items),
            max(item.right_edge for item in items),
            max(item.bottom_edge for item in items),
        )

    # -- Output ------------------------------------------------------------

    def to_svg(self, theme: Theme | None = None) -> str:
        from idef0_svg.render.svg import render_svg

        return render_svg(self, theme=theme)
