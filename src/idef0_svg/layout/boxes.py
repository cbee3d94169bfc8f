"""Boxes, their four sides and the named anchors along each side.

A side owns one anchor per ICOM name. Anchors start unordered; once every
line is attached, ``Side.sequence_anchors`` ranks them so that lines leave
and enter the box without crossing, and ``Side.layout`` hands each line
that must route around the side its own clearance lane.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import TYPE_CHECKING

from idef0_svg.errors import LayoutInvariantError
from idef0_svg.layout.constants import (
    ANCHOR_PITCH,
    BOX_ANCHOR_PADDING,
    BOX_LABEL_PADDING,
    CLEARANCE_BASE,
    CLEARANCE_PITCH,
    MIN_BOX_HEIGHT,
)
from idef0_svg.layout.geometry import ORIGIN, Point
from idef0_svg.layout.labels import text_width
from idef0_svg.ordered_set import OrderedSet, compare_keys
from idef0_svg.parser.model import SideKind

if TYPE_CHECKING:
    from idef0_svg.layout.routing.common import Line

HORIZONTAL_SIDES = (SideKind.TOP, SideKind.BOTTOM)


@dataclass(eq=False)
class Anchor:
    """A named connection point on one side of a box."""

    name: str
    side: Side = field(repr=False)
    sequence: int = 1
    lines: OrderedSet[Line] = field(default_factory=OrderedSet, repr=False)

    def attach(self, line: Line) -> None:
        self.lines.add(line)

    @property
    def attached(self) -> bool:
        return not self.lines.is_empty()

    @property
    def position(self) -> Point:
        return self.side.anchor_point(self.sequence)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def precedence(self) -> tuple:
        """Sort key placing this anchor along its side.

        The smallest of ``(clearance group, *anchor precedence, name)``
        over every attached line.
        """
        if not self.attached:
            raise LayoutInvariantError(
                f"Unattached anchor on {self.side.side_name}: {self.name}"
            )
        keys = [
            (
                line.clearance_group(self.side),
                *line.anchor_precedence(self.side),
                line.name,
            )
            for line in self.lines
        ]
        return min(keys, key=cmp_to_key(compare_keys))


@dataclass(eq=False)
class Side:
    """One edge of a box, with its anchors and clearance margin."""

    box: Box = field(repr=False)
    kind: SideKind
    anchors: OrderedSet[Anchor] = field(default_factory=OrderedSet, repr=False)
    margin: float = 0.0

    @property
    def side_name(self) -> str:
        return f"{self.box.name}.{self.kind.value}"

    @property
    def is_horizontal(self) -> bool:
        return self.kind in HORIZONTAL_SIDES

    @property
    def anchor_count(self) -> int:
        return len(self.anchors)

    def expects(self, name: str) -> Anchor:
        """Return the anchor called *name*, creating it if needed."""
        return self.anchors.get(
            lambda anchor: anchor.name == name,
            lambda: Anchor(name, self),
        )

    def expects_name(self, name: str) -> bool:
        return self.anchors.any(lambda anchor: anchor.name == name)

    def unattached_anchors(self) -> list[Anchor]:
        return self.anchors.reject(lambda anchor: anchor.attached).to_list()

    def attach(self, line: Line) -> Anchor:
        anchor = self.expects(line.name)
        anchor.attach(line)
        return anchor

    def sequence_anchors(self) -> None:
        self.anchors = self.anchors.sort_by(lambda anchor: anchor.precedence())
        for anchor, rank in self.anchors.ranks().items():
            anchor.sequence = rank

    def anchor_point(self, n: int) -> Point:
        """Position of the anchor ranked *n*, spread about the side's centre."""
        box = self.box
        spread = ANCHOR_PITCH * (self.anchor_count - 1) / 2
        if self.is_horizontal:
            x = box.x1 + box.width / 2 - spread + n * ANCHOR_PITCH
            y = box.y1 if self.kind is SideKind.TOP else box.y2
            return Point(x, y)
        y = box.y1 + box.height / 2 - spread + n * ANCHOR_PITCH
        x = box.x1 if self.kind is SideKind.LEFT else box.x2
        return Point(x, y)

    def layout(self, lines: OrderedSet[Line]) -> None:
        """Assign clearance lanes to the lines routed around this side.

        Lanes are numbered per clearance group. The margin only reserves
        room for the largest group.
        """
        clearing = lines.select(lambda line: line.should_clear(self))
        groups = clearing.group_by(lambda line: line.clearance_group(self))

        for group in groups.values():
            ordered = group.sort_by(lambda line: line.clearance_precedence(self))
            for index, line in enumerate(ordered):
                line.clear(self, CLEARANCE_BASE + index * CLEARANCE_PITCH)

        largest = max((len(group) for group in groups.values()), default=0)
        self.margin = CLEARANCE_BASE + largest * CLEARANCE_PITCH


@dataclass(eq=False)
class Box:
    """A rectangle with four sides; a bare Box has no size of its own."""

    name: str
    top_left: Point = field(default=ORIGIN, repr=False)
    top: Side = field(init=False, repr=False)
    bottom: Side = field(init=False, repr=False)
    left: Side = field(init=False, repr=False)
    right: Side = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.top = Side(self, SideKind.TOP)
        self.bottom = Side(self, SideKind.BOTTOM)
        self.left = Side(self, SideKind.LEFT)
        self.right = Side(self, SideKind.RIGHT)

    @property
    def sides(self) -> list[Side]:
        return [self.top, self.bottom, self.left, self.right]

    def side(self, kind: SideKind) -> Side:
        return {
            SideKind.TOP: self.top,
            SideKind.BOTTOM: self.bottom,
            SideKind.LEFT: self.left,
            SideKind.RIGHT: self.right,
        }[kind]

    def move_to(self, top_left: Point) -> None:
        self.top_left = top_left

    def translate(self, dx: float, dy: float) -> None:
        self.top_left = self.top_left.translate(dx, dy)

    @property
    def width(self) -> float:
        return 0.0

    @property
    def height(self) -> float:
        return 0.0

    @property
    def x1(self) -> float:
        return self.top_left.x

    @property
    def y1(self) -> float:
        return self.top_left.y

    @property
    def x2(self) -> float:
        return self.x1 + self.width

    @property
    def y2(self) -> float:
        return self.y1 + self.height

    @property
    def left_edge(self) -> float:
        return self.x1

    @property
    def right_edge(self) -> float:
        return self.x2

    @property
    def top_edge(self) -> float:
        return self.y1

    @property
    def bottom_edge(self) -> float:
        return self.y2

    def sequence_anchors(self) -> None:
        for side in self.sides:
            side.sequence_anchors()

    def layout(self, lines: OrderedSet[Line]) -> None:
        for side in self.sides:
            side.layout(lines)
        self.translate(0, self.top.margin)


@dataclass(eq=False)
class ProcessBox(Box):
    """A process drawn as a labelled rectangle."""

    sequence: int = 0
    highlighted: bool = False

    @property
    def precedence(self) -> tuple[int, int]:
        """Seed ordering: most outputs first, then fewest other ICOMs."""
        return (
            -self.right.anchor_count,
            self.left.anchor_count + self.top.anchor_count + self.bottom.anchor_count,
        )

    @property
    def width(self) -> float:
        along = max(self.top.anchor_count, self.bottom.anchor_count)
        return max(
            text_width(self.name) + BOX_LABEL_PADDING,
            along * ANCHOR_PITCH + BOX_ANCHOR_PADDING,
        )

    @property
    def height(self) -> float:
        along = max(self.left.anchor_count, self.right.anchor_count)
        return max(MIN_BOX_HEIGHT, along * ANCHOR_PITCH + BOX_ANCHOR_PADDING)
