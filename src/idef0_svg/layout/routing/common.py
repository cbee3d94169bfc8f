"""Line kinds, the per-kind rule table and the shared Line type.

Every connector in a diagram is a ``Line`` tagged with one of fourteen
``LineKind`` values. Nothing about a kind lives in a subclass: the
geometry and ordering behaviour are plain functions collected in a
``LineRules`` record and looked up in ``RULES``. The ``internal`` and
``external`` modules fill the table in.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from idef0_svg.errors import LayoutInvariantError
from idef0_svg.layout.constants import EXTERNAL_STANDOFF, LABEL_OFFSET, MIN_LINE_RUN
from idef0_svg.layout.labels import START, Label, text_width

if TYPE_CHECKING:
    from idef0_svg.layout.boxes import Anchor, Box, ProcessBox, Side
    from idef0_svg.layout.geometry import Bounds, BoundsExtension

Ranks = dict["ProcessBox", int]
Waypoints = list[tuple[float, float]]


class LineKind(Enum):
    FORWARD_INPUT = "forward_input"
    BACKWARD_INPUT = "backward_input"
    FORWARD_GUIDANCE = "forward_guidance"
    BACKWARD_GUIDANCE = "backward_guidance"
    FORWARD_MECHANISM = "forward_mechanism"
    BACKWARD_MECHANISM = "backward_mechanism"
    EXTERNAL_INPUT = "external_input"
    EXTERNAL_OUTPUT = "external_output"
    EXTERNAL_GUIDANCE = "external_guidance"
    EXTERNAL_MECHANISM = "external_mechanism"
    UNSATISFIED_INPUT = "unsatisfied_input"
    UNSATISFIED_OUTPUT = "unsatisfied_output"
    UNSATISFIED_GUIDANCE = "unsatisfied_guidance"
    UNSATISFIED_MECHANISM = "unsatisfied_mechanism"

    @property
    def is_backward(self) -> bool:
        return self.name.startswith("BACKWARD")

    @property
    def is_unsatisfied(self) -> bool:
        return self.name.startswith("UNSATISFIED")

    @property
    def icom(self) -> str:
        """The ICOM this line carries: input, output, guidance or mechanism."""
        return self.value.rsplit("_", 1)[1]


# Construction order matters: it fixes line iteration order and therefore
# every tie-break downstream.
INTERNAL_KINDS = (
    LineKind.FORWARD_INPUT,
    LineKind.FORWARD_GUIDANCE,
    LineKind.FORWARD_MECHANISM,
    LineKind.BACKWARD_INPUT,
    LineKind.BACKWARD_GUIDANCE,
    LineKind.BACKWARD_MECHANISM,
)
EXTERNAL_KINDS = (
    LineKind.EXTERNAL_INPUT,
    LineKind.EXTERNAL_OUTPUT,
    LineKind.EXTERNAL_GUIDANCE,
    LineKind.EXTERNAL_MECHANISM,
)
UNSATISFIED_KINDS = (
    LineKind.UNSATISFIED_INPUT,
    LineKind.UNSATISFIED_OUTPUT,
    LineKind.UNSATISFIED_GUIDANCE,
    LineKind.UNSATISFIED_MECHANISM,
)
BOUNDARY_KINDS = EXTERNAL_KINDS + UNSATISFIED_KINDS


class Arrow(Enum):
    """Direction of the arrowhead drawn at a line's target end."""

    RIGHT = "right"
    DOWN = "down"
    UP = "up"


# ---------------------------------------------------------------------------
# Default rules
# ---------------------------------------------------------------------------


def anchor_endpoints(line: Line) -> tuple[float, float, float, float]:
    sa, ta = line.source_anchor, line.target_anchor
    return sa.x, sa.y, ta.x, ta.y


def endpoint_extent(line: Line) -> tuple[float, float, float, float]:
    """(left, top, right, bottom) of the segment between the endpoints."""
    x1, y1, x2, y2 = line.endpoints
    return min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2)


def source_label(line: Line) -> Label:
    sa = line.source_anchor
    return Label(line.name, sa.x + LABEL_OFFSET, sa.y - LABEL_OFFSET, START)


def no_sides(line: Line) -> list[Side]:
    return []


def no_clearance_group(line: Line, side: Side) -> int:
    raise LayoutInvariantError(
        f"{line.kind.name}: No clearance group specified for {side.side_name}"
    )


def no_clearance_precedence(line: Line, side: Side) -> tuple:
    raise LayoutInvariantError(
        f"{line.kind.name}: No clearance precedence specified for {side.side_name}"
    )


def clearance_as_anchor_precedence(line: Line, side: Side) -> tuple:
    return line.clearance_precedence(side)


def no_standoff(line: Line) -> Side | None:
    return None


def ignore_bounds(line: Line, bounds: Bounds) -> None:
    pass


def ignore_others(
    line: Line, others: list[Line], extension: BoundsExtension
) -> None:
    pass


def ignore_extension(line: Line, extension: BoundsExtension) -> None:
    pass


def negated(key: tuple) -> tuple:
    """Flip the sign of every number in a precedence key."""
    return tuple(value if isinstance(value, str) else -value for value in key)


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineRules:
    """Behaviour of one line kind.

    ``connect(source, target, ranks)`` returns the new, unattached lines of
    this kind between two boxes. Boundary kinds are connected as
    ``connect(diagram, box, None)`` whichever way they point.
    """

    connect: Callable[[Box, Box, Ranks | None], list[Line]]
    arrow: Arrow
    route: Callable[[Line], Waypoints]
    source_side: Callable[[Line], Side] | None = None
    target_side: Callable[[Line], Side] | None = None
    endpoints: Callable[[Line], tuple[float, float, float, float]] = anchor_endpoints
    extent: Callable[[Line], tuple[float, float, float, float]] = endpoint_extent
    label: Callable[[Line], Label] = source_label
    sides_to_clear: Callable[[Line], list[Side]] = no_sides
    clearance_group: Callable[[Line, Side], int] = no_clearance_group
    clearance_precedence: Callable[[Line, Side], tuple] = no_clearance_precedence
    anchor_precedence: Callable[[Line, Side], tuple] = clearance_as_anchor_precedence
    standoff: Callable[[Line], Side | None] = no_standoff
    bounds: Callable[[Line, Bounds], None] = ignore_bounds
    avoid: Callable[[Line, list[Line], BoundsExtension], None] = ignore_others
    extend_bounds: Callable[[Line, BoundsExtension], None] = ignore_extension
    dashed: bool = False


RULES: dict[LineKind, LineRules] = {}


def register(kind: LineKind, rules: LineRules) -> None:
    RULES[kind] = rules


# ---------------------------------------------------------------------------
# Line
# ---------------------------------------------------------------------------


@dataclass(eq=False, repr=False)
class Line:
    """A connector between two boxes, or between a box and the diagram edge."""

    kind: LineKind
    source: Box
    target: Box
    name: str
    source_anchor: Anchor | None = None
    target_anchor: Anchor | None = None
    clearances: dict[Side, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        side = self.rules.standoff(self)
        if side is not None:
            self.clear(side, EXTERNAL_STANDOFF)

    def __repr__(self) -> str:
        return (
            f"Line({self.kind.name}, {self.source.name!r} -> "
            f"{self.target.name!r}, {self.name!r})"
        )

    @property
    def rules(self) -> LineRules:
        return RULES[self.kind]

    @property
    def is_backward(self) -> bool:
        return self.kind.is_backward

    @property
    def dashed(self) -> bool:
        return self.rules.dashed

    @property
    def arrow(self) -> Arrow:
        return self.rules.arrow

    def attach(self) -> Line:
        """Register this line on the anchors it leaves and enters."""
        rules = self.rules
        if rules.source_side is not None:
            self.source_anchor = rules.source_side(self).attach(self)
        if rules.target_side is not None:
            self.target_anchor = rules.target_side(self).attach(self)
        return self

    # -- Geometry ----------------------------------------------------------

    @property
    def endpoints(self) -> tuple[float, float, float, float]:
        return self.rules.endpoints(self)

    @property
    def x1(self) -> float:
        return self.endpoints[0]

    @property
    def y1(self) -> float:
        return self.endpoints[1]

    @property
    def x2(self) -> float:
        return self.endpoints[2]

    @property
    def y2(self) -> float:
        return self.endpoints[3]

    @property
    def left_edge(self) -> float:
        return self.rules.extent(self)[0]

    @property
    def top_edge(self) -> float:
        return self.rules.extent(self)[1]

    @property
    def right_edge(self) -> float:
        return self.rules.extent(self)[2]

    @property
    def bottom_edge(self) -> float:
        return self.rules.extent(self)[3]

    @property
    def label(self) -> Label:
        return self.rules.label(self)

    @property
    def minimum_length(self) -> float:
        return MIN_LINE_RUN + text_width(self.name)

    def route(self) -> Waypoints:
        """Orthogonal waypoints from the source end to the arrowhead."""
        return self.rules.route(self)

    # -- Clearance ---------------------------------------------------------

    @property
    def sides_to_clear(self) -> list[Side]:
        return self.rules.sides_to_clear(self)

    def should_clear(self, side: Side) -> bool:
        return any(side is candidate for candidate in self.sides_to_clear)

    def clearance_group(self, side: Side) -> int:
        return self.rules.clearance_group(self, side)

    def clearance_precedence(self, side: Side) -> tuple:
        return self.rules.clearance_precedence(self, side)

    def anchor_precedence(self, side: Side) -> tuple:
        return self.rules.anchor_precedence(self, side)

    def clear(self, side: Side, distance: float) -> None:
        self.clearances[side] = distance

    def add_clearance_from(self, side: Side, distance: float) -> None:
        self.clear(side, self.clearance_from(side) + distance)

    def clearance_from(self, side: Side) -> float:
        return self.clearances.get(side, 0.0)

    # -- Diagram bounds ----------------------------------------------------

    def bounds(self, bounds: Bounds) -> None:
        self.rules.bounds(self, bounds)

    def avoid(self, others: list[Line], extension: BoundsExtension) -> None:
        self.rules.avoid(self, others, extension)

    def extend_bounds(self, extension: BoundsExtension) -> None:
        self.rules.extend_bounds(self, extension)
