"""Rules for lines between two process boxes.

Internal lines always leave from the source box's right side. They enter
the target's left (input), top (guidance) or bottom (mechanism) side.
Forward lines run from an earlier box to a later one; backward lines
loop back around the source box, including lines from a box to itself.

Each side-keyed rule checks its sides in a fixed order, so when source
and target are the same box the first matching side wins.
"""

from __future__ import annotations

from idef0_svg.layout.constants import LABEL_INSET, LABEL_OFFSET, LINE_HEIGHT
from idef0_svg.layout.labels import END, START, Label
from idef0_svg.layout.routing.common import (
    Arrow,
    Line,
    LineKind,
    LineRules,
    endpoint_extent,
    negated,
    no_clearance_group,
    no_clearance_precedence,
    register,
)
from idef0_svg.parser.model import SideKind


def _connector(kind: LineKind, entry: SideKind, forward: bool):
    """Build the ``connect`` rule for one internal kind.

    A line is made for every name on the source's right side that the
    target expects on its *entry* side.
    """

    def connect(source, target, ranks) -> list[Line]:
        if forward:
            if not ranks[source] < ranks[target]:
                return []
        elif not (ranks[source] > ranks[target] or source is target):
            return []

        entry_side = target.side(entry)
        return [
            Line(kind, source, target, anchor.name)
            for anchor in source.right.anchors
            if entry_side.expects_name(anchor.name)
        ]

    return connect


def _source_right(line: Line):
    return line.source.right


def _target_left(line: Line):
    return line.target.left


def _target_top(line: Line):
    return line.target.top


def _target_bottom(line: Line):
    return line.target.bottom


def _exit_x(line: Line) -> float:
    """x of the vertical run just right of the source box."""
    return line.x1 + line.clearance_from(line.source.right)


def _below_source_y(line: Line) -> float:
    return line.source.bottom_edge + line.clearance_from(line.source.bottom)


# ---------------------------------------------------------------------------
# Input: source right -> target left
# ---------------------------------------------------------------------------


def _forward_input_group(line: Line, side) -> int:
    if side is line.source.right:
        return 3
    if side is line.target.left:
        return 1
    return no_clearance_group(line, side)


def _forward_input_clearance(line: Line, side) -> tuple:
    if side is line.source.right:
        return (2, -line.target.sequence, 2, -line.target_anchor.sequence)
    return no_clearance_precedence(line, side)


def _input_anchor_precedence(line: Line, side) -> tuple:
    if side is line.target.left:
        return (-line.source.sequence,)
    return negated(line.clearance_precedence(side))


def _forward_input_route(line: Line):
    xv = _exit_x(line)
    return [(line.x1, line.y1), (xv, line.y1), (xv, line.y2), (line.x2, line.y2)]


register(
    LineKind.FORWARD_INPUT,
    LineRules(
        connect=_connector(LineKind.FORWARD_INPUT, SideKind.LEFT, forward=True),
        arrow=Arrow.RIGHT,
        route=_forward_input_route,
        source_side=_source_right,
        target_side=_target_left,
        sides_to_clear=lambda line: [line.source.right],
        clearance_group=_forward_input_group,
        clearance_precedence=_forward_input_clearance,
        anchor_precedence=_input_anchor_precedence,
    ),
)


def _backward_input_group(line: Line, side) -> int:
    if side is line.source.right:
        return 3
    if side is line.source.bottom:
        return 1
    if side is line.target.left:
        return 1
    return no_clearance_group(line, side)


def _backward_input_clearance(line: Line, side) -> tuple:
    if side is line.source.right:
        return (-line.target.sequence, -line.target_anchor.sequence)
    if side is line.source.bottom:
        return (-line.target.sequence, 2, -line.target_anchor.sequence)
    if side is line.target.left:
        return (1,)
    return no_clearance_precedence(line, side)


def _entry_x(line: Line) -> float:
    """x of the vertical run just left of the target box."""
    return line.x2 - line.clearance_from(line.target.left)


def _backward_input_extent(line: Line):
    left, top, right, bottom = endpoint_extent(line)
    return (
        min(left, _entry_x(line)),
        top,
        max(right, _exit_x(line)),
        max(bottom, _below_source_y(line)),
    )


def _backward_input_label(line: Line) -> Label:
    return Label(
        line.name,
        _entry_x(line) + LABEL_INSET,
        _below_source_y(line) - LABEL_OFFSET,
        START,
    )


def _backward_input_route(line: Line):
    rxv = _exit_x(line)
    lxv = _entry_x(line)
    yh = _below_source_y(line)
    return [
        (line.x1, line.y1),
        (rxv, line.y1),
        (rxv, yh),
        (lxv, yh),
        (lxv, line.y2),
        (line.x2, line.y2),
    ]


register(
    LineKind.BACKWARD_INPUT,
    LineRules(
        connect=_connector(LineKind.BACKWARD_INPUT, SideKind.LEFT, forward=False),
        arrow=Arrow.RIGHT,
        route=_backward_input_route,
        source_side=_source_right,
        target_side=_target_left,
        extent=_backward_input_extent,
        label=_backward_input_label,
        sides_to_clear=lambda line: [
            line.source.right,
            line.source.bottom,
            line.target.left,
        ],
        clearance_group=_backward_input_group,
        clearance_precedence=_backward_input_clearance,
        anchor_precedence=_input_anchor_precedence,
    ),
)


# ---------------------------------------------------------------------------
# Guidance: source right -> target top
# ---------------------------------------------------------------------------


def _forward_guidance_group(line: Line, side) -> int:
    if side is line.source.right:
        return 2
    if side is line.target.top:
        return 1
    return no_clearance_group(line, side)


def _forward_guidance_anchor(line: Line, side) -> tuple:
    if side is line.target.top:
        return (-line.source.sequence, -line.source_anchor.sequence)
    if side is line.source.right:
        return (-line.target.sequence, line.source_anchor.sequence)
    return line.clearance_precedence(side)


def _forward_guidance_route(line: Line):
    return [(line.x1, line.y1), (line.x2, line.y1), (line.x2, line.y2)]


register(
    LineKind.FORWARD_GUIDANCE,
    LineRules(
        connect=_connector(LineKind.FORWARD_GUIDANCE, SideKind.TOP, forward=True),
        arrow=Arrow.DOWN,
        route=_forward_guidance_route,
        source_side=_source_right,
        target_side=_target_top,
        clearance_group=_forward_guidance_group,
        anchor_precedence=_forward_guidance_anchor,
    ),
)


def _above_target_y(line: Line) -> float:
    return line.y2 - line.clearance_from(line.target.top)


def _backward_guidance_extent(line: Line):
    left, _, _, bottom = endpoint_extent(line)
    return left, _above_target_y(line), _exit_x(line), bottom


def _backward_guidance_group(line: Line, side) -> int:
    if side is line.source.right:
        return 1
    if side is line.target.top:
        return 3
    return no_clearance_group(line, side)


def _backward_guidance_clearance(line: Line, side) -> tuple:
    if side is line.source.right:
        return (1, -line.target.sequence, line.source_anchor.sequence)
    if side is line.target.top:
        return (1, line.source.sequence, -line.target_anchor.sequence)
    return no_clearance_precedence(line, side)


def _backward_guidance_anchor(line: Line, side) -> tuple:
    if side is line.target.top:
        return negated(line.clearance_precedence(side))
    return line.clearance_precedence(side)


def _backward_guidance_label(line: Line) -> Label:
    return Label(
        line.name,
        _exit_x(line) - LABEL_INSET,
        _above_target_y(line) - LABEL_OFFSET + LINE_HEIGHT,
        END,
    )


def _backward_guidance_route(line: Line):
    xv = _exit_x(line)
    yh = _above_target_y(line)
    return [
        (line.x1, line.y1),
        (xv, line.y1),
        (xv, yh),
        (line.x2, yh),
        (line.x2, line.y2),
    ]


register(
    LineKind.BACKWARD_GUIDANCE,
    LineRules(
        connect=_connector(LineKind.BACKWARD_GUIDANCE, SideKind.TOP, forward=False),
        arrow=Arrow.DOWN,
        route=_backward_guidance_route,
        source_side=_source_right,
        target_side=_target_top,
        extent=_backward_guidance_extent,
        label=_backward_guidance_label,
        sides_to_clear=lambda line: [line.target.top, line.source.right],
        clearance_group=_backward_guidance_group,
        clearance_precedence=_backward_guidance_clearance,
        anchor_precedence=_backward_guidance_anchor,
    ),
)


# ---------------------------------------------------------------------------
# Mechanism: source right -> target bottom
# ---------------------------------------------------------------------------


def _below_target_y(line: Line) -> float:
    return line.y2 + line.clearance_from(line.target.bottom)


def _forward_mechanism_extent(line: Line):
    left, top, right, _ = endpoint_extent(line)
    return left, top, right, _below_target_y(line)


def _forward_mechanism_group(line: Line, side) -> int:
    if side is line.source.right:
        return 3
    if side is line.target.bottom:
        return 1
    return no_clearance_group(line, side)


def _forward_mechanism_clearance(line: Line, side) -> tuple:
    if side is line.source.right:
        return (2, -line.target.sequence, 1, -line.target_anchor.sequence)
    if side is line.target.bottom:
        return (-line.source.sequence, 1, line.target_anchor.sequence)
    return no_clearance_precedence(line, side)


def _forward_mechanism_anchor(line: Line, side) -> tuple:
    if side is line.source.right:
        return negated(line.clearance_precedence(side))
    return line.clearance_precedence(side)


def _forward_mechanism_label(line: Line) -> Label:
    return Label(
        line.name,
        _exit_x(line) + LABEL_INSET,
        _below_target_y(line) - LABEL_OFFSET,
        START,
    )


def _forward_mechanism_route(line: Line):
    xv = _exit_x(line)
    yh = _below_target_y(line)
    return [
        (line.x1, line.y1),
        (xv, line.y1),
        (xv, yh),
        (line.x2, yh),
        (line.x2, line.y2),
    ]


register(
    LineKind.FORWARD_MECHANISM,
    LineRules(
        connect=_connector(LineKind.FORWARD_MECHANISM, SideKind.BOTTOM, forward=True),
        arrow=Arrow.UP,
        route=_forward_mechanism_route,
        source_side=_source_right,
        target_side=_target_bottom,
        extent=_forward_mechanism_extent,
        label=_forward_mechanism_label,
        sides_to_clear=lambda line: [line.source.right, line.target.bottom],
        clearance_group=_forward_mechanism_group,
        clearance_precedence=_forward_mechanism_clearance,
        anchor_precedence=_forward_mechanism_anchor,
    ),
)


def _backward_mechanism_extent(line: Line):
    left, top, _, _ = endpoint_extent(line)
    return left, top, _exit_x(line), _below_source_y(line)


def _backward_mechanism_group(line: Line, side) -> int:
    if side is line.source.right:
        return 3
    if side is line.target.bottom:
        return 3
    if side is line.source.bottom:
        return 1
    return no_clearance_group(line, side)


def _backward_mechanism_clearance(line: Line, side) -> tuple:
    if side is line.source.right:
        return (-line.target.sequence, -line.target_anchor.sequence)
    if side is line.source.bottom:
        return (-line.target.sequence, 2, -line.target_anchor.sequence)
    return no_clearance_precedence(line, side)


def _backward_mechanism_anchor(line: Line, side) -> tuple:
    if side is line.target.bottom:
        return (-line.source.sequence,)
    return line.clearance_precedence(side)


def _backward_mechanism_label(line: Line) -> Label:
    return Label(
        line.name,
        _exit_x(line) - LABEL_INSET,
        _below_source_y(line) - LABEL_OFFSET,
        END,
    )


def _backward_mechanism_route(line: Line):
    xv = _exit_x(line)
    yh = _below_source_y(line)
    return [
        (line.x1, line.y1),
        (xv, line.y1),
        (xv, yh),
        (line.x2, yh),
        (line.x2, line.y2),
    ]


register(
    LineKind.BACKWARD_MECHANISM,
    LineRules(
        connect=_connector(
            LineKind.BACKWARD_MECHANISM, SideKind.BOTTOM, forward=False
        ),
        arrow=Arrow.UP,
        route=_backward_mechanism_route,
        source_side=_source_right,
        target_side=_target_bottom,
        extent=_backward_mechanism_extent,
        label=_backward_mechanism_label,
        sides_to_clear=lambda line: [line.source.right, line.source.bottom],
        clearance_group=_backward_mechanism_group,
        clearance_precedence=_backward_mechanism_clearance,
        anchor_precedence=_backward_mechanism_anchor,
    ),
)
