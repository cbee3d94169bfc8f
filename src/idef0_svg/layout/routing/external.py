"""Rules for lines between a process box and the diagram boundary.

External lines carry an ICOM that the diagram itself declares. Unsatisfied
lines carry one nothing in the diagram provides or consumes; they look the
same but are dashed, and they add the missing name to the diagram's side.

Boundary lines start 20 units off their box. During layout their free end
is pushed past the diagram bounds, then their labels are slid clear of
every other label.
"""

from __future__ import annotations

from dataclasses import replace

from idef0_svg.layout.constants import (
    AVOID_STEP,
    BOUNDS_OVERSHOOT,
    LABEL_OFFSET,
    TERMINAL_LABEL_GAP,
)
from idef0_svg.layout.labels import END, MIDDLE, START, Label
from idef0_svg.layout.routing.common import (
    Arrow,
    Line,
    LineKind,
    LineRules,
    register,
)
from idef0_svg.parser.model import SideKind


def _label_blocked(line: Line, others: list[Line]) -> bool:
    label = line.label
    return any(label.overlapping(other.label) for other in others)


def _boundary_anchor_precedence(line: Line, side) -> tuple:
    return ()


def _boundary_group(line: Line, side) -> int:
    return 2


# ---------------------------------------------------------------------------
# Connectors
# ---------------------------------------------------------------------------


def _external_connector(kind: LineKind, side_kind: SideKind, outgoing: bool):
    """Lines for names both the diagram and the box declare on *side_kind*."""

    def connect(diagram, box, ranks=None) -> list[Line]:
        box_side = box.side(side_kind)
        if outgoing:
            diagram_side = diagram.side(side_kind)
            return [
                Line(kind, box, diagram, anchor.name)
                for anchor in box_side.anchors
                if diagram_side.expects_name(anchor.name)
            ]
        return [
            Line(kind, diagram, box, anchor.name)
            for anchor in diagram.side(side_kind).anchors
            if box_side.expects_name(anchor.name)
        ]

    return connect


def _unsatisfied_connector(kind: LineKind, side_kind: SideKind, outgoing: bool):
    """Lines for every name the box still has no line for on *side_kind*."""

    def connect(diagram, box, ranks=None) -> list[Line]:
        lines = []
        for anchor in box.side(side_kind).unattached_anchors():
            diagram.side(side_kind).expects(anchor.name)
            if outgoing:
                lines.append(Line(kind, box, diagram, anchor.name))
            else:
                lines.append(Line(kind, diagram, box, anchor.name))
        return lines

    return connect


# ---------------------------------------------------------------------------
# Input: diagram left -> box left
# ---------------------------------------------------------------------------


def _input_side(line: Line):
    return line.target.left


def _input_endpoints(line: Line):
    ta = line.target_anchor
    x2, y = ta.x, ta.y
    return x2 - line.clearance_from(line.target.left), y, x2, y


def _input_label(line: Line) -> Label:
    return Label(line.name, line.x1 + LABEL_OFFSET, line.y1 - LABEL_OFFSET, START)


def _input_bounds(line: Line, bounds) -> None:
    line.add_clearance_from(line.target.left, line.x1 - bounds.x1 + BOUNDS_OVERSHOOT)


def _input_avoid(line: Line, others: list[Line], extension) -> None:
    extension.west = line.minimum_length


def _input_extend(line: Line, extension) -> None:
    line.add_clearance_from(line.target.left, extension.west)


def _straight_route(line: Line):
    return [(line.x1, line.y1), (line.x2, line.y2)]


EXTERNAL_INPUT_RULES = LineRules(
    connect=_external_connector(LineKind.EXTERNAL_INPUT, SideKind.LEFT, False),
    arrow=Arrow.RIGHT,
    route=_straight_route,
    target_side=_input_side,
    endpoints=_input_endpoints,
    label=_input_label,
    clearance_group=_boundary_group,
    anchor_precedence=_boundary_anchor_precedence,
    standoff=_input_side,
    bounds=_input_bounds,
    avoid=_input_avoid,
    extend_bounds=_input_extend,
)


# ---------------------------------------------------------------------------
# Output: box right -> diagram right
# ---------------------------------------------------------------------------


def _output_side(line: Line):
    return line.source.right


def _output_endpoints(line: Line):
    sa = line.source_anchor
    x1, y = sa.x, sa.y
    return x1, y, x1 + line.clearance_from(line.source.right), y


def _output_label(line: Line) -> Label:
    return Label(line.name, line.x2 - LABEL_OFFSET, line.y2 - LABEL_OFFSET, END)


def _output_bounds(line: Line, bounds) -> None:
    line.add_clearance_from(line.source.right, bounds.x2 - line.x2 + BOUNDS_OVERSHOOT)


def _output_avoid(line: Line, others: list[Line], extension) -> None:
    # Probe outward until the label is clear, then put the line back and
    # let the shared extension grow every output by the same amount.
    claim = 0.0
    while _label_blocked(line, others):
        claim += AVOID_STEP
        line.add_clearance_from(line.source.right, AVOID_STEP)
    line.add_clearance_from(line.source.right, -claim)
    extension.east = max(line.minimum_length, claim)


def _output_extend(line: Line, extension) -> None:
    line.add_clearance_from(line.source.right, extension.east)


EXTERNAL_OUTPUT_RULES = LineRules(
    connect=_external_connector(LineKind.EXTERNAL_OUTPUT, SideKind.RIGHT, True),
    arrow=Arrow.RIGHT,
    route=_straight_route,
    source_side=_output_side,
    endpoints=_output_endpoints,
    label=_output_label,
    clearance_group=_boundary_group,
    anchor_precedence=_boundary_anchor_precedence,
    standoff=_output_side,
    bounds=_output_bounds,
    avoid=_output_avoid,
    extend_bounds=_output_extend,
)


# ---------------------------------------------------------------------------
# Guidance: diagram top -> box top
# ---------------------------------------------------------------------------


def _label_width_extent(line: Line):
    x1, y1, x2, y2 = line.endpoints
    label = line.label
    return label.left_edge, min(y1, y2), label.right_edge, max(y1, y2)


def _guidance_side(line: Line):
    return line.target.top


def _guidance_endpoints(line: Line):
    ta = line.target_anchor
    x, y2 = ta.x, ta.y
    return x, y2 - line.clearance_from(line.target.top), x, y2


def _guidance_label(line: Line) -> Label:
    return Label(
        line.name,
        line.x1,
        line.y1 + TERMINAL_LABEL_GAP - LABEL_OFFSET,
        MIDDLE,
    )


def _guidance_bounds(line: Line, bounds) -> None:
    line.add_clearance_from(line.target.top, line.y1 - bounds.y1 + BOUNDS_OVERSHOOT)


def _guidance_avoid(line: Line, others: list[Line], extension) -> None:
    claim = 0.0
    while _label_blocked(line, others):
        claim += AVOID_STEP
        line.add_clearance_from(line.target.top, -AVOID_STEP)
    extension.north = claim


def _guidance_extend(line: Line, extension) -> None:
    line.add_clearance_from(line.target.top, extension.north)


def _guidance_route(line: Line):
    return [(line.x1, line.y1 + TERMINAL_LABEL_GAP), (line.x2, line.y2)]


EXTERNAL_GUIDANCE_RULES = LineRules(
    connect=_external_connector(LineKind.EXTERNAL_GUIDANCE, SideKind.TOP, False),
    arrow=Arrow.DOWN,
    route=_guidance_route,
    target_side=_guidance_side,
    endpoints=_guidance_endpoints,
    extent=_label_width_extent,
    label=_guidance_label,
    clearance_group=_boundary_group,
    anchor_precedence=_boundary_anchor_precedence,
    standoff=_guidance_side,
    bounds=_guidance_bounds,
    avoid=_guidance_avoid,
    extend_bounds=_guidance_extend,
)


# ---------------------------------------------------------------------------
# Mechanism: diagram bottom -> box bottom
# ---------------------------------------------------------------------------


def _mechanism_side(line: Line):
    return line.target.bottom


def _mechanism_endpoints(line: Line):
    ta = line.target_anchor
    x, y2 = ta.x, ta.y
    return x, y2 + line.clearance_from(line.target.bottom), x, y2


def _mechanism_label(line: Line) -> Label:
    return Label(line.name, line.x1, line.y1 - LABEL_OFFSET, MIDDLE)


def _mechanism_bounds(line: Line, bounds) -> None:
    line.add_clearance_from(
        line.target.bottom, bounds.y2 - line.y1 + BOUNDS_OVERSHOOT
    )


def _mechanism_avoid(line: Line, others: list[Line], extension) -> None:
    claim = 0.0
    while _label_blocked(line, others):
        claim += AVOID_STEP
        line.add_clearance_from(line.target.bottom, -AVOID_STEP)
    extension.south = claim


def _mechanism_extend(line: Line, extension) -> None:
    line.add_clearance_from(line.target.bottom, extension.south)


def _mechanism_route(line: Line):
    return [(line.x1, line.y1 - TERMINAL_LABEL_GAP), (line.x2, line.y2)]


EXTERNAL_MECHANISM_RULES = LineRules(
    connect=_external_connector(LineKind.EXTERNAL_MECHANISM, SideKind.BOTTOM, False),
    arrow=Arrow.UP,
    route=_mechanism_route,
    target_side=_mechanism_side,
    endpoints=_mechanism_endpoints,
    extent=_label_width_extent,
    label=_mechanism_label,
    clearance_group=_boundary_group,
    anchor_precedence=_boundary_anchor_precedence,
    standoff=_mechanism_side,
    bounds=_mechanism_bounds,
    avoid=_mechanism_avoid,
    extend_bounds=_mechanism_extend,
)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

register(LineKind.EXTERNAL_INPUT, EXTERNAL_INPUT_RULES)
register(LineKind.EXTERNAL_OUTPUT, EXTERNAL_OUTPUT_RULES)
register(LineKind.EXTERNAL_GUIDANCE, EXTERNAL_GUIDANCE_RULES)
register(LineKind.EXTERNAL_MECHANISM, EXTERNAL_MECHANISM_RULES)

register(
    LineKind.UNSATISFIED_INPUT,
    replace(
        EXTERNAL_INPUT_RULES,
        connect=_unsatisfied_connector(LineKind.UNSATISFIED_INPUT, SideKind.LEFT, False),
        dashed=True,
    ),
)
register(
    LineKind.UNSATISFIED_OUTPUT,
    replace(
        EXTERNAL_OUTPUT_RULES,
        connect=_unsatisfied_connector(LineKind.UNSATISFIED_OUTPUT, SideKind.RIGHT, True),
        dashed=True,
    ),
)
register(
    LineKind.UNSATISFIED_GUIDANCE,
    replace(
        EXTERNAL_GUIDANCE_RULES,
        connect=_unsatisfied_connector(
            LineKind.UNSATISFIED_GUIDANCE, SideKind.TOP, False
        ),
        dashed=True,
    ),
)
register(
    LineKind.UNSATISFIED_MECHANISM,
    replace(
        EXTERNAL_MECHANISM_RULES,
        connect=_unsatisfied_connector(
            LineKind.UNSATISFIED_MECHANISM, SideKind.BOTTOM, False
        ),
        dashed=True,
    ),
)
