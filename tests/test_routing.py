"""Tests for line kinds, connect rules, clearance rules and routes."""

import pytest

from idef0_svg.errors import LayoutInvariantError
from idef0_svg.layout.boxes import ProcessBox
from idef0_svg.layout.engine import Diagram
from idef0_svg.layout.geometry import Point
from idef0_svg.layout.ordering import count_backward, internal_lines
from idef0_svg.layout.routing import (
    EXTERNAL_KINDS,
    INTERNAL_KINDS,
    RULES,
    UNSATISFIED_KINDS,
    Arrow,
    Line,
    LineKind,
)
from idef0_svg.layout.routing.common import negated
from idef0_svg.ordered_set import OrderedSet


def _pair(entry: str = "left"):
    """Box A producing X, box B expecting X on *entry*."""
    a = ProcessBox("A")
    a.right.expects("X")
    b = ProcessBox("B")
    getattr(b, entry).expects("X")
    return a, b


def _sequence(*boxes):
    """Rank attached anchors so single anchors sit at their side's centre."""
    for box in boxes:
        box.sequence_anchors()


# --- Kinds ---


def test_every_kind_has_rules():
    assert set(RULES) == set(LineKind)
    assert len(RULES) == 14
    assert len(INTERNAL_KINDS + EXTERNAL_KINDS + UNSATISFIED_KINDS) == 14


def test_kind_properties():
    assert LineKind.BACKWARD_GUIDANCE.is_backward
    assert not LineKind.FORWARD_GUIDANCE.is_backward
    assert LineKind.UNSATISFIED_OUTPUT.is_unsatisfied
    assert not LineKind.EXTERNAL_OUTPUT.is_unsatisfied
    assert LineKind.FORWARD_MECHANISM.icom == "mechanism"
    assert LineKind.UNSATISFIED_INPUT.icom == "input"


def test_only_unsatisfied_lines_are_dashed():
    for kind in LineKind:
        assert RULES[kind].dashed == kind.is_unsatisfied


def test_arrow_directions():
    assert RULES[LineKind.FORWARD_INPUT].arrow is Arrow.RIGHT
    assert RULES[LineKind.BACKWARD_GUIDANCE].arrow is Arrow.DOWN
    assert RULES[LineKind.EXTERNAL_MECHANISM].arrow is Arrow.UP
    assert RULES[LineKind.UNSATISFIED_OUTPUT].arrow is Arrow.RIGHT


def test_negated_leaves_names_alone():
    assert negated((2, -1, "X", 0)) == (-2, 1, "X", 0)


# --- Connect rules ---


def test_forward_input_needs_source_before_target():
    a, b = _pair()
    connect = RULES[LineKind.FORWARD_INPUT].connect
    (line,) = connect(a, b, {a: 0, b: 1})
    assert (line.source, line.target, line.name) == (a, b, "X")
    assert connect(a, b, {a: 1, b: 0}) == []


def test_backward_input_needs_source_after_target():
    a, b = _pair()
    connect = RULES[LineKind.BACKWARD_INPUT].connect
    assert connect(a, b, {a: 0, b: 1}) == []
    (line,) = connect(a, b, {a: 1, b: 0})
    assert line.kind is LineKind.BACKWARD_INPUT


def test_self_loop_is_backward():
    a = ProcessBox("A")
    a.right.expects("X")
    a.left.expects("X")
    ranks = {a: 0}
    assert RULES[LineKind.FORWARD_INPUT].connect(a, a, ranks) == []
    (line,) = RULES[LineKind.BACKWARD_INPUT].connect(a, a, ranks)
    assert line.is_backward


def test_connect_matches_entry_side():
    a, b = _pair("top")
    ranks = {a: 0, b: 1}
    assert RULES[LineKind.FORWARD_INPUT].connect(a, b, ranks) == []
    assert len(RULES[LineKind.FORWARD_GUIDANCE].connect(a, b, ranks)) == 1
    assert RULES[LineKind.FORWARD_MECHANISM].connect(a, b, ranks) == []


def test_internal_lines_and_backward_count():
    a, b = _pair()
    boxes = OrderedSet([b, a])
    lines = internal_lines(boxes, boxes.ranks())
    assert [line.kind for line in lines] == [LineKind.BACKWARD_INPUT]
    assert count_backward(lines) == 1

    boxes = OrderedSet([a, b])
    assert count_backward(internal_lines(boxes, boxes.ranks())) == 0


def test_external_connector_matches_diagram_names():
    diagram = Diagram("D")
    box = diagram.box("A")
    box.left.expects("X")
    box.left.expects("Y")
    diagram.left.expects("X")
    (line,) = RULES[LineKind.EXTERNAL_INPUT].connect(diagram, box, None)
    assert (line.source, line.target, line.name) == (diagram, box, "X")


def test_unsatisfied_connector_registers_name_on_diagram():
    diagram = Diagram("D")
    box = diagram.box("A")
    box.right.expects("Out")
    (line,) = RULES[LineKind.UNSATISFIED_OUTPUT].connect(diagram, box, None)
    assert (line.source, line.target) == (box, diagram)
    assert line.dashed
    assert diagram.right.expects_name("Out")


def test_unsatisfied_connector_skips_attached_anchors():
    diagram = Diagram("D")
    box = diagram.box("A")
    box.left.expects("X")
    diagram.left.expects("X")
    (line,) = RULES[LineKind.EXTERNAL_INPUT].connect(diagram, box, None)
    line.attach()
    assert RULES[LineKind.UNSATISFIED_INPUT].connect(diagram, box, None) == []


# --- Attachment and clearance ---


def test_attach_registers_line_on_both_anchors():
    a, b = _pair()
    line = Line(LineKind.FORWARD_INPUT, a, b, "X").attach()
    assert line.source_anchor is a.right.anchors[0]
    assert line.target_anchor is b.left.anchors[0]
    assert line in line.source_anchor.lines
    assert line in line.target_anchor.lines


def test_boundary_lines_start_with_standoff():
    diagram = Diagram("D")
    box = diagram.box("A")
    line = Line(LineKind.EXTERNAL_INPUT, diagram, box, "X")
    assert line.clearance_from(box.left) == 20
    assert line.clearance_from(box.right) == 0


def test_add_clearance_accumulates():
    a, b = _pair()
    line = Line(LineKind.FORWARD_INPUT, a, b, "X")
    line.clear(a.right, 20)
    line.add_clearance_from(a.right, 15)
    assert line.clearance_from(a.right) == 35


def test_should_clear_uses_side_identity():
    a, b = _pair()
    line = Line(LineKind.BACKWARD_INPUT, a, b, "X")
    assert line.should_clear(a.right)
    assert line.should_clear(a.bottom)
    assert line.should_clear(b.left)
    assert not line.should_clear(b.right)


def test_missing_clearance_group_raises():
    a, b = _pair("top")
    line = Line(LineKind.FORWARD_GUIDANCE, a, b, "X")
    with pytest.raises(
        LayoutInvariantError,
        match="FORWARD_GUIDANCE: No clearance group specified for A.left",
    ):
        line.clearance_group(a.left)


def test_missing_clearance_precedence_raises():
    a, b = _pair("top")
    line = Line(LineKind.FORWARD_GUIDANCE, a, b, "X")
    with pytest.raises(LayoutInvariantError, match="No clearance precedence"):
        line.clearance_precedence(a.right)


def test_forward_input_precedences():
    a, b = _pair()
    line = Line(LineKind.FORWARD_INPUT, a, b, "X").attach()
    b.sequence = 1
    assert line.clearance_group(a.right) == 3
    assert line.clearance_group(b.left) == 1
    assert line.clearance_precedence(a.right) == (2, -1, 2, -1)
    assert line.anchor_precedence(a.right) == (-2, 1, -2, 1)
    assert line.anchor_precedence(b.left) == (0,)


def test_attached_anchor_precedence_includes_group_and_name():
    a, b = _pair()
    Line(LineKind.FORWARD_INPUT, a, b, "X").attach()
    a.sequence = 3
    assert b.left.anchors[0].precedence() == (1, -3, "X")


def test_minimum_length_covers_the_label():
    a, b = _pair()
    assert Line(LineKind.FORWARD_INPUT, a, b, "Blueprint").minimum_length == 64


def test_repr_names_kind_and_ends():
    a, b = _pair()
    assert repr(Line(LineKind.FORWARD_INPUT, a, b, "X")) == (
        "Line(FORWARD_INPUT, 'A' -> 'B', 'X')"
    )


# --- Routes ---


def test_forward_input_route():
    a, b = _pair()
    b.move_to(Point(100, 100))
    line = Line(LineKind.FORWARD_INPUT, a, b, "X").attach()
    _sequence(a, b)
    line.clear(a.right, 20)
    assert line.endpoints == (46, 30, 100, 130)
    assert line.route() == [(46, 30), (66, 30), (66, 130), (100, 130)]


def test_forward_guidance_route():
    a, b = _pair("top")
    b.move_to(Point(100, 100))
    line = Line(LineKind.FORWARD_GUIDANCE, a, b, "X").attach()
    _sequence(a, b)
    assert line.route() == [(46, 30), (123, 30), (123, 100)]


def test_backward_input_loops_under_the_source():
    target = ProcessBox("A")
    target.left.expects("X")
    source = ProcessBox("B", Point(100, 100))
    source.right.expects("X")
    line = Line(LineKind.BACKWARD_INPUT, source, target, "X").attach()
    _sequence(source, target)
    for side in line.sides_to_clear:
        line.clear(side, 20)

    assert line.route() == [
        (146, 130),
        (166, 130),
        (166, 180),
        (-20, 180),
        (-20, 30),
        (0, 30),
    ]
    assert line.label.x == -10
    assert line.label.y == 175


def test_external_input_route_is_straight():
    diagram = Diagram("D")
    box = diagram.box("A")
    box.left.expects("X")
    diagram.left.expects("X")
    (line,) = RULES[LineKind.EXTERNAL_INPUT].connect(diagram, box, None)
    line.attach()
    _sequence(box)
    box.move_to(Point(100, 0))
    assert line.route() == [(80, 30), (100, 30)]
    assert line.label.x == 85
