"""Tests for boxes, anchor sequencing, clearance lanes and diagram layout."""

from pathlib import Path

import pytest

from idef0_svg.errors import LayoutInvariantError
from idef0_svg.layout import create_diagram
from idef0_svg.layout.boxes import Box, ProcessBox
from idef0_svg.layout.geometry import Point
from idef0_svg.layout.routing import LineKind
from idef0_svg.parser import Process, SideKind, parse_statements

FIXTURES = Path(__file__).parent / "fixtures"

FUNCTION = (
    "Function receives Input\n"
    "Function produces Output\n"
    "Function respects Control\n"
    "Function requires Mechanism\n"
)

PARENT = (
    "Parent is composed of Child1\n"
    "Parent is composed of Child2\n"
    "Child1 produces X\n"
    "Child2 receives X\n"
)


def _tree(text: str) -> Process:
    return Process.parse(parse_statements(text))


def _kinds(diagram) -> list[LineKind]:
    return [line.kind for line in diagram.lines]


# --- Boxes and sides ---


def test_process_box_minimum_size():
    box = ProcessBox("Function")
    assert box.width == 88  # 8 chars * 6 + 40
    assert box.height == 60


def test_process_box_grows_with_anchors():
    box = ProcessBox("A")
    for name in "VWXYZ":
        box.top.expects(name)
    for name in "PQRS":
        box.left.expects(name)
    assert box.width == 120  # 5 anchors * 20 + 20
    assert box.height == 100  # 4 anchors * 20 + 20


def test_bare_box_has_no_size():
    box = Box("Plain")
    assert (box.width, box.height) == (0, 0)
    assert [side.kind for side in box.sides] == [
        SideKind.TOP,
        SideKind.BOTTOM,
        SideKind.LEFT,
        SideKind.RIGHT,
    ]


def test_expects_returns_one_anchor_per_name():
    box = ProcessBox("A")
    first = box.left.expects("X")
    assert box.left.expects("X") is first
    assert box.left.anchor_count == 1
    assert box.left.expects_name("X")
    assert not box.left.expects_name("Y")
    assert first.sequence == 1
    assert not first.attached


def test_anchor_points_are_centred_on_the_side():
    box = ProcessBox("A")
    for name in "VWXYZ":
        box.top.expects(name)
    for name in "PQRS":
        box.left.expects(name)
    box.right.expects("O")
    box.bottom.expects("M")
    box.move_to(Point(10, 100))

    assert [box.top.anchor_point(n) for n in range(5)] == [
        Point(30, 100),
        Point(50, 100),
        Point(70, 100),
        Point(90, 100),
        Point(110, 100),
    ]
    assert [box.left.anchor_point(n).y for n in range(4)] == [120, 140, 160, 180]
    assert box.left.anchor_point(0).x == 10
    assert box.right.anchor_point(0) == Point(130, 150)
    assert box.bottom.anchor_point(0) == Point(70, 200)


def test_unattached_anchor_precedence_raises():
    box = ProcessBox("A")
    box.left.expects("X")
    with pytest.raises(LayoutInvariantError, match="Unattached anchor on A.left: X"):
        box.left.anchors[0].precedence()


def test_unattached_anchors_is_a_snapshot():
    box = ProcessBox("A")
    box.right.expects("X")
    snapshot = box.right.unattached_anchors()
    box.right.expects("Y")
    assert [anchor.name for anchor in snapshot] == ["X"]


def test_box_precedence_prefers_outputs():
    producer = ProcessBox("P")
    producer.right.expects("X")
    producer.right.expects("Y")
    consumer = ProcessBox("C")
    consumer.left.expects("X")
    assert producer.precedence == (-2, 0)
    assert consumer.precedence == (0, 1)


# --- Single box scenario ---


def test_function_schematic_has_one_anchor_per_side():
    diagram = _tree(FUNCTION).schematic()
    (box,) = diagram.boxes
    assert box.name == "Function"
    for side in box.sides:
        assert side.anchor_count == 1
    assert _kinds(diagram) == [
        LineKind.UNSATISFIED_INPUT,
        LineKind.UNSATISFIED_OUTPUT,
        LineKind.UNSATISFIED_GUIDANCE,
        LineKind.UNSATISFIED_MECHANISM,
    ]


def test_function_schematic_geometry():
    diagram = _tree(FUNCTION).schematic()
    (box,) = diagram.boxes
    source_input, output, guidance, mechanism = diagram.lines

    assert (box.x1, box.y1, box.x2, box.y2) == (120, 80, 208, 140)
    assert (diagram.width, diagram.height) == (334, 220)

    assert source_input.clearance_from(box.left) == 100
    assert (source_input.x1, source_input.y1) == (20, 110)
    assert output.clearance_from(box.right) == 106
    assert output.x2 == 314
    assert guidance.clearance_from(box.top) == 60
    assert (guidance.x1, guidance.y1) == (164, 20)
    assert mechanism.clearance_from(box.bottom) == 60
    assert mechanism.y1 == 200


def test_function_schematic_registers_names_on_diagram():
    diagram = _tree(FUNCTION).schematic()
    assert diagram.left.expects_name("Input")
    assert diagram.right.expects_name("Output")
    assert diagram.top.expects_name("Control")
    assert diagram.bottom.expects_name("Mechanism")


def test_function_labels_do_not_overlap():
    diagram = _tree(FUNCTION).schematic()
    labels = [line.label for line in diagram.lines]
    for i, a in enumerate(labels):
        for b in labels[i + 1:]:
            assert not a.overlapping(b)


# --- Two box scenario ---


def test_decompose_makes_one_forward_input_line():
    diagram = _tree(PARENT).decompose()
    assert [box.name for box in diagram.boxes] == ["Child1", "Child2"]
    (line,) = diagram.lines
    assert line.kind is LineKind.FORWARD_INPUT
    assert line.name == "X"
    assert line.source.name == "Child1"
    assert line.target.name == "Child2"
    assert diagram.unsatisfied_lines == []


def test_decompose_geometry():
    diagram = _tree(PARENT).decompose()
    child1, child2 = diagram.boxes
    (line,) = diagram.lines

    assert (child1.x1, child1.y1, child1.x2, child1.y2) == (20, 40, 96, 100)
    assert (child2.x1, child2.y1, child2.x2, child2.y2) == (136, 140, 212, 200)
    assert line.endpoints == (96, 70, 136, 170)
    assert line.route() == [(96, 70), (116, 70), (116, 170), (136, 170)]
    assert child1.right.margin == 40
    assert (diagram.width, diagram.height) == (232, 220)


def test_box_sequences_follow_final_order():
    diagram = _tree(PARENT).decompose()
    assert [box.sequence for box in diagram.boxes] == [0, 1]


def test_missing_producer_gives_unsatisfied_input():
    diagram = _tree("A receives X").schematic()
    (line,) = diagram.lines
    assert line.kind is LineKind.UNSATISFIED_INPUT
    assert line.dashed
    assert line.name == "X"


def test_decompose_of_leaf_falls_back_to_focus():
    root = _tree("A receives X")
    assert root.decompose().name == root.focus().name == "A"
    (box,) = root.decompose().boxes
    assert box.highlighted


def test_boundary_icoms_become_external_lines():
    root = _tree(
        "Parent receives Raw\n"
        "Parent produces Done\n"
        "Parent is composed of Worker\n"
        "Worker receives Raw\n"
        "Worker produces Done\n"
    )
    diagram = root.decompose()
    assert _kinds(diagram) == [LineKind.EXTERNAL_INPUT, LineKind.EXTERNAL_OUTPUT]
    assert not any(line.dashed for line in diagram.lines)


def test_focus_draws_only_the_target_box():
    root = _tree(PARENT)
    child = root.find("Child2")
    diagram = child.focus()
    assert diagram.name == "Parent"
    (box,) = diagram.boxes
    assert box.name == "Child2"
    assert box.highlighted
    assert _kinds(diagram) == [LineKind.UNSATISFIED_INPUT]


def test_schematic_uses_leaves_only():
    root = _tree(
        "Top is composed of Left\n"
        "Top is composed of Right\n"
        "Left is composed of Deep\n"
    )
    assert sorted(box.name for box in root.schematic().boxes) == ["Deep", "Right"]


# --- Sequencing and lanes ---


def test_sequencing_puts_chain_in_flow_order():
    root = _tree(
        "P is composed of C\n"
        "P is composed of B\n"
        "P is composed of A\n"
        "C receives Y\n"
        "B receives X\n"
        "B produces Y\n"
        "A produces X\n"
    )
    diagram = root.decompose()
    assert [box.name for box in diagram.boxes] == ["A", "B", "C"]
    assert not any(line.is_backward for line in diagram.lines)


def test_sequencing_keeps_greedy_choice_for_feedback():
    root = _tree((FIXTURES / "feedback_chain.idef0").read_text())
    diagram = root.decompose()
    assert [box.name for box in diagram.boxes] == ["Review", "Design", "Build"]
    backward = [line for line in diagram.lines if line.is_backward]
    assert [(line.kind, line.name) for line in backward] == [
        (LineKind.BACKWARD_INPUT, "Prototype")
    ]


def test_feedback_loops_stay_on_the_canvas():
    root = _tree((FIXTURES / "double_feedback.idef0").read_text())
    diagram = root.decompose()
    assert [box.name for box in diagram.boxes] == ["Draft", "Check"]
    backward = diagram.lines_of(LineKind.BACKWARD_INPUT)
    assert sorted(line.name for line in backward) == ["Corrections", "Rework"]
    assert all(line.target is diagram.boxes[0] for line in backward)

    for line in diagram.lines:
        for x, y in line.route():
            assert 0 <= x <= diagram.width
            assert 0 <= y <= diagram.height
        label = line.label
        assert 0 <= label.left_edge <= label.right_edge <= diagram.width
        assert 0 <= label.top_edge <= label.bottom_edge <= diagram.height


def test_backward_input_extent_covers_its_detour():
    root = _tree((FIXTURES / "double_feedback.idef0").read_text())
    diagram = root.decompose()
    draft, check = diagram.boxes
    for line in diagram.lines_of(LineKind.BACKWARD_INPUT):
        xs = [x for x, _ in line.route()]
        ys = [y for _, y in line.route()]
        assert line.left_edge == min(xs) < draft.x1
        assert line.right_edge == max(xs) > check.x2
        assert line.bottom_edge == max(ys) > check.y2


def test_forward_mechanism_between_siblings():
    root = _tree((FIXTURES / "mechanism_supply.idef0").read_text())
    diagram = root.decompose()
    assert [box.name for box in diagram.boxes] == ["Forge Tool", "Use Tool"]
    assert diagram.lines_of(LineKind.FORWARD_MECHANISM)[0].name == "Hammer"
    assert diagram.unsatisfied_lines == []


def test_anchor_sequencing_orders_boundary_outputs_by_name():
    diagram = _tree("A produces Zeta\nA produces Alpha\nA produces Mid\n").schematic()
    (box,) = diagram.boxes
    ranked = sorted(box.right.anchors, key=lambda anchor: anchor.sequence)
    assert [anchor.name for anchor in ranked] == ["Alpha", "Mid", "Zeta"]
    assert [anchor.sequence for anchor in ranked] == [0, 1, 2]
    ys = [anchor.y for anchor in ranked]
    assert ys == sorted(ys)


def test_parallel_lines_get_separate_lanes():
    root = _tree(
        "P is composed of A\n"
        "P is composed of B\n"
        "A produces X\n"
        "A produces Y\n"
        "B receives X\n"
        "B receives Y\n"
    )
    diagram = root.decompose()
    a, b = diagram.boxes
    x_line, y_line = diagram.lines
    assert (x_line.name, y_line.name) == ("X", "Y")
    assert y_line.clearance_from(a.right) == 20
    assert x_line.clearance_from(a.right) == 40
    assert a.right.margin == 60
    # X leaves above Y and enters above Y.
    assert x_line.y1 < y_line.y1
    assert x_line.y2 < y_line.y2


def test_empty_diagram_is_just_padding():
    diagram = create_diagram("Nothing", lambda d: None)
    assert diagram.boxes.is_empty()
    assert (diagram.width, diagram.height) == (20, 20)


def test_create_diagram_runs_populate():
    def populate(diagram):
        diagram.box("Solo").right.expects("Out")

    diagram = create_diagram("Manual", populate)
    assert diagram.box("Solo") is diagram.boxes[0]
    assert _kinds(diagram) == [LineKind.UNSATISFIED_OUTPUT]


def test_layout_is_deterministic():
    first = _tree(PARENT).decompose()
    second = _tree(PARENT).decompose()
    assert [(b.x1, b.y1) for b in first.boxes] == [(b.x1, b.y1) for b in second.boxes]
    assert [line.route() for line in first.lines] == [
        line.route() for line in second.lines
    ]
