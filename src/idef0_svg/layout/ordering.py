"""Box sequencing: order process boxes to keep feedback lines rare.

Boxes are drawn along a diagonal in sequence order, so every line whose
source comes after its target has to loop back around the drawing. The
search below inserts boxes one at a time at whichever position yields the
fewest such backward lines.
"""

from __future__ import annotations

__all__ = ["count_backward", "internal_lines", "sequence_boxes"]

import logging
from collections.abc import Iterable

from idef0_svg.layout.boxes import ProcessBox
from idef0_svg.layout.routing import INTERNAL_KINDS, RULES, Line
from idef0_svg.ordered_set import OrderedSet

logger = logging.getLogger(__name__)


def internal_lines(
    boxes: OrderedSet[ProcessBox],
    ranks: dict[ProcessBox, int],
) -> OrderedSet[Line]:
    """Build every box-to-box line for one candidate ordering.

    Args:
        boxes: The candidate ordering.
        ranks: Position of each box in *boxes*, used to tell forward from
            backward lines.

    The lines are created but not attached to any anchor.
    """
    lines: OrderedSet[Line] = OrderedSet()
    for target in boxes:
        for source in boxes:
            for kind in INTERNAL_KINDS:
                for line in RULES[kind].connect(source, target, ranks):
                    lines.add(line)
    return lines


def count_backward(lines: Iterable[Line]) -> int:
    return sum(1 for line in lines if line.is_backward)


def sequence_boxes(
    boxes: OrderedSet[ProcessBox],
) -> tuple[OrderedSet[ProcessBox], OrderedSet[Line]]:
    """Greedy insertion search for a low-feedback box order.

    Boxes are taken in seed order (most outputs first, then fewest other
    ICOMs). Each one is tried at every position of the order built so far
    and kept at the first position with the fewest backward lines. The
    search for a box stops early once it matches the best count seen for
    any earlier box.

    Returns the chosen ordering and its internal lines.
    """
    ordered: OrderedSet[ProcessBox] = OrderedSet()
    lines: OrderedSet[Line] = OrderedSet()
    overall = 0

    for box in boxes.sort_by(lambda b: b.precedence):
        best: int | None = None
        chosen = ordered

        for index in range(len(ordered) + 1):
            candidate = ordered.insert(index, box)
            candidate_lines = internal_lines(candidate, candidate.ranks())
            backward = count_backward(candidate_lines)

            if best is None or backward < best:
                best = backward
                chosen = candidate
                lines = candidate_lines
                if best == overall:
                    break
                overall = best

        logger.debug(
            "Placed %r at position %d (%d backward lines)",
            box.name,
            chosen.ranks()[box],
            best,
        )
        ordered = chosen

    return ordered, lines
