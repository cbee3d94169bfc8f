"""Points, rectangles and the bounds accumulator used by the layout pass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def translate(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle snapshot of the laid-out drawing."""

    x1: float
    y1: float
    x2: float
    y2: float


class BoundsExtension:
    """How far the drawing must grow in each compass direction.

    Every assignment keeps the larger of the current and new value, so
    lines can report their needs in any order.
    """

    def __init__(self) -> None:
        self._north = 0.0
        self._south = 0.0
        self._east = 0.0
        self._west = 0.0

    def __repr__(self) -> str:
        return (
            f"BoundsExtension(north={self._north}, south={self._south}, "
            f"east={self._east}, west={self._west})"
        )

    @property
    def north(self) -> float:
        return self._north

    @north.setter
    def north(self, value: float) -> None:
        self._north = max(self._north, value)

    @property
    def south(self) -> float:
        return self._south

    @south.setter
    def south(self, value: float) -> None:
        self._south = max(self._south, value)

    @property
    def east(self) -> float:
        return self._east

    @east.setter
    def east(self, value: float) -> None:
        self._east = max(self._east, value)

    @property
    def west(self) -> float:
        return self._west

    @west.setter
    def west(self, value: float) -> None:
        self._west = max(self._west, value)
