"""Process composition model built from parsed statements."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import networkx as nx

from idef0_svg.errors import CompositionError, DependencyError
from idef0_svg.ordered_set import OrderedSet
from idef0_svg.parser.statements import COMPOSITION, Statement

if TYPE_CHECKING:
    from idef0_svg.layout.boxes import Box
    from idef0_svg.layout.engine import Diagram


class SideKind(Enum):
    """Edge of a box where an ICOM attaches."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


PREDICATE_SIDES: dict[str, SideKind] = {
    "receives": SideKind.LEFT,
    "produces": SideKind.RIGHT,
    "respects": SideKind.TOP,
    "requires": SideKind.BOTTOM,
}

ROOT_NAME = "__root__"
"""Name of the synthetic process wrapping several top-level processes."""


@dataclass(eq=False)
class Process:
    """A named activity, its ICOM dependencies and its sub-processes."""

    name: str
    parent: Process | None = field(default=None, repr=False)
    children: OrderedSet[Process] = field(default_factory=OrderedSet, repr=False)
    dependencies: dict[SideKind, OrderedSet[str]] = field(
        default_factory=dict, repr=False
    )

    @classmethod
    def parse(cls, statements: list[Statement]) -> Process:
        """Build the process tree described by *statements*.

        Processes are created on first mention. If more than one process
        is left without a parent, they are wrapped in a synthetic root.
        """
        processes: dict[str, Process] = {}
        composition = nx.DiGraph()

        def get_or_create(name: str) -> Process:
            if name not in processes:
                processes[name] = cls(name)
                composition.add_node(name)
            return processes[name]

        for statement in statements:
            process = get_or_create(statement.subject)

            if statement.predicate == COMPOSITION:
                child = get_or_create(statement.object)
                _check_composition(composition, process, child, statement)
                composition.add_edge(process.name, child.name)
                process.add_child(child)
                continue

            side = PREDICATE_SIDES.get(statement.predicate)
            if side is None:
                raise DependencyError(
                    f"Unknown dependency {statement.predicate!r} "
                    f"({statement.describe()})"
                )
            process.add_dependency(side, statement.object)

        roots = [p for p in processes.values() if p.is_root()]
        if len(roots) == 1:
            return roots[0]
        return cls.with_children(ROOT_NAME, roots)

    @classmethod
    def with_children(cls, name: str, children: list[Process]) -> Process:
        process = cls(name)
        for child in children:
            process.add_child(child)
        return process

    def find(self, name: str) -> Process | None:
        """Return the process called exactly *name* in this subtree."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def is_root(self) -> bool:
        return self.parent is None

    def is_leaf(self) -> bool:
        return self.children.is_empty()

    def is_decomposable(self) -> bool:
        return not self.children.is_empty()

    def add_child(self, other: Process) -> None:
        if other is self or other.ancestor_of(self):
            raise CompositionError(
                f"Cyclic composition: {self.name!r} cannot contain {other.name!r}"
            )
        if not other.is_root():
            raise CompositionError(
                f"{other.name!r} is already a child of {other.parent.name!r}"
            )
        self.children.add(other)
        other.parent = self

    def receives(self, name: str) -> None:
        self.add_dependency(SideKind.LEFT, name)

    def produces(self, name: str) -> None:
        self.add_dependency(SideKind.RIGHT, name)

    def respects(self, name: str) -> None:
        self.add_dependency(SideKind.TOP, name)

    def requires(self, name: str) -> None:
        self.add_dependency(SideKind.BOTTOM, name)

    def add_dependency(self, side: SideKind, name: str) -> None:
        self.dependencies.setdefault(side, OrderedSet()).add(name)

    def each_dependency(self) -> Iterator[tuple[SideKind, str]]:
        for side, names in self.dependencies.items():
            for name in names:
                yield side, name

    def ancestor_of(self, other: Process) -> bool:
        return self.parent_of(other) or self.children.any(
            lambda child: child.ancestor_of(other)
        )

    def parent_of(self, other: Process) -> bool:
        return other in self.children

    def leaves(self) -> Iterator[Process]:
        if self.is_leaf():
            yield self
            return
        for child in self.children:
            yield from child.leaves()

    def toc(self, indent: str = "") -> str:
        """Return an indented outline of this subtree, one name per line."""
        result = f"{indent}{self.name}\n"
        for child in self.children:
            result += child.toc(indent + "  ")
        return result

    # -- Views -------------------------------------------------------------

    def schematic(self) -> Diagram:
        """Diagram of every leaf process in this subtree."""
        from idef0_svg.layout.engine import create_diagram

        def populate(diagram: Diagram) -> None:
            for leaf in self.leaves():
                leaf._render_box(diagram)

        return create_diagram(self.name, populate)

    def decompose(self) -> Diagram:
        """Diagram of the direct children, bounded by this process's ICOMs."""
        if not self.is_decomposable():
            return self.focus()

        from idef0_svg.layout.engine import create_diagram

        def populate(diagram: Diagram) -> None:
            self._render(diagram)
            for child in self.children:
                child._render_box(diagram)

        return create_diagram(self.name, populate)

    def focus(self) -> Diagram:
        """The parent's diagram boundary around this process alone."""
        from idef0_svg.layout.engine import create_diagram

        parent = self.parent or self

        def populate(diagram: Diagram) -> None:
            parent._render(diagram)
            self._render_box(diagram).highlighted = True

        return create_diagram(parent.name, populate)

    def _render_box(self, diagram: Diagram):
        box = diagram.box(self.name)
        self._render(box)
        return box

    def _render(self, box: Box) -> None:
        for side, name in self.each_dependency():
            box.side(side).expects(name)


def _check_composition(
    composition: nx.DiGraph,
    parent: Process,
    child: Process,
    statement: Statement,
) -> None:
    """Reject a composition edge that would close a cycle."""
    if nx.has_path(composition, child.name, parent.name):
        cycle = nx.shortest_path(composition, child.name, parent.name)
        path = " -> ".join([parent.name, *cycle])
        raise CompositionError(
            f"Cyclic composition {path} ({statement.describe()})"
        )
    if not child.is_root():
        raise CompositionError(
            f"{child.name!r} is already a child of {child.parent.name!r} "
            f"({statement.describe()})"
        )
