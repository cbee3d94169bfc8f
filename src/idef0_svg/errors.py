"""Exception types raised while building and laying out IDEF0 diagrams.

``ModelError`` and its subclasses describe problems with the user's
statements and are safe to show as a rendering error. ``LayoutInvariantError``
signals a defect in the box/ICOM wiring and is never expected in practice.
"""

from __future__ import annotations


class ModelError(ValueError):
    """The statements do not describe a valid process model."""


class StatementError(ModelError):
    """A statement line could not be parsed."""

    def __init__(self, message: str, line_number: int = 0) -> None:
        super().__init__(message)
        self.line_number = line_number


class CompositionError(ModelError):
    """A process is composed cyclically or into more than one parent."""


class DependencyError(ModelError):
    """A statement uses a predicate that is not an ICOM dependency."""


class LayoutInvariantError(RuntimeError):
    """The layout engine reached a state its wiring rules should prevent."""
