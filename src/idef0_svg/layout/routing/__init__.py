"""Line routing subpackage for IDEF0 diagrams.

Public API:
- Line: a connector between two boxes or a box and the diagram edge
- LineKind: the fourteen line kinds
- RULES: per-kind rule table, filled in by the internal and external modules
- INTERNAL_KINDS, EXTERNAL_KINDS, UNSATISFIED_KINDS: kinds in creation order
"""

from idef0_svg.layout.routing import external, internal  # noqa: F401
from idef0_svg.layout.routing.common import (
    BOUNDARY_KINDS,
    EXTERNAL_KINDS,
    INTERNAL_KINDS,
    RULES,
    UNSATISFIED_KINDS,
    Arrow,
    Line,
    LineKind,
    LineRules,
)

__all__ = [
    "Arrow",
    "BOUNDARY_KINDS",
    "EXTERNAL_KINDS",
    "INTERNAL_KINDS",
    "Line",
    "LineKind",
    "LineRules",
    "RULES",
    "UNSATISFIED_KINDS",
]
