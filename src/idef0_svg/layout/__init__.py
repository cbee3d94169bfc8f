"""Box sequencing, anchor ordering, clearance lanes and line routing."""

from idef0_svg.layout.engine import Diagram, create_diagram

__all__ = ["Diagram", "create_diagram"]
