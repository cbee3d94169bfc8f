"""Pick a view of a process tree and render it."""

from __future__ import annotations

import logging

from idef0_svg.parser.model import Process
from idef0_svg.render.style import Theme

logger = logging.getLogger(__name__)

VIEW_MODES = ("schematic", "decompose", "focus", "toc")
"""Views a process can be rendered as; ``toc`` is plain text."""


def select_process(root: Process, name: str | None = None) -> Process:
    """Return the process called *name*, or *root* if there is none."""
    if name is None:
        return root
    found = root.find(name)
    if found is None:
        logger.warning("No process named %r; showing %r instead", name, root.name)
        return root
    return found


def render_view(
    root: Process,
    mode: str,
    process: str | None = None,
    theme: Theme | None = None,
) -> str:
    """Render one view of *process* (default: the root) as SVG or text."""
    if mode not in VIEW_MODES:
        raise ValueError(
            f"Unknown view {mode!r}: expected one of {', '.join(VIEW_MODES)}"
        )

    target = select_process(root, process)
    if mode == "toc":
        return target.toc()

    diagram = getattr(target, mode)()
    return diagram.to_svg(theme=theme)
