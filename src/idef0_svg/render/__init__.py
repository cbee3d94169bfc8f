"""SVG rendering of laid-out diagrams."""

from idef0_svg.render.style import Theme
from idef0_svg.render.svg import render_svg
from idef0_svg.render.views import VIEW_MODES, render_view, select_process

__all__ = ["Theme", "VIEW_MODES", "render_svg", "render_view", "select_process"]
