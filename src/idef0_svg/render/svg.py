"""SVG generation for laid-out IDEF0 diagrams using drawsvg."""

from __future__ import annotations

import drawsvg as draw

from idef0_svg.layout.boxes import ProcessBox
from idef0_svg.layout.engine import Diagram
from idef0_svg.layout.labels import Label
from idef0_svg.layout.routing import Arrow, Line
from idef0_svg.render.constants import (
    ARROW_HALF_WIDTH,
    ARROW_LENGTH,
    CURVE_CONTROL,
    CURVE_RADIUS,
    DASH_PATTERN,
)
from idef0_svg.render.style import Theme


def render_svg(diagram: Diagram, theme: Theme | None = None) -> str:
    """Render a laid-out diagram to an SVG string.

    The document is sized in points with a matching ``viewBox``. Boxes are
    drawn before lines inside a single group.
    """
    if theme is None:
        from idef0_svg.themes import DEFAULT_THEME

        theme = DEFAULT_THEME

    width, height = diagram.width, diagram.height
    d = draw.Drawing(width, height)
    d.set_render_size(f"{width:g}pt", f"{height:g}pt")
    d.append(draw.Raw(_style_block(theme)))

    if theme.background_color != "none":
        d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    group = draw.Group()
    for box in diagram.boxes:
        _render_box(group, box, theme)
    for line in diagram.lines:
        _render_line(group, line, theme)
    d.append(group)

    return d.as_svg()


def _style_block(theme: Theme) -> str:
    return (
        "<style type=\"text/css\">"
        f"svg {{ background-color: {theme.background_color}; }} "
        f"text {{ font-family: {theme.font_family}; "
        f"font-size: {theme.font_size:g}px; }}"
        "</style>"
    )


def _render_box(group: draw.Group, box: ProcessBox, theme: Theme) -> None:
    fill = theme.highlight_fill if box.highlighted else theme.box_fill
    stroke_width = (
        theme.highlight_stroke_width if box.highlighted else theme.box_stroke_width
    )
    group.append(draw.Rectangle(
        box.x1, box.y1, box.width, box.height,
        fill=fill,
        stroke=theme.box_stroke,
        stroke_width=stroke_width,
    ))
    group.append(_text(
        Label(box.name, box.x1 + box.width / 2, box.y1 + box.height / 2, "middle"),
        theme,
    ))


def _render_line(group: draw.Group, line: Line, theme: Theme) -> None:
    color = theme.line_color
    extra = {}
    if line.dashed:
        color = theme.unsatisfied_color or theme.line_color
        extra["stroke_dasharray"] = DASH_PATTERN

    points = line.route()
    if len(points) == 2:
        (x1, y1), (x2, y2) = points
        group.append(draw.Line(
            x1, y1, x2, y2,
            stroke=color,
            stroke_width=theme.line_width,
            **extra,
        ))
    else:
        group.append(_rounded_path(points, color, theme.line_width, **extra))

    x, y = points[-1]
    group.append(_arrowhead(line.arrow, x, y, color))
    group.append(_text(line.label, theme))


def _text(label: Label, theme: Theme) -> draw.Text:
    return draw.Text(
        label.text,
        theme.font_size,
        label.x, label.y,
        text_anchor=label.align,
        fill=theme.label_color,
        font_family=theme.font_family,
    )


def _simplify(points: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Drop repeated points and the middle of straight runs."""
    kept: list[tuple[float, float]] = []
    for point in points:
        if kept and point == kept[-1]:
            continue
        if len(kept) >= 2:
            (ax, ay), (bx, by) = kept[-2], kept[-1]
            cx, cy = point
            if (bx - ax) * (cy - by) == (by - ay) * (cx - bx):
                kept[-1] = point
                continue
        kept.append(point)
    return kept


def _rounded_path(
    points: list[tuple[float, float]],
    color: str,
    width: float,
    **kwargs,
) -> draw.Path:
    """Orthogonal path with each corner replaced by a short cubic curve."""
    pts = _simplify(points)
    path = draw.Path(stroke=color, stroke_width=width, fill="none", **kwargs)
    path.M(*pts[0])

    for i in range(1, len(pts) - 1):
        prev, curr, nxt = pts[i - 1], pts[i], pts[i + 1]

        dx1, dy1 = curr[0] - prev[0], curr[1] - prev[1]
        len1 = (dx1**2 + dy1**2) ** 0.5
        dx2, dy2 = nxt[0] - curr[0], nxt[1] - curr[1]
        len2 = (dx2**2 + dy2**2) ** 0.5

        r = min(CURVE_RADIUS, len1 / 2, len2 / 2)
        c = r * CURVE_CONTROL / CURVE_RADIUS
        ux1, uy1 = dx1 / len1, dy1 / len1
        ux2, uy2 = dx2 / len2, dy2 / len2

        path.L(curr[0] - ux1 * r, curr[1] - uy1 * r)
        path.C(
            curr[0] - ux1 * c, curr[1] - uy1 * c,
            curr[0] + ux2 * c, curr[1] + uy2 * c,
            curr[0] + ux2 * r, curr[1] + uy2 * r,
        )

    path.L(*pts[-1])
    return path


def _arrowhead(direction: Arrow, x: float, y: float, color: str) -> draw.Lines:
    """Filled triangle with its tip at (x, y)."""
    length, half = ARROW_LENGTH, ARROW_HALF_WIDTH
    if direction is Arrow.RIGHT:
        corners = (x - length, y + half, x - length, y - half)
    elif direction is Arrow.DOWN:
        corners = (x - half, y - length, x + half, y - length)
    else:
        corners = (x - half, y + length, x + half, y + length)
    return draw.Lines(x, y, *corners, close=True, fill=color, stroke=color)
