"""Dark theme for editors and slides with a dark background."""

from idef0_svg.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#1e1e1e",
    box_fill="#2a2a2a",
    box_stroke="#d4d4d4",
    box_stroke_width=1.0,
    line_color="#d4d4d4",
    line_width=1.0,
    label_color="#e8e8e8",
    font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    font_size=12.0,
    highlight_fill="#3a3d41",
    highlight_stroke_width=2.0,
    unsatisfied_color="#9a9a9a",
)
