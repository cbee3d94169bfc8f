"""Classic black-on-white theme."""

from idef0_svg.render.style import Theme

CLASSIC_THEME = Theme(
    name="classic",
    background_color="white",
    box_fill="none",
    box_stroke="black",
    box_stroke_width=1.0,
    line_color="black",
    line_width=1.0,
    label_color="black",
    font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    font_size=12.0,
    highlight_fill="#fff3c4",
)
