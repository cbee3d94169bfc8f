"""Theme definitions for IDEF0 diagrams."""

from idef0_svg.themes.classic import CLASSIC_THEME
from idef0_svg.themes.dark import DARK_THEME

THEMES = {
    "classic": CLASSIC_THEME,
    "dark": DARK_THEME,
}

DEFAULT_THEME = CLASSIC_THEME

__all__ = ["CLASSIC_THEME", "DARK_THEME", "DEFAULT_THEME", "THEMES"]
