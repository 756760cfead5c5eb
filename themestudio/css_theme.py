"""Read the colors of a MotiveWave CSS stylesheet (``dark.css``).

Installing a stylesheet needs elevated privileges and is left to the
surrounding application.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from .color_codec import ColorValue
from .utils import clamp, get_logger

logger = get_logger("themestudio.css_theme")

DEFAULT_FONT = "Monaco"

# -theme-color-<name> variables and the ids the studio uses for them
CSS_TO_ID = {
    "main": "main",
    "secondary": "secondary",
    "fx-control-inner-background": "controlInner",
    "chooser-bg": "chooserBg",
    "mw-popup-pane-bg": "popupBg",
    "mw-popup-pane-title-bg": "popupTitleBg",
    "mw-status-bar-bg": "statusBar",
    "mw-chart-split-pane-divider": "divider",
    "mw-active-station": "activeStation",
    "mw-highlight": "highlight",
    "mw-tab-selected": "tabSelected",
    "mw-tab-hover": "tabHover",
    "mw-context-menu-bg": "menuBg",
    "mw-menu-item-bg": "menuItemBg",
    "mw-menu-item-separator": "menuSeparator",
    "mw-context-menu-accent": "menuAccent",
    "fx-spinner-border": "spinnerBorder",
    "toggle-btn-selected": "toggleSelected",
    "hover-base": "hoverBase",
    "btn-pressed": "btnPressed",
}

_RGB = r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)"
_THEME_COLOR_RE = re.compile(r"-theme-color-([\w-]+?):\s*" + _RGB)
_FONT_RE = re.compile(r"-fx-font-family:\s*'([^']+)'")
_ACCENT_RE = re.compile(r"-fx-accent:\s*" + _RGB)
_FOCUS_RE = re.compile(r"-fx-focus-color:\s*" + _RGB)


@dataclass
class CssTheme:
    colors: Dict[str, ColorValue] = field(default_factory=dict)
    font: str = DEFAULT_FONT
    accent: Optional[ColorValue] = None
    focus: Optional[ColorValue] = None

    def to_json(self) -> dict:
        return {
            "colors": {k: v.hex for k, v in self.colors.items()},
            "font": self.font,
            "accent": self.accent.hex if self.accent else None,
            "focus": self.focus.hex if self.focus else None,
        }


def _rgb(match, offset: int = 1) -> ColorValue:
    r, g, b = (int(clamp(int(match.group(offset + i)), 0, 255)) for i in range(3))
    return ColorValue(r, g, b)


def read_theme_colors(css: str) -> CssTheme:
    theme = CssTheme()
    for m in _THEME_COLOR_RE.finditer(css):
        color_id = CSS_TO_ID.get(m.group(1))
        if color_id:
            theme.colors[color_id] = _rgb(m, 2)
    font = _FONT_RE.search(css)
    if font:
        theme.font = font.group(1)
    accent = _ACCENT_RE.search(css)
    if accent:
        theme.accent = _rgb(accent)
    focus = _FOCUS_RE.search(css)
    if focus:
        theme.focus = _rgb(focus)
    return theme


def read_theme_file(path: str) -> Optional[CssTheme]:
    if not os.path.exists(path):
        logger.warning(f"Stylesheet not found: {path}")
        return None
    with open(path, "r", encoding="utf-8") as f:
        return read_theme_colors(f.read())
