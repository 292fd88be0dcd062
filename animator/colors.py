# MiniPixelAnimator/animator/colors.py
"""
Color helpers shared by the model and the palette.

Every color handled by the model is a lower-case '#rrggbb' string, as given
by QColor.name(). Inputs may be anything QColor understands ('#rgb',
'#rrggbb', SVG names), bare hex digits without the hash, 'rgb(r, g, b)'
strings or (r, g, b) tuples.
"""
import re

from PyQt6.QtGui import QColor

WHITE_HEX = QColor("white").name()
BLACK_HEX = QColor("black").name()

# QColor has no parser for the CSS functional form
_RGB_FUNC_PATTERN = re.compile(
    r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)


def _is_channel(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 255


def to_qcolor(color) -> QColor | None:
    """Returns a valid QColor for the given color, or None if it can't be parsed."""
    if isinstance(color, (tuple, list)):
        if len(color) != 3 or not all(_is_channel(c) for c in color):
            return None
        return QColor.fromRgb(*color)
    if not isinstance(color, str):
        return None
    text = color.strip()
    if not text:
        return None
    match = _RGB_FUNC_PATTERN.match(text)
    if match:
        channels = [int(part) for part in match.groups()]
        if not all(_is_channel(c) for c in channels):
            return None
        return QColor.fromRgb(*channels)
    q_color = QColor(text)
    if not q_color.isValid() and not text.startswith("#"):
        q_color = QColor("#" + text)
    return q_color if q_color.isValid() else None


def parse_rgb(color) -> tuple[int, int, int] | None:
    q_color = to_qcolor(color)
    if q_color is None:
        return None
    return tuple(q_color.getRgb()[:3])


def normalize_color(color) -> str | None:
    q_color = to_qcolor(color)
    return q_color.name() if q_color is not None else None


def is_valid_color(color) -> bool:
    return to_qcolor(color) is not None


def colors_equal(a, b) -> bool:
    rgb_a = parse_rgb(a)
    return rgb_a is not None and rgb_a == parse_rgb(b)
