"""Color encodings found in MotiveWave configuration documents.

Three textual families are recognized:

- comma decimal: ``"R,G,B"`` or ``"R,G,B,A"``
- bare hex: ``"RRGGBB"`` or ``"RRGGBBAA"`` (alpha trailing, optional ``#``)
- prefixed hex: ``"X,RRGGBB"`` where ``X`` is a single uppercase letter

``parse`` turns any of them into a :class:`ColorValue`; ``serialize`` writes a
value back in the family of the text it replaces.
"""

import re
from typing import NamedTuple, Optional

from .utils import clamp

DECIMAL = "decimal"
HEX = "hex"
PREFIXED = "prefixed"

_DECIMAL_RE = re.compile(r"^\s*-?\d+\s*(?:,\s*-?\d+\s*){2,3}$")
_HEX_RE = re.compile(r"^(#?)([0-9A-Fa-f]{6})([0-9A-Fa-f]{2})?$")
_PREFIXED_RE = re.compile(r"^([A-Z]),([0-9A-Fa-f]{6})$")


class ColorValue(NamedTuple):
    red: int
    green: int
    blue: int
    alpha: int = 255

    @property
    def rgb(self) -> int:
        return (self.red << 16) | (self.green << 8) | self.blue

    @property
    def hex(self) -> str:
        return "#%02x%02x%02x" % (self.red, self.green, self.blue)

    @staticmethod
    def from_hex(h: str, alpha: Optional[int] = None) -> "ColorValue":
        """Build a value from ``#rrggbb`` or ``#rrggbbaa`` (``#`` optional)."""
        h = h.strip().lstrip("#")
        if len(h) == 3:
            h = "".join([c*2 for c in h])
        if len(h) not in (6, 8):
            raise ValueError(f"Invalid hex color: {h!r}")
        r, g, b = (int(h[i:i+2], 16) for i in (0, 2, 4))
        if alpha is None:
            alpha = int(h[6:8], 16) if len(h) == 8 else 255
        return ColorValue(r, g, b, int(clamp(alpha, 0, 255)))


class Encoding(NamedTuple):
    """Shape of an encoded color string, remembered for re-serialization."""
    family: str
    has_alpha: bool = False
    prefix: str = ""
    lowercase: bool = False


def _is_lower_hex(digits: str) -> bool:
    letters = [c for c in digits if c.isalpha()]
    return bool(letters) and all(c.islower() for c in letters)


def encoding_of(text) -> Optional[Encoding]:
    """Return the family of ``text``, or None if it is not a color."""
    if not isinstance(text, str):
        return None
    if _DECIMAL_RE.match(text):
        return Encoding(DECIMAL, has_alpha=text.count(",") == 3)
    m = _HEX_RE.match(text)
    if m:
        digits = m.group(2) + (m.group(3) or "")
        return Encoding(HEX, has_alpha=m.group(3) is not None,
                        prefix=m.group(1), lowercase=_is_lower_hex(digits))
    m = _PREFIXED_RE.match(text)
    if m:
        return Encoding(PREFIXED, prefix=m.group(1), lowercase=_is_lower_hex(m.group(2)))
    return None


def parse(text) -> Optional[ColorValue]:
    """Parse an encoded color. Returns None when no rule matches."""
    if not isinstance(text, str):
        return None
    if _DECIMAL_RE.match(text):
        channels = [int(clamp(int(p.strip()), 0, 255)) for p in text.split(",")]
        return ColorValue(*channels)
    m = _HEX_RE.match(text)
    if m:
        digits = m.group(2)
        r, g, b = (int(digits[i:i+2], 16) for i in (0, 2, 4))
        alpha = int(m.group(3), 16) if m.group(3) else 255
        return ColorValue(r, g, b, alpha)
    m = _PREFIXED_RE.match(text)
    if m:
        digits = m.group(2)
        r, g, b = (int(digits[i:i+2], 16) for i in (0, 2, 4))
        return ColorValue(r, g, b)
    return None


def serialize(value: ColorValue, original: Optional[str] = None) -> str:
    """Encode ``value`` in the same family as ``original``.

    Without a usable ``original`` the 4-field comma decimal form is used.
    """
    encoding = encoding_of(original)
    if encoding is None:
        return f"{value.red},{value.green},{value.blue},{value.alpha}"

    if encoding.family == DECIMAL:
        fields = [value.red, value.green, value.blue]
        if encoding.has_alpha:
            fields.append(value.alpha)
        return ",".join(str(c) for c in fields)

    digits = "%02X%02X%02X" % (value.red, value.green, value.blue)
    if encoding.family == HEX and encoding.has_alpha:
        digits += "%02X" % value.alpha
    if encoding.lowercase:
        digits = digits.lower()
    if encoding.family == PREFIXED:
        return f"{encoding.prefix},{digits}"
    return encoding.prefix + digits


def calculate_contrast_ratio(color1: ColorValue, color2: ColorValue) -> float:
    """Calculate contrast ratio between two colors (WCAG AA requires 4.5:1)."""
    def luminance(c):
        def chan(v):
            v = float(v) / 255
            return v/12.92 if v <= 0.03928 else ((v+0.055)/1.055) ** 2.4
        return 0.2126*chan(c.red) + 0.7152*chan(c.green) + 0.0722*chan(c.blue)

    l1, l2 = luminance(color1), luminance(color2)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def color_distance(color1: ColorValue, color2: ColorValue) -> int:
    """Manhattan distance over the RGB channels."""
    return (abs(color1.red - color2.red) + abs(color1.green - color2.green)
            + abs(color1.blue - color2.blue))
