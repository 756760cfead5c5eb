"""Color discovery inside one ``settings`` object.

Six shape rules run in a fixed order. Each rule is a generator over the
settings object and yields candidate fields; :func:`color_slots` keeps the
ones whose text parses as a color. A slot stays bound to the live container
it came from, so the patch pass writes through the same slots the scan pass
reported.
"""

import re
from dataclasses import dataclass
from itertools import chain
from typing import Any, Iterable, Iterator, List, NamedTuple, Union

from .color_codec import ColorValue, parse, serialize
from .json_tree import is_array, is_object
from .models import ColorRecord

# Names that contain "color"/"fill" but hold modes or flags, not colors
INLINE_DENYLIST = frozenset({
    "colormode", "colorscheme", "colorby", "colortheme", "colortype",
    "colorstyle", "colorsource", "colorpalette", "colormapname",
    "usecolor", "usecolors", "fillmode", "filltype", "fillstyle",
    "fillpattern", "fillopacity", "fillmethod", "usefill", "fillenabled",
})

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def humanize(text: str) -> str:
    """``"upFillColor"`` -> ``"Up Fill Color"``, ``"line_1"`` -> ``"Line 1"``."""
    words = _CAMEL_RE.sub(" ", str(text)).replace("_", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


class _Candidate(NamedTuple):
    key: str
    label: str
    container: Any
    field: Union[str, int]
    enabled: bool


@dataclass
class ColorSlot:
    """One color field, bound to the container that holds it."""
    key: str
    label: str
    container: Any
    field: Union[str, int]
    value: ColorValue
    enabled: bool = True

    @property
    def text(self) -> str:
        return self.container[self.field]

    def write(self, value: ColorValue) -> bool:
        """Re-encode ``value`` in the field's current family. True if the text changed."""
        old = self.text
        new = serialize(value, old)
        self.container[self.field] = new
        self.value = value
        return new != old

    def record(self) -> ColorRecord:
        return ColorRecord(self.key, self.label, self.value, self.enabled, self.text)


FONT_SEPARATOR = "|"
FONT_FG_SEGMENT = 4
FONT_BG_SEGMENT = 5


@dataclass
class FontColorSlot(ColorSlot):
    """A color held in one segment of a widget font string.

    Font strings look like ``"Monaco|12|Bold||FFFFFF|A52A2A99"``: segment 4
    is the text color and segment 5 the background. Writing replaces that
    segment only.
    """
    segment: int = FONT_FG_SEGMENT

    def _parts(self) -> List[str]:
        return self.container[self.field].split(FONT_SEPARATOR)

    @property
    def text(self) -> str:
        parts = self._parts()
        return parts[self.segment] if self.segment < len(parts) else ""

    def write(self, value: ColorValue) -> bool:
        parts = self._parts()
        old = parts[self.segment]
        new = serialize(value, old)
        parts[self.segment] = new
        self.container[self.field] = FONT_SEPARATOR.join(parts)
        self.value = value
        return new != old


def font_string_slots(widget: Any, prefix: str, title: str) -> List[ColorSlot]:
    """Text and background slots (``<prefix>_fg``, ``<prefix>_bg``) of a widget's ``font``."""
    if not is_object(widget) or not isinstance(widget.get("font"), str):
        return []
    parts = widget["font"].split(FONT_SEPARATOR)
    slots: List[ColorSlot] = []
    for suffix, label, segment in (("fg", "Text", FONT_FG_SEGMENT), ("bg", "Background", FONT_BG_SEGMENT)):
        if segment >= len(parts):
            continue
        value = parse(parts[segment])
        if value is not None:
            slots.append(FontColorSlot(f"{prefix}_{suffix}", f"{title} {label}", widget, "font",
                                       value, True, segment))
    return slots


def _entry_name(entry: dict, index: int) -> str:
    name = entry.get("name") or entry.get("id")
    return str(name) if name not in (None, "") else str(index)


def _enabled(obj: dict) -> bool:
    return bool(obj.get("enabled", True))


def _named_list(settings: dict) -> Iterator[_Candidate]:
    entries = settings.get("colors")
    if not is_array(entries):
        return
    for entry in entries:
        if not is_object(entry) or "color" not in entry:
            continue
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            continue
        yield _Candidate(name, humanize(name), entry, "color", _enabled(entry))


def _inline_properties(settings: dict, extra_fields: Iterable[str] = ()) -> Iterator[_Candidate]:
    extra = set(extra_fields)
    enabled = _enabled(settings)
    for prop, value in settings.items():
        if not isinstance(value, str):
            continue
        lowered = prop.lower()
        named_like_color = ("color" in lowered or "fill" in lowered) and lowered not in INLINE_DENYLIST
        if named_like_color or prop in extra:
            yield _Candidate(prop, humanize(prop), settings, prop, enabled)


def _color_map(settings: dict) -> Iterator[_Candidate]:
    color_map = settings.get("colorMap")
    if not is_object(color_map):
        return
    entries = color_map.get("colors")
    if not is_array(entries):
        return
    for i, entry in enumerate(entries):
        key = f"colorMap_{i}"
        label = f"Color Map {i + 1}"
        if isinstance(entry, str):
            yield _Candidate(key, label, entries, i, True)
        elif is_object(entry) and "color" in entry:
            yield _Candidate(key, label, entry, "color", _enabled(entry))


def _paths(settings: dict) -> Iterator[_Candidate]:
    entries = settings.get("paths")
    if not is_array(entries):
        return
    for i, path in enumerate(entries):
        if not is_object(path) or "c1" not in path:
            continue
        name = _entry_name(path, i)
        yield _Candidate(f"path_{name}_c1", f"{humanize(name)} Line", path, "c1", _enabled(path))


def _fonts(settings: dict) -> Iterator[_Candidate]:
    entries = settings.get("fonts")
    if not is_array(entries):
        return
    for i, font in enumerate(entries):
        if not is_object(font):
            continue
        name = _entry_name(font, i)
        if "color" in font:
            yield _Candidate(f"font_{name}_fg", f"{humanize(name)} Text", font, "color", _enabled(font))
        if "bg" in font:
            yield _Candidate(f"font_{name}_bg", f"{humanize(name)} Background", font, "bg", _enabled(font))


def _indicator_labels(settings: dict) -> Iterator[_Candidate]:
    entries = settings.get("indicators")
    if not is_array(entries):
        return
    for i, indicator in enumerate(entries):
        if not is_object(indicator) or "labelColor" not in indicator:
            continue
        name = _entry_name(indicator, i)
        yield _Candidate(f"ind_{name}_label", f"{humanize(name)} Label", indicator, "labelColor",
                         _enabled(indicator))


def color_slots(settings: Any, extra_fields: Iterable[str] = ()) -> List[ColorSlot]:
    """Every color field of ``settings`` in rule order, unique by key.

    ``extra_fields`` names top-level properties that hold colors although
    their names do not say so (theme and trading containers).
    """
    if not is_object(settings):
        return []
    candidates = chain(
        _named_list(settings),
        _inline_properties(settings, extra_fields),
        _color_map(settings),
        _paths(settings),
        _fonts(settings),
        _indicator_labels(settings),
    )
    slots: List[ColorSlot] = []
    seen = set()
    for c in candidates:
        if c.key in seen:
            continue
        value = parse(c.container[c.field])
        if value is None:
            continue
        seen.add(c.key)
        slots.append(ColorSlot(c.key, c.label, c.container, c.field, value, c.enabled))
    return slots


def extract_colors(settings: Any, extra_fields: Iterable[str] = ()) -> List[ColorRecord]:
    return [slot.record() for slot in color_slots(settings, extra_fields)]
