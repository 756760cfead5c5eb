"""Color inventory records: ColorRecord and Study."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .color_codec import ColorValue, parse
from .identity import trailing_segment

# Study types
STUDY = "study"
DRAWING = "drawing"
TEMPLATE = "template"
CHART_THEME = "chart-theme"
BAR_THEME = "bar-theme"
CONFIG_DERIVED = "config-derived"
TRADING = "trading"

STUDY_TYPES = (STUDY, DRAWING, TEMPLATE, CHART_THEME, BAR_THEME, CONFIG_DERIVED, TRADING)


def merge_key(study_type: str, identifier: str, display_name: str) -> Tuple[str, str]:
    """Records with equal keys describe the same logical entity."""
    name = trailing_segment(identifier) if identifier else ""
    return (study_type, name or display_name)


@dataclass
class ColorRecord:
    key: str
    label: str
    value: ColorValue
    enabled: bool = True
    original_encoding: str = ""

    def to_json(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "color": self.value.hex,
            "alpha": self.value.alpha,
            "enabled": self.enabled,
            "original": self.original_encoding,
        }

    @staticmethod
    def from_json(d: dict) -> "ColorRecord":
        original = str(d.get("original") or "")
        color = d.get("color")
        alpha = d.get("alpha")
        if alpha is not None:
            try:
                alpha = int(alpha)
            except (TypeError, ValueError):
                raise ValueError(f"Color record {d.get('key')!r} has invalid alpha")
        if color:
            value = ColorValue.from_hex(str(color), alpha)
        else:
            value = parse(original)
        if value is None:
            raise ValueError(f"Color record {d.get('key')!r} has no usable color")
        return ColorRecord(
            key=str(d["key"]),
            label=str(d.get("label") or d["key"]),
            value=value,
            enabled=bool(d.get("enabled", True)),
            original_encoding=original,
        )


@dataclass
class Study:
    source: str
    type: str
    identifier: str
    display_name: str
    colors: List[ColorRecord] = field(default_factory=list)

    @property
    def name(self) -> str:
        return trailing_segment(self.identifier) if self.identifier else ""

    @property
    def merge_key(self) -> Tuple[str, str]:
        return merge_key(self.type, self.identifier, self.display_name)

    def color(self, key: str) -> Optional[ColorRecord]:
        for record in self.colors:
            if record.key == key:
                return record
        return None

    def to_json(self) -> dict:
        return {
            "source": self.source,
            "type": self.type,
            "identifier": self.identifier,
            "displayName": self.display_name,
            "colors": [c.to_json() for c in self.colors],
        }

    @staticmethod
    def from_json(d: dict) -> "Study":
        colors: List[ColorRecord] = []
        seen = set()
        entries = d.get("colors") or []
        if not isinstance(entries, list):
            raise ValueError(f"Study {d.get('identifier')!r} has no color list")
        for entry in entries:
            if not isinstance(entry, dict) or "key" not in entry:
                continue
            record = ColorRecord.from_json(entry)
            if record.key in seen:
                continue
            seen.add(record.key)
            colors.append(record)
        identifier = str(d.get("identifier") or "")
        return Study(
            source=str(d.get("source") or ""),
            type=str(d.get("type") or STUDY),
            identifier=identifier,
            display_name=str(d.get("displayName") or identifier),
            colors=colors,
        )
