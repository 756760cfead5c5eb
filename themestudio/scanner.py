"""Walk MotiveWave JSON documents and collect per-entity color records.

:func:`iter_occurrences` is the only traversal. Scanning turns its
occurrences into :class:`~themestudio.models.Study` records; the patcher
writes through the live slots of the same occurrences, which keeps color
keys identical between the two passes.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Set, Tuple

from .extractor import ColorSlot, color_slots, font_string_slots
from .identity import display_name, is_drawing
from .json_tree import DEFAULT_MAX_DEPTH, Path, format_path, is_array, is_object, walk
from .merger import merge_studies
from .models import (
    BAR_THEME, CHART_THEME, CONFIG_DERIVED, DRAWING, STUDY, TEMPLATE, TRADING,
    Study, merge_key,
)
from .utils import get_logger, log_exception

logger = get_logger("themestudio.scanner")

# Theme and trading fields hold colors without saying so in their names
CHART_THEME_FIELDS = ("background", "axisLine", "gridLine", "crossHair", "textFg", "textBg")
BAR_THEME_FIELDS = ("up", "upFill", "upOutline", "down", "downFill", "downOutline")
TABLE_FIELDS = ("upText", "downText", "upBg", "downBg", "upArrow", "downArrow")
DOM_FIELDS = (
    "bidColor", "askColor", "atBidText", "atAskText", "atBidHighlight",
    "atAskHighlight", "bgColor", "priceText", "mboBidFill", "mboAskFill",
)

THEME_CONTAINERS = (
    ("chartThemes", CHART_THEME, "Chart Theme", CHART_THEME_FIELDS),
    ("barThemes", BAR_THEME, "Bar Theme", BAR_THEME_FIELDS),
)
TRADING_CONTAINERS = (
    ("table", "Quote Table", TABLE_FIELDS),
    ("dom", "DOM Ladder", DOM_FIELDS),
)
# Order button widgets keep their colors in the font string
ORDER_BUTTONS = (("BM", "buy", "Buy"), ("SM", "sell", "Sell"))

_EXCHANGE_TICKER_RE = re.compile(r"^[A-Z0-9][A-Z0-9/]*\.[A-Z]{2,}$")
_ROOT_DIGITS_TICKER_RE = re.compile(r"^[A-Z0-9]*[A-Z]\d{1,4}$")
_ROOT_RE = re.compile(r"^([A-Z0-9]*[A-Z])(\d+)$")
_MONTH_CODES = "FGHJKMNQUVXZ"


@dataclass
class Occurrence:
    """One entity found in one document, with live references to its colors."""
    source: str
    type: str
    identifier: str
    display_name: str
    slots: List[ColorSlot] = field(default_factory=list)

    @property
    def merge_key(self) -> Tuple[str, str]:
        return merge_key(self.type, self.identifier, self.display_name)

    def to_study(self) -> Study:
        return Study(self.source, self.type, self.identifier, self.display_name,
                     [slot.record() for slot in self.slots])


@dataclass
class Inventory:
    studies: List[Study] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def find(self, study_type: str, name: str) -> Optional[Study]:
        for study in self.studies:
            if study.merge_key == (study_type, name):
                return study
        return None

    def to_json(self) -> dict:
        return {
            "studies": [s.to_json() for s in self.studies],
            "warnings": list(self.warnings),
            "skipped": list(self.skipped),
        }


def is_ticker(key: str) -> bool:
    return bool(_EXCHANGE_TICKER_RE.match(key) or _ROOT_DIGITS_TICKER_RE.match(key))


def symbol_root(ticker: str) -> str:
    """``"ESZ4.CME"`` -> ``"ES"``, ``"AAPL.NASDAQ"`` -> ``"AAPL"``."""
    base = ticker.split(".", 1)[0]
    m = _ROOT_RE.match(base)
    if not m:
        return base
    letters = m.group(1)
    if len(letters) > 1 and letters[-1] in _MONTH_CODES:
        letters = letters[:-1]
    return letters


def instrument_symbol(container: dict) -> Optional[str]:
    """Symbol root of the first ticker-shaped key of ``container``."""
    for key in container:
        if isinstance(key, str) and is_ticker(key):
            return symbol_root(key)
    return None


def _entity_type(identifier: str) -> str:
    return DRAWING if is_drawing(identifier) else STUDY


def _figures(node: dict, source: str) -> Iterator[Occurrence]:
    symbol = instrument_symbol(node)
    for figure in node["figures"]:
        if not is_object(figure):
            continue
        sid = figure.get("sid")
        if not isinstance(sid, str) or not sid:
            continue
        name = display_name(sid)
        if symbol:
            name = f"{name} ({symbol})"
        yield Occurrence(source, _entity_type(sid), sid, name, color_slots(figure.get("settings")))


def _config_identifier(node: dict, path: Path) -> str:
    for key in ("id", "name"):
        value = node.get(key)
        if isinstance(value, str) and value:
            return value
    for part in reversed(path):
        if isinstance(part, str):
            return part
    return "config"


def _defaults(document: Any, source: str, claimed: Set[int]) -> Iterator[Occurrence]:
    # defaults.json: [{"id": ..., "data": {"sid": ..., "settings": {...}, "ratios": [...]}}]
    if not is_array(document):
        return
    for entry in document:
        if not is_object(entry) or not is_object(entry.get("data")):
            continue
        data = entry["data"]
        identifier = data.get("sid") or entry.get("id")
        if not isinstance(identifier, str) or not identifier:
            continue
        claimed.add(id(data))
        yield Occurrence(source, _entity_type(identifier), identifier,
                         display_name(identifier), color_slots(data.get("settings")))


def _templates(document: Any, source: str, claimed: Set[int]) -> Iterator[Occurrence]:
    # Nested figure graphs inside templates are picked up by the generic walk
    if not is_object(document) or not is_array(document.get("templates")):
        return
    for i, template in enumerate(document["templates"]):
        if not is_object(template):
            continue
        name = template.get("name") or template.get("id") or f"template_{i}"
        claimed.add(id(template))
        slots = color_slots(template.get("settings"))
        if slots:
            yield Occurrence(source, TEMPLATE, str(name), str(name), slots)


def _themes(document: Any, source: str, claimed: Set[int]) -> Iterator[Occurrence]:
    if not is_object(document):
        return
    for list_key, study_type, title, fields in THEME_CONTAINERS:
        themes = document.get(list_key)
        if not is_array(themes):
            continue
        for i, theme in enumerate(themes):
            if not is_object(theme):
                continue
            claimed.add(id(theme))
            name = theme.get("name")
            identifier = str(name) if name else f"{list_key}_{i}"
            label = f"{title}: {name}" if name else (title if i == 0 else f"{title} {i + 1}")
            slots = color_slots(theme, fields)
            if slots:
                yield Occurrence(source, study_type, identifier, label, slots)


def find_widgets(widgets: Any, widget_type: str, depth: int = 0) -> Iterator[dict]:
    """Widgets of ``widget_type`` in a widget list and its nested ``widgets`` lists."""
    if not is_array(widgets) or depth > DEFAULT_MAX_DEPTH:
        return
    for widget in widgets:
        if not is_object(widget):
            continue
        if widget.get("type") == widget_type:
            yield widget
        yield from find_widgets(widget.get("widgets"), widget_type, depth + 1)


def _button_widget_lists(document: dict) -> Iterator[Any]:
    # dom.bottomPanel.widgets, then tradePanel.panels[].widgets
    dom = document.get("dom")
    if is_object(dom) and is_object(dom.get("bottomPanel")):
        yield dom["bottomPanel"].get("widgets")
    trade_panel = document.get("tradePanel")
    if is_object(trade_panel) and is_array(trade_panel.get("panels")):
        for panel in trade_panel["panels"]:
            if is_object(panel):
                yield panel.get("widgets")


def _trading(document: Any, source: str, claimed: Set[int]) -> Iterator[Occurrence]:
    if not is_object(document):
        return
    for key, title, fields in TRADING_CONTAINERS:
        container = document.get(key)
        if not is_object(container):
            continue
        claimed.add(id(container))
        slots = color_slots(container, fields)
        if slots:
            yield Occurrence(source, TRADING, key, title, slots)
    for widgets in _button_widget_lists(document):
        for widget_type, prefix, title in ORDER_BUTTONS:
            for widget in find_widgets(widgets, widget_type):
                slots = font_string_slots(widget, prefix, title)
                if slots:
                    yield Occurrence(source, TRADING, "buttons", "Order Buttons", slots)


DOCUMENT_EXTENSIONS = (_defaults, _templates, _themes, _trading)


def iter_occurrences(document: Any, source: str, max_depth: int = DEFAULT_MAX_DEPTH,
                     warnings: Optional[List[str]] = None) -> Iterator[Occurrence]:
    """Yield every color-bearing entity of ``document`` in a fixed order."""
    claimed: Set[int] = set()
    for extension in DOCUMENT_EXTENSIONS:
        yield from extension(document, source, claimed)

    def on_limit(path: Path):
        message = f"{source}: depth limit {max_depth} reached at {format_path(path)}, subtree skipped"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)

    for visit in walk(document, max_depth, on_limit):
        node = visit.node
        # Nodes at the limit are reported, their contents are not read
        if not is_object(node) or visit.depth >= max_depth:
            continue
        if is_array(node.get("figures")):
            yield from _figures(node, source)
        settings = node.get("settings")
        if is_object(settings) and not node.get("sid") and id(node) not in claimed:
            slots = color_slots(settings)
            if slots:
                identifier = _config_identifier(node, visit.path)
                yield Occurrence(source, CONFIG_DERIVED, identifier, display_name(identifier), slots)


def scan(document: Any, source: str, max_depth: int = DEFAULT_MAX_DEPTH,
         warnings: Optional[List[str]] = None) -> List[Study]:
    """Unmerged Study records of one document, in traversal order."""
    return [occ.to_study() for occ in iter_occurrences(document, source, max_depth, warnings)]


def scan_documents(documents: Mapping[str, Any], max_depth: int = DEFAULT_MAX_DEPTH) -> Inventory:
    """Scan a document set and merge the results.

    A ``None`` document stands for one that could not be read; it is listed
    in ``skipped`` and the remaining documents are still scanned.
    """
    inventory = Inventory()
    found: List[Study] = []
    for source, document in documents.items():
        if document is None:
            logger.warning(f"Skipping unreadable document: {source}")
            inventory.skipped.append(source)
            continue
        try:
            found.extend(scan(document, source, max_depth, inventory.warnings))
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            log_exception(e, f"scanning {source}", logger)
            inventory.skipped.append(source)
    inventory.studies = merge_studies(found)
    logger.info(f"Scanned {len(documents)} documents: {len(found)} records, "
                f"{len(inventory.studies)} after merge")
    return inventory
