"""Write color changes back into the live documents."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from .color_codec import ColorValue
from .json_tree import DEFAULT_MAX_DEPTH
from .models import Study
from .scanner import iter_occurrences
from .utils import get_logger

logger = get_logger("themestudio.patcher")

DocumentWriter = Callable[[str, Any], None]


@dataclass
class PatchResult:
    requested: int = 0
    applied: int = 0
    modified_sources: List[str] = field(default_factory=list)
    missing_keys: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every requested key matched at least one field."""
        return not self.missing_keys

    @property
    def discrepancy(self) -> int:
        return len(self.missing_keys)


def apply_changes(documents: Mapping[str, Any], study_type: str, name: str,
                  changes: Mapping[str, ColorValue], writer: Optional[DocumentWriter] = None,
                  max_depth: int = DEFAULT_MAX_DEPTH) -> PatchResult:
    """Apply ``{key: color}`` to every occurrence of the Study ``(study_type, name)``.

    Matching fields are re-encoded in their existing format; nothing else
    is touched. Each document whose text changed is passed to ``writer``.
    ``applied`` counts matched fields, so a key that matches nothing shows
    up in ``missing_keys`` instead of raising.
    """
    result = PatchResult(requested=len(changes))
    matched = set()
    for source, document in documents.items():
        if document is None:
            continue
        changed = False
        for occ in iter_occurrences(document, source, max_depth):
            if occ.merge_key != (study_type, name):
                continue
            for slot in occ.slots:
                if slot.key not in changes:
                    continue
                matched.add(slot.key)
                result.applied += 1
                changed = slot.write(changes[slot.key]) or changed
        if changed:
            result.modified_sources.append(source)

    result.missing_keys = [key for key in changes if key not in matched]
    if result.missing_keys:
        logger.warning(f"{study_type}/{name}: no field matched {result.missing_keys}")

    if writer is not None:
        for source in result.modified_sources:
            writer(source, documents[source])
    logger.info(f"{study_type}/{name}: {result.applied} fields patched for "
                f"{result.requested} requested keys")
    return result


def apply_study(documents: Mapping[str, Any], study: Study, writer: Optional[DocumentWriter] = None,
                max_depth: int = DEFAULT_MAX_DEPTH) -> PatchResult:
    """Write every color of ``study`` back to the documents."""
    changes: Dict[str, ColorValue] = {c.key: c.value for c in study.colors}
    study_type, name = study.merge_key
    return apply_changes(documents, study_type, name, changes, writer, max_depth)
