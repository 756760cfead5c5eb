"""Merge Study records that describe the same entity in different files."""

from typing import Dict, Iterable, List, Tuple

from .models import Study


def merge_studies(studies: Iterable[Study]) -> List[Study]:
    """Group by ``(type, name or display name)``.

    The first record of a group is the base; later records only add colors
    whose key the group has not seen yet. Input records are not modified.
    """
    merged: Dict[Tuple[str, str], Study] = {}
    for study in studies:
        key = study.merge_key
        base = merged.get(key)
        if base is None:
            merged[key] = Study(study.source, study.type, study.identifier,
                                study.display_name, list(study.colors))
            continue
        known = {c.key for c in base.colors}
        for record in study.colors:
            if record.key not in known:
                known.add(record.key)
                base.colors.append(record)
    return list(merged.values())
