"""Export/import of ``.mwtheme`` color bundles."""

import json
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from . import __version__
from .models import Study
from .patcher import DocumentWriter, PatchResult, apply_study
from .utils import get_logger

logger = get_logger("themestudio.bundle")

BUNDLE_VERSION = 1
BUNDLE_EXTENSION = ".mwtheme"
APP_NAME = "mw-theme-studio"


def build_bundle(studies: Iterable[Study], workspace: Optional[str] = None) -> dict:
    return {
        "version": BUNDLE_VERSION,
        "source": {
            "app": APP_NAME,
            "app_version": __version__,
            "workspace": workspace,
            "created_at": datetime.now().isoformat(timespec="seconds"),
        },
        "studies": [s.to_json() for s in studies],
    }


def dump_bundle(bundle: dict) -> str:
    return json.dumps(bundle, indent=2)


def load_bundle(text: str) -> List[Study]:
    """Studies of a bundle. Raises ValueError for anything that is not one."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid theme bundle: {e}") from e
    if not isinstance(payload, dict) or not isinstance(payload.get("studies"), list):
        raise ValueError("Invalid theme bundle: no studies")
    version = payload.get("version")
    if not isinstance(version, int) or version > BUNDLE_VERSION:
        raise ValueError(f"Unsupported theme bundle version: {version!r}")
    studies = []
    for entry in payload["studies"]:
        if isinstance(entry, dict):
            studies.append(Study.from_json(entry))
    return studies


def apply_bundle(documents: Mapping[str, Any], studies: Iterable[Study],
                 writer: Optional[DocumentWriter] = None) -> List[PatchResult]:
    """Patch every bundled Study into the documents, one result per Study.

    Documents are written once at the end, after all studies are applied.
    """
    results = []
    modified = []
    for study in studies:
        result = apply_study(documents, study)
        if not result.complete:
            logger.warning(f"{study.display_name}: {result.discrepancy} colors not found in documents")
        results.append(result)
        for source in result.modified_sources:
            if source not in modified:
                modified.append(source)
    if writer is not None:
        for source in modified:
            writer(source, documents[source])
    return results
