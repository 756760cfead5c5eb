"""MotiveWave workspace files: locating, reading and writing documents.

A :class:`Workspace` is passed explicitly to every call that needs one;
nothing here remembers a selected workspace between calls.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .utils import get_logger

logger = get_logger("themestudio.workspace")

DEFAULT_WORKSPACE = "default"
SETTINGS_SOURCE = "settings"
CONFIG_SOURCE = "config"
DEFAULTS_SOURCE = "defaults"


class DocumentUnreadable(Exception):
    """A document is missing, empty, unreadable or not valid JSON."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


@dataclass(frozen=True)
class Workspace:
    user_dir: str
    name: str = DEFAULT_WORKSPACE

    @property
    def settings_path(self) -> str:
        return os.path.join(self.user_dir, "settings.json")

    @property
    def config_dir(self) -> str:
        return os.path.join(self.user_dir, "workspaces", self.name, "config")

    @property
    def config_path(self) -> str:
        return os.path.join(self.config_dir, "config.json")

    @property
    def defaults_path(self) -> str:
        return os.path.join(self.config_dir, "defaults.json")

    def document_paths(self) -> Dict[str, str]:
        return {
            SETTINGS_SOURCE: self.settings_path,
            CONFIG_SOURCE: self.config_path,
            DEFAULTS_SOURCE: self.defaults_path,
        }


def list_workspaces(user_dir: str) -> List[str]:
    root = os.path.join(user_dir, "workspaces")
    try:
        entries = sorted(os.listdir(root))
    except OSError:
        return []
    return [d for d in entries if os.path.isdir(os.path.join(root, d))]


def active_workspace(user_dir: str, preferred: Optional[str] = None) -> Workspace:
    """``preferred`` if it exists, else the first workspace, else ``"default"``."""
    names = list_workspaces(user_dir)
    if preferred and preferred in names:
        return Workspace(user_dir, preferred)
    if preferred:
        logger.warning(f"Workspace {preferred!r} not found under {user_dir}")
    return Workspace(user_dir, names[0] if names else DEFAULT_WORKSPACE)


def parse_document(text: Optional[str], source: str = "<text>") -> Any:
    if text is None or not text.strip():
        raise DocumentUnreadable(source, "empty document")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentUnreadable(source, f"malformed JSON ({e})") from e
    except RecursionError as e:
        raise DocumentUnreadable(source, "nesting too deep") from e


def read_document(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as e:
        raise DocumentUnreadable(path, "file not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentUnreadable(path, str(e)) from e
    return parse_document(text, path)


def parse_documents(texts: Dict[str, Optional[str]]) -> Tuple[Dict[str, Any], List[str]]:
    """Parse raw texts by source label, skipping the unreadable ones."""
    documents: Dict[str, Any] = {}
    skipped: List[str] = []
    for source, text in texts.items():
        try:
            documents[source] = parse_document(text, source)
        except DocumentUnreadable as e:
            logger.warning(f"Skipping document: {e}")
            skipped.append(source)
    return documents, skipped


def load_documents(workspace: Workspace) -> Tuple[Dict[str, Any], List[str]]:
    """Read the workspace document set. Unreadable files are logged and skipped."""
    documents: Dict[str, Any] = {}
    skipped: List[str] = []
    for source, path in workspace.document_paths().items():
        try:
            documents[source] = read_document(path)
        except DocumentUnreadable as e:
            logger.warning(f"Skipping {source} document: {e}")
            skipped.append(source)
    return documents, skipped


def dump_document(document: Any) -> str:
    # Compact, the way MotiveWave writes its own files
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


def save_document(path: str, document: Any):
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_document(document))


def document_writer(workspace: Workspace):
    """Writer callback for the patcher, mapping source labels to workspace files."""
    paths = workspace.document_paths()

    def write(source: str, document: Any):
        path = paths[source]
        save_document(path, document)
        logger.info(f"Wrote {source} document to {path}")

    return write
