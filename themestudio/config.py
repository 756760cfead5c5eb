"""Configuration management for Theme Studio."""

import os
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .json_tree import DEFAULT_MAX_DEPTH
from .utils import get_logger

logger = get_logger("themestudio.config")

# Configuration constants
STUDIO_DIR = os.path.join(os.path.expanduser("~"), ".mw-theme-studio")
CONFIG_FILE = os.path.join(STUDIO_DIR, "studio_config.json")
PRESETS_FILE = os.path.join(STUDIO_DIR, "presets.json")
CONFIG_VERSION = 1

DEFAULT_USER_DIR = os.path.join(os.path.expanduser("~"), "Library", "MotiveWave")
DEFAULT_STYLES_DIR = "/Applications/MotiveWave.app/Contents/styles"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MAX_SCAN_DEPTH_LIMIT = 200


@dataclass
class StudioConfig:
    config_version: int = CONFIG_VERSION
    user_dir: str = DEFAULT_USER_DIR
    styles_dir: str = DEFAULT_STYLES_DIR
    workspace: Optional[str] = None   # None = first workspace found
    max_scan_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = "INFO"
    log_file: str = ""

    def to_json(self) -> dict:
        return {
            "config_version": self.config_version,
            "user_dir": self.user_dir,
            "styles_dir": self.styles_dir,
            "workspace": self.workspace,
            "max_scan_depth": self.max_scan_depth,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    @staticmethod
    def from_json(d: dict) -> "StudioConfig":
        cfg = StudioConfig()
        cfg.config_version = int(d.get("config_version", cfg.config_version))
        cfg.user_dir = str(d.get("user_dir") or cfg.user_dir)
        cfg.styles_dir = str(d.get("styles_dir") or cfg.styles_dir)
        cfg.workspace = d.get("workspace") or None
        cfg.max_scan_depth = int(d.get("max_scan_depth", cfg.max_scan_depth))
        cfg.log_level = str(d.get("log_level", cfg.log_level)).upper()
        cfg.log_file = str(d.get("log_file") or "")
        return cfg


def validate_config(cfg: StudioConfig) -> List[str]:
    """Validate configuration and return list of warnings/errors."""
    issues = []

    if cfg.max_scan_depth < 1 or cfg.max_scan_depth > MAX_SCAN_DEPTH_LIMIT:
        issues.append(f"Scan depth must be between 1 and {MAX_SCAN_DEPTH_LIMIT}")

    if cfg.log_level not in LOG_LEVELS:
        issues.append(f"Invalid log level: {cfg.log_level}")

    if not cfg.user_dir:
        issues.append("MotiveWave user directory must be set")

    if cfg.workspace is not None and not str(cfg.workspace).strip():
        issues.append("Workspace name cannot be blank")

    return issues


def load_config(path: str = CONFIG_FILE) -> StudioConfig:
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            cfg = StudioConfig.from_json(data)
            if cfg.config_version < CONFIG_VERSION:
                cfg.config_version = CONFIG_VERSION
                save_config(cfg, path)
            if cfg.log_level not in LOG_LEVELS:
                cfg.log_level = "INFO"
            return cfg
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Could not read config {path}, using defaults: {e}")
    return StudioConfig()


def save_config(cfg: StudioConfig, path: str = CONFIG_FILE):
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cfg.to_json(), f, indent=2)
    except OSError as e:
        logger.warning(f"Could not save config {path}: {e}")


def load_presets(path: str = PRESETS_FILE) -> Dict[str, Any]:
    """Saved user presets by name. A missing or broken file means no presets."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            presets = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read presets {path}: {e}")
        return {}
    return presets if isinstance(presets, dict) else {}


def _write_presets(presets: Dict[str, Any], path: str):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(presets, f, indent=2)


def save_preset(name: str, data: Any, path: str = PRESETS_FILE):
    if not name or not name.strip():
        raise ValueError("Preset name cannot be blank")
    presets = load_presets(path)
    presets[name] = data
    _write_presets(presets, path)


def delete_preset(name: str, path: str = PRESETS_FILE) -> bool:
    """Remove a preset. Returns False if there was nothing to remove."""
    presets = load_presets(path)
    if name not in presets:
        return False
    del presets[name]
    _write_presets(presets, path)
    return True
