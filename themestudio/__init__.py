"""Theme Studio - color engine for MotiveWave configuration files."""

__version__ = "0.1.0"

from .color_codec import ColorValue, parse, serialize
from .identity import display_name
from .models import ColorRecord, Study
from .extractor import extract_colors
from .scanner import Inventory, scan, scan_documents
from .merger import merge_studies
from .patcher import PatchResult, apply_changes, apply_study
from .workspace import Workspace, DocumentUnreadable, active_workspace, load_documents
from .config import StudioConfig, load_config, save_config, validate_config
from .utils import setup_logging, get_logger

__all__ = [
    "ColorValue", "parse", "serialize", "display_name", "ColorRecord",
    "Study", "extract_colors", "Inventory", "scan", "scan_documents",
    "merge_studies", "PatchResult", "apply_changes", "apply_study",
    "Workspace", "DocumentUnreadable", "active_workspace", "load_documents",
    "StudioConfig", "load_config", "save_config", "validate_config",
    "setup_logging", "get_logger"
]
