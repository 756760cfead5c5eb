"""Command-line entry point for Theme Studio."""

import argparse
import json
import os
import sys
from typing import Optional, Tuple

from .bundle import apply_bundle, build_bundle, dump_bundle, load_bundle
from .color_codec import ColorValue
from .config import CONFIG_FILE, LOG_LEVELS, StudioConfig, load_config, validate_config
from .css_theme import read_theme_file
from .patcher import apply_changes
from .scanner import Inventory, scan_documents
from .utils import get_logger, setup_logging
from .workspace import Workspace, active_workspace, document_writer, load_documents

logger = get_logger("themestudio.cli")


def parse_change(text: str) -> Tuple[str, str, Optional[int]]:
    """``KEY=#rrggbb[aa]`` -> ``(key, "#rrggbb", alpha or None)``."""
    key, sep, color = text.partition("=")
    h = color.strip().lstrip("#")
    if not sep or not key or len(h) not in (6, 8):
        raise argparse.ArgumentTypeError(f"expected KEY=#rrggbb[aa], got {text!r}")
    try:
        int(h, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid color in {text!r}")
    alpha = int(h[6:8], 16) if len(h) == 8 else None
    return key, "#" + h[:6], alpha


def _load_context(args) -> Tuple[StudioConfig, Workspace]:
    cfg = load_config(args.config)
    if args.user_dir:
        cfg.user_dir = args.user_dir
    if args.workspace:
        cfg.workspace = args.workspace
    if args.log_level:
        cfg.log_level = args.log_level.upper()
    setup_logging(cfg.log_level if cfg.log_level in LOG_LEVELS else "INFO", cfg.log_file or None)
    for issue in validate_config(cfg):
        logger.warning(f"Configuration issue: {issue}")
    return cfg, active_workspace(cfg.user_dir, cfg.workspace)


def _inventory(cfg: StudioConfig, workspace: Workspace):
    documents, skipped = load_documents(workspace)
    inventory = scan_documents(documents, cfg.max_scan_depth)
    inventory.skipped = skipped + inventory.skipped
    return documents, inventory


def _print_inventory(inventory: Inventory):
    for study in inventory.studies:
        print(f"[{study.type}] {study.display_name}  ({study.name or study.display_name}, {study.source})")
        for record in study.colors:
            state = "" if record.enabled else "  (disabled)"
            print(f"    {record.key}: {record.value.hex} a={record.value.alpha}{state}")
    for source in inventory.skipped:
        print(f"skipped: {source}")


def cmd_scan(args) -> int:
    cfg, workspace = _load_context(args)
    _, inventory = _inventory(cfg, workspace)
    if args.json:
        print(dump_bundle(build_bundle(inventory.studies, workspace.name)))
    else:
        _print_inventory(inventory)
    return 0


def cmd_set(args) -> int:
    cfg, workspace = _load_context(args)
    documents, inventory = _inventory(cfg, workspace)
    current = inventory.find(args.type, args.name)
    changes = {}
    for key, h, alpha in args.changes:
        if alpha is None:
            # keep the alpha already stored for this field
            record = current.color(key) if current else None
            alpha = record.value.alpha if record else 255
        changes[key] = ColorValue.from_hex(h, alpha)
    result = apply_changes(documents, args.type, args.name, changes,
                           writer=document_writer(workspace), max_depth=cfg.max_scan_depth)
    print(f"Patched {result.applied} fields for {result.requested} requested colors")
    for key in result.missing_keys:
        print(f"not found: {key}")
    return 0 if result.complete else 1


def cmd_export(args) -> int:
    cfg, workspace = _load_context(args)
    _, inventory = _inventory(cfg, workspace)
    with open(args.output, "w", encoding="utf-8") as f:
        f.write(dump_bundle(build_bundle(inventory.studies, workspace.name)))
    print(f"Exported {len(inventory.studies)} studies to {args.output}")
    return 0


def cmd_import(args) -> int:
    cfg, workspace = _load_context(args)
    try:
        with open(args.bundle, "r", encoding="utf-8") as f:
            studies = load_bundle(f.read())
    except (OSError, ValueError) as e:
        print(f"Cannot import {args.bundle}: {e}", file=sys.stderr)
        return 2
    documents, _ = load_documents(workspace)
    results = apply_bundle(documents, studies, writer=document_writer(workspace))
    missing = sum(r.discrepancy for r in results)
    print(f"Applied {sum(r.applied for r in results)} fields from {len(studies)} studies")
    if missing:
        print(f"{missing} colors had no matching field")
    return 0 if missing == 0 else 1


def cmd_swatches(args) -> int:
    cfg, workspace = _load_context(args)
    _, inventory = _inventory(cfg, workspace)
    from .swatches import render_swatch_sheet
    print(render_swatch_sheet(inventory.studies, args.output))
    return 0


def cmd_theme(args) -> int:
    cfg, _ = _load_context(args)
    theme = read_theme_file(os.path.join(cfg.styles_dir, "dark.css"))
    if theme is None:
        print("dark.css not found", file=sys.stderr)
        return 1
    print(json.dumps(theme.to_json(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="themestudio")
    parser.add_argument("--config", default=CONFIG_FILE)
    parser.add_argument("--user-dir")
    parser.add_argument("--workspace")
    parser.add_argument("--log-level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("scan", help="list color-bearing studies")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_scan)

    p = sub.add_parser("set", help="change colors of one study")
    p.add_argument("type")
    p.add_argument("name")
    p.add_argument("changes", nargs="+", type=parse_change)
    p.set_defaults(func=cmd_set)

    p = sub.add_parser("export", help="write a .mwtheme bundle")
    p.add_argument("output")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("import", help="apply a .mwtheme bundle")
    p.add_argument("bundle")
    p.set_defaults(func=cmd_import)

    p = sub.add_parser("swatches", help="render a palette preview PNG")
    p.add_argument("output")
    p.set_defaults(func=cmd_swatches)

    p = sub.add_parser("theme", help="show the installed stylesheet colors")
    p.set_defaults(func=cmd_theme)
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
