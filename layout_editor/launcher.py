from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from PyQt6.QtWidgets import QApplication

from layout_editor.bootstrap import EditorSession, build_api_client, build_session, load_palette
from layout_editor.editor_window import EditorWindow
from layout_editor.logging_utils import configure_logging, resolve_logs_dir
from layout_editor.settings import EditorSettings, apply_env_overrides, load_settings, resolve_settings_path
from layout_services.catalog import PaletteSection

_LOGGER = logging.getLogger("GridLayout.Editor")

EDITOR_ROOT = Path(__file__).resolve().parent.parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid layout editor for dashboard widgets")
    parser.add_argument("--settings", help="Path to grid_layout_settings.json")
    parser.add_argument("--base-url", help="Base URL of the layout and plugin catalog service")
    parser.add_argument("--token", help="Access token sent as a Bearer credential")
    parser.add_argument("--layout-file", help="Load and save the layout from a local JSON file")
    parser.add_argument("--columns", type=int, help="Grid columns")
    parser.add_argument("--rows", type=int, help="Grid rows")
    parser.add_argument("--offline", action="store_true", help="Do not contact the plugin catalog")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def resolve_settings(args: argparse.Namespace) -> EditorSettings:
    settings_path = resolve_settings_path(args.settings, EDITOR_ROOT)
    settings = apply_env_overrides(load_settings(settings_path))
    changes = {}
    if args.base_url:
        changes["base_url"] = args.base_url
    if args.token:
        changes["token"] = args.token
    if args.layout_file:
        changes["layout_file"] = Path(args.layout_file).expanduser()
    if args.columns and args.columns > 0:
        changes["columns"] = args.columns
    if args.rows and args.rows > 0:
        changes["rows"] = args.rows
    if args.debug:
        changes["debug"] = True
    return replace(settings, **changes) if changes else settings


def prepare_session(args: argparse.Namespace, settings: EditorSettings) -> Tuple[EditorSession, List[PaletteSection]]:
    """Build the editing session and palette; offline mode never contacts the plugin catalog."""
    api_client = None if args.offline and settings.layout_file is not None else build_api_client(settings)
    session = build_session(settings, api_client=api_client)
    return session, load_palette(session.api_client, offline=args.offline)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(resolve_logs_dir(EDITOR_ROOT), debug=settings.debug, retention=settings.log_retention)

    _LOGGER.info("Starting grid layout editor (pid=%s)", os.getpid())
    _LOGGER.debug(
        "Settings: grid=%dx%d zoom=%.2f [%.2f..%.2f] step=%.2f threshold=%.0fpx exact_clamp=%s",
        settings.columns,
        settings.rows,
        settings.initial_zoom,
        settings.min_zoom,
        settings.max_zoom,
        settings.zoom_step,
        settings.resize_threshold,
        settings.exact_resize_clamp,
    )

    session, palette = prepare_session(args, settings)

    app = QApplication(sys.argv[:1])
    window = EditorWindow(session.engine)
    window.set_palette(palette)
    window.resize(1280, 800)
    window.show()

    exit_code = app.exec()
    session.shutdown()
    _LOGGER.info("Grid layout editor exiting with code %s", exit_code)
    return int(exit_code)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
