"""Configuration helpers for the grid layout editor."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from layout_engine.coordinate_mapper import CELL_PIXEL_HEIGHT, CELL_PIXEL_WIDTH
from layout_engine.placement import GRID_COLUMNS, GRID_ROWS
from layout_engine.resize import RESIZE_THRESHOLD
from layout_engine.viewport import INITIAL_ZOOM, MAX_ZOOM, MIN_ZOOM, ZOOM_STEP

SETTINGS_FILENAME = "grid_layout_settings.json"
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20

ENV_BASE_URL = "GRID_LAYOUT_BASE_URL"
ENV_TOKEN = "GRID_LAYOUT_TOKEN"
ENV_LAYOUT_FILE = "GRID_LAYOUT_FILE"
ENV_DEBUG = "GRID_LAYOUT_DEBUG"


@dataclass(frozen=True)
class EditorSettings:
    """Values used to bootstrap an editing session."""

    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS
    cell_width: float = CELL_PIXEL_WIDTH
    cell_height: float = CELL_PIXEL_HEIGHT
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    zoom_step: float = ZOOM_STEP
    initial_zoom: float = INITIAL_ZOOM
    resize_threshold: float = RESIZE_THRESHOLD
    exact_resize_clamp: bool = False
    base_url: str = "http://localhost:3000"
    token: Optional[str] = None
    layout_file: Optional[Path] = None
    request_timeout: float = 5.0
    save_debounce_seconds: float = 0.05
    log_retention: int = 5
    debug: bool = False


def _int(value: Any, fallback: int, *, minimum: int = 1) -> int:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        return max(minimum, int(value))
    except (TypeError, ValueError):
        return fallback


def _float(value: Any, fallback: float, *, minimum: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        return max(minimum, float(value))
    except (TypeError, ValueError):
        return fallback


def _bool(value: Any, fallback: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off"}:
            return False
        return fallback
    return bool(value)


def _text(value: Any, fallback: Optional[str]) -> Optional[str]:
    if value is None:
        return fallback
    text = str(value).strip()
    return text or fallback


def settings_from_mapping(data: Mapping[str, Any], base: Optional[EditorSettings] = None) -> EditorSettings:
    defaults = base or EditorSettings()
    min_zoom = _float(data.get("min_zoom"), defaults.min_zoom, minimum=0.01)
    max_zoom = _float(data.get("max_zoom"), defaults.max_zoom, minimum=0.01)
    if min_zoom > max_zoom:
        min_zoom, max_zoom = max_zoom, min_zoom
    initial_zoom = _float(data.get("initial_zoom"), defaults.initial_zoom, minimum=0.01)
    layout_file_raw = _text(data.get("layout_file"), None)
    retention = _int(data.get("log_retention"), defaults.log_retention, minimum=LOG_RETENTION_MIN)
    return EditorSettings(
        columns=_int(data.get("columns"), defaults.columns),
        rows=_int(data.get("rows"), defaults.rows),
        cell_width=_float(data.get("cell_width"), defaults.cell_width, minimum=1.0),
        cell_height=_float(data.get("cell_height"), defaults.cell_height, minimum=1.0),
        min_zoom=min_zoom,
        max_zoom=max_zoom,
        zoom_step=_float(data.get("zoom_step"), defaults.zoom_step, minimum=0.001),
        initial_zoom=min(max(min_zoom, initial_zoom), max_zoom),
        resize_threshold=_float(data.get("resize_threshold"), defaults.resize_threshold),
        exact_resize_clamp=_bool(data.get("exact_resize_clamp"), defaults.exact_resize_clamp),
        base_url=_text(data.get("base_url"), defaults.base_url) or defaults.base_url,
        token=_text(data.get("token"), defaults.token),
        layout_file=Path(layout_file_raw).expanduser() if layout_file_raw else defaults.layout_file,
        request_timeout=_float(data.get("request_timeout"), defaults.request_timeout, minimum=0.1),
        save_debounce_seconds=_float(data.get("save_debounce_seconds"), defaults.save_debounce_seconds),
        log_retention=min(retention, LOG_RETENTION_MAX),
        debug=_bool(data.get("debug"), defaults.debug),
    )


def load_settings(settings_path: Path) -> EditorSettings:
    """Read settings from JSON; a missing or malformed file yields defaults."""
    defaults = EditorSettings()
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return defaults
    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError:
        return defaults
    if not isinstance(data, dict):
        return defaults
    return settings_from_mapping(data, defaults)


def apply_env_overrides(settings: EditorSettings, env: Optional[Mapping[str, str]] = None) -> EditorSettings:
    source = os.environ if env is None else env
    changes: Dict[str, Any] = {}
    base_url = _text(source.get(ENV_BASE_URL), None)
    if base_url:
        changes["base_url"] = base_url
    token = _text(source.get(ENV_TOKEN), None)
    if token:
        changes["token"] = token
    layout_file = _text(source.get(ENV_LAYOUT_FILE), None)
    if layout_file:
        changes["layout_file"] = Path(layout_file).expanduser()
    if source.get(ENV_DEBUG) is not None:
        changes["debug"] = _bool(source.get(ENV_DEBUG), settings.debug)
    if not changes:
        return settings
    return replace(settings, **changes)


def resolve_settings_path(arg_path: Optional[str], root: Path) -> Path:
    if arg_path:
        return Path(arg_path).expanduser().resolve()
    return (root / SETTINGS_FILENAME).resolve()
