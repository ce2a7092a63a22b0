from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_ROOT = "GridLayout"
LOG_FILENAME = "grid-layout-editor.log"
_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_logs_dir(base_path: Path, log_dir_name: str = "GridLayoutEditor") -> Path:
    """
    Resolve the directory to store editor logs.

    Strategy:
    - Use GRID_LAYOUT_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `<base_path>/logs`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get("GRID_LAYOUT_LOG_DIR")
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "grid-layout" / "logs")
    candidates.append(cache_home / "grid-layout" / "logs")
    candidates.append(Path(base_path) / "logs")

    for base in candidates:
        try:
            target = base / log_dir_name
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def configure_logging(
    log_dir: Path,
    *,
    debug: bool = False,
    retention: int = 5,
    console: bool = True,
) -> logging.Logger:
    """Attach file (and optionally console) handlers to the ``GridLayout`` logger tree."""
    logger = logging.getLogger(LOGGER_ROOT)
    logger.setLevel(resolve_log_level(debug))
    for handler in list(logger.handlers):
        if getattr(handler, "_grid_layout_owned", False):
            logger.removeHandler(handler)
            handler.close()
    formatter = logging.Formatter(_LOG_FORMAT)
    file_handler = build_rotating_file_handler(log_dir, LOG_FILENAME, retention=retention, formatter=formatter)
    file_handler._grid_layout_owned = True  # type: ignore[attr-defined]
    logger.addHandler(file_handler)
    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        stream_handler._grid_layout_owned = True  # type: ignore[attr-defined]
        logger.addHandler(stream_handler)
    return logger
