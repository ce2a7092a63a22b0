"""JSON file persistence for layouts."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from layout_services.errors import PersistenceFailure

_LOGGER = logging.getLogger("GridLayout.Services.FileStore")


class JsonLayoutFile:
    """Reads and writes the layout as a JSON array of placement records."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_layout(self) -> List[Dict[str, Any]]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceFailure(f"Failed to read layout file {self._path}: {exc}") from exc
        if not isinstance(raw, list):
            raise PersistenceFailure(f"Layout file {self._path} does not contain a list")
        return [entry for entry in raw if isinstance(entry, dict)]

    def save_layout(self, records: Sequence[Mapping[str, Any]]) -> None:
        payload = [dict(record) for record in records]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            raise PersistenceFailure(f"Failed to write layout file {self._path}: {exc}") from exc
        _LOGGER.debug("Wrote %d placements to %s", len(payload), self._path)
