"""Session-start layout loading."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Protocol, Sequence

from layout_engine.occupancy import is_valid_candidate
from layout_engine.placement import Grid, Placement
from layout_services.errors import PersistenceFailure, UnauthenticatedError

_LOGGER = logging.getLogger("GridLayout.Services.Session")


class LayoutSource(Protocol):
    def load_layout(self) -> List[Dict[str, Any]]: ...


class LayoutBackend(LayoutSource, Protocol):
    def save_layout(self, records: Sequence[Mapping[str, Any]]) -> None: ...


def placements_from_records(records: Sequence[Any], grid: Grid) -> List[Placement]:
    """Convert records to placements, dropping ones that break bounds or overlap earlier ones."""
    placements: List[Placement] = []
    for index, record in enumerate(records):
        try:
            placement = Placement.from_record(record)
        except ValueError as exc:
            _LOGGER.warning("Skipping layout record %d: %s", index, exc)
            continue
        if not is_valid_candidate(placements, grid, placement.rect):
            _LOGGER.warning("Skipping layout record %d: %s is out of bounds or overlaps", index, placement.describe())
            continue
        placements.append(placement)
    return placements


def load_session_layout(source: LayoutSource, grid: Grid) -> List[Placement]:
    """Load the initial layout; any persistence failure yields an empty layout."""
    try:
        records = source.load_layout()
    except UnauthenticatedError as exc:
        _LOGGER.warning("Layout load unauthenticated; starting with an empty layout: %s", exc)
        return []
    except PersistenceFailure as exc:
        _LOGGER.error("Layout load failed; starting with an empty layout: %s", exc)
        return []
    placements = placements_from_records(records, grid)
    _LOGGER.info("Loaded %d placements (%d records)", len(placements), len(records))
    return placements
