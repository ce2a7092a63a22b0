"""Move gestures: clamped candidates with axis fallback and off-grid eviction."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from layout_engine.occupancy import is_valid_candidate
from layout_engine.placement import CellRect, Grid, Placement
from layout_engine.placement_store import PlacementStore

_LOGGER = logging.getLogger("GridLayout.Engine.Drag")


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def is_off_grid(grid: Grid, cell_x: int, cell_y: int) -> bool:
    return not grid.contains(cell_x, cell_y)


def drag_candidates(
    placement: Placement,
    cell_x: int,
    cell_y: int,
    grab_offset: Tuple[int, int],
    grid: Grid,
) -> List[CellRect]:
    """Return the full, horizontal-only and vertical-only candidates in priority order."""
    width = placement.width
    height = placement.height
    new_x = _clamp(cell_x - grab_offset[0], 1, grid.columns + 1 - width)
    new_y = _clamp(cell_y - grab_offset[1], 1, grid.rows + 1 - height)
    return [
        CellRect(new_x, new_y, width, height),
        CellRect(new_x, placement.y, width, height),
        CellRect(placement.x, new_y, width, height),
    ]


def first_valid_candidate(
    layout: Iterable[Placement],
    grid: Grid,
    candidates: Iterable[CellRect],
    excluding: Optional[Placement] = None,
) -> Optional[CellRect]:
    placements = list(layout)
    for candidate in candidates:
        if is_valid_candidate(placements, grid, candidate, excluding=excluding):
            return candidate
    return None


def apply_drag(store: PlacementStore, placement: Placement, candidates: Iterable[CellRect], grid: Grid) -> bool:
    """Move to the first valid candidate; returns True when the placement changed position."""
    chosen = first_valid_candidate(store, grid, candidates, excluding=placement)
    if chosen is None:
        _LOGGER.debug("Drag of %s blocked on both axes", placement.describe())
        return False
    if (chosen.x, chosen.y) == (placement.x, placement.y):
        return False
    store.move(placement, chosen.x, chosen.y)
    return True


def reinsert_evicted(store: PlacementStore, placement: Placement, candidates: Iterable[CellRect], grid: Grid) -> bool:
    """Place a detached placement back on the grid at its first valid candidate."""
    chosen = first_valid_candidate(store, grid, candidates, excluding=placement)
    if chosen is None:
        return False
    placement.move_to(chosen.x, chosen.y)
    store.add(placement)
    _LOGGER.debug("Reinserted evicted placement %s", placement.describe())
    return True
