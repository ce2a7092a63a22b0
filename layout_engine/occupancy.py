"""Occupancy queries shared by drag, resize and insertion."""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from layout_engine.placement import CellRect, Grid, Placement


def widget_at(layout: Iterable[Placement], cell_x: int, cell_y: int) -> Optional[Placement]:
    for placement in layout:
        if placement.contains(cell_x, cell_y):
            return placement
    return None


def overlaps(layout: Iterable[Placement], candidate: CellRect, excluding: Optional[Placement] = None) -> bool:
    """True when any placement other than ``excluding`` shares a cell with ``candidate``."""
    for placement in layout:
        if placement is excluding:
            continue
        if placement.rect.intersects(candidate):
            return True
    return False


def in_bounds(grid: Grid, candidate: CellRect) -> bool:
    return grid.fits(candidate.x, candidate.y, candidate.width, candidate.height)


def is_valid_candidate(
    layout: Iterable[Placement],
    grid: Grid,
    candidate: CellRect,
    excluding: Optional[Placement] = None,
) -> bool:
    if not in_bounds(grid, candidate):
        return False
    return not overlaps(layout, candidate, excluding)


def find_free_cell(layout: Iterable[Placement], grid: Grid) -> Optional[Tuple[int, int]]:
    """Row-major scan from (1, 1) for the first unoccupied cell."""
    placements = list(layout)
    occupied = set()
    for placement in placements:
        occupied.update(placement.cells())
    for y in range(1, grid.rows + 1):
        for x in range(1, grid.columns + 1):
            if (x, y) not in occupied:
                return x, y
    return None
