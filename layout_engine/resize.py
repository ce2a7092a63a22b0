"""Resize-handle detection and resize geometry for placements."""
from __future__ import annotations

import logging

from layout_engine.coordinate_mapper import ScreenRect
from layout_engine.occupancy import is_valid_candidate
from layout_engine.placement import CellRect, Grid, Placement
from layout_engine.placement_store import PlacementStore

RESIZE_THRESHOLD = 10.0

RESIZE_DIRECTIONS = frozenset({"n", "s", "e", "w", "nw", "ne", "sw", "se"})

CURSOR_FOR_DIRECTION = {
    "n": "ns-resize",
    "s": "ns-resize",
    "w": "ew-resize",
    "e": "ew-resize",
    "nw": "nwse-resize",
    "ne": "nesw-resize",
    "sw": "nesw-resize",
    "se": "nwse-resize",
}

_LOGGER = logging.getLogger("GridLayout.Engine.Resize")


def resize_direction(rect: ScreenRect, pointer_x: float, pointer_y: float, threshold: float = RESIZE_THRESHOLD) -> str:
    """Return the handle token under the pointer, or ``""`` for the placement body.

    When a placement is narrower than two thresholds both opposite edges match;
    the nearer edge wins.
    """
    near_top = pointer_y < rect.top + threshold
    near_bottom = pointer_y > rect.bottom - threshold
    near_left = pointer_x < rect.left + threshold
    near_right = pointer_x > rect.right - threshold

    vertical = ""
    if near_top and near_bottom:
        vertical = "n" if (pointer_y - rect.top) <= (rect.bottom - pointer_y) else "s"
    elif near_top:
        vertical = "n"
    elif near_bottom:
        vertical = "s"

    horizontal = ""
    if near_left and near_right:
        horizontal = "w" if (pointer_x - rect.left) <= (rect.right - pointer_x) else "e"
    elif near_left:
        horizontal = "w"
    elif near_right:
        horizontal = "e"

    return vertical + horizontal


def cursor_for_direction(direction: str) -> str:
    return CURSOR_FOR_DIRECTION.get(direction, "move")


def _correct_overshoot(origin: int, span: int, limit: int, exact_clamp: bool) -> int:
    if origin + span - 1 <= limit:
        return span
    boundary_span = limit - origin + 1
    if exact_clamp:
        return max(1, boundary_span)
    span -= 1
    if origin + span - 1 <= limit:
        return max(1, span)
    # Still past the boundary after the one-cell correction: stop one cell short.
    return max(1, boundary_span - 1)


def compute_resize(
    placement: Placement,
    cell_x: int,
    cell_y: int,
    direction: str,
    grid: Grid,
    *,
    exact_clamp: bool = False,
) -> CellRect:
    """Compute the candidate footprint for dragging ``direction`` handles to a cell."""
    wx = placement.x
    wy = placement.y
    width = placement.width
    height = placement.height

    if "e" in direction:
        width = cell_x - wx + 1
    if "s" in direction:
        height = cell_y - wy + 1
    if "w" in direction:
        width += wx - cell_x
        wx = cell_x
    if "n" in direction:
        height += wy - cell_y
        wy = cell_y

    width = max(1, width)
    height = max(1, height)
    width = _correct_overshoot(wx, width, grid.columns, exact_clamp)
    height = _correct_overshoot(wy, height, grid.rows, exact_clamp)

    # A one-cell span cannot be inverted by pulling its leading edge past the trailing one.
    if wy > placement.y and placement.height == 1:
        wy = placement.y
    if wx > placement.x and placement.width == 1:
        wx = placement.x

    return CellRect(wx, wy, width, height)


def apply_resize(store: PlacementStore, placement: Placement, candidate: CellRect, grid: Grid) -> bool:
    """Commit ``candidate`` when it is in bounds and free; otherwise leave the placement untouched."""
    if candidate == placement.rect:
        return False
    if not is_valid_candidate(store, grid, candidate, excluding=placement):
        _LOGGER.debug("Rejected resize of %s to %s", placement.describe(), candidate)
        return False
    store.reshape(placement, candidate)
    return True
