"""Viewport-space to grid-cell mapping decoupled from any widget toolkit."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from layout_engine.placement import CellRect

CELL_PIXEL_WIDTH = 100.0
CELL_PIXEL_HEIGHT = 100.0


@dataclass(frozen=True)
class ViewportRect:
    """Pixel rectangle of the viewport frame in pointer coordinates."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class ScreenRect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom


def grid_origin(
    viewport_rect: ViewportRect,
    pan_x: float,
    pan_y: float,
    zoom: float,
    columns: int,
    rows: int,
    *,
    cell_width: float = CELL_PIXEL_WIDTH,
    cell_height: float = CELL_PIXEL_HEIGHT,
) -> Tuple[float, float]:
    """Return the rendered top-left corner of the grid.

    The unscaled grid sits at the viewport origin shifted by the pan offset and
    is scaled about its own centre.
    """
    base_width = columns * cell_width
    base_height = rows * cell_height
    origin_x = viewport_rect.left + pan_x + base_width * (1.0 - zoom) / 2.0
    origin_y = viewport_rect.top + pan_y + base_height * (1.0 - zoom) / 2.0
    return origin_x, origin_y


def to_cell(
    pointer_x: float,
    pointer_y: float,
    viewport_rect: ViewportRect,
    pan_x: float,
    pan_y: float,
    zoom: float,
    columns: int,
    rows: int,
    *,
    cell_width: float = CELL_PIXEL_WIDTH,
    cell_height: float = CELL_PIXEL_HEIGHT,
) -> Tuple[int, int]:
    """Map a pointer position to a 1-indexed cell; results are not clamped to the grid."""
    origin_x, origin_y = grid_origin(
        viewport_rect,
        pan_x,
        pan_y,
        zoom,
        columns,
        rows,
        cell_width=cell_width,
        cell_height=cell_height,
    )
    cell_x = math.floor((pointer_x - origin_x) / (cell_width * zoom)) + 1
    cell_y = math.floor((pointer_y - origin_y) / (cell_height * zoom)) + 1
    return int(cell_x), int(cell_y)


def cell_rect_to_screen(
    rect: CellRect,
    viewport_rect: ViewportRect,
    pan_x: float,
    pan_y: float,
    zoom: float,
    columns: int,
    rows: int,
    *,
    cell_width: float = CELL_PIXEL_WIDTH,
    cell_height: float = CELL_PIXEL_HEIGHT,
) -> ScreenRect:
    origin_x, origin_y = grid_origin(
        viewport_rect,
        pan_x,
        pan_y,
        zoom,
        columns,
        rows,
        cell_width=cell_width,
        cell_height=cell_height,
    )
    step_x = cell_width * zoom
    step_y = cell_height * zoom
    left = origin_x + (rect.x - 1) * step_x
    top = origin_y + (rect.y - 1) * step_y
    return ScreenRect(left=left, top=top, right=left + rect.width * step_x, bottom=top + rect.height * step_y)
