"""Grid layout engine: placement store, viewport and gesture algorithms."""

__version__ = "0.1.0"

from layout_engine.coordinate_mapper import ScreenRect, ViewportRect, cell_rect_to_screen, grid_origin, to_cell
from layout_engine.engine import LayoutEngine
from layout_engine.gesture import GestureState, InteractionMode, PointerEvent, WheelEvent
from layout_engine.occupancy import find_free_cell, overlaps, widget_at
from layout_engine.placement import GRID_COLUMNS, GRID_ROWS, CellRect, Grid, Placement, layout_to_records
from layout_engine.placement_store import PlacementStore
from layout_engine.viewport import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP, ViewportController, ViewportState

__all__ = [
    "CellRect",
    "GestureState",
    "Grid",
    "GRID_COLUMNS",
    "GRID_ROWS",
    "InteractionMode",
    "LayoutEngine",
    "MAX_ZOOM",
    "MIN_ZOOM",
    "Placement",
    "PlacementStore",
    "PointerEvent",
    "ScreenRect",
    "ViewportController",
    "ViewportRect",
    "ViewportState",
    "WheelEvent",
    "ZOOM_STEP",
    "cell_rect_to_screen",
    "find_free_cell",
    "grid_origin",
    "layout_to_records",
    "overlaps",
    "to_cell",
    "widget_at",
    "__version__",
]
