"""Interaction state machine for the grid layout editor.

``LayoutEngine`` receives toolkit-neutral pointer and wheel events, maps them to
grid cells and dispatches to the drag or resize algorithms. It never queries a
rendering surface: the placement store is the authority and renderers project
it by subscribing to store, viewport and engine notifications.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from layout_engine.coordinate_mapper import (
    CELL_PIXEL_HEIGHT,
    CELL_PIXEL_WIDTH,
    ScreenRect,
    ViewportRect,
    cell_rect_to_screen,
    grid_origin,
    to_cell,
)
from layout_engine.drag import apply_drag, drag_candidates, is_off_grid, reinsert_evicted
from layout_engine.gesture import GestureState, InteractionMode, PointerEvent, WheelEvent
from layout_engine.occupancy import find_free_cell, widget_at
from layout_engine.placement import CellRect, Grid, LayoutRecord, Placement
from layout_engine.placement_store import PlacementStore
from layout_engine.resize import RESIZE_THRESHOLD, apply_resize, compute_resize, cursor_for_direction, resize_direction
from layout_engine.viewport import ViewportController

_LOGGER = logging.getLogger("GridLayout.Engine")

SaveFn = Callable[[List[LayoutRecord]], object]
EngineListener = Callable[[str], None]

CURSOR_BACKGROUND = "grab"
CURSOR_PANNING = "grabbing"


class LayoutEngine:
    """Owns the interaction mode and applies gestures to the placement store."""

    def __init__(
        self,
        store: Optional[PlacementStore] = None,
        *,
        grid: Optional[Grid] = None,
        viewport: Optional[ViewportController] = None,
        viewport_rect: Optional[ViewportRect] = None,
        cell_width: float = CELL_PIXEL_WIDTH,
        cell_height: float = CELL_PIXEL_HEIGHT,
        resize_threshold: float = RESIZE_THRESHOLD,
        exact_resize_clamp: bool = False,
        save: Optional[SaveFn] = None,
    ) -> None:
        self._store = store if store is not None else PlacementStore()
        self._grid = grid or Grid()
        self._viewport = viewport or ViewportController()
        self._viewport_rect = viewport_rect or ViewportRect()
        self._cell_width = float(cell_width)
        self._cell_height = float(cell_height)
        self._resize_threshold = float(resize_threshold)
        self._exact_resize_clamp = bool(exact_resize_clamp)
        self._save = save
        self._mode = InteractionMode.IDLE
        self._gesture: Optional[GestureState] = None
        self._hover_direction = ""
        self._cursor_hint = CURSOR_BACKGROUND
        self._pointer: Tuple[float, float] = (0.0, 0.0)
        self._listeners: List[EngineListener] = []

    # Accessors -----------------------------------------------------------

    @property
    def store(self) -> PlacementStore:
        return self._store

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def viewport(self) -> ViewportController:
        return self._viewport

    @property
    def viewport_rect(self) -> ViewportRect:
        return self._viewport_rect

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def gesture(self) -> Optional[GestureState]:
        return self._gesture

    @property
    def hover_direction(self) -> str:
        return self._hover_direction

    @property
    def cursor_hint(self) -> str:
        return self._cursor_hint

    @property
    def pointer_position(self) -> Tuple[float, float]:
        return self._pointer

    @property
    def evicted_placement(self) -> Optional[Placement]:
        if self._gesture is None:
            return None
        return self._gesture.evicted

    def subscribe(self, listener: EngineListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def set_viewport_rect(self, rect: ViewportRect) -> None:
        self._viewport_rect = rect

    def set_save_handler(self, save: Optional[SaveFn]) -> None:
        self._save = save

    # Geometry helpers ----------------------------------------------------

    def cell_at(self, pointer_x: float, pointer_y: float) -> Tuple[int, int]:
        viewport = self._viewport
        return to_cell(
            pointer_x,
            pointer_y,
            self._viewport_rect,
            viewport.pan_x,
            viewport.pan_y,
            viewport.zoom,
            self._grid.columns,
            self._grid.rows,
            cell_width=self._cell_width,
            cell_height=self._cell_height,
        )

    def screen_rect(self, rect: CellRect) -> ScreenRect:
        viewport = self._viewport
        return cell_rect_to_screen(
            rect,
            self._viewport_rect,
            viewport.pan_x,
            viewport.pan_y,
            viewport.zoom,
            self._grid.columns,
            self._grid.rows,
            cell_width=self._cell_width,
            cell_height=self._cell_height,
        )

    def grid_screen_rect(self) -> ScreenRect:
        return self.screen_rect(CellRect(1, 1, self._grid.columns, self._grid.rows))

    def grid_origin(self) -> Tuple[float, float]:
        viewport = self._viewport
        return grid_origin(
            self._viewport_rect,
            viewport.pan_x,
            viewport.pan_y,
            viewport.zoom,
            self._grid.columns,
            self._grid.rows,
            cell_width=self._cell_width,
            cell_height=self._cell_height,
        )

    def _direction_for(self, placement: Placement, pointer_x: float, pointer_y: float) -> str:
        return resize_direction(self.screen_rect(placement.rect), pointer_x, pointer_y, self._resize_threshold)

    # Pointer events ------------------------------------------------------

    def on_pointer_down(self, event: PointerEvent) -> bool:
        """Start a gesture; ignored while another gesture is active."""
        if self._mode is not InteractionMode.IDLE:
            _LOGGER.debug("Ignoring pointer-down while %s", self._mode.value)
            return False
        self._pointer = (event.x, event.y)
        cell_x, cell_y = self.cell_at(event.x, event.y)
        placement = widget_at(self._store, cell_x, cell_y)

        if placement is None:
            self._begin(GestureState(mode=InteractionMode.PANNING_VIEWPORT, last_pointer=(event.x, event.y)))
            self._set_cursor(CURSOR_PANNING)
            return True

        gesture = GestureState(
            mode=InteractionMode.DRAGGING_WIDGET,
            last_pointer=(event.x, event.y),
            placement=placement,
            start_rect=placement.rect,
        )
        direction = self._direction_for(placement, event.x, event.y)
        if direction:
            gesture.mode = InteractionMode.RESIZING_WIDGET
            gesture.direction = direction
            self._begin(gesture)
            self._set_cursor(cursor_for_direction(direction))
            _LOGGER.debug("Resize started on %s direction=%s", placement.describe(), direction)
            return True

        gesture.grab_offset = (cell_x - placement.x, cell_y - placement.y)
        self._begin(gesture)
        self._set_cursor("move")
        _LOGGER.debug("Drag started on %s grab_offset=%s", placement.describe(), gesture.grab_offset)
        return True

    def on_pointer_move(self, event: PointerEvent) -> bool:
        """Advance the active gesture; returns True when the layout changed."""
        self._pointer = (event.x, event.y)
        gesture = self._gesture
        if self._mode is InteractionMode.PANNING_VIEWPORT and gesture is not None:
            last_x, last_y = gesture.last_pointer
            gesture.last_pointer = (event.x, event.y)
            self._viewport.pan(event.x - last_x, event.y - last_y)
            return False
        if self._mode is InteractionMode.DRAGGING_WIDGET and gesture is not None:
            changed = self._drag(gesture, event)
            gesture.last_pointer = (event.x, event.y)
            return changed
        if self._mode is InteractionMode.RESIZING_WIDGET and gesture is not None:
            changed = self._resize(gesture, event)
            gesture.last_pointer = (event.x, event.y)
            return changed
        self._update_hover(event)
        return False

    def on_pointer_up(self, event: PointerEvent) -> bool:
        """Finish the active gesture; returns True when a save was issued."""
        self._pointer = (event.x, event.y)
        gesture = self._gesture
        if gesture is None:
            return False
        should_save = False
        if gesture.mode in (InteractionMode.DRAGGING_WIDGET, InteractionMode.RESIZING_WIDGET):
            if gesture.is_evicted:
                _LOGGER.info("Deleted placement %s dropped outside the grid", gesture.evicted.describe())
                gesture.mutated = True
            should_save = gesture.mutated and not gesture.returned_to_start
        self._gesture = None
        self._set_mode(InteractionMode.IDLE)
        self._update_hover(event)
        if should_save:
            return self.save()
        return False

    def on_wheel(self, event: WheelEvent) -> float:
        return self._viewport.wheel(event.delta_y).zoom

    # Entry points for external collaborators ------------------------------

    def add_widget(self, plugin_id: str, widget_id: str) -> Optional[Placement]:
        """Insert a 1x1 placement at the first free cell; no-op when the grid is full."""
        cell = find_free_cell(self._store, self._grid)
        if cell is None:
            _LOGGER.debug("Grid full (%d cells); ignoring add of %s/%s", self._grid.cell_count, plugin_id, widget_id)
            return None
        placement = Placement(plugin_id=plugin_id, widget_id=widget_id, x=cell[0], y=cell[1], width=1, height=1)
        self._store.add(placement)
        _LOGGER.debug("Added placement %s", placement.describe())
        self.save()
        return placement

    def remove_widget(self, placement: Placement) -> bool:
        """Remove a placement; the caller decides when to persist."""
        removed = self._store.remove(placement)
        if removed:
            _LOGGER.debug("Removed placement %s", placement.describe())
        return removed

    def save(self) -> bool:
        if self._save is None:
            return False
        records = self._store.to_records()
        try:
            self._save(records)
        except Exception:
            _LOGGER.exception("Failed to issue layout save (%d placements)", len(records))
            return False
        return True

    # Gesture handlers ----------------------------------------------------

    def _drag(self, gesture: GestureState, event: PointerEvent) -> bool:
        cell_x, cell_y = self.cell_at(event.x, event.y)
        off_grid = is_off_grid(self._grid, cell_x, cell_y)

        if gesture.is_evicted:
            if off_grid:
                self._notify("evicted")
                return False
            evicted = gesture.evicted
            candidates = drag_candidates(evicted, cell_x, cell_y, gesture.grab_offset, self._grid)
            if reinsert_evicted(self._store, evicted, candidates, self._grid):
                gesture.evicted = None
                gesture.placement = evicted
                gesture.mutated = True
                self._notify("reinserted")
                return True
            self._notify("evicted")
            return False

        placement = gesture.placement
        if placement is None:
            return False
        if off_grid:
            self._store.remove(placement)
            gesture.evicted = placement
            gesture.mutated = True
            _LOGGER.debug("Evicted %s at cell (%d,%d)", placement.describe(), cell_x, cell_y)
            self._notify("evicted")
            return True

        candidates = drag_candidates(placement, cell_x, cell_y, gesture.grab_offset, self._grid)
        if apply_drag(self._store, placement, candidates, self._grid):
            gesture.mutated = True
            return True
        return False

    def _resize(self, gesture: GestureState, event: PointerEvent) -> bool:
        placement = gesture.placement
        if placement is None:
            return False
        cell_x, cell_y = self.cell_at(event.x, event.y)
        candidate = compute_resize(
            placement,
            cell_x,
            cell_y,
            gesture.direction,
            self._grid,
            exact_clamp=self._exact_resize_clamp,
        )
        if apply_resize(self._store, placement, candidate, self._grid):
            gesture.mutated = True
            return True
        return False

    # State bookkeeping ---------------------------------------------------

    def _begin(self, gesture: GestureState) -> None:
        self._gesture = gesture
        self._hover_direction = ""
        self._set_mode(gesture.mode)

    def _set_mode(self, mode: InteractionMode) -> None:
        if mode is self._mode:
            return
        previous = self._mode
        self._mode = mode
        _LOGGER.debug("Interaction mode %s -> %s", previous.value, mode.value)
        self._notify("mode")

    def _update_hover(self, event: PointerEvent) -> None:
        cell_x, cell_y = self.cell_at(event.x, event.y)
        placement = widget_at(self._store, cell_x, cell_y)
        if placement is None:
            direction = ""
            cursor = CURSOR_BACKGROUND
        else:
            direction = self._direction_for(placement, event.x, event.y)
            cursor = cursor_for_direction(direction) if direction else "move"
        self._hover_direction = direction
        self._set_cursor(cursor)

    def _set_cursor(self, cursor: str) -> None:
        if cursor == self._cursor_hint:
            return
        self._cursor_hint = cursor
        self._notify("cursor")

    def _notify(self, reason: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(reason)
            except Exception:
                _LOGGER.exception("Engine listener failed for %s", reason)
