"""Qt surface that projects the placement store and forwards input to the engine."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PyQt6.QtCore import QRectF, Qt
from PyQt6.QtGui import QColor, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from layout_engine.coordinate_mapper import ScreenRect, ViewportRect
from layout_engine.engine import LayoutEngine
from layout_engine.gesture import InteractionMode, PointerEvent, WheelEvent
from layout_engine.placement import Placement

_LOGGER = logging.getLogger("GridLayout.Editor.Canvas")

CURSOR_SHAPES = {
    "grab": Qt.CursorShape.OpenHandCursor,
    "grabbing": Qt.CursorShape.ClosedHandCursor,
    "move": Qt.CursorShape.SizeAllCursor,
    "ns-resize": Qt.CursorShape.SizeVerCursor,
    "ew-resize": Qt.CursorShape.SizeHorCursor,
    "nwse-resize": Qt.CursorShape.SizeFDiagCursor,
    "nesw-resize": Qt.CursorShape.SizeBDiagCursor,
}

_BACKGROUND = QColor(32, 34, 40)
_GRID_FILL = QColor(44, 47, 56)
_GRID_LINE = QColor(80, 84, 96)
_PLACEMENT_FILL = QColor(66, 133, 244, 170)
_ACTIVE_FILL = QColor(251, 188, 5, 190)
_EVICTED_FILL = QColor(234, 67, 53, 150)
_LABEL = QColor(245, 245, 245)


def _qrect(rect: ScreenRect) -> QRectF:
    return QRectF(rect.left, rect.top, rect.width, rect.height)


class GridCanvas(QWidget):
    """Paints the grid and placements; all interaction goes through ``LayoutEngine``."""

    def __init__(self, engine: LayoutEngine, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._unsubscribers: List[Callable[[], None]] = [
            engine.store.subscribe(lambda _reason, _placement: self.update()),
            engine.viewport.subscribe(lambda _state: self.update()),
            engine.subscribe(self._handle_engine_change),
        ]
        self._apply_cursor(engine.cursor_hint)

    @property
    def engine(self) -> LayoutEngine:
        return self._engine

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _handle_engine_change(self, reason: str) -> None:
        if reason == "cursor":
            self._apply_cursor(self._engine.cursor_hint)
        self.update()

    def _apply_cursor(self, hint: str) -> None:
        self.setCursor(CURSOR_SHAPES.get(hint, Qt.CursorShape.ArrowCursor))

    # Input ---------------------------------------------------------------

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        size = event.size()
        self._engine.set_viewport_rect(ViewportRect(0.0, 0.0, float(max(size.width(), 1)), float(max(size.height(), 1))))
        _LOGGER.debug("Canvas resized to %dx%d", size.width(), size.height())

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self._engine.on_pointer_down(PointerEvent(pos.x(), pos.y()))
        event.accept()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        pos = event.position()
        self._engine.on_pointer_move(PointerEvent(pos.x(), pos.y()))
        if self._engine.evicted_placement is not None:
            self.update()
        event.accept()

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self._engine.on_pointer_up(PointerEvent(pos.x(), pos.y()))
        event.accept()

    def wheelEvent(self, event) -> None:  # type: ignore[override]
        # Qt reports positive angle deltas when scrolling up; the engine expects scroll-down positive.
        delta = -event.angleDelta().y()
        if delta == 0:
            event.ignore()
            return
        pos = event.position()
        self._engine.on_wheel(WheelEvent(delta_y=float(delta), x=pos.x(), y=pos.y()))
        event.accept()

    # Painting ------------------------------------------------------------

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), _BACKGROUND)
        self._paint_grid(painter)
        gesture = self._engine.gesture
        active = gesture.placement if gesture is not None else None
        for placement in self._engine.store:
            self._paint_placement(painter, placement, active=placement is active)
        self._paint_evicted(painter)
        painter.end()

    def _paint_grid(self, painter: QPainter) -> None:
        engine = self._engine
        grid_rect = engine.grid_screen_rect()
        painter.fillRect(_qrect(grid_rect), _GRID_FILL)
        pen = QPen(_GRID_LINE)
        pen.setWidth(1)
        painter.setPen(pen)
        step_x = grid_rect.width / engine.grid.columns
        step_y = grid_rect.height / engine.grid.rows
        for column in range(engine.grid.columns + 1):
            x = grid_rect.left + column * step_x
            painter.drawLine(int(round(x)), int(round(grid_rect.top)), int(round(x)), int(round(grid_rect.bottom)))
        for row in range(engine.grid.rows + 1):
            y = grid_rect.top + row * step_y
            painter.drawLine(int(round(grid_rect.left)), int(round(y)), int(round(grid_rect.right)), int(round(y)))

    def _paint_placement(self, painter: QPainter, placement: Placement, *, active: bool) -> None:
        rect = _qrect(self._engine.screen_rect(placement.rect)).adjusted(2, 2, -2, -2)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(_ACTIVE_FILL if active else _PLACEMENT_FILL)
        painter.drawRoundedRect(rect, 6, 6)
        painter.setPen(_LABEL)
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, f"{placement.plugin_id}/{placement.widget_id}")

    def _paint_evicted(self, painter: QPainter) -> None:
        engine = self._engine
        evicted = engine.evicted_placement
        if evicted is None or engine.mode is not InteractionMode.DRAGGING_WIDGET:
            return
        footprint = engine.screen_rect(evicted.rect)
        pointer_x, pointer_y = engine.pointer_position
        rect = QRectF(
            pointer_x - footprint.width / 2.0,
            pointer_y - footprint.height / 2.0,
            footprint.width,
            footprint.height,
        )
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(_EVICTED_FILL)
        painter.drawRoundedRect(rect, 6, 6)
        painter.setPen(_LABEL)
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, f"{evicted.plugin_id}/{evicted.widget_id}")
