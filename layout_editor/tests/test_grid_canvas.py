from __future__ import annotations

import pytest
from PyQt6.QtCore import QEvent, QPoint, QPointF, Qt
from PyQt6.QtGui import QMouseEvent, QWheelEvent
from PyQt6.QtWidgets import QApplication

from layout_editor.editor_window import EditorWindow
from layout_editor.grid_canvas import GridCanvas
from layout_engine.engine import LayoutEngine
from layout_engine.gesture import InteractionMode
from layout_engine.placement import Placement
from layout_engine.placement_store import PlacementStore
from layout_engine.viewport import ViewportController
from layout_services.catalog import PaletteEntry, PaletteSection


@pytest.fixture
def qt_app():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def _mouse(kind: QEvent.Type, x: float, y: float, button: Qt.MouseButton = Qt.MouseButton.LeftButton) -> QMouseEvent:
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseMove else button
    return QMouseEvent(kind, QPointF(x, y), QPointF(x, y), button, buttons, Qt.KeyboardModifier.NoModifier)


def _engine(*placements):
    saves = []
    engine = LayoutEngine(PlacementStore(placements), viewport=ViewportController(zoom=1.0), save=saves.append)
    return engine, saves


@pytest.mark.pyqt_required
def test_canvas_forwards_drag_gesture(qt_app):
    widget = Placement("tasks", "listTasks", 1, 1)
    engine, saves = _engine(widget)
    canvas = GridCanvas(engine)

    press = _mouse(QEvent.Type.MouseButtonPress, 50, 50)
    canvas.mousePressEvent(press)
    assert press.isAccepted()
    assert engine.mode is InteractionMode.DRAGGING_WIDGET
    assert canvas.cursor().shape() == Qt.CursorShape.SizeAllCursor

    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 450, 250, Qt.MouseButton.NoButton))
    assert (widget.x, widget.y) == (5, 3)

    canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, 450, 250))
    assert engine.mode is InteractionMode.IDLE
    assert saves == [[widget.to_record()]]
    canvas.detach()


@pytest.mark.pyqt_required
def test_canvas_ignores_right_button(qt_app):
    engine, _saves = _engine(Placement("tasks", "listTasks", 1, 1))
    canvas = GridCanvas(engine)
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 50, 50, Qt.MouseButton.RightButton))
    assert engine.mode is InteractionMode.IDLE
    canvas.detach()


@pytest.mark.pyqt_required
def test_canvas_wheel_up_zooms_in(qt_app):
    engine, _saves = _engine()
    canvas = GridCanvas(engine)
    event = QWheelEvent(
        QPointF(10, 10),
        QPointF(10, 10),
        QPoint(0, 0),
        QPoint(0, 120),
        Qt.MouseButton.NoButton,
        Qt.KeyboardModifier.NoModifier,
        Qt.ScrollPhase.NoScrollPhase,
        False,
    )
    canvas.wheelEvent(event)
    assert engine.viewport.zoom == pytest.approx(1.04)
    canvas.detach()


@pytest.mark.pyqt_required
def test_canvas_paints_evicted_widget(qt_app):
    widget = Placement("tasks", "listTasks", 1, 1)
    engine, _saves = _engine(widget)
    canvas = GridCanvas(engine)
    canvas.resize(400, 300)
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 50, 50))
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 5000, 50, Qt.MouseButton.NoButton))
    assert engine.evicted_placement is widget
    pixmap = canvas.grab()
    assert not pixmap.isNull()
    canvas.detach()


@pytest.mark.pyqt_required
def test_editor_window_adds_palette_widget(qt_app):
    engine, saves = _engine()
    window = EditorWindow(engine)
    window.set_palette([PaletteSection("tasks", [PaletteEntry("tasks", "listTasks", "http://dash/widgets/tasks/listTasks")])])
    assert window.palette.count() == 2

    window._handle_palette_activate(window.palette.item(0))
    assert len(engine.store) == 0

    window._handle_palette_activate(window.palette.item(1))
    assert [p.widget_id for p in engine.store] == ["listTasks"]
    assert saves
    window.close()
