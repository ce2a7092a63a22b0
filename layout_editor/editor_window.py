from __future__ import annotations

import logging
from typing import Iterable, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QMainWindow, QSplitter, QWidget

from layout_editor.grid_canvas import GridCanvas
from layout_engine.engine import LayoutEngine
from layout_services.catalog import PaletteEntry, PaletteSection

_LOGGER = logging.getLogger("GridLayout.Editor.Window")

_ENTRY_ROLE = Qt.ItemDataRole.UserRole


class EditorWindow(QMainWindow):
    """Widget palette beside the grid canvas."""

    def __init__(self, engine: LayoutEngine, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Grid Layout Editor")
        self._engine = engine

        self.palette = QListWidget()
        self.palette.setMinimumWidth(200)
        self.palette.itemDoubleClicked.connect(self._handle_palette_activate)

        self.canvas = GridCanvas(engine)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.palette)
        splitter.addWidget(self.canvas)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        self._status = QLabel()
        self.statusBar().addPermanentWidget(self._status)
        engine.store.subscribe(lambda _reason, _placement: self._refresh_status())
        engine.viewport.subscribe(lambda _state: self._refresh_status())
        self._refresh_status()

    def set_palette(self, sections: Iterable[PaletteSection]) -> None:
        self.palette.clear()
        count = 0
        for section in sections:
            header = QListWidgetItem(section.plugin_id)
            header.setFlags(Qt.ItemFlag.NoItemFlags)
            self.palette.addItem(header)
            for entry in section.entries:
                item = QListWidgetItem(f"  {entry.widget_id}")
                item.setData(_ENTRY_ROLE, entry)
                item.setToolTip(entry.url)
                self.palette.addItem(item)
                count += 1
        _LOGGER.debug("Palette populated with %d widgets", count)

    def _handle_palette_activate(self, item: QListWidgetItem) -> None:
        entry = item.data(_ENTRY_ROLE)
        if not isinstance(entry, PaletteEntry):
            return
        placement = self._engine.add_widget(entry.plugin_id, entry.widget_id)
        if placement is None:
            self.statusBar().showMessage("Grid is full", 3000)

    def _refresh_status(self) -> None:
        viewport = self._engine.viewport
        self._status.setText(f"{len(self._engine.store)} widgets | zoom {viewport.zoom:.2f}")

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.canvas.detach()
        super().closeEvent(event)
