"""Wiring between settings, persistence adapters and the layout engine (no Qt)."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from layout_editor.settings import EditorSettings
from layout_engine.engine import LayoutEngine
from layout_engine.placement import Grid
from layout_engine.placement_store import PlacementStore
from layout_engine.viewport import ViewportController
from layout_services.catalog import PaletteSection, build_palette
from layout_services.file_store import JsonLayoutFile
from layout_services.http_client import LayoutApiClient
from layout_services.save_queue import LayoutSaveQueue
from layout_services.session import LayoutBackend, load_session_layout

_LOGGER = logging.getLogger("GridLayout.Editor.Bootstrap")


@dataclass
class EditorSession:
    engine: LayoutEngine
    save_queue: LayoutSaveQueue
    layout_source: LayoutBackend
    api_client: Optional[LayoutApiClient]

    def shutdown(self) -> None:
        if not self.save_queue.close():
            _LOGGER.warning("Final layout save failed; unsaved changes are lost")
        if self.api_client is not None:
            self.api_client.close()


def build_api_client(settings: EditorSettings) -> LayoutApiClient:
    return LayoutApiClient(settings.base_url, token=settings.token, timeout=settings.request_timeout)


def build_engine(settings: EditorSettings, store: PlacementStore) -> LayoutEngine:
    viewport = ViewportController(
        zoom=settings.initial_zoom,
        min_zoom=settings.min_zoom,
        max_zoom=settings.max_zoom,
        zoom_step=settings.zoom_step,
    )
    return LayoutEngine(
        store,
        grid=Grid(columns=settings.columns, rows=settings.rows),
        viewport=viewport,
        cell_width=settings.cell_width,
        cell_height=settings.cell_height,
        resize_threshold=settings.resize_threshold,
        exact_resize_clamp=settings.exact_resize_clamp,
    )


def build_session(settings: EditorSettings, *, api_client: Optional[LayoutApiClient] = None) -> EditorSession:
    """Load the initial layout and connect engine saves to the chosen backend."""
    layout_source: LayoutBackend
    if settings.layout_file is not None:
        layout_source = JsonLayoutFile(settings.layout_file)
        _LOGGER.info("Using layout file %s", settings.layout_file)
    else:
        if api_client is None:
            api_client = build_api_client(settings)
        layout_source = api_client
        _LOGGER.info("Using layout service at %s", api_client.base_url)

    grid = Grid(columns=settings.columns, rows=settings.rows)
    store = PlacementStore(load_session_layout(layout_source, grid))
    save_queue = LayoutSaveQueue(layout_source.save_layout, debounce_seconds=settings.save_debounce_seconds)
    engine = build_engine(settings, store)
    engine.set_save_handler(save_queue.submit)
    return EditorSession(engine=engine, save_queue=save_queue, layout_source=layout_source, api_client=api_client)


def load_palette(api_client: Optional[LayoutApiClient], *, offline: bool = False) -> List[PaletteSection]:
    if offline:
        _LOGGER.info("Offline mode; skipping plugin catalog")
        return []
    if api_client is None:
        return []
    return build_palette(api_client)
