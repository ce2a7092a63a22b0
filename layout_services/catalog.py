"""Widget palette built from the plugin catalog."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from layout_services.errors import CatalogUnavailable

_LOGGER = logging.getLogger("GridLayout.Services.Catalog")


class CatalogSource(Protocol):
    def list_plugins(self) -> List[str]: ...

    def list_widgets(self, plugin_id: str) -> List[Dict[str, Any]]: ...

    def widget_url(self, plugin_id: str, widget_id: str) -> str: ...


@dataclass(frozen=True)
class PaletteEntry:
    plugin_id: str
    widget_id: str
    url: str

    @property
    def label(self) -> str:
        return f"{self.plugin_id}/{self.widget_id}"


@dataclass
class PaletteSection:
    plugin_id: str
    entries: List[PaletteEntry] = field(default_factory=list)


def widget_id_from_path(plugin_id: str, path: str) -> Optional[str]:
    """Extract the widget id from a catalog path such as ``/widgets/tasks/listTasks``."""
    marker = f"{plugin_id}/"
    text = (path or "").strip()
    if marker not in text:
        return None
    widget_id = text.split(marker, 1)[1].split("?", 1)[0].strip("/")
    return widget_id or None


def build_palette(source: CatalogSource) -> List[PaletteSection]:
    """List every plugin's widgets; plugins that fail or expose none are left out."""
    try:
        plugin_ids = source.list_plugins()
    except CatalogUnavailable as exc:
        _LOGGER.error("Plugin catalog unavailable: %s", exc)
        return []

    sections: List[PaletteSection] = []
    for plugin_id in plugin_ids:
        try:
            widgets = source.list_widgets(plugin_id)
        except CatalogUnavailable as exc:
            _LOGGER.warning("Omitting widgets of plugin %s: %s", plugin_id, exc)
            continue
        section = PaletteSection(plugin_id=plugin_id)
        for widget in widgets:
            widget_id = widget_id_from_path(plugin_id, str(widget.get("path") or ""))
            if widget_id is None:
                _LOGGER.debug("Ignoring widget entry without a usable path for %s: %r", plugin_id, widget)
                continue
            section.entries.append(
                PaletteEntry(plugin_id=plugin_id, widget_id=widget_id, url=source.widget_url(plugin_id, widget_id))
            )
        if section.entries:
            sections.append(section)
    return sections
