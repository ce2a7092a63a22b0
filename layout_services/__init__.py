from .catalog import PaletteEntry, PaletteSection, build_palette, widget_id_from_path
from .errors import CatalogUnavailable, LayoutServiceError, PersistenceFailure, UnauthenticatedError
from .file_store import JsonLayoutFile
from .http_client import LayoutApiClient
from .save_queue import LayoutSaveQueue
from .session import load_session_layout, placements_from_records

__all__ = [
    "CatalogUnavailable",
    "JsonLayoutFile",
    "LayoutApiClient",
    "LayoutSaveQueue",
    "LayoutServiceError",
    "PaletteEntry",
    "PaletteSection",
    "PersistenceFailure",
    "UnauthenticatedError",
    "build_palette",
    "load_session_layout",
    "placements_from_records",
    "widget_id_from_path",
]
