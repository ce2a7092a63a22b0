"""HTTP client for the layout manager and plugin catalog endpoints."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type
from urllib.parse import quote, urlencode

import requests
from requests import exceptions as requests_exceptions

from layout_services.errors import (
    CatalogUnavailable,
    LayoutServiceError,
    PersistenceFailure,
    UnauthenticatedError,
)

_LOGGER = logging.getLogger("GridLayout.Services.Http")

LOAD_LAYOUT_PATH = "/api/layoutManager/loadLayout"
SAVE_LAYOUT_PATH = "/api/layoutManager/saveLayout"
PLUGIN_LIST_PATH = "/api/pluginManager/list"
PLUGIN_WIDGETS_PATH = "/api/pluginManager/widgets/{plugin_id}"
_DEFAULT_USER_AGENT = "GridLayoutEditor/layout-client"


class LayoutApiClient:
    """Loads and saves layouts and lists the widget catalog over HTTP.

    Credentials are passed explicitly; the client holds no global session state.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 5.0,
    ) -> None:
        self._base_url = (base_url or "").rstrip("/")
        self._token = (token or "").strip() or None
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._timeout = max(0.1, float(timeout))

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "LayoutApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Layout ----------------------------------------------------------------

    def load_layout(self) -> List[Dict[str, Any]]:
        payload = self._request("GET", LOAD_LAYOUT_PATH, error_cls=PersistenceFailure)
        if not isinstance(payload, list):
            raise PersistenceFailure(f"Layout response is not a list: {type(payload).__name__}")
        return [entry for entry in payload if isinstance(entry, dict)]

    def save_layout(self, records: Sequence[Mapping[str, Any]]) -> None:
        self._request("POST", SAVE_LAYOUT_PATH, json_body=[dict(record) for record in records], error_cls=PersistenceFailure)
        _LOGGER.debug("Saved layout with %d placements", len(records))

    # Catalog ---------------------------------------------------------------

    def list_plugins(self) -> List[str]:
        payload = self._request("GET", PLUGIN_LIST_PATH, error_cls=CatalogUnavailable)
        if not isinstance(payload, list):
            raise CatalogUnavailable(f"Plugin list response is not a list: {type(payload).__name__}")
        return [str(plugin_id) for plugin_id in payload if str(plugin_id).strip()]

    def list_widgets(self, plugin_id: str) -> List[Dict[str, Any]]:
        path = PLUGIN_WIDGETS_PATH.format(plugin_id=quote(plugin_id, safe=""))
        payload = self._request("GET", path, error_cls=CatalogUnavailable)
        if not isinstance(payload, list):
            raise CatalogUnavailable(f"Widget list for {plugin_id!r} is not a list")
        return [entry for entry in payload if isinstance(entry, dict)]

    def widget_url(self, plugin_id: str, widget_id: str) -> str:
        path = f"/widgets/{quote(plugin_id, safe='')}/{quote(widget_id, safe='/')}"
        url = f"{self._base_url}{path}"
        if self._token:
            url = f"{url}?{urlencode({'token': self._token})}"
        return url

    # Transport -------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": _DEFAULT_USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        error_cls: Type[LayoutServiceError],
    ) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                json=json_body,
                timeout=self._timeout,
            )
        except requests_exceptions.RequestException as exc:
            raise error_cls(f"{method} {path} failed: {exc}") from exc

        try:
            if response.status_code == 403:
                if issubclass(error_cls, PersistenceFailure):
                    raise UnauthenticatedError(f"{method} {path} rejected: unauthenticated")
                raise error_cls(f"{method} {path} rejected: unauthenticated")
            try:
                response.raise_for_status()
            except requests_exceptions.HTTPError as exc:
                raise error_cls(f"{method} {path} returned {response.status_code}") from exc
            try:
                return response.json()
            except ValueError as exc:
                raise error_cls(f"Unable to parse {path} response: {exc}") from exc
        finally:
            response.close()
