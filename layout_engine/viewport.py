from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List

MIN_ZOOM = 0.3
MAX_ZOOM = 3.0
ZOOM_STEP = 0.04
INITIAL_ZOOM = 0.5

_LOGGER = logging.getLogger("GridLayout.Engine.Viewport")

ViewportListener = Callable[["ViewportState"], None]


@dataclass(frozen=True)
class ViewportState:
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = INITIAL_ZOOM


class ViewportController:
    """Owns the pan offset and zoom factor of the grid view."""

    def __init__(
        self,
        *,
        zoom: float = INITIAL_ZOOM,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
        zoom_step: float = ZOOM_STEP,
    ) -> None:
        if min_zoom > max_zoom:
            min_zoom, max_zoom = max_zoom, min_zoom
        self._min_zoom = float(min_zoom)
        self._max_zoom = float(max_zoom)
        self._zoom_step = abs(float(zoom_step))
        self._pan_x = 0.0
        self._pan_y = 0.0
        self._zoom = self._clamp_zoom(zoom)
        self._listeners: List[ViewportListener] = []

    @property
    def state(self) -> ViewportState:
        return ViewportState(pan_x=self._pan_x, pan_y=self._pan_y, zoom=self._zoom)

    @property
    def pan_x(self) -> float:
        return self._pan_x

    @property
    def pan_y(self) -> float:
        return self._pan_y

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def zoom_step(self) -> float:
        return self._zoom_step

    def subscribe(self, listener: ViewportListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def pan(self, delta_x: float, delta_y: float) -> ViewportState:
        # Panning is unbounded; the grid may be moved fully off screen.
        self._pan_x += float(delta_x)
        self._pan_y += float(delta_y)
        return self._publish()

    def zoom_by(self, delta: float) -> ViewportState:
        self._zoom = self._clamp_zoom(self._zoom + float(delta))
        return self._publish()

    def wheel(self, delta_y: float) -> ViewportState:
        """Scroll down (positive delta) zooms out one step, anything else zooms in."""
        delta = -self._zoom_step if delta_y > 0 else self._zoom_step
        state = self.zoom_by(delta)
        _LOGGER.debug("Wheel delta=%s zoom=%.2f", delta_y, state.zoom)
        return state

    def reset(self) -> ViewportState:
        self._pan_x = 0.0
        self._pan_y = 0.0
        self._zoom = self._clamp_zoom(INITIAL_ZOOM)
        return self._publish()

    def _clamp_zoom(self, value: float) -> float:
        return min(max(self._min_zoom, float(value)), self._max_zoom)

    def _publish(self) -> ViewportState:
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _LOGGER.exception("Viewport listener failed")
        return state
