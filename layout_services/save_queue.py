"""Fire-and-forget layout saves, serialized and coalesced to the latest snapshot."""
from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

_LOGGER = logging.getLogger("GridLayout.Services.SaveQueue")

LayoutWriter = Callable[[List[Dict[str, Any]]], None]


class LayoutSaveQueue:
    """Collects layout snapshots and writes them on a timer thread.

    Only the most recent snapshot is written; writes never overlap, so the last
    submitted layout is the last one persisted. A failed write is logged and
    dropped.
    """

    def __init__(self, writer: LayoutWriter, debounce_seconds: float = 0.05) -> None:
        self._writer = writer
        self._debounce_seconds = max(0.0, float(debounce_seconds))
        self._lock = threading.Lock()
        self._flush_guard = threading.Lock()
        self._pending: Optional[List[Dict[str, Any]]] = None
        self._flush_timer: Optional[threading.Timer] = None
        self._closed = False
        self.saves_written = 0
        self.saves_failed = 0

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def submit(self, records: Sequence[Mapping[str, Any]]) -> None:
        snapshot = [copy.deepcopy(dict(record)) for record in records]
        with self._lock:
            closed = self._closed
            self._pending = snapshot
        if closed:
            _LOGGER.warning("Save submitted after close; writing synchronously")
            self.flush()
            return
        self._schedule_flush()

    def configure_debounce(self, debounce_seconds: float) -> None:
        with self._lock:
            self._debounce_seconds = max(0.0, float(debounce_seconds))
            timer = self._flush_timer
            self._flush_timer = None
            pending = self._pending is not None
        if timer is not None:
            timer.cancel()
        if pending:
            self._schedule_flush()

    def flush(self) -> bool:
        """Write the pending snapshot now; returns False when the write failed."""
        with self._flush_guard:
            with self._lock:
                snapshot = self._pending
                self._pending = None
                self._flush_timer = None
            if snapshot is None:
                return True
            try:
                self._writer(snapshot)
            except Exception as exc:
                self.saves_failed += 1
                _LOGGER.warning("Layout save failed (%d placements): %s", len(snapshot), exc)
                return False
            self.saves_written += 1
            _LOGGER.debug("Layout saved (%d placements)", len(snapshot))
            return True

    def close(self) -> bool:
        with self._lock:
            self._closed = True
            timer = self._flush_timer
            self._flush_timer = None
        if timer is not None:
            timer.cancel()
        return self.flush()

    def _schedule_flush(self) -> None:
        with self._lock:
            if self._flush_timer is not None and self._flush_timer.is_alive():
                return
            timer = threading.Timer(self._debounce_seconds, self._run_flush)
            timer.daemon = True
            self._flush_timer = timer
            timer.start()

    def _run_flush(self) -> None:
        self.flush()
        # A snapshot submitted while writing still needs its own write.
        with self._lock:
            reschedule = self._pending is not None and not self._closed
        if reschedule:
            self._schedule_flush()
