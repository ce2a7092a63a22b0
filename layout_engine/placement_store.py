"""In-memory placement store; the single source of truth for occupancy."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional

from layout_engine.placement import CellRect, LayoutRecord, Placement, layout_to_records

_LOGGER = logging.getLogger("GridLayout.Engine.Store")

StoreListener = Callable[[str, Optional[Placement]], None]


class PlacementStore:
    """Ordered collection of placements with change notifications.

    Listeners receive ``(reason, placement)`` where reason is one of
    ``add``, ``remove``, ``move``, ``resize`` or ``reset``.
    """

    def __init__(self, placements: Optional[Iterable[Placement]] = None) -> None:
        self._placements: List[Placement] = list(placements or [])
        self._listeners: List[StoreListener] = []

    def __iter__(self) -> Iterator[Placement]:
        return iter(list(self._placements))

    def __len__(self) -> int:
        return len(self._placements)

    def __contains__(self, placement: object) -> bool:
        return any(existing is placement for existing in self._placements)

    @property
    def placements(self) -> List[Placement]:
        return list(self._placements)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def add(self, placement: Placement) -> Placement:
        self._placements.append(placement)
        self._notify("add", placement)
        return placement

    def remove(self, placement: Placement) -> bool:
        for index, existing in enumerate(self._placements):
            if existing is placement:
                del self._placements[index]
                self._notify("remove", placement)
                return True
        return False

    def move(self, placement: Placement, x: int, y: int) -> None:
        if placement.x == x and placement.y == y:
            return
        placement.move_to(x, y)
        self._notify("move", placement)

    def reshape(self, placement: Placement, rect: CellRect) -> None:
        if placement.rect == rect:
            return
        placement.reshape(rect)
        self._notify("resize", placement)

    def reset(self, placements: Iterable[Placement]) -> None:
        self._placements = list(placements)
        self._notify("reset", None)

    def to_records(self) -> List[LayoutRecord]:
        return layout_to_records(self._placements)

    def _notify(self, reason: str, placement: Optional[Placement]) -> None:
        for listener in list(self._listeners):
            try:
                listener(reason, placement)
            except Exception:
                _LOGGER.exception("Store listener failed for %s", reason)
