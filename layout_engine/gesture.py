from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from layout_engine.placement import CellRect, Placement


class InteractionMode(Enum):
    IDLE = "idle"
    PANNING_VIEWPORT = "panning_viewport"
    DRAGGING_WIDGET = "dragging_widget"
    RESIZING_WIDGET = "resizing_widget"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in viewport pixel coordinates."""

    x: float
    y: float
    button: str = "left"


@dataclass(frozen=True)
class WheelEvent:
    """Wheel step; positive ``delta_y`` means scrolling down."""

    delta_y: float
    x: float = 0.0
    y: float = 0.0


@dataclass
class GestureState:
    """Transient state for one pointer-down to pointer-up interaction."""

    mode: InteractionMode
    last_pointer: Tuple[float, float]
    placement: Optional[Placement] = None
    grab_offset: Tuple[int, int] = (0, 0)
    direction: str = ""
    start_rect: Optional[CellRect] = None
    evicted: Optional[Placement] = None
    mutated: bool = False

    @property
    def is_evicted(self) -> bool:
        return self.evicted is not None

    @property
    def returned_to_start(self) -> bool:
        """True when the active placement sits on the geometry it had at pointer-down."""
        if self.placement is None or self.is_evicted:
            return False
        return self.placement.rect == self.start_rect
