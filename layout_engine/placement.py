"""Placement records and grid dimensions for the widget layout."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Set, Tuple

GRID_COLUMNS = 24
GRID_ROWS = 12

Cell = Tuple[int, int]
LayoutRecord = Dict[str, Any]


@dataclass(frozen=True)
class Grid:
    """Fixed grid dimensions for an editing session."""

    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows

    def contains(self, x: int, y: int) -> bool:
        return 1 <= x <= self.columns and 1 <= y <= self.rows

    def fits(self, x: int, y: int, width: int, height: int) -> bool:
        if width < 1 or height < 1:
            return False
        if x < 1 or y < 1:
            return False
        return x + width - 1 <= self.columns and y + height - 1 <= self.rows


@dataclass(frozen=True)
class CellRect:
    """Candidate footprint in cell coordinates (1-indexed, top-left origin)."""

    x: int
    y: int
    width: int
    height: int

    def cells(self) -> Set[Cell]:
        return {(self.x + i, self.y + j) for i in range(self.width) for j in range(self.height)}

    def contains(self, cell_x: int, cell_y: int) -> bool:
        return self.x <= cell_x < self.x + self.width and self.y <= cell_y < self.y + self.height

    def intersects(self, other: "CellRect") -> bool:
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )


@dataclass(eq=False)
class Placement:
    """One widget's position and footprint on the grid.

    Placements compare by identity: the same ``(plugin_id, widget_id)`` pair may
    appear several times in one layout.
    """

    plugin_id: str
    widget_id: str
    x: int = 1
    y: int = 1
    width: int = 1
    height: int = 1

    @property
    def rect(self) -> CellRect:
        return CellRect(self.x, self.y, self.width, self.height)

    @property
    def footprint(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def widget_path(self) -> str:
        return f"/widgets/{self.plugin_id}/{self.widget_id}"

    def cells(self) -> Set[Cell]:
        return self.rect.cells()

    def contains(self, cell_x: int, cell_y: int) -> bool:
        return self.rect.contains(cell_x, cell_y)

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def reshape(self, rect: CellRect) -> None:
        self.x = rect.x
        self.y = rect.y
        self.width = rect.width
        self.height = rect.height

    def describe(self) -> str:
        return f"{self.plugin_id}/{self.widget_id}@({self.x},{self.y} {self.width}x{self.height})"

    def to_record(self) -> LayoutRecord:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "widget_id": self.widget_id,
            "plugin_id": self.plugin_id,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Placement":
        """Build a placement from a persisted ``{x,y,width,height,widget_id,plugin_id}`` record."""
        if not isinstance(record, Mapping):
            raise ValueError(f"layout record must be a mapping, got {type(record).__name__}")

        def _text(key: str) -> str:
            value = record.get(key)
            if value is None:
                raise ValueError(f"layout record missing {key!r}")
            text = str(value).strip()
            if not text:
                raise ValueError(f"layout record has empty {key!r}")
            return text

        def _int(key: str) -> int:
            value = record.get(key)
            if value is None or isinstance(value, bool):
                raise ValueError(f"layout record missing {key!r}")
            try:
                number = int(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"layout record has non-integer {key!r}: {value!r}") from exc
            if number < 1:
                raise ValueError(f"layout record has {key!r} < 1: {number}")
            return number

        return cls(
            plugin_id=_text("plugin_id"),
            widget_id=_text("widget_id"),
            x=_int("x"),
            y=_int("y"),
            width=_int("width"),
            height=_int("height"),
        )


def layout_to_records(placements: Iterable[Placement]) -> List[LayoutRecord]:
    return [placement.to_record() for placement in placements]
