from __future__ import annotations

import pytest

from layout_engine.coordinate_mapper import ScreenRect
from layout_engine.placement import CellRect, Grid, Placement
from layout_engine.placement_store import PlacementStore
from layout_engine.resize import apply_resize, compute_resize, cursor_for_direction, resize_direction

GRID = Grid(columns=24, rows=12)
RECT = ScreenRect(left=100.0, top=100.0, right=300.0, bottom=200.0)


@pytest.mark.parametrize(
    "pointer, expected",
    [
        ((150.0, 150.0), ""),
        ((105.0, 150.0), "w"),
        ((295.0, 150.0), "e"),
        ((200.0, 105.0), "n"),
        ((200.0, 195.0), "s"),
        ((105.0, 105.0), "nw"),
        ((295.0, 105.0), "ne"),
        ((105.0, 195.0), "sw"),
        ((295.0, 195.0), "se"),
    ],
)
def test_resize_direction_tokens(pointer, expected):
    assert resize_direction(RECT, pointer[0], pointer[1], 10.0) == expected


def test_resize_direction_prefers_nearer_edge_on_tiny_rects():
    tiny = ScreenRect(left=0.0, top=0.0, right=15.0, bottom=15.0)
    assert resize_direction(tiny, 7.0, 7.0, 10.0) == "nw"
    assert resize_direction(tiny, 8.0, 8.0, 10.0) == "se"


def test_cursor_for_direction():
    assert cursor_for_direction("n") == "ns-resize"
    assert cursor_for_direction("w") == "ew-resize"
    assert cursor_for_direction("se") == "nwse-resize"
    assert cursor_for_direction("sw") == "nesw-resize"
    assert cursor_for_direction("") == "move"


def test_east_and_south_edges_follow_pointer():
    placement = Placement("a", "w", 2, 2, 1, 1)
    assert compute_resize(placement, 5, 2, "e", GRID) == CellRect(2, 2, 4, 1)
    assert compute_resize(placement, 2, 4, "s", GRID) == CellRect(2, 2, 1, 3)
    assert compute_resize(placement, 4, 3, "se", GRID) == CellRect(2, 2, 3, 2)


def test_west_and_north_edges_move_origin():
    placement = Placement("a", "w", 5, 5, 2, 2)
    assert compute_resize(placement, 3, 5, "w", GRID) == CellRect(3, 5, 4, 2)
    assert compute_resize(placement, 5, 2, "n", GRID) == CellRect(5, 2, 2, 5)
    assert compute_resize(placement, 6, 5, "w", GRID) == CellRect(6, 5, 1, 2)


def test_single_cell_span_cannot_be_inverted():
    placement = Placement("a", "w", 5, 5, 1, 1)
    assert compute_resize(placement, 5, 8, "n", GRID) == CellRect(5, 5, 1, 1)
    assert compute_resize(placement, 9, 5, "w", GRID) == CellRect(5, 5, 1, 1)


def test_shrinking_past_trailing_edge_keeps_minimum_span():
    placement = Placement("a", "w", 5, 5, 3, 3)
    assert compute_resize(placement, 1, 1, "se", GRID) == CellRect(5, 5, 1, 1)


def test_overshoot_stops_one_cell_short_of_boundary():
    placement = Placement("a", "w", 1, 1, 2, 2)
    assert compute_resize(placement, 30, 1, "e", GRID) == CellRect(1, 1, 23, 2)
    assert compute_resize(placement, 1, 40, "s", GRID) == CellRect(1, 1, 2, 11)


def test_one_cell_overshoot_lands_on_boundary():
    assert compute_resize(Placement("a", "w", 23, 1, 2, 1), 25, 1, "e", GRID) == CellRect(23, 1, 2, 1)
    assert compute_resize(Placement("a", "w", 1, 11, 1, 2), 1, 13, "s", GRID) == CellRect(1, 11, 1, 2)
    full_width = Placement("a", "w", 1, 1, 24, 1)
    assert compute_resize(full_width, 24, 1, "e", GRID).width == 24
    assert compute_resize(full_width, 25, 1, "e", GRID).width == 24


def test_exact_clamp_reaches_boundary():
    placement = Placement("a", "w", 1, 1, 2, 2)
    assert compute_resize(placement, 30, 1, "e", GRID, exact_clamp=True) == CellRect(1, 1, 24, 2)


def test_apply_resize_rejects_overlap_without_mutation():
    target = Placement("a", "target", 1, 1, 1, 1)
    blocker = Placement("a", "blocker", 3, 1, 1, 1)
    store = PlacementStore([target, blocker])
    events = []
    store.subscribe(lambda reason, placement: events.append(reason))

    assert apply_resize(store, target, CellRect(1, 1, 3, 1), GRID) is False
    assert target.rect == CellRect(1, 1, 1, 1)
    assert events == []

    assert apply_resize(store, target, CellRect(1, 1, 2, 2), GRID) is True
    assert target.rect == CellRect(1, 1, 2, 2)
    assert events == ["resize"]


def test_apply_resize_rejects_out_of_bounds():
    target = Placement("a", "target", 1, 1, 1, 1)
    store = PlacementStore([target])
    assert apply_resize(store, target, CellRect(0, 1, 2, 1), GRID) is False
    assert apply_resize(store, target, CellRect(1, 1, 1, 1), GRID) is False
    assert target.rect == CellRect(1, 1, 1, 1)
