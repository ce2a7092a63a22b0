from __future__ import annotations

from layout_engine.occupancy import find_free_cell, in_bounds, is_valid_candidate, overlaps, widget_at
from layout_engine.placement import CellRect, Grid, Placement


def test_widget_at_finds_multi_cell_placement():
    wide = Placement("a", "wide", 3, 2, 3, 2)
    layout = [Placement("a", "small", 1, 1), wide]
    assert widget_at(layout, 5, 3) is wide
    assert widget_at(layout, 6, 3) is None


def test_overlaps_ignores_excluded_placement():
    mover = Placement("a", "mover", 1, 1, 2, 2)
    other = Placement("a", "other", 4, 1)
    layout = [mover, other]
    assert overlaps(layout, CellRect(2, 2, 2, 2)) is True
    assert overlaps(layout, CellRect(2, 2, 2, 2), excluding=mover) is False
    assert overlaps(layout, CellRect(3, 1, 2, 1), excluding=mover) is True


def test_is_valid_candidate_requires_bounds_and_free_cells():
    grid = Grid(columns=4, rows=3)
    layout = [Placement("a", "one", 1, 1)]
    assert in_bounds(grid, CellRect(3, 2, 2, 2))
    assert not in_bounds(grid, CellRect(4, 2, 2, 1))
    assert is_valid_candidate(layout, grid, CellRect(2, 1, 3, 1))
    assert not is_valid_candidate(layout, grid, CellRect(1, 1, 1, 1))
    assert not is_valid_candidate(layout, grid, CellRect(3, 3, 1, 2))


def test_find_free_cell_scans_rows_first():
    grid = Grid(columns=3, rows=2)
    layout = [Placement("a", "one", 1, 1, 2, 1), Placement("a", "two", 3, 1)]
    assert find_free_cell(layout, grid) == (1, 2)
    assert find_free_cell([], grid) == (1, 1)


def test_find_free_cell_returns_none_when_full():
    grid = Grid(columns=2, rows=2)
    layout = [Placement("a", "all", 1, 1, 2, 2)]
    assert find_free_cell(layout, grid) is None
