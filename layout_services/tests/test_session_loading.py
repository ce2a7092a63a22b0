from __future__ import annotations

from layout_engine.placement import Grid
from layout_services.errors import PersistenceFailure, UnauthenticatedError
from layout_services.session import load_session_layout, placements_from_records


def _record(x, y, width=1, height=1, widget_id="w", plugin_id="p"):
    return {"x": x, "y": y, "width": width, "height": height, "widget_id": widget_id, "plugin_id": plugin_id}


class _Source:
    def __init__(self, records=None, error=None):
        self._records = records or []
        self._error = error

    def load_layout(self):
        if self._error is not None:
            raise self._error
        return self._records


def test_valid_records_become_placements_in_order():
    placements = load_session_layout(_Source([_record(1, 1, 2, 2), _record(3, 1, widget_id="second")]), Grid())
    assert [(p.x, p.y, p.width, p.height) for p in placements] == [(1, 1, 2, 2), (3, 1, 1, 1)]
    assert placements[1].widget_id == "second"


def test_invalid_and_overlapping_records_are_dropped(caplog):
    records = [
        _record(1, 1, 2, 2),
        _record(2, 2),
        _record(24, 1, 2, 1),
        {"x": 5},
        _record(5, 5),
    ]
    placements = placements_from_records(records, Grid())
    assert [(p.x, p.y) for p in placements] == [(1, 1), (5, 5)]
    assert caplog.text.count("Skipping layout record") == 3


def test_unauthenticated_load_yields_empty_layout():
    assert load_session_layout(_Source(error=UnauthenticatedError("403")), Grid()) == []


def test_failed_load_yields_empty_layout():
    assert load_session_layout(_Source(error=PersistenceFailure("boom")), Grid()) == []
