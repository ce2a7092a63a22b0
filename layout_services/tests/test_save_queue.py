from __future__ import annotations

import pytest

from layout_services import save_queue
from layout_services.save_queue import LayoutSaveQueue


class FakeTimer:
    instances: list = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.daemon = False
        FakeTimer.instances.append(self)

    def start(self) -> None:
        self.started = True

    def is_alive(self) -> bool:
        return self.started and not self.cancelled

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.started = False
        self.function()


@pytest.fixture
def timers(monkeypatch):
    FakeTimer.instances = []
    monkeypatch.setattr(save_queue.threading, "Timer", FakeTimer)
    return FakeTimer.instances


def test_submissions_coalesce_to_latest(timers):
    written = []
    queue = LayoutSaveQueue(written.append, debounce_seconds=0.2)

    queue.submit([{"x": 1}])
    queue.submit([{"x": 2}])
    queue.submit([{"x": 3}])

    assert len(timers) == 1
    assert timers[0].interval == 0.2
    assert timers[0].daemon is True
    assert queue.has_pending

    timers[0].fire()
    assert written == [[{"x": 3}]]
    assert queue.saves_written == 1
    assert not queue.has_pending


def test_snapshot_is_isolated_from_caller(timers):
    written = []
    queue = LayoutSaveQueue(written.append)
    record = {"x": 1}
    queue.submit([record])
    record["x"] = 99
    queue.flush()
    assert written == [[{"x": 1}]]


def test_failed_write_is_logged_and_dropped(timers, caplog):
    def _writer(records):
        raise OSError("disk full")

    queue = LayoutSaveQueue(_writer)
    queue.submit([{"x": 1}])
    assert queue.flush() is False
    assert queue.saves_failed == 1
    assert not queue.has_pending
    assert "Layout save failed" in caplog.text


def test_submission_during_write_schedules_another_flush(timers):
    written = []
    queue = LayoutSaveQueue(lambda records: None)

    def _writer(records):
        written.append(records)
        if len(written) == 1:
            queue.submit([{"x": 2}])

    queue._writer = _writer
    queue.submit([{"x": 1}])
    timers[0].fire()
    assert written == [[{"x": 1}]]
    assert len(timers) == 2
    timers[1].fire()
    assert written == [[{"x": 1}], [{"x": 2}]]


def test_configure_debounce_reschedules_pending(timers):
    queue = LayoutSaveQueue(lambda records: None, debounce_seconds=1.0)
    queue.submit([{"x": 1}])
    first = timers[-1]
    queue.configure_debounce(0.1)
    assert first.cancelled
    assert timers[-1] is not first
    assert timers[-1].interval == 0.1


def test_close_flushes_and_later_submits_write_synchronously(timers):
    written = []
    queue = LayoutSaveQueue(written.append)
    queue.submit([{"x": 1}])
    assert queue.close() is True
    assert timers[0].cancelled
    assert written == [[{"x": 1}]]

    queue.submit([{"x": 2}])
    assert written[-1] == [{"x": 2}]
    assert len(timers) == 1


def test_submit_after_close_warns_and_never_starts_timers(timers, caplog):
    written = []
    queue = LayoutSaveQueue(written.append)
    queue.submit([{"x": 1}])
    stale = timers[0]
    queue.close()

    queue.submit([{"x": 2}])
    stale.fire()

    assert written == [[{"x": 1}], [{"x": 2}]]
    assert len(timers) == 1
    assert not queue.has_pending
    assert "Save submitted after close" in caplog.text
