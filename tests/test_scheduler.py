from __future__ import annotations

import pytest

from reverse_blockblast.game import ManualScheduler


def test_tasks_run_once_due_in_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(300, lambda: calls.append("b"))
    scheduler.call_later(100, lambda: calls.append("a"))
    scheduler.call_later(300, lambda: calls.append("c"))

    assert scheduler.advance(99) == 0
    assert calls == []
    assert scheduler.advance(1) == 1
    assert calls == ["a"]
    scheduler.advance(500)
    assert calls == ["a", "b", "c"]
    assert scheduler.pending_count() == 0
    assert scheduler.now_ms == 600


def test_cancelled_task_never_runs():
    scheduler = ManualScheduler()
    calls = []
    task = scheduler.call_later(10, lambda: calls.append(1))
    task.cancel()
    assert not task.pending
    scheduler.advance(50)
    assert calls == []


def test_callbacks_may_schedule_more_work():
    scheduler = ManualScheduler()
    calls = []

    def first():
        calls.append(scheduler.now_ms)
        scheduler.call_later(20, lambda: calls.append(scheduler.now_ms))

    scheduler.call_later(10, first)
    scheduler.advance(100)
    assert calls == [10, 30]


def test_run_pending_jumps_the_clock():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(2500, lambda: calls.append("late"))
    assert scheduler.run_pending() == 1
    assert calls == ["late"]
    assert scheduler.now_ms == 2500


def test_negative_times_are_rejected():
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-5)
