"""Tests for epoch-tagged delayed actions."""

from bhrun.scheduler import DelayedActionQueue


def test_action_runs_once_when_due():
    queue = DelayedActionQueue()
    calls = []
    queue.schedule(1000.0, 500.0, 0, calls.append)
    assert queue.run_due(1499.0, lambda: 0) == 0
    assert calls == []
    assert queue.run_due(1500.0, lambda: 0) == 1
    assert calls == [1500.0]
    assert queue.run_due(2000.0, lambda: 0) == 0
    assert len(queue) == 0


def test_stale_epoch_is_dropped():
    queue = DelayedActionQueue()
    calls = []
    queue.schedule(0.0, 500.0, 3, calls.append)
    assert queue.run_due(600.0, lambda: 4) == 0
    assert calls == []
    assert len(queue) == 0


def test_epoch_is_reread_between_actions():
    queue = DelayedActionQueue()
    epoch = {"value": 1}
    calls = []

    def bump(now):
        calls.append("first")
        epoch["value"] += 1

    queue.schedule(0.0, 100.0, 1, bump)
    queue.schedule(0.0, 200.0, 1, lambda now: calls.append("second"))
    queue.run_due(300.0, lambda: epoch["value"])
    assert calls == ["first"]


def test_negative_delay_runs_immediately():
    queue = DelayedActionQueue()
    calls = []
    queue.schedule(50.0, -10.0, 0, calls.append)
    assert queue.run_due(50.0, lambda: 0) == 1
