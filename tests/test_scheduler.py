"""
Tests for the single-threaded driver scheduler.
"""

import pytest

from star_catch.catch_core.scheduler import ManualScheduler


@pytest.fixture
def scheduler():
    return ManualScheduler()


class TestRepeatingTasks:
    """Test firing, ordering and cancellation."""

    def test_fires_once_per_interval(self, scheduler):
        calls = []
        task = scheduler.schedule_repeating(0.5, lambda: calls.append(scheduler.now))

        assert scheduler.advance(2.0) == 4
        assert calls == [0.5, 1.0, 1.5, 2.0]
        assert task.fire_count == 4

    def test_first_firing_one_interval_after_scheduling(self, scheduler):
        calls = []
        scheduler.schedule_repeating(1.0, lambda: calls.append(1))

        scheduler.advance(0.99)
        assert calls == []
        scheduler.advance(0.01)
        assert calls == [1]

    def test_sixty_hz_over_one_second(self, scheduler):
        """Float rounding does not drop the last tick of a second."""
        calls = []
        scheduler.schedule_repeating(1.0 / 60, lambda: calls.append(1))

        for _ in range(60):
            scheduler.advance(1.0 / 60)
        assert len(calls) == 60

    def test_ties_fire_in_scheduling_order(self, scheduler):
        calls = []
        scheduler.schedule_repeating(0.25, lambda: calls.append("fast"))
        scheduler.schedule_repeating(1.0, lambda: calls.append("slow"))

        scheduler.advance(1.0)
        assert calls == ["fast", "fast", "fast", "fast", "slow"]

    def test_cancelled_task_never_fires_again(self, scheduler):
        calls = []
        task = scheduler.schedule_repeating(0.1, lambda: calls.append(1))

        scheduler.advance(0.3)
        task.cancel()
        scheduler.advance(1.0)

        assert len(calls) == 3
        assert task.cancelled
        assert scheduler.active_tasks == []

    def test_cancel_from_inside_callback(self, scheduler):
        """A callback can cancel another task due in the same advance."""
        calls = []
        other = scheduler.schedule_repeating(1.0, lambda: calls.append("other"))

        def stopper():
            calls.append("stopper")
            other.cancel()

        scheduler.schedule_repeating(0.5, stopper)
        scheduler.advance(1.0)

        assert calls == ["stopper", "stopper"]

    def test_cancel_self_inside_callback(self, scheduler):
        calls = []
        holder = {}

        def once():
            calls.append(1)
            holder["task"].cancel()

        holder["task"] = scheduler.schedule_repeating(0.1, once)
        scheduler.advance(5.0)
        assert calls == [1]

    def test_negative_advance_ignored(self, scheduler):
        scheduler.advance(1.0)
        scheduler.advance(-5.0)
        assert scheduler.now == 1.0

    def test_invalid_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.schedule_repeating(0, lambda: None)

    def test_cancel_all(self, scheduler):
        scheduler.schedule_repeating(0.1, lambda: None)
        scheduler.schedule_repeating(0.2, lambda: None)
        scheduler.cancel_all()
        assert scheduler.advance(1.0) == 0
