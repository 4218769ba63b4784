"""Tests for CostTracker.

Tests cover:
- Accumulation and snapshot fields
- Over-budget detection at exactly the cap
- Calendar day rollover and reset
- Default cap from settings
- Thread safety of record()
"""

import threading
from datetime import date

import pytest

from consensus_engine.budget import CostSnapshot, CostTracker
from consensus_engine.config.settings import settings


class FakeClock:
    def __init__(self, day: date) -> None:
        self.day = day

    def __call__(self) -> date:
        return self.day


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(date(2025, 3, 1))


@pytest.fixture
def tracker(clock: FakeClock) -> CostTracker:
    return CostTracker(daily_cap=10.0, today=clock)


class TestRecord:
    def test_accumulates(self, tracker: CostTracker) -> None:
        tracker.record(2.0)
        snapshot = tracker.record(3.0)

        assert isinstance(snapshot, CostSnapshot)
        assert snapshot.total_cost == 5.0
        assert snapshot.percent_used == 50.0
        assert snapshot.date == date(2025, 3, 1)
        assert not snapshot.is_over_budget

    def test_over_budget_at_cap(self, tracker: CostTracker) -> None:
        tracker.record(9.0)
        assert not tracker.is_over_budget
        tracker.record(1.0)
        assert tracker.is_over_budget

    def test_zero_cap_is_always_over(self, clock: FakeClock) -> None:
        tracker = CostTracker(daily_cap=0.0, today=clock)
        snapshot = tracker.snapshot()
        assert snapshot.is_over_budget
        assert snapshot.percent_used == 100.0

    def test_default_cap_from_settings(self) -> None:
        assert CostTracker().daily_cap == settings.daily_cost_cap

    def test_concurrent_records(self, clock: FakeClock) -> None:
        tracker = CostTracker(daily_cap=1000.0, today=clock)

        def spend() -> None:
            for _ in range(100):
                tracker.record(0.5)

        threads = [threading.Thread(target=spend) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert tracker.snapshot().total_cost == 400.0


class TestRollover:
    def test_new_day_resets_total(self, tracker: CostTracker, clock: FakeClock) -> None:
        tracker.record(10.0)
        assert tracker.is_over_budget

        clock.day = date(2025, 3, 2)
        snapshot = tracker.snapshot()
        assert snapshot.total_cost == 0.0
        assert snapshot.date == date(2025, 3, 2)
        assert not snapshot.is_over_budget

    def test_reset(self, tracker: CostTracker) -> None:
        tracker.record(4.0)
        tracker.reset()
        assert tracker.snapshot().total_cost == 0.0

    def test_stale_pinned_day_rolls_over(self, tracker: CostTracker, clock: FakeClock) -> None:
        tracker.record(4.0)
        tracker.reset(day=date(2025, 2, 28))
        snapshot = tracker.record(1.0)

        assert snapshot.date == clock.day
        assert snapshot.total_cost == 1.0
