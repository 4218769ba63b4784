"""Daily cost counter for paid evidence lookups.

One CostTracker per process (or per tenant); the caller decides when to
reset it. A new calendar day resets the total automatically.

Usage:
    tracker = CostTracker(daily_cap=50.0)
    tracker.record(0.005)
    if tracker.snapshot().is_over_budget:
        ...
"""

import threading
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

import structlog

from consensus_engine.config.settings import settings

WARNING_PERCENT = 80.0


@dataclass(frozen=True)
class CostSnapshot:
    """Point-in-time view of the daily spend."""

    date: date
    total_cost: float
    daily_cap: float
    percent_used: float
    is_over_budget: bool


class CostTracker:
    """
    Thread-safe running total of today's spend against a daily cap.

    Attributes:
        daily_cap: Spend limit per calendar day, in dollars
    """

    def __init__(
        self,
        daily_cap: Optional[float] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.daily_cap = settings.daily_cost_cap if daily_cap is None else daily_cap
        self._today = today
        self._date = today()
        self._total = 0.0
        self._lock = threading.Lock()
        self._logger = structlog.get_logger().bind(component="CostTracker")

    def _roll_over(self) -> None:
        """Reset the total when the calendar day changes. Caller holds the lock."""
        current = self._today()
        if current != self._date:
            self._logger.info(
                "cost_day_rollover",
                previous_date=self._date.isoformat(),
                date=current.isoformat(),
                previous_total=round(self._total, 4),
            )
            self._date = current
            self._total = 0.0

    def _percent(self) -> float:
        if self.daily_cap <= 0:
            return 100.0
        return self._total / self.daily_cap * 100

    def record(self, amount: float) -> CostSnapshot:
        """
        Add a cost to today's total.

        Logs a warning from 80% of the cap and an error once the cap is
        reached.

        Args:
            amount: Cost in dollars

        Returns:
            Snapshot after recording
        """
        with self._lock:
            self._roll_over()
            self._total += amount
            percent = self._percent()

        self._logger.debug(
            "cost_recorded",
            amount=round(amount, 4),
            total=round(self._total, 4),
            percent_used=round(percent, 1),
        )
        if percent >= 100:
            self._logger.error(
                "daily_cost_cap_exceeded",
                total=round(self._total, 2),
                daily_cap=self.daily_cap,
                percent_used=round(percent, 1),
            )
        elif percent >= WARNING_PERCENT:
            self._logger.warning(
                "daily_cost_cap_approaching",
                total=round(self._total, 2),
                daily_cap=self.daily_cap,
                percent_used=round(percent, 1),
            )
        return self.snapshot()

    def snapshot(self) -> CostSnapshot:
        with self._lock:
            self._roll_over()
            percent = self._percent()
            return CostSnapshot(
                date=self._date,
                total_cost=self._total,
                daily_cap=self.daily_cap,
                percent_used=percent,
                is_over_budget=self._total >= self.daily_cap,
            )

    @property
    def is_over_budget(self) -> bool:
        return self.snapshot().is_over_budget

    def reset(self, day: Optional[date] = None) -> None:
        """Zero the total, optionally pinning the tracked day."""
        with self._lock:
            self._date = day or self._today()
            self._total = 0.0
        self._logger.info("cost_reset", date=self._date.isoformat())
