"""Day, week and all-time rollups of logged focus time."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from .history import SessionLogStore


def same_iso_week(a: date, b: date) -> bool:
    """Weeks run Monday to Sunday and are numbered per ISO 8601."""
    return a.isocalendar()[:2] == b.isocalendar()[:2]


@dataclass
class PeriodStats:
    """Minutes logged in one period, in total and per tag."""

    total_minutes: int = 0
    by_tag: dict[str, int] = field(default_factory=dict)

    def add(self, tag: str, minutes: int) -> None:
        self.total_minutes += minutes
        self.by_tag[tag] = self.by_tag.get(tag, 0) + minutes

    @property
    def total_hours(self) -> float:
        return round(self.total_minutes / 60, 1)

    def sorted_tags(self) -> list[tuple[str, int]]:
        """Tags by minutes, largest first; ties keep alphabetical order."""
        return sorted(self.by_tag.items(), key=lambda item: (-item[1], item[0]))

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_minutes": self.total_minutes,
            "total_hours": self.total_hours,
            "by_tag": dict(self.sorted_tags()),
        }


@dataclass
class FocusStats:
    today: PeriodStats = field(default_factory=PeriodStats)
    week: PeriodStats = field(default_factory=PeriodStats)
    all_time: PeriodStats = field(default_factory=PeriodStats)

    def to_dict(self) -> dict[str, Any]:
        return {
            "today": self.today.to_dict(),
            "week": self.week.to_dict(),
            "all_time": self.all_time.to_dict(),
        }


class StatsAggregator:
    """Compute rollups from whatever the log store currently holds."""

    def __init__(self, log_store: SessionLogStore):
        self.log_store = log_store

    def compute_stats(self, now: datetime | date | None = None) -> FocusStats:
        """
        Sum logged minutes for today, this ISO week and all time.

        Args:
            now: Reference point for "today" and "this week" (defaults to now)

        Returns:
            FocusStats with one PeriodStats per period
        """
        if now is None:
            now = datetime.now()
        today = now.date() if isinstance(now, datetime) else now

        stats = FocusStats()
        for section in self.log_store.load().sections:
            for entry in section.rows:
                stats.all_time.add(entry.tag, entry.duration_minutes)
                if same_iso_week(section.date, today):
                    stats.week.add(entry.tag, entry.duration_minutes)
                if section.date == today:
                    stats.today.add(entry.tag, entry.duration_minutes)
        return stats
