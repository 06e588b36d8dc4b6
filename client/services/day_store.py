from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol


@dataclass(frozen=True)
class Habit:
    id: str
    title: str
    created_at: datetime


@dataclass
class DayInfo:
    date: date
    possible_habits: tuple[Habit, ...] = ()
    completed_habits: set[str] = field(default_factory=set)


class DaySource(Protocol):
    async def fetch_day(self, day: date) -> DayInfo: ...


def progress_percent(possible_count: int, completed_count: int) -> int:
    """Completion as an integer percentage, rounded half up and clamped to [0, 100]."""
    if possible_count <= 0:
        return 0
    completed = max(int(completed_count), 0)
    # Integer form of floor(100 * k / n + 0.5).
    value = (200 * completed + possible_count) // (2 * possible_count)
    return max(0, min(100, value))


class DayInfoStore:
    """Holds the snapshot for one day view and answers derived queries.

    The snapshot is replaced wholesale by `load`; between loads only the
    completed set changes, through `flip`.
    """

    def __init__(self, source: DaySource):
        self._source = source
        self._day_info: DayInfo | None = None
        self._lock = threading.Lock()

    @property
    def day_info(self) -> DayInfo | None:
        return self._day_info

    @property
    def is_loaded(self) -> bool:
        return self._day_info is not None

    async def load(self, day: date) -> DayInfo:
        # Last response to resolve wins; overlapping loads are not coalesced.
        info = await self._source.fetch_day(day)
        with self._lock:
            self._day_info = info
        return info

    def is_completed(self, habit_id: str) -> bool:
        info = self._day_info
        if info is None:
            return False
        with self._lock:
            return habit_id in info.completed_habits

    def progress_percent(self) -> int:
        info = self._day_info
        if info is None:
            return 0
        with self._lock:
            completed = len(info.completed_habits)
        return progress_percent(len(info.possible_habits), completed)

    def flip(self, habit_id: str) -> bool | None:
        """Flip membership of `habit_id` atomically and return the previous membership.

        Returns None when no snapshot is loaded; nothing is changed then.
        """
        info = self._day_info
        if info is None:
            return None
        with self._lock:
            was_completed = habit_id in info.completed_habits
            if was_completed:
                info.completed_habits.discard(habit_id)
            else:
                info.completed_habits.add(habit_id)
        return was_completed

    def snapshot(self) -> dict | None:
        info = self._day_info
        if info is None:
            return None
        with self._lock:
            completed = sorted(info.completed_habits)
        return {
            "date": info.date.isoformat(),
            "possible_habits": [
                {"id": h.id, "title": h.title, "created_at": h.created_at.isoformat()}
                for h in info.possible_habits
            ],
            "completed_habits": completed,
        }
