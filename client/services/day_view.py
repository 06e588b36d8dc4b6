from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel

from config import Settings, settings as default_settings
from services.day_store import DayInfoStore
from services.errors import NetworkError, PastDayError, ToggleError, UnknownHabitError, ViewNotReadyError
from services.habits_api import HabitsApiClient
from services.toggle_reconciler import ToggleReconciler
from utils.datetime_utils import day_month_label, day_of_week_label, is_past

logger = logging.getLogger(__name__)

LOAD_FAILED_NOTICE = "Could not load habit information"
TOGGLE_FAILED_NOTICE = "Could not update habit status"
PAST_DAY_NOTICE = "You cannot edit habits of a past date"


class ViewState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class HabitRow(BaseModel):
    id: str
    title: str
    checked: bool
    disabled: bool


class DayViewModel(BaseModel):
    view_id: str
    date: str
    state: ViewState
    day_of_week: str
    day_and_month: str
    progress: int
    is_past: bool
    is_empty: bool
    habits: list[HabitRow]
    past_day_notice: str | None = None
    alerts: list[str]


@dataclass
class DayView:
    """One mounted day screen: Loading -> Ready | Error, toggles loop on Ready."""

    day: date
    api: HabitsApiClient
    settings: Settings = field(default_factory=lambda: default_settings)
    view_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: ViewState = ViewState.LOADING
    closed: bool = False
    alerts: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.store = DayInfoStore(self.api)
        self.reconciler = ToggleReconciler(self.store, self.api)

    def is_past(self, now: datetime | None = None) -> bool:
        return is_past(self.day, now, self.settings.LOCAL_TIMEZONE)

    async def open(self) -> ViewState:
        self.state = ViewState.LOADING
        try:
            await self.store.load(self.day)
        except NetworkError as exc:
            if self.closed:
                return self.state
            logger.warning("Loading habits for %s failed: %s", self.day.isoformat(), exc)
            self.alerts.append(LOAD_FAILED_NOTICE)
            self.state = ViewState.ERROR
            return self.state
        if not self.closed:
            self.state = ViewState.READY
        return self.state

    async def reload(self) -> ViewState:
        return await self.open()

    async def toggle(self, habit_id: str, now: datetime | None = None) -> bool:
        """Toggle a habit from the UI. Returns False when the remote call failed."""
        if self.is_past(now):
            logger.info("Refusing toggle of %s on past day %s", habit_id, self.day.isoformat())
            raise PastDayError(PAST_DAY_NOTICE)
        info = self.store.day_info
        if self.state is not ViewState.READY or info is None:
            raise ViewNotReadyError(f"Day view is {self.state.value}")
        if all(habit.id != habit_id for habit in info.possible_habits):
            raise UnknownHabitError(f"Habit {habit_id} is not scheduled for {self.day.isoformat()}")
        try:
            await self.reconciler.toggle(habit_id)
        except ToggleError as exc:
            if not self.closed:
                logger.warning("Toggling habit %s failed: %s", habit_id, exc)
                self.alerts.append(TOGGLE_FAILED_NOTICE)
            return False
        return True

    def close(self) -> None:
        self.closed = True

    def pop_alerts(self) -> list[str]:
        out, self.alerts = self.alerts, []
        return out

    def render(self, now: datetime | None = None, consume_alerts: bool = True) -> DayViewModel:
        past = self.is_past(now)
        info = self.store.day_info
        rows: list[HabitRow] = []
        if info is not None:
            rows = [
                HabitRow(
                    id=habit.id,
                    title=habit.title,
                    checked=self.store.is_completed(habit.id),
                    disabled=past,
                )
                for habit in info.possible_habits
            ]
        return DayViewModel(
            view_id=self.view_id,
            date=self.day.isoformat(),
            state=self.state,
            day_of_week=day_of_week_label(self.day, self.settings.DISPLAY_LOCALE),
            day_and_month=day_month_label(self.day),
            progress=self.store.progress_percent(),
            is_past=past,
            is_empty=not rows,
            habits=rows,
            past_day_notice=PAST_DAY_NOTICE if past else None,
            alerts=self.pop_alerts() if consume_alerts else list(self.alerts),
        )


class DayViewRegistry:
    """Open day views keyed by id. Each view owns its own store.

    At most `DAY_VIEW_MAX_OPEN` views are kept; opening one more closes the
    least recently created view.
    """

    def __init__(self, api: HabitsApiClient, settings: Settings | None = None):
        self.api = api
        self.settings = settings or default_settings
        self._views: dict[str, DayView] = {}

    def create(self, day: date) -> DayView:
        view = DayView(day=day, api=self.api, settings=self.settings)
        limit = max(int(self.settings.DAY_VIEW_MAX_OPEN), 1)
        while len(self._views) >= limit:
            oldest_id = next(iter(self._views))
            logger.info("Closing day view %s to stay within %d open views", oldest_id, limit)
            self.close(oldest_id)
        self._views[view.view_id] = view
        return view

    def get(self, view_id: str) -> DayView | None:
        return self._views.get(view_id)

    def close(self, view_id: str) -> bool:
        view = self._views.pop(view_id, None)
        if view is None:
            return False
        view.close()
        return True

    def close_all(self) -> None:
        for view in self._views.values():
            view.close()
        self._views.clear()

    def __len__(self) -> int:
        return len(self._views)
