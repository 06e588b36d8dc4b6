from __future__ import annotations

import logging
from datetime import date, datetime
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, ValidationError

from config import Settings, settings as default_settings
from services.day_store import DayInfo, Habit
from services.errors import NetworkError, ToggleError

logger = logging.getLogger(__name__)


class HabitPayload(BaseModel):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    created_at: datetime


class DayPayload(BaseModel):
    """`GET /day` response body (v1)."""

    completedHabits: list[str] = Field(default_factory=list)
    possibleHabits: list[HabitPayload] = Field(default_factory=list)

    def to_day_info(self, day: date) -> DayInfo:
        habits = tuple(
            Habit(id=row.id, title=row.title, created_at=row.created_at)
            for row in self.possibleHabits
        )
        return DayInfo(date=day, possible_habits=habits, completed_habits=set(self.completedHabits))


class HabitsApiClient:
    """Thin async client for the remote habit service."""

    def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None):
        self._settings = settings or default_settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._settings.HABITS_API_URL,
            timeout=self._settings.HABITS_API_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
        )

    async def fetch_day(self, day: date) -> DayInfo:
        try:
            resp = await self._client.get("/day", params={"date": day.isoformat()})
        except httpx.HTTPError as exc:
            raise NetworkError(f"Day request failed: {exc}") from exc
        if not resp.is_success:
            raise NetworkError(f"Day request returned HTTP {resp.status_code}", status_code=resp.status_code)
        try:
            payload = DayPayload.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise NetworkError(f"Malformed day payload: {exc}", status_code=resp.status_code) from exc
        return payload.to_day_info(day)

    async def toggle_habit(self, habit_id: str) -> None:
        path = f"/habits/{quote(str(habit_id), safe='')}/toggle"
        try:
            resp = await self._client.patch(path)
        except httpx.HTTPError as exc:
            raise ToggleError(f"Toggle request failed: {exc}") from exc
        if not resp.is_success:
            raise ToggleError(f"Toggle request returned HTTP {resp.status_code}", status_code=resp.status_code)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
