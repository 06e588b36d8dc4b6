from __future__ import annotations

import logging
from typing import Protocol

from services.day_store import DayInfoStore

logger = logging.getLogger(__name__)


class HabitToggler(Protocol):
    async def toggle_habit(self, habit_id: str) -> None: ...


class ToggleReconciler:
    """Applies a toggle intent to the store and mirrors it on the remote service.

    The local completed set is updated before the remote call is awaited and is
    left as-is when the call fails. Callers that need server truth back after a
    `ToggleError` re-fetch the day. Toggles for the same habit are not
    serialized here.
    """

    def __init__(self, store: DayInfoStore, api: HabitToggler):
        self.store = store
        self.api = api

    async def toggle(self, habit_id: str) -> None:
        was_completed = self.store.flip(habit_id)
        if was_completed is None:
            logger.info("Toggling habit %s with no day loaded; local state untouched", habit_id)
        else:
            logger.debug("Habit %s optimistically set to completed=%s", habit_id, not was_completed)
        # ToggleError propagates unchanged; no retry, no rollback.
        await self.api.toggle_habit(habit_id)
