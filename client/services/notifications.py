from __future__ import annotations

import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

DELIVERED_HISTORY_SIZE = 50


@dataclass(frozen=True)
class Reminder:
    identifier: str
    title: str
    body: str
    trigger_at: datetime

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "title": self.title,
            "body": self.body,
            "trigger_at": self.trigger_at.isoformat(),
        }


@dataclass(frozen=True)
class NotificationBehavior:
    show_alert: bool
    play_sound: bool
    set_badge: bool


@dataclass
class NotificationHandler:
    """Decides how a delivered reminder is presented.

    Built once at startup and handed to the scheduler.
    """

    show_alert: bool = True
    play_sound: bool = False
    set_badge: bool = False
    delivered: deque[Reminder] = field(default_factory=lambda: deque(maxlen=DELIVERED_HISTORY_SIZE))

    @classmethod
    def from_settings(cls, settings: Settings) -> "NotificationHandler":
        return cls(
            show_alert=settings.NOTIFY_SHOW_ALERT,
            play_sound=settings.NOTIFY_PLAY_SOUND,
            set_badge=settings.NOTIFY_SET_BADGE,
        )

    def handle_notification(self, reminder: Reminder) -> NotificationBehavior:
        return NotificationBehavior(
            show_alert=self.show_alert,
            play_sound=self.play_sound,
            set_badge=self.set_badge,
        )

    def deliver(self, reminder: Reminder) -> NotificationBehavior:
        behavior = self.handle_notification(reminder)
        self.delivered.append(reminder)
        if behavior.show_alert:
            logger.info("Reminder %s: %s - %s", reminder.identifier, reminder.title, reminder.body)
        return behavior


class ReminderScheduler:
    """Local reminders on top of APScheduler date triggers."""

    def __init__(
        self,
        handler: NotificationHandler,
        settings: Settings | None = None,
        scheduler: AsyncIOScheduler | None = None,
    ):
        self.handler = handler
        self.settings = settings or default_settings
        self._scheduler = scheduler or AsyncIOScheduler(timezone=timezone.utc)
        self._reminders: dict[str, Reminder] = {}

    @property
    def running(self) -> bool:
        return bool(self._scheduler.running)

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("Reminder scheduler started")

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._reminders.clear()

    def schedule_reminder(self, now: datetime | None = None) -> Reminder:
        now = now or datetime.now(timezone.utc)
        reminder = Reminder(
            identifier=uuid.uuid4().hex,
            title=self.settings.REMINDER_TITLE,
            body=self.settings.REMINDER_BODY,
            trigger_at=now + timedelta(minutes=self.settings.REMINDER_DELAY_MINUTES),
        )
        self._scheduler.add_job(
            self._fire,
            "date",
            run_date=reminder.trigger_at,
            args=[reminder.identifier],
            id=reminder.identifier,
            misfire_grace_time=None,
        )
        self._reminders[reminder.identifier] = reminder
        logger.info("Scheduled reminder %s for %s", reminder.identifier, reminder.trigger_at.isoformat())
        return reminder

    def list_scheduled(self) -> list[Reminder]:
        return sorted(self._reminders.values(), key=lambda r: r.trigger_at)

    def cancel(self, identifier: str) -> bool:
        reminder = self._reminders.pop(identifier, None)
        if reminder is None:
            return False
        try:
            self._scheduler.remove_job(identifier)
        except JobLookupError:
            # Already fired.
            pass
        logger.info("Cancelled reminder %s", identifier)
        return True

    def cancel_first(self) -> Reminder | None:
        scheduled = self.list_scheduled()
        if not scheduled:
            return None
        first = scheduled[0]
        self.cancel(first.identifier)
        return first

    def _fire(self, identifier: str) -> None:
        reminder = self._reminders.pop(identifier, None)
        if reminder is None:
            return
        self.handler.deliver(reminder)
