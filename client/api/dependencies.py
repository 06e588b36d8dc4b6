from fastapi import HTTPException, Request

from services.day_view import DayView, DayViewRegistry
from services.notifications import ReminderScheduler


def get_day_views(request: Request) -> DayViewRegistry:
    return request.app.state.day_views


def get_reminder_scheduler(request: Request) -> ReminderScheduler:
    return request.app.state.reminders


def require_view(registry: DayViewRegistry, view_id: str) -> DayView:
    view = registry.get(view_id)
    if view is None:
        raise HTTPException(status_code=404, detail="Day view not found")
    return view
