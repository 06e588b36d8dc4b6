from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import get_day_views, require_view
from services.day_view import DayViewModel, DayViewRegistry
from services.errors import PastDayError, UnknownHabitError, ViewNotReadyError


router = APIRouter(prefix="/day-views", tags=["day-views"])


class DayViewOpenRequest(BaseModel):
    date: date


@router.post("", response_model=DayViewModel)
async def open_day_view(
    payload: DayViewOpenRequest,
    registry: DayViewRegistry = Depends(get_day_views),
):
    view = registry.create(payload.date)
    await view.open()
    return view.render()


@router.get("/{view_id}", response_model=DayViewModel)
def get_day_view(view_id: str, registry: DayViewRegistry = Depends(get_day_views)):
    return require_view(registry, view_id).render()


@router.post("/{view_id}/reload", response_model=DayViewModel)
async def reload_day_view(view_id: str, registry: DayViewRegistry = Depends(get_day_views)):
    view = require_view(registry, view_id)
    await view.reload()
    return view.render()


@router.post("/{view_id}/habits/{habit_id}/toggle", response_model=DayViewModel)
async def toggle_habit(
    view_id: str,
    habit_id: str,
    registry: DayViewRegistry = Depends(get_day_views),
):
    view = require_view(registry, view_id)
    try:
        await view.toggle(habit_id)
    except (PastDayError, ViewNotReadyError) as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except UnknownHabitError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return view.render()


@router.delete("/{view_id}")
def close_day_view(view_id: str, registry: DayViewRegistry = Depends(get_day_views)):
    if not registry.close(view_id):
        raise HTTPException(status_code=404, detail="Day view not found")
    return {"status": "ok", "view_id": view_id}
