from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_reminder_scheduler
from services.notifications import ReminderScheduler


router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.post("", status_code=201)
async def schedule_reminder(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    reminder = scheduler.schedule_reminder()
    return reminder.to_dict()


@router.get("")
def list_reminders(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    return {"reminders": [r.to_dict() for r in scheduler.list_scheduled()]}


@router.delete("/first")
async def cancel_first_reminder(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    reminder = scheduler.cancel_first()
    if reminder is None:
        raise HTTPException(status_code=404, detail="No scheduled reminders")
    return {"status": "ok", "identifier": reminder.identifier}


@router.delete("/{identifier}")
async def cancel_reminder(identifier: str, scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    if not scheduler.cancel(identifier):
        raise HTTPException(status_code=404, detail="Reminder not found")
    return {"status": "ok", "identifier": identifier}
