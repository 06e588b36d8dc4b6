from datetime import date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


WEEKDAY_NAMES = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "pt-br": (
        "Segunda-feira",
        "Terça-feira",
        "Quarta-feira",
        "Quinta-feira",
        "Sexta-feira",
        "Sábado",
        "Domingo",
    ),
}


def _resolve_tz(tz_name: str | None):
    if not tz_name:
        return None
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def local_now(tz_name: str | None = None) -> datetime:
    """Return the current aware datetime in the given zone or the process local zone."""
    tz = _resolve_tz(tz_name)
    if tz is not None:
        return datetime.now(tz)
    return datetime.now().astimezone()


def end_of_day(d: date, tz_name: str | None = None) -> datetime:
    """Return the last instant of the calendar day as an aware datetime.

    The day is interpreted in `tz_name` when it names a valid zone, otherwise in
    the process local timezone.
    """
    tz = _resolve_tz(tz_name)
    naive = datetime.combine(d, time(23, 59, 59, 999999))
    if tz is not None:
        return naive.replace(tzinfo=tz)
    return naive.astimezone()


def is_past(d: date, now: datetime | None = None, tz_name: str | None = None) -> bool:
    """True once the whole of `d` has elapsed relative to `now`.

    Evaluated on every call; `now` defaults to the current instant.
    """
    if now is None:
        now = local_now(tz_name)
    elif now.tzinfo is None:
        tz = _resolve_tz(tz_name)
        now = now.replace(tzinfo=tz) if tz is not None else now.astimezone()
    return end_of_day(d, tz_name) < now


def day_of_week_label(d: date, locale: str = "en") -> str:
    names = WEEKDAY_NAMES.get((locale or "en").strip().lower(), WEEKDAY_NAMES["en"])
    return names[d.weekday()].lower()


def day_month_label(d: date) -> str:
    return d.strftime("%d/%m")
