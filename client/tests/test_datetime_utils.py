from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from utils.datetime_utils import (  # noqa: E402
    day_month_label,
    day_of_week_label,
    end_of_day,
    is_past,
)


MONDAY = date(2026, 3, 2)


def test_end_of_day_is_last_instant_of_day():
    eod = end_of_day(MONDAY, "UTC")
    assert eod == datetime(2026, 3, 2, 23, 59, 59, 999999, tzinfo=timezone.utc)


def test_end_of_day_respects_timezone():
    eod = end_of_day(MONDAY, "America/Sao_Paulo")
    assert eod.astimezone(timezone.utc) == datetime(2026, 3, 3, 2, 59, 59, 999999, tzinfo=timezone.utc)


def test_is_past_is_strict_after_end_of_day():
    assert is_past(MONDAY, datetime(2026, 3, 2, 23, 59, 59, tzinfo=timezone.utc), "UTC") is False
    assert is_past(MONDAY, end_of_day(MONDAY, "UTC"), "UTC") is False
    assert is_past(MONDAY, datetime(2026, 3, 3, 0, 0, tzinfo=timezone.utc), "UTC") is True


def test_is_past_uses_the_day_calendar_zone():
    now = datetime(2026, 3, 3, 1, 0, tzinfo=timezone.utc)
    assert is_past(MONDAY, now, "UTC") is True
    # Still the evening of March 2nd in Sao Paulo.
    assert is_past(MONDAY, now.astimezone(ZoneInfo("America/Sao_Paulo")), "America/Sao_Paulo") is False


def test_is_past_recomputes_against_current_time():
    assert is_past(date(2000, 1, 1)) is True
    assert is_past(date(2999, 1, 1)) is False


def test_labels():
    assert day_of_week_label(MONDAY) == "monday"
    assert day_of_week_label(MONDAY, "pt-br") == "segunda-feira"
    assert day_of_week_label(date(2026, 3, 8), "PT-BR") == "domingo"
    assert day_of_week_label(MONDAY, "xx") == "monday"
    assert day_month_label(MONDAY) == "02/03"



def test_naive_now_is_read_in_the_configured_zone():
    # 22:00 on March 2nd in Sao Paulo is already March 3rd in UTC.
    evening = datetime(2026, 3, 2, 22, 0)
    assert is_past(MONDAY, evening, "America/Sao_Paulo") is False
    assert is_past(MONDAY, datetime(2026, 3, 3, 0, 0), "America/Sao_Paulo") is True
    assert is_past(MONDAY, datetime(2026, 3, 2, 23, 59, 59), "UTC") is False
