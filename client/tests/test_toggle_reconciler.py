from __future__ import annotations

import asyncio
import sys
from datetime import date
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import Settings  # noqa: E402
from services.day_store import DayInfoStore  # noqa: E402
from services.errors import ToggleError  # noqa: E402
from services.habits_api import HabitsApiClient  # noqa: E402
from services.toggle_reconciler import ToggleReconciler  # noqa: E402
from fake_service import FakeHabitService  # noqa: E402


DAY = date(2026, 3, 2)


def _setup(completed=None):
    service = FakeHabitService()
    service.add_day(DAY, [("a", "Drink water"), ("b", "Read")], completed=completed or [])
    api = HabitsApiClient(Settings(), client=service.client())
    store = DayInfoStore(api)
    return service, store, ToggleReconciler(store, api)


def test_toggle_round_trip_on_success():
    service, store, reconciler = _setup()

    async def _run():
        await store.load(DAY)
        assert store.is_completed("a") is False
        await reconciler.toggle("a")
        assert store.is_completed("a") is True
        await reconciler.toggle("a")
        assert store.is_completed("a") is False

    asyncio.run(_run())
    assert service.calls.count(("PATCH", "/habits/a/toggle")) == 2


def test_drink_water_and_read_scenario():
    _, store, reconciler = _setup(completed=["a"])

    async def _run():
        await store.load(DAY)
        assert store.progress_percent() == 50
        await reconciler.toggle("b")
        assert store.day_info.completed_habits == {"a", "b"}
        assert store.progress_percent() == 100
        await reconciler.toggle("a")
        assert store.day_info.completed_habits == {"b"}
        assert store.progress_percent() == 50

    asyncio.run(_run())


def test_failed_toggle_keeps_optimistic_edit():
    service, store, reconciler = _setup()
    service.fail_toggle_status = 500

    async def _run():
        await store.load(DAY)
        with pytest.raises(ToggleError) as excinfo:
            await reconciler.toggle("a")
        return excinfo.value

    error = asyncio.run(_run())
    assert error.status_code == 500
    assert store.is_completed("a") is True
    assert service.completed_on(DAY) == []


def test_local_edit_is_visible_before_remote_call_resolves():
    service, store, reconciler = _setup()

    async def _run():
        await store.load(DAY)
        service.toggle_gate = asyncio.Event()
        task = asyncio.create_task(reconciler.toggle("b"))
        await asyncio.sleep(0)
        seen_while_pending = store.is_completed("b")
        service.toggle_gate.set()
        await task
        return seen_while_pending

    assert asyncio.run(_run()) is True


def test_toggle_without_loaded_day_is_safe():
    service, store, reconciler = _setup()

    asyncio.run(reconciler.toggle("a"))

    assert store.is_loaded is False
    assert store.is_completed("a") is False
    assert ("PATCH", "/habits/a/toggle") in service.calls


def test_concurrent_toggles_on_distinct_habits_are_not_lost():
    service, store, reconciler = _setup()

    async def _run():
        await store.load(DAY)
        await asyncio.gather(reconciler.toggle("a"), reconciler.toggle("b"))

    asyncio.run(_run())
    assert store.day_info.completed_habits == {"a", "b"}
    assert sorted(service.completed_on(DAY)) == ["a", "b"]


def test_slow_load_resolving_after_toggle_discards_the_toggle():
    service, store, reconciler = _setup()

    async def _run():
        await store.load(DAY)
        service.day_gate = asyncio.Event()
        service.day_arrived = asyncio.Event()
        pending_load = asyncio.create_task(store.load(DAY))
        await service.day_arrived.wait()
        await reconciler.toggle("a")
        assert store.is_completed("a") is True
        service.day_gate.set()
        await pending_load

    asyncio.run(_run())
    # The stale snapshot wins; a fresh load resynchronises.
    assert store.is_completed("a") is False
    assert service.completed_on(DAY) == ["a"]
