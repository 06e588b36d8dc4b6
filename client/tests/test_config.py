from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import Settings  # noqa: E402


def test_default_configuration_is_valid():
    Settings().validate_runtime_configuration()


def test_production_requires_https_remote_service():
    settings = Settings(ENVIRONMENT="production", HABITS_API_URL="http://habits.example.com")
    with pytest.raises(RuntimeError) as excinfo:
        settings.validate_runtime_configuration()
    assert "https" in str(excinfo.value)


def test_invalid_values_are_reported_together():
    settings = Settings(HABITS_API_TIMEOUT_SECONDS=0, REMINDER_DELAY_MINUTES=0, DISPLAY_LOCALE="fr", DAY_VIEW_MAX_OPEN=0)
    with pytest.raises(RuntimeError) as excinfo:
        settings.validate_runtime_configuration()
    message = str(excinfo.value)
    assert "HABITS_API_TIMEOUT_SECONDS" in message
    assert "REMINDER_DELAY_MINUTES" in message
    assert "DISPLAY_LOCALE" in message
    assert "DAY_VIEW_MAX_OPEN" in message
