import pytest
from pydantic import ValidationError

from app.core.config import DEFAULT_SLOT_TIMINGS, Settings, get_settings
from app.core.exceptions import ConfigurationError


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, database_url="sqlite+pysqlite://", **kwargs)


def test_comma_lists_from_environment(monkeypatch):
    monkeypatch.setenv("TIMETABLE_DAYS", "Monday,Tuesday")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("SLOTS_PER_DAY", "4")
    monkeypatch.setenv("BREAK_SLOT_INDEX", "2")
    monkeypatch.setenv("SLOT_TIMINGS", "9-10,10-11,11-11:15,11:15-12")

    settings = _settings()

    assert settings.timetable_days == ["Monday", "Tuesday"]
    assert settings.cors_origins == ["http://a.example", "http://b.example"]
    assert settings.slot_timings == ["9-10", "10-11", "11-11:15", "11:15-12"]


def test_json_lists_from_environment(monkeypatch):
    monkeypatch.setenv("TIMETABLE_DAYS", '["Monday", "Friday"]')

    assert _settings().timetable_days == ["Monday", "Friday"]


def test_default_timings_follow_ten_slot_day():
    assert _settings().slot_timings == DEFAULT_SLOT_TIMINGS


def test_changing_day_length_alone_drops_default_timings(monkeypatch):
    monkeypatch.setenv("SLOTS_PER_DAY", "8")

    settings = _settings()

    assert settings.slots_per_day == 8
    assert settings.slot_timings == []


def test_timings_must_match_day_length():
    with pytest.raises(ValidationError, match="one entry per slot"):
        _settings(slots_per_day=4, break_slot_index=1, slot_timings=["a", "b", "c"])


def test_get_settings_wraps_invalid_values(monkeypatch):
    monkeypatch.setenv("BREAK_SLOT_INDEX", "12")
    get_settings.cache_clear()
    try:
        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()
        assert exc_info.value.status_code == 500
        assert "break_slot_index" in exc_info.value.message
    finally:
        monkeypatch.delenv("BREAK_SLOT_INDEX")
        get_settings.cache_clear()
