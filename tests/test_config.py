# tests/test_config.py
"""Tests for settings loading and the required-settings check."""

import pytest

from trip_bot.core.config import ConfigError, Settings


def _bare(**overrides) -> Settings:
    values = {"TELEGRAM_BOT_TOKEN": "", "ALLOWED_CHAT_ID": ""}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults():
    s = _bare()
    assert s.TELEGRAM_MODE == "polling"
    assert s.use_webhook is False
    assert s.SHEET_TIMEOUT_SECONDS == 30
    assert s.HEARTBEAT_INTERVAL_SECONDS == 60
    assert s.KEEPALIVE_INTERVAL_SECONDS == 300


def test_missing_lists_every_required_setting():
    assert _bare().missing_required() == ["TELEGRAM_BOT_TOKEN", "ALLOWED_CHAT_ID"]


def test_blank_value_counts_as_missing():
    assert _bare(TELEGRAM_BOT_TOKEN="x", ALLOWED_CHAT_ID="   ").missing_required() == ["ALLOWED_CHAT_ID"]


def test_require_raises_with_names():
    with pytest.raises(ConfigError) as excinfo:
        _bare(ALLOWED_CHAT_ID="42").require()
    assert excinfo.value.missing == ["TELEGRAM_BOT_TOKEN"]
    assert "TELEGRAM_BOT_TOKEN" in str(excinfo.value)


def test_require_passes_when_complete():
    _bare(TELEGRAM_BOT_TOKEN="x", ALLOWED_CHAT_ID="42").require()


def test_sheet_url_is_optional():
    assert "SHEET_API_URL" not in _bare().missing_required()


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "from-env")
    monkeypatch.setenv("allowed_chat_id", "777")
    monkeypatch.setenv("TELEGRAM_MODE", "Webhook")
    s = Settings(_env_file=None)
    assert s.TELEGRAM_BOT_TOKEN == "from-env"
    assert s.ALLOWED_CHAT_ID == "777"
    assert s.use_webhook is True


def test_entry_point_exits_nonzero_without_config(monkeypatch):
    from trip_bot import __main__ as entry

    monkeypatch.setattr(entry, "settings", _bare())
    monkeypatch.setattr(entry, "setup_logging", lambda level=None: None)
    assert entry.main() == 1
