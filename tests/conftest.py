"""Shared test fixtures for the trip bot test suite."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from helpers import ALLOWED_CHAT, FIXED_NOW

from trip_bot.core.config import Settings
from trip_bot.domain.models import SubmissionOutcome
from trip_bot.infrastructure.cache.session_store import SessionStore
from trip_bot.main import build_service


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        TELEGRAM_BOT_TOKEN="123:ABC",
        ALLOWED_CHAT_ID=ALLOWED_CHAT,
        SHEET_API_URL="https://sheet.example/exec",
    )


@pytest.fixture
def telegram():
    """Stand-in for TelegramClient that records every outbound call."""
    tg = MagicMock()
    tg.send_message = AsyncMock(return_value={"message_id": 1})
    tg.answer_callback_query = AsyncMock(return_value=True)
    tg.get_updates = AsyncMock(return_value=[])
    tg.delete_webhook = AsyncMock(return_value=True)
    tg.set_webhook = AsyncMock(return_value=True)
    return tg


@pytest.fixture
def sheet():
    s = MagicMock()
    s.append_record = AsyncMock(return_value=SubmissionOutcome.ok())
    return s


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def service(settings, store, telegram, sheet):
    return build_service(settings, store=store, telegram=telegram, sheet=sheet, clock=lambda: FIXED_NOW)
