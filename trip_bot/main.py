from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from trip_bot.api.routes import api_router
from trip_bot.core.config import Settings, settings as default_settings
from trip_bot.domain.services.access_gate import AccessGate
from trip_bot.domain.services.conversation_service import ConversationService
from trip_bot.domain.services.dialog_flow import DialogFlow, make_clock
from trip_bot.domain.services.submission import SubmissionPipeline
from trip_bot.infrastructure.cache.session_store import SessionStore
from trip_bot.infrastructure.external.sheet_client import SheetClient
from trip_bot.infrastructure.external.telegram_client import TelegramAPIError, TelegramClient
from trip_bot.infrastructure.jobs.keepalive import cancel_tasks, start_background_tasks
from trip_bot.infrastructure.jobs.polling import UpdatePoller

logger = logging.getLogger("main")


def build_service(
    settings: Settings,
    *,
    store: SessionStore | None = None,
    telegram=None,
    sheet: SheetClient | None = None,
    clock=None,
) -> ConversationService:
    """Wire the gate, dialog and submission pipeline around one session store."""
    store = store if store is not None else SessionStore()
    telegram = telegram or TelegramClient(settings.TELEGRAM_BOT_TOKEN, settings.TELEGRAM_API_BASE)
    sheet = sheet or SheetClient(settings.SHEET_API_URL, timeout=settings.SHEET_TIMEOUT_SECONDS)

    gate = AccessGate(settings.ALLOWED_CHAT_ID, telegram)
    dialog = DialogFlow(store, telegram, clock or make_clock(settings.TIMEZONE))
    submission = SubmissionPipeline(store, sheet, telegram)
    return ConversationService(gate, dialog, submission, telegram, store)


def create_app(
    settings: Settings | None = None,
    service: ConversationService | None = None,
    *,
    run_background: bool = True,
) -> FastAPI:
    settings = settings or default_settings
    settings.require()
    service = service or build_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        tasks: list[asyncio.Task] = []
        poller: UpdatePoller | None = None
        if run_background:
            tasks = start_background_tasks(settings)
            telegram = service.telegram
            if settings.use_webhook:
                if settings.TELEGRAM_WEBHOOK_URL:
                    try:
                        await telegram.set_webhook(settings.TELEGRAM_WEBHOOK_URL, settings.TELEGRAM_WEBHOOK_SECRET)
                    except TelegramAPIError as exc:
                        logger.error("setWebhook failed: %s", exc)
            else:
                poller = UpdatePoller(telegram, service, settings.TELEGRAM_POLL_TIMEOUT)
                tasks.append(asyncio.create_task(poller.run(), name="polling"))
        app.state.background_tasks = tasks
        logger.info("🤖 Trip Bot started (mode=%s)", "webhook" if settings.use_webhook else "polling")
        yield
        if poller is not None:
            poller.stop()
        await cancel_tasks(tasks)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.conversation_service = service
    app.state.session_store = service.store
    app.include_router(api_router)
    return app
