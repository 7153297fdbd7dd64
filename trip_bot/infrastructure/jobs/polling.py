# trip_bot/infrastructure/jobs/polling.py
"""
Long-polling loop: pulls updates from Telegram and feeds them, in order,
to the conversation service.

A failing getUpdates call is logged and retried after a short pause; a
failing update is logged and skipped so one bad update cannot wedge the
offset.
"""

from __future__ import annotations

import asyncio
import logging

from trip_bot.infrastructure.external.telegram_client import TelegramAPIError, TelegramClient

logger = logging.getLogger("polling")

ERROR_BACKOFF_SECONDS = 3


class UpdatePoller:
    def __init__(self, telegram: TelegramClient, service, poll_timeout: int = 30) -> None:
        self._telegram = telegram
        self._service = service
        self.poll_timeout = poll_timeout
        self.offset = 0
        self._stopped = asyncio.Event()

    def stop(self) -> None:
        self._stopped.set()

    async def poll_once(self) -> int:
        """Fetch and dispatch one batch; returns how many updates were handled."""
        updates = await self._telegram.get_updates(offset=self.offset, poll_timeout=self.poll_timeout)
        for update in updates:
            update_id = update.get("update_id")
            if isinstance(update_id, int):
                self.offset = max(self.offset, update_id + 1)
            try:
                await self._service.handle_update(update)
            except Exception:
                logger.exception("Unhandled error processing update %s", update_id)
        return len(updates)

    async def run(self) -> None:
        try:
            await self._telegram.delete_webhook()
        except TelegramAPIError as exc:
            logger.warning("deleteWebhook failed, polling anyway: %s", exc)

        logger.info("Polling Telegram for updates (timeout=%ss)", self.poll_timeout)
        while not self._stopped.is_set():
            try:
                await self.poll_once()
            except TelegramAPIError as exc:
                logger.error("Polling error: %s", exc)
                await asyncio.sleep(ERROR_BACKOFF_SECONDS)
        logger.info("Polling stopped")
