# trip_bot/domain/services/conversation_service.py
"""
Entry point for every Telegram update, whichever way it arrived (long
polling or webhook).

Updates are handled strictly one at a time: the lock is held for the whole
of an update, including the sheet write, so a second update for the chat
only sees the session after the first has finished with it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from trip_bot.domain.messages import t
from trip_bot.domain.models import CallbackToken, InboundEvent
from trip_bot.domain.services.access_gate import AccessGate
from trip_bot.domain.services.dialog_flow import DialogFlow
from trip_bot.domain.services.submission import SubmissionPipeline
from trip_bot.infrastructure.cache.session_store import SessionStore
from trip_bot.infrastructure.external.telegram_client import TelegramAPIError

logger = logging.getLogger("conversation_service")

CMD_START = "start"
CMD_NEW_POST = "newpost"
CMD_DELETE = "delete"
CMD_HELP = "help"

COMMAND_ALIASES = {
    "new_post": CMD_NEW_POST,
}


def _parse_command(text: str) -> Optional[str]:
    """``"/NewPost@my_bot extra"`` -> ``"newpost"``; None for plain text."""
    if not text.startswith("/"):
        return None
    parts = text[1:].split(maxsplit=1)
    word = parts[0] if parts else ""
    word = word.split("@", 1)[0].lower()
    return COMMAND_ALIASES.get(word, word)


def parse_update(update: Dict[str, Any]) -> InboundEvent:
    update_id = update.get("update_id")

    callback = update.get("callback_query")
    if isinstance(callback, dict):
        message = callback.get("message") or {}
        chat_id = (message.get("chat") or {}).get("id")
        return InboundEvent(
            kind="callback",
            chat_id=str(chat_id) if chat_id is not None else None,
            update_id=update_id,
            callback_token=callback.get("data"),
            callback_id=callback.get("id"),
        )

    message = update.get("message")
    if isinstance(message, dict):
        chat_id = (message.get("chat") or {}).get("id")
        chat_id = str(chat_id) if chat_id is not None else None
        text = message.get("text")
        if not isinstance(text, str):
            return InboundEvent(kind="other", chat_id=chat_id, update_id=update_id)
        command = _parse_command(text)
        return InboundEvent(
            kind="command" if command is not None else "text",
            chat_id=chat_id,
            update_id=update_id,
            text=text,
            command=command,
        )

    return InboundEvent(kind="other", chat_id=None, update_id=update_id)


class ConversationService:
    def __init__(
        self,
        gate: AccessGate,
        dialog: DialogFlow,
        submission: SubmissionPipeline,
        telegram,
        store: SessionStore,
    ) -> None:
        self.gate = gate
        self.dialog = dialog
        self.submission = submission
        self.telegram = telegram
        self.store = store
        self._lock = asyncio.Lock()

    async def handle_update(self, update: Dict[str, Any]) -> None:
        event = parse_update(update)
        async with self._lock:
            await self.handle_event(event)

    async def handle_event(self, event: InboundEvent) -> None:
        if event.chat_id is None:
            logger.debug("Skipping update %s without a chat", event.update_id)
            return

        if not await self.gate.admit(event.chat_id):
            return

        try:
            if event.kind == "command":
                await self._on_command(event)
            elif event.kind == "callback":
                await self._on_callback(event)
            elif event.kind == "text":
                await self.dialog.handle_text(event.chat_id, event.text)
            else:
                logger.debug("Ignoring non-text update %s from chat %s", event.update_id, event.chat_id)
        except (TelegramAPIError, httpx.HTTPError) as exc:
            logger.error("Error handling update %s: %s", event.update_id, exc)
            await self._notify_error(event.chat_id, exc)

        if event.kind == "callback" and event.callback_id:
            try:
                await self.telegram.answer_callback_query(event.callback_id)
            except (TelegramAPIError, httpx.HTTPError) as exc:
                logger.warning("answerCallbackQuery failed for %s: %s", event.callback_id, exc)

    async def _on_command(self, event: InboundEvent) -> None:
        chat_id = event.chat_id
        if event.command == CMD_START:
            await self.dialog.start_session(chat_id, welcome=True)
        elif event.command == CMD_NEW_POST:
            await self.dialog.start_session(chat_id)
        elif event.command == CMD_DELETE:
            await self.dialog.discard(chat_id)
        elif event.command == CMD_HELP:
            await self.telegram.send_message(chat_id, t("HELP"))
        else:
            logger.debug("Ignoring unknown command /%s from chat %s", event.command, chat_id)

    async def _on_callback(self, event: InboundEvent) -> None:
        chat_id = event.chat_id
        token = event.callback_token
        if token == CallbackToken.NEW_POST:
            await self.dialog.start_session(chat_id)
        elif token in (CallbackToken.CONFIRM_YES, CallbackToken.RETRY):
            await self.submission.submit(chat_id)
        elif token == CallbackToken.CONFIRM_NO:
            await self.dialog.cancel(chat_id)
        elif token == CallbackToken.DELETE_DATA:
            await self.dialog.discard(chat_id)
        else:
            logger.warning("Unknown button %r from chat %s", token, chat_id)

    async def _notify_error(self, chat_id: str, exc: Exception) -> None:
        try:
            await self.telegram.send_message(chat_id, t("ERROR_OCCURRED", error=str(exc)))
        except (TelegramAPIError, httpx.HTTPError) as send_exc:
            logger.error("Could not report error to chat %s: %s", chat_id, send_exc)
