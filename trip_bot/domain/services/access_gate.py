from __future__ import annotations

import logging

from trip_bot.domain.messages import t
from trip_bot.infrastructure.external.telegram_client import TelegramAPIError

logger = logging.getLogger("access_gate")


class AccessGate:
    """Lets exactly one configured chat through; everyone else gets a refusal."""

    def __init__(self, allowed_chat_id, telegram) -> None:
        self.allowed_chat_id = str(allowed_chat_id).strip()
        self._telegram = telegram

    def is_allowed(self, chat_id) -> bool:
        return chat_id is not None and str(chat_id).strip() == self.allowed_chat_id

    async def admit(self, chat_id) -> bool:
        if self.is_allowed(chat_id):
            return True
        logger.warning("Rejected event from unauthorized chat %s", chat_id)
        if chat_id is not None:
            try:
                await self._telegram.send_message(str(chat_id), t("NOT_AUTHORIZED"))
            except TelegramAPIError as exc:
                logger.error("Could not notify unauthorized chat %s: %s", chat_id, exc)
        return False
