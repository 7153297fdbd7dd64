# trip_bot/domain/services/dialog_flow.py
"""
Trip-record dialog.

States (a missing session is the idle state):
    AWAITING_DRIVER_NAME   — asked for the driver's name
    AWAITING_FROM_LOCATION — asked where the trip starts
    AWAITING_TO_LOCATION   — asked for the destination
    AWAITING_AMOUNT        — asked for the fare
    AWAITING_CONFIRMATION  — summary shown, waiting for Yes/No (or Retry/Delete
                             after a failed write)

Answers are stored verbatim; nothing is validated.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Tuple
from zoneinfo import ZoneInfo

from trip_bot.domain.messages import t
from trip_bot.domain.models import FieldName, Step
from trip_bot.domain.services import keyboards
from trip_bot.infrastructure.cache.session_store import SessionStore
from trip_bot.infrastructure.external.sheet_client import format_stamp

logger = logging.getLogger("dialog_flow")

Clock = Callable[[], datetime]

# step -> (field collected in this step, next step, prompt for next step)
COLLECTION_STEPS: Dict[Step, Tuple[str, Step, str | None]] = {
    Step.AWAITING_DRIVER_NAME: (FieldName.DRIVER_NAME, Step.AWAITING_FROM_LOCATION, "ASK_FROM_LOCATION"),
    Step.AWAITING_FROM_LOCATION: (FieldName.FROM_LOCATION, Step.AWAITING_TO_LOCATION, "ASK_TO_LOCATION"),
    Step.AWAITING_TO_LOCATION: (FieldName.TO_LOCATION, Step.AWAITING_AMOUNT, "ASK_AMOUNT"),
    Step.AWAITING_AMOUNT: (FieldName.AMOUNT, Step.AWAITING_CONFIRMATION, None),
}


def make_clock(tz_name: str = "") -> Clock:
    """Host-clock reader, optionally pinned to an IANA time zone."""
    tz_name = (tz_name or "").strip()
    if not tz_name:
        return lambda: datetime.now()
    zone = ZoneInfo(tz_name)
    return lambda: datetime.now(zone)


class DialogFlow:
    def __init__(self, store: SessionStore, telegram, clock: Clock | None = None) -> None:
        self._store = store
        self._telegram = telegram
        self._clock = clock or make_clock()

    async def start_session(self, chat_id: str, welcome: bool = False) -> None:
        """Throw away whatever the chat had and ask for the driver's name."""
        self._store.delete(chat_id)
        self._store.create(chat_id)
        logger.info("New session for chat %s", chat_id)

        if welcome:
            text = f'{t("WELCOME")}\n\n{t("ASK_DRIVER_NAME")}'
            await self._telegram.send_message(chat_id, text, keyboards.welcome_keyboard())
        else:
            await self._telegram.send_message(chat_id, t("ASK_DRIVER_NAME"))

    async def handle_text(self, chat_id: str, text: str) -> None:
        session = self._store.get(chat_id)
        if session is None:
            await self._telegram.send_message(chat_id, t("PLEASE_START"))
            return

        if session.step in COLLECTION_STEPS:
            field_name, next_step, prompt_key = COLLECTION_STEPS[session.step]
            self._store.record_answer(chat_id, field_name, text, next_step)
            logger.debug("Chat %s: %s collected, now %s", chat_id, field_name, next_step.value)

            if prompt_key is not None:
                await self._telegram.send_message(chat_id, t(prompt_key))
            else:
                await self.show_confirmation(chat_id)
            return

        # Waiting for a button press; free text has no meaning here
        logger.debug("Chat %s: ignoring text while in %s", chat_id, session.step.value)

    async def show_confirmation(self, chat_id: str) -> None:
        session = self._store.mark_awaiting_confirmation(chat_id, self._clock())
        stamp = format_stamp(session.stamped_at)
        summary = t(
            "CONFIRM_SUMMARY",
            driverName=session.fields[FieldName.DRIVER_NAME],
            date=stamp["date"],
            time=stamp["time"],
            fromLocation=session.fields[FieldName.FROM_LOCATION],
            toLocation=session.fields[FieldName.TO_LOCATION],
            amount=session.fields[FieldName.AMOUNT],
        )
        await self._telegram.send_message(chat_id, summary, keyboards.confirm_keyboard())

    async def cancel(self, chat_id: str) -> None:
        """User said No on the summary."""
        self._store.delete(chat_id)
        logger.info("Chat %s cancelled its record", chat_id)
        await self._telegram.send_message(chat_id, t("CANCELLED"))

    async def discard(self, chat_id: str) -> None:
        """/delete or the Delete button: drop the session whatever its step."""
        existed = self._store.delete(chat_id)
        logger.info("Chat %s discarded its session (existed=%s)", chat_id, existed)
        await self._telegram.send_message(chat_id, t("CANCELLED"))
