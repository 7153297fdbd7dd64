from __future__ import annotations

import logging

from trip_bot.domain.messages import t
from trip_bot.domain.models import Step, SubmissionOutcome
from trip_bot.domain.services import keyboards
from trip_bot.infrastructure.cache.session_store import SessionStore
from trip_bot.infrastructure.external.sheet_client import SheetClient, format_record

logger = logging.getLogger("submission")


class SubmissionPipeline:
    """Writes a confirmed record to the sheet and reports the outcome.

    A failed write keeps the session so the operator can press Retry (which
    calls :meth:`submit` again with the same stored record) or Delete.
    """

    def __init__(self, store: SessionStore, sheet: SheetClient, telegram) -> None:
        self._store = store
        self._sheet = sheet
        self._telegram = telegram

    async def submit(self, chat_id: str) -> SubmissionOutcome:
        session = self._store.get(chat_id)
        if (
            session is None
            or session.step != Step.AWAITING_CONFIRMATION
            or not session.is_complete()
            or session.stamped_at is None
        ):
            # Stale button from a session that is gone or not finished
            logger.info("Chat %s pressed submit without a pending record", chat_id)
            await self._telegram.send_message(chat_id, t("PLEASE_START"))
            return SubmissionOutcome.failed("no pending record")

        record = format_record(session.fields, session.stamped_at)
        outcome = await self._sheet.append_record(record)

        if outcome.success:
            self._store.delete(chat_id)
            logger.info("Chat %s record submitted", chat_id)
            await self._telegram.send_message(chat_id, t("POST_SUCCESS"), keyboards.success_keyboard())
            return outcome

        reason = outcome.error or "unknown error"
        self._store.record_failure(chat_id, reason)
        logger.warning("Chat %s record not submitted: %s", chat_id, reason)
        await self._telegram.send_message(
            chat_id,
            t("POST_FAILED", error=reason),
            keyboards.failure_keyboard(),
        )
        return outcome
