"""In-memory per-chat session store.

Holds at most one :class:`Session` per chat id.  Sessions live only as long
as the process; there is deliberately no backing store.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Optional

from trip_bot.domain.models import Session, Step

logger = logging.getLogger("session_store")


class SessionStateError(RuntimeError):
    """Raised when a write would break a session invariant."""


class SessionStore:
    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    @staticmethod
    def _key(chat_id) -> str:
        return str(chat_id)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id) -> bool:
        return self._key(chat_id) in self._sessions

    def create(self, chat_id) -> Session:
        """Start a fresh session, discarding any existing one for the chat."""
        key = self._key(chat_id)
        previous = self._sessions.pop(key, None)
        if previous is not None:
            logger.info(
                "Session for chat %s superseded (started %s, was %s with %d field(s))",
                key, previous.created_at.isoformat(timespec="seconds"), previous.step.value, len(previous.fields),
            )
        session = Session(chat_id=key)
        self._sessions[key] = session
        return session

    def get(self, chat_id) -> Optional[Session]:
        return self._sessions.get(self._key(chat_id))

    def record_answer(self, chat_id, field_name: str, value: str, next_step: Step) -> Session:
        """Store one collected field and move the session to ``next_step``."""
        session = self._require(chat_id)
        if field_name in session.fields:
            raise SessionStateError(f"Field {field_name!r} already collected for chat {session.chat_id}")
        session.fields[field_name] = value
        session.step = next_step
        session.touch()
        return session

    def mark_awaiting_confirmation(self, chat_id, stamped_at: datetime) -> Session:
        session = self._require(chat_id)
        if not session.is_complete():
            raise SessionStateError(f"Session for chat {session.chat_id} is missing fields")
        session.step = Step.AWAITING_CONFIRMATION
        session.stamped_at = stamped_at
        session.touch()
        return session

    def record_failure(self, chat_id, reason: str) -> Session:
        session = self._require(chat_id)
        session.last_failure_reason = reason
        session.touch()
        return session

    def delete(self, chat_id) -> bool:
        """Drop the chat's session.  Returns False when there was none."""
        return self._sessions.pop(self._key(chat_id), None) is not None

    def _require(self, chat_id) -> Session:
        session = self.get(chat_id)
        if session is None:
            raise SessionStateError(f"No active session for chat {self._key(chat_id)}")
        return session
