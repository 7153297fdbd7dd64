from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Step(str, Enum):
    AWAITING_DRIVER_NAME = "AWAITING_DRIVER_NAME"
    AWAITING_FROM_LOCATION = "AWAITING_FROM_LOCATION"
    AWAITING_TO_LOCATION = "AWAITING_TO_LOCATION"
    AWAITING_AMOUNT = "AWAITING_AMOUNT"
    AWAITING_CONFIRMATION = "AWAITING_CONFIRMATION"
    SUBMITTED = "SUBMITTED"
    CANCELLED = "CANCELLED"


class FieldName:
    DRIVER_NAME = "driverName"
    FROM_LOCATION = "fromLocation"
    TO_LOCATION = "toLocation"
    AMOUNT = "amount"

    REQUIRED_FIELDS = (
        DRIVER_NAME,
        FROM_LOCATION,
        TO_LOCATION,
        AMOUNT,
    )


class CallbackToken:
    NEW_POST = "new_post"
    CONFIRM_YES = "confirm_yes"
    CONFIRM_NO = "confirm_no"
    RETRY = "retry"
    DELETE_DATA = "delete_data"


@dataclass(slots=True)
class Session:
    """One in-progress collection dialog for a chat."""

    chat_id: str
    step: Step = Step.AWAITING_DRIVER_NAME
    fields: Dict[str, str] = field(default_factory=dict)
    stamped_at: Optional[datetime] = None
    last_failure_reason: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def is_complete(self) -> bool:
        return all(key in self.fields for key in FieldName.REQUIRED_FIELDS)

    def touch(self) -> None:
        self.updated_at = utc_now()


@dataclass(slots=True)
class SubmissionOutcome:
    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "SubmissionOutcome":
        return cls(success=True)

    @classmethod
    def failed(cls, reason: str) -> "SubmissionOutcome":
        return cls(success=False, error=reason)


@dataclass(slots=True)
class InboundEvent:
    """A Telegram update reduced to what the dialog needs."""

    kind: str  # "command" | "text" | "callback" | "other"
    chat_id: Optional[str]
    update_id: Optional[int] = None
    text: str = ""
    command: Optional[str] = None
    callback_token: Optional[str] = None
    callback_id: Optional[str] = None
