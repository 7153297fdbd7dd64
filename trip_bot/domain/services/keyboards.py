# trip_bot/domain/services/keyboards.py
"""Inline keyboards attached to bot messages.

Each builder returns a Telegram ``reply_markup`` dict.  Rows are lists of
``(label_key, callback_token)`` pairs.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from trip_bot.domain.messages import BUTTON_LABELS
from trip_bot.domain.models import CallbackToken

Row = List[Tuple[str, str]]

_WELCOME: List[Row] = [
    [("NEW_POST_WELCOME", CallbackToken.NEW_POST)],
]

_CONFIRM: List[Row] = [
    [("CONFIRM_NO", CallbackToken.CONFIRM_NO), ("CONFIRM_YES", CallbackToken.CONFIRM_YES)],
]

_AFTER_SUCCESS: List[Row] = [
    [("NEW_POST", CallbackToken.NEW_POST)],
]

_AFTER_FAILURE: List[Row] = [
    [("RETRY", CallbackToken.RETRY), ("DELETE", CallbackToken.DELETE_DATA)],
]


def _inline_keyboard(rows: List[Row]) -> Dict[str, Any]:
    return {
        "inline_keyboard": [
            [{"text": BUTTON_LABELS[label], "callback_data": token} for label, token in row]
            for row in rows
        ]
    }


def welcome_keyboard() -> Dict[str, Any]:
    return _inline_keyboard(_WELCOME)


def confirm_keyboard() -> Dict[str, Any]:
    return _inline_keyboard(_CONFIRM)


def success_keyboard() -> Dict[str, Any]:
    return _inline_keyboard(_AFTER_SUCCESS)


def failure_keyboard() -> Dict[str, Any]:
    return _inline_keyboard(_AFTER_FAILURE)
