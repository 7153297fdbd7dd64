# trip_bot/infrastructure/external/telegram_client.py
"""
Telegram Bot API client.

Only the handful of methods the bot needs:
  - sendMessage (plain text, optionally with an inline keyboard)
  - answerCallbackQuery (clears the button spinner)
  - getUpdates / deleteWebhook (long polling)
  - setWebhook (webhook mode)

Every call is a JSON POST to ``{base}/bot{token}/{method}``; Telegram wraps
results as ``{"ok": true, "result": ...}`` or ``{"ok": false, "description": ...}``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

# Timeout for ordinary API calls (seconds); getUpdates adds the poll timeout
_TIMEOUT = 15


class TelegramAPIError(Exception):
    """Raised when the Bot API rejects a call or cannot be reached."""

    def __init__(self, message: str, status_code: int = 0, response: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response or {}


class TelegramClient:
    def __init__(
        self,
        token: str,
        base_url: str = "https://api.telegram.org",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base = f"{base_url.rstrip('/')}/bot{token}"
        self._transport = transport

    async def _call(self, method: str, payload: Dict[str, Any], timeout: float = _TIMEOUT) -> Any:
        url = f"{self.base}/{method}"
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            try:
                resp = await client.post(url, json=payload)
            except httpx.HTTPError as exc:
                raise TelegramAPIError(f"Telegram {method} failed: {exc!r}") from exc

        try:
            data = resp.json()
        except ValueError:
            raise TelegramAPIError(
                f"Telegram {method} returned non-JSON body (status={resp.status_code})",
                status_code=resp.status_code,
            )
        if not isinstance(data, dict):
            raise TelegramAPIError(
                f"Telegram {method} returned unexpected body (status={resp.status_code})",
                status_code=resp.status_code,
            )
        if resp.status_code >= 400 or not data.get("ok"):
            description = data.get("description") or f"HTTP {resp.status_code}"
            logger.error("Telegram {} error {}: {}", method, resp.status_code, description)
            raise TelegramAPIError(
                f"Telegram {method} error: {description}",
                status_code=resp.status_code,
                response=data,
            )
        return data.get("result")

    async def get_me(self) -> Dict[str, Any]:
        return await self._call("getMe", {})

    async def send_message(
        self,
        chat_id: str,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if reply_markup:
            payload["reply_markup"] = reply_markup
        logger.info("TG → Sending message to {}: {!r}", chat_id, text)
        return await self._call("sendMessage", payload)

    async def answer_callback_query(self, callback_query_id: str, text: str | None = None) -> bool:
        payload: Dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
        return bool(await self._call("answerCallbackQuery", payload))

    async def get_updates(self, offset: int = 0, poll_timeout: int = 30) -> List[Dict[str, Any]]:
        payload = {
            "offset": int(offset),
            "timeout": int(poll_timeout),
            "allowed_updates": ["message", "callback_query"],
        }
        result = await self._call("getUpdates", payload, timeout=_TIMEOUT + poll_timeout)
        if not isinstance(result, list):
            return []
        return [u for u in result if isinstance(u, dict)]

    async def delete_webhook(self) -> bool:
        return bool(await self._call("deleteWebhook", {"drop_pending_updates": False}))

    async def set_webhook(self, url: str, secret_token: str = "") -> bool:
        payload: Dict[str, Any] = {
            "url": url,
            "allowed_updates": ["message", "callback_query"],
        }
        if secret_token:
            payload["secret_token"] = secret_token
        logger.info("TG → Registering webhook {}", url)
        return bool(await self._call("setWebhook", payload))
