"""
Spreadsheet web-endpoint client.

The endpoint (a published Apps Script web app in production) accepts one
JSON record per POST and answers ``{"success": true}`` or
``{"success": false, "error": "..."}``.  Apps Script answers the POST with
a redirect to the script output, so redirects are followed.

:meth:`SheetClient.append_record` never raises: transport, HTTP and decoding
problems all come back as a failed :class:`SubmissionOutcome` whose reason
is shown to the operator.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Mapping

import httpx

from trip_bot.domain.models import FieldName, SubmissionOutcome

logger = logging.getLogger("sheet_client")

_TIMEOUT = 30

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H - %M"


class SheetAPIError(Exception):
    """Raised internally when the endpoint cannot accept the record."""



def format_stamp(stamped_at: datetime) -> Dict[str, str]:
    return {
        "date": stamped_at.strftime(DATE_FORMAT),
        "time": stamped_at.strftime(TIME_FORMAT),
    }


def format_record(fields: Mapping[str, str], stamped_at: datetime) -> Dict[str, str]:
    """Build the row payload from collected fields and the confirmation time."""
    stamp = format_stamp(stamped_at)
    return {
        "driverName": fields[FieldName.DRIVER_NAME],
        "date": stamp["date"],
        "time": stamp["time"],
        "fromLocation": fields[FieldName.FROM_LOCATION],
        "toLocation": fields[FieldName.TO_LOCATION],
        "amount": fields[FieldName.AMOUNT],
    }


class SheetClient:
    def __init__(
        self,
        url: str,
        timeout: float = _TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = (url or "").strip()
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.url)

    async def _post(self, record: Dict[str, str]) -> Dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                r = await client.post(self.url, json=record)
                r.raise_for_status()
            except httpx.TimeoutException as exc:
                raise SheetAPIError("timeout") from exc
            except httpx.HTTPStatusError as exc:
                raise SheetAPIError(f"HTTP {exc.response.status_code}") from exc
            except httpx.HTTPError as exc:
                raise SheetAPIError(str(exc) or exc.__class__.__name__) from exc

        try:
            data = r.json()
        except ValueError as exc:
            raise SheetAPIError(f"unexpected response: {r.text.strip()[:200]}") from exc
        if not isinstance(data, dict):
            raise SheetAPIError(f"unexpected response: {data!r}"[:200])
        return data

    async def append_record(self, record: Dict[str, str]) -> SubmissionOutcome:
        if not self.is_configured:
            logger.warning("SHEET_API_URL is not set; record for %s not sent", record.get("driverName"))
            return SubmissionOutcome.failed("SHEET_API_URL is not configured")

        logger.info("Posting data to sheet: %s", record)
        try:
            data = await self._post(record)
        except SheetAPIError as exc:
            logger.error("Sheet write failed: %s", exc)
            return SubmissionOutcome.failed(str(exc))

        if data.get("success") is True:
            logger.info("Sheet write succeeded")
            return SubmissionOutcome.ok()

        reason = str(data.get("error") or "unknown error")
        logger.warning("Sheet rejected record: %s", reason)
        return SubmissionOutcome.failed(reason)
