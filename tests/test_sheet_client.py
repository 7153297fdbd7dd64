# tests/test_sheet_client.py
"""Tests for the spreadsheet endpoint client and record formatting."""

import json
from datetime import datetime

import httpx

from trip_bot.domain.models import FieldName
from trip_bot.infrastructure.external.sheet_client import SheetClient, format_record

URL = "https://sheet.example/exec"

RECORD = {
    "driverName": "Ko Aung",
    "date": "07/03/2025",
    "time": "14 - 05",
    "fromLocation": "Yangon",
    "toLocation": "Mandalay",
    "amount": "50000",
}


def _client(handler) -> SheetClient:
    return SheetClient(URL, timeout=5, transport=httpx.MockTransport(handler))


def test_format_record_builds_row_payload():
    fields = {
        FieldName.DRIVER_NAME: "Ko Aung",
        FieldName.FROM_LOCATION: "Yangon",
        FieldName.TO_LOCATION: "Mandalay",
        FieldName.AMOUNT: "50000",
    }
    assert format_record(fields, datetime(2025, 3, 7, 14, 5)) == RECORD


def test_format_record_pads_date_and_uses_24_hour_clock():
    fields = {name: "x" for name in FieldName.REQUIRED_FIELDS}
    record = format_record(fields, datetime(2024, 11, 1, 9, 3))
    assert record["date"] == "01/11/2024"
    assert record["time"] == "09 - 03"
    assert format_record(fields, datetime(2024, 11, 1, 23, 59))["time"] == "23 - 59"


def test_success_response(event_loop):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["method"] = request.method
        return httpx.Response(200, json={"success": True})

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))

    assert outcome.success is True
    assert seen == {"body": RECORD, "method": "POST"}


def test_explicit_failure_carries_error(event_loop):
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": "Sheet is locked"})

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))

    assert outcome.success is False
    assert outcome.error == "Sheet is locked"


def test_redirect_is_followed(event_loop):
    def handler(request):
        if request.url.path == "/exec":
            return httpx.Response(302, headers={"Location": "https://sheet.example/echo"})
        return httpx.Response(200, json={"success": True})

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))
    assert outcome.success is True


def test_http_error_becomes_failure(event_loop):
    def handler(request):
        return httpx.Response(500, text="boom")

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))

    assert outcome.success is False
    assert outcome.error == "HTTP 500"


def test_timeout_becomes_failure(event_loop):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))

    assert outcome.success is False
    assert outcome.error == "timeout"


def test_connection_error_becomes_failure(event_loop):
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))

    assert outcome.success is False
    assert "Name or service not known" in outcome.error


def test_non_json_body_becomes_failure(event_loop):
    def handler(request):
        return httpx.Response(200, text="<html>Sign in</html>")

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))

    assert outcome.success is False
    assert "unexpected response" in outcome.error


def test_missing_error_text_gets_default(event_loop):
    def handler(request):
        return httpx.Response(200, json={"success": False})

    outcome = event_loop.run_until_complete(_client(handler).append_record(RECORD))
    assert outcome.error == "unknown error"


def test_unconfigured_url_fails_without_network(event_loop):
    def handler(request):
        raise AssertionError("should not be called")

    client = SheetClient("", transport=httpx.MockTransport(handler))
    outcome = event_loop.run_until_complete(client.append_record(RECORD))

    assert client.is_configured is False
    assert outcome.success is False
    assert "SHEET_API_URL" in outcome.error
