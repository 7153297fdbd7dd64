# trip_bot/infrastructure/jobs/keepalive.py
"""
Background liveness helpers.

* heartbeat: logs a line every ``HEARTBEAT_INTERVAL_SECONDS`` so the host's
  log view shows the bot is alive.
* keep-alive ping: free hosting tiers put idle apps to sleep; when
  ``KEEPALIVE_URL`` is set the app pings its own public URL on a timer.

Neither task ever raises out of its loop.
"""

from __future__ import annotations

import asyncio

import httpx
from loguru import logger

_TIMEOUT = 10


async def ping_once(url: str, transport: httpx.AsyncBaseTransport | None = None) -> int | None:
    """GET ``url`` once; returns the status code, or None when unreachable."""
    try:
        async with httpx.AsyncClient(timeout=_TIMEOUT, transport=transport) as client:
            resp = await client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("Keep-alive error: {}", exc)
        return None
    logger.info("Keep-alive ping sent: {}", resp.status_code)
    return resp.status_code


async def keepalive_loop(url: str, interval_seconds: int) -> None:
    while True:
        await ping_once(url)
        await asyncio.sleep(interval_seconds)


async def heartbeat_loop(interval_seconds: int) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        logger.info("🤖 Bot is running...")


def start_background_tasks(settings) -> list[asyncio.Task]:
    """Schedule heartbeat (and keep-alive when configured) on the running loop."""
    tasks = [asyncio.create_task(heartbeat_loop(settings.HEARTBEAT_INTERVAL_SECONDS), name="heartbeat")]
    if settings.KEEPALIVE_URL:
        tasks.append(
            asyncio.create_task(
                keepalive_loop(settings.KEEPALIVE_URL, settings.KEEPALIVE_INTERVAL_SECONDS),
                name="keepalive",
            )
        )
    return tasks


async def cancel_tasks(tasks: list[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
