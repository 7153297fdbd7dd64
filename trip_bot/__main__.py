# trip_bot/__main__.py
"""
Run the bot:  ``python -m trip_bot``

TELEGRAM_MODE=polling (default) long-polls Telegram from this process;
TELEGRAM_MODE=webhook serves the FastAPI app with uvicorn so Telegram can
POST updates to /telegram/webhook.
"""

import asyncio
import sys

import uvicorn
from loguru import logger

from trip_bot.core.config import ConfigError, settings
from trip_bot.core.logging_config import setup_logging
from trip_bot.infrastructure.jobs.keepalive import cancel_tasks, start_background_tasks
from trip_bot.infrastructure.jobs.polling import UpdatePoller
from trip_bot.main import build_service, create_app


async def run_polling() -> None:
    service = build_service(settings)
    poller = UpdatePoller(service.telegram, service, settings.TELEGRAM_POLL_TIMEOUT)
    tasks = start_background_tasks(settings)
    logger.info("🤖 Trip Bot started (mode=polling)")
    try:
        await poller.run()
    finally:
        await cancel_tasks(tasks)


def main() -> int:
    setup_logging(settings.LOG_LEVEL)

    try:
        settings.require()
    except ConfigError as exc:
        logger.error("Missing required environment variables!")
        logger.error("Please set:")
        for name in exc.missing:
            logger.error("- {}", name)
        if not settings.SHEET_API_URL:
            logger.error("- SHEET_API_URL (optional for testing)")
        return 1

    if settings.use_webhook:
        uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)
        return 0

    try:
        asyncio.run(run_polling())
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
