# scripts/check_telegram_token.py

import asyncio
import os
import sys

# ensure trip_bot is importable
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from loguru import logger
from trip_bot.core.logging_config import setup_logging
from trip_bot.core.config import settings
from trip_bot.infrastructure.external.telegram_client import TelegramAPIError, TelegramClient


async def main() -> int:
    setup_logging()
    if not settings.TELEGRAM_BOT_TOKEN:
        logger.error("No TELEGRAM_BOT_TOKEN configured")
        return 1

    client = TelegramClient(settings.TELEGRAM_BOT_TOKEN, settings.TELEGRAM_API_BASE)
    try:
        me = await client.get_me()
    except TelegramAPIError as exc:
        if exc.status_code == 401:
            logger.critical("Telegram token rejected (401). Ask @BotFather for a new token and update .env")
        else:
            logger.error("Token check failed: {}", exc)
        return 1

    logger.success("Telegram token OK: @{} (id={})", me.get("username"), me.get("id"))
    if not settings.ALLOWED_CHAT_ID:
        logger.warning("ALLOWED_CHAT_ID is not set; the bot will refuse to start")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
