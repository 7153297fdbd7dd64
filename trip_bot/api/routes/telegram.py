import hmac
import logging

from fastapi import APIRouter, Header, HTTPException, Request, status

logger = logging.getLogger("api.telegram")

router = APIRouter()


def _secret_matches(expected: str, supplied: str | None) -> bool:
    if not expected:
        return True
    return hmac.compare_digest(expected, supplied or "")


@router.post("/telegram/webhook")
async def webhook(
    request: Request,
    x_telegram_bot_api_secret_token: str | None = Header(default=None),
):
    settings = request.app.state.settings
    if not _secret_matches(settings.TELEGRAM_WEBHOOK_SECRET, x_telegram_bot_api_secret_token):
        logger.warning("Webhook call with a bad secret token")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid secret token")

    update = await request.json()
    if not isinstance(update, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Update must be an object")

    try:
        await request.app.state.conversation_service.handle_update(update)
    except Exception:
        # Acknowledge anyway; a non-2xx makes Telegram redeliver the same update
        logger.exception("Unhandled error processing update %s", update.get("update_id"))
    return {"status": "ok"}
