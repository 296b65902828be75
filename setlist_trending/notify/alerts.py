from __future__ import annotations

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential

from setlist_trending.config import settings
from setlist_trending.log import get_logger
from setlist_trending.ratelimit import RateLimiter

logger = get_logger("alerts")


def create_alert_limiter() -> RateLimiter:
    """One alert per source per window."""
    return RateLimiter(max_calls=1, window_seconds=settings.alert_window_seconds)


@retry(stop=stop_after_attempt(3), wait=wait_exponential(min=2, max=15), reraise=True)
async def _post_message(text: str) -> None:
    async with httpx.AsyncClient(timeout=10) as client:
        resp = await client.post(
            f"https://api.telegram.org/bot{settings.telegram_bot_token}/sendMessage",
            json={"chat_id": settings.telegram_chat_id, "text": text},
        )
        resp.raise_for_status()


async def send_alert(source: str, message: str, limiter: RateLimiter) -> bool:
    """Send a failure alert via Telegram DM (rate-limited). Returns True if sent."""
    if not settings.telegram_bot_token or not settings.telegram_chat_id:
        logger.warning("alert_skipped_no_telegram", source=source, message=message)
        return False

    if not limiter.try_acquire(source):
        logger.debug("alert_rate_limited", source=source)
        return False

    try:
        await _post_message(f"[setlist-trending alert] {source}: {message}")
    except Exception as e:
        logger.error("alert_send_failed", source=source, error=str(e))
        return False

    logger.info("alert_sent", source=source)
    return True
