from __future__ import annotations

from datetime import date, datetime, timezone

from setlist_trending import db
from setlist_trending.log import get_logger
from setlist_trending.models import PassResult, ShowStatus

logger = get_logger("maintenance")


def auto_transition_statuses(today: date | None = None) -> PassResult:
    """Mark upcoming shows dated before today as completed."""
    now = datetime.now(timezone.utc)
    today = today or now.date()
    result = PassResult(name="show_status_transition")

    shows = db.get_upcoming_shows()
    result.processed = len(shows)

    for show in shows:
        if show.show_date >= today:
            continue
        try:
            db.update_show_status(show.id, ShowStatus.COMPLETED, now)
            result.updated += 1
        except Exception as e:
            result.failed += 1
            logger.error("show_transition_failed", show_id=show.id, error=str(e))

    logger.info(
        "show_status_transition_done",
        processed=result.processed,
        transitioned=result.updated,
        failed=result.failed,
    )
    return result
