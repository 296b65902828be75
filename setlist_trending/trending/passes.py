from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from setlist_trending import db
from setlist_trending.log import get_logger
from setlist_trending.models import Artist, PassResult, Show
from setlist_trending.trending.ranker import assign_ranks
from setlist_trending.trending.scorer import artist_score, show_score

logger = get_logger("trending")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clear_stale_ranks(
    clear: Callable[[set[str]], int], ranked_ids: set[str], result: PassResult
) -> None:
    """Drop ranks left on rows this pass did not rank (inactive, completed, unreadable)."""
    try:
        cleared = clear(ranked_ids)
    except Exception as e:
        result.failed += 1
        logger.error("stale_rank_clear_failed", pass_name=result.name, error=str(e))
        return
    if cleared:
        logger.info("stale_ranks_cleared", pass_name=result.name, cleared=cleared)


def update_artist_trending(now: datetime | None = None) -> PassResult:
    """Score every active artist, rank the top 20 and clear rank on the rest."""
    now = now or _utcnow()
    result = PassResult(name="artist_trending")

    artists = db.get_active_artists()
    result.processed = len(artists)
    if not artists:
        logger.info("artist_trending_empty")

    scored: list[tuple[Artist, float]] = [(a, artist_score(a, now)) for a in artists]
    ranked_ids: set[str] = set()

    for artist, score, rank in assign_ranks(scored):
        try:
            db.update_artist_trending(artist.id, score, rank, now)
        except Exception as e:
            result.failed += 1
            logger.error("artist_trending_write_failed", artist_id=artist.id, error=str(e))
            continue
        result.updated += 1
        if rank is not None:
            result.ranked += 1
            ranked_ids.add(artist.id)

    _clear_stale_ranks(db.clear_stale_artist_ranks, ranked_ids, result)

    logger.info(
        "artist_trending_done",
        processed=result.processed,
        ranked=result.ranked,
        failed=result.failed,
    )
    return result


def update_show_trending(now: datetime | None = None) -> PassResult:
    """Score every upcoming show, rank the top 20 and clear rank on the rest.

    Shows whose artist no longer resolves are written with a zero score and
    no rank; they never take a top-20 slot.
    """
    now = now or _utcnow()
    result = PassResult(name="show_trending")

    shows = db.get_upcoming_shows()
    result.processed = len(shows)
    if not shows:
        logger.info("show_trending_empty")

    scored: list[tuple[Show, float]] = []
    orphans: list[Show] = []
    for show in shows:
        artist = db.get_artist(show.artist_id)
        if artist is None:
            logger.warning("show_artist_missing", show_id=show.id, artist_id=show.artist_id)
            orphans.append(show)
            continue
        venue = db.get_venue(show.venue_id)
        scored.append((show, show_score(show, artist, venue, now)))
    result.skipped = len(orphans)

    ranked_ids: set[str] = set()
    updates = assign_ranks(scored) + [(show, 0.0, None) for show in orphans]
    for show, score, rank in updates:
        try:
            db.update_show_trending(show.id, score, rank, now)
        except Exception as e:
            result.failed += 1
            logger.error("show_trending_write_failed", show_id=show.id, error=str(e))
            continue
        result.updated += 1
        if rank is not None:
            result.ranked += 1
            ranked_ids.add(show.id)

    _clear_stale_ranks(db.clear_stale_show_ranks, ranked_ids, result)

    logger.info(
        "show_trending_done",
        processed=result.processed,
        ranked=result.ranked,
        skipped=result.skipped,
        failed=result.failed,
    )
    return result


def update_artist_show_counts() -> PassResult:
    """Refresh the cached upcoming-show count on every artist, active or not.

    Each artist is counted separately, so a show changing status mid-pass can
    land in some counts and not others until the next run.
    """
    result = PassResult(name="artist_show_counts")

    artists = db.get_all_artists()
    result.processed = len(artists)

    for artist in artists:
        try:
            count = db.count_upcoming_shows(artist.id)
            db.update_artist_show_count(artist.id, count)
            result.updated += 1
        except Exception as e:
            result.failed += 1
            logger.error("show_count_refresh_failed", artist_id=artist.id, error=str(e))

    logger.info(
        "artist_show_counts_done", processed=result.processed, failed=result.failed
    )
    return result
