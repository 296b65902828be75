from __future__ import annotations

import asyncio
from typing import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from setlist_trending.config import settings
from setlist_trending.log import get_logger
from setlist_trending.maintenance import auto_transition_statuses
from setlist_trending.models import PassResult
from setlist_trending.notify.alerts import create_alert_limiter, send_alert
from setlist_trending.ratelimit import RateLimiter
from setlist_trending.trending.passes import (
    update_artist_show_counts,
    update_artist_trending,
    update_show_trending,
)

logger = get_logger("scheduler")


async def _run_pass(
    name: str, run: Callable[[], PassResult], limiter: RateLimiter
) -> PassResult | None:
    """Run one pass, log the outcome and alert on failure.

    The pass runs in a worker thread, off the event loop. A pass that raises
    is left for the next scheduled run.
    """
    logger.info(f"job_{name}_start")
    try:
        result = await asyncio.to_thread(run)
    except Exception as e:
        logger.error(f"job_{name}_failed", error=str(e))
        await send_alert(name, f"Pass failed: {e}", limiter)
        return None

    logger.info(
        f"job_{name}_done",
        processed=result.processed,
        updated=result.updated,
        failed=result.failed,
    )
    if not result.ok:
        await send_alert(
            name,
            f"{result.failed} of {result.processed} rows failed to update",
            limiter,
        )
    return result


async def job_artist_trending(limiter: RateLimiter) -> None:
    """Re-score and re-rank active artists."""
    await _run_pass("artist_trending", update_artist_trending, limiter)


async def job_show_trending(limiter: RateLimiter) -> None:
    """Re-score and re-rank upcoming shows."""
    await _run_pass("show_trending", update_show_trending, limiter)


async def job_show_counts(limiter: RateLimiter) -> None:
    """Refresh cached upcoming-show counts read by the artist pass."""
    await _run_pass("artist_show_counts", update_artist_show_counts, limiter)


async def job_status_transition(limiter: RateLimiter) -> None:
    """Complete shows whose date has passed."""
    await _run_pass("show_status_transition", auto_transition_statuses, limiter)


def create_scheduler(limiter: RateLimiter | None = None) -> AsyncIOScheduler:
    """Create and configure the APScheduler."""
    if limiter is None:
        limiter = create_alert_limiter()

    scheduler = AsyncIOScheduler(job_defaults={
        'misfire_grace_time': 300,  # 5 min grace for missed windows
        'coalesce': True,           # collapse queued runs into one
        'max_instances': 1,         # never run same job concurrently
    })
    kwargs = {"limiter": limiter}
    tz = settings.scheduler_timezone

    scheduler.add_job(
        job_status_transition, "interval",
        hours=settings.status_transition_interval_hours, timezone=tz, kwargs=kwargs,
    )
    scheduler.add_job(
        job_show_counts, "interval",
        hours=settings.show_counts_interval_hours, timezone=tz, kwargs=kwargs,
    )
    scheduler.add_job(
        job_artist_trending, "interval",
        hours=settings.artist_trending_interval_hours, timezone=tz, kwargs=kwargs,
    )
    scheduler.add_job(
        job_show_trending, "interval",
        hours=settings.show_trending_interval_hours, timezone=tz, kwargs=kwargs,
    )

    return scheduler
