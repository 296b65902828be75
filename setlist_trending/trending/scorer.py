from __future__ import annotations

import math
import re
from datetime import datetime, time, timedelta, timezone

from setlist_trending.models import Artist, Show, Venue

RECENT_SYNC_WINDOW = timedelta(days=7)
RECENCY_HORIZON_DAYS = 30

# Crude proxy for venue size until venues carry a reliable capacity.
PRESTIGE_VENUE_RE = re.compile(r"stadium|arena|center", re.IGNORECASE)
PRESTIGE_VENUE_BONUS = 15


def artist_score(artist: Artist, now: datetime) -> float:
    """Trending score for an artist. Missing inputs contribute nothing."""
    score = 0.0

    # Base: external popularity (0-100)
    score += (artist.popularity or 0) * 0.5

    # Followers on a log scale so audience size can't dominate
    if artist.followers:
        score += math.log10(artist.followers + 1) * 5

    # Cached count, refreshed by the show-count pass
    score += artist.upcoming_shows_count * 10

    if artist.last_synced and artist.last_synced > now - RECENT_SYNC_WINDOW:
        score += 20

    return score


def show_start(show: Show) -> datetime:
    """Shows carry a calendar date only; treat it as midnight UTC."""
    return datetime.combine(show.show_date, time.min, tzinfo=timezone.utc)


def recency_bonus(show: Show, now: datetime) -> float:
    """Bonus for shows in the next 30 days, shrinking linearly as the date moves out.

    A show dated today (UTC) counts as zero days out for the whole day and
    gets the full bonus. Earlier dates and shows 30+ days out get nothing.
    """
    days_until = (show_start(show) - now) / timedelta(days=1)
    if show.show_date == now.astimezone(timezone.utc).date():
        days_until = max(days_until, 0.0)
    if days_until < 0 or days_until >= RECENCY_HORIZON_DAYS:
        return 0.0
    return max(0.0, RECENCY_HORIZON_DAYS - days_until) * 2


def is_prestige_venue(venue: Venue | None) -> bool:
    return bool(venue and venue.name and PRESTIGE_VENUE_RE.search(venue.name))


def show_score(
    show: Show, artist: Artist | None, venue: Venue | None, now: datetime
) -> float:
    """Trending score for a show. An unresolved artist scores 0."""
    if artist is None:
        return 0.0

    score = 0.0
    score += (artist.popularity or 0) * 0.3
    score += (artist.followers or 0) / 10000
    score += recency_bonus(show, now)

    # Published prices mean tickets are on sale
    if show.price_range:
        score += 20

    if is_prestige_venue(venue):
        score += PRESTIGE_VENUE_BONUS

    return score
