from __future__ import annotations

from setlist_trending import db
from setlist_trending.models import Artist, TrendingShow
from setlist_trending.trending.ranker import TOP_N


def get_trending_artists(limit: int = TOP_N) -> list[Artist]:
    """Active ranked artists, best rank first."""
    if limit <= 0:
        return []
    return db.get_ranked_artists(limit)


def get_trending_shows(limit: int = TOP_N) -> list[TrendingShow]:
    """Ranked upcoming shows, best rank first, with artist and venue attached."""
    if limit <= 0:
        return []
    trending = []
    for show in db.get_ranked_shows(limit):
        trending.append(
            TrendingShow(
                **show.model_dump(),
                artist=db.get_artist(show.artist_id),
                venue=db.get_venue(show.venue_id),
            )
        )
    return trending
