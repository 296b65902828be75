#!/usr/bin/env python3
"""One-shot trending refresh: transition statuses, refresh counts, re-rank, print results."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from setlist_trending.maintenance import auto_transition_statuses
from setlist_trending.trending.feed import get_trending_artists, get_trending_shows
from setlist_trending.trending.passes import (
    update_artist_show_counts,
    update_artist_trending,
    update_show_trending,
)


def main():
    for run in (
        auto_transition_statuses,
        update_artist_show_counts,
        update_artist_trending,
        update_show_trending,
    ):
        result = run()
        print(
            f"{result.name}: {result.processed} read, {result.updated} updated, "
            f"{result.ranked} ranked, {result.skipped} skipped, {result.failed} failed"
        )

    print("\nTrending artists:")
    for artist in get_trending_artists():
        print(f"{artist.trending_rank:2d}. [{artist.trending_score or 0:.1f}] {artist.name}")

    print("\nTrending shows:")
    for show in get_trending_shows():
        artist = show.artist.name if show.artist else "?"
        venue = show.venue.name if show.venue else "TBA"
        print(
            f"{show.trending_rank:2d}. [{show.trending_score or 0:.1f}] "
            f"{artist} @ {venue} | {show.show_date}"
        )


if __name__ == "__main__":
    main()
