import math
from datetime import date, datetime, timedelta, timezone

import pytest

from setlist_trending.models import Artist, Show, Venue
from setlist_trending.trending.scorer import (
    artist_score,
    is_prestige_venue,
    recency_bonus,
    show_score,
)

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def _show(days_out: float = 60, **kwargs) -> Show:
    return Show(
        id="s1",
        artist_id="a1",
        venue_id="v1",
        show_date=(NOW + timedelta(days=days_out)).date(),
        **kwargs,
    )


def test_artist_score_scenario():
    a = Artist(id="A", popularity=80, followers=1_000_000, upcoming_shows_count=2, last_synced=NOW)
    b = Artist(
        id="B", popularity=50, followers=0, upcoming_shows_count=0,
        last_synced=NOW - timedelta(days=8),
    )
    c = Artist(id="C", popularity=10, followers=10, upcoming_shows_count=5, last_synced=NOW)

    assert artist_score(a, NOW) == pytest.approx(110, abs=1e-4)
    assert artist_score(b, NOW) == pytest.approx(25)
    assert artist_score(c, NOW) == pytest.approx(5 + math.log10(11) * 5 + 50 + 20)


def test_artist_score_missing_inputs():
    assert artist_score(Artist(id="x"), NOW) == 0


def test_artist_score_sync_window_is_strict():
    edge = Artist(id="x", last_synced=NOW - timedelta(days=7))
    inside = Artist(id="y", last_synced=NOW - timedelta(days=6, hours=23))
    assert artist_score(edge, NOW) == 0
    assert artist_score(inside, NOW) == 20


def test_artist_score_monotonic_in_followers():
    fewer = Artist(id="x", popularity=40, followers=5_000)
    more = Artist(id="y", popularity=40, followers=50_000)
    assert artist_score(more, NOW) > artist_score(fewer, NOW)


def test_recency_bonus_boundaries():
    assert recency_bonus(_show(30), NOW) == 0
    assert recency_bonus(_show(15), NOW) == pytest.approx(30)
    assert recency_bonus(_show(0), NOW) == pytest.approx(60)
    assert recency_bonus(_show(45), NOW) == 0


def test_recency_bonus_past_show_floors_at_zero():
    assert recency_bonus(_show(-3), NOW) == 0


def test_recency_bonus_show_today_is_full_all_day():
    noon = NOW + timedelta(hours=12)
    late = NOW + timedelta(hours=23, minutes=59)
    assert recency_bonus(_show(0), noon) == pytest.approx(60)
    assert recency_bonus(_show(0), late) == pytest.approx(60)
    assert recency_bonus(_show(-1), noon) == 0
    # tomorrow, half a day out
    assert recency_bonus(_show(1), noon) == pytest.approx((30 - 0.5) * 2)


def test_prestige_venue():
    assert is_prestige_venue(Venue(id="v", name="Madison Square Garden Arena"))
    assert is_prestige_venue(Venue(id="v", name="BARCLAYS CENTER"))
    assert is_prestige_venue(Venue(id="v", name="MetLife Stadium"))
    assert not is_prestige_venue(Venue(id="v", name="Bowery Ballroom"))
    assert not is_prestige_venue(None)


def test_show_score_all_terms():
    artist = Artist(id="a1", popularity=50, followers=200_000)
    venue = Venue(id="v1", name="Capital One Arena")
    show = _show(10, price_range="$40-$120")
    expected = 50 * 0.3 + 20 + (30 - 10) * 2 + 20 + 15
    assert show_score(show, artist, venue, NOW) == pytest.approx(expected)


def test_show_score_missing_artist_is_zero():
    venue = Venue(id="v1", name="Stadium")
    show = _show(5, price_range="$20")
    assert show_score(show, None, venue, NOW) == 0


def test_show_score_missing_venue_skips_prestige():
    artist = Artist(id="a1", popularity=10)
    show = _show(60)
    assert show_score(show, artist, None, NOW) == pytest.approx(3)


def test_show_date_parses_from_string():
    show = Show(id="s", artist_id="a", venue_id="v", show_date="2025-06-16")
    assert show.show_date == date(2025, 6, 16)
    assert recency_bonus(show, NOW) == pytest.approx(30)
