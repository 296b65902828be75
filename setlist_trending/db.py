from __future__ import annotations

from datetime import datetime
from typing import TypeVar

from pydantic import BaseModel, ValidationError
from supabase import create_client

from setlist_trending.config import settings
from setlist_trending.log import get_logger
from setlist_trending.models import Artist, Show, ShowStatus, Venue

logger = get_logger("db")

_client = None

M = TypeVar("M", bound=BaseModel)


def get_client():
    global _client
    if _client is None:
        _client = create_client(settings.supabase_url, settings.supabase_key)
    return _client


def _parse_rows(model: type[M], rows: list[dict], table: str) -> list[M]:
    """Validate rows into models, dropping (and logging) the ones that don't fit."""
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                "row_invalid", table=table, id=row.get("id"), errors=e.error_count()
            )
    return parsed


def _parse_one(model: type[M], rows: list[dict], table: str) -> M | None:
    parsed = _parse_rows(model, rows[:1], table)
    return parsed[0] if parsed else None


# --- Artists ---


def get_active_artists() -> list[Artist]:
    result = get_client().table("artists").select("*").eq("is_active", True).execute()
    return _parse_rows(Artist, result.data, "artists")


def get_all_artists() -> list[Artist]:
    result = get_client().table("artists").select("*").execute()
    return _parse_rows(Artist, result.data, "artists")


def get_artist(artist_id: str) -> Artist | None:
    result = get_client().table("artists").select("*").eq("id", artist_id).execute()
    return _parse_one(Artist, result.data, "artists")


def update_artist_trending(
    artist_id: str, score: float, rank: int | None, updated_at: datetime
) -> None:
    """Write score and rank; a None rank clears the column."""
    get_client().table("artists").update(
        {
            "trending_score": score,
            "trending_rank": rank,
            "last_trending_update": updated_at.isoformat(),
        }
    ).eq("id", artist_id).execute()


def update_artist_show_count(artist_id: str, count: int) -> None:
    get_client().table("artists").update({"upcoming_shows_count": count}).eq(
        "id", artist_id
    ).execute()


def get_ranked_artists(limit: int) -> list[Artist]:
    result = (
        get_client()
        .table("artists")
        .select("*")
        .eq("is_active", True)
        .not_.is_("trending_rank", "null")
        .order("trending_rank")
        .limit(limit)
        .execute()
    )
    return _parse_rows(Artist, result.data, "artists")


# --- Venues ---


def get_venue(venue_id: str) -> Venue | None:
    result = get_client().table("venues").select("*").eq("id", venue_id).execute()
    return _parse_one(Venue, result.data, "venues")


# --- Shows ---


def get_upcoming_shows() -> list[Show]:
    result = (
        get_client()
        .table("shows")
        .select("*")
        .eq("status", ShowStatus.UPCOMING.value)
        .execute()
    )
    return _parse_rows(Show, result.data, "shows")


def count_upcoming_shows(artist_id: str) -> int:
    result = (
        get_client()
        .table("shows")
        .select("id", count="exact")
        .eq("artist_id", artist_id)
        .eq("status", ShowStatus.UPCOMING.value)
        .execute()
    )
    return result.count or 0


def update_show_trending(
    show_id: str, score: float, rank: int | None, updated_at: datetime
) -> None:
    """Write score and rank; a None rank clears the column."""
    get_client().table("shows").update(
        {
            "trending_score": score,
            "trending_rank": rank,
            "last_trending_update": updated_at.isoformat(),
        }
    ).eq("id", show_id).execute()


def update_show_status(show_id: str, status: ShowStatus, synced_at: datetime) -> None:
    """Set a show's status. Shows leaving the upcoming set also give up their rank."""
    row = {"status": status.value, "last_synced": synced_at.isoformat()}
    if status != ShowStatus.UPCOMING:
        row["trending_rank"] = None
    get_client().table("shows").update(row).eq("id", show_id).execute()


def get_ranked_shows(limit: int) -> list[Show]:
    result = (
        get_client()
        .table("shows")
        .select("*")
        .eq("status", ShowStatus.UPCOMING.value)
        .not_.is_("trending_rank", "null")
        .order("trending_rank")
        .limit(limit)
        .execute()
    )
    return _parse_rows(Show, result.data, "shows")


# --- Stale ranks ---


def _clear_ranks_except(table: str, keep_ids: set[str]) -> int:
    """Null trending_rank on every row of `table` still holding one, except `keep_ids`.

    Catches rows the last pass never wrote: deactivated artists, completed
    shows, rows dropped at validation, rows whose write failed.
    """
    q = (
        get_client()
        .table(table)
        .update({"trending_rank": None})
        .not_.is_("trending_rank", "null")
    )
    if keep_ids:
        q = q.not_.in_("id", sorted(keep_ids))
    result = q.execute()
    return len(result.data)


def clear_stale_artist_ranks(keep_ids: set[str]) -> int:
    return _clear_ranks_except("artists", keep_ids)


def clear_stale_show_ranks(keep_ids: set[str]) -> int:
    return _clear_ranks_except("shows", keep_ids)
