from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ShowStatus(str, Enum):
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Artist(BaseModel):
    """Artist row as read from the `artists` table."""

    id: str
    name: str = ""
    slug: str | None = None
    popularity: float | None = Field(default=None, ge=0, le=100)
    followers: int | None = Field(default=None, ge=0)
    is_active: bool = True
    upcoming_shows_count: int = Field(default=0, ge=0)
    last_synced: datetime | None = None
    trending_score: float | None = None
    trending_rank: int | None = None
    last_trending_update: datetime | None = None

    @field_validator("upcoming_shows_count", mode="before")
    @classmethod
    def _null_count(cls, v):
        # rows created before the first count refresh carry null
        return 0 if v is None else v

    @field_validator("last_synced")
    @classmethod
    def _assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class Venue(BaseModel):
    id: str
    name: str = ""
    city: str | None = None
    country: str | None = None
    capacity: int | None = None


class Show(BaseModel):
    """Show row as read from the `shows` table."""

    id: str
    artist_id: str
    venue_id: str
    show_date: date
    status: ShowStatus = ShowStatus.UPCOMING
    price_range: str | None = None
    trending_score: float | None = None
    trending_rank: int | None = None
    last_trending_update: datetime | None = None
    last_synced: datetime | None = None


class TrendingShow(Show):
    """Ranked show with its artist and venue attached for display."""

    artist: Artist | None = None
    venue: Venue | None = None


class PassResult(BaseModel):
    """Outcome of one batch pass over a table."""

    name: str
    processed: int = 0
    updated: int = 0
    ranked: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.failed == 0
