from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Query

from setlist_trending.config import settings
from setlist_trending.log import get_logger
from setlist_trending.models import Artist, TrendingShow
from setlist_trending.scheduler import create_scheduler
from setlist_trending.trending import feed
from setlist_trending.trending.ranker import TOP_N

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = create_scheduler()
    scheduler.start()
    logger.info("scheduler_started")

    yield

    scheduler.shutdown()
    logger.info("shutdown_complete")


app = FastAPI(title="setlist-trending", lifespan=lifespan)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/trending/artists", response_model=list[Artist])
def trending_artists(limit: int = Query(TOP_N, ge=1, le=100)):
    return feed.get_trending_artists(limit)


@app.get("/trending/shows", response_model=list[TrendingShow])
def trending_shows(limit: int = Query(TOP_N, ge=1, le=100)):
    return feed.get_trending_shows(limit)


def main():
    logger.info("starting", host=settings.host, port=settings.port, log_level=settings.log_level)
    uvicorn.run(
        "setlist_trending.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
