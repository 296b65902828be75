import logging

import structlog

from setlist_trending.config import settings


def level_from_name(name: str) -> int:
    """Map a level name from settings to a logging level, INFO when unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure(level_name: str) -> None:
    level = level_from_name(level_name)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if level <= logging.DEBUG
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


configure(settings.log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(service="setlist-trending").bind(logger=name)
