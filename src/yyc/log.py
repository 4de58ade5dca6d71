"""structlog wiring for engine events.

Services log plain key/value events (``xp_granted``, ``badge_unlocked``,
``streak_reset``...). ``setup_logging`` filters them by the configured level,
renders them as JSON lines or console output, and tags every event with the
profile and streak timezone the engine runs under.
"""

import logging

import structlog

from yyc.config import Settings


def setup_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.bind_contextvars(
        profile_id=settings.profile_id,
        streak_timezone=settings.streak_timezone,
    )
