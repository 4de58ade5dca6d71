"""Streak tracking: daily practice streaks by calendar day."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

import structlog

from yyc.gamification.schemas import StreakState

logger = structlog.get_logger()


def calendar_day(dt: datetime, tz: tzinfo = timezone.utc) -> date:
    """Calendar date of ``dt`` as seen in ``tz``. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz).date()


def days_between(earlier: datetime, later: datetime, tz: tzinfo = timezone.utc) -> int:
    """Whole calendar days from ``earlier`` to ``later`` in ``tz``."""
    return (calendar_day(later, tz) - calendar_day(earlier, tz)).days


def update_streak(streak: StreakState, now: datetime | None = None, tz: tzinfo = timezone.utc) -> bool:
    """Advance the streak for an activity happening at ``now``.

    Rules by calendar-day difference from the last counted activity:
    - no previous activity: streak starts at 1
    - 0 (or negative, clock moved back): already counted, no change
    - 1: streak continues
    - 2 or more: streak restarts at 1

    Returns True if the streak state changed.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    if streak.last_activity_date is None:
        streak.current_streak = 1
    else:
        gap = days_between(streak.last_activity_date, now, tz)
        if gap <= 0:
            return False
        if gap == 1:
            streak.current_streak += 1
        else:
            logger.info("streak_reset", previous_streak=streak.current_streak, gap_days=gap)
            streak.current_streak = 1

    streak.longest_streak = max(streak.longest_streak, streak.current_streak)
    streak.last_activity_date = now
    logger.info("streak_updated", current=streak.current_streak, longest=streak.longest_streak)
    return True


def effective_streak(streak: StreakState, now: datetime | None = None, tz: tzinfo = timezone.utc) -> int:
    """Streak as it should be displayed right now.

    The stored streak only changes on activity, so a streak whose last day
    is older than yesterday is already broken and reads as 0.
    """
    if streak.last_activity_date is None:
        return 0
    if now is None:
        now = datetime.now(timezone.utc)
    if days_between(streak.last_activity_date, now, tz) <= 1:
        return streak.current_streak
    return 0
