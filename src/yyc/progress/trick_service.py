"""Trick progress: watch/practice/master status, watch time and notes.

Unknown trick ids are never an error; a default record is created on first
interaction. XP for each transition is granted only the first time.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

import structlog

from yyc.gamification.streak_service import update_streak
from yyc.profile import Profile
from yyc.progress.schemas import ItemProgress, ItemStatus, ProgressResult

logger = structlog.get_logger()

# XP rewards
TRICK_WATCHED = 10
TRICK_MASTERED = 50
WATCH_TIME_BONUS = 5  # per milestone
WATCH_TIME_MILESTONE_SECONDS = 300


def get_item_progress(profile: Profile, item_id: str) -> ItemProgress | None:
    """Get progress for a trick without creating a record."""
    return profile.item_progress.get(item_id)


def get_or_create_item_progress(profile: Profile, item_id: str) -> ItemProgress:
    """Get the trick record, creating a default one if absent."""
    progress = profile.item_progress.get(item_id)
    if progress is None:
        progress = ItemProgress(item_id=item_id)
        profile.item_progress[item_id] = progress
    return progress


def mark_watched(
    profile: Profile,
    item_id: str,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> ProgressResult:
    """Record a watch. XP only on the first watch of a not-started trick."""
    if now is None:
        now = datetime.now(timezone.utc)

    progress = get_or_create_item_progress(profile, item_id)
    xp_gained = 0
    if progress.status == ItemStatus.NOT_STARTED:
        progress.status = ItemStatus.WATCHING
        xp_gained = TRICK_WATCHED

    progress.last_activity_at = now
    progress.xp_earned += xp_gained

    update_streak(profile.streak, now, tz)
    return ProgressResult(xp_gained=xp_gained)


def mark_practicing(
    profile: Profile,
    item_id: str,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> ProgressResult:
    """Move a trick into practice. Never demotes a mastered trick; grants no XP."""
    if now is None:
        now = datetime.now(timezone.utc)

    progress = get_or_create_item_progress(profile, item_id)
    if progress.status in (ItemStatus.NOT_STARTED, ItemStatus.WATCHING):
        progress.status = ItemStatus.PRACTICING
    progress.last_activity_at = now

    update_streak(profile.streak, now, tz)
    return ProgressResult(xp_gained=0)


def mark_mastered(
    profile: Profile,
    item_id: str,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> ProgressResult:
    """Master a trick. A second call on a mastered trick changes nothing."""
    progress = get_or_create_item_progress(profile, item_id)
    if progress.status == ItemStatus.MASTERED:
        return ProgressResult(xp_gained=0)

    if now is None:
        now = datetime.now(timezone.utc)

    progress.status = ItemStatus.MASTERED
    if progress.mastered_at is None:
        progress.mastered_at = now
    progress.last_activity_at = now
    progress.xp_earned += TRICK_MASTERED
    profile.stats.total_tricks_mastered += 1
    logger.info("item_mastered", item_id=item_id, total_mastered=profile.stats.total_tricks_mastered)

    update_streak(profile.streak, now, tz)
    return ProgressResult(xp_gained=TRICK_MASTERED)


def update_watch_time(
    profile: Profile,
    item_id: str,
    delta_seconds: int,
    now: datetime | None = None,
) -> ProgressResult:
    """Accumulate watch time and award a bonus per 5-minute milestone crossed.

    Milestones are counted from the totals before and after this call, so
    splitting the same time across many calls yields the same bonus.
    Streak state is not touched.
    """
    if delta_seconds < 0:
        msg = f"Watch time delta must be non-negative, got {delta_seconds}"
        raise ValueError(msg)
    if now is None:
        now = datetime.now(timezone.utc)

    progress = get_or_create_item_progress(profile, item_id)
    old_total = progress.watch_time_seconds
    new_total = old_total + delta_seconds
    milestones = new_total // WATCH_TIME_MILESTONE_SECONDS - old_total // WATCH_TIME_MILESTONE_SECONDS
    bonus_xp = milestones * WATCH_TIME_BONUS

    progress.watch_time_seconds = new_total
    progress.last_activity_at = now
    progress.xp_earned += bonus_xp
    profile.stats.total_watch_time += delta_seconds

    return ProgressResult(xp_gained=bonus_xp)


def add_note(profile: Profile, item_id: str, note: str) -> None:
    """Append a free-text note to a trick."""
    get_or_create_item_progress(profile, item_id).notes.append(note)


def remove_note(profile: Profile, item_id: str, index: int) -> bool:
    """Remove the note at ``index``. Out-of-range indexes and unknown tricks are a no-op."""
    progress = profile.item_progress.get(item_id)
    if progress is None or not 0 <= index < len(progress.notes):
        return False
    del progress.notes[index]
    return True
