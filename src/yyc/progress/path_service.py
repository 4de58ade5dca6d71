"""Learning path progress: module completion and path completion."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

import structlog

from yyc.gamification.streak_service import update_streak
from yyc.profile import Profile
from yyc.progress.schemas import PathProgress, ProgressResult

logger = structlog.get_logger()

# XP rewards
MODULE_COMPLETED = 25
PATH_COMPLETED = 100


def get_path_progress(profile: Profile, path_id: str) -> PathProgress | None:
    """Get progress for a path without creating a record."""
    return profile.path_progress.get(path_id)


def start_path(
    profile: Profile,
    path_id: str,
    first_module_id: str,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> ProgressResult:
    """Start (or restart) a path.

    Starting an already-started path overwrites its record: completed
    modules and completion time are cleared.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    profile.path_progress[path_id] = PathProgress(
        path_id=path_id,
        started_at=now,
        completed_modules=[],
        current_module_id=first_module_id,
        completed_at=None,
    )

    update_streak(profile.streak, now, tz)
    return ProgressResult(xp_gained=0)


def complete_module(
    profile: Profile,
    path_id: str,
    module_id: str,
    next_module_id: str | None = None,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> ProgressResult:
    """Complete a module of a started path. XP only on the first completion."""
    progress = profile.path_progress.get(path_id)
    if progress is None:
        return ProgressResult(xp_gained=0)

    if now is None:
        now = datetime.now(timezone.utc)

    xp_gained = 0
    if module_id not in progress.completed_modules:
        progress.completed_modules.append(module_id)
        xp_gained = MODULE_COMPLETED
    progress.current_module_id = next_module_id

    update_streak(profile.streak, now, tz)
    return ProgressResult(xp_gained=xp_gained)


def complete_path(
    profile: Profile,
    path_id: str,
    now: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> ProgressResult:
    """Complete a started path once."""
    progress = profile.path_progress.get(path_id)
    if progress is None or progress.completed_at is not None:
        return ProgressResult(xp_gained=0)

    if now is None:
        now = datetime.now(timezone.utc)

    progress.completed_at = now
    progress.current_module_id = None
    logger.info("path_completed", path_id=path_id, modules=len(progress.completed_modules))

    update_streak(profile.streak, now, tz)
    return ProgressResult(xp_gained=PATH_COMPLETED)
