"""Read-only derived queries over a profile.

All functions here are pure: they never mutate the profile.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

from yyc.gamification import streak_service
from yyc.gamification.level_thresholds import xp_for_level
from yyc.gamification.schemas import (
    MAX_LEVEL,
    Achievement,
    Badge,
    BadgeCategory,
    BadgeRarity,
    LevelProgress,
)
from yyc.profile import Profile
from yyc.progress.schemas import ItemProgress, ItemStatus, PathProgress

# --- Progress ---


def select_item_progress(profile: Profile, item_id: str) -> ItemProgress | None:
    return profile.item_progress.get(item_id)


def select_path_progress(profile: Profile, path_id: str) -> PathProgress | None:
    return profile.path_progress.get(path_id)


def select_current_streak(profile: Profile) -> int:
    return profile.streak.current_streak


def select_longest_streak(profile: Profile) -> int:
    return profile.streak.longest_streak


def select_effective_streak(profile: Profile, now: datetime | None = None, tz: tzinfo = timezone.utc) -> int:
    """Current streak, or 0 if the learner has already missed a day."""
    return streak_service.effective_streak(profile.streak, now, tz)


def select_total_watch_time(profile: Profile) -> int:
    return profile.stats.total_watch_time


def select_total_tricks_mastered(profile: Profile) -> int:
    return profile.stats.total_tricks_mastered


def select_mastered_items(profile: Profile) -> list[ItemProgress]:
    return [p for p in profile.item_progress.values() if p.status == ItemStatus.MASTERED]


def select_in_progress_items(profile: Profile) -> list[ItemProgress]:
    return [
        p for p in profile.item_progress.values()
        if p.status in (ItemStatus.WATCHING, ItemStatus.PRACTICING)
    ]


def select_started_items_count(profile: Profile) -> int:
    """Tricks that have left the not-started state."""
    return sum(1 for p in profile.item_progress.values() if p.status != ItemStatus.NOT_STARTED)


def select_active_paths(profile: Profile) -> list[PathProgress]:
    return [p for p in profile.path_progress.values() if p.completed_at is None]


def select_completed_paths(profile: Profile) -> list[PathProgress]:
    return [p for p in profile.path_progress.values() if p.completed_at is not None]


def select_total_xp_from_progress(profile: Profile) -> int:
    """XP earned through trick progress alone (no badges, modules or paths)."""
    return sum(p.xp_earned for p in profile.item_progress.values())


# --- Gamification ---


def select_xp(profile: Profile) -> int:
    return profile.xp.xp


def select_level(profile: Profile) -> int:
    return profile.xp.level


def select_lifetime_xp(profile: Profile) -> int:
    return profile.xp.lifetime_xp


def select_badges(profile: Profile) -> list[Badge]:
    return list(profile.badges)


def select_recent_achievements(profile: Profile) -> list[Achievement]:
    return list(profile.recent_achievements)


def select_badges_by_category(profile: Profile, category: BadgeCategory) -> list[Badge]:
    return [b for b in profile.badges if b.category == category]


def select_badges_by_rarity(profile: Profile, rarity: BadgeRarity) -> list[Badge]:
    return [b for b in profile.badges if b.rarity == rarity]


def select_badge_count(profile: Profile) -> int:
    return len(profile.badges)


def select_level_progress(profile: Profile) -> LevelProgress:
    """XP into the current level band. At the cap ``required`` is 0."""
    level = profile.xp.level
    floor_xp = xp_for_level(level)
    next_xp = xp_for_level(min(level + 1, MAX_LEVEL))
    return LevelProgress(
        current=profile.xp.xp - floor_xp,
        required=next_xp - floor_xp,
        level=level,
        is_max_level=level >= MAX_LEVEL,
    )
