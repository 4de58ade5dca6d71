"""Badge unlock service with duplicate prevention and XP award."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from yyc.gamification.badge_catalog import BADGE_XP_REWARDS
from yyc.gamification.schemas import Achievement, Badge, BadgeBase
from yyc.gamification.xp_service import add_xp
from yyc.profile import RECENT_ACHIEVEMENTS_CAP, Profile

logger = structlog.get_logger()


def has_badge(profile: Profile, badge_id: str) -> bool:
    """Check if the profile already has a specific badge."""
    return any(b.id == badge_id for b in profile.badges)


def unlock_badge(profile: Profile, badge: BadgeBase, now: datetime | None = None) -> bool:
    """Unlock a badge for the profile.

    Returns True if unlocked, False if already earned.
    Handles:
    1. Stamp unlocked_at and append to the unlocked set
    2. Prepend an achievement record to the capped recent feed
    3. Credit the rarity XP reward
    """
    if has_badge(profile, badge.id):
        return False

    if now is None:
        now = datetime.now(timezone.utc)

    unlocked = Badge(
        id=badge.id,
        name=badge.name,
        description=badge.description,
        icon=badge.icon,
        category=badge.category,
        rarity=badge.rarity,
        unlocked_at=now,
    )
    xp_awarded = BADGE_XP_REWARDS[badge.rarity]
    achievement = Achievement(
        id=f"{badge.id}_{int(now.timestamp() * 1000)}",
        badge=unlocked,
        timestamp=now,
        xp_awarded=xp_awarded,
    )

    profile.badges.append(unlocked)
    profile.recent_achievements = [achievement, *profile.recent_achievements][:RECENT_ACHIEVEMENTS_CAP]
    logger.info("badge_unlocked", badge_id=badge.id, rarity=badge.rarity.value, xp_awarded=xp_awarded)

    add_xp(profile, xp_awarded, source=f"badge:{badge.id}")
    return True


def clear_recent_achievements(profile: Profile) -> None:
    """Empty the recent-achievements feed. Unlocked badges are kept."""
    profile.recent_achievements = []
