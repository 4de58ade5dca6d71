"""XP ledger with level-up detection."""

from __future__ import annotations

import structlog

from yyc.gamification.level_thresholds import xp_for_level
from yyc.gamification.schemas import MAX_LEVEL, LevelUpResult, XPProgress, XPState
from yyc.profile import Profile

logger = structlog.get_logger()


def add_xp(profile: Profile, amount: int, source: str = "") -> LevelUpResult:
    """Credit XP to the profile. Returns whether one or more levels were gained.

    After crediting:
    1. Add ``amount`` to both xp and lifetime_xp
    2. Scan upward from the current level while the next threshold is met
    3. Stop at MAX_LEVEL; extra XP keeps accumulating without levels
    """
    if amount < 0:
        msg = f"XP amount must be non-negative, got {amount}"
        raise ValueError(msg)

    state = profile.xp
    old_level = state.level
    state.xp += amount
    state.lifetime_xp += amount

    level = old_level
    while level < MAX_LEVEL and state.xp >= xp_for_level(level + 1):
        level += 1
    state.level = level

    if amount:
        logger.info("xp_granted", amount=amount, source=source, xp=state.xp)

    if level > old_level:
        logger.info("level_up", old_level=old_level, new_level=level)
        return LevelUpResult(leveled_up=True, new_level=level)
    return LevelUpResult(leveled_up=False)


def get_xp_progress(state: XPState) -> XPProgress:
    """Progress through the current level band.

    At the cap the band is the level-50 band width and the bar reads full.
    """
    if state.level >= MAX_LEVEL:
        floor_xp = xp_for_level(MAX_LEVEL)
        required = floor_xp - xp_for_level(MAX_LEVEL - 1)
        return XPProgress(current=state.xp - floor_xp, required=required, percentage=100.0)

    floor_xp = xp_for_level(state.level)
    current = state.xp - floor_xp
    required = xp_for_level(state.level + 1) - floor_xp
    percentage = min(100.0, current / required * 100) if required > 0 else 100.0
    return XPProgress(current=current, required=required, percentage=percentage)
