"""Level thresholds and computation.

Cumulative XP to reach a level follows ``floor(100 * (level - 1) ** 1.5)``,
precomputed for levels 0..50. Level 50 is the cap.
"""

from __future__ import annotations

import math

from yyc.gamification.schemas import MAX_LEVEL, LevelEntry


def calculate_xp_for_level(level: int) -> int:
    """Cumulative XP threshold for ``level`` straight from the curve."""
    if level <= 1:
        return 0
    return math.floor(100 * math.pow(level - 1, 1.5))


LEVEL_THRESHOLDS: list[int] = [calculate_xp_for_level(i) for i in range(MAX_LEVEL + 1)]


def xp_for_level(level: int) -> int:
    """Look up the cumulative threshold for ``level``, clamped to the cap."""
    if level <= 1:
        return 0
    return LEVEL_THRESHOLDS[min(level, MAX_LEVEL)]


def compute_level(total_xp: int) -> int:
    """Highest level whose threshold ``total_xp`` has reached."""
    level = 1
    while level < MAX_LEVEL and total_xp >= LEVEL_THRESHOLDS[level + 1]:
        level += 1
    return level


def level_table() -> list[LevelEntry]:
    """All levels with per-level and cumulative XP requirements."""
    return [
        LevelEntry(
            level=level,
            xp_required=xp_for_level(level) - xp_for_level(level - 1),
            cumulative=xp_for_level(level),
        )
        for level in range(1, MAX_LEVEL + 1)
    ]
