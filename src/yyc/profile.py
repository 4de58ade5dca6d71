"""Profile aggregate: the single owned unit of progression state.

Every tracker operates on a ``Profile`` passed in explicitly. Persistence
works on whole snapshots: ``snapshot()`` to write, ``hydrate()`` to read.
Hydration only validates data; it never recalculates streaks, credits XP
or evaluates badges.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from yyc.gamification.schemas import Achievement, Badge, StreakState, XPState
from yyc.progress.schemas import ItemProgress, PathProgress, ProgressStats

RECENT_ACHIEVEMENTS_CAP = 10


class Profile(BaseModel):
    item_progress: dict[str, ItemProgress] = Field(default_factory=dict)
    path_progress: dict[str, PathProgress] = Field(default_factory=dict)
    streak: StreakState = Field(default_factory=StreakState)
    xp: XPState = Field(default_factory=XPState)
    badges: list[Badge] = Field(default_factory=list)
    recent_achievements: list[Achievement] = Field(default_factory=list)
    stats: ProgressStats = Field(default_factory=ProgressStats)

    @classmethod
    def fresh(cls) -> Profile:
        return cls()

    @classmethod
    def hydrate(cls, data: Any) -> Profile:
        """Rebuild a profile from a snapshot. Missing or empty data gives a fresh profile."""
        if not data:
            return cls.fresh()
        return cls.model_validate(data)

    def snapshot(self) -> dict[str, Any]:
        """Full JSON-compatible state for persistence."""
        return self.model_dump(mode="json")
