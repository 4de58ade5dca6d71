"""ProgressionEngine: the handle UI code calls for every progress action.

Each action runs the matching tracker, credits the XP it earned, then feeds
a fresh context snapshot into the achievement check. The engine never
persists anything; callers save ``snapshot()`` after mutating calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone, tzinfo
from typing import Any

from pydantic import BaseModel, Field

from yyc import selectors
from yyc.config import Settings
from yyc.gamification import badge_service, trigger_engine, xp_service
from yyc.gamification.badge_catalog import load_badge_catalog
from yyc.gamification.schemas import (
    Achievement,
    AchievementContext,
    BadgeBase,
    BadgeDefinition,
    LevelUpResult,
    StreakState,
    XPProgress,
    XPState,
)
from yyc.log import setup_logging
from yyc.profile import Profile
from yyc.progress import path_service, trick_service
from yyc.progress.schemas import ProgressResult, ProgressStats


class ProgressEvent(BaseModel):
    """Everything a single action earned, for celebration UI."""

    xp_gained: int = 0
    leveled_up: bool = False
    new_level: int | None = None
    achievements: list[Achievement] = Field(default_factory=list)


class ProgressionEngine:
    """Owns one profile and wires trackers, XP ledger and badges together."""

    def __init__(
        self,
        profile: Profile | None = None,
        catalog: Iterable[BadgeDefinition] | None = None,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self.profile = profile if profile is not None else Profile.fresh()
        self.catalog = tuple(catalog) if catalog is not None else load_badge_catalog()
        self.tz = tz

    @classmethod
    def from_snapshot(cls, data: Mapping[str, Any] | None, **kwargs: Any) -> ProgressionEngine:
        """Hydrate an engine from a stored snapshot without re-running any rules."""
        return cls(profile=Profile.hydrate(data), **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings, profile: Profile | None = None) -> ProgressionEngine:
        """Build an engine for the configured profile, with logging and streak timezone applied."""
        setup_logging(settings)
        return cls(profile=profile, tz=settings.tzinfo())

    def snapshot(self) -> dict[str, Any]:
        return self.profile.snapshot()

    # -------------------------------------------------------------------------
    # Achievement context
    # -------------------------------------------------------------------------

    def build_context(self) -> AchievementContext:
        """Aggregate snapshot used for badge conditions."""
        p = self.profile
        return AchievementContext(
            tricks_watched=selectors.select_started_items_count(p),
            tricks_mastered=p.stats.total_tricks_mastered,
            current_streak=p.streak.current_streak,
            paths_completed=len(selectors.select_completed_paths(p)),
            total_watch_time=p.stats.total_watch_time,
            total_xp=p.xp.lifetime_xp,
        )

    def check_achievements(self, now: datetime | None = None) -> list[Achievement]:
        return trigger_engine.check_achievements(self.profile, self.build_context(), self.catalog, now=now)

    def _settle(self, result: ProgressResult, source: str, now: datetime | None) -> ProgressEvent:
        """Credit earned XP, then evaluate badges against the updated profile."""
        start_level = self.profile.xp.level
        if result.xp_gained:
            xp_service.add_xp(self.profile, result.xp_gained, source=source)
        achievements = self.check_achievements(now=now)

        level = self.profile.xp.level
        leveled_up = level > start_level
        return ProgressEvent(
            xp_gained=result.xp_gained,
            leveled_up=leveled_up,
            new_level=level if leveled_up else None,
            achievements=achievements,
        )

    # -------------------------------------------------------------------------
    # Tricks
    # -------------------------------------------------------------------------

    def mark_watched(self, item_id: str, now: datetime | None = None) -> ProgressEvent:
        result = trick_service.mark_watched(self.profile, item_id, now=now, tz=self.tz)
        return self._settle(result, f"trick_watched:{item_id}", now)

    def mark_practicing(self, item_id: str, now: datetime | None = None) -> ProgressEvent:
        result = trick_service.mark_practicing(self.profile, item_id, now=now, tz=self.tz)
        return self._settle(result, f"trick_practicing:{item_id}", now)

    def mark_mastered(self, item_id: str, now: datetime | None = None) -> ProgressEvent:
        result = trick_service.mark_mastered(self.profile, item_id, now=now, tz=self.tz)
        return self._settle(result, f"trick_mastered:{item_id}", now)

    def update_watch_time(self, item_id: str, delta_seconds: int, now: datetime | None = None) -> ProgressEvent:
        result = trick_service.update_watch_time(self.profile, item_id, delta_seconds, now=now)
        return self._settle(result, f"watch_time:{item_id}", now)

    def add_note(self, item_id: str, note: str) -> None:
        trick_service.add_note(self.profile, item_id, note)

    def remove_note(self, item_id: str, index: int) -> bool:
        return trick_service.remove_note(self.profile, item_id, index)

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def start_path(self, path_id: str, first_module_id: str, now: datetime | None = None) -> ProgressEvent:
        result = path_service.start_path(self.profile, path_id, first_module_id, now=now, tz=self.tz)
        return self._settle(result, f"path_started:{path_id}", now)

    def complete_module(
        self,
        path_id: str,
        module_id: str,
        next_module_id: str | None = None,
        now: datetime | None = None,
    ) -> ProgressEvent:
        result = path_service.complete_module(
            self.profile, path_id, module_id, next_module_id, now=now, tz=self.tz,
        )
        return self._settle(result, f"module_completed:{path_id}:{module_id}", now)

    def complete_path(self, path_id: str, now: datetime | None = None) -> ProgressEvent:
        result = path_service.complete_path(self.profile, path_id, now=now, tz=self.tz)
        return self._settle(result, f"path_completed:{path_id}", now)

    # -------------------------------------------------------------------------
    # XP and badges
    # -------------------------------------------------------------------------

    def add_xp(self, amount: int, source: str = "") -> LevelUpResult:
        return xp_service.add_xp(self.profile, amount, source=source)

    def get_xp_progress(self) -> XPProgress:
        return xp_service.get_xp_progress(self.profile.xp)

    def unlock_badge(self, badge: BadgeBase, now: datetime | None = None) -> bool:
        return badge_service.unlock_badge(self.profile, badge, now=now)

    def has_badge(self, badge_id: str) -> bool:
        return badge_service.has_badge(self.profile, badge_id)

    def clear_recent_achievements(self) -> None:
        badge_service.clear_recent_achievements(self.profile)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset_progress(self) -> None:
        """Forget all trick/path progress, streaks and totals. XP and badges stay."""
        self.profile.item_progress = {}
        self.profile.path_progress = {}
        self.profile.streak = StreakState()
        self.profile.stats = ProgressStats()

    def reset_gamification(self) -> None:
        """Forget XP, level and badges. Progress records stay."""
        self.profile.xp = XPState()
        self.profile.badges = []
        self.profile.recent_achievements = []
