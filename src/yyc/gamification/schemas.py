"""Pydantic models for XP, streaks, badges and achievements."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_LEVEL = 50


# --- XP ---


class XPState(BaseModel):
    """XP pool and derived level.

    ``xp`` drives the level; ``lifetime_xp`` is the monotonic total.
    Both move by the same delta on every credit.
    """

    xp: int = Field(default=0, ge=0)
    lifetime_xp: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1, le=MAX_LEVEL)


class LevelUpResult(BaseModel):
    leveled_up: bool = False
    new_level: int | None = None


class XPProgress(BaseModel):
    current: int
    required: int
    percentage: float


class LevelProgress(BaseModel):
    current: int
    required: int
    level: int
    is_max_level: bool


class LevelEntry(BaseModel):
    level: int
    xp_required: int
    cumulative: int


# --- Streak ---


class StreakState(BaseModel):
    """Daily practice streak.

    ``last_activity_date`` holds the timestamp of the activity that last
    advanced the streak; it is compared by calendar day.
    """

    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_activity_date: datetime | None = None

    @model_validator(mode="after")
    def _longest_covers_current(self) -> StreakState:
        if self.longest_streak < self.current_streak:
            msg = "longest_streak must be >= current_streak"
            raise ValueError(msg)
        return self


# --- Badge ---


class BadgeCategory(str, Enum):
    STREAK = "streak"
    MASTERY = "mastery"
    EXPLORER = "explorer"
    SOCIAL = "social"
    MILESTONE = "milestone"
    SPECIAL = "special"


class BadgeRarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


ContextField = Literal[
    "tricks_watched",
    "tricks_mastered",
    "current_streak",
    "paths_completed",
    "total_watch_time",
    "total_xp",
]


class ThresholdCondition(BaseModel):
    """Unlock when a context aggregate compares favourably with a fixed value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["threshold"] = "threshold"
    field: ContextField
    op: Literal[">=", ">", "=="] = ">="
    value: int


# Single-kind today; new kinds join this union with their own ``kind`` tag.
BadgeCondition = ThresholdCondition


class BadgeBase(BaseModel):
    """Descriptive badge fields shared by catalog entries and unlocked badges."""

    id: str
    name: str
    description: str
    icon: str
    category: BadgeCategory
    rarity: BadgeRarity


class Badge(BadgeBase):
    """A badge the learner has unlocked."""

    unlocked_at: datetime


class BadgeDefinition(BadgeBase):
    """Catalog entry: badge fields plus the declarative unlock condition."""

    model_config = ConfigDict(frozen=True)

    condition: BadgeCondition
    sort_order: int = 0


class Achievement(BaseModel):
    """Event record of one badge unlock."""

    id: str
    badge: Badge
    timestamp: datetime
    xp_awarded: int


class AchievementContext(BaseModel):
    """Read-only aggregate snapshot fed into badge condition evaluation."""

    model_config = ConfigDict(frozen=True)

    tricks_watched: int = 0
    tricks_mastered: int = 0
    current_streak: int = 0
    paths_completed: int = 0
    total_watch_time: int = 0
    total_xp: int = 0
