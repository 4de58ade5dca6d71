"""Progress tracking schemas.

Defines Pydantic models for learner progress including:
- Per-trick status, watch time and notes
- Per-path module completion
- Profile-wide progress totals
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ItemStatus(str, Enum):
    NOT_STARTED = "not_started"
    WATCHING = "watching"
    PRACTICING = "practicing"
    MASTERED = "mastered"


class ItemProgress(BaseModel):
    item_id: str
    status: ItemStatus = ItemStatus.NOT_STARTED
    watch_time_seconds: int = Field(default=0, ge=0)
    last_activity_at: datetime | None = None
    mastered_at: datetime | None = None
    notes: list[str] = Field(default_factory=list)
    xp_earned: int = Field(default=0, ge=0)


class PathProgress(BaseModel):
    path_id: str
    started_at: datetime
    completed_modules: list[str] = Field(default_factory=list)  # insertion-ordered set
    current_module_id: str | None = None
    completed_at: datetime | None = None

    @field_validator("completed_modules")
    @classmethod
    def _dedupe_modules(cls, modules: list[str]) -> list[str]:
        return list(dict.fromkeys(modules))


class ProgressStats(BaseModel):
    total_watch_time: int = Field(default=0, ge=0)  # seconds
    total_tricks_mastered: int = Field(default=0, ge=0)


class ProgressResult(BaseModel):
    """Returned by every progress mutation so the UI can celebrate."""

    xp_gained: int = 0
