"""ORM models for the local profile store."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

SNAPSHOT_SCHEMA_VERSION = 1


class Base(DeclarativeBase):
    pass


class ProfileSnapshot(Base):
    """One full profile snapshot per profile id. Saves overwrite the row."""

    __tablename__ = "profile_snapshots"

    profile_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False, default=SNAPSHOT_SCHEMA_VERSION)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
