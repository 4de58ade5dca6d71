"""Write-behind persistence of full profile snapshots.

The core never touches storage. Callers load a profile once, run engine
operations against it, and save the whole snapshot afterwards. Concurrent
writers resolve as last-writer-wins on the full snapshot.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from yyc.profile import Profile
from yyc.storage.models import SNAPSHOT_SCHEMA_VERSION, ProfileSnapshot

logger = structlog.get_logger()


class ProfileSnapshotError(ValueError):
    """A stored snapshot exists but cannot be turned back into a profile."""


async def load_profile(db: AsyncSession, profile_id: str) -> Profile:
    """Load a profile. A missing or empty snapshot gives a fresh profile."""
    result = await db.execute(
        select(ProfileSnapshot)
        .where(ProfileSnapshot.profile_id == profile_id)
        .execution_options(populate_existing=True)
    )
    row = result.scalar_one_or_none()
    if row is None:
        logger.info("profile_loaded", profile_id=profile_id, fresh=True)
        return Profile.fresh()

    try:
        profile = Profile.hydrate(row.payload)
    except ValidationError as exc:
        logger.warning("profile_snapshot_invalid", profile_id=profile_id, errors=exc.error_count())
        msg = f"Stored snapshot for profile {profile_id!r} is invalid"
        raise ProfileSnapshotError(msg) from exc

    logger.info("profile_loaded", profile_id=profile_id, fresh=False)
    return profile


async def save_profile(
    db: AsyncSession,
    profile_id: str,
    profile: Profile,
    now: datetime | None = None,
) -> None:
    """Write the full snapshot, replacing whatever was stored before."""
    if now is None:
        now = datetime.now(timezone.utc)

    payload = profile.snapshot()
    stmt = sqlite_insert(ProfileSnapshot).values(
        profile_id=profile_id,
        payload=payload,
        schema_version=SNAPSHOT_SCHEMA_VERSION,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[ProfileSnapshot.profile_id],
        set_={
            "payload": stmt.excluded.payload,
            "schema_version": stmt.excluded.schema_version,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    await db.execute(stmt)
    await db.commit()
    logger.info("profile_saved", profile_id=profile_id, xp_level=profile.xp.level, badges=len(profile.badges))


async def delete_profile(db: AsyncSession, profile_id: str) -> bool:
    """Remove a stored profile. Returns True if a row was deleted."""
    result = await db.execute(delete(ProfileSnapshot).where(ProfileSnapshot.profile_id == profile_id))
    await db.commit()
    return result.rowcount > 0
