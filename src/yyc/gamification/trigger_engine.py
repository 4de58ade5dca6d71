"""Badge trigger engine: evaluates catalog conditions against a context snapshot."""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

import structlog

from yyc.gamification.badge_catalog import load_badge_catalog
from yyc.gamification.badge_service import has_badge, unlock_badge
from yyc.gamification.schemas import Achievement, AchievementContext, BadgeCondition, BadgeDefinition
from yyc.profile import Profile

logger = structlog.get_logger()

_COMPARATORS: dict[str, Callable[[int, int], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "==": operator.eq,
}


def evaluate_condition(condition: BadgeCondition, context: AchievementContext) -> bool:
    """Interpret a declarative condition against the context."""
    if condition.kind == "threshold":
        actual = getattr(context, condition.field)
        return _COMPARATORS[condition.op](actual, condition.value)
    msg = f"Unknown condition kind: {condition.kind}"
    raise ValueError(msg)


def check_achievements(
    profile: Profile,
    context: AchievementContext,
    catalog: Iterable[BadgeDefinition] | None = None,
    now: datetime | None = None,
) -> list[Achievement]:
    """Unlock every locked badge whose condition holds for ``context``.

    Entries are visited in catalog order, so the recent feed is reproducible.
    Returns the achievement records created in this pass (may be empty).
    XP credited by an unlock does not re-trigger evaluation; the context is
    a fixed snapshot for the whole pass.
    """
    if catalog is None:
        catalog = load_badge_catalog()
    if now is None:
        now = datetime.now(timezone.utc)

    created: list[Achievement] = []
    for definition in catalog:
        if has_badge(profile, definition.id):
            continue
        if not evaluate_condition(definition.condition, context):
            continue
        if unlock_badge(profile, definition, now=now):
            created.append(profile.recent_achievements[0])

    if created:
        logger.info("achievements_checked", unlocked=[a.badge.id for a in created])
    return created
