"""Badge catalog: 15 badges across streak, mastery, explorer and milestone categories.

Conditions are data, not code. Each entry names a context aggregate and a
threshold; ``trigger_engine.evaluate_condition`` interprets them.
"""

from __future__ import annotations

from functools import lru_cache

from yyc.gamification.schemas import BadgeDefinition, BadgeRarity

BADGE_XP_REWARDS: dict[BadgeRarity, int] = {
    BadgeRarity.COMMON: 25,
    BadgeRarity.UNCOMMON: 50,
    BadgeRarity.RARE: 100,
    BadgeRarity.EPIC: 200,
    BadgeRarity.LEGENDARY: 500,
}

BADGE_CATALOG_DATA: list[dict] = [
    # Streaks
    {
        "id": "streak_3",
        "name": "Consistent",
        "description": "3 day streak",
        "icon": "flame",
        "category": "streak",
        "rarity": "common",
        "condition": {"kind": "threshold", "field": "current_streak", "value": 3},
        "sort_order": 1,
    },
    {
        "id": "streak_7",
        "name": "Week Warrior",
        "description": "7 day streak",
        "icon": "flame",
        "category": "streak",
        "rarity": "uncommon",
        "condition": {"kind": "threshold", "field": "current_streak", "value": 7},
        "sort_order": 2,
    },
    {
        "id": "streak_30",
        "name": "Monthly Master",
        "description": "30 day streak",
        "icon": "flame",
        "category": "streak",
        "rarity": "rare",
        "condition": {"kind": "threshold", "field": "current_streak", "value": 30},
        "sort_order": 3,
    },
    {
        "id": "streak_100",
        "name": "Legendary Dedication",
        "description": "100 day streak",
        "icon": "crown",
        "category": "streak",
        "rarity": "legendary",
        "condition": {"kind": "threshold", "field": "current_streak", "value": 100},
        "sort_order": 4,
    },
    # Mastery
    {
        "id": "first_trick",
        "name": "First Steps",
        "description": "Master your first trick",
        "icon": "star",
        "category": "mastery",
        "rarity": "common",
        "condition": {"kind": "threshold", "field": "tricks_mastered", "value": 1},
        "sort_order": 5,
    },
    {
        "id": "tricks_10",
        "name": "Getting Good",
        "description": "Master 10 tricks",
        "icon": "trophy",
        "category": "mastery",
        "rarity": "uncommon",
        "condition": {"kind": "threshold", "field": "tricks_mastered", "value": 10},
        "sort_order": 6,
    },
    {
        "id": "tricks_50",
        "name": "Trick Master",
        "description": "Master 50 tricks",
        "icon": "trophy",
        "category": "mastery",
        "rarity": "rare",
        "condition": {"kind": "threshold", "field": "tricks_mastered", "value": 50},
        "sort_order": 7,
    },
    {
        "id": "tricks_100",
        "name": "Yo-Yo Legend",
        "description": "Master 100 tricks",
        "icon": "crown",
        "category": "mastery",
        "rarity": "legendary",
        "condition": {"kind": "threshold", "field": "tricks_mastered", "value": 100},
        "sort_order": 8,
    },
    # Explorer
    {
        "id": "first_path",
        "name": "Path Finder",
        "description": "Complete your first learning path",
        "icon": "map",
        "category": "explorer",
        "rarity": "uncommon",
        "condition": {"kind": "threshold", "field": "paths_completed", "value": 1},
        "sort_order": 9,
    },
    {
        "id": "paths_5",
        "name": "Journey Master",
        "description": "Complete 5 learning paths",
        "icon": "compass",
        "category": "explorer",
        "rarity": "rare",
        "condition": {"kind": "threshold", "field": "paths_completed", "value": 5},
        "sort_order": 10,
    },
    # Watch time
    {
        "id": "watch_1h",
        "name": "Dedicated Learner",
        "description": "Watch 1 hour of tutorials",
        "icon": "clock",
        "category": "milestone",
        "rarity": "common",
        "condition": {"kind": "threshold", "field": "total_watch_time", "value": 3600},
        "sort_order": 11,
    },
    {
        "id": "watch_10h",
        "name": "Study Champion",
        "description": "Watch 10 hours of tutorials",
        "icon": "clock",
        "category": "milestone",
        "rarity": "rare",
        "condition": {"kind": "threshold", "field": "total_watch_time", "value": 36000},
        "sort_order": 12,
    },
    # XP milestones
    {
        "id": "xp_1000",
        "name": "Rising Star",
        "description": "Earn 1,000 XP",
        "icon": "zap",
        "category": "milestone",
        "rarity": "common",
        "condition": {"kind": "threshold", "field": "total_xp", "value": 1000},
        "sort_order": 13,
    },
    {
        "id": "xp_10000",
        "name": "XP Hunter",
        "description": "Earn 10,000 XP",
        "icon": "zap",
        "category": "milestone",
        "rarity": "rare",
        "condition": {"kind": "threshold", "field": "total_xp", "value": 10000},
        "sort_order": 14,
    },
    {
        "id": "xp_50000",
        "name": "XP Legend",
        "description": "Earn 50,000 XP",
        "icon": "crown",
        "category": "milestone",
        "rarity": "legendary",
        "condition": {"kind": "threshold", "field": "total_xp", "value": 50000},
        "sort_order": 15,
    },
]


def build_catalog(data: list[dict]) -> tuple[BadgeDefinition, ...]:
    """Validate raw catalog entries and order them by sort_order."""
    definitions = [BadgeDefinition.model_validate(entry) for entry in data]
    return tuple(sorted(definitions, key=lambda d: d.sort_order))


@lru_cache
def load_badge_catalog() -> tuple[BadgeDefinition, ...]:
    """The built-in catalog, validated once."""
    return build_catalog(BADGE_CATALOG_DATA)


def get_badge_definition(badge_id: str) -> BadgeDefinition | None:
    """Fetch a catalog entry by id."""
    for definition in load_badge_catalog():
        if definition.id == badge_id:
            return definition
    return None
