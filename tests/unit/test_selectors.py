"""Selector tests: derived queries are correct and never mutate the profile."""

from __future__ import annotations

from datetime import timedelta

from yyc import selectors
from yyc.engine import ProgressionEngine
from yyc.gamification.schemas import MAX_LEVEL, BadgeCategory, BadgeRarity
from yyc.profile import Profile


def _populated(now) -> Profile:
    engine = ProgressionEngine()
    engine.mark_watched("t1", now=now)
    engine.mark_practicing("t2", now=now)
    engine.mark_mastered("t3", now=now)
    engine.update_watch_time("t1", 600, now=now)
    engine.start_path("p1", "m1", now=now)
    engine.start_path("p2", "m1", now=now)
    engine.complete_path("p2", now=now)
    return engine.profile


class TestProgressSelectors:
    """Test trick, path and streak queries."""

    def test_item_and_path_lookup(self, now):
        """Lookups return the record or None without creating one."""
        profile = _populated(now)
        assert selectors.select_item_progress(profile, "t1").watch_time_seconds == 600
        assert selectors.select_item_progress(profile, "missing") is None
        assert selectors.select_path_progress(profile, "p1").current_module_id == "m1"

    def test_status_groups(self, now):
        """Items group by status; mastered counts as started."""
        profile = _populated(now)
        assert [p.item_id for p in selectors.select_mastered_items(profile)] == ["t3"]
        assert sorted(p.item_id for p in selectors.select_in_progress_items(profile)) == ["t1", "t2"]
        assert selectors.select_started_items_count(profile) == 3

    def test_path_groups(self, now):
        """Paths split into active and completed."""
        profile = _populated(now)
        assert [p.path_id for p in selectors.select_active_paths(profile)] == ["p1"]
        assert [p.path_id for p in selectors.select_completed_paths(profile)] == ["p2"]

    def test_totals(self, now):
        """Totals match the profile stats and per-item XP."""
        profile = _populated(now)
        assert selectors.select_total_watch_time(profile) == 600
        assert selectors.select_total_tricks_mastered(profile) == 1
        # 10 watch + 2 * 5 watch-time bonus + 50 mastery
        assert selectors.select_total_xp_from_progress(profile) == 70

    def test_streaks(self, now):
        """Effective streak drops to 0 after a missed day."""
        profile = _populated(now)
        assert selectors.select_current_streak(profile) == 1
        assert selectors.select_longest_streak(profile) == 1
        assert selectors.select_effective_streak(profile, now) == 1
        assert selectors.select_effective_streak(profile, now + timedelta(days=2)) == 0

    def test_selectors_do_not_mutate(self, now):
        """Selectors leave the profile unchanged."""
        profile = _populated(now)
        before = profile.model_copy(deep=True)
        selectors.select_effective_streak(profile, now + timedelta(days=5))
        selectors.select_level_progress(profile)
        selectors.select_badges_by_rarity(profile, BadgeRarity.COMMON)
        assert profile == before


class TestGamificationSelectors:
    """Test XP, level and badge queries."""

    def test_badge_queries(self, now):
        """Badges filter by category and rarity; recent feed is newest first."""
        profile = _populated(now)
        # first_trick (mastery, common) and first_path (explorer, uncommon)
        assert selectors.select_badge_count(profile) == 2
        assert [b.id for b in selectors.select_badges_by_category(profile, BadgeCategory.MASTERY)] == ["first_trick"]
        assert [b.id for b in selectors.select_badges_by_rarity(profile, BadgeRarity.UNCOMMON)] == ["first_path"]
        assert [a.badge.id for a in selectors.select_recent_achievements(profile)] == ["first_path", "first_trick"]

    def test_xp_queries(self, now):
        """XP, lifetime XP and level read straight from the ledger."""
        profile = _populated(now)
        # 10 + 10 + 50 + 25 (first_trick) + 100 (path) + 50 (first_path)
        assert selectors.select_xp(profile) == 245
        assert selectors.select_lifetime_xp(profile) == 245
        assert selectors.select_level(profile) == 2

    def test_level_progress(self, now):
        """Progress is measured inside the current level band."""
        progress = selectors.select_level_progress(_populated(now))
        assert progress.level == 2
        assert progress.current == 145
        assert progress.required == 182
        assert progress.is_max_level is False

    def test_level_progress_at_cap(self):
        """At level 50 nothing more is required."""
        profile = Profile.hydrate({"xp": {"xp": 35000, "lifetime_xp": 35000, "level": MAX_LEVEL}})
        progress = selectors.select_level_progress(profile)
        assert progress.is_max_level is True
        assert progress.required == 0
        assert progress.current == 700
