"""Trick progress unit tests: first-time XP, mastery idempotency, watch-time milestones, notes."""

from __future__ import annotations

from datetime import timedelta

import pytest

from yyc.progress.schemas import ItemStatus
from yyc.progress.trick_service import (
    TRICK_MASTERED,
    TRICK_WATCHED,
    WATCH_TIME_BONUS,
    add_note,
    get_item_progress,
    mark_mastered,
    mark_practicing,
    mark_watched,
    remove_note,
    update_watch_time,
)


class TestMarkWatched:
    """Test watching tricks."""

    def test_first_watch_on_fresh_profile(self, profile, now):
        """First watch pays 10 XP and starts the streak."""
        result = mark_watched(profile, "trick-1", now=now)

        progress = get_item_progress(profile, "trick-1")
        assert progress.status == ItemStatus.WATCHING
        assert result.xp_gained == TRICK_WATCHED == 10
        assert progress.xp_earned == 10
        assert progress.last_activity_at == now
        assert profile.streak.current_streak == 1

    def test_second_watch_grants_nothing(self, profile, now):
        """Watching again pays nothing."""
        mark_watched(profile, "trick-1", now=now)
        later = now + timedelta(hours=2)
        result = mark_watched(profile, "trick-1", now=later)

        progress = get_item_progress(profile, "trick-1")
        assert result.xp_gained == 0
        assert progress.status == ItemStatus.WATCHING
        assert progress.xp_earned == 10
        assert progress.last_activity_at == later

    def test_watch_after_mastery_keeps_mastered(self, profile, now):
        """Watching a mastered trick does not demote it."""
        mark_mastered(profile, "trick-1", now=now)
        result = mark_watched(profile, "trick-1", now=now)
        assert result.xp_gained == 0
        assert get_item_progress(profile, "trick-1").status == ItemStatus.MASTERED

    def test_unknown_id_creates_default_record(self, profile, now):
        """An unknown trick id gets a default record."""
        assert get_item_progress(profile, "never-seen") is None
        mark_watched(profile, "never-seen", now=now)
        assert "never-seen" in profile.item_progress


class TestMarkPracticing:
    """Test moving tricks into practice."""

    def test_promotes_watching(self, profile, now):
        """A watching trick moves to practicing."""
        mark_watched(profile, "trick-1", now=now)
        result = mark_practicing(profile, "trick-1", now=now)
        assert result.xp_gained == 0
        assert get_item_progress(profile, "trick-1").status == ItemStatus.PRACTICING

    def test_practicing_first_forfeits_watch_bonus(self, profile, now):
        """Practicing before watching skips the watch XP."""
        mark_practicing(profile, "trick-1", now=now)
        assert mark_watched(profile, "trick-1", now=now).xp_gained == 0
        assert get_item_progress(profile, "trick-1").status == ItemStatus.PRACTICING

    def test_never_demotes_mastered(self, profile, now):
        """A mastered trick stays mastered."""
        mark_mastered(profile, "trick-1", now=now)
        mark_practicing(profile, "trick-1", now=now)
        assert get_item_progress(profile, "trick-1").status == ItemStatus.MASTERED

    def test_counts_as_streak_activity(self, profile, now):
        """Practicing counts towards the streak."""
        mark_practicing(profile, "trick-1", now=now)
        assert profile.streak.current_streak == 1


class TestMarkMastered:
    """Test mastering tricks."""

    def test_mastery_awards_xp_once(self, profile, now):
        """Mastery pays 50 XP and is counted once."""
        first = mark_mastered(profile, "trick-1", now=now)
        second = mark_mastered(profile, "trick-1", now=now + timedelta(days=1))

        progress = get_item_progress(profile, "trick-1")
        assert first.xp_gained == TRICK_MASTERED == 50
        assert second.xp_gained == 0
        assert progress.mastered_at == now
        assert progress.xp_earned == 50
        assert profile.stats.total_tricks_mastered == 1

    def test_second_call_is_full_noop(self, profile, now):
        """A second mastery changes nothing at all."""
        mark_mastered(profile, "trick-1", now=now)
        before = profile.model_copy(deep=True)
        mark_mastered(profile, "trick-1", now=now + timedelta(days=1))
        assert profile == before

    def test_watched_then_mastered(self, profile, now):
        """A watched trick can be mastered."""
        mark_watched(profile, "trick-1", now=now)
        result = mark_mastered(profile, "trick-1", now=now)
        assert result.xp_gained == 50
        assert get_item_progress(profile, "trick-1").xp_earned == 60

    def test_mastered_count_aggregates_items(self, profile, now):
        """The mastered total counts distinct tricks."""
        for trick in ("a", "b", "c"):
            mark_mastered(profile, trick, now=now)
        mark_mastered(profile, "a", now=now)
        assert profile.stats.total_tricks_mastered == 3


class TestUpdateWatchTime:
    """Test watch time accumulation and milestone bonus."""

    def test_single_900s_call_gives_three_milestones(self, profile, now):
        """900 seconds at once crosses three milestones."""
        result = update_watch_time(profile, "trick-1", 900, now=now)
        assert result.xp_gained == 3 * WATCH_TIME_BONUS

    def test_three_300s_calls_give_three_milestones(self, profile, now):
        """Three 300 second calls cross three milestones."""
        total = sum(update_watch_time(profile, "trick-1", 300, now=now).xp_gained for _ in range(3))
        assert total == 3 * WATCH_TIME_BONUS

    def test_many_small_updates_never_skip_or_double(self, profile, now):
        """Small increments pay the same bonus as one large one."""
        total = sum(update_watch_time(profile, "trick-1", 7, now=now).xp_gained for _ in range(300))
        # 2100 seconds -> 7 milestones
        assert total == 7 * WATCH_TIME_BONUS
        assert get_item_progress(profile, "trick-1").xp_earned == 7 * WATCH_TIME_BONUS

    def test_crossing_a_milestone_with_one_second(self, profile, now):
        """One second over a boundary pays the milestone."""
        assert update_watch_time(profile, "trick-1", 299, now=now).xp_gained == 0
        assert update_watch_time(profile, "trick-1", 1, now=now).xp_gained == WATCH_TIME_BONUS

    def test_accumulates_totals(self, profile, now):
        """Per-trick and profile totals both accumulate."""
        update_watch_time(profile, "trick-1", 120, now=now)
        update_watch_time(profile, "trick-2", 60, now=now)
        assert get_item_progress(profile, "trick-1").watch_time_seconds == 120
        assert profile.stats.total_watch_time == 180

    def test_does_not_touch_streak(self, profile, now):
        """Watch time is not streak activity."""
        update_watch_time(profile, "trick-1", 600, now=now)
        assert profile.streak.current_streak == 0
        assert profile.streak.last_activity_date is None

    def test_negative_delta_rejected(self, profile, now):
        """A negative delta raises ValueError."""
        with pytest.raises(ValueError):
            update_watch_time(profile, "trick-1", -10, now=now)


class TestNotes:
    """Test trick notes."""

    def test_add_and_remove(self, profile):
        """Notes append in order and remove by index."""
        add_note(profile, "trick-1", "keep the string straight")
        add_note(profile, "trick-1", "slow down the throw")
        assert remove_note(profile, "trick-1", 0) is True
        assert get_item_progress(profile, "trick-1").notes == ["slow down the throw"]

    @pytest.mark.parametrize("index", [2, 99, -1])
    def test_out_of_range_is_noop(self, profile, index):
        """Out-of-range indexes remove nothing."""
        add_note(profile, "trick-1", "a")
        add_note(profile, "trick-1", "b")
        assert remove_note(profile, "trick-1", index) is False
        assert get_item_progress(profile, "trick-1").notes == ["a", "b"]

    def test_remove_on_unknown_trick_creates_nothing(self, profile):
        """Removing from an unknown trick creates no record."""
        assert remove_note(profile, "ghost", 0) is False
        assert "ghost" not in profile.item_progress
