"""XP ledger, leveling, streaks and badges."""
