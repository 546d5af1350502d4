"""
Tests for the achievement evaluator.
"""
from clicktracker.catalog import ACHIEVEMENTS
from clicktracker.schemas import AchievementSnapshot
from clicktracker.services.achievement_service import (
    ACHIEVEMENT_RULES, evaluate_achievements, get_achievement_catalog
)


class TestEvaluateAchievements:
    """Tests for evaluate_achievements"""

    def test_hundred_clicks_unlocks_two(self):
        """Crossing several click thresholds at once unlocks all of them"""
        result = evaluate_achievements(AchievementSnapshot(total_clicks=100))

        assert set(result) == {"firstClick", "hundred"}

    def test_already_unlocked_are_skipped(self):
        result = evaluate_achievements(AchievementSnapshot(total_clicks=100), ["firstClick"])

        assert result == ["hundred"]

    def test_nothing_for_empty_snapshot(self):
        assert evaluate_achievements(AchievementSnapshot()) == []

    def test_streaks(self):
        result = evaluate_achievements(AchievementSnapshot(streak_count=7))

        assert set(result) == {"streak3", "streak7"}

    def test_daily_volume(self):
        result = evaluate_achievements(AchievementSnapshot(total_clicks=500, today_clicks=500))

        assert {"speedster", "marathon"} <= set(result)

    def test_time_of_day_flags(self):
        assert evaluate_achievements(AchievementSnapshot(is_early_morning=True)) == ["earlyBird"]
        assert evaluate_achievements(AchievementSnapshot(is_late_night=True)) == ["nightOwl"]

    def test_daily_champion(self):
        assert evaluate_achievements(AchievementSnapshot(daily_challenges_completed=9)) == []
        assert evaluate_achievements(AchievementSnapshot(daily_challenges_completed=10)) == ["dailyChamp"]

    def test_everything_at_once(self):
        snapshot = AchievementSnapshot(
            total_clicks=10000,
            streak_count=30,
            today_clicks=500,
            is_early_morning=True,
            is_late_night=True,
            daily_challenges_completed=10
        )

        assert set(evaluate_achievements(snapshot)) == set(ACHIEVEMENTS)

    def test_every_rule_has_catalog_entry(self):
        assert {key for key, _ in ACHIEVEMENT_RULES} == set(ACHIEVEMENTS)


class TestAchievementCatalog:

    def test_unlocked_flags(self):
        catalog = get_achievement_catalog(["firstClick"])
        flags = {entry["id"]: entry["unlocked"] for entry in catalog}

        assert flags["firstClick"] is True
        assert flags["hundred"] is False
        assert len(catalog) == len(ACHIEVEMENTS)
