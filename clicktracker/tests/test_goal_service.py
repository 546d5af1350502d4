"""
Tests for GoalService.

Tests cover:
1. Goal creation and weekly targets
2. Listing with lazy decay
3. Update / delete
4. Goal statistics
5. Progress messages
"""
import pytest
from datetime import date

from clicktracker.exceptions import GoalNotFoundException
from clicktracker.models import Goal, GoalClickRecord
from clicktracker.schemas import GoalCreate, GoalUpdate
from clicktracker.services.goal_service import GoalService, get_goal_progress_message
from clicktracker.tests.conftest import create_goal, create_click_record, create_goal_click_record

TODAY = date(2025, 1, 15)


class TestCreateGoal:
    """Tests for create_goal"""

    def test_default_target_without_history(self, db_session, default_settings):
        goal = GoalService(db_session).create_goal(1, GoalCreate(name="Shooting"), today=TODAY)

        assert goal.weekly_target == 100
        assert goal.level_points == 0
        assert goal.current_level == 1

    def test_target_from_recent_history(self, db_session, default_settings):
        """43 clicks on one day: max(43 / 4.3 * 0.3, 43 * 0.3 * 7) rounds to 90"""
        create_click_record(db_session, 1, date(2025, 1, 10), 43)

        goal = GoalService(db_session).create_goal(1, GoalCreate(name="Shooting"), today=TODAY)

        assert goal.weekly_target == 90

    def test_history_outside_window_ignored(self, db_session, default_settings):
        create_click_record(db_session, 1, date(2024, 11, 1), 500)

        goal = GoalService(db_session).create_goal(1, GoalCreate(name="Shooting"), today=TODAY)

        assert goal.weekly_target == 100

    def test_explicit_target_kept(self, db_session, default_settings):
        goal = GoalService(db_session).create_goal(1, GoalCreate(name="Shooting", weekly_target=20))

        assert goal.weekly_target == 20

    def test_first_goal_becomes_active(self, db_session, default_settings):
        service = GoalService(db_session)

        first = service.create_goal(1, GoalCreate(name="Shooting"), today=TODAY)
        second = service.create_goal(1, GoalCreate(name="Passing"), today=TODAY)

        assert first.is_active is True
        assert second.is_active is False


class TestAverages:

    def test_averages(self, db_session):
        create_click_record(db_session, 1, date(2025, 1, 14), 30)
        create_click_record(db_session, 1, date(2025, 1, 15), 13)
        create_click_record(db_session, 1, date(2025, 1, 13), 0)

        weekly, daily = GoalService(db_session).get_averages(1, TODAY)

        assert weekly == pytest.approx(10)
        assert daily == pytest.approx(21.5)

    def test_no_history(self, db_session):
        assert GoalService(db_session).get_averages(1, TODAY) == (0, 0)


class TestGetGoals:
    """Tests for get_goals"""

    def test_active_first(self, db_session, default_settings):
        older = create_goal(db_session, name="Shooting", is_active=True)
        create_goal(db_session, name="Passing")

        goals = GoalService(db_session).get_goals(1, TODAY)

        assert goals[0].id == older.id
        assert len(goals) == 2

    def test_decay_applied_on_listing(self, db_session, default_settings):
        create_goal(db_session, level_points=500, current_level=6, last_activity_date=date(2025, 1, 1))

        goal = GoalService(db_session).get_goals(1, TODAY)[0]

        assert goal.level_points == 150
        assert goal.current_level == 2
        assert goal.days_inactive == 7
        assert goal.points_lost == 350
        assert "decreased to Level 2" in goal.progress_message

    def test_second_listing_charges_nothing(self, db_session, default_settings):
        create_goal(db_session, level_points=500, current_level=6, last_activity_date=date(2025, 1, 1))
        service = GoalService(db_session)

        service.get_goals(1, TODAY)
        goal = service.get_goals(1, TODAY)[0]

        assert goal.level_points == 150
        assert goal.points_lost == 0
        assert goal.progress_message is None

    def test_only_own_goals(self, db_session, default_settings):
        create_goal(db_session, player_id=2)

        assert GoalService(db_session).get_goals(1, TODAY) == []


class TestUpdateAndDelete:

    def test_rename_strips_whitespace(self, db_session):
        goal = create_goal(db_session)

        updated = GoalService(db_session).update_goal(1, goal.id, GoalUpdate(name="  Free Throws "))

        assert updated.name == "Free Throws"

    def test_partial_update_keeps_other_fields(self, db_session):
        goal = create_goal(db_session, category="offense", weekly_target=70)

        updated = GoalService(db_session).update_goal(1, goal.id, GoalUpdate(weekly_target=80))

        assert updated.weekly_target == 80
        assert updated.category == "offense"

    def test_update_other_players_goal(self, db_session):
        goal = create_goal(db_session, player_id=2)

        with pytest.raises(GoalNotFoundException):
            GoalService(db_session).update_goal(1, goal.id, GoalUpdate(name="Mine"))

    def test_delete_removes_goal_counters(self, db_session):
        goal = create_goal(db_session)
        create_goal_click_record(db_session, goal, TODAY, 5)

        GoalService(db_session).delete_goal(1, goal.id)

        assert db_session.query(Goal).count() == 0
        assert db_session.query(GoalClickRecord).count() == 0

    def test_delete_missing_goal(self, db_session):
        with pytest.raises(GoalNotFoundException):
            GoalService(db_session).delete_goal(1, 42)


class TestGoalStats:
    """Tests for get_goal_stats"""

    def test_weekly_stats(self, db_session):
        goal = create_goal(db_session, weekly_target=20)
        create_goal_click_record(db_session, goal, date(2025, 1, 9), 4)
        create_goal_click_record(db_session, goal, date(2025, 1, 15), 6)
        create_goal_click_record(db_session, goal, date(2025, 1, 8), 100)  # outside the 7 days

        stats = GoalService(db_session).get_goal_stats(1, goal.id, TODAY)

        assert stats.weekly_stats.clicks == 10
        assert stats.weekly_stats.target == 20
        assert stats.weekly_stats.progress_percentage == 50.0
        assert stats.weekly_stats.met_target is False

    def test_daily_series_zero_filled(self, db_session):
        goal = create_goal(db_session)
        create_goal_click_record(db_session, goal, date(2025, 1, 12), 3)

        stats = GoalService(db_session).get_goal_stats(1, goal.id, TODAY)

        assert [day.date for day in stats.daily_data][0] == date(2025, 1, 9)
        assert len(stats.daily_data) == 7
        assert [day.clicks for day in stats.daily_data] == [0, 0, 0, 3, 0, 0, 0]
        assert stats.daily_data[-1].is_today is True
        assert stats.daily_data[-1].day_name == "Wed"


class TestProgressMessage:

    def test_level_up(self):
        assert get_goal_progress_message("Shooting", 1, 2) == "Level up! You've reached Level 2 in Shooting!"

    def test_level_down(self):
        message = get_goal_progress_message("Shooting", 3, 2)
        assert message.startswith("Due to inactivity, your Shooting level decreased to Level 2")

    def test_neutral(self):
        assert get_goal_progress_message("Shooting", 2, 2) == "Great work on your Shooting training! Keep it up!"

    def test_missing_name(self):
        assert "Training" in get_goal_progress_message(None, 1, 1)
