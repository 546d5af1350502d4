"""
Goal management service.
Handles goal CRUD, weekly targets and goal statistics.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Union
from sqlalchemy.orm import Session

from clicktracker.constants import (
    AVERAGE_WINDOW_DAYS, WEEKS_PER_AVERAGE_WINDOW, DAYS_PER_WEEK,
    DEFAULT_WEEKLY_TARGET
)
from clicktracker.exceptions import GoalNotFoundException
from clicktracker.models import Goal
from clicktracker.repositories.click_repository import ClickRecordRepository, GoalClickRecordRepository
from clicktracker.repositories.goal_repository import GoalRepository
from clicktracker.repositories.settings_repository import SettingsRepository
from clicktracker.schemas import (
    GoalCreate, GoalUpdate, GoalResponse, GoalStatsResponse,
    WeeklyGoalStats, DailyClicks
)
from clicktracker.services.date_service import DateService
from clicktracker.services.decay_service import (
    DecayService, calculate_weekly_target, check_activity_threshold
)
from clicktracker.services.transaction import player_transaction

logger = logging.getLogger("clicktracker.goals")


def get_goal_progress_message(goal_name: Optional[str], old_level: int, new_level: int) -> str:
    """Player-facing message for a goal level change"""
    name = goal_name or "Training"
    if new_level > old_level:
        return f"Level up! You've reached Level {new_level} in {name}!"
    if new_level < old_level:
        return f"Due to inactivity, your {name} level decreased to Level {new_level}. Get back to training!"
    return f"Great work on your {name} training! Keep it up!"


class GoalService:
    """Service for managing a player's goals"""

    def __init__(self, db: Session):
        self.db = db
        self.goal_repo = GoalRepository()
        self.click_repo = ClickRecordRepository()
        self.goal_click_repo = GoalClickRecordRepository()
        self.settings_repo = SettingsRepository()
        self.date_service = DateService()
        self.decay_service = DecayService(db)

    def get_averages(self, player_id: int, today: Optional[date] = None) -> tuple[float, float]:
        """
        Weekly and daily click averages over the trailing 30 days.

        weekly = total / 4.3
        daily = total / days with clicks (0 when there are none)
        """
        today = today or self.date_service.today()
        start, end = self.date_service.get_trailing_range(today, AVERAGE_WINDOW_DAYS)
        records = self.click_repo.get_in_range(self.db, player_id, start, end)

        total = sum(record.clicks for record in records)
        days_active = sum(1 for record in records if record.clicks > 0)

        weekly_average = total / WEEKS_PER_AVERAGE_WINDOW
        daily_average = total / days_active if days_active > 0 else 0
        return weekly_average, daily_average

    def compute_weekly_target(self, player_id: int, today: Optional[date] = None) -> int:
        """Rounded activity threshold for a new goal, 100 when there is no history"""
        settings = self.settings_repo.get_or_create(self.db)
        weekly_average, daily_average = self.get_averages(player_id, today)
        target = round(calculate_weekly_target(
            weekly_average,
            daily_average,
            settings.weekly_threshold_ratio,
            settings.daily_threshold_ratio
        ))
        return target or DEFAULT_WEEKLY_TARGET

    def create_goal(self, player_id: int, goal_data: GoalCreate, today: Optional[date] = None) -> Goal:
        """
        Create a goal for the player.

        The weekly target defaults to the computed activity threshold.
        A player's first goal becomes the active one.
        """
        weekly_target = goal_data.weekly_target
        if weekly_target is None:
            weekly_target = self.compute_weekly_target(player_id, today)

        with player_transaction(self.db, player_id, "goal creation"):
            goal = Goal(
                player_id=player_id,
                name=goal_data.name,
                description=goal_data.description,
                category=goal_data.category,
                weekly_target=weekly_target,
                is_active=self.goal_repo.count_active(self.db, player_id) == 0
            )
            self.goal_repo.add(self.db, goal)

        self.db.refresh(goal)
        logger.info(f"Created goal {goal.id} '{goal.name}' for player {player_id} (weekly target {weekly_target})")
        return goal

    def get_goals(
        self,
        player_id: int,
        now: Optional[Union[date, datetime]] = None
    ) -> List[GoalResponse]:
        """
        Get the player's goals, active first then newest.

        Pending decay is charged before returning. Goals that lost points
        in this call carry the decay figures and a level-down message.
        """
        responses = []
        for goal, previous_level, decay in self.decay_service.sweep_player(player_id, now):
            response = GoalResponse.model_validate(goal)
            if decay.points_lost > 0:
                response.days_inactive = decay.days_inactive
                response.points_lost = decay.points_lost
                response.progress_message = get_goal_progress_message(goal.name, previous_level, goal.current_level)
            responses.append(response)
        return responses

    def get_goal(self, player_id: int, goal_id: int) -> Goal:
        goal = self.goal_repo.get_for_player(self.db, player_id, goal_id)
        if not goal:
            raise GoalNotFoundException(goal_id, player_id)
        return goal

    def update_goal(self, player_id: int, goal_id: int, goal_update: GoalUpdate) -> Goal:
        """Rename or edit a goal; unset fields are left as they are"""
        with player_transaction(self.db, player_id, "goal update"):
            goal = self.get_goal(player_id, goal_id)

            update_data = goal_update.model_dump(exclude_unset=True)
            if "name" in update_data and update_data["name"] is not None:
                update_data["name"] = update_data["name"].strip()
            for key, value in update_data.items():
                if value is not None:
                    setattr(goal, key, value)
            self.db.flush()

        self.db.refresh(goal)
        return goal

    def delete_goal(self, player_id: int, goal_id: int) -> None:
        """
        Delete a goal and its per-day counters.

        Overall daily counters and the profile keep the clicks already
        recorded.
        """
        with player_transaction(self.db, player_id, "goal deletion"):
            goal = self.get_goal(player_id, goal_id)
            self.goal_repo.delete(self.db, goal)

        logger.info(f"Deleted goal {goal_id} of player {player_id}")

    def get_goal_stats(self, player_id: int, goal_id: int, today: Optional[date] = None) -> GoalStatsResponse:
        """
        Last 7 days of a goal against its weekly target.

        daily_data is zero-filled, oldest day first, today last.
        """
        today = today or self.date_service.today()
        goal = self.get_goal(player_id, goal_id)

        start, end = self.date_service.get_trailing_range(today, DAYS_PER_WEEK)
        records = self.goal_click_repo.get_in_range(self.db, goal.id, start, end)
        clicks_by_date = {record.date: record.clicks for record in records}

        weekly_clicks = sum(clicks_by_date.values())
        threshold = check_activity_threshold(weekly_clicks, goal.weekly_target)

        daily_data = []
        for offset in range(DAYS_PER_WEEK - 1, -1, -1):
            day = today - timedelta(days=offset)
            daily_data.append(DailyClicks(
                date=day,
                clicks=clicks_by_date.get(day, 0),
                day_name=day.strftime("%a"),
                is_today=offset == 0
            ))

        return GoalStatsResponse(
            goal=GoalResponse.model_validate(goal),
            weekly_stats=WeeklyGoalStats(
                clicks=weekly_clicks,
                target=goal.weekly_target or 0,
                progress_percentage=round(threshold.percentage, 1),
                met_target=threshold.met_threshold
            ),
            daily_data=daily_data
        )
