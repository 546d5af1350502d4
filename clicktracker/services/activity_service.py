"""
Goal activity recorder.

Orchestrates a single click or unclick on a goal: per-day counters, goal
progression, profile progression, skins and achievements. Each event is
serialized per player and written in one transaction, so either every
aggregate moves or none does.
"""
import logging
from datetime import date, datetime
from typing import Optional
from sqlalchemy.orm import Session

from clicktracker.constants import ACTIVITY_INCREMENT, ACTIVITY_DECREMENT
from clicktracker.exceptions import GoalNotFoundException, ValidationException
from clicktracker.models import Goal, PlayerProfile, Settings
from clicktracker.repositories.click_repository import ClickRecordRepository, GoalClickRecordRepository
from clicktracker.repositories.goal_repository import GoalRepository
from clicktracker.repositories.profile_repository import PlayerProfileRepository
from clicktracker.repositories.settings_repository import SettingsRepository
from clicktracker.schemas import ActivityResult, AchievementSnapshot
from clicktracker.services.achievement_service import evaluate_achievements
from clicktracker.services.date_service import DateService
from clicktracker.services.decay_service import DecayService
from clicktracker.services.level_service import (
    level_from_points, level_from_cumulative_clicks, get_level_data,
    get_unlocked_skins, get_skin_for_level
)
from clicktracker.services.goal_service import get_goal_progress_message
from clicktracker.services.transaction import player_transaction

logger = logging.getLogger("clicktracker.activity")


class ActivityService:
    """Service recording goal clicks and switching the active goal"""

    def __init__(self, db: Session):
        self.db = db
        self.goal_repo = GoalRepository()
        self.click_repo = ClickRecordRepository()
        self.goal_click_repo = GoalClickRecordRepository()
        self.profile_repo = PlayerProfileRepository()
        self.settings_repo = SettingsRepository()
        self.date_service = DateService()
        self.decay_service = DecayService(db)

    def record_goal_activity(
        self,
        player_id: int,
        goal_id: int,
        delta: int = ACTIVITY_INCREMENT,
        activity_date: Optional[date] = None,
        now: Optional[datetime] = None
    ) -> ActivityResult:
        """
        Record one click (+1) or unclick (-1) on a goal.

        Args:
            player_id: Owner of the goal
            goal_id: Goal receiving the event
            delta: +1 to increment, -1 to decrement
            activity_date: Calendar day of the event (defaults to now's date)
            now: Event time, used for time-of-day achievements and decay

        Returns:
            ActivityResult with the goal's clicks for the day and level changes

        Raises:
            ValidationException: delta is not +1 or -1
            GoalNotFoundException: Goal missing or owned by someone else
            DatabaseException: Persistence failed; nothing was written
        """
        if delta not in (ACTIVITY_INCREMENT, ACTIVITY_DECREMENT):
            raise ValidationException("delta", f"must be +1 or -1, got {delta}")

        now = now or self.date_service.now()
        activity_date = activity_date or now.date()

        operation = "click increment" if delta > 0 else "click decrement"
        with player_transaction(self.db, player_id, operation):
            goal = self.goal_repo.get_for_player(self.db, player_id, goal_id)
            if not goal:
                raise GoalNotFoundException(goal_id, player_id)

            settings = self.settings_repo.get_or_create(self.db)
            profile = self.profile_repo.get_or_create(self.db, player_id)

            if delta > 0:
                result = self._increment(goal, profile, settings, activity_date, now)
            else:
                result = self._decrement(goal, profile, settings, activity_date)

            self.db.flush()

        if result.leveled_up:
            logger.info(f"Goal {goal_id} (player {player_id}) leveled up: {result.previous_level} -> {result.new_level}")
        if result.profile_leveled_up:
            logger.info(f"Player {player_id} reached career level {result.profile_level}")
        if result.new_achievements:
            logger.info(f"Player {player_id} unlocked achievements: {', '.join(result.new_achievements)}")

        return result

    def _increment(
        self,
        goal: Goal,
        profile: PlayerProfile,
        settings: Settings,
        activity_date: date,
        now: datetime
    ) -> ActivityResult:
        previous_level = goal.current_level

        # Charge decay owed up to now before the new activity resets the clock
        self.decay_service.apply_decay(goal, now, settings)

        day_record = self.click_repo.get_or_create(self.db, goal.player_id, activity_date)
        day_record.clicks += 1

        goal_record = self.goal_click_repo.get_or_create(self.db, goal.player_id, goal.id, activity_date)
        goal_record.clicks += 1

        goal.total_clicks += 1
        goal.level_points += 1
        goal.current_level = level_from_points(goal.level_points, settings.points_per_level)
        if goal.last_activity_date is None or activity_date > goal.last_activity_date:
            goal.last_activity_date = activity_date
            goal.decay_days_applied = 0

        # Career progression; regaining a level lost to unclicks is not a level-up
        highest_level = max(profile.highest_level or 1, profile.current_level)
        old_skin = profile.current_skin
        profile.total_clicks += 1
        profile.current_level = level_from_cumulative_clicks(profile.total_clicks)
        profile_leveled_up = profile.current_level > highest_level

        if profile_leveled_up:
            profile.highest_level = profile.current_level
            profile.unlocked_skins = list(dict.fromkeys(
                profile.unlocked_skins + get_unlocked_skins(profile.current_level)
            ))
            level_skin = get_skin_for_level(profile.current_level)
            if level_skin:
                profile.current_skin = level_skin

        snapshot = AchievementSnapshot(
            total_clicks=profile.total_clicks,
            streak_count=profile.streak_count,
            today_clicks=day_record.clicks,
            is_early_morning=self.date_service.is_early_morning(now, settings),
            is_late_night=self.date_service.is_late_night(now, settings),
            daily_challenges_completed=profile.challenges_completed or 0
        )
        new_achievements = evaluate_achievements(snapshot, profile.achievements)
        if new_achievements:
            profile.achievements = profile.achievements + new_achievements

        return ActivityResult(
            goal_id=goal.id,
            activity_date=activity_date,
            new_goal_clicks=goal_record.clicks,
            total_clicks=goal.total_clicks,
            level_points=goal.level_points,
            previous_level=previous_level,
            new_level=goal.current_level,
            leveled_up=goal.current_level > previous_level,
            leveled_down=goal.current_level < previous_level,
            profile_total_clicks=profile.total_clicks,
            profile_level=profile.current_level,
            profile_leveled_up=profile_leveled_up,
            level_data=get_level_data(profile.current_level) if profile_leveled_up else None,
            skin_changed=profile.current_skin != old_skin,
            new_skin=profile.current_skin,
            new_achievements=new_achievements,
            message=get_goal_progress_message(goal.name, previous_level, goal.current_level)
        )

    def _decrement(
        self,
        goal: Goal,
        profile: PlayerProfile,
        settings: Settings,
        activity_date: date
    ) -> ActivityResult:
        previous_level = goal.current_level
        goal_record = self.goal_click_repo.get_by_date(self.db, goal.id, activity_date)

        if goal_record is None or goal_record.clicks <= 0:
            # Nothing to undo for this day
            return ActivityResult(
                goal_id=goal.id,
                activity_date=activity_date,
                new_goal_clicks=0,
                total_clicks=goal.total_clicks,
                level_points=goal.level_points,
                previous_level=previous_level,
                new_level=goal.current_level,
                profile_total_clicks=profile.total_clicks,
                profile_level=profile.current_level,
                new_skin=profile.current_skin
            )

        goal_record.clicks -= 1

        day_record = self.click_repo.get_by_date(self.db, goal.player_id, activity_date)
        if day_record is not None:
            day_record.clicks = max(0, day_record.clicks - 1)

        goal.total_clicks = max(0, goal.total_clicks - 1)
        goal.level_points = max(0, goal.level_points - 1)
        goal.current_level = level_from_points(goal.level_points, settings.points_per_level)

        # Unlocked skins and achievements are kept
        profile.total_clicks = max(0, profile.total_clicks - 1)
        profile.current_level = level_from_cumulative_clicks(profile.total_clicks)

        return ActivityResult(
            goal_id=goal.id,
            activity_date=activity_date,
            new_goal_clicks=goal_record.clicks,
            total_clicks=goal.total_clicks,
            level_points=goal.level_points,
            previous_level=previous_level,
            new_level=goal.current_level,
            leveled_down=goal.current_level < previous_level,
            profile_total_clicks=profile.total_clicks,
            profile_level=profile.current_level,
            new_skin=profile.current_skin
        )

    def set_active_goal(self, player_id: int, goal_id: int) -> Goal:
        """
        Make goal_id the player's only active goal.

        Deactivates every goal of the player, then activates the chosen
        one, inside one transaction. Ownership is checked first so an
        unknown goal leaves the previous active goal untouched.

        Raises:
            GoalNotFoundException: Goal missing or owned by someone else
        """
        with player_transaction(self.db, player_id, "active goal switch"):
            goal = self.goal_repo.get_for_player(self.db, player_id, goal_id)
            if not goal:
                raise GoalNotFoundException(goal_id, player_id)

            self.goal_repo.deactivate_all(self.db, player_id)
            goal.is_active = True
            self.db.flush()

        logger.info(f"Player {player_id} switched active goal to {goal_id}")
        return goal
