"""
Decay engine.

Penalizes inactivity by deducting goal level points once a grace window
has passed, and provides the weekly activity threshold helpers.
The pure functions never touch the database; DecayService applies their
results to stored goals.
"""
import logging
from datetime import date, datetime
from typing import List, Optional, Tuple, Union
from sqlalchemy.orm import Session

from clicktracker.constants import (
    DECAY_PER_DAY, GRACE_WEEKS, DAYS_PER_WEEK,
    WEEKLY_THRESHOLD_RATIO, DAILY_THRESHOLD_RATIO
)
from clicktracker.models import Goal, Settings
from clicktracker.repositories.goal_repository import GoalRepository
from clicktracker.repositories.settings_repository import SettingsRepository
from clicktracker.schemas import DecayResult, ThresholdResult
from clicktracker.services.date_service import DateService
from clicktracker.services.level_service import level_from_points
from clicktracker.services.transaction import player_transaction, transaction

logger = logging.getLogger("clicktracker.decay")


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def calculate_decay(
    last_activity_date: Optional[date],
    current_points: int,
    weekly_average: float = 0,
    daily_average: float = 0,
    now: Optional[Union[date, datetime]] = None,
    decay_per_day: int = DECAY_PER_DAY,
    grace_weeks: int = GRACE_WEEKS
) -> DecayResult:
    """
    Calculate points lost to inactivity.

    days_since = whole days between last_activity_date and now
    days_inactive = max(0, days_since - grace_weeks * 7)
    points_lost = days_inactive * decay_per_day
    new_points = max(0, current_points - points_lost)

    weekly_average and daily_average are accepted for interface symmetry
    with calculate_weekly_target; they do not change the result.

    Args:
        last_activity_date: Last day with activity, None if never active
        current_points: Points before decay
        now: Evaluation time (defaults to today)

    Returns:
        DecayResult with new_points, days_inactive and points_lost
    """
    if last_activity_date is None:
        return DecayResult(new_points=current_points, days_inactive=0, points_lost=0)

    today = _as_date(now) if now is not None else DateService.today()
    days_since = (today - _as_date(last_activity_date)).days

    grace_days = grace_weeks * DAYS_PER_WEEK
    days_inactive = max(0, days_since - grace_days)

    if days_inactive <= 0:
        return DecayResult(new_points=current_points, days_inactive=0, points_lost=0)

    points_lost = days_inactive * decay_per_day
    new_points = max(0, current_points - points_lost)

    return DecayResult(new_points=new_points, days_inactive=days_inactive, points_lost=points_lost)


def calculate_weekly_target(
    weekly_average: float,
    daily_average: float,
    weekly_ratio: float = WEEKLY_THRESHOLD_RATIO,
    daily_ratio: float = DAILY_THRESHOLD_RATIO
) -> float:
    """
    Minimum weekly activity: the higher of 30% of the weekly average and
    30% of the daily average spread over a week.
    """
    weekly_threshold = weekly_average * weekly_ratio
    daily_threshold = daily_average * daily_ratio * DAYS_PER_WEEK
    return max(weekly_threshold, daily_threshold)


def check_activity_threshold(weekly_clicks: int, weekly_target: Optional[float]) -> ThresholdResult:
    """
    Compare a week's clicks to the target.

    A zero or missing target reports 100% and counts as met.
    """
    target = weekly_target or 0
    percentage = (weekly_clicks / target) * 100 if target > 0 else 100.0
    return ThresholdResult(met_threshold=weekly_clicks >= target, percentage=percentage)


class DecayService:
    """Applies decay to stored goals"""

    def __init__(self, db: Session):
        self.db = db
        self.goal_repo = GoalRepository()
        self.settings_repo = SettingsRepository()

    def apply_decay(
        self,
        goal: Goal,
        now: Optional[Union[date, datetime]] = None,
        settings: Optional[Settings] = None
    ) -> DecayResult:
        """
        Charge the inactive days not yet charged to this goal.

        calculate_decay gives the total inactive days since the last
        activity; decay_days_applied remembers how many were already
        deducted, so repeated calls with the same `now` are no-ops.
        level_points and current_level are always written together.
        Does not commit.

        Returns:
            DecayResult for this call only (points_lost is the new charge)
        """
        settings = settings or self.settings_repo.get_or_create(self.db)
        if not settings.decay_enabled:
            return DecayResult(new_points=goal.level_points, days_inactive=0, points_lost=0)

        total = calculate_decay(
            goal.last_activity_date,
            goal.level_points,
            now=now,
            decay_per_day=settings.decay_per_day,
            grace_weeks=settings.grace_weeks
        )

        already_applied = goal.decay_days_applied or 0
        new_days = total.days_inactive - already_applied
        if new_days <= 0:
            return DecayResult(new_points=goal.level_points, days_inactive=total.days_inactive, points_lost=0)

        points_lost = new_days * settings.decay_per_day
        new_points = max(0, goal.level_points - points_lost)
        old_level = goal.current_level

        goal.level_points = new_points
        goal.current_level = level_from_points(new_points, settings.points_per_level)
        goal.decay_days_applied = total.days_inactive

        logger.info(
            f"Decay on goal {goal.id} (player {goal.player_id}): "
            f"-{points_lost} points over {new_days} day(s), level {old_level} -> {goal.current_level}"
        )
        return DecayResult(new_points=new_points, days_inactive=total.days_inactive, points_lost=points_lost)

    def sweep_player(
        self,
        player_id: int,
        now: Optional[Union[date, datetime]] = None,
        settings: Optional[Settings] = None
    ) -> List[Tuple[Goal, int, DecayResult]]:
        """
        Apply decay to all of a player's goals in one transaction.

        Returns:
            (goal, level before the charge, DecayResult) per goal
        """
        results = []
        with player_transaction(self.db, player_id, "decay sweep"):
            settings = settings or self.settings_repo.get_or_create(self.db)
            for goal in self.goal_repo.get_all_for_player(self.db, player_id):
                previous_level = goal.current_level
                results.append((goal, previous_level, self.apply_decay(goal, now, settings)))
            self.db.flush()
        return results

    def sweep_all(self, now: Optional[Union[date, datetime]] = None) -> int:
        """
        Apply decay to every goal, one player at a time.

        Returns:
            Number of goals that lost points
        """
        charged = 0
        for player_id in self.goal_repo.get_player_ids(self.db):
            results = self.sweep_player(player_id, now)
            charged += sum(1 for _, _, result in results if result.points_lost > 0)

        with transaction(self.db, "decay sweep bookkeeping"):
            settings = self.settings_repo.get_or_create(self.db)
            settings.last_decay_sweep_date = _as_date(now) if now is not None else DateService.today()
            self.db.flush()
        return charged
