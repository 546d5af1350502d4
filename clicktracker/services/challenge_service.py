"""
Daily challenge generator and completion.
"""
import logging
import random
from datetime import date, datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session

from clicktracker.catalog import CHALLENGE_TEMPLATES
from clicktracker.exceptions import ChallengeNotFoundException, ChallengeAlreadyCompletedException
from clicktracker.models import DailyChallenge
from clicktracker.repositories.challenge_repository import DailyChallengeRepository
from clicktracker.repositories.click_repository import ClickRecordRepository
from clicktracker.repositories.profile_repository import PlayerProfileRepository
from clicktracker.schemas import ChallengeData, AchievementSnapshot, ChallengeCompletionResponse
from clicktracker.services.achievement_service import evaluate_achievements
from clicktracker.services.date_service import DateService
from clicktracker.services.transaction import player_transaction

logger = logging.getLogger("clicktracker.challenges")

CHALLENGE_COMPLETION_REWARD = "Challenge completed! +50 XP"


def generate_daily_challenge(
    challenge_date: date,
    level: int,
    rng: Optional[random.Random] = None
) -> ChallengeData:
    """
    Pick a challenge template uniformly at random and scale it to level.

    Not idempotent: two calls for the same date may differ. Persist through
    ChallengeService.get_or_create_daily_challenge to get one per date.
    """
    rng = rng or random
    challenge_type = rng.choice(list(CHALLENGE_TEMPLATES))
    challenge = CHALLENGE_TEMPLATES[challenge_type](level)
    return ChallengeData(challenge_type=challenge_type, **challenge)


class ChallengeService:
    """Service for daily challenges"""

    def __init__(self, db: Session, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng
        self.challenge_repo = DailyChallengeRepository()
        self.profile_repo = PlayerProfileRepository()
        self.click_repo = ClickRecordRepository()
        self.date_service = DateService()

    def get_or_create_daily_challenge(
        self,
        player_id: int,
        challenge_date: Optional[date] = None
    ) -> DailyChallenge:
        """
        Fetch the player's challenge for the date, generating it if absent.

        The insert is conditional on the (player, date) key, so concurrent
        callers all end up with the same stored challenge.
        """
        challenge_date = challenge_date or self.date_service.today()
        existing = self.challenge_repo.get_by_date(self.db, player_id, challenge_date)
        if existing:
            return existing

        with player_transaction(self.db, player_id, "daily challenge creation"):
            profile = self.profile_repo.get_or_create(self.db, player_id)
            data = generate_daily_challenge(challenge_date, profile.current_level, self.rng)
            challenge = self.challenge_repo.create_if_absent(
                self.db,
                player_id,
                challenge_date,
                data.challenge_type,
                data.target_value,
                data.description,
                data.reward
            )

        logger.info(f"Daily challenge for player {player_id} on {challenge_date}: {challenge.challenge_type}")
        return challenge

    def get_daily_challenge(self, player_id: int, challenge_date: date) -> DailyChallenge:
        """Get a stored challenge without generating one"""
        challenge = self.challenge_repo.get_by_date(self.db, player_id, challenge_date)
        if not challenge:
            raise ChallengeNotFoundException(player_id, challenge_date)
        return challenge

    def complete_daily_challenge(
        self,
        player_id: int,
        now: Optional[datetime] = None
    ) -> ChallengeCompletionResponse:
        """
        Mark today's challenge completed and update the streak.

        The streak continues when the previous completion was yesterday,
        otherwise it restarts at 1.

        Raises:
            ChallengeAlreadyCompletedException: Already completed today
        """
        now = now or self.date_service.now()
        today = now.date()

        with player_transaction(self.db, player_id, "daily challenge completion"):
            profile = self.profile_repo.get_or_create(self.db, player_id)

            if profile.daily_challenge_completed and profile.last_challenge_date == today:
                raise ChallengeAlreadyCompletedException(player_id, today)

            if profile.last_challenge_date == today - timedelta(days=1):
                new_streak = profile.streak_count + 1
            else:
                new_streak = 1

            profile.daily_challenge_completed = True
            profile.last_challenge_date = today
            profile.streak_count = new_streak
            profile.challenges_completed = (profile.challenges_completed or 0) + 1

            today_record = self.click_repo.get_by_date(self.db, player_id, today)
            snapshot = AchievementSnapshot(
                total_clicks=profile.total_clicks,
                streak_count=new_streak,
                today_clicks=today_record.clicks if today_record else 0,
                daily_challenges_completed=profile.challenges_completed
            )
            new_achievements = evaluate_achievements(snapshot, profile.achievements)
            if new_achievements:
                profile.achievements = profile.achievements + new_achievements
            self.db.flush()

        logger.info(
            f"Player {player_id} completed daily challenge on {today} "
            f"(streak {new_streak}, total {profile.challenges_completed})"
        )
        return ChallengeCompletionResponse(
            streak_count=new_streak,
            challenges_completed=profile.challenges_completed,
            new_achievements=new_achievements,
            reward=CHALLENGE_COMPLETION_REWARD
        )
