"""
Daily challenge repository - Data access layer for DailyChallenge model.
"""
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from clicktracker.models import DailyChallenge


class DailyChallengeRepository:
    """Repository for DailyChallenge data access"""

    @staticmethod
    def get_by_date(db: Session, player_id: int, target_date: date) -> Optional[DailyChallenge]:
        return db.query(DailyChallenge).filter(
            DailyChallenge.player_id == player_id,
            DailyChallenge.date == target_date
        ).first()

    @staticmethod
    def create_if_absent(
        db: Session,
        player_id: int,
        target_date: date,
        challenge_type: str,
        target_value: int,
        description: str,
        reward: str
    ) -> DailyChallenge:
        """
        Insert the challenge unless one already exists for the date.

        Returns the stored row, which is the pre-existing one when
        another request won the race.
        """
        db.execute(
            sqlite_insert(DailyChallenge)
            .values(
                player_id=player_id,
                date=target_date,
                challenge_type=challenge_type,
                target_value=target_value,
                description=description,
                reward=reward
            )
            .on_conflict_do_nothing(index_elements=["player_id", "date"])
        )
        return DailyChallengeRepository.get_by_date(db, player_id, target_date)
