"""
Profile repository - Data access layer for PlayerProfile model.
"""
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from clicktracker.models import PlayerProfile


class PlayerProfileRepository:
    """Repository for PlayerProfile data access"""

    @staticmethod
    def get(db: Session, player_id: int) -> Optional[PlayerProfile]:
        return db.query(PlayerProfile).filter(
            PlayerProfile.player_id == player_id
        ).first()

    @staticmethod
    def get_or_create(db: Session, player_id: int) -> PlayerProfile:
        """
        Get the player's profile, creating it with defaults if missing.

        Creation is an insert-if-absent so two first requests
        never produce two profiles.
        """
        profile = PlayerProfileRepository.get(db, player_id)
        if profile:
            return profile

        db.execute(
            sqlite_insert(PlayerProfile)
            .values(player_id=player_id)
            .on_conflict_do_nothing(index_elements=["player_id"])
        )
        return PlayerProfileRepository.get(db, player_id)
