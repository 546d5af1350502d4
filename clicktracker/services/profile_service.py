"""
Player profile service.
Handles the career profile view and skin selection.
"""
import logging
from sqlalchemy.orm import Session

from clicktracker.catalog import SKINS
from clicktracker.exceptions import (
    ProfileNotFoundException, SkinNotFoundException, SkinNotUnlockedException
)
from clicktracker.models import PlayerProfile
from clicktracker.repositories.profile_repository import PlayerProfileRepository
from clicktracker.schemas import ProfileResponse, ProfileViewResponse, SkinView, AchievementView
from clicktracker.services.achievement_service import get_achievement_catalog
from clicktracker.services.level_service import get_level_data
from clicktracker.services.transaction import player_transaction

logger = logging.getLogger("clicktracker.profile")


class ProfileService:
    """Service for player profiles"""

    def __init__(self, db: Session):
        self.db = db
        self.profile_repo = PlayerProfileRepository()

    def get_or_create_profile(self, player_id: int) -> PlayerProfile:
        """Get the profile, creating a level 1 rookie profile on first use"""
        profile = self.profile_repo.get(self.db, player_id)
        if profile:
            return profile

        with player_transaction(self.db, player_id, "profile creation"):
            profile = self.profile_repo.get_or_create(self.db, player_id)

        logger.info(f"Created profile for player {player_id}")
        return profile

    def get_profile_view(self, player_id: int) -> ProfileViewResponse:
        """Profile with current/next level data, skin catalog and achievements"""
        profile = self.get_or_create_profile(player_id)
        unlocked_skins = set(profile.unlocked_skins)

        return ProfileViewResponse(
            profile=self._to_response(profile),
            level_data=get_level_data(profile.current_level),
            next_level_data=get_level_data(profile.current_level + 1),
            available_skins=[
                SkinView(id=skin_id, unlocked=skin_id in unlocked_skins, **skin)
                for skin_id, skin in SKINS.items()
            ],
            achievements=[
                AchievementView(**achievement)
                for achievement in get_achievement_catalog(profile.achievements)
            ]
        )

    def select_skin(self, player_id: int, skin_id: str) -> ProfileResponse:
        """
        Equip an unlocked skin.

        Raises:
            SkinNotFoundException: Unknown skin id
            ProfileNotFoundException: Player has no profile yet
            SkinNotUnlockedException: Skin not unlocked for this player
        """
        if skin_id not in SKINS:
            raise SkinNotFoundException(skin_id)

        with player_transaction(self.db, player_id, "skin selection"):
            profile = self.profile_repo.get(self.db, player_id)
            if not profile:
                raise ProfileNotFoundException(player_id)
            if skin_id not in profile.unlocked_skins:
                raise SkinNotUnlockedException(skin_id)
            profile.current_skin = skin_id
            self.db.flush()

        logger.info(f"Player {player_id} equipped skin '{skin_id}'")
        return self._to_response(profile)

    @staticmethod
    def _to_response(profile: PlayerProfile) -> ProfileResponse:
        return ProfileResponse(
            player_id=profile.player_id,
            current_level=profile.current_level,
            highest_level=profile.highest_level,
            total_clicks=profile.total_clicks,
            current_skin=profile.current_skin,
            unlocked_skins=profile.unlocked_skins,
            achievements=profile.achievements,
            streak_count=profile.streak_count,
            last_challenge_date=profile.last_challenge_date,
            daily_challenge_completed=profile.daily_challenge_completed,
            challenges_completed=profile.challenges_completed
        )
