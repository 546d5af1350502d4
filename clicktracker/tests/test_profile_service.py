"""
Tests for ProfileService.
"""
import pytest

from clicktracker.catalog import SKINS, ACHIEVEMENTS
from clicktracker.exceptions import (
    ProfileNotFoundException, SkinNotFoundException, SkinNotUnlockedException
)
from clicktracker.models import PlayerProfile
from clicktracker.services.profile_service import ProfileService
from clicktracker.tests.conftest import create_profile


class TestProfileView:
    """Tests for get_profile_view"""

    def test_profile_created_on_first_use(self, db_session):
        view = ProfileService(db_session).get_profile_view(1)

        assert view.profile.current_level == 1
        assert view.profile.total_clicks == 0
        assert view.profile.current_skin == "rookie"
        assert view.profile.unlocked_skins == ["rookie"]
        assert view.profile.achievements == []
        assert db_session.query(PlayerProfile).count() == 1

    def test_level_data(self, db_session):
        view = ProfileService(db_session).get_profile_view(1)

        assert view.level_data.title == "Playground Beginner"
        assert view.next_level_data.title == "Junior Varsity"

    def test_no_next_level_at_top(self, db_session):
        create_profile(db_session, current_level=12, total_clicks=10000)

        view = ProfileService(db_session).get_profile_view(1)

        assert view.level_data.level == 12
        assert view.next_level_data is None

    def test_catalogs_with_flags(self, db_session):
        create_profile(db_session, unlocked_skins_json='["rookie", "jv"]', achievements_json='["firstClick"]')

        view = ProfileService(db_session).get_profile_view(1)

        assert len(view.available_skins) == len(SKINS)
        assert [skin.id for skin in view.available_skins if skin.unlocked] == ["rookie", "jv"]
        assert len(view.achievements) == len(ACHIEVEMENTS)
        assert [a.id for a in view.achievements if a.unlocked] == ["firstClick"]


class TestSelectSkin:
    """Tests for select_skin"""

    def test_select_unlocked_skin(self, db_session):
        create_profile(db_session, current_skin="jv", unlocked_skins_json='["rookie", "jv"]')

        profile = ProfileService(db_session).select_skin(1, "rookie")

        assert profile.current_skin == "rookie"

    def test_locked_skin_rejected(self, db_session):
        create_profile(db_session)

        with pytest.raises(SkinNotUnlockedException):
            ProfileService(db_session).select_skin(1, "legend")

        db_session.expire_all()
        assert db_session.query(PlayerProfile).one().current_skin == "rookie"

    def test_missing_profile(self, db_session):
        with pytest.raises(ProfileNotFoundException):
            ProfileService(db_session).select_skin(1, "rookie")

    def test_unknown_skin_rejected(self, db_session):
        with pytest.raises(SkinNotFoundException):
            ProfileService(db_session).select_skin(1, "golden")
