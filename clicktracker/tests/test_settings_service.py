"""
Tests for settings storage and updates.
"""
import pytest

from clicktracker.constants import DECAY_PER_DAY
from clicktracker.exceptions import ValidationException
from clicktracker.models import Settings
from clicktracker.repositories.settings_repository import SettingsRepository
from clicktracker.schemas import SettingsUpdate
from clicktracker.services.settings_service import SettingsService


class TestSettingsRepository:

    def test_created_with_defaults(self, db_session):
        settings = SettingsRepository.get_or_create(db_session)

        assert settings.decay_enabled is True
        assert settings.decay_per_day == DECAY_PER_DAY

    def test_single_row(self, db_session):
        first = SettingsRepository.get_or_create(db_session)
        second = SettingsRepository.get_or_create(db_session)

        assert first is second
        assert db_session.query(Settings).count() == 1

    def test_creation_belongs_to_callers_transaction(self, db_session):
        """The repository never commits; a rollback discards the new row"""
        SettingsRepository.get_or_create(db_session)
        db_session.rollback()

        assert db_session.query(Settings).count() == 0


class TestSettingsService:

    def test_get_settings_persists_row(self, db_session, session_factory):
        SettingsService(db_session).get_settings()

        other = session_factory()
        try:
            assert other.query(Settings).count() == 1
        finally:
            other.close()

    def test_update_settings(self, db_session, default_settings):
        settings = SettingsService(db_session).update_settings(
            SettingsUpdate(decay_per_day=25, decay_sweep_time="03:30")
        )

        assert settings.decay_per_day == 25
        assert settings.decay_sweep_time == "03:30"
        db_session.expire_all()
        assert db_session.query(Settings).one().decay_per_day == 25

    def test_invalid_sweep_time(self, db_session, default_settings):
        with pytest.raises(ValidationException):
            SettingsService(db_session).update_settings(SettingsUpdate(decay_sweep_time="25:00"))

    def test_empty_morning_window_rolls_back(self, db_session, default_settings):
        with pytest.raises(ValidationException):
            SettingsService(db_session).update_settings(
                SettingsUpdate(decay_per_day=10, early_morning_start_hour=9, early_morning_end_hour=9)
            )

        db_session.expire_all()
        assert db_session.query(Settings).one().decay_per_day == DECAY_PER_DAY
