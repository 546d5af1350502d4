"""
Settings service.
Runtime tunables for levels, decay and time-of-day windows.
"""
import logging
from sqlalchemy.orm import Session

from clicktracker.exceptions import ValidationException
from clicktracker.models import Settings
from clicktracker.repositories.settings_repository import SettingsRepository
from clicktracker.schemas import SettingsUpdate
from clicktracker.services.date_service import DateService
from clicktracker.services.transaction import transaction

logger = logging.getLogger("clicktracker.settings")


class SettingsService:
    """Service for reading and updating settings"""

    def __init__(self, db: Session):
        self.db = db
        self.settings_repo = SettingsRepository()

    def get_settings(self) -> Settings:
        """Current settings; the row is created with defaults on first read"""
        with transaction(self.db, "settings read"):
            settings = self.settings_repo.get_or_create(self.db)
        return settings

    def update_settings(self, settings_update: SettingsUpdate) -> Settings:
        """
        Apply the fields that were sent.

        Raises:
            ValidationException: Sweep time out of range or an empty
                early-morning window
        """
        update_data = settings_update.model_dump(exclude_unset=True)

        if update_data.get("decay_sweep_time") is not None:
            try:
                DateService.parse_time(update_data["decay_sweep_time"])
            except ValueError as e:
                raise ValidationException("decay_sweep_time", str(e))

        with transaction(self.db, "settings update"):
            settings = self.settings_repo.get_or_create(self.db)

            start = update_data.get("early_morning_start_hour", settings.early_morning_start_hour)
            end = update_data.get("early_morning_end_hour", settings.early_morning_end_hour)
            if start is not None and end is not None and start >= end:
                raise ValidationException("early_morning_end_hour", "must be after early_morning_start_hour")

            for key, value in update_data.items():
                if value is not None:
                    setattr(settings, key, value)
            self.db.flush()

        self.db.refresh(settings)
        logger.info(f"Settings updated: {', '.join(sorted(update_data))}")
        return settings
