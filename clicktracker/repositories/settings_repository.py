"""
Settings repository - the single row of runtime tunables.
The row is created on first access; the caller commits.
"""
from sqlalchemy.orm import Session
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from clicktracker.models import Settings

SETTINGS_ROW_ID = 1


class SettingsRepository:
    """Repository for Settings data access"""

    @staticmethod
    def get_or_create(db: Session) -> Settings:
        """
        Get the settings row, inserting one with defaults if missing.

        The insert is flushed with the caller's transaction, never committed.
        """
        settings = db.query(Settings).first()
        if settings:
            return settings

        db.execute(
            sqlite_insert(Settings)
            .values(id=SETTINGS_ROW_ID)
            .on_conflict_do_nothing(index_elements=["id"])
        )
        return db.query(Settings).first()
