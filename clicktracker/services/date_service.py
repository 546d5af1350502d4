"""
Date calculation service.
Handles calendar ranges and time-of-day predicates used by achievements.
"""
from datetime import datetime, timedelta, date
from typing import Optional

from clicktracker.models import Settings
from clicktracker.constants import (
    EARLY_MORNING_START_HOUR, EARLY_MORNING_END_HOUR, LATE_NIGHT_START_HOUR
)


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def now() -> datetime:
        """Current local time (single clock source, patched in tests)"""
        return datetime.now()

    @staticmethod
    def today() -> date:
        return DateService.now().date()

    @staticmethod
    def is_early_morning(moment: datetime, settings: Optional[Settings] = None) -> bool:
        """
        Check if moment falls in the early-morning window.

        Default window is 05:00 <= t < 08:00.
        """
        start = EARLY_MORNING_START_HOUR
        end = EARLY_MORNING_END_HOUR
        if settings is not None:
            start = settings.early_morning_start_hour
            end = settings.early_morning_end_hour
        return start <= moment.hour < end

    @staticmethod
    def is_late_night(moment: datetime, settings: Optional[Settings] = None) -> bool:
        """
        Check if moment falls in the late-night window.

        Late night runs from late_night_start_hour until the early-morning
        window opens (default t >= 22:00 or t < 05:00).
        """
        start = LATE_NIGHT_START_HOUR
        morning_start = EARLY_MORNING_START_HOUR
        if settings is not None:
            start = settings.late_night_start_hour
            morning_start = settings.early_morning_start_hour
        return moment.hour >= start or moment.hour < morning_start

    @staticmethod
    def get_week_range(target_date: date) -> tuple[date, date]:
        """
        Get the calendar week (Sunday to Saturday) containing target_date.

        Returns:
            Tuple of (start_of_week, end_of_week), both inclusive
        """
        # weekday(): Monday=0 ... Sunday=6
        days_since_sunday = (target_date.weekday() + 1) % 7
        start = target_date - timedelta(days=days_since_sunday)
        return start, start + timedelta(days=6)

    @staticmethod
    def get_month_range(target_date: date) -> tuple[date, date]:
        """Get first and last day of target_date's month"""
        start = target_date.replace(day=1)
        if start.month == 12:
            next_month = start.replace(year=start.year + 1, month=1)
        else:
            next_month = start.replace(month=start.month + 1)
        return start, next_month - timedelta(days=1)

    @staticmethod
    def get_trailing_range(target_date: date, days: int) -> tuple[date, date]:
        """Get the `days`-day window ending on target_date (inclusive)"""
        return target_date - timedelta(days=days - 1), target_date

    @staticmethod
    def parse_time(time_str: str) -> tuple[int, int]:
        """
        Parse time string into hour and minute.

        Args:
            time_str: Time string in "HH:MM" format

        Returns:
            Tuple of (hour, minute)

        Raises:
            ValueError: If time string is invalid
        """
        parts = time_str.split(":")
        hour = int(parts[0])
        minute = int(parts[1])
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError(f"Time out of range: {time_str}")
        return hour, minute
