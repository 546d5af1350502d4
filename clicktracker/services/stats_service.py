"""
Click statistics service.
Aggregates the overall per-day counters.
"""
from datetime import date, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session

from clicktracker.constants import DAYS_PER_WEEK
from clicktracker.models import ClickRecord
from clicktracker.repositories.click_repository import ClickRecordRepository
from clicktracker.schemas import (
    TodayClicksResponse, PeriodStatsResponse, AllTimeStatsResponse, DailyClicks
)
from clicktracker.services.date_service import DateService


class StatsService:
    """Service for click statistics"""

    def __init__(self, db: Session):
        self.db = db
        self.click_repo = ClickRecordRepository()
        self.date_service = DateService()

    def get_today(self, player_id: int, today: Optional[date] = None) -> TodayClicksResponse:
        today = today or self.date_service.today()
        record = self.click_repo.get_by_date(self.db, player_id, today)
        return TodayClicksResponse(date=today, clicks=record.clicks if record else 0)

    def get_weekly(self, player_id: int, today: Optional[date] = None) -> PeriodStatsResponse:
        """Current Sunday-Saturday week, averaged over 7 days"""
        today = today or self.date_service.today()
        start, end = self.date_service.get_week_range(today)
        return self._period_stats(player_id, start, end)

    def get_monthly(self, player_id: int, today: Optional[date] = None) -> PeriodStatsResponse:
        """Current calendar month, averaged over the days in the month"""
        today = today or self.date_service.today()
        start, end = self.date_service.get_month_range(today)
        return self._period_stats(player_id, start, end)

    def get_all_time(self, player_id: int) -> AllTimeStatsResponse:
        records = [r for r in self.click_repo.get_all(self.db, player_id) if r.clicks > 0]
        total = sum(r.clicks for r in records)
        days_active = len(records)
        return AllTimeStatsResponse(
            total_clicks=total,
            days_active=days_active,
            best_day=max((r.clicks for r in records), default=0),
            average_clicks=round(total / days_active, 1) if days_active > 0 else 0
        )

    def get_last_7_days(self, player_id: int, today: Optional[date] = None) -> List[DailyClicks]:
        """Zero-filled daily breakdown, oldest first, today last"""
        today = today or self.date_service.today()
        start, end = self.date_service.get_trailing_range(today, DAYS_PER_WEEK)
        clicks_by_date = self._clicks_by_date(
            self.click_repo.get_in_range(self.db, player_id, start, end)
        )

        days = []
        for offset in range(DAYS_PER_WEEK - 1, -1, -1):
            day = today - timedelta(days=offset)
            days.append(DailyClicks(
                date=day,
                clicks=clicks_by_date.get(day, 0),
                day_name=day.strftime("%A"),
                is_today=offset == 0
            ))
        return days

    def _period_stats(self, player_id: int, start: date, end: date) -> PeriodStatsResponse:
        records = self.click_repo.get_in_range(self.db, player_id, start, end)
        total = sum(r.clicks for r in records)
        days_in_period = (end - start).days + 1
        return PeriodStatsResponse(
            start_date=start,
            end_date=end,
            total_clicks=total,
            average_clicks=round(total / days_in_period, 1),
            days_with_clicks=sum(1 for r in records if r.clicks > 0),
            days_in_period=days_in_period
        )

    @staticmethod
    def _clicks_by_date(records: List[ClickRecord]) -> dict:
        return {record.date: record.clicks for record in records}
