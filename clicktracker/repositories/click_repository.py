"""
Click repository - Data access layer for per-day click counters.
Handles the overall (all goals) counter and the per-goal counter.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from clicktracker.models import ClickRecord, GoalClickRecord


class ClickRecordRepository:
    """Repository for overall daily click counters"""

    @staticmethod
    def get_by_date(db: Session, player_id: int, target_date: date) -> Optional[ClickRecord]:
        return db.query(ClickRecord).filter(
            ClickRecord.player_id == player_id,
            ClickRecord.date == target_date
        ).first()

    @staticmethod
    def get_or_create(db: Session, player_id: int, target_date: date) -> ClickRecord:
        """Get the day's counter, inserting a zero row if absent (atomic)"""
        db.execute(
            sqlite_insert(ClickRecord)
            .values(player_id=player_id, date=target_date, clicks=0)
            .on_conflict_do_nothing(index_elements=["player_id", "date"])
        )
        return ClickRecordRepository.get_by_date(db, player_id, target_date)

    @staticmethod
    def get_in_range(
        db: Session,
        player_id: int,
        start_date: date,
        end_date: date
    ) -> List[ClickRecord]:
        """Get counters with start_date <= date <= end_date, oldest first"""
        return db.query(ClickRecord).filter(
            ClickRecord.player_id == player_id,
            ClickRecord.date >= start_date,
            ClickRecord.date <= end_date
        ).order_by(ClickRecord.date).all()

    @staticmethod
    def get_all(db: Session, player_id: int) -> List[ClickRecord]:
        """Get all counters, newest first"""
        return db.query(ClickRecord).filter(
            ClickRecord.player_id == player_id
        ).order_by(ClickRecord.date.desc()).all()


class GoalClickRecordRepository:
    """Repository for per-goal daily click counters"""

    @staticmethod
    def get_by_date(db: Session, goal_id: int, target_date: date) -> Optional[GoalClickRecord]:
        return db.query(GoalClickRecord).filter(
            GoalClickRecord.goal_id == goal_id,
            GoalClickRecord.date == target_date
        ).first()

    @staticmethod
    def get_or_create(
        db: Session,
        player_id: int,
        goal_id: int,
        target_date: date
    ) -> GoalClickRecord:
        """Get the goal's counter for the day, inserting a zero row if absent (atomic)"""
        db.execute(
            sqlite_insert(GoalClickRecord)
            .values(player_id=player_id, goal_id=goal_id, date=target_date, clicks=0)
            .on_conflict_do_nothing(index_elements=["goal_id", "date"])
        )
        return GoalClickRecordRepository.get_by_date(db, goal_id, target_date)

    @staticmethod
    def get_in_range(
        db: Session,
        goal_id: int,
        start_date: date,
        end_date: date
    ) -> List[GoalClickRecord]:
        return db.query(GoalClickRecord).filter(
            GoalClickRecord.goal_id == goal_id,
            GoalClickRecord.date >= start_date,
            GoalClickRecord.date <= end_date
        ).order_by(GoalClickRecord.date).all()
