"""
Goal repository - Data access layer for Goal model.
Writes are flushed, never committed: the calling service owns the transaction.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from clicktracker.models import Goal


class GoalRepository:
    """Repository for Goal data access"""

    @staticmethod
    def get_for_player(db: Session, player_id: int, goal_id: int) -> Optional[Goal]:
        """Get goal by ID only if owned by the player"""
        return db.query(Goal).filter(
            Goal.id == goal_id,
            Goal.player_id == player_id
        ).first()

    @staticmethod
    def get_all_for_player(db: Session, player_id: int) -> List[Goal]:
        """Get player's goals, active first then newest"""
        return db.query(Goal).filter(
            Goal.player_id == player_id
        ).order_by(Goal.is_active.desc(), Goal.created_at.desc(), Goal.id.desc()).all()

    @staticmethod
    def get_player_ids(db: Session) -> List[int]:
        """Distinct owners of at least one goal"""
        rows = db.query(Goal.player_id).distinct().order_by(Goal.player_id).all()
        return [row[0] for row in rows]

    @staticmethod
    def count_active(db: Session, player_id: int) -> int:
        return db.query(Goal).filter(
            Goal.player_id == player_id,
            Goal.is_active == True
        ).count()

    @staticmethod
    def deactivate_all(db: Session, player_id: int) -> None:
        """Mark every goal of the player inactive"""
        db.query(Goal).filter(
            Goal.player_id == player_id
        ).update({Goal.is_active: False}, synchronize_session="fetch")
        db.flush()

    @staticmethod
    def add(db: Session, goal: Goal) -> Goal:
        db.add(goal)
        db.flush()
        return goal

    @staticmethod
    def delete(db: Session, goal: Goal) -> None:
        db.delete(goal)
        db.flush()
