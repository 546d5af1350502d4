"""
Per-player serialization and transactional boundaries.

Every mutating event takes the player's lock, then runs in a single
database transaction that is committed once or rolled back entirely.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clicktracker.exceptions import DatabaseException

logger = logging.getLogger("clicktracker.transaction")


class PlayerLockRegistry:
    """Hands out one lock per player id"""

    def __init__(self):
        self._locks: Dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def get_lock(self, player_id: int) -> threading.Lock:
        with self._guard:
            if player_id not in self._locks:
                self._locks[player_id] = threading.Lock()
            return self._locks[player_id]


player_locks = PlayerLockRegistry()


@contextmanager
def transaction(db: Session, operation: str):
    """
    Commit everything done in the block at once.

    Any exception rolls the whole block back. Database errors are
    re-raised as DatabaseException; domain exceptions pass through.
    """
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{operation} failed, rolled back: {e}")
        raise DatabaseException(operation, str(e))
    except Exception:
        db.rollback()
        raise


@contextmanager
def player_transaction(db: Session, player_id: int, operation: str):
    """
    Serialize on the player and run the block in one transaction.

    Objects loaded before the lock was taken may predate another
    request's commit, so the session is expired and every row is
    re-read inside the lock.
    """
    with player_locks.get_lock(player_id):
        db.expire_all()
        with transaction(db, f"{operation} (player {player_id})"):
            yield
