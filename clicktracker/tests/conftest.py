"""
Shared fixtures: an in-memory database per test and small factories.
"""
import os
import tempfile

# Must be set before clicktracker.database / clicktracker.main are imported
os.environ.setdefault("CLICKTRACKER_DATABASE_URL", "sqlite://")
os.environ.setdefault("CLICKTRACKER_LOG_DIR", os.path.join(tempfile.gettempdir(), "clicktracker-tests"))

import pytest
from datetime import date, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clicktracker.database import Base
from clicktracker.models import Goal, ClickRecord, GoalClickRecord, PlayerProfile
from clicktracker.repositories.settings_repository import SettingsRepository


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def default_settings(db_session):
    settings = SettingsRepository.get_or_create(db_session)
    db_session.commit()
    return settings


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


def create_goal(db, player_id=1, name="Shooting", **kwargs):
    """Insert and commit a goal"""
    goal = Goal(player_id=player_id, name=name, **kwargs)
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


def create_click_record(db, player_id, record_date, clicks):
    record = ClickRecord(player_id=player_id, date=record_date, clicks=clicks)
    db.add(record)
    db.commit()
    return record


def create_goal_click_record(db, goal, record_date, clicks):
    record = GoalClickRecord(player_id=goal.player_id, goal_id=goal.id, date=record_date, clicks=clicks)
    db.add(record)
    db.commit()
    return record


def create_profile(db, player_id=1, **kwargs):
    profile = PlayerProfile(player_id=player_id, **kwargs)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile
