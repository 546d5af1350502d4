import json
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Float, Date, ForeignKey,
    UniqueConstraint, Index, text
)
from sqlalchemy.orm import relationship

from clicktracker.database import Base
from clicktracker.constants import (
    POINTS_PER_LEVEL, DECAY_PER_DAY, GRACE_WEEKS,
    WEEKLY_THRESHOLD_RATIO, DAILY_THRESHOLD_RATIO,
    EARLY_MORNING_START_HOUR, EARLY_MORNING_END_HOUR, LATE_NIGHT_START_HOUR,
    DEFAULT_WEEKLY_TARGET, DEFAULT_GOAL_CATEGORY, DEFAULT_SKIN,
    DEFAULT_DECAY_SWEEP_TIME
)


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    category = Column(String(100), default=DEFAULT_GOAL_CATEGORY)
    is_active = Column(Boolean, default=False, nullable=False)

    # Progression
    total_clicks = Column(Integer, default=0, nullable=False)
    current_level = Column(Integer, default=1, nullable=False)  # Cache of level_from_points(level_points)
    level_points = Column(Integer, default=0, nullable=False)
    weekly_target = Column(Integer, default=DEFAULT_WEEKLY_TARGET)

    # Decay bookkeeping
    last_activity_date = Column(Date, nullable=True)
    decay_days_applied = Column(Integer, default=0, nullable=False)  # Inactive days already charged

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    click_records = relationship(
        "GoalClickRecord",
        back_populates="goal",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        # At most one active goal per player
        Index(
            "uq_goals_one_active_per_player",
            "player_id",
            unique=True,
            sqlite_where=text("is_active = 1")
        ),
    )


class ClickRecord(Base):
    """Overall clicks of a player for one calendar day (all goals)"""
    __tablename__ = "click_records"

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    clicks = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    __table_args__ = (
        UniqueConstraint("player_id", "date", name="uq_click_records_player_date"),
    )


class GoalClickRecord(Base):
    """Clicks of one goal for one calendar day"""
    __tablename__ = "goal_click_records"

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(Integer, nullable=False, index=True)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    clicks = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    goal = relationship("Goal", back_populates="click_records")

    __table_args__ = (
        UniqueConstraint("goal_id", "date", name="uq_goal_click_records_goal_date"),
    )


class PlayerProfile(Base):
    __tablename__ = "player_profiles"

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(Integer, nullable=False, unique=True, index=True)

    current_level = Column(Integer, default=1, nullable=False)
    # Highest career level ever reached; unlocks and level-up events fire only above it
    highest_level = Column(Integer, default=1, nullable=False)
    total_clicks = Column(Integer, default=0, nullable=False)
    current_skin = Column(String, default=DEFAULT_SKIN, nullable=False)
    unlocked_skins_json = Column("unlocked_skins", String, default=json.dumps([DEFAULT_SKIN]))
    achievements_json = Column("achievements", String, default="[]")

    # Daily challenge tracking
    streak_count = Column(Integer, default=0, nullable=False)
    last_challenge_date = Column(Date, nullable=True)
    daily_challenge_completed = Column(Boolean, default=False, nullable=False)
    challenges_completed = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def unlocked_skins(self) -> list:
        if not self.unlocked_skins_json:
            return [DEFAULT_SKIN]
        return json.loads(self.unlocked_skins_json)

    @unlocked_skins.setter
    def unlocked_skins(self, skins: list) -> None:
        self.unlocked_skins_json = json.dumps(list(skins))

    @property
    def achievements(self) -> list:
        if not self.achievements_json:
            return []
        return json.loads(self.achievements_json)

    @achievements.setter
    def achievements(self, keys: list) -> None:
        # Set semantics: drop duplicates, keep first occurrence
        self.achievements_json = json.dumps(list(dict.fromkeys(keys)))


class DailyChallenge(Base):
    __tablename__ = "daily_challenges"

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    challenge_type = Column(String, nullable=False)
    target_value = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    reward = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    __table_args__ = (
        UniqueConstraint("player_id", "date", name="uq_daily_challenges_player_date"),
    )


class Settings(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)

    # Goal levels
    points_per_level = Column(Integer, default=POINTS_PER_LEVEL)

    # Decay
    decay_enabled = Column(Boolean, default=True)
    decay_per_day = Column(Integer, default=DECAY_PER_DAY)
    grace_weeks = Column(Integer, default=GRACE_WEEKS)
    weekly_threshold_ratio = Column(Float, default=WEEKLY_THRESHOLD_RATIO)
    daily_threshold_ratio = Column(Float, default=DAILY_THRESHOLD_RATIO)
    decay_sweep_time = Column(String, default=DEFAULT_DECAY_SWEEP_TIME)  # HH:MM

    # Time-of-day achievements
    early_morning_start_hour = Column(Integer, default=EARLY_MORNING_START_HOUR)
    early_morning_end_hour = Column(Integer, default=EARLY_MORNING_END_HOUR)
    late_night_start_hour = Column(Integer, default=LATE_NIGHT_START_HOUR)

    last_decay_sweep_date = Column(Date, nullable=True)

    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
