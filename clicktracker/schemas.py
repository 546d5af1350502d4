from pydantic import BaseModel, Field
from datetime import datetime, date
from typing import Optional, List


# Engine results
class DecayResult(BaseModel):
    new_points: int
    days_inactive: int
    points_lost: int


class ThresholdResult(BaseModel):
    met_threshold: bool
    percentage: float


class AchievementSnapshot(BaseModel):
    """Counters the achievement rules are evaluated against"""
    total_clicks: int = Field(default=0, ge=0)
    streak_count: int = Field(default=0, ge=0)
    today_clicks: int = Field(default=0, ge=0)
    is_early_morning: bool = False
    is_late_night: bool = False
    daily_challenges_completed: int = Field(default=0, ge=0)


class ChallengeData(BaseModel):
    challenge_type: str
    target_value: int
    description: str
    reward: str


class LevelData(BaseModel):
    level: int
    name: str
    title: str
    clicks_required: int
    description: str


class ActivityResult(BaseModel):
    success: bool = True
    goal_id: int
    activity_date: date
    new_goal_clicks: int  # Goal clicks for the day after the event

    # Goal progression
    total_clicks: int
    level_points: int
    previous_level: int
    new_level: int
    leveled_up: bool = False
    leveled_down: bool = False

    # Profile progression
    profile_total_clicks: int
    profile_level: int
    profile_leveled_up: bool = False
    level_data: Optional[LevelData] = None
    skin_changed: bool = False
    new_skin: Optional[str] = None
    new_achievements: List[str] = []

    message: Optional[str] = None


# Goals
class GoalBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: str = Field(default="general", max_length=100)


class GoalCreate(GoalBase):
    weekly_target: Optional[int] = Field(None, ge=0)


class GoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    weekly_target: Optional[int] = Field(None, ge=0)


class GoalResponse(GoalBase):
    id: int
    player_id: int
    is_active: bool
    total_clicks: int
    current_level: int
    level_points: int
    weekly_target: int
    last_activity_date: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    # Populated when decay was charged while loading
    days_inactive: int = 0
    points_lost: int = 0
    progress_message: Optional[str] = None

    class Config:
        from_attributes = True


class ActiveGoalRequest(BaseModel):
    goal_id: int


class ActivityRequest(BaseModel):
    activity_date: Optional[date] = None


class DailyClicks(BaseModel):
    date: date
    clicks: int
    day_name: str
    is_today: bool = False


class WeeklyGoalStats(BaseModel):
    clicks: int
    target: int
    progress_percentage: float
    met_target: bool


class GoalStatsResponse(BaseModel):
    goal: GoalResponse
    weekly_stats: WeeklyGoalStats
    daily_data: List[DailyClicks]


# Click statistics
class TodayClicksResponse(BaseModel):
    date: date
    clicks: int


class PeriodStatsResponse(BaseModel):
    start_date: date
    end_date: date
    total_clicks: int
    average_clicks: float
    days_with_clicks: int
    days_in_period: int


class AllTimeStatsResponse(BaseModel):
    total_clicks: int
    days_active: int
    best_day: int
    average_clicks: float


# Profile
class SkinSelect(BaseModel):
    skin_id: str = Field(..., min_length=1)


class ProfileResponse(BaseModel):
    player_id: int
    current_level: int
    highest_level: int
    total_clicks: int
    current_skin: str
    unlocked_skins: List[str]
    achievements: List[str]
    streak_count: int
    last_challenge_date: Optional[date] = None
    daily_challenge_completed: bool
    challenges_completed: int

    class Config:
        from_attributes = True


class SkinView(BaseModel):
    id: str
    name: str
    description: str
    unlock_level: int
    color: str
    unlocked: bool


class AchievementView(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    unlocked: bool


class ProfileViewResponse(BaseModel):
    profile: ProfileResponse
    level_data: Optional[LevelData] = None
    next_level_data: Optional[LevelData] = None
    available_skins: List[SkinView]
    achievements: List[AchievementView]


# Daily challenges
class DailyChallengeResponse(ChallengeData):
    id: int
    player_id: int
    date: date
    created_at: datetime

    class Config:
        from_attributes = True


class ChallengeCompletionResponse(BaseModel):
    success: bool = True
    streak_count: int
    challenges_completed: int
    new_achievements: List[str] = []
    reward: str


# Settings
class SettingsBase(BaseModel):
    points_per_level: int = Field(default=100, ge=1, le=10000)
    decay_enabled: bool = True
    decay_per_day: int = Field(default=50, ge=0, le=10000)
    grace_weeks: int = Field(default=1, ge=0, le=52)
    weekly_threshold_ratio: float = Field(default=0.3, ge=0.0, le=1.0)
    daily_threshold_ratio: float = Field(default=0.3, ge=0.0, le=1.0)
    decay_sweep_time: str = Field(default="00:05", pattern=r"^\d{2}:\d{2}$")
    early_morning_start_hour: int = Field(default=5, ge=0, le=23)
    early_morning_end_hour: int = Field(default=8, ge=0, le=24)
    late_night_start_hour: int = Field(default=22, ge=0, le=24)


class SettingsUpdate(BaseModel):
    points_per_level: Optional[int] = Field(None, ge=1, le=10000)
    decay_enabled: Optional[bool] = None
    decay_per_day: Optional[int] = Field(None, ge=0, le=10000)
    grace_weeks: Optional[int] = Field(None, ge=0, le=52)
    weekly_threshold_ratio: Optional[float] = Field(None, ge=0.0, le=1.0)
    daily_threshold_ratio: Optional[float] = Field(None, ge=0.0, le=1.0)
    decay_sweep_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    early_morning_start_hour: Optional[int] = Field(None, ge=0, le=23)
    early_morning_end_hour: Optional[int] = Field(None, ge=0, le=24)
    late_night_start_hour: Optional[int] = Field(None, ge=0, le=24)


class SettingsResponse(SettingsBase):
    id: int
    last_decay_sweep_date: Optional[date] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
