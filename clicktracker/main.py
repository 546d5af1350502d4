from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
import os
from pathlib import Path

from clicktracker.database import engine, get_db, Base
from clicktracker import models  # Import all models to register them with Base
from clicktracker.schemas import (
    ActivityRequest, ActivityResult, ActiveGoalRequest,
    GoalCreate, GoalUpdate, GoalResponse, GoalStatsResponse,
    SkinSelect, ProfileResponse, ProfileViewResponse,
    DailyChallengeResponse, ChallengeCompletionResponse,
    TodayClicksResponse, PeriodStatsResponse, AllTimeStatsResponse, DailyClicks,
    SettingsUpdate, SettingsResponse
)
from clicktracker.constants import (
    ACTIVITY_INCREMENT, ACTIVITY_DECREMENT,
    DEFAULT_LOG_DIRECTORY_PROD, DEFAULT_LOG_DIRECTORY_DEV, CORS_ALLOWED_ORIGINS
)
from clicktracker.exceptions import (
    GoalNotFoundException, ProfileNotFoundException, ChallengeNotFoundException,
    SkinNotFoundException, SkinNotUnlockedException,
    ChallengeAlreadyCompletedException, ValidationException, DatabaseException
)
from clicktracker.services.activity_service import ActivityService
from clicktracker.services.challenge_service import ChallengeService
from clicktracker.services.goal_service import GoalService
from clicktracker.services.profile_service import ProfileService
from clicktracker.services.scheduler_service import start_scheduler, stop_scheduler
from clicktracker.services.settings_service import SettingsService
from clicktracker.services.stats_service import StatsService

LOG_DIR = os.getenv("CLICKTRACKER_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("CLICKTRACKER_LOG_FILE", "app.log")

try:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE
except PermissionError:
    # Fallback to local directory if no permissions for /var/log
    LOG_DIR = DEFAULT_LOG_DIRECTORY_DEV
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_path),
        logging.StreamHandler()  # Also log to console
    ]
)

logger = logging.getLogger("clicktracker")

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Click Tracker API",
    description="Goal clicks with levels, decay, achievements and daily challenges",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Click Tracker API started. Logging to: {log_path}")
    start_scheduler()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Click Tracker API")
    stop_scheduler()


# Domain errors -> HTTP
@app.exception_handler(GoalNotFoundException)
@app.exception_handler(ProfileNotFoundException)
@app.exception_handler(ChallengeNotFoundException)
@app.exception_handler(SkinNotFoundException)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(SkinNotUnlockedException)
@app.exception_handler(ChallengeAlreadyCompletedException)
@app.exception_handler(ValidationException)
async def bad_request_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def _server_error(action: str, exc: DatabaseException) -> HTTPException:
    logger.error(f"Failed to {action}: {exc}")
    return HTTPException(status_code=500, detail=f"Failed to {action}")


@app.get("/")
def root():
    return {"message": "Click Tracker API", "status": "active"}


# ===== ACTIVITY ENDPOINTS =====

@app.post("/api/players/{player_id}/goals/{goal_id}/click", response_model=ActivityResult)
def increment_goal(
    player_id: int,
    goal_id: int,
    activity: Optional[ActivityRequest] = None,
    db: Session = Depends(get_db)
):
    """Record one click on a goal"""
    try:
        return ActivityService(db).record_goal_activity(
            player_id, goal_id, ACTIVITY_INCREMENT,
            activity_date=activity.activity_date if activity else None
        )
    except DatabaseException as e:
        raise _server_error("record goal click", e)


@app.post("/api/players/{player_id}/goals/{goal_id}/unclick", response_model=ActivityResult)
def decrement_goal(
    player_id: int,
    goal_id: int,
    activity: Optional[ActivityRequest] = None,
    db: Session = Depends(get_db)
):
    """Undo one click on a goal (no-op when the day has none)"""
    try:
        return ActivityService(db).record_goal_activity(
            player_id, goal_id, ACTIVITY_DECREMENT,
            activity_date=activity.activity_date if activity else None
        )
    except DatabaseException as e:
        raise _server_error("decrement goal clicks", e)


@app.post("/api/players/{player_id}/active-goal", response_model=GoalResponse)
def switch_active_goal(player_id: int, request: ActiveGoalRequest, db: Session = Depends(get_db)):
    """Switch the player's active goal"""
    try:
        return ActivityService(db).set_active_goal(player_id, request.goal_id)
    except DatabaseException as e:
        raise _server_error("switch goal", e)


# ===== GOAL ENDPOINTS =====

@app.get("/api/players/{player_id}/goals", response_model=List[GoalResponse])
def get_goals(player_id: int, db: Session = Depends(get_db)):
    """Get player's goals with decay applied"""
    try:
        return GoalService(db).get_goals(player_id)
    except DatabaseException as e:
        raise _server_error("get player goals", e)


@app.post("/api/players/{player_id}/goals", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(player_id: int, goal: GoalCreate, db: Session = Depends(get_db)):
    """Create a new goal"""
    try:
        return GoalService(db).create_goal(player_id, goal)
    except DatabaseException as e:
        raise _server_error("create goal", e)


@app.get("/api/players/{player_id}/goals/{goal_id}", response_model=GoalResponse)
def get_goal(player_id: int, goal_id: int, db: Session = Depends(get_db)):
    return GoalService(db).get_goal(player_id, goal_id)


@app.patch("/api/players/{player_id}/goals/{goal_id}", response_model=GoalResponse)
def update_goal(player_id: int, goal_id: int, goal_update: GoalUpdate, db: Session = Depends(get_db)):
    """Update a goal"""
    try:
        return GoalService(db).update_goal(player_id, goal_id, goal_update)
    except DatabaseException as e:
        raise _server_error("update goal", e)


@app.delete("/api/players/{player_id}/goals/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(player_id: int, goal_id: int, db: Session = Depends(get_db)):
    """Delete a goal"""
    try:
        GoalService(db).delete_goal(player_id, goal_id)
    except DatabaseException as e:
        raise _server_error("delete goal", e)


@app.get("/api/players/{player_id}/goals/{goal_id}/stats", response_model=GoalStatsResponse)
def get_goal_stats(player_id: int, goal_id: int, db: Session = Depends(get_db)):
    """Last 7 days of a goal against its weekly target"""
    return GoalService(db).get_goal_stats(player_id, goal_id)


# ===== PROFILE ENDPOINTS =====

@app.get("/api/players/{player_id}/profile", response_model=ProfileViewResponse)
def get_profile(player_id: int, db: Session = Depends(get_db)):
    """Get player profile and game data"""
    try:
        return ProfileService(db).get_profile_view(player_id)
    except DatabaseException as e:
        raise _server_error("get player profile", e)


@app.post("/api/players/{player_id}/skin", response_model=ProfileResponse)
def select_skin(player_id: int, request: SkinSelect, db: Session = Depends(get_db)):
    """Equip an unlocked skin"""
    try:
        return ProfileService(db).select_skin(player_id, request.skin_id)
    except DatabaseException as e:
        raise _server_error("update skin", e)


# ===== CHALLENGE ENDPOINTS =====

@app.get("/api/players/{player_id}/challenge/daily", response_model=DailyChallengeResponse)
def get_daily_challenge(player_id: int, db: Session = Depends(get_db)):
    """Get today's challenge, generating it on first request"""
    try:
        return ChallengeService(db).get_or_create_daily_challenge(player_id)
    except DatabaseException as e:
        raise _server_error("get daily challenge", e)


@app.post("/api/players/{player_id}/challenge/complete", response_model=ChallengeCompletionResponse)
def complete_daily_challenge(player_id: int, db: Session = Depends(get_db)):
    try:
        return ChallengeService(db).complete_daily_challenge(player_id)
    except DatabaseException as e:
        raise _server_error("complete challenge", e)


# ===== CLICK STATISTICS ENDPOINTS =====

@app.get("/api/players/{player_id}/clicks/today", response_model=TodayClicksResponse)
def get_today_clicks(player_id: int, db: Session = Depends(get_db)):
    return StatsService(db).get_today(player_id)


@app.get("/api/players/{player_id}/clicks/weekly", response_model=PeriodStatsResponse)
def get_weekly_clicks(player_id: int, db: Session = Depends(get_db)):
    return StatsService(db).get_weekly(player_id)


@app.get("/api/players/{player_id}/clicks/monthly", response_model=PeriodStatsResponse)
def get_monthly_clicks(player_id: int, db: Session = Depends(get_db)):
    return StatsService(db).get_monthly(player_id)


@app.get("/api/players/{player_id}/clicks/all-time", response_model=AllTimeStatsResponse)
def get_all_time_clicks(player_id: int, db: Session = Depends(get_db)):
    return StatsService(db).get_all_time(player_id)


@app.get("/api/players/{player_id}/clicks/last-7-days", response_model=List[DailyClicks])
def get_last_7_days(player_id: int, db: Session = Depends(get_db)):
    return StatsService(db).get_last_7_days(player_id)


# ===== SETTINGS ENDPOINTS =====

@app.get("/api/settings", response_model=SettingsResponse)
def get_settings_endpoint(db: Session = Depends(get_db)):
    return SettingsService(db).get_settings()


@app.put("/api/settings", response_model=SettingsResponse)
def update_settings_endpoint(settings_update: SettingsUpdate, db: Session = Depends(get_db)):
    """Update settings"""
    return SettingsService(db).update_settings(settings_update)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("clicktracker.main:app", host="0.0.0.0", port=8000, reload=False)
