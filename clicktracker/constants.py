"""
Application-wide constants.
Engine defaults, status strings and environment-driven paths.
"""
import os

# === Level / points calculator ===
POINTS_PER_LEVEL = 100  # Goal level points per level

# === Decay engine ===
DECAY_PER_DAY = 50            # Points lost per day of inactivity past the grace window
GRACE_WEEKS = 1               # Weeks without decay after the last activity
WEEKLY_THRESHOLD_RATIO = 0.3  # 30% of weekly average
DAILY_THRESHOLD_RATIO = 0.3   # 30% of daily average
DAYS_PER_WEEK = 7

# Averages use a trailing 30-day window (~4.3 weeks)
AVERAGE_WINDOW_DAYS = 30
WEEKS_PER_AVERAGE_WINDOW = 4.3

# === Goals ===
DEFAULT_WEEKLY_TARGET = 100
DEFAULT_GOAL_CATEGORY = "general"

# === Profile ===
DEFAULT_SKIN = "rookie"

# === Time of day predicates (hours, local time) ===
EARLY_MORNING_START_HOUR = 5
EARLY_MORNING_END_HOUR = 8
LATE_NIGHT_START_HOUR = 22

# === Activity deltas ===
ACTIVITY_INCREMENT = 1
ACTIVITY_DECREMENT = -1

# === Challenge types ===
CHALLENGE_CLICK_VOLUME = "daily_applications"
CHALLENGE_STREAK_MAINTAIN = "streak_maintain"
CHALLENGE_MORNING = "morning_applications"
CHALLENGE_CONSISTENCY = "consistency"

# === Scheduler ===
DEFAULT_DECAY_SWEEP_TIME = "00:05"

# === Paths and environment ===
DEFAULT_DATABASE_URL = "sqlite:///./clicktracker.db"
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/clicktracker"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CLICKTRACKER_CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000"
    ).split(",")
    if origin.strip()
]
