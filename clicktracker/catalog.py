"""
Static progression tables.

Career levels, skins, achievements and daily challenge templates.
Career level requirements must stay strictly increasing: the cumulative
clicks lookup scans them in ascending order and stops at the first miss.
"""
from clicktracker.constants import (
    CHALLENGE_CLICK_VOLUME, CHALLENGE_STREAK_MAINTAIN,
    CHALLENGE_MORNING, CHALLENGE_CONSISTENCY
)

CAREER_LEVELS = {
    1: {"name": "Career Level", "title": "Playground Beginner", "clicks_required": 0,
        "description": "Just getting started"},
    2: {"name": "Career Level", "title": "Junior Varsity", "clicks_required": 50,
        "description": "Building the basics"},
    3: {"name": "Career Level", "title": "Varsity Regular", "clicks_required": 100,
        "description": "Showing up consistently"},
    4: {"name": "Career Level", "title": "College Recruit", "clicks_required": 250,
        "description": "Focusing on quality reps"},
    5: {"name": "Career Level", "title": "Division 1 Starter", "clicks_required": 400,
        "description": "Competing at a high level"},
    6: {"name": "Career Level", "title": "Draft Prospect", "clicks_required": 600,
        "description": "Scouts are taking notice"},
    7: {"name": "Career Level", "title": "Professional", "clicks_required": 1000,
        "description": "Doing this for a living"},
    8: {"name": "Career Level", "title": "Starting Lineup", "clicks_required": 1500,
        "description": "First name on the sheet"},
    9: {"name": "Career Level", "title": "All-Star", "clicks_required": 2500,
        "description": "Elite, week after week"},
    10: {"name": "Career Level", "title": "Superstar", "clicks_required": 4000,
         "description": "One of the best around"},
    11: {"name": "Career Level", "title": "MVP", "clicks_required": 6000,
         "description": "Most valuable player of the season"},
    12: {"name": "Career Level", "title": "Hall of Famer", "clicks_required": 10000,
         "description": "Your legacy is secure"},
}

MAX_CAREER_LEVEL = max(CAREER_LEVELS)

SKINS = {
    "rookie": {"name": "Rookie", "description": "Basic practice uniform", "unlock_level": 1, "color": "#6B7280"},
    "jv": {"name": "JV Jersey", "description": "Junior varsity colors", "unlock_level": 2, "color": "#3B82F6"},
    "varsity": {"name": "Varsity Gold", "description": "Championship jersey", "unlock_level": 3, "color": "#F59E0B"},
    "college": {"name": "College Blue", "description": "University team colors", "unlock_level": 4, "color": "#1E40AF"},
    "d1": {"name": "Elite Red", "description": "Division 1 gear", "unlock_level": 5, "color": "#DC2626"},
    "draft": {"name": "Draft Day", "description": "Draft day suit", "unlock_level": 6, "color": "#7C3AED"},
    "pro": {"name": "Pro Home", "description": "Professional home jersey", "unlock_level": 7, "color": "#059669"},
    "starter": {"name": "Starter Special", "description": "Starting lineup jersey", "unlock_level": 8, "color": "#0891B2"},
    "allstar": {"name": "All-Star", "description": "All-Star special edition", "unlock_level": 9, "color": "#EA580C"},
    "superstar": {"name": "Superstar", "description": "Signature edition", "unlock_level": 10, "color": "#9333EA"},
    "mvp": {"name": "MVP Trophy", "description": "Season MVP award", "unlock_level": 11, "color": "#FBBF24"},
    "legend": {"name": "Hall of Fame", "description": "Hall of Fame honor", "unlock_level": 12, "color": "#F87171"},
}

ACHIEVEMENTS = {
    "firstClick": {"name": "First Shot", "description": "Logged your first click", "icon": "🎯"},
    "hundred": {"name": "Century Club", "description": "100 total clicks", "icon": "💯"},
    "thousand": {"name": "Thousand Club", "description": "1,000 total clicks", "icon": "🏅"},
    "tenThousand": {"name": "Elite", "description": "10,000 total clicks", "icon": "👑"},
    "streak3": {"name": "Triple Threat", "description": "3-day streak", "icon": "🔥"},
    "streak7": {"name": "Weekly Warrior", "description": "7-day streak", "icon": "⚡"},
    "streak30": {"name": "Monthly Master", "description": "30-day streak", "icon": "💎"},
    "speedster": {"name": "Speed Demon", "description": "100 clicks in one day", "icon": "💨"},
    "marathon": {"name": "Marathon Runner", "description": "500 clicks in one day", "icon": "🏃"},
    "earlyBird": {"name": "Early Bird", "description": "Clicked in the early morning", "icon": "🐦"},
    "nightOwl": {"name": "Night Owl", "description": "Clicked late at night", "icon": "🦉"},
    "dailyChamp": {"name": "Daily Champion", "description": "Completed 10 daily challenges", "icon": "🏆"},
}


def _click_volume(level: int) -> dict:
    target = max(10, level * 5)
    return {
        "target_value": target,
        "description": f"Log {target} clicks today",
        "reward": "25 XP + progress towards next level",
    }


def _streak_maintain(level: int) -> dict:
    return {
        "target_value": 1,
        "description": "Keep your daily streak alive - don't break the chain!",
        "reward": "Streak bonus + 15 XP",
    }


def _morning_practice(level: int) -> dict:
    return {
        "target_value": 3,
        "description": "Early morning hustle - log 3 clicks before 8 AM",
        "reward": "Early Bird progress + 20 XP",
    }


def _consistency(level: int) -> dict:
    target = max(3, level // 2)
    return {
        "target_value": target,
        "description": f"Show consistency - log at least {target} clicks every 2 hours for 6 hours",
        "reward": "Consistency bonus + 30 XP",
    }


# challenge_type -> template(level) producing target_value/description/reward
CHALLENGE_TEMPLATES = {
    CHALLENGE_CLICK_VOLUME: _click_volume,
    CHALLENGE_STREAK_MAINTAIN: _streak_maintain,
    CHALLENGE_MORNING: _morning_practice,
    CHALLENGE_CONSISTENCY: _consistency,
}
