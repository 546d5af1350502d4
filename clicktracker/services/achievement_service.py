"""
Achievement evaluator.

Rules are checked in category order (click count, streak, daily volume,
time of day, challenges). The order of the result carries no meaning.
"""
from typing import Callable, Iterable, List

from clicktracker.catalog import ACHIEVEMENTS
from clicktracker.schemas import AchievementSnapshot

# (achievement key, predicate over the snapshot)
ACHIEVEMENT_RULES: List[tuple[str, Callable[[AchievementSnapshot], bool]]] = [
    # Click count
    ("firstClick", lambda s: s.total_clicks >= 1),
    ("hundred", lambda s: s.total_clicks >= 100),
    ("thousand", lambda s: s.total_clicks >= 1000),
    ("tenThousand", lambda s: s.total_clicks >= 10000),
    # Streak
    ("streak3", lambda s: s.streak_count >= 3),
    ("streak7", lambda s: s.streak_count >= 7),
    ("streak30", lambda s: s.streak_count >= 30),
    # Daily volume
    ("speedster", lambda s: s.today_clicks >= 100),
    ("marathon", lambda s: s.today_clicks >= 500),
    # Time of day
    ("earlyBird", lambda s: s.is_early_morning),
    ("nightOwl", lambda s: s.is_late_night),
    # Challenges
    ("dailyChamp", lambda s: s.daily_challenges_completed >= 10),
]


def evaluate_achievements(
    snapshot: AchievementSnapshot,
    current_achievements: Iterable[str] = ()
) -> List[str]:
    """
    Return achievement keys whose rule holds and that are not unlocked yet.

    Several thresholds can be crossed by one event, so callers run this
    on every event, not only when a single counter moves.
    """
    unlocked = set(current_achievements or ())
    return [
        key for key, rule in ACHIEVEMENT_RULES
        if key not in unlocked and rule(snapshot)
    ]


def get_achievement_catalog(current_achievements: Iterable[str] = ()) -> List[dict]:
    """All achievements with an `unlocked` flag"""
    unlocked = set(current_achievements or ())
    return [
        {"id": key, **achievement, "unlocked": key in unlocked}
        for key, achievement in ACHIEVEMENTS.items()
    ]
