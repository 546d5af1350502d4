"""
Level / points calculator.

Two independent progressions live here:
- goal levels, a flat POINTS_PER_LEVEL per level with no upper bound
- career (profile) levels, looked up in CAREER_LEVELS by cumulative clicks
  and saturating at the last table entry

All functions are pure. Negative inputs are a caller error and are not
checked.
"""
from typing import List, Optional

from clicktracker.catalog import CAREER_LEVELS, SKINS, MAX_CAREER_LEVEL
from clicktracker.constants import POINTS_PER_LEVEL
from clicktracker.schemas import LevelData


def level_from_points(points: int, points_per_level: int = POINTS_PER_LEVEL) -> int:
    """
    Convert goal level points to a level.

    level = floor(points / points_per_level) + 1

    Examples:
        0 -> 1, 99 -> 1, 100 -> 2, 250 -> 3
    """
    return points // points_per_level + 1


def points_from_level(level: int, points_per_level: int = POINTS_PER_LEVEL) -> int:
    """Points at which `level` starts: (level - 1) * points_per_level"""
    return (level - 1) * points_per_level


def points_to_next_level(points: int, points_per_level: int = POINTS_PER_LEVEL) -> int:
    """Points still missing to reach the next goal level"""
    next_level = level_from_points(points, points_per_level) + 1
    return points_from_level(next_level, points_per_level) - points


def level_from_cumulative_clicks(total_clicks: int) -> int:
    """
    Career level for a cumulative click count.

    Scans levels in ascending order and stops at the first level whose
    requirement is not met.
    """
    level = 1
    for level_num in sorted(CAREER_LEVELS):
        if total_clicks >= CAREER_LEVELS[level_num]["clicks_required"]:
            level = level_num
        else:
            break
    return level


def get_level_data(level: int) -> Optional[LevelData]:
    """Career table entry for level, None past the last level"""
    data = CAREER_LEVELS.get(level)
    if data is None:
        return None
    return LevelData(level=level, **data)


def get_unlocked_skins(level: int) -> List[str]:
    """Skin ids with unlock_level <= level, in catalog order"""
    return [
        skin_id for skin_id, skin in SKINS.items()
        if skin["unlock_level"] <= level
    ]


def get_skin_for_level(level: int) -> Optional[str]:
    """First skin unlocked exactly at level"""
    for skin_id, skin in SKINS.items():
        if skin["unlock_level"] == level:
            return skin_id
    return None


def is_max_career_level(level: int) -> bool:
    return level >= MAX_CAREER_LEVEL
