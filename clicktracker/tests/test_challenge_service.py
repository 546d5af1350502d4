"""
Tests for daily challenges.

Tests cover:
1. Template scaling by level
2. One stored challenge per player and date
3. Completion streaks and the challenge counter
"""
import random
import pytest
from datetime import date, datetime

from clicktracker.catalog import CHALLENGE_TEMPLATES
from clicktracker.constants import (
    CHALLENGE_CLICK_VOLUME, CHALLENGE_STREAK_MAINTAIN,
    CHALLENGE_MORNING, CHALLENGE_CONSISTENCY
)
from clicktracker.exceptions import ChallengeAlreadyCompletedException, ChallengeNotFoundException
from clicktracker.models import DailyChallenge
from clicktracker.services.challenge_service import ChallengeService, generate_daily_challenge
from clicktracker.tests.conftest import create_profile


class FixedChoice:
    """Random stand-in that always picks the given challenge type"""

    def __init__(self, challenge_type):
        self.challenge_type = challenge_type

    def choice(self, options):
        assert self.challenge_type in options
        return self.challenge_type


class TestGenerateDailyChallenge:
    """Tests for generate_daily_challenge"""

    @pytest.mark.parametrize("level,target", [(1, 10), (2, 10), (3, 15), (10, 50)])
    def test_click_volume_scales_with_level(self, level, target):
        challenge = generate_daily_challenge(date(2025, 1, 15), level, FixedChoice(CHALLENGE_CLICK_VOLUME))

        assert challenge.target_value == target
        assert str(target) in challenge.description

    @pytest.mark.parametrize("level,target", [(1, 3), (6, 3), (8, 4), (12, 6)])
    def test_consistency_scales_with_level(self, level, target):
        challenge = generate_daily_challenge(date(2025, 1, 15), level, FixedChoice(CHALLENGE_CONSISTENCY))

        assert challenge.target_value == target

    def test_fixed_targets(self):
        streak = generate_daily_challenge(date(2025, 1, 15), 9, FixedChoice(CHALLENGE_STREAK_MAINTAIN))
        morning = generate_daily_challenge(date(2025, 1, 15), 9, FixedChoice(CHALLENGE_MORNING))

        assert streak.target_value == 1
        assert morning.target_value == 3

    def test_random_type_is_a_template(self):
        challenge = generate_daily_challenge(date(2025, 1, 15), 1, random.Random(7))

        assert challenge.challenge_type in CHALLENGE_TEMPLATES
        assert challenge.reward


class TestStoredChallenge:
    """Tests for get_or_create_daily_challenge"""

    def test_same_date_returns_same_row(self, db_session):
        service = ChallengeService(db_session, rng=random.Random(1))

        first = service.get_or_create_daily_challenge(1, date(2025, 1, 15))
        second = service.get_or_create_daily_challenge(1, date(2025, 1, 15))

        assert first.id == second.id
        assert db_session.query(DailyChallenge).count() == 1

    def test_dates_and_players_are_separate(self, db_session):
        service = ChallengeService(db_session, rng=random.Random(1))

        service.get_or_create_daily_challenge(1, date(2025, 1, 15))
        service.get_or_create_daily_challenge(1, date(2025, 1, 16))
        service.get_or_create_daily_challenge(2, date(2025, 1, 15))

        assert db_session.query(DailyChallenge).count() == 3

    def test_uses_profile_level(self, db_session):
        create_profile(db_session, current_level=10)
        service = ChallengeService(db_session, rng=FixedChoice(CHALLENGE_CLICK_VOLUME))

        challenge = service.get_or_create_daily_challenge(1, date(2025, 1, 15))

        assert challenge.target_value == 50

    def test_get_missing_challenge_raises(self, db_session):
        with pytest.raises(ChallengeNotFoundException):
            ChallengeService(db_session).get_daily_challenge(1, date(2025, 1, 15))


class TestCompleteChallenge:
    """Tests for complete_daily_challenge"""

    def test_first_completion_starts_streak(self, db_session):
        result = ChallengeService(db_session).complete_daily_challenge(1, datetime(2025, 1, 15, 12, 0))

        assert result.streak_count == 1
        assert result.challenges_completed == 1
        assert result.success is True

    def test_consecutive_days_extend_streak(self, db_session):
        service = ChallengeService(db_session)

        service.complete_daily_challenge(1, datetime(2025, 1, 14, 12, 0))
        result = service.complete_daily_challenge(1, datetime(2025, 1, 15, 12, 0))

        assert result.streak_count == 2
        assert result.challenges_completed == 2

    def test_skipped_day_resets_streak(self, db_session):
        service = ChallengeService(db_session)

        service.complete_daily_challenge(1, datetime(2025, 1, 13, 12, 0))
        result = service.complete_daily_challenge(1, datetime(2025, 1, 15, 12, 0))

        assert result.streak_count == 1

    def test_second_completion_same_day_raises(self, db_session):
        service = ChallengeService(db_session)
        service.complete_daily_challenge(1, datetime(2025, 1, 15, 9, 0))

        with pytest.raises(ChallengeAlreadyCompletedException):
            service.complete_daily_challenge(1, datetime(2025, 1, 15, 18, 0))

    def test_streak_unlocks_achievement(self, db_session):
        create_profile(db_session, streak_count=2, last_challenge_date=date(2025, 1, 14))

        result = ChallengeService(db_session).complete_daily_challenge(1, datetime(2025, 1, 15, 12, 0))

        assert result.streak_count == 3
        assert "streak3" in result.new_achievements

    def test_tenth_challenge_unlocks_daily_champion(self, db_session):
        create_profile(db_session, challenges_completed=9)

        result = ChallengeService(db_session).complete_daily_challenge(1, datetime(2025, 1, 15, 12, 0))

        assert result.challenges_completed == 10
        assert "dailyChamp" in result.new_achievements
