"""
Custom exceptions for the click tracker.
Provides specific exception types for better error handling and recovery.
"""


class ClickTrackerException(Exception):
    """Base exception for click tracker application"""
    pass


class GoalNotFoundException(ClickTrackerException):
    """Raised when a goal is not found for the player"""
    def __init__(self, goal_id: int, player_id: int = None):
        self.goal_id = goal_id
        self.player_id = player_id
        if player_id is None:
            super().__init__(f"Goal with ID {goal_id} not found")
        else:
            super().__init__(f"Goal with ID {goal_id} not found for player {player_id}")


class ProfileNotFoundException(ClickTrackerException):
    """Raised when a player profile is not found"""
    def __init__(self, player_id: int):
        self.player_id = player_id
        super().__init__(f"Player profile for player {player_id} not found")


class ChallengeNotFoundException(ClickTrackerException):
    """Raised when no daily challenge exists for a date"""
    def __init__(self, player_id: int, challenge_date):
        self.player_id = player_id
        self.challenge_date = challenge_date
        super().__init__(f"No daily challenge for player {player_id} on {challenge_date}")


class ChallengeAlreadyCompletedException(ClickTrackerException):
    """Raised when the daily challenge was already completed today"""
    def __init__(self, player_id: int, challenge_date):
        self.player_id = player_id
        self.challenge_date = challenge_date
        super().__init__(f"Daily challenge already completed on {challenge_date}")


class SkinNotFoundException(ClickTrackerException):
    """Raised when a skin id is not in the catalog"""
    def __init__(self, skin_id: str):
        self.skin_id = skin_id
        super().__init__(f"Skin '{skin_id}' not found")


class SkinNotUnlockedException(ClickTrackerException):
    """Raised when selecting a skin the player has not unlocked"""
    def __init__(self, skin_id: str):
        self.skin_id = skin_id
        super().__init__(f"Skin '{skin_id}' not unlocked")


class DatabaseException(ClickTrackerException):
    """Raised when database operations fail"""
    def __init__(self, operation: str, details: str):
        self.operation = operation
        self.details = details
        super().__init__(f"Database {operation} failed: {details}")


class ValidationException(ClickTrackerException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")
