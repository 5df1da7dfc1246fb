"""Models package - Import all models for SQLAlchemy registration."""
from moodjournal.models.user import User
from moodjournal.models.mood import MoodEntry, MoodType, MOOD_TYPES

__all__ = [
    "User",
    "MoodEntry",
    "MoodType",
    "MOOD_TYPES",
]
