"""
Mood entry model for daily mood journaling.
"""
from sqlalchemy import Column, String, Date, DateTime, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from moodjournal.db.base import BaseModel
import enum


class MoodType(str, enum.Enum):
    """Closed set of mood labels."""
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"


MOOD_TYPES = tuple(mood.value for mood in MoodType)


class MoodEntry(BaseModel):
    """One logged mood. Several entries per user per day are allowed."""
    __tablename__ = "mood_entries"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mood_type = Column(String(10), nullable=False)
    note = Column(Text, nullable=True)
    entry_date = Column(Date, nullable=False, index=True)

    # Optional column groups; older databases may lack them (see mood_store)
    mood_timestamp = Column(DateTime, nullable=True, index=True)
    mood_image_url = Column(Text, nullable=True)
    mood_image_model = Column(String(100), nullable=True)
    mood_image_prompt = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", back_populates="moods")
