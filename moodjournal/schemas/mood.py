"""
Pydantic schemas for MoodEntry entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from moodjournal.models.mood import MoodType


class MoodCreate(BaseModel):
    """Schema for mood submission."""
    mood_type: str
    note: Optional[str] = None


class MoodEntryResponse(BaseModel):
    """Schema for a stored mood entry; optional columns may be absent."""
    id: int
    user_id: int
    mood_type: MoodType
    note: Optional[str] = None
    entry_date: date
    mood_timestamp: Optional[datetime] = None
    mood_image_url: Optional[str] = None
    mood_image_model: Optional[str] = None
    mood_image_prompt: Optional[str] = None
    created_at: Optional[datetime] = None


class SubmissionResponse(BaseModel):
    """Schema for a successful mood submission."""
    entry_id: int
    mood_type: MoodType
    note: Optional[str] = None
    image_url: Optional[str] = None
    image_model: Optional[str] = None
    image_prompt: Optional[str] = None
    profile: str
    mood_message: Optional[str] = None
    note_message: Optional[str] = None


class ChartPoint(BaseModel):
    """Mood counts for a single day."""
    date: date
    happy: int = 0
    neutral: int = 0
    sad: int = 0
    total: int = 0


class MoodChartResponse(BaseModel):
    """Schema for the chart view."""
    date_from: date
    date_to: date
    points: List[ChartPoint] = []
    entries: List[MoodEntryResponse] = []
