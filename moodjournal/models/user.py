"""
User model for the fixed identity roster.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from moodjournal.db.base import BaseModel


class User(BaseModel):
    """User picked from the login roster; username is the lookup key."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    emoji = Column(String(10), nullable=False, default="🙂")

    # Relationships
    moods = relationship("MoodEntry", back_populates="user")
