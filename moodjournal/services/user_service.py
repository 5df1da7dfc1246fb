"""
User directory lookups for the fixed roster.
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from moodjournal.models.user import User


def get_user_by_username(username: str, db: Session) -> Optional[User]:
    """Find a user by username."""
    return db.query(User).filter(User.username == username).first()


def list_users(db: Session) -> List[User]:
    """List the roster ordered by display name."""
    return db.query(User).order_by(User.display_name, User.username).all()
