"""
Database initialization script: creates tables and seeds the user roster.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from moodjournal.core.config import settings
from moodjournal.db.session import SessionLocal, init_db
from moodjournal.models.user import User

logger = logging.getLogger(__name__)


def parse_roster_entry(raw: str) -> dict:
    """Parse a "username:Display Name:emoji" roster entry."""
    parts = [part.strip() for part in raw.split(":")]
    username = parts[0]
    if not username:
        raise ValueError(f"Roster entry without username: {raw!r}")
    display_name = parts[1] if len(parts) > 1 and parts[1] else username
    emoji = parts[2] if len(parts) > 2 and parts[2] else "🙂"
    return {"username": username, "display_name": display_name, "emoji": emoji}


def seed_users(db: Session, roster: Optional[List[str]] = None) -> int:
    """Insert roster users that do not exist yet. Returns how many were added."""
    added = 0
    for raw in roster if roster is not None else settings.USER_ROSTER:
        data = parse_roster_entry(raw)
        exists = db.query(User).filter(User.username == data["username"]).first()
        if exists:
            continue
        db.add(User(**data))
        added += 1

    db.commit()
    logger.info(f"Seeded {added} users")
    return added


if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    session = SessionLocal()
    try:
        seed_users(session)
    finally:
        session.close()
    print("Database initialized successfully!")
