"""
History service: recent mood feed and chart data.
"""
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from moodjournal.core.config import settings
from moodjournal.models.mood import MOOD_TYPES
from moodjournal.services.mood_service import SubmissionStage, UnknownIdentityError
from moodjournal.services.mood_store import MoodStore
from moodjournal.services.user_service import get_user_by_username


def _resolve_user_id(username: str, db: Session) -> int:
    user = get_user_by_username(username, db)
    if not user:
        raise UnknownIdentityError(f"User '{username}' not found", SubmissionStage.RESOLVING_IDENTITY)
    return user.id


def list_recent(
    db: Session,
    username: str,
    days: Optional[int] = None,
    limit: Optional[int] = None,
    today: Optional[date] = None
) -> List[Dict[str, Any]]:
    """Entries of the trailing `days` days, newest first, at most `limit`."""
    days = settings.HISTORY_DAYS if days is None else days
    limit = settings.HISTORY_LIMIT if limit is None else limit
    today = today or datetime.utcnow().date()

    user_id = _resolve_user_id(username, db)
    return MoodStore(db).query_entries(
        user_id,
        since=today - timedelta(days=days),
        ascending=False,
        limit=limit,
    )


def list_for_chart(
    db: Session,
    username: str,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None
) -> List[Dict[str, Any]]:
    """Entries between date_from and date_to (default: trailing CHART_DAYS), oldest first."""
    date_to = date_to or datetime.utcnow().date()
    date_from = date_from or date_to - timedelta(days=settings.CHART_DAYS)

    user_id = _resolve_user_id(username, db)
    return MoodStore(db).query_entries(user_id, since=date_from, until=date_to, ascending=True)


def build_chart_points(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Count moods per day, sorted by day."""
    grouped: "OrderedDict[date, Dict[str, Any]]" = OrderedDict()

    for entry in entries:
        timestamp = entry.get("mood_timestamp")
        day = timestamp.date() if timestamp else entry["entry_date"]
        if day not in grouped:
            grouped[day] = {"date": day, "total": 0, **{mood: 0 for mood in MOOD_TYPES}}
        if entry["mood_type"] in MOOD_TYPES:
            grouped[day][entry["mood_type"]] += 1
        grouped[day]["total"] += 1

    return [grouped[day] for day in sorted(grouped)]
