"""
Mood journaling routes: submit, history and chart.
"""
from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime, timedelta
from moodjournal.core.config import settings
from moodjournal.api.dependencies import get_current_user, get_mood_pipeline
from moodjournal.db.session import get_db
from moodjournal.models.user import User
from moodjournal.schemas.mood import (
    MoodCreate, MoodEntryResponse, SubmissionResponse, MoodChartResponse, ChartPoint
)
from moodjournal.services.history_service import list_recent, list_for_chart, build_chart_points
from moodjournal.services.mood_service import (
    MoodSubmissionPipeline, InvalidMoodError, UnknownIdentityError, SaveMoodError
)
from moodjournal.services.mood_store import PersistenceError

router = APIRouter(prefix="/moods", tags=["moods"])


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_mood(
    mood_data: MoodCreate,
    x_username: Optional[str] = Header(None),
    pipeline: MoodSubmissionPipeline = Depends(get_mood_pipeline)
):
    """Log a mood; a note also gets an illustration."""
    if not x_username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Username header is required"
        )

    try:
        result = await pipeline.submit(x_username, mood_data.mood_type, mood_data.note)
    except InvalidMoodError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message
        )
    except UnknownIdentityError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except SaveMoodError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not save your mood. Please try again."
        )

    return SubmissionResponse(
        entry_id=result.entry_id,
        mood_type=result.mood_type,
        note=result.note,
        image_url=result.image_url,
        image_model=result.image_model,
        image_prompt=result.image_prompt,
        profile=result.profile,
        mood_message=result.mood_message,
        note_message=result.note_message,
    )


@router.get("/history", response_model=List[MoodEntryResponse])
async def get_history(
    days: Optional[int] = None,
    limit: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Recent moods of the current user (latest first)."""
    if (days is not None and days < 0) or (limit is not None and limit <= 0):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="days must be >= 0 and limit > 0"
        )

    try:
        entries = list_recent(db, current_user.username, days=days, limit=limit)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not load mood history"
        )
    return entries


@router.get("/chart", response_model=MoodChartResponse)
async def get_chart(
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Mood counts per day for the chart (oldest first)."""
    date_to = date_to or datetime.utcnow().date()
    date_from = date_from or date_to - timedelta(days=settings.CHART_DAYS)
    if date_from > date_to:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="date_from must be before date_to"
        )

    try:
        entries = list_for_chart(db, current_user.username, date_from=date_from, date_to=date_to)
    except PersistenceError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not load mood chart"
        )

    points = [ChartPoint(**point) for point in build_chart_points(entries)]
    return MoodChartResponse(
        date_from=date_from,
        date_to=date_to,
        points=points,
        entries=entries,
    )
