"""
Shared FastAPI dependencies.
"""
from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session
from moodjournal.core.config import settings
from moodjournal.db.session import get_db
from moodjournal.models.user import User
from moodjournal.services.image_service import ImageProviderChain, build_provider_chain
from moodjournal.services.mood_service import MoodSubmissionPipeline
from moodjournal.services.user_service import get_user_by_username


def get_current_user(
    x_username: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the caller from the X-Username header (picked on the login screen)."""
    if not x_username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Username header is required"
        )

    user = get_user_by_username(x_username, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


def get_image_chain() -> ImageProviderChain:
    """Provider chain built from settings."""
    return build_provider_chain(settings)


def get_mood_pipeline(
    db: Session = Depends(get_db),
    chain: ImageProviderChain = Depends(get_image_chain)
) -> MoodSubmissionPipeline:
    """Submission pipeline bound to the request's session."""
    return MoodSubmissionPipeline(db, chain, default_image_url=settings.DEFAULT_MOOD_IMAGE)
