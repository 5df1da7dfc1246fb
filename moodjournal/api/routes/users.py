"""
User roster routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from moodjournal.db.session import get_db
from moodjournal.schemas.user import UserResponse
from moodjournal.services.user_service import get_user_by_username, list_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
async def get_roster(db: Session = Depends(get_db)):
    """List selectable users for the login screen."""
    return list_users(db)


@router.get("/{username}", response_model=UserResponse)
async def get_user(username: str, db: Session = Depends(get_db)):
    """Get user by username."""
    user = get_user_by_username(username, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
