"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel


class UserResponse(BaseModel):
    """Schema for user response."""
    id: int
    username: str
    display_name: str
    emoji: str

    class Config:
        from_attributes = True
