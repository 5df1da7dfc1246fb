"""
Pydantic schemas for the image generation endpoint.
"""
from pydantic import BaseModel
from typing import Optional


class GenerateImageResponse(BaseModel):
    """Schema for image generation response."""
    success: bool
    imageUrl: Optional[str] = None
    model: Optional[str] = None
    prompt: Optional[str] = None
    error: Optional[str] = None
