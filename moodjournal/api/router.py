"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from moodjournal.api.routes import users, moods

api_router = APIRouter()

# Include all route modules
api_router.include_router(users.router)
api_router.include_router(moods.router)
