"""
FastAPI entrypoint for the Mood Journal backend application.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from moodjournal.core.config import settings
from moodjournal.core.logger import setup_logging
from moodjournal.core.utils import format_error
from moodjournal.api.router import api_router
from moodjournal.api.routes import images

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mood Journal API",
    description="Backend API for daily mood journaling with illustrated notes",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error: {exc!r}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=format_error("An unexpected error occurred")
    )


# Include API routes
app.include_router(api_router, prefix="/api")
app.include_router(images.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Mood Journal API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
