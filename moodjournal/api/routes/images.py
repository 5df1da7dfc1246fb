"""
Image generation route used by the mood form preview.
"""
import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from moodjournal.api.dependencies import get_image_chain
from moodjournal.core.utils import format_error
from moodjournal.models.mood import MOOD_TYPES
from moodjournal.schemas.image import GenerateImageResponse
from moodjournal.services.image_service import ImageProviderChain
from moodjournal.services.prompt_service import build_prompt

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image(
    request: Request,
    chain: ImageProviderChain = Depends(get_image_chain)
):
    """
    Generate an illustration for a note.
    Only malformed input is an error (400); any internal failure still
    answers 200 with a placeholder image.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_error("Request body must be a JSON object")
        )

    note = body.get("note")
    mood_type = body.get("moodType")
    if not isinstance(note, str) or not note.strip() or not mood_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_error("Note and moodType are required")
        )
    if mood_type not in MOOD_TYPES:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_error(f"moodType must be one of: {', '.join(MOOD_TYPES)}")
        )

    note = note.strip()
    try:
        prompt = build_prompt(note, mood_type)
        result = await chain.generate_image(prompt)
    except Exception as e:
        logger.error(f"Error in generate-image route: {e}", exc_info=True)
        return GenerateImageResponse(
            success=True,
            imageUrl=chain.placeholder.image_url(),
            model=chain.placeholder.name,
            error="Fallback to placeholder due to error",
        )

    return GenerateImageResponse(
        success=True,
        imageUrl=result.image_url,
        model=result.provider_name,
        prompt=result.prompt,
    )
