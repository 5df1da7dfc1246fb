"""
Mood submission pipeline.

validating -> resolving_identity -> (generating_image) -> persisting -> done,
with failed reachable from every stage. Image trouble never fails a
submission; exactly one row is written on success and none on failure.
"""
import enum
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from sqlalchemy.orm import Session
from moodjournal.models.mood import MOOD_TYPES
from moodjournal.services.image_service import ImageProviderChain
from moodjournal.services.message_service import encouragement_for
from moodjournal.services.mood_store import MoodStore, PersistenceError
from moodjournal.services.prompt_service import build_prompt
from moodjournal.services.user_service import get_user_by_username

logger = logging.getLogger(__name__)


class SubmissionStage(str, enum.Enum):
    """Pipeline stages."""
    VALIDATING = "validating"
    RESOLVING_IDENTITY = "resolving_identity"
    GENERATING_IMAGE = "generating_image"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class MoodSubmissionError(Exception):
    """Base error for a failed submission; `stage` is where it failed."""

    def __init__(self, message: str, stage: SubmissionStage):
        super().__init__(message)
        self.message = message
        self.stage = stage


class InvalidMoodError(MoodSubmissionError):
    """Mood label missing or outside the closed set."""


class UnknownIdentityError(MoodSubmissionError):
    """No user with the given username."""


class SaveMoodError(MoodSubmissionError):
    """The entry could not be persisted; safe to retry."""


@dataclass
class SubmissionResult:
    entry_id: int
    mood_type: str
    note: Optional[str]
    image_url: Optional[str]
    image_model: Optional[str]
    image_prompt: Optional[str]
    profile: str
    mood_message: Optional[str] = None
    note_message: Optional[str] = None


def validate_mood_type(mood_type: Optional[str]) -> str:
    """Return the normalized mood label or raise InvalidMoodError."""
    if not mood_type or not isinstance(mood_type, str):
        raise InvalidMoodError("Mood type is required", SubmissionStage.VALIDATING)
    normalized = mood_type.strip().lower()
    if normalized not in MOOD_TYPES:
        raise InvalidMoodError(
            f"Invalid mood type '{mood_type}'. Expected one of: {', '.join(MOOD_TYPES)}",
            SubmissionStage.VALIDATING
        )
    return normalized


class MoodSubmissionPipeline:
    """Validates, illustrates and stores one mood entry."""

    def __init__(
        self,
        db: Session,
        chain: ImageProviderChain,
        default_image_url: Optional[str] = None,
        prompt_rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.utcnow
    ):
        self.db = db
        self.store = MoodStore(db)
        self.chain = chain
        self.default_image_url = default_image_url or None
        self.prompt_rng = prompt_rng
        self.clock = clock
        self.stage = SubmissionStage.VALIDATING

    def _fail(self, error: MoodSubmissionError) -> MoodSubmissionError:
        logger.warning(f"Mood submission failed while {error.stage.value}: {error.message}")
        self.stage = SubmissionStage.FAILED
        return error

    async def _generate_image(self, note: str, mood_type: str):
        """Returns (image_url, model, prompt); never raises."""
        try:
            prompt = build_prompt(note, mood_type, rng=self.prompt_rng)
            result = await self.chain.generate_image(prompt)
            return result.image_url, result.provider_name, result.prompt
        except Exception as e:
            logger.error(f"Image generation failed, continuing without it: {e}", exc_info=True)
            return self.default_image_url, None, None

    async def submit(self, username: str, mood_type: Optional[str], note: Optional[str] = None) -> SubmissionResult:
        self.stage = SubmissionStage.VALIDATING
        try:
            mood_type = validate_mood_type(mood_type)
        except InvalidMoodError as e:
            raise self._fail(e)
        if not username or not username.strip():
            raise self._fail(InvalidMoodError("Username is required", SubmissionStage.VALIDATING))
        note = (note or "").strip() or None

        self.stage = SubmissionStage.RESOLVING_IDENTITY
        user = get_user_by_username(username.strip(), self.db)
        if not user:
            raise self._fail(UnknownIdentityError(
                f"User '{username}' not found", SubmissionStage.RESOLVING_IDENTITY
            ))
        user_id = user.id

        image_url = image_model = image_prompt = None
        if note:
            self.stage = SubmissionStage.GENERATING_IMAGE
            image_url, image_model, image_prompt = await self._generate_image(note, mood_type)

        self.stage = SubmissionStage.PERSISTING
        now = self.clock()
        fields = {
            "user_id": user_id,
            "mood_type": mood_type,
            "note": note,
            "entry_date": now.date(),
            "mood_timestamp": now,
            "mood_image_url": image_url,
            "mood_image_model": image_model,
            "mood_image_prompt": image_prompt,
        }
        try:
            entry_id, profile = self.store.insert_entry(fields)
        except PersistenceError as e:
            raise self._fail(SaveMoodError(str(e), SubmissionStage.PERSISTING)) from e

        mood_message, note_message = encouragement_for(mood_type, self.prompt_rng)

        self.stage = SubmissionStage.DONE
        logger.info(f"Saved {mood_type} mood {entry_id} for {username} (profile '{profile}')")
        return SubmissionResult(
            entry_id=entry_id,
            mood_type=mood_type,
            note=note,
            image_url=image_url,
            image_model=image_model,
            image_prompt=image_prompt,
            profile=profile,
            mood_message=mood_message,
            note_message=note_message,
        )
