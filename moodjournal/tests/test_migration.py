"""
Tests for the mood_entries column migration.
"""
import asyncio
from sqlalchemy import inspect
from moodjournal.db.migrations.add_mood_image_columns import migrate
from moodjournal.services.mood_service import MoodSubmissionPipeline
from moodjournal.tests.helpers import StubProvider, make_chain


def _columns(engine):
    return {column["name"] for column in inspect(engine).get_columns("mood_entries")}


def test_migration_adds_missing_columns(make_legacy_engine):
    engine = make_legacy_engine("mood_timestamp DATETIME")

    added = migrate(engine)

    assert added == ["mood_image_url", "mood_image_model", "mood_image_prompt"]
    assert {"mood_timestamp", "mood_image_url", "mood_image_model", "mood_image_prompt"} <= _columns(engine)


def test_migration_is_idempotent(engine):
    assert migrate(engine) == []


def test_full_profile_after_migration(make_legacy_engine, session_factory):
    engine = make_legacy_engine()
    migrate(engine)
    db = session_factory(engine)

    chain = make_chain(StubProvider("stub-model", image_url="https://img.example/cat.png"))
    result = asyncio.run(MoodSubmissionPipeline(db, chain).submit("ana", "happy", "feliz"))

    assert result.profile == "full"
