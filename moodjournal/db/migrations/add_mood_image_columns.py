"""
Migration script to add the optional columns to mood_entries.
Older databases only have the mandatory columns; the app keeps working
against them, but history ordering and image diagnostics need these.
"""
import logging
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from typing import List, Optional

logger = logging.getLogger(__name__)

# column name -> generic SQL type accepted by sqlite, mysql and postgres
OPTIONAL_MOOD_COLUMNS = (
    ("mood_timestamp", "TIMESTAMP"),
    ("mood_image_url", "TEXT"),
    ("mood_image_model", "VARCHAR(100)"),
    ("mood_image_prompt", "TEXT"),
)


def migrate(engine: Optional[Engine] = None) -> List[str]:
    """Add missing optional columns. Returns the names of the added columns."""
    if engine is None:
        from moodjournal.db.session import engine

    existing = {column["name"] for column in inspect(engine).get_columns("mood_entries")}
    added = []

    with engine.begin() as connection:
        for name, sql_type in OPTIONAL_MOOD_COLUMNS:
            if name in existing:
                logger.info(f"{name} column already exists, skipping")
                continue
            connection.execute(text(f"ALTER TABLE mood_entries ADD COLUMN {name} {sql_type} NULL"))
            logger.info(f"Added {name} column to mood_entries table")
            added.append(name)

    return added
