"""
Schema-tolerant persistence for mood entries.

Deployed databases may predate the optional mood_entries columns. Writes and
reads walk FIELD_PROFILES from the broadest column set to the mandatory one,
moving on only when the database reports an unknown column.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from moodjournal.models.mood import MoodEntry

logger = logging.getLogger(__name__)

MANDATORY_COLUMNS = ("user_id", "mood_type", "note", "entry_date")
READ_COLUMNS = ("id", "created_at")

TIMESTAMP_COLUMNS = ("mood_timestamp",)
IMAGE_COLUMNS = ("mood_image_url",)
DIAGNOSTIC_COLUMNS = ("mood_image_model", "mood_image_prompt")

OPTIONAL_COLUMNS = TIMESTAMP_COLUMNS + IMAGE_COLUMNS + DIAGNOSTIC_COLUMNS

UNKNOWN_COLUMN_MARKERS = (
    "no such column",        # sqlite (select)
    "has no column named",   # sqlite (insert)
    "unknown column",        # mysql
    "pgrst204",              # postgrest
)


class PersistenceError(Exception):
    """A mood entry could not be written or read."""


class UnknownColumnError(Exception):
    """The database lacks a column of the attempted profile."""


@dataclass(frozen=True)
class FieldProfile:
    """Optional column groups written on top of the mandatory columns."""
    name: str
    columns: Tuple[str, ...]

    @property
    def has_timestamp(self) -> bool:
        return "mood_timestamp" in self.columns


FIELD_PROFILES = (
    FieldProfile("full", TIMESTAMP_COLUMNS + IMAGE_COLUMNS + DIAGNOSTIC_COLUMNS),
    FieldProfile("without_diagnostics", TIMESTAMP_COLUMNS + IMAGE_COLUMNS),
    FieldProfile("without_image", TIMESTAMP_COLUMNS),
    FieldProfile("basic", ()),
)


def is_unknown_column_error(exc: Exception) -> bool:
    """Tell apart "column does not exist" from any other database failure."""
    message = str(getattr(exc, "orig", None) or exc).lower()
    if any(marker in message for marker in UNKNOWN_COLUMN_MARKERS):
        return True
    # postgres: column "mood_timestamp" of relation "mood_entries" does not exist
    return "column" in message and "does not exist" in message


class MoodStore:
    """Append-only access to the mood_entries table."""

    def __init__(self, db: Session, profiles: Tuple[FieldProfile, ...] = FIELD_PROFILES):
        self.db = db
        self.profiles = profiles
        self.table = MoodEntry.__table__

    def _insert(self, values: Dict[str, Any]) -> int:
        try:
            result = self.db.execute(insert(self.table).values(**values))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            if is_unknown_column_error(e):
                raise UnknownColumnError(str(e)) from e
            raise PersistenceError(f"Could not save mood entry: {e}") from e
        return result.inserted_primary_key[0]

    def insert_entry(self, fields: Dict[str, Any]) -> Tuple[int, str]:
        """
        Insert one entry with the broadest profile the database accepts.

        Returns the new id and the profile name that succeeded.
        """
        missing = [column for column in MANDATORY_COLUMNS if column not in fields]
        if missing:
            raise PersistenceError(f"Missing mandatory fields: {', '.join(missing)}")

        for profile in self.profiles:
            values = {column: fields[column] for column in MANDATORY_COLUMNS}
            values.update({column: fields.get(column) for column in profile.columns})
            try:
                entry_id = self._insert(values)
            except UnknownColumnError as e:
                logger.info(f"Mood store rejected profile '{profile.name}', degrading: {e}")
                continue

            logger.debug(f"Saved mood entry {entry_id} with profile '{profile.name}'")
            return entry_id, profile.name

        raise PersistenceError("Mood entry rejected by every field profile")

    def query_entries(
        self,
        user_id: int,
        since: Optional[date] = None,
        until: Optional[date] = None,
        ascending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Entries of one user inside [since, until], ordered by entry_date then
        mood_timestamp (when the database has it) then id.
        Columns the database lacks come back as None.
        """
        for profile in self.profiles:
            columns = READ_COLUMNS + MANDATORY_COLUMNS + profile.columns
            stmt = select(*[self.table.c[column] for column in columns]).where(
                self.table.c.user_id == user_id
            )
            if since is not None:
                stmt = stmt.where(self.table.c.entry_date >= since)
            if until is not None:
                stmt = stmt.where(self.table.c.entry_date <= until)

            order_columns = [self.table.c.entry_date]
            if profile.has_timestamp:
                order_columns.append(self.table.c.mood_timestamp)
            order_columns.append(self.table.c.id)
            stmt = stmt.order_by(*[
                column.asc() if ascending else column.desc() for column in order_columns
            ])
            if limit is not None:
                stmt = stmt.limit(limit)

            try:
                rows = self.db.execute(stmt).mappings().all()
            except SQLAlchemyError as e:
                self.db.rollback()
                if is_unknown_column_error(e):
                    logger.info(f"Mood store cannot read profile '{profile.name}', degrading")
                    continue
                raise PersistenceError(f"Could not load mood entries: {e}") from e

            entries = []
            for row in rows:
                entry = {column: None for column in OPTIONAL_COLUMNS}
                entry.update(dict(row))
                entries.append(entry)
            return entries

        raise PersistenceError("Mood entries unreadable with every field profile")
