"""
Run migration to add the optional image/timestamp columns to mood_entries.
"""
import logging

from moodjournal.db.migrations.add_mood_image_columns import migrate


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        added = migrate()
    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    print(f"Migration completed successfully! Added columns: {', '.join(added) or 'none'}")
