"""SQLite persistence layer for Eldermoor.

Saved games are stored one per named slot. Each row holds the serialized
SavedGame record plus a few summary columns for listing saves without
parsing them.

Storage location: ~/.eldermoor/eldermoor.db (ELDERMOOR_DATABASE_PATH)
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Generator

from pydantic import ValidationError as PydanticValidationError

from eldermoor.core.config import get_settings
from eldermoor.core.constants import SAVE_SCHEMA_VERSION
from eldermoor.core.exceptions import PersistenceError
from eldermoor.core.logging import get_logger
from eldermoor.models.game_state import SavedGame


logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class SaveRecord:
    """Summary of a saved game slot.

    Attributes:
        slot: Slot name.
        character_name: Name of the saved character, if any.
        level: Saved character level, if any.
        location_name: Name of the saved location, if any.
        schema_version: Layout version of the stored record.
        created_at: When the slot was first written.
        updated_at: When the slot was last written.
    """

    slot: str
    character_name: str | None
    level: int | None
    location_name: str | None
    schema_version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> SaveRecord:
        """Create from database row."""
        return cls(
            slot=row[0],
            character_name=row[1],
            level=row[2],
            location_name=row[3],
            schema_version=row[4],
            created_at=datetime.fromisoformat(row[5]),
            updated_at=datetime.fromisoformat(row[6]),
        )


# =============================================================================
# Database Class
# =============================================================================


class Database:
    """SQLite database holding saved game slots."""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. If None, uses the configured path.

        Raises:
            PersistenceError: If the database cannot be created or opened.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(
                f"Cannot create save directory: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        self._init_schema()

        logger.info("Database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise PersistenceError(
                f"Cannot open save database: {exc}",
                details={"path": str(self.db_path)},
            ) from exc

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise PersistenceError(
                f"Save database error: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS saved_games (
                    slot TEXT PRIMARY KEY,
                    character_name TEXT,
                    level INTEGER,
                    location_name TEXT,
                    schema_version INTEGER NOT NULL,
                    state_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_saved_games_updated
                ON saved_games(updated_at DESC)
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # Saved Game Operations
    # =========================================================================

    def save_game(self, slot: str, saved: SavedGame) -> SaveRecord:
        """Write a saved game to a slot, replacing any previous contents.

        Args:
            slot: Slot name.
            saved: Record to store.

        Returns:
            Summary of the written slot.

        Raises:
            PersistenceError: If the write fails.
        """
        now = datetime.now()
        state_json = saved.model_dump_json()
        character_name = saved.character.name if saved.character else None
        level = saved.character.level if saved.character else None
        location_name = saved.current_location.name if saved.current_location else None

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT created_at FROM saved_games WHERE slot = ?", (slot,))
            row = cursor.fetchone()
            created_at = datetime.fromisoformat(row[0]) if row else now

            cursor.execute("""
                INSERT OR REPLACE INTO saved_games
                (slot, character_name, level, location_name, schema_version,
                 state_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (slot, character_name, level, location_name, saved.schema_version,
                  state_json, created_at.isoformat(), now.isoformat()))

        logger.info("Game saved", slot=slot, character=character_name)

        return SaveRecord(
            slot=slot,
            character_name=character_name,
            level=level,
            location_name=location_name,
            schema_version=saved.schema_version,
            created_at=created_at,
            updated_at=now,
        )

    def load_game(self, slot: str) -> SavedGame | None:
        """Read a saved game from a slot.

        Args:
            slot: Slot name.

        Returns:
            The stored record, or None if the slot is empty.

        Raises:
            PersistenceError: If the stored record is unreadable or newer
                than this version understands.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT schema_version, state_json FROM saved_games WHERE slot = ?",
                (slot,),
            )
            row = cursor.fetchone()

        if row is None:
            logger.debug("No saved game", slot=slot)
            return None

        schema_version, state_json = row[0], row[1]
        if schema_version > SAVE_SCHEMA_VERSION:
            raise PersistenceError(
                "Saved game was written by a newer version",
                slot=slot,
                details={"schema_version": schema_version},
            )

        try:
            saved = SavedGame.model_validate_json(state_json)
        except PydanticValidationError as exc:
            raise PersistenceError(
                f"Saved game is corrupt: {exc.error_count()} validation errors",
                slot=slot,
            ) from exc

        logger.info("Game loaded", slot=slot)
        return saved

    def delete_game(self, slot: str) -> bool:
        """Delete a saved game.

        Args:
            slot: Slot to delete.

        Returns:
            True if deleted, False if the slot was empty.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM saved_games WHERE slot = ?", (slot,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Saved game deleted", slot=slot)

        return deleted

    def list_games(self) -> list[SaveRecord]:
        """Get all saved games, most recently updated first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT slot, character_name, level, location_name, schema_version,
                       created_at, updated_at
                FROM saved_games ORDER BY updated_at DESC
            """)
            return [SaveRecord.from_row(tuple(row)) for row in cursor.fetchall()]


# =============================================================================
# Singleton Instance
# =============================================================================


_database_instance: Database | None = None


def get_database() -> Database:
    """Get the global database instance at the configured path."""
    global _database_instance

    if _database_instance is None:
        _database_instance = Database()

    return _database_instance


__all__ = [
    "Database",
    "SaveRecord",
    "get_database",
]
