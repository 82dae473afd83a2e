"""Storage module for Eldermoor persistence.

Provides SQLite-based storage for saved games, one per named slot.
"""

from eldermoor.storage.database import (
    Database,
    SaveRecord,
    get_database,
)

__all__ = [
    "Database",
    "SaveRecord",
    "get_database",
]
