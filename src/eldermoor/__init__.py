"""Eldermoor - dark fantasy game session engine.

Tracks a player character, a world of connected locations and a
turn-based combat resolver, and exposes the commands a presentation layer
drives the game with.

ARCHITECTURE:
- The GameSession owns the state (character, location, combat, game log)
- Engine functions resolve progression, items and combat on that state
- The narrator only produces flavor text and never mutates state

Example:
    >>> from eldermoor import GameSession, CharacterClass, Relic
    >>>
    >>> session = GameSession()
    >>> session.create_character("Aldric", "A weary sellsword.",
    ...                          CharacterClass.WARRIOR, Relic.BLADE_OF_EMBER)
    >>> state = session.start_new_game()
    >>> state.game_log[-1].text
    'Your adventure begins in the cursed village of Eldermoor. ...'

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Pydantic V2 schemas (character, items, world, combat, game state).
    world: The location catalog.
    engine: Dice, deferred events, combat and the game session.
    narrative: Narrator prompts, reply parsing and narrators.
    storage: SQLite save slots.
"""

from __future__ import annotations

# Core
from eldermoor.core.config import Settings, get_settings
from eldermoor.core.exceptions import EldermoorError
from eldermoor.core.logging import configure_logging, get_logger

# Models
from eldermoor.models import (
    Character,
    CharacterClass,
    CombatState,
    Enemy,
    GameLogEntry,
    GameState,
    Item,
    ItemEffect,
    Location,
    LogEntryType,
    Relic,
    StatUpdate,
    create_character,
)

# Engine
from eldermoor.engine import GameSession, calculate_damage, create_session

# World, narrative and storage
from eldermoor.narrative import NarrativeResponse, StaticNarrator
from eldermoor.storage import Database
from eldermoor.world import WorldCatalog, default_catalog


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "EldermoorError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Character",
    "CharacterClass",
    "CombatState",
    "Enemy",
    "GameLogEntry",
    "GameState",
    "Item",
    "ItemEffect",
    "Location",
    "LogEntryType",
    "Relic",
    "StatUpdate",
    "create_character",
    # Engine
    "GameSession",
    "create_session",
    "calculate_damage",
    # World, narrative and storage
    "WorldCatalog",
    "default_catalog",
    "NarrativeResponse",
    "StaticNarrator",
    "Database",
]
