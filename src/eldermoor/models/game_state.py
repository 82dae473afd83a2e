"""Game state and persistence record models.

GameState is the complete state of one session. Only the GameSession
mutates it; everything else receives deep copies. SavedGame is the
persistence contract: every GameState field except the transient combat.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from eldermoor.core.constants import SAVE_SCHEMA_VERSION
from eldermoor.models.character import Character
from eldermoor.models.combat import CombatState
from eldermoor.models.enums import LogEntryType
from eldermoor.models.world import Location, Quest


class GameLogEntry(BaseModel):
    """A player-facing log line. Never mutated once appended."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)
    type: LogEntryType


class GameState(BaseModel):
    """The complete state of one game session.

    Attributes:
        character: The player character, once created.
        current_location: Working copy of the location the player is in.
        game_log: Append-only player-facing log.
        quests: Quest records (data only).
        combat: The active combat, or None when idle.
        visited_locations: Location ids in first-visit order, no duplicates.
        game_time: Counter advanced by travel.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    character: Character | None = None
    current_location: Location | None = None
    game_log: list[GameLogEntry] = Field(default_factory=list)
    quests: list[Quest] = Field(default_factory=list)
    combat: CombatState | None = None
    visited_locations: list[str] = Field(default_factory=list)
    game_time: Annotated[int, Field(ge=0)] = 0

    @property
    def in_combat(self) -> bool:
        return self.combat is not None and self.combat.is_active

    @property
    def is_game_over(self) -> bool:
        """True once the character has been reduced to zero health."""
        return self.character is not None and self.character.is_defeated

    def add_log_entry(self, text: str, entry_type: LogEntryType) -> GameLogEntry:
        """Append an entry to the game log.

        Args:
            text: Entry text.
            entry_type: Entry category.

        Returns:
            The appended entry.
        """
        entry = GameLogEntry(text=text, type=entry_type)
        self.game_log.append(entry)
        return entry

    def recent_log(self, count: int) -> list[GameLogEntry]:
        """The most recent ``count`` log entries, oldest first."""
        if count <= 0:
            return []
        return list(self.game_log[-count:])

    def mark_visited(self, location_id: str) -> bool:
        """Record a visit. Returns True the first time an id is seen."""
        if location_id in self.visited_locations:
            return False
        self.visited_locations.append(location_id)
        return True

    def to_saved_game(self) -> SavedGame:
        """Build the persistence record for this state."""
        return SavedGame(
            character=self.character,
            current_location=self.current_location,
            game_log=self.game_log,
            quests=self.quests,
            visited_locations=self.visited_locations,
            game_time=self.game_time,
        ).model_copy(deep=True)

    @classmethod
    def from_saved_game(cls, saved: SavedGame) -> GameState:
        """Rebuild a state from a persistence record. Combat starts idle."""
        data = saved.model_copy(deep=True)
        return cls(
            character=data.character,
            current_location=data.current_location,
            game_log=data.game_log,
            quests=data.quests,
            visited_locations=data.visited_locations,
            game_time=data.game_time,
        )


class SavedGame(BaseModel):
    """The serialized session record.

    Attributes:
        schema_version: Record layout version.
        saved_at: When the record was produced.
        character: Saved character.
        current_location: Saved location.
        game_log: Saved log.
        quests: Saved quests.
        visited_locations: Saved visited set.
        game_time: Saved game-time counter.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: int = SAVE_SCHEMA_VERSION
    saved_at: datetime = Field(default_factory=datetime.now)
    character: Character | None = None
    current_location: Location | None = None
    game_log: list[GameLogEntry] = Field(default_factory=list)
    quests: list[Quest] = Field(default_factory=list)
    visited_locations: list[str] = Field(default_factory=list)
    game_time: Annotated[int, Field(ge=0)] = 0


__all__ = [
    "GameLogEntry",
    "GameState",
    "SavedGame",
]
