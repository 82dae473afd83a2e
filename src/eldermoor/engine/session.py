"""Game session orchestration.

The GameSession is the single owner of a game's state. Every command goes
through it: it validates preconditions, mutates the character and combat
through the engine functions, appends game log entries and returns a deep
copy of the resulting state.

Ordinary invalid commands (unknown ids, no character, no combat) are
silent no-ops. Narrative and persistence failures degrade to fallbacks
and operator log events instead of raising.

Example:
    >>> session = GameSession(catalog=default_catalog())
    >>> session.create_character("Aldric", "A weary sellsword.",
    ...                          CharacterClass.WARRIOR, Relic.BLADE_OF_EMBER)
    >>> state = session.start_new_game()
    >>> state.current_location.id
    'village'
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any
from uuid import UUID, uuid4

from pydantic import ValidationError as PydanticValidationError

from eldermoor.core.config import GameSettings, Settings, get_settings
from eldermoor.core.constants import OPENING_NARRATIVE
from eldermoor.core.exceptions import NarrativeError, PersistenceError
from eldermoor.core.logging import configure_logging, get_logger
from eldermoor.engine import combat as combat_engine
from eldermoor.engine import progression
from eldermoor.engine.dice import roll_encounter
from eldermoor.engine.scheduler import EventQueue
from eldermoor.models.character import StatUpdate, create_character
from eldermoor.models.enums import CharacterClass, LogEntryType, Relic
from eldermoor.models.game_state import GameState
from eldermoor.models.items import Item
from eldermoor.models.world import Enemy
from eldermoor.narrative.models import NarrativeContext, NarrativeResponse
from eldermoor.narrative.service import (
    CHARACTER_DESCRIPTION_FALLBACK,
    COMBAT_FALLBACK,
    SCENE_FALLBACK,
    Narrator,
    create_narrator,
)
from eldermoor.storage.database import Database, get_database
from eldermoor.world.catalog import WorldCatalog, default_catalog


logger = get_logger(__name__)

NARRATOR_UNAVAILABLE = "The Dungeon Master is momentarily unavailable."


class GameSession:
    """Owner and sole mutator of one game's state.

    Attributes:
        id: Session identifier, bound into every log event of the session.
    """

    def __init__(
        self,
        *,
        settings: GameSettings | None = None,
        catalog: WorldCatalog | None = None,
        narrator: Narrator | None = None,
        database: Database | None = None,
        database_factory: Callable[[], Database] = get_database,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize a session with no character.

        Args:
            settings: Game settings. Defaults to the application settings.
            catalog: World catalog. Defaults to the Eldermoor locations.
            narrator: Narrative collaborator. None means narration is
                unavailable and every request falls back.
            database: Save store. When None, one is built by
                ``database_factory`` on the first save or load.
            database_factory: Builds the save store. Defaults to the shared
                database at the configured path.
            rng: Default random source for damage and encounter rolls.
            clock: Clock driving deferred events.
        """
        self.id: UUID = uuid4()
        self._settings = settings or get_settings().game
        self._catalog = catalog or default_catalog()
        self._narrator = narrator
        self._database = database
        self._database_factory = database_factory
        self._rng = rng or random.Random()
        self._events = EventQueue(clock=clock)
        self._state = GameState()

        self._log = logger.bind(session_id=str(self.id))
        self._log.info("GameSession initialized", locations=len(self._catalog))

    # =========================================================================
    # State Access
    # =========================================================================

    @property
    def state(self) -> GameState:
        """Deep copy of the current state."""
        return self.snapshot()

    @property
    def catalog(self) -> WorldCatalog:
        return self._catalog

    @property
    def in_combat(self) -> bool:
        return self._state.in_combat

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def player_turn(self) -> bool:
        """Whether the player may attack now. False outside combat."""
        return self._state.in_combat and self._state.combat.player_turn

    @property
    def pending_events(self) -> int:
        return self._events.pending

    def snapshot(self) -> GameState:
        """Return a deep copy of the current state."""
        return self._state.model_copy(deep=True)

    # =========================================================================
    # Character Commands
    # =========================================================================

    def create_character(
        self,
        name: str,
        description: str,
        character_class: CharacterClass,
        relic: Relic,
    ) -> GameState:
        """Create a new level 1 character, replacing any existing one.

        Any combat in progress (or a lost one) is discarded.
        """
        self._events.clear()
        self._state.combat = None
        self._state.character = create_character(
            name,
            description,
            character_class,
            relic,
            gold=self._settings.starting_gold,
        )
        self._log.info(
            "Character created",
            name=name,
            character_class=str(character_class),
            relic=str(relic),
        )
        return self.snapshot()

    def gain_experience(self, amount: int) -> GameState:
        """Grant experience, resolving level-ups."""
        progression.award_experience(
            self._state,
            amount,
            multi_level=self._settings.multi_level_up,
        )
        return self.snapshot()

    def add_item(self, item: Item) -> GameState:
        progression.add_item(self._state, item)
        return self.snapshot()

    def remove_item(self, item_id: str) -> GameState:
        progression.remove_item(self._state, item_id)
        return self.snapshot()

    def use_item(self, item_id: str) -> GameState:
        """Use an inventory item. No-op once the game is lost."""
        if self.is_game_over:
            self._log.debug("Use item ignored, game over", item_id=item_id)
            return self.snapshot()
        progression.use_item(self._state, item_id)
        return self.snapshot()

    def update_character_stats(self, update: StatUpdate | Mapping[str, int]) -> GameState:
        """Merge a partial stat block into the character.

        Maximum health and mana are not recomputed until the next level-up.
        Invalid values are ignored.
        """
        if not isinstance(update, StatUpdate):
            try:
                update = StatUpdate.model_validate(dict(update))
            except PydanticValidationError as exc:
                self._log.warning("Stat update rejected", errors=exc.error_count())
                return self.snapshot()
        progression.update_stats(self._state, update)
        return self.snapshot()

    def add_to_game_log(
        self,
        text: str,
        entry_type: LogEntryType = LogEntryType.NARRATIVE,
    ) -> GameState:
        self._state.add_log_entry(text, entry_type)
        return self.snapshot()

    # =========================================================================
    # World Commands
    # =========================================================================

    def move_to_location(
        self,
        location_id: str,
        *,
        rng: random.Random | None = None,
        force: bool = False,
    ) -> GameState:
        """Travel to a location and roll for an encounter.

        Args:
            location_id: Destination id. Unknown ids are ignored.
            rng: Random source for the encounter roll.
            force: Skip the connection check even when it is enforced.

        Returns:
            Snapshot of the resulting state.
        """
        if self.is_game_over:
            self._log.debug("Move ignored, game over", location_id=location_id)
            return self.snapshot()

        location = self._catalog.get(location_id)
        if location is None:
            self._log.debug("Move ignored, unknown location", location_id=location_id)
            return self.snapshot()

        current = self._state.current_location
        if (
            self._settings.enforce_connections
            and not force
            and current is not None
            and current.id != location_id
            and not current.connects_to(location_id)
        ):
            self._log.debug(
                "Move ignored, not connected", origin=current.id, location_id=location_id
            )
            return self.snapshot()

        encounter = bool(location.enemies) and roll_encounter(
            self._settings.encounter_chance,
            rng=rng or self._rng,
        )

        self._state.current_location = location
        self._state.mark_visited(location_id)
        self._state.game_time += 1
        self._state.add_log_entry(f"You have moved to {location.name}.", LogEntryType.NARRATIVE)
        self._log.info("Moved", location_id=location_id, encounter=encounter)

        if encounter:
            self.start_combat(location.enemies)
        return self.snapshot()

    def start_new_game(self, *, rng: random.Random | None = None) -> GameState:
        """Send the character to the starting location and open the story."""
        if self._state.character is None:
            self._log.debug("New game ignored, no character")
            return self.snapshot()

        self.move_to_location(self._settings.starting_location, rng=rng, force=True)
        self._state.add_log_entry(OPENING_NARRATIVE, LogEntryType.NARRATIVE)
        return self.snapshot()

    # =========================================================================
    # Combat Commands
    # =========================================================================

    def start_combat(self, enemies: list[Enemy]) -> GameState:
        """Start combat against a roster of enemies."""
        if self.is_game_over:
            self._log.debug("Combat ignored, game over")
            return self.snapshot()
        self._events.clear()
        combat_engine.start_combat(self._state, enemies)
        return self.snapshot()

    def attack_enemy(
        self,
        enemy_id: str,
        ability_name: str | None = None,
        *,
        rng: random.Random | None = None,
    ) -> GameState:
        """Attack an enemy and schedule the enemy turn if it survives.

        Callers should check ``player_turn`` first; attacking again while
        an enemy turn is pending schedules a second one.
        """
        outcome = combat_engine.attack_enemy(
            self._state,
            enemy_id,
            ability_name,
            rng=rng or self._rng,
            multi_level=self._settings.multi_level_up,
        )
        if outcome is not None and outcome.retaliation_pending:
            self._events.schedule(
                self._settings.retaliation_delay_seconds,
                "enemy_turn",
                partial(self._on_enemy_turn_due, outcome.combat_id),
            )
        return self.snapshot()

    def end_combat(self) -> GameState:
        """Distribute rewards from the current roster and leave combat."""
        combat_engine.end_combat(self._state, multi_level=self._settings.multi_level_up)
        return self.snapshot()

    def _on_enemy_turn_due(self, combat_id: UUID) -> None:
        combat_engine.resolve_enemy_turn(self._state, combat_id)

    def tick(self, now: float | None = None) -> int:
        """Run deferred events that are due.

        Args:
            now: Clock value to run up to. Defaults to the session clock.

        Returns:
            Number of events run.
        """
        return self._events.run_due(now)

    def flush_pending(self) -> int:
        """Run every deferred event immediately."""
        return self._events.run_all()

    # =========================================================================
    # Narrative
    # =========================================================================

    def _narrator_failed(self, kind: str, exc: Exception | None) -> None:
        self._state.add_log_entry(NARRATOR_UNAVAILABLE, LogEntryType.SYSTEM)
        if exc is None:
            self._log.info("No narrator configured, using fallback", kind=kind)
        else:
            self._log.warning("Narration failed, using fallback", kind=kind, error=str(exc))

    def narrate(self, action: str | None = None) -> NarrativeResponse:
        """Narrate the current scene, or the outcome of a player action.

        The narration is appended to the game log. When the narrator is
        missing or fails, a fixed fallback text is returned and a system
        entry is logged instead.
        """
        character = self._state.character
        location = self._state.current_location
        if character is None or location is None:
            return NarrativeResponse(text=SCENE_FALLBACK, is_fallback=True)

        context = NarrativeContext(
            character=character.model_copy(deep=True),
            location=location.model_copy(deep=True),
            recent_log=self._state.recent_log(self._settings.narrative_context_size),
            action=action,
        )

        if self._narrator is None:
            self._narrator_failed("scene", None)
            return NarrativeResponse(text=SCENE_FALLBACK, is_fallback=True)
        try:
            response = self._narrator.narrate_scene(context)
        except NarrativeError as exc:
            self._narrator_failed("scene", exc)
            return NarrativeResponse(text=SCENE_FALLBACK, is_fallback=True)

        self._state.add_log_entry(response.text, LogEntryType.NARRATIVE)
        return response

    def narrate_combat(self, action: str, result: str) -> NarrativeResponse:
        """Narrate a moment of the current fight."""
        character = self._state.character
        if character is None:
            return NarrativeResponse(text=COMBAT_FALLBACK, is_fallback=True)
        enemies: list[Enemy] = []
        if self._state.combat is not None:
            enemies = [enemy.model_copy(deep=True) for enemy in self._state.combat.enemies]

        if self._narrator is None:
            self._narrator_failed("combat", None)
            return NarrativeResponse(text=COMBAT_FALLBACK, is_fallback=True)
        try:
            response = self._narrator.narrate_combat(
                character.model_copy(deep=True), enemies, action, result
            )
        except NarrativeError as exc:
            self._narrator_failed("combat", exc)
            return NarrativeResponse(text=COMBAT_FALLBACK, is_fallback=True)

        self._state.add_log_entry(response.text, LogEntryType.COMBAT)
        return response

    def describe_character(
        self,
        description: str,
        character_class: CharacterClass,
    ) -> NarrativeResponse:
        """Expand a short character description. Nothing is logged on success."""
        if self._narrator is None:
            self._narrator_failed("character_description", None)
            return NarrativeResponse(text=CHARACTER_DESCRIPTION_FALLBACK, is_fallback=True)
        try:
            return self._narrator.describe_character(description, str(character_class))
        except NarrativeError as exc:
            self._narrator_failed("character_description", exc)
            return NarrativeResponse(text=CHARACTER_DESCRIPTION_FALLBACK, is_fallback=True)

    # =========================================================================
    # Persistence
    # =========================================================================

    def _get_database(self) -> Database:
        if self._database is None:
            self._database = self._database_factory()
        return self._database

    def save(self, slot: str | None = None) -> bool:
        """Save the game to a slot.

        Returns:
            True on success. Failures are logged and leave state untouched.
        """
        slot = slot or get_settings().storage.default_slot
        try:
            self._get_database().save_game(slot, self._state.to_saved_game())
        except PersistenceError as exc:
            self._log.error("Failed to save game", slot=slot, error=str(exc))
            return False
        return True

    def load(self, slot: str | None = None) -> bool:
        """Load the game from a slot.

        A missing save is not an error: the state is left as it is and
        False is returned. Combat always starts idle after a load.

        Returns:
            True when a save was loaded.
        """
        slot = slot or get_settings().storage.default_slot
        try:
            saved = self._get_database().load_game(slot)
        except PersistenceError as exc:
            self._log.error("Failed to load game", slot=slot, error=str(exc))
            return False

        if saved is None:
            self._log.info("No saved game found", slot=slot)
            return False

        self._events.clear()
        self._state = GameState.from_saved_game(saved)
        self._log.info("Game loaded", slot=slot)
        return True


def create_session(settings: Settings | None = None, **kwargs: Any) -> GameSession:
    """Build a fully wired session from application settings.

    Configures logging and picks the narrator and save store from the
    settings. The save store is opened on the first save or load, so a bad
    database path shows up as a failed save rather than here. Extra keyword
    arguments are passed to GameSession.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    kwargs.setdefault("narrator", create_narrator(settings.narrative))
    kwargs.setdefault(
        "database_factory", partial(Database, settings.storage.database_path)
    )
    return GameSession(settings=settings.game, **kwargs)


__all__ = [
    "NARRATOR_UNAVAILABLE",
    "GameSession",
    "create_session",
]
