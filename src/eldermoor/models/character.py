"""Pydantic V2 schemas for the player character.

This module owns the character's progression rules: the per-class base
stat table, the per-class growth on level-up, and the formulas deriving
maximum health and mana from stats. The character is only ever mutated
by the game session through the methods defined here, which keep the
resource invariants (0 <= health <= max_health, 0 <= mana <= max_mana)
intact on every change.

Example:
    >>> hero = create_character("Aldric", "A weary sellsword.", CharacterClass.WARRIOR,
    ...                         Relic.BLADE_OF_EMBER)
    >>> hero.max_health
    55
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from eldermoor.core.constants import (
    BASE_HEALTH,
    EXPERIENCE_PER_LEVEL,
    HEALTH_PER_CONSTITUTION,
    MANA_PER_INTELLIGENCE,
    STARTING_LEVEL,
)
from eldermoor.models.enums import AbilityType, CharacterClass, Relic
from eldermoor.models.items import Item


StatValue = Annotated[int, Field(ge=0, description="Attribute score")]


# =============================================================================
# Stat Block
# =============================================================================


class StatBlock(BaseModel):
    """The six character attributes."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    strength: StatValue = 5
    dexterity: StatValue = 5
    constitution: StatValue = 5
    intelligence: StatValue = 5
    wisdom: StatValue = 5
    charisma: StatValue = 5


class StatUpdate(BaseModel):
    """A partial stat block used to patch a character's attributes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: StatValue | None = None
    dexterity: StatValue | None = None
    constitution: StatValue | None = None
    intelligence: StatValue | None = None
    wisdom: StatValue | None = None
    charisma: StatValue | None = None


class Ability(BaseModel):
    """A character or enemy ability. Stored as data, never executed."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    damage: int | None = None
    healing: int | None = None
    mana_cost: Annotated[int, Field(ge=0)] = 0
    cooldown: Annotated[int, Field(ge=0)] = 0
    aoe: bool = False
    type: AbilityType = AbilityType.ATTACK


# =============================================================================
# Class Tables
# =============================================================================


def base_stats_for(character_class: CharacterClass) -> StatBlock:
    """Get the starting stat block for a class.

    Args:
        character_class: The class to look up.

    Returns:
        A fresh StatBlock with the class's base values.
    """
    match character_class:
        case CharacterClass.WARRIOR:
            return StatBlock(
                strength=8, dexterity=5, constitution=7, intelligence=3, wisdom=4, charisma=5
            )
        case CharacterClass.MAGE:
            return StatBlock(
                strength=3, dexterity=4, constitution=4, intelligence=8, wisdom=7, charisma=6
            )
        case CharacterClass.ROGUE:
            return StatBlock(
                strength=5, dexterity=8, constitution=5, intelligence=6, wisdom=4, charisma=6
            )
        case CharacterClass.CLERIC:
            return StatBlock(
                strength=5, dexterity=4, constitution=6, intelligence=5, wisdom=8, charisma=7
            )


def stat_growth_for(character_class: CharacterClass) -> dict[str, int]:
    """Get the per-level stat increases for a class.

    Args:
        character_class: The class to look up.

    Returns:
        Mapping of attribute name to increase.
    """
    match character_class:
        case CharacterClass.WARRIOR:
            return {"strength": 2, "constitution": 1}
        case CharacterClass.MAGE:
            return {"intelligence": 2, "wisdom": 1}
        case CharacterClass.ROGUE:
            return {"dexterity": 2, "charisma": 1}
        case CharacterClass.CLERIC:
            return {"wisdom": 2, "constitution": 1}


def max_health_for(stats: StatBlock) -> int:
    """Derive maximum health from constitution."""
    return BASE_HEALTH + HEALTH_PER_CONSTITUTION * stats.constitution


def max_mana_for(stats: StatBlock) -> int:
    """Derive maximum mana from intelligence."""
    return MANA_PER_INTELLIGENCE * stats.intelligence


def experience_threshold(level: int) -> int:
    """Experience needed to advance past ``level`` (not cumulative)."""
    return level * EXPERIENCE_PER_LEVEL


# =============================================================================
# Character
# =============================================================================


@dataclass(frozen=True)
class ExperienceGain:
    """Outcome of an experience grant.

    Attributes:
        amount: Experience granted.
        old_level: Level before the grant.
        new_level: Level after the grant.
        experience: Experience left toward the next level.
    """

    amount: int
    old_level: int
    new_level: int
    experience: int

    @property
    def levels_gained(self) -> int:
        return self.new_level - self.old_level

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


class Character(BaseModel):
    """The player character.

    Attributes:
        id: Unique character identifier.
        name: Character name.
        description: Player-provided or generated description.
        character_class: Class, which fixes base stats and growth.
        relic: Cosmetic starting relic.
        level: Current level (>= 1).
        experience: Experience toward the next level (>= 0).
        health: Current health.
        max_health: Maximum health.
        mana: Current mana.
        max_mana: Maximum mana.
        inventory: Ordered items; first match wins on lookup.
        stats: The six attributes.
        abilities: Ability placeholders.
        gold: Gold carried (>= 0).
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique identifier")
    name: str = Field(min_length=1, max_length=100, description="Character name")
    description: str = Field(default="", description="Character description")
    character_class: CharacterClass = Field(description="Character class")
    relic: Relic = Field(description="Starting relic")
    level: Annotated[int, Field(ge=1)] = STARTING_LEVEL
    experience: Annotated[int, Field(ge=0)] = 0
    health: Annotated[int, Field(ge=0)]
    max_health: Annotated[int, Field(ge=0)]
    mana: Annotated[int, Field(ge=0)]
    max_mana: Annotated[int, Field(ge=0)]
    inventory: list[Item] = Field(default_factory=list)
    stats: StatBlock = Field(default_factory=StatBlock)
    abilities: list[Ability] = Field(default_factory=list)
    gold: Annotated[int, Field(ge=0)] = 0

    @model_validator(mode="after")
    def check_resources(self) -> Self:
        """Reject current values above their maxima."""
        if self.health > self.max_health:
            raise ValueError(f"health {self.health} exceeds max_health {self.max_health}")
        if self.mana > self.max_mana:
            raise ValueError(f"mana {self.mana} exceeds max_mana {self.max_mana}")
        return self

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    @property
    def experience_to_next_level(self) -> int:
        return experience_threshold(self.level) - self.experience

    # -------------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------------

    def find_item(self, item_id: str) -> Item | None:
        """Return the first inventory item with ``item_id``, if any."""
        return next((item for item in self.inventory if item.id == item_id), None)

    def add_item(self, item: Item) -> None:
        """Append an item to the end of the inventory."""
        self.inventory = [*self.inventory, item]

    def remove_item(self, item_id: str) -> int:
        """Remove every inventory item with ``item_id``.

        Returns:
            Number of items removed (0 when the id is absent).
        """
        kept = [item for item in self.inventory if item.id != item_id]
        removed = len(self.inventory) - len(kept)
        if removed:
            self.inventory = kept
        return removed

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def heal(self, amount: int) -> int:
        """Restore health, capped at max_health.

        Returns:
            Health actually restored.
        """
        new_health = min(self.health + max(0, amount), self.max_health)
        restored = new_health - self.health
        self.health = new_health
        return restored

    def take_damage(self, amount: int) -> int:
        """Reduce health, floored at zero.

        Returns:
            Health actually lost.
        """
        new_health = max(0, self.health - max(0, amount))
        lost = self.health - new_health
        self.health = new_health
        return lost

    def add_gold(self, amount: int) -> None:
        self.gold = max(0, self.gold + amount)

    def update_stats(self, update: StatUpdate) -> None:
        """Merge a partial stat block into the current stats.

        Derived maxima are left as they are until the next level-up.
        """
        changes = update.model_dump(exclude_none=True)
        self.stats = self.stats.model_copy(update=changes)

    def _restore_to(self, max_health: int, max_mana: int) -> None:
        # Assign in an order that never leaves current above max mid-update.
        if max_health >= self.max_health:
            self.max_health = max_health
            self.health = max_health
        else:
            self.health = max_health
            self.max_health = max_health
        if max_mana >= self.max_mana:
            self.max_mana = max_mana
            self.mana = max_mana
        else:
            self.mana = max_mana
            self.max_mana = max_mana

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def gain_experience(self, amount: int, *, multi_level: bool = True) -> ExperienceGain:
        """Add experience and resolve level-ups.

        The threshold for each level is ``level * 100`` and the excess
        carries over. Every level gained applies the class growth; after
        any level-up, maxima are recomputed and health and mana fully
        restored.

        Args:
            amount: Experience to add. Negative amounts count as zero.
            multi_level: Keep leveling while the remainder still crosses
                the next threshold. When False, at most one level is gained.

        Returns:
            ExperienceGain describing the outcome.
        """
        amount = max(0, amount)
        old_level = self.level
        level = self.level
        total = self.experience + amount
        growth = stat_growth_for(self.character_class)

        while total >= experience_threshold(level):
            total -= experience_threshold(level)
            level += 1
            self.stats = self.stats.model_copy(
                update={name: getattr(self.stats, name) + bonus for name, bonus in growth.items()}
            )
            if not multi_level:
                break

        self.level = level
        self.experience = total
        if level > old_level:
            self._restore_to(max_health_for(self.stats), max_mana_for(self.stats))

        return ExperienceGain(
            amount=amount,
            old_level=old_level,
            new_level=level,
            experience=total,
        )


# =============================================================================
# Factory
# =============================================================================


def create_character(
    name: str,
    description: str,
    character_class: CharacterClass,
    relic: Relic,
    *,
    gold: int = 10,
) -> Character:
    """Create a level 1 character from the class base stats.

    Args:
        name: Character name.
        description: Character description.
        character_class: Character class.
        relic: Starting relic.
        gold: Starting gold.

    Returns:
        A new Character at full health and mana.
    """
    stats = base_stats_for(character_class)
    health = max_health_for(stats)
    mana = max_mana_for(stats)

    return Character(
        name=name,
        description=description,
        character_class=character_class,
        relic=relic,
        level=STARTING_LEVEL,
        experience=0,
        health=health,
        max_health=health,
        mana=mana,
        max_mana=mana,
        stats=stats,
        gold=gold,
    )


__all__ = [
    "StatValue",
    "StatBlock",
    "StatUpdate",
    "Ability",
    "ExperienceGain",
    "Character",
    "base_stats_for",
    "stat_growth_for",
    "max_health_for",
    "max_mana_for",
    "experience_threshold",
    "create_character",
]
