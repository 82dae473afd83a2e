"""Pydantic V2 schemas for world reference data.

Locations, enemies, NPCs and quests. NPC dialog, shops and quest
objectives are stored as data only; the engine never executes them.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from eldermoor.models.character import Ability
from eldermoor.models.enums import NPCAttitude, QuestObjectiveType, QuestRewardType
from eldermoor.models.items import Item


class WorldModel(BaseModel):
    """Base class for world data models."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )


# =============================================================================
# Enemies
# =============================================================================


class EnemyStats(WorldModel):
    """The attribute subset enemies carry."""

    strength: Annotated[int, Field(ge=0)] = 1
    dexterity: Annotated[int, Field(ge=0)] = 1
    constitution: Annotated[int, Field(ge=0)] = 1


class Enemy(WorldModel):
    """A hostile creature.

    Attributes:
        id: Enemy identifier, unique within a roster.
        name: Display name.
        description: Flavor text.
        level: Enemy level.
        health: Current health (defeated at <= 0).
        max_health: Maximum health.
        stats: Strength, dexterity and constitution.
        abilities: Ability placeholders.
        drops: Items awarded on defeat.
        experience: Experience reward.
        gold: Gold reward.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    level: Annotated[int, Field(ge=1)] = 1
    health: int
    max_health: Annotated[int, Field(ge=1)]
    stats: EnemyStats = Field(default_factory=EnemyStats)
    abilities: list[Ability] = Field(default_factory=list)
    drops: list[Item] = Field(default_factory=list)
    experience: Annotated[int, Field(ge=0)] = 0
    gold: Annotated[int, Field(ge=0)] = 0

    @property
    def is_defeated(self) -> bool:
        """True once health has dropped to zero or below."""
        return self.health <= 0


# =============================================================================
# NPCs and Dialog (data only)
# =============================================================================


class DialogResponse(WorldModel):
    id: str
    text: str
    condition: str | None = None
    action: str | None = None


class DialogOption(WorldModel):
    id: str
    text: str
    player_response: list[str] = Field(default_factory=list)
    responses: list[DialogResponse] = Field(default_factory=list)


# =============================================================================
# Quests (data only)
# =============================================================================


class QuestObjective(WorldModel):
    """A quest objective. Progress is stored, never advanced by the engine."""

    id: str
    description: str = ""
    type: QuestObjectiveType
    target: str
    count: Annotated[int, Field(ge=0)] = 1
    progress: Annotated[int, Field(ge=0)] = 0
    is_completed: bool = False


class QuestReward(WorldModel):
    type: QuestRewardType
    amount: Annotated[int, Field(ge=0)] = 0
    item: Item | None = None


class Quest(WorldModel):
    """A quest record."""

    id: str
    name: str
    description: str = ""
    objectives: list[QuestObjective] = Field(default_factory=list)
    rewards: list[QuestReward] = Field(default_factory=list)
    is_completed: bool = False
    is_active: bool = False


class NPC(WorldModel):
    """A non-player character resident at a location."""

    id: str
    name: str
    description: str = ""
    attitude: NPCAttitude = NPCAttitude.NEUTRAL
    dialog: list[DialogOption] = Field(default_factory=list)
    quests: list[Quest] = Field(default_factory=list)
    shop: list[Item] = Field(default_factory=list)


# =============================================================================
# Locations
# =============================================================================


class Location(WorldModel):
    """A node in the world graph.

    Attributes:
        id: Location identifier.
        name: Display name.
        description: Flavor text.
        image: Optional image reference.
        connections: Ordered ids of neighbouring locations.
        npcs: Resident NPCs.
        enemies: Resident enemies; a non-empty list enables encounters.
        items: Items lying around.
        quests: Quests offered here.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    image: str | None = None
    connections: list[str] = Field(default_factory=list)
    npcs: list[NPC] = Field(default_factory=list)
    enemies: list[Enemy] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)
    quests: list[Quest] = Field(default_factory=list)

    def connects_to(self, location_id: str) -> bool:
        return location_id in self.connections


__all__ = [
    "EnemyStats",
    "Enemy",
    "DialogResponse",
    "DialogOption",
    "QuestObjective",
    "QuestReward",
    "Quest",
    "NPC",
    "Location",
]
