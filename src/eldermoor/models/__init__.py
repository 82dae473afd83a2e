"""Pydantic V2 schemas for the Eldermoor engine.

This module provides the complete data model layer: the player character,
items, world reference data, the combat session and the game state with
its persistence record.

Submodules:
    enums: Enumeration types (CharacterClass, Relic, LogEntryType, etc.)
    items: Items and item effects
    character: Character, stat block and progression rules
    world: Locations, enemies, NPCs and quests
    combat: Transient combat session
    game_state: GameState, GameLogEntry and SavedGame

Example:
    >>> from eldermoor.models import CharacterClass, Relic, create_character
    >>> hero = create_character("Mira", "A wandering healer.", CharacterClass.CLERIC,
    ...                         Relic.DIVINE_AMULET)
    >>> hero.stats.wisdom
    8
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from eldermoor.models.enums import (
    AbilityType,
    CharacterClass,
    CombatPhase,
    EffectTarget,
    EffectType,
    ItemRarity,
    ItemType,
    LogEntryType,
    NPCAttitude,
    QuestObjectiveType,
    QuestRewardType,
    Relic,
)

# =============================================================================
# Items and Character
# =============================================================================
from eldermoor.models.items import Item, ItemEffect
from eldermoor.models.character import (
    Ability,
    Character,
    ExperienceGain,
    StatBlock,
    StatUpdate,
    base_stats_for,
    create_character,
    experience_threshold,
    max_health_for,
    max_mana_for,
    stat_growth_for,
)

# =============================================================================
# World, Combat and Game State
# =============================================================================
from eldermoor.models.world import (
    NPC,
    DialogOption,
    DialogResponse,
    Enemy,
    EnemyStats,
    Location,
    Quest,
    QuestObjective,
    QuestReward,
)
from eldermoor.models.combat import CombatState
from eldermoor.models.game_state import GameLogEntry, GameState, SavedGame


__all__ = [
    # Enums
    "AbilityType",
    "CharacterClass",
    "CombatPhase",
    "EffectTarget",
    "EffectType",
    "ItemRarity",
    "ItemType",
    "LogEntryType",
    "NPCAttitude",
    "QuestObjectiveType",
    "QuestRewardType",
    "Relic",
    # Items
    "Item",
    "ItemEffect",
    # Character
    "Ability",
    "Character",
    "ExperienceGain",
    "StatBlock",
    "StatUpdate",
    "base_stats_for",
    "create_character",
    "experience_threshold",
    "max_health_for",
    "max_mana_for",
    "stat_growth_for",
    # World
    "NPC",
    "DialogOption",
    "DialogResponse",
    "Enemy",
    "EnemyStats",
    "Location",
    "Quest",
    "QuestObjective",
    "QuestReward",
    # Combat and state
    "CombatState",
    "GameLogEntry",
    "GameState",
    "SavedGame",
]
