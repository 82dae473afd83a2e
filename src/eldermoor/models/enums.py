"""Enumeration types for the Eldermoor engine.

Closed sets used across the models. Branching on these is done with
exhaustive ``match`` statements so a new member fails loudly at every
switch point instead of silently falling through.
"""

from __future__ import annotations

from enum import StrEnum


class CharacterClass(StrEnum):
    """Playable character classes."""

    WARRIOR = "Warrior"
    MAGE = "Mage"
    ROGUE = "Rogue"
    CLERIC = "Cleric"


class Relic(StrEnum):
    """Starting relics. Cosmetic; no mechanical effect."""

    BLADE_OF_EMBER = "Blade of Ember"
    STAFF_OF_WHISPERS = "Staff of Whispers"
    SHADOW_CLOAK = "Shadow Cloak"
    DIVINE_AMULET = "Divine Amulet"


class ItemType(StrEnum):
    """Item classification (informational only)."""

    WEAPON = "weapon"
    ARMOR = "armor"
    POTION = "potion"
    QUEST = "quest"
    MISC = "misc"


class ItemRarity(StrEnum):
    """Item rarity tiers (informational only)."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class EffectType(StrEnum):
    """Kinds of item effects."""

    HEAL = "heal"
    DAMAGE = "damage"
    BUFF = "buff"
    DEBUFF = "debuff"


class EffectTarget(StrEnum):
    """Who an item effect applies to."""

    SELF = "self"
    ENEMY = "enemy"
    ALLIES = "allies"


class AbilityType(StrEnum):
    """Ability categories. Abilities are stored but never resolved."""

    ATTACK = "attack"
    HEAL = "heal"
    BUFF = "buff"
    DEBUFF = "debuff"
    UTILITY = "utility"


class NPCAttitude(StrEnum):
    """NPC disposition toward the player."""

    FRIENDLY = "friendly"
    NEUTRAL = "neutral"
    HOSTILE = "hostile"


class QuestObjectiveType(StrEnum):
    """Quest objective categories (data only)."""

    KILL = "kill"
    COLLECT = "collect"
    INTERACT = "interact"
    EXPLORE = "explore"


class QuestRewardType(StrEnum):
    """Quest reward categories (data only)."""

    EXPERIENCE = "experience"
    GOLD = "gold"
    ITEM = "item"


class LogEntryType(StrEnum):
    """Categories of player-facing game log entries."""

    NARRATIVE = "narrative"
    DIALOG = "dialog"
    COMBAT = "combat"
    SYSTEM = "system"


class CombatPhase(StrEnum):
    """Phases of an active combat session.

    ``Idle`` is represented by the absence of a combat object.
    """

    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    DEFEATED = "defeated"


__all__ = [
    "CharacterClass",
    "Relic",
    "ItemType",
    "ItemRarity",
    "EffectType",
    "EffectTarget",
    "AbilityType",
    "NPCAttitude",
    "QuestObjectiveType",
    "QuestRewardType",
    "LogEntryType",
    "CombatPhase",
]
