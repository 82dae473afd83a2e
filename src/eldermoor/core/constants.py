"""Game rule constants for the Eldermoor engine.

Values shared by the character model, combat engine and session. Tunable
behavior (encounter chance, delays) lives in GameSettings instead.
"""

from __future__ import annotations

# =============================================================================
# Character Resources
# =============================================================================

BASE_HEALTH = 20
"""Health every character has before constitution is applied."""

HEALTH_PER_CONSTITUTION = 5
"""Maximum health gained per point of constitution."""

MANA_PER_INTELLIGENCE = 10
"""Maximum mana gained per point of intelligence."""

STARTING_LEVEL = 1
"""Level of a freshly created character."""

EXPERIENCE_PER_LEVEL = 100
"""Experience threshold multiplier: reaching level N+1 costs N * 100."""

# =============================================================================
# Combat
# =============================================================================

PLAYER_DAMAGE_MULTIPLIER = 1.5
"""Multiplier applied to the attacking stat before flooring."""

PLAYER_DAMAGE_VARIANCE = 4
"""Random bonus range: floor(random() * 4) adds 0-3 damage."""

ENEMY_DAMAGE_MULTIPLIER = 1.2
"""Multiplier applied to an enemy's strength on retaliation."""

MIN_ENEMY_DAMAGE = 1
"""Every surviving enemy deals at least this much per retaliation."""

# =============================================================================
# Session
# =============================================================================

OPENING_NARRATIVE = (
    "Your adventure begins in the cursed village of Eldermoor. Darkness lurks in "
    "every shadow, but perhaps you can find the light..."
)
"""Narrative entry appended when a new game starts."""

SAVE_SCHEMA_VERSION = 1
"""Version stamped on every persisted save record."""


__all__ = [
    # Character
    "BASE_HEALTH",
    "HEALTH_PER_CONSTITUTION",
    "MANA_PER_INTELLIGENCE",
    "STARTING_LEVEL",
    "EXPERIENCE_PER_LEVEL",
    # Combat
    "PLAYER_DAMAGE_MULTIPLIER",
    "PLAYER_DAMAGE_VARIANCE",
    "ENEMY_DAMAGE_MULTIPLIER",
    "MIN_ENEMY_DAMAGE",
    # Session
    "OPENING_NARRATIVE",
    "SAVE_SCHEMA_VERSION",
]
