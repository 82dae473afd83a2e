"""Game engine: rolls, deferred events, combat and the game session.

Exports:
    GameSession: Owner and sole mutator of a game's state.
    create_session: Build a session wired from application settings.
    EventQueue: Deferred task queue drained by the session.
    calculate_damage: Player damage roll.
"""

from __future__ import annotations

from eldermoor.engine.combat import (
    AttackOutcome,
    CombatRewards,
    RetaliationOutcome,
    attack_enemy,
    end_combat,
    resolve_enemy_turn,
    start_combat,
)
from eldermoor.engine.dice import (
    DamageRoll,
    calculate_damage,
    enemy_damage,
    retaliation_damage,
    roll_encounter,
)
from eldermoor.engine.progression import award_experience, use_item
from eldermoor.engine.scheduler import EventQueue, ScheduledTask
from eldermoor.engine.session import NARRATOR_UNAVAILABLE, GameSession, create_session


__all__ = [
    # Session
    "GameSession",
    "create_session",
    "NARRATOR_UNAVAILABLE",
    # Scheduling
    "EventQueue",
    "ScheduledTask",
    # Combat
    "AttackOutcome",
    "RetaliationOutcome",
    "CombatRewards",
    "start_combat",
    "attack_enemy",
    "resolve_enemy_turn",
    "end_combat",
    # Progression
    "award_experience",
    "use_item",
    # Dice
    "DamageRoll",
    "calculate_damage",
    "enemy_damage",
    "retaliation_damage",
    "roll_encounter",
]
