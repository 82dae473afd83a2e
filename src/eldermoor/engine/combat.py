"""Combat resolution.

The functions here drive the combat state machine on a GameState:

    Idle -> PlayerTurn -> EnemyTurn (deferred) -> PlayerTurn
                       -> Idle      (every enemy defeated)
                       -> Defeated  (player at zero health, terminal)

Idle is ``state.combat is None``. Enemy retaliation is not resolved here
when the player attacks; ``attack_enemy`` reports that a retaliation is
pending and the owner of the state schedules ``resolve_enemy_turn`` with
the combat id. A stale callback finds a different (or no) combat and
does nothing.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from uuid import UUID

from eldermoor.core.logging import get_logger
from eldermoor.engine.dice import calculate_damage, retaliation_damage
from eldermoor.engine.progression import award_experience
from eldermoor.models.combat import CombatState
from eldermoor.models.enums import CombatPhase, LogEntryType
from eldermoor.models.game_state import GameState
from eldermoor.models.items import Item
from eldermoor.models.world import Enemy


logger = get_logger(__name__)


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class AttackOutcome:
    """Result of a player attack.

    Attributes:
        combat_id: Combat the attack belonged to.
        enemy_id: Target id.
        enemy_name: Target name.
        damage: Damage dealt.
        enemy_health: Target health after the blow (floored at 0).
        defeated: Whether the target died.
        victory: Whether the attack ended the combat.
        retaliation_pending: Whether an enemy turn must now be scheduled.
    """

    combat_id: UUID
    enemy_id: str
    enemy_name: str
    damage: int
    enemy_health: int
    defeated: bool
    victory: bool
    retaliation_pending: bool


@dataclass(frozen=True)
class RetaliationOutcome:
    """Result of an enemy turn."""

    damage: int
    player_health: int
    player_defeated: bool


@dataclass(frozen=True)
class CombatRewards:
    """Rewards distributed when combat ends."""

    experience: int
    gold: int
    drops: list[Item] = field(default_factory=list)


# =============================================================================
# Helpers
# =============================================================================


def log_combat(state: GameState, text: str, entry_type: LogEntryType = LogEntryType.COMBAT) -> None:
    """Append to the game log and mirror the text into the combat log."""
    state.add_log_entry(text, entry_type)
    if state.combat is not None:
        state.combat.combat_log.append(text)


# =============================================================================
# State Machine
# =============================================================================


def start_combat(state: GameState, enemies: list[Enemy]) -> CombatState | None:
    """Open a combat session against ``enemies``.

    The roster is deep-copied so damage never reaches the world data. Any
    previous combat is replaced, which also invalidates its pending
    enemy turns.

    Args:
        state: Session state to mutate.
        enemies: Enemies to fight.

    Returns:
        The new CombatState, or None for an empty roster.
    """
    if not enemies:
        logger.debug("Combat not started, empty roster")
        return None

    roster = [enemy.model_copy(deep=True) for enemy in enemies]
    state.combat = CombatState(enemies=roster)

    names = ", ".join(enemy.name for enemy in roster)
    log_combat(state, f"Combat started! You are facing {names}.")
    logger.info("Combat started", combat_id=str(state.combat.id), enemies=len(roster))
    return state.combat


def attack_enemy(
    state: GameState,
    enemy_id: str,
    ability_name: str | None = None,
    *,
    rng: random.Random | None = None,
    multi_level: bool = True,
) -> AttackOutcome | None:
    """Resolve a player attack on one enemy.

    Args:
        state: Session state to mutate.
        enemy_id: Target enemy.
        ability_name: Ability label. Abilities are not resolved; every
            attack is a basic melee blow.
        rng: Random source for the damage bonus.
        multi_level: Passed through to reward distribution on victory.

    Returns:
        AttackOutcome, or None when there is no active combat, no living
        character or no such enemy.
    """
    combat = state.combat
    character = state.character
    if combat is None or not combat.is_active or character is None or character.is_defeated:
        logger.debug("Attack ignored, no active combat", enemy_id=enemy_id)
        return None

    index = combat.find_enemy(enemy_id)
    if index is None:
        logger.debug("Attack ignored, unknown enemy", enemy_id=enemy_id)
        return None

    enemy = combat.enemies[index]
    roll = calculate_damage(character.stats.strength, character.stats.dexterity, rng=rng)
    enemy.health = max(0, enemy.health - roll.total)
    lethal = enemy.is_defeated

    if not lethal:
        combat.round += 1
    combat.player_turn = False

    log_combat(state, f"You hit {enemy.name} for {roll.total} damage.")
    logger.info(
        "Player attacked",
        enemy_id=enemy.id,
        damage=roll.total,
        enemy_health=enemy.health,
        ability=ability_name,
        round=combat.round,
    )

    outcome_kwargs = {
        "combat_id": combat.id,
        "enemy_id": enemy.id,
        "enemy_name": enemy.name,
        "damage": roll.total,
        "enemy_health": enemy.health,
    }

    if not lethal:
        combat.set_turn(CombatPhase.ENEMY_TURN)
        return AttackOutcome(
            **outcome_kwargs, defeated=False, victory=False, retaliation_pending=True
        )

    log_combat(state, f"You defeated {enemy.name}!")
    if not combat.living_enemies():
        end_combat(state, multi_level=multi_level)
        return AttackOutcome(
            **outcome_kwargs, defeated=True, victory=True, retaliation_pending=False
        )

    combat.enemies = combat.living_enemies()
    combat.set_turn(CombatPhase.PLAYER_TURN)
    return AttackOutcome(**outcome_kwargs, defeated=True, victory=False, retaliation_pending=False)


def resolve_enemy_turn(state: GameState, combat_id: UUID) -> RetaliationOutcome | None:
    """Resolve the deferred enemy turn for combat ``combat_id``.

    Every surviving enemy deals ``max(1, floor(strength * 1.2))``; the sum
    is applied to the character, floored at zero. At zero health the
    combat enters the terminal defeated phase.

    Args:
        state: Live session state.
        combat_id: Combat the retaliation was scheduled for.

    Returns:
        RetaliationOutcome, or None when that combat is no longer active.
    """
    combat = state.combat
    character = state.character
    if combat is None or combat.id != combat_id or not combat.is_active or character is None:
        logger.debug("Stale enemy turn discarded", combat_id=str(combat_id))
        return None

    damage = retaliation_damage(combat.enemies)
    character.take_damage(damage)
    combat.set_turn(CombatPhase.PLAYER_TURN)
    log_combat(state, f"Enemies attack! You take {damage} damage.")
    logger.info("Enemies attacked", damage=damage, player_health=character.health)

    if character.is_defeated:
        log_combat(state, "You have been defeated! Game over.", LogEntryType.SYSTEM)
        combat.set_turn(CombatPhase.DEFEATED)
        combat.in_combat = False
        logger.info("Player defeated", combat_id=str(combat.id), round=combat.round)

    return RetaliationOutcome(
        damage=damage,
        player_health=character.health,
        player_defeated=character.is_defeated,
    )


def end_combat(state: GameState, *, multi_level: bool = True) -> CombatRewards | None:
    """Distribute rewards from the current roster and return to idle.

    Experience and gold are summed over every enemy still on the roster
    (including one just killed by the finishing blow) and drops are moved
    to the inventory.

    Args:
        state: Session state to mutate.
        multi_level: Passed through to the experience grant.

    Returns:
        CombatRewards, or None when there is no active combat or character.
        An active combat with an empty roster is logged, cleared and
        also returns None.
    """
    combat = state.combat
    character = state.character
    if combat is None or not combat.is_active or character is None:
        logger.debug("End combat ignored, no active combat")
        return None
    if not combat.enemies:
        logger.error("Active combat has an empty roster", round=combat.round)
        state.combat = None
        return None

    experience = sum(enemy.experience for enemy in combat.enemies)
    gold = sum(enemy.gold for enemy in combat.enemies)
    drops = [item.model_copy(deep=True) for enemy in combat.enemies for item in enemy.drops]

    for item in drops:
        character.add_item(item)
    award_experience(state, experience, multi_level=multi_level)
    character.add_gold(gold)

    log_combat(state, f"Combat ended. You gained {experience} experience and {gold} gold.")
    logger.info(
        "Combat ended",
        combat_id=str(combat.id),
        experience=experience,
        gold=gold,
        drops=len(drops),
        rounds=combat.round,
    )
    state.combat = None
    return CombatRewards(experience=experience, gold=gold, drops=drops)


__all__ = [
    "AttackOutcome",
    "RetaliationOutcome",
    "CombatRewards",
    "log_combat",
    "start_combat",
    "attack_enemy",
    "resolve_enemy_turn",
    "end_combat",
]
