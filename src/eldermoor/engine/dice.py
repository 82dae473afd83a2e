"""Damage and encounter rolls.

Every roll takes an explicit ``random.Random`` so callers (and tests) can
seed per call without touching the global generator.

Example:
    >>> import random
    >>> roll = calculate_damage(8, 5, rng=random.Random(7))
    >>> 12 <= roll.total <= 15
    True
"""

from __future__ import annotations

import math
import random
from collections.abc import Iterable
from dataclasses import dataclass

from eldermoor.core.constants import (
    ENEMY_DAMAGE_MULTIPLIER,
    MIN_ENEMY_DAMAGE,
    PLAYER_DAMAGE_MULTIPLIER,
    PLAYER_DAMAGE_VARIANCE,
)
from eldermoor.core.logging import get_logger
from eldermoor.models.world import Enemy


logger = get_logger(__name__)


@dataclass(frozen=True)
class DamageRoll:
    """A resolved player damage roll.

    Attributes:
        base: Damage from the attacking stat.
        bonus: Random bonus (0 to 3).
        is_ranged: Whether dexterity was used.
    """

    base: int
    bonus: int
    is_ranged: bool

    @property
    def total(self) -> int:
        return self.base + self.bonus


def calculate_damage(
    strength: int,
    dexterity: int,
    *,
    is_ranged: bool = False,
    rng: random.Random | None = None,
) -> DamageRoll:
    """Roll player damage.

    Damage is ``floor(stat * 1.5) + floor(random() * 4)`` where the stat is
    strength for melee and dexterity for ranged attacks.

    Args:
        strength: Attacker strength.
        dexterity: Attacker dexterity.
        is_ranged: Use dexterity instead of strength.
        rng: Random source. A fresh unseeded one is used when omitted.

    Returns:
        DamageRoll with base and bonus parts.
    """
    rng = rng or random.Random()
    stat = dexterity if is_ranged else strength
    base = math.floor(stat * PLAYER_DAMAGE_MULTIPLIER)
    bonus = math.floor(rng.random() * PLAYER_DAMAGE_VARIANCE)

    roll = DamageRoll(base=base, bonus=bonus, is_ranged=is_ranged)
    logger.debug("Damage rolled", stat=stat, base=base, bonus=bonus, is_ranged=is_ranged)
    return roll


def enemy_damage(strength: int) -> int:
    """Damage one enemy deals on retaliation: ``max(1, floor(str * 1.2))``."""
    return max(MIN_ENEMY_DAMAGE, math.floor(strength * ENEMY_DAMAGE_MULTIPLIER))


def retaliation_damage(enemies: Iterable[Enemy]) -> int:
    """Summed retaliation damage of every surviving enemy."""
    return sum(enemy_damage(enemy.stats.strength) for enemy in enemies if not enemy.is_defeated)


def roll_encounter(chance: float, *, rng: random.Random | None = None) -> bool:
    """Roll for a random encounter.

    Args:
        chance: Probability in [0, 1].
        rng: Random source. A fresh unseeded one is used when omitted.

    Returns:
        True when the encounter triggers.
    """
    rng = rng or random.Random()
    return rng.random() < chance


__all__ = [
    "DamageRoll",
    "calculate_damage",
    "enemy_damage",
    "retaliation_damage",
    "roll_encounter",
]
