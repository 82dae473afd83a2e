"""Pydantic V2 schemas for combat management.

A CombatState is the transient record of one fight. Its ``id`` is the
identity deferred enemy turns compare against before touching state, so
a retaliation scheduled for one fight never lands in another.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from eldermoor.models.enums import CombatPhase
from eldermoor.models.world import Enemy


class CombatState(BaseModel):
    """Current state of a combat encounter.

    Attributes:
        id: Identity of this combat session.
        in_combat: Whether the fight is still running.
        phase: Whose move it is, or the terminal defeated phase.
        enemies: Working roster, deep-copied from world data.
        player_turn: True while the player may act.
        round: Round counter, starting at 1.
        combat_log: Combat messages for this fight.
        started_at: When combat started.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    id: UUID = Field(default_factory=uuid4, description="Combat session identity")
    in_combat: bool = Field(default=True, description="Combat is running")
    phase: CombatPhase = Field(default=CombatPhase.PLAYER_TURN, description="Combat phase")
    enemies: list[Enemy] = Field(default_factory=list, description="Working roster")
    player_turn: bool = Field(default=True, description="Player may act")
    round: Annotated[int, Field(ge=1, description="Current round")] = 1
    combat_log: list[str] = Field(default_factory=list, description="Combat messages")
    started_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_active(self) -> bool:
        return self.in_combat and self.phase != CombatPhase.DEFEATED

    def find_enemy(self, enemy_id: str) -> int | None:
        """Index of the first roster entry with ``enemy_id``, if any."""
        return next(
            (index for index, enemy in enumerate(self.enemies) if enemy.id == enemy_id),
            None,
        )

    def living_enemies(self) -> list[Enemy]:
        return [enemy for enemy in self.enemies if not enemy.is_defeated]

    def set_turn(self, phase: CombatPhase) -> None:
        """Move to ``phase`` and keep ``player_turn`` in step with it."""
        self.phase = phase
        self.player_turn = phase == CombatPhase.PLAYER_TURN


__all__ = [
    "CombatState",
]
