"""Tests for combat resolution on a game state."""

from __future__ import annotations

import random

from eldermoor.engine.combat import (
    attack_enemy,
    end_combat,
    resolve_enemy_turn,
    start_combat,
)
from eldermoor.models import CombatPhase, Enemy, GameState, LogEntryType


class TestStartCombat:
    """Tests for start_combat."""

    def test_opens_combat(self, game_state: GameState, wolf: Enemy) -> None:
        """Test a new combat starts on the player's turn at round one."""
        combat = start_combat(game_state, [wolf])

        assert combat is not None
        assert game_state.in_combat
        assert combat.player_turn is True
        assert combat.round == 1
        assert game_state.game_log[-1].text == "Combat started! You are facing Shadow Wolf."
        assert game_state.game_log[-1].type == LogEntryType.COMBAT
        assert combat.combat_log == ["Combat started! You are facing Shadow Wolf."]

    def test_roster_is_deep_copied(self, game_state: GameState, wolf: Enemy) -> None:
        """Test damage in combat never reaches the source enemy."""
        start_combat(game_state, [wolf])
        game_state.combat.enemies[0].health = 1

        assert wolf.health == 15

    def test_names_all_participants(self, game_state: GameState, wolf: Enemy, brute: Enemy) -> None:
        """Test the start entry lists every enemy."""
        start_combat(game_state, [wolf, brute])

        assert game_state.game_log[-1].text.endswith("Shadow Wolf, Grave Brute.")

    def test_empty_roster_ignored(self, game_state: GameState) -> None:
        """Test an empty roster does not start combat."""
        assert start_combat(game_state, []) is None
        assert game_state.combat is None


class TestAttackEnemy:
    """Tests for attack_enemy."""

    def test_no_combat_is_noop(self, game_state: GameState) -> None:
        """Test attacking outside combat does nothing."""
        assert attack_enemy(game_state, "wolf1") is None
        assert game_state.game_log == []

    def test_unknown_enemy_is_noop(self, game_state: GameState, wolf: Enemy) -> None:
        """Test attacking an unknown id does nothing."""
        start_combat(game_state, [wolf])
        log_size = len(game_state.game_log)

        assert attack_enemy(game_state, "ghost") is None
        assert len(game_state.game_log) == log_size
        assert game_state.combat.player_turn is True

    def test_non_lethal_hit(
        self,
        game_state: GameState,
        wolf: Enemy,
        low_roll: random.Random,
    ) -> None:
        """Test a surviving target advances the round and hands the turn over."""
        start_combat(game_state, [wolf])

        outcome = attack_enemy(game_state, "wolf1", "Slash", rng=low_roll)

        assert outcome.damage == 12
        assert outcome.enemy_health == 3
        assert outcome.retaliation_pending is True
        combat = game_state.combat
        assert combat.round == 2
        assert combat.player_turn is False
        assert combat.phase == CombatPhase.ENEMY_TURN
        assert game_state.game_log[-1].text == "You hit Shadow Wolf for 12 damage."

    def test_lethal_hit_on_last_enemy(
        self,
        game_state: GameState,
        weak_enemy: Enemy,
        low_roll: random.Random,
    ) -> None:
        """Test killing the last enemy ends combat and pays out once."""
        start_combat(game_state, [weak_enemy])

        outcome = attack_enemy(game_state, "rat1", rng=low_roll)

        assert outcome.defeated is True
        assert outcome.victory is True
        assert outcome.retaliation_pending is False
        assert game_state.combat is None
        character = game_state.character
        assert character.experience == 30
        assert character.gold == 14
        assert [item.id for item in character.inventory] == ["rat-tail"]
        texts = [entry.text for entry in game_state.game_log]
        assert "You defeated Plague Rat!" in texts
        assert texts[-1] == "Combat ended. You gained 30 experience and 4 gold."

    def test_lethal_hit_with_survivors(
        self,
        game_state: GameState,
        weak_enemy: Enemy,
        wolf: Enemy,
        low_roll: random.Random,
    ) -> None:
        """Test killing one of several enemies keeps the round and the turn."""
        start_combat(game_state, [weak_enemy, wolf])

        outcome = attack_enemy(game_state, "rat1", rng=low_roll)

        combat = game_state.combat
        assert outcome.defeated is True
        assert outcome.victory is False
        assert outcome.retaliation_pending is False
        assert combat.round == 1
        assert combat.player_turn is True
        assert [enemy.id for enemy in combat.enemies] == ["wolf1"]

    def test_defeated_player_cannot_attack(self, game_state: GameState, wolf: Enemy) -> None:
        """Test attacks need a living character."""
        start_combat(game_state, [wolf])
        game_state.character.take_damage(1000)

        assert attack_enemy(game_state, "wolf1") is None


class TestResolveEnemyTurn:
    """Tests for resolve_enemy_turn."""

    def test_retaliation(
        self,
        game_state: GameState,
        wolf: Enemy,
        low_roll: random.Random,
    ) -> None:
        """Test surviving enemies strike back and the turn returns."""
        start_combat(game_state, [wolf])
        outcome = attack_enemy(game_state, "wolf1", rng=low_roll)

        result = resolve_enemy_turn(game_state, outcome.combat_id)

        assert result.damage == 3
        assert game_state.character.health == 55 - 3
        assert game_state.combat.player_turn is True
        assert game_state.game_log[-1].text == "Enemies attack! You take 3 damage."

    def test_stale_combat_ignored(
        self,
        game_state: GameState,
        wolf: Enemy,
        low_roll: random.Random,
    ) -> None:
        """Test a retaliation for a replaced combat does nothing."""
        start_combat(game_state, [wolf])
        outcome = attack_enemy(game_state, "wolf1", rng=low_roll)
        start_combat(game_state, [wolf])

        assert resolve_enemy_turn(game_state, outcome.combat_id) is None
        assert game_state.character.health == 55

    def test_no_combat_ignored(
        self,
        game_state: GameState,
        wolf: Enemy,
        low_roll: random.Random,
    ) -> None:
        """Test a retaliation after combat ended does nothing."""
        start_combat(game_state, [wolf])
        outcome = attack_enemy(game_state, "wolf1", rng=low_roll)
        game_state.combat = None

        assert resolve_enemy_turn(game_state, outcome.combat_id) is None

    def test_player_defeat(
        self,
        game_state: GameState,
        brute: Enemy,
        low_roll: random.Random,
    ) -> None:
        """Test lethal retaliation enters the terminal defeated phase."""
        start_combat(game_state, [brute])
        outcome = attack_enemy(game_state, "brute1", rng=low_roll)

        result = resolve_enemy_turn(game_state, outcome.combat_id)

        assert result.player_defeated is True
        assert game_state.character.health == 0
        assert game_state.is_game_over
        combat = game_state.combat
        assert combat.phase == CombatPhase.DEFEATED
        assert combat.in_combat is False
        assert combat.player_turn is False
        last = game_state.game_log[-1]
        assert (last.text, last.type) == ("You have been defeated! Game over.", LogEntryType.SYSTEM)

        assert attack_enemy(game_state, "brute1", rng=low_roll) is None


class TestEndCombat:
    """Tests for end_combat."""

    def test_no_combat_is_noop(self, game_state: GameState) -> None:
        """Test ending without combat does nothing."""
        assert end_combat(game_state) is None
        assert game_state.game_log == []

    def test_rewards_current_roster(self, game_state: GameState, wolf: Enemy, brute: Enemy) -> None:
        """Test rewards sum over every enemy on the roster."""
        start_combat(game_state, [wolf, brute])

        rewards = end_combat(game_state)

        assert (rewards.experience, rewards.gold) == (110, 50)
        assert game_state.character.level == 2
        assert game_state.character.experience == 10
        assert game_state.character.gold == 60
        assert game_state.combat is None

    def test_single_experience_entry(self, game_state: GameState, wolf: Enemy) -> None:
        """Test the experience grant logs exactly once."""
        start_combat(game_state, [wolf])
        end_combat(game_state)

        texts = [entry.text for entry in game_state.game_log]
        assert texts.count("You gained 10 experience.") == 1

    def test_empty_active_roster_clears_combat(self, game_state: GameState, wolf: Enemy) -> None:
        """Test an active combat with no enemies ends without rewards."""
        start_combat(game_state, [wolf])
        game_state.combat.enemies = []
        gold = game_state.character.gold

        assert end_combat(game_state) is None
        assert game_state.combat is None
        assert game_state.character.gold == gold
