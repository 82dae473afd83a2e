"""Tests for experience, item and stat operations on a game state."""

from __future__ import annotations

from eldermoor.engine.progression import (
    add_item,
    award_experience,
    remove_item,
    update_stats,
    use_item,
)
from eldermoor.models import (
    EffectTarget,
    EffectType,
    GameState,
    Item,
    ItemEffect,
    LogEntryType,
    StatUpdate,
)


class TestAwardExperience:
    """Tests for award_experience."""

    def test_without_character(self) -> None:
        """Test experience is ignored without a character."""
        state = GameState()

        assert award_experience(state, 50) is None
        assert state.game_log == []

    def test_plain_gain_log(self, game_state: GameState) -> None:
        """Test a gain below the threshold logs the amount."""
        award_experience(game_state, 40)

        entry = game_state.game_log[-1]
        assert entry.text == "You gained 40 experience."
        assert entry.type == LogEntryType.SYSTEM

    def test_level_up_log(self, game_state: GameState) -> None:
        """Test a level-up names the new level."""
        award_experience(game_state, 150)

        assert game_state.game_log[-1].text == (
            "You gained 150 experience and leveled up to level 2!"
        )

    def test_one_entry_per_call(self, game_state: GameState) -> None:
        """Test a multi-level grant still logs once."""
        award_experience(game_state, 1000)

        assert len(game_state.game_log) == 1
        assert game_state.character.level > 2


class TestUseItem:
    """Tests for use_item."""

    def test_heals_and_consumes(self, game_state: GameState, healing_potion: Item) -> None:
        """Test a heal potion restores health and is removed."""
        character = game_state.character
        character.take_damage(20)
        character.add_item(healing_potion)

        assert use_item(game_state, "potion-heal") is True
        assert character.health == character.max_health - 5
        assert character.inventory == []
        assert game_state.game_log[-1].text == "You used Healing Draught and restored 15 health."

    def test_heal_capped(self, game_state: GameState, healing_potion: Item) -> None:
        """Test healing never exceeds max health."""
        character = game_state.character
        character.take_damage(3)
        character.add_item(healing_potion)

        use_item(game_state, "potion-heal")

        assert character.health == character.max_health

    def test_one_entry_per_heal_effect(self, game_state: GameState) -> None:
        """Test each heal effect logs separately and other effects do nothing."""
        character = game_state.character
        character.take_damage(30)
        character.add_item(
            Item(
                id="elixir",
                name="Elixir",
                usable=True,
                effects=[
                    ItemEffect(type=EffectType.HEAL, target=EffectTarget.SELF, amount=5),
                    ItemEffect(type=EffectType.BUFF, target=EffectTarget.SELF, amount=2),
                    ItemEffect(type=EffectType.HEAL, target=EffectTarget.SELF, amount=7),
                    ItemEffect(type=EffectType.HEAL, target=EffectTarget.ALLIES, amount=9),
                ],
            )
        )

        use_item(game_state, "elixir")

        assert len(game_state.game_log) == 2
        assert character.health == character.max_health - 30 + 12

    def test_not_usable_is_noop(self, game_state: GameState) -> None:
        """Test items without the usable flag are left alone."""
        trinket = Item(id="trinket", name="Trinket", usable=False)
        game_state.character.add_item(trinket)
        before = game_state.model_copy(deep=True)

        assert use_item(game_state, "trinket") is False
        assert game_state == before

    def test_absent_is_noop(self, game_state: GameState) -> None:
        """Test using an absent item changes nothing."""
        before = game_state.model_copy(deep=True)

        assert use_item(game_state, "nothing") is False
        assert game_state == before

    def test_consumes_all_copies(self, game_state: GameState, healing_potion: Item) -> None:
        """Test using an item removes every copy with the same id."""
        game_state.character.add_item(healing_potion)
        game_state.character.add_item(healing_potion)

        use_item(game_state, "potion-heal")

        assert game_state.character.inventory == []


class TestItemsAndStats:
    """Tests for add_item, remove_item and update_stats."""

    def test_add_and_remove(self, game_state: GameState, healing_potion: Item) -> None:
        """Test items are appended and filtered by id."""
        add_item(game_state, healing_potion)
        add_item(game_state, Item(id="rope", name="Rope"))

        assert [item.id for item in game_state.character.inventory] == ["potion-heal", "rope"]
        assert remove_item(game_state, "potion-heal") == 1
        assert remove_item(game_state, "potion-heal") == 0

    def test_added_item_is_a_copy(self, game_state: GameState, healing_potion: Item) -> None:
        """Test later changes to the caller's item do not reach the inventory."""
        add_item(game_state, healing_potion)

        healing_potion.name = "Renamed"

        assert game_state.character.inventory[0].name != "Renamed"
        assert game_state.character.inventory[0] is not healing_potion

    def test_without_character(self, healing_potion: Item) -> None:
        """Test character operations are no-ops without a character."""
        state = GameState()

        assert add_item(state, healing_potion) is False
        assert remove_item(state, "potion-heal") == 0
        assert update_stats(state, StatUpdate(strength=9)) is False
        assert use_item(state, "potion-heal") is False

    def test_update_stats(self, game_state: GameState) -> None:
        """Test a partial stat update."""
        update_stats(game_state, StatUpdate(dexterity=11))

        assert game_state.character.stats.dexterity == 11
