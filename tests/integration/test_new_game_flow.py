"""Starting a game from character creation to the first scene."""

from __future__ import annotations

import random

from eldermoor.core.constants import OPENING_NARRATIVE
from eldermoor.engine.session import GameSession
from eldermoor.models import CharacterClass, LogEntryType, Relic


def test_first_steps(session: GameSession, high_roll: random.Random) -> None:
    """Test creation, the opening, a look around and a quiet walk."""
    description = session.describe_character("A wandering healer.", CharacterClass.CLERIC)
    state = session.create_character(
        "Sister Ysolde",
        description.text,
        CharacterClass.CLERIC,
        Relic.DIVINE_AMULET,
    )
    assert state.character.description == "A wandering healer."
    assert state.game_log == []

    state = session.start_new_game(rng=high_roll)
    assert [entry.text for entry in state.game_log] == [
        "You have moved to Eldermoor Village.",
        OPENING_NARRATIVE,
    ]

    scene = session.narrate("look around")
    assert scene.text.startswith("You look around. Eldermoor Village.")
    assert session.state.game_log[-1].type == LogEntryType.NARRATIVE

    state = session.move_to_location("forest", rng=high_roll)
    assert state.combat is None
    assert state.visited_locations == ["village", "forest"]
    assert state.game_time == 2
