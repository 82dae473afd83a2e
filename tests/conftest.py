"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Eldermoor test suite.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from eldermoor.core.config import GameSettings
from eldermoor.engine.session import GameSession
from eldermoor.models import (
    Character,
    CharacterClass,
    EffectTarget,
    EffectType,
    Enemy,
    EnemyStats,
    GameState,
    Item,
    ItemEffect,
    ItemType,
    Location,
    Relic,
    create_character,
)
from eldermoor.narrative.service import StaticNarrator
from eldermoor.storage.database import Database
from eldermoor.world.catalog import WorldCatalog, default_catalog


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from eldermoor.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the user's .env, API keys and save database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ELDERMOOR_NARRATIVE_API_KEY", raising=False)
    monkeypatch.setenv("ELDERMOOR_DATABASE_PATH", str(tmp_path / "default.db"))


@pytest.fixture
def game_settings() -> GameSettings:
    """Game settings with a zero retaliation delay."""
    return GameSettings(retaliation_delay_seconds=0.0)


# =============================================================================
# Randomness Fixtures
# =============================================================================


class FixedRandom(random.Random):
    """A Random whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def low_roll() -> random.Random:
    """Always rolls 0.0: zero damage bonus and every encounter triggers."""
    return FixedRandom(0.0)


@pytest.fixture
def high_roll() -> random.Random:
    """Always rolls 0.99: maximum damage bonus and no encounter."""
    return FixedRandom(0.99)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def warrior() -> Character:
    """A fresh level 1 warrior."""
    return create_character(
        "Aldric",
        "A weary sellsword.",
        CharacterClass.WARRIOR,
        Relic.BLADE_OF_EMBER,
    )


@pytest.fixture
def healing_potion() -> Item:
    return Item(
        id="potion-heal",
        name="Healing Draught",
        description="Bitter and red.",
        type=ItemType.POTION,
        value=25,
        effects=[ItemEffect(type=EffectType.HEAL, target=EffectTarget.SELF, amount=15)],
        usable=True,
    )


@pytest.fixture
def wolf() -> Enemy:
    return Enemy(
        id="wolf1",
        name="Shadow Wolf",
        level=1,
        health=15,
        max_health=15,
        stats=EnemyStats(strength=3, dexterity=4, constitution=2),
        experience=10,
        gold=0,
    )


@pytest.fixture
def weak_enemy() -> Enemy:
    """An enemy one hit from death, carrying a drop."""
    return Enemy(
        id="rat1",
        name="Plague Rat",
        level=1,
        health=1,
        max_health=6,
        stats=EnemyStats(strength=1, dexterity=3, constitution=1),
        drops=[Item(id="rat-tail", name="Rat Tail")],
        experience=30,
        gold=4,
    )


@pytest.fixture
def brute() -> Enemy:
    """An enemy that survives any first-level blow and hits hard."""
    return Enemy(
        id="brute1",
        name="Grave Brute",
        level=3,
        health=200,
        max_health=200,
        stats=EnemyStats(strength=50, dexterity=1, constitution=10),
        experience=100,
        gold=50,
    )


@pytest.fixture
def catalog() -> WorldCatalog:
    return default_catalog()


@pytest.fixture
def tiny_catalog(wolf: Enemy) -> WorldCatalog:
    """Two locations: a safe camp and a den with a wolf."""
    return WorldCatalog(
        [
            Location(id="camp", name="Camp", connections=["den"]),
            Location(id="den", name="Wolf Den", connections=["camp"], enemies=[wolf]),
        ]
    )


@pytest.fixture
def game_state(warrior: Character) -> GameState:
    return GameState(character=warrior)


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def database(tmp_path: Path) -> Database:
    return Database(tmp_path / "saves" / "eldermoor.db")


@pytest.fixture
def session(
    game_settings: GameSettings,
    catalog: WorldCatalog,
    database: Database,
    seeded_rng: random.Random,
) -> GameSession:
    """A session with the default catalog and no character yet."""
    return GameSession(
        settings=game_settings,
        catalog=catalog,
        narrator=StaticNarrator(),
        database=database,
        rng=seeded_rng,
    )


@pytest.fixture
def hero_session(session: GameSession) -> GameSession:
    """A session with a warrior created."""
    session.create_character(
        "Aldric",
        "A weary sellsword.",
        CharacterClass.WARRIOR,
        Relic.BLADE_OF_EMBER,
    )
    return session
