"""Tests for the world catalog."""

from __future__ import annotations

import pytest

from eldermoor.core.exceptions import ValidationError
from eldermoor.models import Location
from eldermoor.world.catalog import WorldCatalog, default_catalog


class TestDefaultCatalog:
    """Tests for the Eldermoor locations."""

    def test_locations(self) -> None:
        """Test the six Eldermoor locations are present."""
        catalog = default_catalog()

        assert set(catalog) == {"village", "tavern", "forest", "blacksmith", "ruins", "crypt"}
        assert len(catalog) == 6

    def test_connections(self) -> None:
        """Test the world graph edges."""
        catalog = default_catalog()

        assert catalog.neighbours("village") == ["forest", "tavern", "blacksmith"]
        assert catalog.neighbours("crypt") == ["ruins"]
        assert catalog.neighbours("nowhere") == []

    def test_resident_enemies(self) -> None:
        """Test the forest wolf and the crypt skeleton."""
        catalog = default_catalog()

        wolf = catalog.get("forest").enemies[0]
        skeleton = catalog.get("crypt").enemies[0]

        assert (wolf.name, wolf.health, wolf.experience, wolf.gold) == ("Shadow Wolf", 15, 10, 0)
        assert (skeleton.name, skeleton.level, skeleton.experience, skeleton.gold) == (
            "Reanimated Skeleton",
            2,
            20,
            5,
        )
        assert catalog.get("village").enemies == []


class TestWorldCatalog:
    """Tests for WorldCatalog behavior."""

    def test_get_returns_copy(self) -> None:
        """Test mutating a looked-up location leaves the catalog intact."""
        catalog = default_catalog()

        forest = catalog.get("forest")
        forest.enemies[0].health = 0
        forest.connections.append("moon")

        fresh = catalog.get("forest")
        assert fresh.enemies[0].health == 15
        assert "moon" not in fresh.connections

    def test_unknown_location(self) -> None:
        """Test unknown ids are absent."""
        catalog = default_catalog()

        assert catalog.get("atlantis") is None
        assert "atlantis" not in catalog

    def test_duplicate_ids_rejected(self) -> None:
        """Test two locations cannot share an id."""
        with pytest.raises(ValidationError):
            WorldCatalog([Location(id="a", name="A"), Location(id="a", name="Also A")])
