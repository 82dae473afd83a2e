"""Static world reference data.

The catalog is read-only. Lookups hand out deep copies so nothing the
session does to a working location (or a combat roster built from it)
leaks back into the reference data.

Example:
    >>> catalog = default_catalog()
    >>> catalog.neighbours("village")
    ['forest', 'tavern', 'blacksmith']
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from eldermoor.core.exceptions import ValidationError
from eldermoor.core.logging import get_logger
from eldermoor.models.world import Enemy, EnemyStats, Location


logger = get_logger(__name__)


class WorldCatalog:
    """Immutable lookup of locations by id.

    Args:
        locations: Locations to index. Ids must be unique.

    Raises:
        ValidationError: If two locations share an id.
    """

    def __init__(self, locations: Iterable[Location]) -> None:
        self._locations: dict[str, Location] = {}
        for location in locations:
            if location.id in self._locations:
                raise ValidationError(
                    f"Duplicate location id: {location.id}",
                    field_name="id",
                    invalid_value=location.id,
                )
            self._locations[location.id] = location.model_copy(deep=True)

        dangling = {
            target
            for location in self._locations.values()
            for target in location.connections
            if target not in self._locations
        }
        if dangling:
            logger.warning("Catalog has connections to unknown locations", targets=sorted(dangling))

    def __contains__(self, location_id: object) -> bool:
        return location_id in self._locations

    def __iter__(self) -> Iterator[str]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)

    def get(self, location_id: str) -> Location | None:
        """Get a working copy of a location.

        Args:
            location_id: Location to look up.

        Returns:
            A deep copy of the location, or None for unknown ids.
        """
        location = self._locations.get(location_id)
        if location is None:
            return None
        return location.model_copy(deep=True)

    def neighbours(self, location_id: str) -> list[str]:
        """Connection ids of a location, in catalog order."""
        location = self._locations.get(location_id)
        if location is None:
            return []
        return list(location.connections)


# =============================================================================
# Eldermoor
# =============================================================================


def _eldermoor_locations() -> list[Location]:
    return [
        Location(
            id="village",
            name="Eldermoor Village",
            description=(
                "A small, dreary settlement shrouded in perpetual twilight. Dilapidated "
                "wooden buildings line the muddy streets, and villagers hurry about with "
                "wary eyes."
            ),
            connections=["forest", "tavern", "blacksmith"],
        ),
        Location(
            id="tavern",
            name="The Howling Wolf Tavern",
            description=(
                "A dimly lit tavern with rough-hewn wooden tables and the smell of stale "
                "ale. A few patrons huddle in corners, speaking in hushed tones."
            ),
            connections=["village"],
        ),
        Location(
            id="forest",
            name="The Whispering Woods",
            description=(
                "Ancient trees loom overhead, their twisted branches blocking what little "
                "light filters through the perpetual mist. Strange sounds echo from deep "
                "within."
            ),
            connections=["village", "ruins"],
            enemies=[
                Enemy(
                    id="wolf1",
                    name="Shadow Wolf",
                    description=(
                        "A wolf with fur as black as midnight and eyes that glow with an "
                        "unnatural red light."
                    ),
                    level=1,
                    health=15,
                    max_health=15,
                    stats=EnemyStats(strength=3, dexterity=4, constitution=2),
                    experience=10,
                    gold=0,
                ),
            ],
        ),
        Location(
            id="blacksmith",
            name="The Smoldering Forge",
            description=(
                "A soot-covered workshop where the village blacksmith crafts weapons and "
                "armor. The heat from the forge provides rare warmth in this cold place."
            ),
            connections=["village"],
        ),
        Location(
            id="ruins",
            name="Ancient Temple Ruins",
            description=(
                "Crumbling stone structures covered in strange symbols. The air here "
                "feels charged with forgotten magic."
            ),
            connections=["forest", "crypt"],
        ),
        Location(
            id="crypt",
            name="The Forgotten Crypt",
            description=(
                "A dark, underground chamber filled with ancient sarcophagi. The walls "
                "are adorned with faded murals depicting strange rituals."
            ),
            connections=["ruins"],
            enemies=[
                Enemy(
                    id="skeleton1",
                    name="Reanimated Skeleton",
                    description=(
                        "A skeleton animated by dark magic, its bones yellowed with age. It "
                        "clutches a rusted sword in its bony hands."
                    ),
                    level=2,
                    health=20,
                    max_health=20,
                    stats=EnemyStats(strength=4, dexterity=2, constitution=3),
                    experience=20,
                    gold=5,
                ),
            ],
        ),
    ]


def default_catalog() -> WorldCatalog:
    """Build the catalog of the cursed village of Eldermoor and its surroundings."""
    return WorldCatalog(_eldermoor_locations())


__all__ = [
    "WorldCatalog",
    "default_catalog",
]
