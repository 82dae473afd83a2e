"""Request and response schemas for the narrative collaborator."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from eldermoor.models.character import Character
from eldermoor.models.game_state import GameLogEntry
from eldermoor.models.world import Location


class NarrativeContext(BaseModel):
    """Everything the narrator sees when describing a scene.

    Attributes:
        character: Snapshot of the player character.
        location: Snapshot of the current location.
        recent_log: The most recent game log entries, oldest first.
        action: Optional player action that prompted the narration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    character: Character
    location: Location
    recent_log: list[GameLogEntry] = Field(default_factory=list)
    action: str | None = None


class NarrativeResponse(BaseModel):
    """Narrative text returned to the presentation layer.

    Attributes:
        text: Narrative text.
        image_prompt: Optional prompt for an illustrative image.
        choices: Optional suggested player actions.
        is_fallback: True when the text is a canned fallback.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str
    image_prompt: str | None = None
    choices: list[str] = Field(default_factory=list)
    is_fallback: bool = False


__all__ = [
    "NarrativeContext",
    "NarrativeResponse",
]
