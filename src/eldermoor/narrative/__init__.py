"""Narrative collaborator: prompts, reply parsing and narrators."""

from __future__ import annotations

from eldermoor.narrative.models import NarrativeContext, NarrativeResponse
from eldermoor.narrative.service import (
    CHARACTER_DESCRIPTION_FALLBACK,
    COMBAT_FALLBACK,
    SCENE_FALLBACK,
    LLMNarrator,
    Narrator,
    StaticNarrator,
    create_narrator,
    parse_narrative_reply,
)


__all__ = [
    "NarrativeContext",
    "NarrativeResponse",
    "Narrator",
    "LLMNarrator",
    "StaticNarrator",
    "create_narrator",
    "parse_narrative_reply",
    "SCENE_FALLBACK",
    "COMBAT_FALLBACK",
    "CHARACTER_DESCRIPTION_FALLBACK",
]
