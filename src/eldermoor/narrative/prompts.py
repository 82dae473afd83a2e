"""Narrator system prompts and context builders."""

from __future__ import annotations

from collections.abc import Sequence

from eldermoor.models.character import Character
from eldermoor.models.world import Enemy
from eldermoor.narrative.models import NarrativeContext


# =============================================================================
# System Prompts
# =============================================================================


RESPONSE_FORMAT = """Format your response as JSON with the following structure:
{
  "text": "The narrative text",
  "imagePrompt": "A prompt that could be used to generate an image of the scene",
  "choices": ["Up to three short actions the player could take next"]
}"""


SCENE_SYSTEM_PROMPT = f"""You are the Dungeon Master for a dark fantasy role-playing game. The setting is a grim, medieval world where magic exists but is feared, monsters lurk in the shadows, and humanity struggles to survive in isolated settlements. The tone is mature, atmospheric and foreboding.

Describe the current situation from the player's character, their location and the recent game history. Write in second person, addressing the player as "you". Keep it to two to four short paragraphs with sensory details that deepen the atmosphere.

Never invent game mechanics. Damage, rewards and outcomes are decided by the game and given to you; narrate them, do not change them.

{RESPONSE_FORMAT}"""


CHARACTER_DESCRIPTION_SYSTEM_PROMPT = f"""You write character profiles for a dark fantasy role-playing game. The setting is a grim, medieval world where magic exists but is feared.

Expand the player's brief description of their character. Add physical details, personality traits fitting the class, a hint of backstory and how others in the world perceive them. Write in third person, two to three paragraphs.

{RESPONSE_FORMAT}"""


# =============================================================================
# Context Builders
# =============================================================================


def build_scene_prompt(context: NarrativeContext) -> str:
    """Build the user message for a scene narration."""
    character = context.character
    location = context.location

    history = "\n".join(f"[{entry.type.upper()}] {entry.text}" for entry in context.recent_log)
    action = (
        f"PLAYER ACTION: {context.action}"
        if context.action
        else "SCENE DESCRIPTION NEEDED: Describe what the player sees upon arriving at this location."
    )

    return "\n\n".join(
        [
            "CHARACTER INFO:\n"
            f"Name: {character.name}\n"
            f"Class: {character.character_class}\n"
            f"Description: {character.description}\n"
            f"Level: {character.level}\n"
            f"HP: {character.health}/{character.max_health}\n"
            f"Relic: {character.relic}",
            "CURRENT LOCATION:\n"
            f"Name: {location.name}\n"
            f"Description: {location.description}\n"
            f"Connected to: {', '.join(location.connections)}",
            f"RECENT GAME HISTORY:\n{history or 'No recent history.'}",
            action,
        ]
    )


def build_combat_prompt(
    character: Character,
    enemies: Sequence[Enemy],
    action: str,
    result: str,
) -> str:
    """Build the user message for a combat narration."""
    roster = "\n".join(f"{enemy.name} (HP: {enemy.health}/{enemy.max_health})" for enemy in enemies)
    return "\n\n".join(
        [
            "CHARACTER:\n"
            f"Name: {character.name}\n"
            f"Class: {character.character_class}\n"
            f"Weapon/Relic: {character.relic}\n"
            f"HP: {character.health}/{character.max_health}",
            f"ENEMIES:\n{roster or 'None remaining.'}",
            f"COMBAT SITUATION:\nPlayer Action: {action}\nResult: {result}",
            "Describe this moment of the battle vividly. Focus on the action and keep "
            "the dark fantasy atmosphere.",
        ]
    )


def build_character_description_prompt(description: str, character_class: str) -> str:
    """Build the user message for a character description."""
    return (
        f'PLAYER\'S CHARACTER DESCRIPTION: "{description}"\n'
        f"CHARACTER CLASS: {character_class}\n\n"
        "Generate an expanded character description and a portrait prompt for this character."
    )


__all__ = [
    "SCENE_SYSTEM_PROMPT",
    "CHARACTER_DESCRIPTION_SYSTEM_PROMPT",
    "build_scene_prompt",
    "build_combat_prompt",
    "build_character_description_prompt",
]
