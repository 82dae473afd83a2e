"""Narrative generation services.

The narrator is an optional collaborator: the engine is complete without
it and only uses it for flavor text. Narrators raise NarrativeError
subclasses on failure; the game session maps those to fixed fallback
texts.

Example:
    >>> from eldermoor.core.config import get_settings
    >>> narrator = create_narrator(get_settings().narrative)
    >>> reply = narrator.describe_character("A scarred veteran.", "Warrior")
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from eldermoor.core.config import NarrativeSettings
from eldermoor.core.exceptions import (
    ConfigurationError,
    NarrativeConnectionError,
    NarrativeRateLimitError,
    NarrativeResponseError,
)
from eldermoor.core.logging import get_logger
from eldermoor.models.character import Character
from eldermoor.models.world import Enemy
from eldermoor.narrative.models import NarrativeContext, NarrativeResponse
from eldermoor.narrative.prompts import (
    CHARACTER_DESCRIPTION_SYSTEM_PROMPT,
    SCENE_SYSTEM_PROMPT,
    build_character_description_prompt,
    build_combat_prompt,
    build_scene_prompt,
)


if TYPE_CHECKING:
    from openai import OpenAI


logger = get_logger(__name__)


# =============================================================================
# Fallbacks
# =============================================================================

SCENE_FALLBACK = (
    "The shadows deepen around you as you continue your journey. "
    "[Error: The Dungeon Master is momentarily unavailable.]"
)
COMBAT_FALLBACK = (
    "The clash of steel and the snarls of your enemy fill the air as combat rages on. "
    "[Error: Combat narration failed.]"
)
CHARACTER_DESCRIPTION_FALLBACK = (
    "A mysterious figure shrouded in shadow, their true nature yet to be revealed. "
    "[Error: Description generation failed.]"
)


# =============================================================================
# Narrator Protocol
# =============================================================================


class Narrator(Protocol):
    """Anything that can turn game context into narrative text."""

    def narrate_scene(self, context: NarrativeContext) -> NarrativeResponse:
        """Describe the current scene or the outcome of a player action."""
        ...

    def narrate_combat(
        self,
        character: Character,
        enemies: Sequence[Enemy],
        action: str,
        result: str,
    ) -> NarrativeResponse:
        """Describe a moment of combat."""
        ...

    def describe_character(self, description: str, character_class: str) -> NarrativeResponse:
        """Expand a player's short character description."""
        ...


# =============================================================================
# Reply Parsing
# =============================================================================


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return text


def parse_narrative_reply(raw: str) -> NarrativeResponse:
    """Parse a model reply into a NarrativeResponse.

    Replies are expected as JSON ``{"text", "imagePrompt", "choices"}``,
    optionally inside a markdown code fence. Anything that is not such an
    object is used verbatim as the narrative text.

    Args:
        raw: Raw reply text.

    Returns:
        Parsed NarrativeResponse.

    Raises:
        NarrativeResponseError: If the reply is empty.
    """
    if not raw or not raw.strip():
        raise NarrativeResponseError("Narrative service returned an empty reply")

    text = _strip_code_fence(raw)
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Narrative reply is not JSON, using raw text", preview=text[:80])
        return NarrativeResponse(text=raw.strip())

    if not isinstance(data, dict) or not isinstance(data.get("text"), str) or not data["text"]:
        return NarrativeResponse(text=raw.strip())

    image_prompt = data.get("imagePrompt")
    choices = data.get("choices")
    return NarrativeResponse(
        text=data["text"],
        image_prompt=image_prompt if isinstance(image_prompt, str) else None,
        choices=[str(choice) for choice in choices] if isinstance(choices, list) else [],
    )


# =============================================================================
# LLM Narrator
# =============================================================================


def get_narrative_client(settings: NarrativeSettings) -> OpenAI:
    """Get an OpenAI client for the configured OpenAI-compatible endpoint.

    Args:
        settings: Narrative settings.

    Returns:
        Configured OpenAI client.

    Raises:
        ConfigurationError: If no API key is configured.
    """
    from openai import OpenAI

    if settings.api_key is None:
        raise ConfigurationError(
            "Narrative API key not configured. Set ELDERMOOR_NARRATIVE_API_KEY",
            config_key="narrative.api_key",
        )

    return OpenAI(
        api_key=settings.api_key.get_secret_value(),
        base_url=settings.base_url,
        timeout=settings.timeout_seconds,
        max_retries=settings.max_retries,
    )


class LLMNarrator:
    """Narrator backed by an OpenAI-compatible chat completion API.

    Attributes:
        client: OpenAI client.
        model: Model identifier.
        temperature: Sampling temperature.
    """

    def __init__(self, settings: NarrativeSettings, *, client: OpenAI | None = None) -> None:
        """Initialize the narrator.

        Args:
            settings: Narrative settings.
            client: Optional preconfigured client.
        """
        self.client = client or get_narrative_client(settings)
        self.model = settings.model
        self.temperature = settings.temperature
        self._provider = settings.base_url

        logger.info("LLMNarrator initialized", model=self.model, provider=self._provider)

    @retry(
        retry=retry_if_exception_type((NarrativeConnectionError, NarrativeRateLimitError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )
    def _complete(self, system_prompt: str, user_message: str) -> str:
        """Call the chat completion API with retry logic.

        Args:
            system_prompt: System instructions.
            user_message: Context for this request.

        Returns:
            Raw reply text.

        Raises:
            NarrativeError: If the call fails.
        """
        from openai import APIConnectionError, APIStatusError, OpenAIError, RateLimitError

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=self.temperature,
            )
        except RateLimitError as exc:
            raise NarrativeRateLimitError(
                f"Narrative rate limit exceeded: {exc}",
                model=self.model,
                provider=self._provider,
            ) from exc
        except APIConnectionError as exc:
            raise NarrativeConnectionError(
                f"Failed to reach narrative service: {exc}",
                model=self.model,
                provider=self._provider,
            ) from exc
        except APIStatusError as exc:
            raise NarrativeResponseError(
                f"Narrative service error: {exc}",
                model=self.model,
                provider=self._provider,
                details={"status_code": exc.status_code},
            ) from exc
        except OpenAIError as exc:
            raise NarrativeResponseError(
                f"Narrative client error: {exc}",
                model=self.model,
                provider=self._provider,
            ) from exc

        if not response.choices:
            raise NarrativeResponseError(
                "Narrative service returned no choices",
                model=self.model,
                provider=self._provider,
            )

        content = response.choices[0].message.content or ""
        logger.debug("Narrative reply received", model=self.model, length=len(content))
        return content

    def narrate_scene(self, context: NarrativeContext) -> NarrativeResponse:
        return parse_narrative_reply(
            self._complete(SCENE_SYSTEM_PROMPT, build_scene_prompt(context))
        )

    def narrate_combat(
        self,
        character: Character,
        enemies: Sequence[Enemy],
        action: str,
        result: str,
    ) -> NarrativeResponse:
        return parse_narrative_reply(
            self._complete(
                SCENE_SYSTEM_PROMPT,
                build_combat_prompt(character, enemies, action, result),
            )
        )

    def describe_character(self, description: str, character_class: str) -> NarrativeResponse:
        return parse_narrative_reply(
            self._complete(
                CHARACTER_DESCRIPTION_SYSTEM_PROMPT,
                build_character_description_prompt(description, character_class),
            )
        )


# =============================================================================
# Static Narrator
# =============================================================================


class StaticNarrator:
    """Offline narrator that builds text from the game data itself."""

    def narrate_scene(self, context: NarrativeContext) -> NarrativeResponse:
        location = context.location
        text = f"{location.name}. {location.description}"
        if context.action:
            text = f"You {context.action.rstrip('.')}. {text}"
        return NarrativeResponse(text=text)

    def narrate_combat(
        self,
        character: Character,
        enemies: Sequence[Enemy],
        action: str,
        result: str,
    ) -> NarrativeResponse:
        return NarrativeResponse(text=result)

    def describe_character(self, description: str, character_class: str) -> NarrativeResponse:
        text = description.strip() or f"A {character_class.lower()} of few words and fewer friends."
        return NarrativeResponse(text=text)


def create_narrator(settings: NarrativeSettings) -> Narrator:
    """Pick the narrator for the given settings.

    Returns the LLM narrator when it is enabled and has a key, otherwise
    the static one.
    """
    if settings.enabled and settings.api_key is not None:
        return LLMNarrator(settings)
    logger.info("Remote narrator disabled, using static narrator")
    return StaticNarrator()


__all__ = [
    "SCENE_FALLBACK",
    "COMBAT_FALLBACK",
    "CHARACTER_DESCRIPTION_FALLBACK",
    "Narrator",
    "parse_narrative_reply",
    "get_narrative_client",
    "LLMNarrator",
    "StaticNarrator",
    "create_narrator",
]
