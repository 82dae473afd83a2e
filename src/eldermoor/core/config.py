"""Configuration management for the Eldermoor engine.

Centralized settings built on pydantic-settings, read from environment
variables and an optional .env file. API keys are held as SecretStr.

Example:
    >>> from eldermoor.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.encounter_chance
    0.3

Environment Variables:
    ELDERMOOR_NARRATIVE_API_KEY: Key for the OpenAI-compatible narrative endpoint
    ELDERMOOR_NARRATIVE_MODEL: Model used for narrative text
    ELDERMOOR_DATABASE_PATH: Path to the SQLite save database
    ELDERMOOR_GAME_ENCOUNTER_CHANCE: Probability of an encounter on arrival
    ELDERMOOR_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eldermoor.core.exceptions import ConfigurationError


class NarrativeSettings(BaseSettings):
    """Configuration for the narrative collaborator.

    Attributes:
        enabled: Whether to call the remote narrative service at all.
        api_key: API key for the OpenAI-compatible endpoint.
        base_url: Base URL of the OpenAI-compatible endpoint.
        model: Model identifier.
        temperature: Sampling temperature.
        max_retries: Maximum retry attempts for transient failures.
        timeout_seconds: Per-request timeout.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELDERMOOR_NARRATIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Call the remote narrative service",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Narrative service API key",
    )
    base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenAI-compatible endpoint",
    )
    model: str = Field(
        default="google/gemini-flash-1.5",
        description="Narrative model",
    )
    temperature: float = Field(
        default=0.8,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Maximum API retry attempts",
    )
    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        le=120,
        description="API request timeout",
    )


class StorageSettings(BaseSettings):
    """Configuration for the save store.

    Attributes:
        database_path: Path to the SQLite database holding save slots.
        default_slot: Slot name used when none is given.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELDERMOOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path.home() / ".eldermoor" / "eldermoor.db",
        description="Path to SQLite save database",
    )
    default_slot: str = Field(
        default="rpg_save",
        min_length=1,
        description="Default save slot",
    )


class GameSettings(BaseSettings):
    """Configuration for game engine behavior.

    Attributes:
        starting_location: Location id a new game starts in.
        starting_gold: Gold granted to a freshly created character.
        encounter_chance: Probability of an encounter on arrival.
        retaliation_delay_seconds: Delay before enemies strike back.
        narrative_context_size: Log entries handed to the narrator.
        multi_level_up: Resolve every crossed threshold in one grant.
        enforce_connections: Only allow moves along location connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELDERMOOR_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    starting_location: str = Field(
        default="village",
        min_length=1,
        description="Starting location id",
    )
    starting_gold: int = Field(
        default=10,
        ge=0,
        description="Gold for a new character",
    )
    encounter_chance: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Random encounter probability",
    )
    retaliation_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Delay before the enemy turn resolves",
    )
    narrative_context_size: int = Field(
        default=3,
        ge=0,
        le=50,
        description="Recent log entries sent to the narrator",
    )
    multi_level_up: bool = Field(
        default=True,
        description="Level up repeatedly for large experience grants",
    )
    enforce_connections: bool = Field(
        default=False,
        description="Restrict movement to connected locations",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        narrative: Narrative service settings.
        storage: Save store settings.
        game: Game engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELDERMOOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    narrative: NarrativeSettings = Field(default_factory=NarrativeSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @model_validator(mode="after")
    def validate_narrative_key(self) -> "Settings":
        """Disable the remote narrator when no key is configured.

        Returns:
            Self with narrative.enabled cleared if the key is missing.
        """
        if self.narrative.enabled and self.narrative.api_key is None:
            self.narrative.enabled = False
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "NarrativeSettings",
    "StorageSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
