"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        EldermoorError: Base exception for all application errors.
        NarrativeError: Narrative collaborator failures.
        PersistenceError: Save store failures.
        ConfigurationError: Configuration-related errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
"""

from __future__ import annotations

from eldermoor.core.config import (
    GameSettings,
    NarrativeSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from eldermoor.core.exceptions import (
    ConfigurationError,
    EldermoorError,
    NarrativeConnectionError,
    NarrativeError,
    NarrativeRateLimitError,
    NarrativeResponseError,
    PersistenceError,
    ValidationError,
)
from eldermoor.core.logging import configure_logging, get_logger


__all__ = [
    # Base exception
    "EldermoorError",
    # Narrative exceptions
    "NarrativeError",
    "NarrativeConnectionError",
    "NarrativeResponseError",
    "NarrativeRateLimitError",
    # Persistence / configuration
    "PersistenceError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "NarrativeSettings",
    "StorageSettings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
]
