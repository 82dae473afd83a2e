"""Exception hierarchy for the Eldermoor game engine.

Ordinary invalid commands never raise. These exceptions describe faults
inside the engine or its collaborators (narrative service, save store,
configuration); the game session catches the collaborator ones and
degrades to fallbacks.

Every error carries a ``message`` and a ``details`` dict. Subclasses take
their context as keyword arguments, expose it as attributes and copy the
values that are set into ``details``.

Example:
    >>> from eldermoor.core.exceptions import PersistenceError
    >>> raise PersistenceError("Failed to write save", slot="autosave")
"""

from __future__ import annotations

from typing import Any


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    """Merge the non-None context values into a copy of ``details``."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


class EldermoorError(Exception):
    """Base exception for all Eldermoor errors.

    Attributes:
        message: Human-readable error description.
        details: Additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = dict(details or {})
        super().__init__(str(self))

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} [{context}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Narrative
# =============================================================================


class NarrativeError(EldermoorError):
    """Base exception for narrative collaborator failures.

    Attributes:
        model: Model identifier used for the call.
        provider: Base URL of the narrative endpoint.
    """

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.model = model
        self.provider = provider
        super().__init__(message, details=_with_context(details, model=model, provider=provider))


class NarrativeConnectionError(NarrativeError):
    """The narrative service could not be reached. Retried."""


class NarrativeResponseError(NarrativeError):
    """The narrative service answered with an error or an unusable reply."""


class NarrativeRateLimitError(NarrativeError):
    """The narrative service rejected the call for rate limits. Retried.

    Attributes:
        retry_after_seconds: Server hint for when to try again.
    """

    def __init__(
        self,
        message: str,
        *,
        retry_after_seconds: float | None = None,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            message,
            model=model,
            provider=provider,
            details=_with_context(details, retry_after_seconds=retry_after_seconds),
        )


# =============================================================================
# Persistence, Configuration and Data
# =============================================================================


class PersistenceError(EldermoorError):
    """A save slot could not be written or read back.

    Attributes:
        slot: Save slot involved, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        slot: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.slot = slot
        super().__init__(message, details=_with_context(details, slot=slot))


class ConfigurationError(EldermoorError):
    """Settings are missing or invalid.

    Attributes:
        config_key: Dotted settings key at fault, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.config_key = config_key
        super().__init__(message, details=_with_context(details, config_key=config_key))


class ValidationError(EldermoorError):
    """Reference data handed to the engine is malformed, e.g. a duplicate location id.

    Attributes:
        field_name: Field that failed validation.
        invalid_value: The offending value.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.field_name = field_name
        self.invalid_value = invalid_value
        super().__init__(
            message,
            details=_with_context(details, field_name=field_name, invalid_value=invalid_value),
        )


__all__ = [
    "EldermoorError",
    "NarrativeError",
    "NarrativeConnectionError",
    "NarrativeResponseError",
    "NarrativeRateLimitError",
    "PersistenceError",
    "ConfigurationError",
    "ValidationError",
]
