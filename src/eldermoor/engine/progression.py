"""Experience, item and stat operations on the session's character.

These functions mutate a GameState in place and append the matching game
log entries. They are shared by the session commands and by combat reward
distribution so every experience grant logs the same way.
"""

from __future__ import annotations

from eldermoor.core.logging import get_logger
from eldermoor.models.character import ExperienceGain, StatUpdate
from eldermoor.models.enums import EffectType, LogEntryType
from eldermoor.models.game_state import GameState
from eldermoor.models.items import Item


logger = get_logger(__name__)


def award_experience(
    state: GameState,
    amount: int,
    *,
    multi_level: bool = True,
) -> ExperienceGain | None:
    """Grant experience to the character and log the result.

    Exactly one log entry is appended per call, however many levels are
    gained.

    Args:
        state: Session state to mutate.
        amount: Experience to grant.
        multi_level: Resolve every threshold crossed in one grant.

    Returns:
        The ExperienceGain, or None when there is no character.
    """
    character = state.character
    if character is None:
        logger.debug("Experience ignored, no character", amount=amount)
        return None

    gain = character.gain_experience(amount, multi_level=multi_level)
    if gain.leveled_up:
        state.add_log_entry(
            f"You gained {gain.amount} experience and leveled up to level {gain.new_level}!",
            LogEntryType.SYSTEM,
        )
        logger.info(
            "Character leveled up",
            character=character.name,
            old_level=gain.old_level,
            new_level=gain.new_level,
        )
    else:
        state.add_log_entry(f"You gained {gain.amount} experience.", LogEntryType.SYSTEM)
    return gain


def use_item(state: GameState, item_id: str) -> bool:
    """Use the first inventory item with ``item_id``.

    Every heal effect targeting the user restores health (capped at
    maximum) and logs one entry. Other effects have no behavior yet. The
    item is consumed afterwards.

    Args:
        state: Session state to mutate.
        item_id: Item to use.

    Returns:
        True if an item was used, False for absent or unusable items.
    """
    character = state.character
    if character is None:
        return False

    item = character.find_item(item_id)
    if item is None or not item.usable:
        logger.debug("Item not usable", item_id=item_id, found=item is not None)
        return False

    for effect in item.effects:
        match effect.type:
            case EffectType.HEAL if effect.heals_self:
                character.heal(effect.amount)
                state.add_log_entry(
                    f"You used {item.name} and restored {effect.amount} health.",
                    LogEntryType.SYSTEM,
                )
            case EffectType.HEAL | EffectType.DAMAGE | EffectType.BUFF | EffectType.DEBUFF:
                logger.debug("Effect has no behavior", item_id=item_id, effect=effect.type)

    character.remove_item(item_id)
    logger.info("Item used", item_id=item_id, health=character.health)
    return True


def add_item(state: GameState, item: Item) -> bool:
    """Append a copy of an item to the character's inventory."""
    if state.character is None:
        return False
    state.character.add_item(item.model_copy(deep=True))
    return True


def remove_item(state: GameState, item_id: str) -> int:
    """Remove every inventory item with ``item_id``. Returns the count removed."""
    if state.character is None:
        return 0
    return state.character.remove_item(item_id)


def update_stats(state: GameState, update: StatUpdate) -> bool:
    """Merge a partial stat block into the character's attributes."""
    if state.character is None:
        return False
    state.character.update_stats(update)
    return True


__all__ = [
    "award_experience",
    "use_item",
    "add_item",
    "remove_item",
    "update_stats",
]
