"""Pydantic V2 schemas for items and their effects."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from eldermoor.models.enums import EffectTarget, EffectType, ItemRarity, ItemType


class ItemEffect(BaseModel):
    """A single effect an item applies when used.

    Attributes:
        type: Effect kind (heal, damage, buff, debuff).
        target: Who the effect applies to.
        amount: Effect magnitude.
        duration: Optional duration in turns. Stored, not consumed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: EffectType = Field(description="Effect kind")
    target: EffectTarget = Field(description="Effect target scope")
    amount: int = Field(description="Effect magnitude")
    duration: int | None = Field(
        default=None,
        ge=0,
        description="Duration in turns (unused)",
    )

    @property
    def heals_self(self) -> bool:
        """Whether this is the one effect shape the engine resolves."""
        return self.type == EffectType.HEAL and self.target == EffectTarget.SELF


class Item(BaseModel):
    """An inventory item.

    Attributes:
        id: Item identifier. Duplicates may coexist in an inventory.
        name: Display name.
        description: Flavor text.
        type: Item classification.
        rarity: Rarity tier.
        value: Nominal gold value.
        effects: Effects applied on use.
        usable: Whether the item can be used at all.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    id: str = Field(min_length=1, description="Item identifier")
    name: str = Field(min_length=1, description="Display name")
    description: str = Field(default="", description="Flavor text")
    type: ItemType = Field(default=ItemType.MISC, description="Item type")
    rarity: ItemRarity = Field(default=ItemRarity.COMMON, description="Rarity")
    value: Annotated[int, Field(ge=0)] = 0
    effects: list[ItemEffect] = Field(default_factory=list, description="Use effects")
    usable: bool = Field(default=False, description="Can be used")


__all__ = [
    "ItemEffect",
    "Item",
]
