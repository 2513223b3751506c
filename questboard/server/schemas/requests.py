"""Pydantic request schemas for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ...utils.constants import MAX_PLAYERS

ActionType = Literal[
    "roll_dice",
    "select_tile",
    "attack",
    "defend",
    "use_item",
    "acknowledge_reward",
    "continue_turn",
    "end_turn",
    "equip_item",
    "unequip_item",
    "place_trap",
]


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    humanPlayers: int = Field(  # noqa: N815
        default=1, ge=0, le=MAX_PLAYERS, description="Number of human seats (seated first)"
    )
    aiPlayers: int = Field(  # noqa: N815
        default=1, ge=0, le=MAX_PLAYERS, description="Number of AI seats"
    )
    playerNames: list[str] = Field(  # noqa: N815
        default_factory=list, description="Display names for the human seats"
    )
    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    replaceGameId: str | None = Field(  # noqa: N815
        default=None, description="Existing game to tear down and replace"
    )

    @model_validator(mode="after")
    def check_player_count(self):
        total = self.humanPlayers + self.aiPlayers
        if not 1 <= total <= MAX_PLAYERS:
            raise ValueError(f"A game needs 1-{MAX_PLAYERS} players, got {total}")
        return self


class ActionRequest(BaseModel):
    """A single player action."""

    type: ActionType = Field(description="Action to perform")
    position: int | None = Field(default=None, ge=0, description="Target path position")
    itemId: str | None = Field(default=None, description="Inventory item id")  # noqa: N815
    slot: str | None = Field(default=None, description="Equipment slot (unequip_item)")
    playerId: str | None = Field(  # noqa: N815
        default=None, description="Acting player; rejected unless it is their turn"
    )

    @model_validator(mode="after")
    def check_required_fields(self):
        if self.type in ("select_tile", "place_trap") and self.position is None:
            raise ValueError(f"{self.type} requires position")
        if self.type in ("use_item", "equip_item", "place_trap") and not self.itemId:
            raise ValueError(f"{self.type} requires itemId")
        if self.type == "unequip_item" and not self.slot:
            raise ValueError("unequip_item requires slot")
        return self
