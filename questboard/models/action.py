"""Action data model for player commands."""

from dataclasses import dataclass
from typing import Optional

ACTION_TYPES = (
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
)


@dataclass
class Action:
    """Represents one command dispatched into the turn engine.

    Actions are submitted by the UI (for human players) or by the engine's
    own AI scheduling. Whether an action is *legal* depends on the current
    phase and is decided by the engine; this class only checks that the
    action is well-formed.
    """

    type: str  # One of ACTION_TYPES
    position: Optional[int] = None  # select_tile / place_trap target
    item_id: Optional[str] = None  # use_item / equip_item / place_trap
    slot: Optional[str] = None  # unequip_item

    def __post_init__(self):
        """Validate action data after initialization."""
        if self.type not in ACTION_TYPES:
            raise ValueError(f"Invalid action type: {self.type} (must be one of {ACTION_TYPES})")
        if self.type in ("select_tile", "place_trap") and self.position is None:
            raise ValueError(f"{self.type} requires a position")
        if self.type in ("use_item", "equip_item", "place_trap") and not self.item_id:
            raise ValueError(f"{self.type} requires an item_id")
        if self.type == "unequip_item" and not self.slot:
            raise ValueError("unequip_item requires a slot")
