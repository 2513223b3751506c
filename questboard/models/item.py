"""Item, trap and enemy data models."""

from dataclasses import dataclass
from typing import Optional

ITEM_CATEGORIES = ("weapon", "armor", "trap", "consumable", "potion", "mythic")
RARITIES = ("common", "uncommon", "rare", "very_rare", "legendary")
TRAP_KINDS = ("creature", "damage", "item_loss")


@dataclass(frozen=True)
class Item:
    """An immutable item instance.

    Items are value objects: the same template may be instantiated many
    times, but every instance carries its own id. Rarity scaling has already
    been applied to ``stats`` by the time an Item exists.
    """

    id: str  # Unique identifier (e.g., "item-0003")
    name: str
    category: str  # One of ITEM_CATEGORIES
    rarity: str  # One of RARITIES
    stats: int  # Scaled stat value
    value: int  # Gold value
    effect: Optional[str] = None  # e.g. "healing", "fire_damage"
    icon: Optional[str] = None  # Picks the equipment slot (e.g. "sword", "helmet")

    def __post_init__(self):
        """Validate item data after initialization."""
        if not self.id:
            raise ValueError("Item id cannot be empty")
        if self.category not in ITEM_CATEGORIES:
            raise ValueError(f"Invalid category: {self.category} (must be one of {ITEM_CATEGORIES})")
        if self.rarity not in RARITIES:
            raise ValueError(f"Invalid rarity: {self.rarity} (must be one of {RARITIES})")
        if self.stats < 0:
            raise ValueError(f"Invalid stats: {self.stats} (must be >= 0)")


@dataclass
class Trap:
    """A trap armed on a board tile by a player."""

    id: str
    kind: str  # "creature", "damage" or "item_loss"
    power: int
    owner_id: str
    owner_name: str

    def __post_init__(self):
        """Validate trap data after initialization."""
        if self.kind not in TRAP_KINDS:
            raise ValueError(f"Invalid trap kind: {self.kind} (must be one of {TRAP_KINDS})")
        if self.power < 0:
            raise ValueError(f"Invalid power: {self.power} (must be >= 0)")


@dataclass(frozen=True)
class Enemy:
    """An enemy guarding a battle tile (or summoned by a creature trap).

    Immutable: restocking a tile after a victory replaces its Enemy.
    """

    id: str
    name: str
    health: int
    power: int
    reward: Item
    gold_reward: int

    def __post_init__(self):
        """Validate enemy data after initialization."""
        if self.health <= 0:
            raise ValueError(f"Invalid health: {self.health} (must be > 0)")
        if self.power < 0:
            raise ValueError(f"Invalid power: {self.power} (must be >= 0)")
