"""Player data model and derived stats."""

from dataclasses import dataclass, field
from typing import Dict, List

from .item import Item

EQUIPMENT_SLOTS = ("weapon", "armor", "helmet", "shield", "gloves", "boots", "cloak", "accessory")

ARMOR_ICONS = ("armor", "shield", "helmet")

# Icon -> equipment slot. Equippable items with an unknown icon fall back to their category.
ICON_SLOTS = {
    "sword": "weapon",
    "dagger": "weapon",
    "bow": "weapon",
    "club": "weapon",
    "spear": "weapon",
    "mace": "weapon",
    "axe": "weapon",
    "staff": "weapon",
    "hammer": "weapon",
    "wand": "weapon",
    "scythe": "weapon",
    "glaive": "weapon",
    "halberd": "weapon",
    "crossbow": "weapon",
    "flail": "weapon",
    "greatsword": "weapon",
    "gem": "weapon",
    "armor": "armor",
    "robe": "armor",
    "helmet": "helmet",
    "crown": "helmet",
    "shield": "shield",
    "gloves": "gloves",
    "boots": "boots",
    "cloak": "cloak",
    "bracers": "accessory",
    "belt": "accessory",
    "mask": "accessory",
}


def get_item_slot(item: Item) -> str | None:
    """Equipment slot an item occupies, or None if it cannot be equipped.

    Traps, potions and consumables are never equipped. Otherwise the icon
    decides the slot; weapons and armor without a known icon use their
    category as the slot.
    """
    if item.category in ("trap", "potion", "consumable"):
        return None
    if item.icon in ICON_SLOTS:
        return ICON_SLOTS[item.icon]
    if item.category in ("weapon", "armor"):
        return item.category
    return "accessory"


@dataclass(frozen=True)
class Stats:
    """Attack, defense, health and speed scores."""

    attack: int
    defense: int
    health: int
    speed: int

    def __add__(self, other: "Stats") -> "Stats":
        return Stats(
            attack=self.attack + other.attack,
            defense=self.defense + other.defense,
            health=self.health + other.health,
            speed=self.speed + other.speed,
        )


@dataclass
class PlayerRecord:
    """Running per-game counters shown at the end of a game."""

    battles_won: int = 0
    tiles_moved_total: int = 0
    gold_collected: int = 0


@dataclass
class Player:
    """A seat at the table, human or AI.

    ``position`` is an index into the ordered main path, not a grid
    coordinate. Effective stats are never stored; use ``total_stats``.
    """

    id: str
    name: str
    is_ai: bool
    base_stats: Stats
    health: int
    max_health: int
    position: int = 0
    gold: int = 0
    equipped: Dict[str, Item] = field(default_factory=dict)  # slot -> item
    inventory: List[Item] = field(default_factory=list)
    stats: PlayerRecord = field(default_factory=PlayerRecord)
    color: str = "#3B82F6"
    last_gold_win: int = 0

    def __post_init__(self):
        """Validate player data after initialization."""
        if not self.id:
            raise ValueError("Player id cannot be empty")
        if self.position < 0:
            raise ValueError(f"Invalid position: {self.position} (must be >= 0)")
        if self.health < 0:
            raise ValueError(f"Invalid health: {self.health} (must be >= 0)")
        if self.max_health <= 0:
            raise ValueError(f"Invalid max_health: {self.max_health} (must be > 0)")
        for slot in self.equipped:
            if slot not in EQUIPMENT_SLOTS:
                raise ValueError(f"Invalid equipment slot: {slot} (must be one of {EQUIPMENT_SLOTS})")

    def find_item(self, item_id: str) -> Item | None:
        """Return the inventory item with this id, if the player owns it."""
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None


def item_bonus(item: Item) -> Stats:
    """Stat contribution of a single equipped item.

    Weapons mostly add attack, armor pieces mostly add defense, and both
    carry a minor health bonus. Anything else equippable (mythic relics,
    accessories) spreads a smaller bonus across attack, defense and speed.
    """
    attack = defense = health = speed = 0
    if item.category == "weapon":
        attack += item.stats
        health += int(item.stats * 0.1)
    elif item.category == "armor" or item.icon in ARMOR_ICONS:
        defense += item.stats
        health += int(item.stats * 0.3)
    else:
        attack += int(item.stats * 0.3)
        defense += int(item.stats * 0.3)
        speed += int(item.stats * 0.2)

    if item.effect in ("movement_bonus", "haste"):
        speed += 10

    return Stats(attack=attack, defense=defense, health=health, speed=speed)


def equipment_bonuses(player: Player) -> Stats:
    """Sum of the bonuses of every equipped item."""
    total = Stats(attack=0, defense=0, health=0, speed=0)
    for item in player.equipped.values():
        total = total + item_bonus(item)
    return total


def total_stats(player: Player) -> Stats:
    """Effective stats: base stats plus equipment bonuses."""
    return player.base_stats + equipment_bonuses(player)
