"""Item and enemy templates.

Templates are plain dicts; ``rewards.instantiate_item`` turns one into an
Item with a fresh id and rarity-scaled stats.
"""

# Rarity table: stat multiplier and drop weight (weights sum to 100)
RARITY_TABLE = {
    "common": {"multiplier": 1, "chance": 50},
    "uncommon": {"multiplier": 2, "chance": 30},
    "rare": {"multiplier": 2.5, "chance": 12},
    "very_rare": {"multiplier": 3, "chance": 6},
    "legendary": {"multiplier": 5, "chance": 2},
}

WEAPONS = [
    # Common
    {"name": "Wooden Sword", "category": "weapon", "rarity": "common", "stats": 10, "icon": "sword", "value": 20},
    {"name": "Rusty Dagger", "category": "weapon", "rarity": "common", "stats": 8, "icon": "dagger", "value": 15},
    {"name": "Hunting Bow", "category": "weapon", "rarity": "common", "stats": 12, "icon": "bow", "value": 25},
    {"name": "Stone Club", "category": "weapon", "rarity": "common", "stats": 9, "icon": "club", "value": 18},
    {"name": "Copper Shortsword", "category": "weapon", "rarity": "common", "stats": 11, "icon": "sword", "value": 22},
    {"name": "Wooden Spear", "category": "weapon", "rarity": "common", "stats": 10, "icon": "spear", "value": 20},
    {"name": "Iron Mace", "category": "weapon", "rarity": "common", "stats": 13, "icon": "mace", "value": 26},
    {"name": "Hatchet", "category": "weapon", "rarity": "common", "stats": 12, "icon": "axe", "value": 24},
    {"name": "Wooden Staff", "category": "weapon", "rarity": "common", "stats": 9, "icon": "staff", "value": 18},
    {"name": "Iron Flail", "category": "weapon", "rarity": "common", "stats": 14, "icon": "flail", "value": 28},
    {"name": "Iron Rapier", "category": "weapon", "rarity": "common", "stats": 15, "icon": "sword", "value": 30},
    # Uncommon
    {"name": "Elven Longbow", "category": "weapon", "rarity": "uncommon", "stats": 18, "icon": "bow", "value": 90},
    {"name": "Lightning Javelin", "category": "weapon", "rarity": "uncommon", "stats": 22, "icon": "spear",
     "effect": "lightning_damage", "value": 150},
    {"name": "Dwarven Warhammer", "category": "weapon", "rarity": "uncommon", "stats": 24, "icon": "hammer", "value": 120},
    {"name": "Steel Longsword", "category": "weapon", "rarity": "uncommon", "stats": 20, "icon": "sword", "value": 100},
    {"name": "Silver Dagger", "category": "weapon", "rarity": "uncommon", "stats": 18, "icon": "dagger",
     "effect": "undead_damage", "value": 140},
    {"name": "Halberd", "category": "weapon", "rarity": "uncommon", "stats": 23, "icon": "halberd", "value": 115},
    {"name": "Crossbow", "category": "weapon", "rarity": "uncommon", "stats": 20, "icon": "crossbow", "value": 100},
    {"name": "Battleaxe", "category": "weapon", "rarity": "uncommon", "stats": 22, "icon": "axe", "value": 110},
    # Rare
    {"name": "Mystic Staff", "category": "weapon", "rarity": "rare", "stats": 25, "icon": "wand", "value": 300},
    {"name": "Flame Tongue", "category": "weapon", "rarity": "rare", "stats": 30, "icon": "sword",
     "effect": "fire_damage", "value": 500},
    {"name": "Frost Brand", "category": "weapon", "rarity": "rare", "stats": 28, "icon": "axe",
     "effect": "cold_resistance", "value": 450},
    {"name": "Vampiric Sword", "category": "weapon", "rarity": "rare", "stats": 27, "icon": "sword",
     "effect": "life_steal", "value": 450},
    {"name": "Thunder Hammer", "category": "weapon", "rarity": "rare", "stats": 29, "icon": "hammer",
     "effect": "shockwave", "value": 480},
    # Very rare
    {"name": "Soul Reaver", "category": "weapon", "rarity": "very_rare", "stats": 35, "icon": "scythe",
     "effect": "soul_drain", "value": 1500},
    {"name": "Celestial Blade", "category": "weapon", "rarity": "very_rare", "stats": 38, "icon": "sword",
     "effect": "holy_damage", "value": 1600},
    {"name": "Titan's Maul", "category": "weapon", "rarity": "very_rare", "stats": 40, "icon": "hammer",
     "effect": "armor_shatter", "value": 1700},
    # Legendary
    {"name": "Eternal Gem", "category": "weapon", "rarity": "legendary", "stats": 50, "icon": "gem", "value": 3000},
    {"name": "Vorpal Sword", "category": "weapon", "rarity": "legendary", "stats": 45, "icon": "sword",
     "effect": "decapitation_chance", "value": 4000},
    {"name": "Doombringer", "category": "weapon", "rarity": "legendary", "stats": 55, "icon": "greatsword",
     "effect": "doom", "value": 5000},
]

ARMORS = [
    {"name": "Leather Armor", "category": "armor", "rarity": "common", "stats": 12, "icon": "armor", "value": 24},
    {"name": "Wooden Shield", "category": "armor", "rarity": "common", "stats": 8, "icon": "shield", "value": 16},
    {"name": "Leather Boots", "category": "armor", "rarity": "common", "stats": 5, "icon": "boots", "value": 12},
    {"name": "Chainmail", "category": "armor", "rarity": "uncommon", "stats": 18, "icon": "armor", "value": 90},
    {"name": "Iron Shield", "category": "armor", "rarity": "uncommon", "stats": 20, "icon": "shield", "value": 100},
    {"name": "Iron Helmet", "category": "armor", "rarity": "uncommon", "stats": 14, "icon": "helmet", "value": 80},
    {"name": "Plate Armor", "category": "armor", "rarity": "rare", "stats": 30, "icon": "armor", "value": 400},
    {"name": "Shadow Cloak", "category": "armor", "rarity": "rare", "stats": 22, "icon": "cloak",
     "effect": "haste", "value": 350},
    {"name": "Dragon Crown", "category": "armor", "rarity": "very_rare", "stats": 30, "icon": "crown", "value": 900},
    {"name": "Aegis of Dawn", "category": "armor", "rarity": "legendary", "stats": 45, "icon": "shield", "value": 3500},
]

TRAPS = [
    {"name": "Spike Trap", "category": "trap", "rarity": "common", "stats": 15, "icon": "trap",
     "effect": "damage", "value": 50},
    {"name": "Monster Box", "category": "trap", "rarity": "uncommon", "stats": 25, "icon": "creature",
     "effect": "creature", "value": 120},
    {"name": "Thief's Curse", "category": "trap", "rarity": "rare", "stats": 0, "icon": "package",
     "effect": "item_loss", "value": 200},
]

POTIONS = [
    # Healing
    {"name": "Minor Health Potion", "category": "potion", "rarity": "common", "stats": 15, "icon": "potion",
     "effect": "healing", "value": 30},
    {"name": "Health Potion", "category": "potion", "rarity": "common", "stats": 25, "icon": "potion",
     "effect": "healing", "value": 50},
    {"name": "Greater Health Potion", "category": "potion", "rarity": "uncommon", "stats": 40, "icon": "potion",
     "effect": "healing", "value": 100},
    {"name": "Superior Health Potion", "category": "potion", "rarity": "rare", "stats": 60, "icon": "potion",
     "effect": "healing", "value": 200},
    {"name": "Master Health Potion", "category": "potion", "rarity": "very_rare", "stats": 80, "icon": "potion",
     "effect": "healing", "value": 400},
    {"name": "Elixir of Life", "category": "potion", "rarity": "legendary", "stats": 100, "icon": "potion",
     "effect": "full_healing", "value": 800},
    # Thrown and coating consumables
    {"name": "Acid Vial", "category": "consumable", "rarity": "common", "stats": 12, "icon": "vial",
     "effect": "acid_damage", "value": 40},
    {"name": "Poison Coating", "category": "consumable", "rarity": "common", "stats": 8, "icon": "vial",
     "effect": "weapon_poison", "value": 60},
    {"name": "Alchemist's Fire", "category": "consumable", "rarity": "uncommon", "stats": 18, "icon": "fire",
     "effect": "fire_damage", "value": 80},
    {"name": "Potion of Strength", "category": "consumable", "rarity": "uncommon", "stats": 15, "icon": "potion",
     "effect": "strength_boost", "value": 100},
    {"name": "Lightning Bottle", "category": "consumable", "rarity": "rare", "stats": 25, "icon": "vial",
     "effect": "lightning_damage", "value": 150},
    {"name": "Paralyzing Toxin", "category": "consumable", "rarity": "rare", "stats": 15, "icon": "vial",
     "effect": "enemy_paralysis", "value": 150},
    {"name": "Potion of Giant Strength", "category": "consumable", "rarity": "very_rare", "stats": 30,
     "icon": "potion", "effect": "giant_strength", "value": 400},
    {"name": "Phoenix Tears", "category": "consumable", "rarity": "legendary", "stats": 0, "icon": "potion",
     "effect": "resurrection", "value": 1000},
]

MYTHIC = [
    {"name": "Cataclysm", "category": "mythic", "rarity": "legendary", "stats": 70, "icon": "sword",
     "effect": "holy", "value": 6000},
]

ITEM_POOL = WEAPONS + ARMORS + TRAPS + POTIONS + MYTHIC

EQUIPMENT_POOL = [template for template in ITEM_POOL if template["category"] in ("weapon", "armor")]

ENEMIES = [
    {"name": "Goblin Scout", "health": 30, "power": 15, "gold_reward": 30},
    {"name": "Stone Golem", "health": 50, "power": 25, "gold_reward": 60},
    {"name": "Dark Knight", "health": 70, "power": 35, "gold_reward": 100},
    {"name": "Dragon Whelp", "health": 10, "power": 5, "gold_reward": 20},
    {"name": "Shadow Stalker", "health": 40, "power": 20, "gold_reward": 45},
    {"name": "Venomfang Serpent", "health": 55, "power": 25, "gold_reward": 65},
    {"name": "Cursed Revenant", "health": 60, "power": 30, "gold_reward": 80},
    {"name": "Inferno Imp", "health": 25, "power": 18, "gold_reward": 40},
    {"name": "Frost Wraith", "health": 50, "power": 22, "gold_reward": 55},
    {"name": "Medusa", "health": 70, "power": 30, "gold_reward": 90},
]
