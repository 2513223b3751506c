"""Reward generation: rarity-weighted item drops and enemy spawning."""

import logging
from typing import Optional

from ..models.item import Enemy, Item
from ..utils.constants import DEFAULT_ENEMY_GOLD
from ..utils.naming import IdSequence
from ..utils.rng import GameRNG
from .catalog import ENEMIES, EQUIPMENT_POOL, ITEM_POOL, RARITY_TABLE

logger = logging.getLogger(__name__)


def roll_rarity(rng: GameRNG) -> str:
    """Draw a rarity tier by cumulative weight.

    Weights are common 50, uncommon 30, rare 12, very_rare 6, legendary 2.
    If floating point drift leaves the draw above every bucket, the result
    falls back to common.

    Args:
        rng: Random number generator

    Returns:
        Rarity name
    """
    draw = rng.random() * 100
    cumulative = 0
    for rarity, config in RARITY_TABLE.items():
        cumulative += config["chance"]
        if draw < cumulative:
            return rarity
    return "common"


def instantiate_item(template: dict, ids: IdSequence, scale: bool = True) -> Item:
    """Create a fresh Item from a catalog template.

    Args:
        template: Catalog entry
        ids: Id source for the new instance
        scale: Apply the rarity stat multiplier

    Returns:
        New Item with a unique id
    """
    stats = template["stats"]
    if scale:
        stats = int(stats * RARITY_TABLE[template["rarity"]]["multiplier"])
    return Item(
        id=ids.next("item"),
        name=template["name"],
        category=template["category"],
        rarity=template["rarity"],
        stats=stats,
        value=template["value"],
        effect=template.get("effect"),
        icon=template.get("icon"),
    )


def random_item(
    rng: GameRNG,
    ids: IdSequence,
    rarity: Optional[str] = None,
    pool: Optional[list[dict]] = None,
) -> Item:
    """Generate a random item, scaled by its rarity multiplier.

    Args:
        rng: Random number generator
        ids: Id source for the new instance
        rarity: Force a tier; drawn by weight when omitted
        pool: Templates to draw from (defaults to the full item pool)

    Returns:
        New Item instance
    """
    pool = ITEM_POOL if pool is None else pool
    if rarity is None:
        rarity = roll_rarity(rng)

    candidates = [template for template in pool if template["rarity"] == rarity]
    if not candidates:
        logger.debug(f"No {rarity} templates in pool, falling back to {pool[0]['name']}")
        candidates = [pool[0]]

    return instantiate_item(rng.choice(candidates), ids)


def random_equipment(rng: GameRNG, ids: IdSequence) -> Item:
    """Uniformly pick a weapon or armor piece as a battle reward (unscaled)."""
    return instantiate_item(rng.choice(EQUIPMENT_POOL), ids, scale=False)


def spawn_enemy(rng: GameRNG, ids: IdSequence, reward: Optional[Item] = None) -> Enemy:
    """Instantiate a random enemy template with its own reward item.

    Args:
        rng: Random number generator
        ids: Id source for the enemy (and the reward, if generated here)
        reward: Reward to carry; a random weapon or armor piece when omitted

    Returns:
        New Enemy instance
    """
    template = rng.choice(ENEMIES)
    if reward is None:
        reward = random_equipment(rng, ids)
    return Enemy(
        id=ids.next("enemy"),
        name=template["name"],
        health=template["health"],
        power=template["power"],
        reward=reward,
        gold_reward=template.get("gold_reward", DEFAULT_ENEMY_GOLD),
    )
