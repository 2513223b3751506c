"""Tests for item drops and enemy spawning."""

from collections import Counter

from questboard.engine.catalog import ENEMIES, EQUIPMENT_POOL, ITEM_POOL, RARITY_TABLE
from questboard.engine.rewards import (
    instantiate_item,
    random_equipment,
    random_item,
    roll_rarity,
    spawn_enemy,
)
from questboard.utils.naming import IdSequence
from questboard.utils.rng import GameRNG

from game_helpers import ScriptedRNG, make_item


def test_rarity_weights_sum_to_100():
    assert sum(config["chance"] for config in RARITY_TABLE.values()) == 100


def test_roll_rarity_buckets():
    """Each draw lands in the bucket its cumulative weight falls into."""
    draws = [0.0, 0.49, 0.51, 0.79, 0.81, 0.91, 0.925, 0.97, 0.985, 0.999]
    rng = ScriptedRNG(randoms=draws)
    rarities = [roll_rarity(rng) for _ in draws]

    assert rarities == [
        "common",
        "common",
        "uncommon",
        "uncommon",
        "rare",
        "rare",
        "very_rare",
        "very_rare",
        "legendary",
        "legendary",
    ]


def test_roll_rarity_distribution():
    rng = GameRNG(42)
    counts = Counter(roll_rarity(rng) for _ in range(10_000))

    assert abs(counts["common"] / 10_000 - 0.50) < 0.03
    assert abs(counts["uncommon"] / 10_000 - 0.30) < 0.03
    assert abs(counts["rare"] / 10_000 - 0.12) < 0.02
    assert abs(counts["very_rare"] / 10_000 - 0.06) < 0.015
    assert abs(counts["legendary"] / 10_000 - 0.02) < 0.01


def test_random_item_scales_by_rarity():
    rng = GameRNG(3)
    ids = IdSequence()
    templates = {template["name"]: template for template in ITEM_POOL}

    for rarity in RARITY_TABLE:
        item = random_item(rng, ids, rarity=rarity)
        template = templates[item.name]
        assert item.rarity == rarity
        assert item.stats == int(template["stats"] * RARITY_TABLE[rarity]["multiplier"])


def test_random_item_falls_back_to_first_template():
    pool = [
        {"name": "Pebble", "category": "weapon", "rarity": "common", "stats": 2, "value": 1},
        {"name": "Twig", "category": "weapon", "rarity": "common", "stats": 1, "value": 1},
    ]
    item = random_item(GameRNG(1), IdSequence(), rarity="legendary", pool=pool)

    assert item.name == "Pebble"
    assert item.rarity == "common"
    assert item.stats == 2


def test_items_get_fresh_ids():
    rng = GameRNG(9)
    ids = IdSequence()
    items = [random_item(rng, ids) for _ in range(100)]

    assert len({item.id for item in items}) == 100


def test_instantiate_item_unscaled():
    template = {"name": "Axe", "category": "weapon", "rarity": "legendary", "stats": 10, "value": 5}
    item = instantiate_item(template, IdSequence(), scale=False)

    assert item.stats == 10
    assert item.id == "item-0001"


def test_random_equipment_is_unscaled_gear():
    rng = GameRNG(11)
    ids = IdSequence()
    templates = {template["name"]: template for template in EQUIPMENT_POOL}

    for _ in range(50):
        item = random_equipment(rng, ids)
        assert item.category in ("weapon", "armor")
        assert item.stats == templates[item.name]["stats"]


class TestSpawnEnemy:
    """Tests for spawn_enemy."""

    def test_uses_catalog_template(self):
        enemy = spawn_enemy(GameRNG(4), IdSequence())
        template = next(t for t in ENEMIES if t["name"] == enemy.name)

        assert enemy.health == template["health"]
        assert enemy.power == template["power"]
        assert enemy.reward.category in ("weapon", "armor")

    def test_keeps_given_reward(self):
        reward = make_item("item-given")
        enemy = spawn_enemy(GameRNG(4), IdSequence(), reward=reward)
        assert enemy.reward is reward

    def test_unique_ids(self):
        rng = GameRNG(8)
        ids = IdSequence()
        enemies = [spawn_enemy(rng, ids) for _ in range(20)]

        assert len({e.id for e in enemies}) == 20
        assert len({e.reward.id for e in enemies}) == 20
