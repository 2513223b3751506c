"""Dice rolling and stat modifier helpers used by combat."""

from ..models.battle import DiceRoll
from ..models.player import Stats
from .rng import GameRNG

DIE_SIDES = {"d4": 4, "d6": 6, "d8": 8, "d10": 10, "d12": 12, "d20": 20}


def roll_dice(rng: GameRNG, die: str, modifier: int = 0) -> DiceRoll:
    """Roll one die and apply a flat modifier.

    Critical flags only apply to d20 rolls: a natural 20 is a critical hit
    and a natural 1 is a critical fail.

    Args:
        rng: Game random source
        die: Die name ("d4" ... "d20")
        modifier: Flat bonus added to the face value

    Returns:
        DiceRoll describing the natural value and total
    """
    value = rng.roll(DIE_SIDES[die])
    return DiceRoll(
        die=die,
        value=value,
        modifier=modifier,
        total=value + modifier,
        is_critical=die == "d20" and value == 20,
        is_critical_fail=die == "d20" and value == 1,
    )


def stat_modifier(score: int) -> int:
    """Tabletop-style modifier for a stat score: floor((score - 10) / 2)."""
    return (score - 10) // 2


def attack_modifier(stats: Stats) -> int:
    return stat_modifier(stats.attack)


def defense_modifier(stats: Stats) -> int:
    return stat_modifier(stats.defense)


def calculate_damage(rng: GameRNG, attack: int, is_critical: bool = False) -> int:
    """Player damage on a hit: 1d6 plus one point per 10 attack, doubled on a crit."""
    damage = rng.roll(6) + attack // 10
    return damage * 2 if is_critical else damage


def calculate_initiative(rng: GameRNG, speed: int) -> DiceRoll:
    """Roll initiative: d20 plus the speed modifier."""
    return roll_dice(rng, "d20", stat_modifier(speed))
