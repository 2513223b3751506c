"""Dice-based battle resolution.

This module handles:
1. Initiative (who strikes first)
2. Player actions: attack, defend, use an item
3. Enemy counter-attacks
4. Reading the outcome of a finished battle

Every step is a pure function: it takes a BattleState and returns a new
one with exactly one extra BattleRound. A step called in the wrong battle
phase returns the state unchanged.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..models.battle import BattleRound, BattleState
from ..models.item import Enemy, Item
from ..models.player import Player, total_stats
from ..utils.constants import ENEMY_INITIATIVE_SPEED
from ..utils.dice import (
    attack_modifier,
    calculate_damage,
    calculate_initiative,
    defense_modifier,
    roll_dice,
)
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


@dataclass
class BattleOutcome:
    """Result of a finished battle.

    Attributes:
        player_won: True on victory, False on defeat
        damage_taken: Total damage the enemy dealt over the battle
    """

    player_won: bool
    damage_taken: int


def _append_round(state: BattleState, battle_round: BattleRound, **changes) -> BattleState:
    return replace(
        state,
        rounds=state.rounds + (battle_round,),
        current_round=state.current_round + 1,
        **changes,
    )


def enemy_armor_class(enemy: Enemy) -> int:
    return 10 + enemy.power // 10


def initiate_battle(rng: GameRNG, enemy: Enemy, player: Player) -> BattleState:
    """Roll initiative and open a battle.

    The player rolls d20 plus their speed modifier (from effective stats);
    the enemy rolls as if it had speed 20. The player acts first on a tie.

    Args:
        rng: Random number generator
        enemy: Enemy being fought
        player: Player entering the battle

    Returns:
        BattleState in ``player_attack`` or ``enemy_attack`` with the
        initiative round recorded
    """
    stats = total_stats(player)
    player_roll = calculate_initiative(rng, stats.speed)
    enemy_roll = calculate_initiative(rng, ENEMY_INITIATIVE_SPEED)
    player_first = player_roll.total >= enemy_roll.total

    if player_first:
        description = f"{player.name} wins initiative ({player_roll.total} vs {enemy_roll.total}) and strikes first!"
    else:
        description = f"The {enemy.name} wins initiative ({enemy_roll.total} vs {player_roll.total}) and attacks first!"

    state = BattleState(
        enemy=enemy,
        player_health=player.health,
        player_max_health=player.max_health,
        enemy_health=enemy.health,
        enemy_max_health=enemy.health,
        player_stats=stats,
    )
    initiative = BattleRound(
        player_roll=player_roll,
        enemy_roll=enemy_roll,
        damage=None,
        is_player_turn=player_first,
        description=description,
    )
    logger.debug(description)
    return _append_round(state, initiative, phase="player_attack" if player_first else "enemy_attack")


def player_attack(rng: GameRNG, state: BattleState) -> BattleState:
    """Player swings at the enemy.

    d20 + attack modifier against AC 10 + power // 10. A natural 1 always
    misses and a natural 20 always hits for double damage.
    """
    if state.phase != "player_attack":
        return state

    roll = roll_dice(rng, "d20", attack_modifier(state.player_stats))
    armor_class = enemy_armor_class(state.enemy)
    hit = not roll.is_critical_fail and (roll.is_critical or roll.total >= armor_class)

    damage = None
    enemy_health = state.enemy_health
    if hit:
        damage = calculate_damage(rng, state.player_stats.attack, roll.is_critical)
        enemy_health = max(0, enemy_health - damage)
        if roll.is_critical:
            description = f"Critical hit! You deal {damage} damage to the {state.enemy.name}!"
        else:
            description = f"You hit the {state.enemy.name} for {damage} damage ({roll.total} vs AC {armor_class})."
    elif roll.is_critical_fail:
        description = "Critical miss! You stumble and your attack goes wide."
    else:
        description = f"You miss the {state.enemy.name} ({roll.total} vs AC {armor_class})."

    battle_round = BattleRound(
        player_roll=roll,
        enemy_roll=None,
        damage=damage,
        is_player_turn=True,
        description=description,
    )
    phase = "victory" if enemy_health == 0 else "enemy_attack"
    return _append_round(state, battle_round, enemy_health=enemy_health, phase=phase)


def player_defend(rng: GameRNG, state: BattleState) -> BattleState:
    """Take a defensive stance: AC bonus of natural d20 // 4 against the next enemy attack."""
    if state.phase != "player_attack":
        return state

    roll = roll_dice(rng, "d20", defense_modifier(state.player_stats))
    bonus = roll.value // 4
    battle_round = BattleRound(
        player_roll=roll,
        enemy_roll=None,
        damage=None,
        is_player_turn=True,
        description=f"You raise your guard (+{bonus} AC against the next attack).",
    )
    return _append_round(state, battle_round, defense_bonus=bonus, phase="enemy_attack")


def player_use_item(rng: GameRNG, state: BattleState, item: Item) -> BattleState:
    """Use an item instead of attacking.

    Potions heal their stats, capped at max health. Consumables and mythic
    items only narrate their effect. Anything else does nothing but still
    spends the turn.
    """
    if state.phase != "player_attack":
        return state

    player_health = state.player_health
    if item.category == "potion":
        healed = min(item.stats, state.player_max_health - player_health)
        player_health += healed
        description = f"You drink the {item.name} and recover {healed} health."
    elif item.category in ("consumable", "mythic"):
        effect = (item.effect or "mysterious").replace("_", " ")
        description = f"You use the {item.name}: {effect} effect!"
    else:
        description = f"You fumble with the {item.name}, but nothing happens."

    battle_round = BattleRound(
        player_roll=None,
        enemy_roll=None,
        damage=None,
        is_player_turn=True,
        description=description,
    )
    return _append_round(state, battle_round, player_health=player_health, phase="enemy_attack")


def enemy_attack(rng: GameRNG, state: BattleState) -> BattleState:
    """Enemy counter-attack.

    d20 + power // 10 against AC 10 + defense modifier + any defensive
    stance bonus (which is spent). Damage is power // 5 + d6, doubled on a
    natural 20; a natural 1 always misses.
    """
    if state.phase != "enemy_attack":
        return state

    enemy = state.enemy
    roll = roll_dice(rng, "d20", enemy.power // 10)
    armor_class = 10 + defense_modifier(state.player_stats) + state.defense_bonus
    hit = not roll.is_critical_fail and (roll.is_critical or roll.total >= armor_class)

    damage = None
    player_health = state.player_health
    if hit:
        damage = enemy.power // 5 + rng.roll(6)
        if roll.is_critical:
            damage *= 2
            description = f"Critical hit! The {enemy.name} deals {damage} damage!"
        else:
            description = f"The {enemy.name} hits you for {damage} damage ({roll.total} vs AC {armor_class})."
        player_health = max(0, player_health - damage)
    elif roll.is_critical_fail:
        description = f"The {enemy.name} critically misses!"
    else:
        description = f"The {enemy.name} misses ({roll.total} vs AC {armor_class})."

    battle_round = BattleRound(
        player_roll=None,
        enemy_roll=roll,
        damage=damage,
        is_player_turn=False,
        description=description,
    )
    phase = "defeat" if player_health == 0 else "player_attack"
    return _append_round(state, battle_round, player_health=player_health, defense_bonus=0, phase=phase)


def resolve_battle(state: BattleState) -> Optional[BattleOutcome]:
    """Summarize a finished battle; None while it is still running."""
    if not state.is_over:
        return None
    damage_taken = sum(r.damage or 0 for r in state.rounds if not r.is_player_turn)
    return BattleOutcome(player_won=state.phase == "victory", damage_taken=damage_taken)
