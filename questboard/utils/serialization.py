"""Game state serialization to JSON-compatible dictionaries.

Snapshots are what observers, the HTTP adapter and the WebSocket stream
see. They are plain dicts built fresh on every call, so nothing a consumer
does to a snapshot can reach back into the engine.
"""

from typing import Any, Optional

from ..models.battle import BattleRound, BattleState, DiceRoll
from ..models.game_state import GameState, LedgerResult
from ..models.item import Enemy, Item, Trap
from ..models.player import Player, total_stats
from ..models.tile import Tile


def serialize_state(state: GameState, session_id: Optional[str] = None) -> dict[str, Any]:
    """Convert GameState to a JSON-compatible dictionary.

    Args:
        state: Game state to serialize
        session_id: Session the state belongs to, if any

    Returns:
        Dictionary representation of the game state
    """
    path_length = sum(1 for tile in state.board if tile.path_index is not None)
    return {
        "session_id": session_id,
        "turn_id": state.turn_id,
        "phase": state.phase,
        "current_player_id": state.current_player_id,
        "dice_value": state.dice_value,
        "available_positions": list(state.available_positions),
        "can_continue": state.can_continue,
        "path_length": path_length,
        "players": [_serialize_player(p) for p in state.players],
        "board": [_serialize_tile(t) for t in state.board],
        "current_battle": _serialize_battle(state.current_battle) if state.current_battle else None,
        "last_battle_rounds": [_serialize_round(r) for r in state.last_battle_rounds],
        "active_trap": _serialize_trap(state.active_trap) if state.active_trap else None,
        "current_reward": _serialize_item(state.current_reward) if state.current_reward else None,
        "winner": state.winner.id if state.winner else None,
        "completion": _serialize_completion(state.completion) if state.completion else None,
    }


def _serialize_item(item: Item) -> dict[str, Any]:
    """Convert Item to dictionary."""
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category,
        "rarity": item.rarity,
        "stats": item.stats,
        "value": item.value,
        "effect": item.effect,
        "icon": item.icon,
    }


def _serialize_enemy(enemy: Enemy) -> dict[str, Any]:
    """Convert Enemy to dictionary."""
    return {
        "id": enemy.id,
        "name": enemy.name,
        "health": enemy.health,
        "power": enemy.power,
        "gold_reward": enemy.gold_reward,
        "reward": _serialize_item(enemy.reward),
    }


def _serialize_trap(trap: Trap) -> dict[str, Any]:
    """Convert Trap to dictionary."""
    return {
        "id": trap.id,
        "kind": trap.kind,
        "power": trap.power,
        "owner_id": trap.owner_id,
        "owner_name": trap.owner_name,
    }


def _serialize_tile(tile: Tile) -> dict[str, Any]:
    """Convert Tile to dictionary."""
    return {
        "id": tile.id,
        "x": tile.x,
        "y": tile.y,
        "kind": tile.kind,
        "is_path": tile.is_path,
        "path_index": tile.path_index,
        "enemy": _serialize_enemy(tile.enemy) if tile.enemy else None,
        "trap": _serialize_trap(tile.trap) if tile.trap else None,
    }


def _serialize_player(player: Player) -> dict[str, Any]:
    """Convert Player to dictionary, including derived stats."""
    stats = total_stats(player)
    return {
        "id": player.id,
        "name": player.name,
        "is_ai": player.is_ai,
        "color": player.color,
        "position": player.position,
        "health": player.health,
        "max_health": player.max_health,
        "gold": player.gold,
        "total_stats": {
            "attack": stats.attack,
            "defense": stats.defense,
            "health": stats.health,
            "speed": stats.speed,
        },
        "equipped": {slot: _serialize_item(item) for slot, item in player.equipped.items()},
        "inventory": [_serialize_item(item) for item in player.inventory],
        "stats": {
            "battles_won": player.stats.battles_won,
            "tiles_moved_total": player.stats.tiles_moved_total,
            "gold_collected": player.stats.gold_collected,
        },
    }


def _serialize_roll(roll: Optional[DiceRoll]) -> Optional[dict[str, Any]]:
    if roll is None:
        return None
    return {
        "die": roll.die,
        "value": roll.value,
        "modifier": roll.modifier,
        "total": roll.total,
        "is_critical": roll.is_critical,
        "is_critical_fail": roll.is_critical_fail,
    }


def _serialize_round(battle_round: BattleRound) -> dict[str, Any]:
    return {
        "player_roll": _serialize_roll(battle_round.player_roll),
        "enemy_roll": _serialize_roll(battle_round.enemy_roll),
        "damage": battle_round.damage,
        "is_player_turn": battle_round.is_player_turn,
        "description": battle_round.description,
    }


def _serialize_battle(battle: BattleState) -> dict[str, Any]:
    """Convert BattleState to dictionary."""
    return {
        "enemy": _serialize_enemy(battle.enemy),
        "phase": battle.phase,
        "player_health": battle.player_health,
        "player_max_health": battle.player_max_health,
        "enemy_health": battle.enemy_health,
        "enemy_max_health": battle.enemy_max_health,
        "current_round": battle.current_round,
        "defense_bonus": battle.defense_bonus,
        "rounds": [_serialize_round(r) for r in battle.rounds],
    }


def _serialize_completion(result: LedgerResult) -> dict[str, Any]:
    return {
        "success": result.success,
        "gold_awarded": result.gold_awarded,
        "orbs_awarded": result.orbs_awarded,
        "message": result.message,
    }
