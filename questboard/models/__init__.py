"""Data models for Questboard."""

from .action import Action
from .battle import BattleRound, BattleState, DiceRoll
from .game_state import GameState, LedgerResult
from .item import Enemy, Item, Trap
from .player import Player, PlayerRecord, Stats, get_item_slot, total_stats
from .tile import Tile

__all__ = [
    "Action",
    "BattleRound",
    "BattleState",
    "DiceRoll",
    "Enemy",
    "GameState",
    "Item",
    "LedgerResult",
    "Player",
    "PlayerRecord",
    "Stats",
    "Tile",
    "Trap",
    "get_item_slot",
    "total_stats",
]
