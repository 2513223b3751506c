"""Game engine components."""

from .board_builder import available_positions, build_board, ordered_path_tiles
from .combat import BattleOutcome, initiate_battle, resolve_battle
from .ledger import InMemoryRewardsLedger, RewardsLedger
from .path_generator import PathLayout, generate_layout, generate_path
from .rewards import random_item, roll_rarity
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from .turn_engine import TurnEngine

__all__ = [
    "available_positions",
    "build_board",
    "ordered_path_tiles",
    "BattleOutcome",
    "initiate_battle",
    "resolve_battle",
    "InMemoryRewardsLedger",
    "RewardsLedger",
    "PathLayout",
    "generate_layout",
    "generate_path",
    "random_item",
    "roll_rarity",
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "TurnEngine",
]
