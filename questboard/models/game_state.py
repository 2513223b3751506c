"""Game state container."""

from dataclasses import dataclass, field
from typing import Optional

from .battle import BattleRound, BattleState
from .item import Item, Trap
from .player import Player
from .tile import Tile

GAME_PHASES = (
    "rolling",
    "selecting_tile",
    "moving",
    "battle",
    "trap",
    "reward",
    "finishing",
    "game_over",
)


@dataclass
class LedgerResult:
    """Answer from the rewards ledger after a castle completion."""

    success: bool
    gold_awarded: int = 0
    orbs_awarded: int = 0
    message: str = ""


@dataclass
class GameState:
    """Main game state container.

    The GameState holds the players, the board and the transient state of
    the current turn. It is owned by one TurnEngine, which is the only code
    allowed to mutate it; everyone else reads snapshots.
    """

    players: list[Player]  # Seats in fixed round-robin order
    board: list[Tile]  # Every grid cell, row-major
    current_player_id: str
    phase: str = "rolling"
    dice_value: Optional[int] = None
    current_battle: Optional[BattleState] = None  # Cleared as soon as the battle ends
    last_battle_rounds: list[BattleRound] = field(default_factory=list)  # Rounds of the battle that just ended
    active_trap: Optional[Trap] = None
    winner: Optional[Player] = None
    available_positions: list[int] = field(default_factory=list)  # Legal destinations while selecting
    current_reward: Optional[Item] = None  # Item being shown in the reward phase
    can_continue: bool = False  # Finishing after a reward/trap: the player may roll again
    turn_id: int = 0  # Increments every time a turn ends
    completion: Optional[LedgerResult] = None  # Ledger answer after the castle is reached

    def __post_init__(self):
        """Validate game state after initialization."""
        if not self.players:
            raise ValueError("A game needs at least one player")
        if self.current_player_id not in {p.id for p in self.players}:
            raise ValueError(f"Unknown current player: {self.current_player_id}")
        if self.phase not in GAME_PHASES:
            raise ValueError(f"Invalid phase: {self.phase} (must be one of {GAME_PHASES})")
        if self.dice_value is not None and not (1 <= self.dice_value <= 6):
            raise ValueError(f"Invalid dice value: {self.dice_value} (must be 1-6)")

    @property
    def current_player(self) -> Player:
        for player in self.players:
            if player.id == self.current_player_id:
                return player
        raise ValueError(f"Unknown current player: {self.current_player_id}")

    def get_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None
