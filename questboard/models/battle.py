"""Battle data models: dice rolls, rounds and battle state."""

from dataclasses import dataclass, field
from typing import Optional

from .item import Enemy
from .player import Stats

BATTLE_PHASES = ("initiative", "player_attack", "enemy_attack", "victory", "defeat")


@dataclass(frozen=True)
class DiceRoll:
    """Outcome of a single die roll.

    Attributes:
        die: Die name, e.g. "d20"
        value: Natural face value
        modifier: Flat bonus applied to the roll
        total: value + modifier
        is_critical: Natural 20 on a d20
        is_critical_fail: Natural 1 on a d20
    """

    die: str
    value: int
    modifier: int
    total: int
    is_critical: bool = False
    is_critical_fail: bool = False


@dataclass(frozen=True)
class BattleRound:
    """Narration record for one combat step.

    Attributes:
        player_roll: The player's roll this step (None when the player did not roll)
        enemy_roll: The enemy's roll this step (None when the enemy did not roll)
        damage: Damage dealt this step, if any
        is_player_turn: Whether the player acted this step
        description: Human-readable narration for the UI
    """

    player_roll: Optional[DiceRoll]
    enemy_roll: Optional[DiceRoll]
    damage: Optional[int]
    is_player_turn: bool
    description: str


@dataclass(frozen=True)
class BattleState:
    """Snapshot of an ongoing battle.

    Every combat step produces a new BattleState; nothing mutates an
    existing one. ``player_stats`` is captured when the battle starts so
    equipment changes mid-fight cannot alter the outcome.
    """

    enemy: Enemy
    player_health: int
    player_max_health: int
    enemy_health: int
    enemy_max_health: int
    player_stats: Stats
    phase: str = "initiative"
    rounds: tuple[BattleRound, ...] = field(default_factory=tuple)
    current_round: int = 0
    defense_bonus: int = 0  # AC bonus from a defensive stance, spent on the next enemy attack

    def __post_init__(self):
        """Validate battle data after initialization."""
        if self.phase not in BATTLE_PHASES:
            raise ValueError(f"Invalid battle phase: {self.phase} (must be one of {BATTLE_PHASES})")
        if self.player_health < 0 or self.enemy_health < 0:
            raise ValueError("Health values cannot be negative")

    @property
    def is_over(self) -> bool:
        return self.phase in ("victory", "defeat")
