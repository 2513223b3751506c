"""Rewards ledger: where castle completions are reported."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from ..models.game_state import LedgerResult
from ..utils.constants import DEFAULT_ORBS_TO_AWARD

logger = logging.getLogger(__name__)


class RewardsLedger(Protocol):
    """Anything that can credit a player for reaching the castle."""

    def award(self, player_id: str, gold_collected: int, orbs_to_award: int = DEFAULT_ORBS_TO_AWARD) -> LedgerResult:
        ...


@dataclass
class LedgerEntry:
    player_id: str
    gold: int
    orbs: int


@dataclass
class InMemoryRewardsLedger:
    """Ledger that keeps balances in memory for the life of the process."""

    entries: list[LedgerEntry] = field(default_factory=list)
    gold: dict[str, int] = field(default_factory=dict)
    orbs: dict[str, int] = field(default_factory=dict)

    def award(self, player_id: str, gold_collected: int, orbs_to_award: int = DEFAULT_ORBS_TO_AWARD) -> LedgerResult:
        """Credit gold and orbs to a player.

        Args:
            player_id: Player who reached the castle
            gold_collected: Gold gathered during the game
            orbs_to_award: Orbs granted for the completion

        Returns:
            LedgerResult describing what was credited
        """
        if gold_collected < 0 or orbs_to_award < 0:
            return LedgerResult(success=False, message="Reward amounts cannot be negative")

        self.entries.append(LedgerEntry(player_id=player_id, gold=gold_collected, orbs=orbs_to_award))
        self.gold[player_id] = self.gold.get(player_id, 0) + gold_collected
        self.orbs[player_id] = self.orbs.get(player_id, 0) + orbs_to_award
        logger.info(f"Ledger: {player_id} awarded {gold_collected} gold and {orbs_to_award} orbs")
        return LedgerResult(
            success=True,
            gold_awarded=gold_collected,
            orbs_awarded=orbs_to_award,
            message=f"Awarded {gold_collected} gold and {orbs_to_award} orbs",
        )
