"""Scripted AI player.

Decides the next action for an AI seat from the current game state. The
turn engine asks for a decision each time it wakes an AI up, so the policy
only has to look at the phase it is in:

- rolling: equip any strictly better gear, then roll
- selecting_tile: take the castle if it is in reach, else a random legal tile
- battle: attack, or drink the strongest potion when health runs low
- reward: acknowledge it
- finishing: keep playing with AI_CONTINUE_PROBABILITY when allowed, else end the turn
"""

import logging
from typing import Optional

from ..models.action import Action
from ..models.game_state import GameState
from ..models.item import Item
from ..models.player import Player, get_item_slot
from ..utils.constants import (
    AI_COMBAT_DELAY,
    AI_CONTINUE_DELAY,
    AI_CONTINUE_PROBABILITY,
    AI_END_TURN_DELAY,
    AI_POTION_HEALTH_RATIO,
    AI_REWARD_DELAY,
    AI_ROLL_DELAY,
    AI_SELECT_TILE_DELAY,
)
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


class ScriptedPlayer:
    """Rule-based AI opponent."""

    def __init__(self, rng: GameRNG, continue_probability: float = AI_CONTINUE_PROBABILITY):
        """Initialize scripted player.

        Args:
            rng: Random number generator (shared with the engine for reproducibility)
            continue_probability: Chance to keep playing after a reward or trap
        """
        self.rng = rng
        self.continue_probability = continue_probability

    def delay_for(self, state: GameState) -> float:
        """How long the AI "thinks" before acting in the current phase."""
        if state.phase == "rolling":
            return AI_ROLL_DELAY
        if state.phase == "selecting_tile":
            return AI_SELECT_TILE_DELAY
        if state.phase == "battle":
            return AI_COMBAT_DELAY
        if state.phase == "reward":
            return AI_REWARD_DELAY
        if state.phase == "finishing" and state.can_continue:
            return AI_CONTINUE_DELAY
        return AI_END_TURN_DELAY

    def choose_action(self, state: GameState) -> Optional[Action]:
        """Pick the next action for the current (AI) player.

        Args:
            state: Current game state

        Returns:
            Action to dispatch, or None when the AI has nothing to do
        """
        player = state.current_player
        phase = state.phase

        if phase == "rolling":
            upgrade = self._find_upgrade(player)
            if upgrade is not None:
                return Action(type="equip_item", item_id=upgrade.id)
            return Action(type="roll_dice")

        if phase == "selecting_tile":
            return self._choose_tile(state)

        if phase == "battle":
            return self._choose_battle_action(state, player)

        if phase == "reward":
            return Action(type="acknowledge_reward")

        if phase == "finishing":
            if state.can_continue and self.rng.random() < self.continue_probability:
                return Action(type="continue_turn")
            return Action(type="end_turn")

        return None

    def _choose_tile(self, state: GameState) -> Optional[Action]:
        if not state.available_positions:
            return None
        castle_position = sum(1 for tile in state.board if tile.path_index is not None) - 1
        if castle_position in state.available_positions:
            logger.debug(f"{state.current_player.name} heads for the castle")
            return Action(type="select_tile", position=castle_position)
        return Action(type="select_tile", position=self.rng.choice(state.available_positions))

    def _choose_battle_action(self, state: GameState, player: Player) -> Optional[Action]:
        battle = state.current_battle
        if battle is None or battle.phase != "player_attack":
            return None

        if battle.player_health < battle.player_max_health * AI_POTION_HEALTH_RATIO:
            potions = [item for item in player.inventory if item.category == "potion"]
            if potions:
                potion = max(potions, key=lambda item: item.stats)
                return Action(type="use_item", item_id=potion.id)

        return Action(type="attack")

    def _find_upgrade(self, player: Player) -> Optional[Item]:
        """First inventory item that beats what is equipped in its slot."""
        for item in player.inventory:
            slot = get_item_slot(item)
            if slot is None:
                continue
            current = player.equipped.get(slot)
            if current is None or item.stats > current.stats:
                return item
        return None
