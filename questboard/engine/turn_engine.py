"""Per-turn phase state machine.

A turn moves through these phases:
1. rolling: the current player rolls a d6
2. selecting_tile: they pick any path position within the dice value, either direction
3. moving: the tile they land on resolves immediately
4. battle / trap / reward: the tile's effect plays out
5. finishing: they end the turn, or roll again after a reward or trap
6. game_over: someone reached the castle (terminal)

Architecture:
Every mutation of the GameState goes through one of the public action
methods (or ``dispatch``). Illegal actions are ignored and logged at DEBUG.
After every accepted action observers receive a fresh snapshot and the
engine schedules whatever happens next without outside input: an enemy
counter-attack, or the next step of an AI player. Scheduled work is keyed
by (session_id, turn_id) and carries a token of the state it was scheduled
for; if the state has moved on by the time it fires, it is dropped.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..agent.scripted_player import ScriptedPlayer
from ..models.action import Action
from ..models.battle import BattleState
from ..models.game_state import GameState, LedgerResult
from ..models.item import TRAP_KINDS, Enemy, Trap
from ..models.player import Player, get_item_slot, total_stats
from ..models.tile import Tile
from ..utils.constants import DEFAULT_ORBS_TO_AWARD, ENEMY_ATTACK_DELAY, STARTING_GOLD
from ..utils.naming import IdSequence
from ..utils.rng import GameRNG
from ..utils.serialization import serialize_state
from .board_builder import available_positions, ordered_path_tiles
from .combat import (
    enemy_attack,
    initiate_battle,
    player_attack,
    player_defend,
    player_use_item,
    resolve_battle,
)
from .ledger import RewardsLedger
from .rewards import random_equipment, random_item, spawn_enemy
from .scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

Observer = Callable[[dict], None]


class TurnEngine:
    """Owns a GameState and drives it through the turn phases.

    Each action method returns True when the action was accepted and False
    when it was ignored because it is not legal in the current state.
    """

    def __init__(
        self,
        state: GameState,
        rng: GameRNG,
        ids: IdSequence,
        scheduler: Scheduler,
        session_id: str,
        ledger: Optional[RewardsLedger] = None,
        policy: Optional[ScriptedPlayer] = None,
        orbs_to_award: int = DEFAULT_ORBS_TO_AWARD,
    ):
        """Initialize turn engine.

        Args:
            state: Initial game state (board built, players seated)
            rng: Random number generator for dice, drops and AI decisions
            ids: Id source for items, enemies and traps created mid-game
            scheduler: Scheduler for AI steps and enemy counter-attacks
            session_id: Session this engine belongs to (scheduler key prefix)
            ledger: Where castle completions are reported (optional)
            policy: AI decision maker (defaults to ScriptedPlayer)
            orbs_to_award: Orbs granted to the castle winner
        """
        self.state = state
        self.rng = rng
        self.ids = ids
        self.scheduler = scheduler
        self.session_id = session_id
        self.ledger = ledger
        self.policy = policy or ScriptedPlayer(rng)
        self.orbs_to_award = orbs_to_award

        self._path: list[Tile] = ordered_path_tiles(state.board)
        self._observers: list[Observer] = []
        self._task: Optional[ScheduledTask] = None
        self._battle_tile: Optional[Tile] = None  # Tile whose guard is being fought, if any
        self._closed = False

    # =========================================================================
    # LIFECYCLE AND OBSERVERS
    # =========================================================================

    @property
    def path_length(self) -> int:
        return len(self._path)

    @property
    def closed(self) -> bool:
        return self._closed

    def tile_at(self, position: int) -> Tile:
        """Tile at a path position."""
        return self._path[position]

    def start(self) -> None:
        """Kick off AI play if the first seat is an AI."""
        self._schedule_next()

    def shutdown(self) -> None:
        """Cancel all scheduled work and drop observers. Further actions are ignored."""
        self._closed = True
        self.scheduler.cancel((self.session_id,))
        self._task = None
        self._observers.clear()

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Register an observer; returns a function that unsubscribes it."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def snapshot(self) -> dict:
        """JSON-compatible view of the current state."""
        return serialize_state(self.state, self.session_id)

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self.snapshot())

    # =========================================================================
    # ACTION DISPATCH
    # =========================================================================

    def dispatch(self, action: Action, player_id: Optional[str] = None) -> bool:
        """Apply an action.

        Args:
            action: Action to apply
            player_id: Acting player; when given it must be the current player

        Returns:
            True if the action was accepted
        """
        if self._closed:
            return self._reject(action.type, "session is closed")
        if player_id is not None and player_id != self.state.current_player_id:
            return self._reject(action.type, f"not {player_id}'s turn")

        handlers = {
            "roll_dice": lambda: self.roll_dice(),
            "select_tile": lambda: self.select_tile(action.position),
            "attack": lambda: self.attack(),
            "defend": lambda: self.defend(),
            "use_item": lambda: self.use_item(action.item_id),
            "acknowledge_reward": lambda: self.acknowledge_reward(),
            "continue_turn": lambda: self.continue_turn(),
            "end_turn": lambda: self.end_turn(),
            "equip_item": lambda: self.equip_item(action.item_id),
            "unequip_item": lambda: self.unequip_item(action.slot),
            "place_trap": lambda: self.place_trap(action.item_id, action.position),
        }
        return handlers[action.type]()

    def _accept(self, message: str) -> bool:
        logger.debug(f"[{self.session_id}] {message}")
        self._notify()
        self._schedule_next()
        return True

    def _reject(self, action: str, reason: str) -> bool:
        logger.debug(f"[{self.session_id}] Ignored {action}: {reason}")
        return False

    # =========================================================================
    # TURN ACTIONS
    # =========================================================================

    def roll_dice(self) -> bool:
        """Roll a d6 and list the reachable path positions."""
        if self._closed or self.state.phase != "rolling":
            return self._reject("roll_dice", f"phase is {self.state.phase}")

        player = self.state.current_player
        value = self.rng.roll(6)
        self.state.dice_value = value
        self.state.available_positions = available_positions(player.position, value, self.path_length)
        if not self.state.available_positions:
            self.state.dice_value = None
            self.state.phase = "finishing"
            self.state.can_continue = False
            return self._accept(f"{player.name} rolled {value} but has nowhere to go")
        self.state.phase = "selecting_tile"
        return self._accept(f"{player.name} rolled {value}")

    def select_tile(self, position: Optional[int]) -> bool:
        """Move to a reachable position and resolve the tile there."""
        if self._closed or self.state.phase != "selecting_tile":
            return self._reject("select_tile", f"phase is {self.state.phase}")
        if position not in self.state.available_positions:
            return self._reject("select_tile", f"position {position} is not reachable")

        player = self.state.current_player
        player.stats.tiles_moved_total += abs(position - player.position)
        player.position = position
        self.state.dice_value = None
        self.state.available_positions = []
        self.state.phase = "moving"

        tile = self._path[position]
        self._resolve_tile(player, tile)
        return self._accept(f"{player.name} moved to {position} ({tile.kind})")

    def attack(self) -> bool:
        if not self._awaiting_player_battle_action():
            return self._reject("attack", "no battle awaiting a player action")
        self._apply_battle_step(player_attack(self.rng, self.state.current_battle))
        return self._accept(f"{self.state.current_player.name} attacked")

    def defend(self) -> bool:
        if not self._awaiting_player_battle_action():
            return self._reject("defend", "no battle awaiting a player action")
        self._apply_battle_step(player_defend(self.rng, self.state.current_battle))
        return self._accept(f"{self.state.current_player.name} defended")

    def use_item(self, item_id: Optional[str]) -> bool:
        """Use an inventory item in battle; potions and consumables are used up."""
        if not self._awaiting_player_battle_action():
            return self._reject("use_item", "no battle awaiting a player action")

        player = self.state.current_player
        item = player.find_item(item_id) if item_id else None
        if item is None:
            return self._reject("use_item", f"{player.name} has no item {item_id}")

        if item.category in ("potion", "consumable"):
            player.inventory.remove(item)
        self._apply_battle_step(player_use_item(self.rng, self.state.current_battle, item))
        return self._accept(f"{player.name} used {item.name}")

    def acknowledge_reward(self) -> bool:
        if self._closed or self.state.phase != "reward":
            return self._reject("acknowledge_reward", f"phase is {self.state.phase}")

        self.state.current_reward = None
        self.state.phase = "finishing"
        self.state.can_continue = True
        return self._accept(f"{self.state.current_player.name} acknowledged the reward")

    def continue_turn(self) -> bool:
        """Roll again after a reward or trap."""
        if self._closed or self.state.phase != "finishing":
            return self._reject("continue_turn", f"phase is {self.state.phase}")
        if not self.state.can_continue or self.state.dice_value is not None:
            return self._reject("continue_turn", "turn cannot be continued")

        self._clear_turn_state()
        self.state.phase = "rolling"
        return self._accept(f"{self.state.current_player.name} keeps going")

    def end_turn(self) -> bool:
        """Hand play to the next seat."""
        if self._closed or self.state.phase != "finishing":
            return self._reject("end_turn", f"phase is {self.state.phase}")

        self.scheduler.cancel((self.session_id, self.state.turn_id))
        self._task = None
        self._clear_turn_state()

        players = self.state.players
        index = next(i for i, p in enumerate(players) if p.id == self.state.current_player_id)
        next_player = players[(index + 1) % len(players)]
        self.state.current_player_id = next_player.id
        self.state.turn_id += 1
        self.state.phase = "rolling"
        logger.info(f"[{self.session_id}] Turn {self.state.turn_id}: {next_player.name}")
        return self._accept(f"Turn passed to {next_player.name}")

    def equip_item(self, item_id: Optional[str]) -> bool:
        """Equip an inventory item, swapping out whatever held its slot."""
        if self._closed or self.state.phase in ("battle", "game_over"):
            return self._reject("equip_item", f"phase is {self.state.phase}")

        player = self.state.current_player
        item = player.find_item(item_id) if item_id else None
        if item is None:
            return self._reject("equip_item", f"{player.name} has no item {item_id}")
        slot = get_item_slot(item)
        if slot is None:
            return self._reject("equip_item", f"{item.name} cannot be equipped")

        player.inventory.remove(item)
        previous = player.equipped.get(slot)
        if previous is not None:
            player.inventory.append(previous)
        player.equipped[slot] = item
        self._refresh_max_health(player)
        return self._accept(f"{player.name} equipped {item.name} ({slot})")

    def unequip_item(self, slot: Optional[str]) -> bool:
        if self._closed or self.state.phase in ("battle", "game_over"):
            return self._reject("unequip_item", f"phase is {self.state.phase}")

        player = self.state.current_player
        if slot not in player.equipped:
            return self._reject("unequip_item", f"nothing equipped in {slot}")

        item = player.equipped.pop(slot)
        player.inventory.append(item)
        self._refresh_max_health(player)
        return self._accept(f"{player.name} unequipped {item.name}")

    def place_trap(self, item_id: Optional[str], position: Optional[int]) -> bool:
        """Arm a trap item from the inventory on an empty normal path tile."""
        if self._closed or self.state.phase not in ("rolling", "finishing"):
            return self._reject("place_trap", f"phase is {self.state.phase}")

        player = self.state.current_player
        item = player.find_item(item_id) if item_id else None
        if item is None or item.category != "trap":
            return self._reject("place_trap", f"{player.name} has no trap {item_id}")
        if position is None or not (0 <= position < self.path_length):
            return self._reject("place_trap", f"position {position} is off the path")

        tile = self._path[position]
        if tile.kind != "normal" or tile.trap is not None:
            return self._reject("place_trap", f"tile at {position} is {tile.kind}")

        player.inventory.remove(item)
        tile.kind = "trap"
        tile.trap = Trap(
            id=self.ids.next("trap"),
            kind=item.effect if item.effect in TRAP_KINDS else "damage",
            power=item.stats,
            owner_id=player.id,
            owner_name=player.name,
        )
        return self._accept(f"{player.name} placed {item.name} at {position}")

    # =========================================================================
    # TILE EFFECTS
    # =========================================================================

    def _resolve_tile(self, player: Player, tile: Tile) -> None:
        if tile.kind == "trap" and tile.trap is not None and tile.trap.owner_id != player.id:
            self._spring_trap(player, tile)
        elif tile.kind == "battle" and tile.enemy is not None:
            self._start_battle(player, tile.enemy, tile)
        elif tile.kind == "bonus":
            item = random_item(self.rng, self.ids)
            player.inventory.append(item)
            self.state.current_reward = item
            self.state.phase = "reward"
        elif tile.kind == "castle":
            self._complete_game(player)
        else:
            self.state.phase = "finishing"
            self.state.can_continue = False

    def _start_battle(self, player: Player, enemy: Enemy, tile: Optional[Tile] = None) -> None:
        self._battle_tile = tile
        self.state.last_battle_rounds = []
        self.state.current_battle = initiate_battle(self.rng, enemy, player)
        self.state.phase = "battle"
        logger.info(f"[{self.session_id}] {player.name} fights a {enemy.name}")

    def _spring_trap(self, player: Player, tile: Tile) -> None:
        """Apply a trap's effect and disarm it."""
        trap = tile.trap
        tile.trap = None
        tile.kind = "normal"
        self.state.active_trap = trap
        self.state.phase = "trap"
        logger.info(f"[{self.session_id}] {player.name} sprang {trap.owner_name}'s {trap.kind} trap")

        if trap.kind == "creature":
            self._start_battle(player, spawn_enemy(self.rng, self.ids))
            return

        if trap.kind == "damage":
            player.health = max(0, player.health - trap.power)
            if player.health == 0:
                self._defeat(player)
                return
        elif trap.kind == "item_loss" and player.inventory:
            lost = self.rng.choice(player.inventory)
            player.inventory.remove(lost)
            logger.info(f"[{self.session_id}] {player.name} lost {lost.name}")

        self.state.phase = "finishing"
        self.state.can_continue = True

    def _complete_game(self, player: Player) -> None:
        self.state.winner = player
        self.state.phase = "game_over"
        self.scheduler.cancel((self.session_id,))
        self._task = None
        logger.info(f"[{self.session_id}] {player.name} reached the castle and wins!")
        self.state.completion = self._report_completion(player)

    def _report_completion(self, player: Player) -> Optional[LedgerResult]:
        """Tell the ledger about the win; failures are logged and recorded, never raised."""
        if self.ledger is None:
            return None
        try:
            return self.ledger.award(player.id, player.stats.gold_collected, self.orbs_to_award)
        except Exception as e:
            logger.error(f"[{self.session_id}] Rewards ledger failed for {player.id}: {e}")
            return LedgerResult(success=False, message=str(e))

    # =========================================================================
    # BATTLE
    # =========================================================================

    def _awaiting_player_battle_action(self) -> bool:
        battle = self.state.current_battle
        return (
            not self._closed
            and self.state.phase == "battle"
            and battle is not None
            and battle.phase == "player_attack"
        )

    def _apply_battle_step(self, battle: BattleState) -> None:
        player = self.state.current_player
        self.state.current_battle = battle
        player.health = battle.player_health

        outcome = resolve_battle(battle)
        if outcome is None:
            return
        if outcome.player_won:
            self._victory(player, battle)
        else:
            logger.info(f"[{self.session_id}] {player.name} was defeated by a {battle.enemy.name}")
            self._defeat(player)
        self.state.last_battle_rounds = list(battle.rounds)
        self.state.current_battle = None
        self._battle_tile = None

    def _victory(self, player: Player, battle: BattleState) -> None:
        enemy = battle.enemy
        player.gold += enemy.gold_reward
        player.last_gold_win = enemy.gold_reward
        player.stats.gold_collected += enemy.gold_reward
        player.stats.battles_won += 1
        player.inventory.append(enemy.reward)
        self.state.current_reward = enemy.reward
        self.state.phase = "reward"
        logger.info(
            f"[{self.session_id}] {player.name} defeated a {enemy.name}: "
            f"+{enemy.gold_reward} gold, {enemy.reward.name}"
        )
        # The tile's guard keeps standing with fresh loot for the next challenger
        tile = self._battle_tile
        if tile is not None:
            tile.enemy = replace(enemy, reward=random_equipment(self.rng, self.ids))

    def _defeat(self, player: Player) -> None:
        """Send a beaten player back to the start with nothing."""
        player.position = 0
        player.equipped.clear()
        player.inventory.clear()
        player.max_health = player.base_stats.health
        player.health = player.base_stats.health
        player.gold = STARTING_GOLD
        self.state.phase = "finishing"
        self.state.can_continue = False

    def _enemy_turn(self) -> None:
        battle = self.state.current_battle
        self._apply_battle_step(enemy_attack(self.rng, battle))
        self._notify()
        self._schedule_next()

    # =========================================================================
    # SCHEDULING
    # =========================================================================

    def _token(self) -> tuple:
        battle = self.state.current_battle
        return (
            self.state.turn_id,
            self.state.phase,
            self.state.current_player_id,
            battle.current_round if battle else 0,
        )

    def _schedule_next(self) -> None:
        """Schedule the enemy's counter-attack or the AI's next step, if any.

        A session never has more than one outstanding task: anything still
        pending is cancelled first.
        """
        if self._closed:
            return
        self.scheduler.cancel((self.session_id,))
        self._task = None

        state = self.state
        if state.phase == "game_over":
            return

        battle = state.current_battle
        if state.phase == "battle" and battle is not None and battle.phase == "enemy_attack":
            delay, step = ENEMY_ATTACK_DELAY, self._enemy_turn
        elif state.current_player.is_ai:
            delay, step = self.policy.delay_for(state), self._ai_turn
        else:
            return

        token = self._token()
        self._task = self.scheduler.schedule(
            delay,
            (self.session_id, state.turn_id),
            lambda: self._run_scheduled(token, step),
        )

    def _run_scheduled(self, token: tuple, step: Callable[[], None]) -> None:
        self._task = None
        if self._closed or token != self._token():
            logger.debug(f"[{self.session_id}] Discarded stale scheduled step {token}")
            return
        step()

    def _ai_turn(self) -> None:
        action = self.policy.choose_action(self.state)
        if action is not None and self.dispatch(action):
            return

        phase = self.state.phase
        if action is None:
            logger.warning(f"[{self.session_id}] AI has no action in phase {phase}")
        else:
            logger.warning(f"[{self.session_id}] AI action {action.type} was rejected in phase {phase}")
        if phase == "finishing":
            self.end_turn()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _clear_turn_state(self) -> None:
        self.state.dice_value = None
        self.state.available_positions = []
        self.state.current_battle = None
        self.state.last_battle_rounds = []
        self.state.active_trap = None
        self.state.current_reward = None
        self.state.can_continue = False
        self._battle_tile = None

    def _refresh_max_health(self, player: Player) -> None:
        """Recompute max health from effective stats and clamp current health."""
        stats = total_stats(player)
        player.max_health = stats.health
        player.health = min(player.health, stats.health)
