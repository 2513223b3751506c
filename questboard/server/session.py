"""Game session management.

A session bundles one board, its players and the TurnEngine driving them,
plus any WebSocket connections watching it. ``new_game`` is the single
entry point for starting (or restarting) a game.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional

from fastapi import WebSocket

from ..engine.board_builder import build_board
from ..engine.ledger import InMemoryRewardsLedger, RewardsLedger
from ..engine.path_generator import PathLayout, generate_layout
from ..engine.scheduler import AsyncioScheduler, Scheduler
from ..engine.turn_engine import TurnEngine
from ..models.action import Action
from ..models.game_state import GameState
from ..models.player import Player, Stats
from ..utils.constants import (
    BASE_STATS,
    BOARD_HEIGHT,
    BOARD_WIDTH,
    DEFAULT_ORBS_TO_AWARD,
    MAX_PATH_LENGTH,
    MAX_PLAYERS,
    MIN_PATH_LENGTH,
    STARTING_GOLD,
    STARTING_HEALTH,
)
from ..utils.naming import IdSequence, ai_player_name, player_color
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Settings for a new game.

    Human seats come first in turn order, followed by the AI seats.
    """

    human_players: int = 1
    ai_players: int = 1
    player_names: list[str] = field(default_factory=list)  # Names for human seats
    seed: Optional[int] = None  # Random when omitted
    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT
    min_path_length: int = MIN_PATH_LENGTH
    max_path_length: int = MAX_PATH_LENGTH
    orbs_to_award: int = DEFAULT_ORBS_TO_AWARD

    def __post_init__(self):
        """Validate config after initialization."""
        if self.human_players < 0 or self.ai_players < 0:
            raise ValueError("Player counts cannot be negative")
        total = self.human_players + self.ai_players
        if not 1 <= total <= MAX_PLAYERS:
            raise ValueError(f"A game needs 1-{MAX_PLAYERS} players, got {total}")
        if self.width < 2 or self.height < 2:
            raise ValueError(f"Board must be at least 2x2, got {self.width}x{self.height}")
        if not 2 <= self.min_path_length <= self.max_path_length:
            raise ValueError(
                f"Invalid path bounds: {self.min_path_length}-{self.max_path_length}"
            )


def create_players(config: GameConfig) -> list[Player]:
    """Seat the players for a new game.

    Args:
        config: Game settings

    Returns:
        Players in turn order, ids "p1", "p2", ...
    """
    players = []
    for seat in range(config.human_players + config.ai_players):
        is_ai = seat >= config.human_players
        if is_ai:
            name = ai_player_name(seat - config.human_players + 1)
        elif seat < len(config.player_names) and config.player_names[seat]:
            name = config.player_names[seat]
        else:
            name = f"Player {seat + 1}"

        players.append(
            Player(
                id=f"p{seat + 1}",
                name=name,
                is_ai=is_ai,
                base_stats=Stats(**BASE_STATS),
                health=STARTING_HEALTH,
                max_health=BASE_STATS["health"],
                gold=STARTING_GOLD,
                color=player_color(seat),
            )
        )
    return players


@dataclass
class GameSession:
    """One running game and the WebSocket clients watching it."""

    id: str
    seed: int
    config: GameConfig
    engine: TurnEngine
    layout: PathLayout
    connections: list[WebSocket] = field(default_factory=list)
    _broadcasts: set = field(default_factory=set, repr=False)

    @property
    def state(self) -> GameState:
        return self.engine.state

    @property
    def closed(self) -> bool:
        return self.engine.closed

    def snapshot(self) -> dict:
        return self.engine.snapshot()

    def dispatch(self, action: Action, player_id: Optional[str] = None) -> bool:
        """Forward an action to the engine; True if it was accepted."""
        return self.engine.dispatch(action, player_id)

    def close(self) -> None:
        """Tear the session down: cancel scheduled work and drop observers."""
        self.engine.shutdown()
        logger.info(f"Closed game {self.id}")

    def on_snapshot(self, snapshot: dict) -> None:
        """Engine observer: push every new snapshot to connected clients.

        Only works from inside a running event loop; without one (CLI,
        manual scheduler) there is nobody connected to push to.
        """
        if not self.connections:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self.broadcast({"type": "GAME_STATE", "state": snapshot}))
        self._broadcasts.add(task)
        task.add_done_callback(self._broadcasts.discard)

    async def broadcast(self, message: dict):
        """Send message to all connected WebSocket clients.

        Args:
            message: Dictionary to send as JSON
        """
        disconnected = []
        for ws in self.connections:
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                disconnected.append(ws)

        # Remove disconnected clients
        for ws in disconnected:
            self.connections.remove(ws)

    def add_connection(self, websocket: WebSocket):
        """Add a WebSocket connection to this session."""
        self.connections.append(websocket)
        logger.info(f"WebSocket connected to game {self.id}, total: {len(self.connections)}")

    def remove_connection(self, websocket: WebSocket):
        """Remove a WebSocket connection from this session."""
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info(
                f"WebSocket disconnected from game {self.id}, remaining: {len(self.connections)}"
            )


def new_game(
    config: GameConfig,
    scheduler: Scheduler,
    ledger: Optional[RewardsLedger] = None,
    previous: Optional[GameSession] = None,
) -> GameSession:
    """Build a board, seat the players and start a fresh session.

    Every call gets a new session id. If ``previous`` is given it is closed
    first, so none of its scheduled steps can touch the new game.

    Args:
        config: Game settings
        scheduler: Scheduler for AI steps and enemy counter-attacks
        ledger: Rewards ledger for castle completions
        previous: Session being replaced, if any

    Returns:
        Started GameSession
    """
    if previous is not None:
        previous.close()

    seed = config.seed if config.seed is not None else uuid.uuid4().int % (2**32)
    rng = GameRNG(seed)
    ids = IdSequence()

    layout = generate_layout(
        rng, config.width, config.height, config.min_path_length, config.max_path_length
    )
    board = build_board(rng, ids, layout, config.width, config.height)
    players = create_players(config)
    state = GameState(players=players, board=board, current_player_id=players[0].id)

    session_id = f"game-{uuid.uuid4().hex[:8]}"
    engine = TurnEngine(
        state=state,
        rng=rng,
        ids=ids,
        scheduler=scheduler,
        session_id=session_id,
        ledger=ledger,
        orbs_to_award=config.orbs_to_award,
    )
    session = GameSession(id=session_id, seed=seed, config=config, engine=engine, layout=layout)
    engine.subscribe(session.on_snapshot)

    logger.info(
        f"Created game {session_id}: {config.human_players} human, {config.ai_players} AI, "
        f"seed={seed}, path={len(layout.main)} tiles, branches={len(layout.branches)}"
    )
    engine.start()
    return session


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage; all sessions share one scheduler and one ledger.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None, ledger: Optional[RewardsLedger] = None):
        self.scheduler = scheduler or AsyncioScheduler()
        self.ledger = ledger if ledger is not None else InMemoryRewardsLedger()
        self.sessions: dict[str, GameSession] = {}

    def create_session(self, config: GameConfig, replace_id: Optional[str] = None) -> GameSession:
        """Create a new game session, optionally replacing an existing one.

        Args:
            config: Game settings
            replace_id: Session to tear down first

        Returns:
            Newly created GameSession
        """
        previous = self.sessions.pop(replace_id, None) if replace_id else None
        session = new_game(config, self.scheduler, self.ledger, previous=previous)
        self.sessions[session.id] = session
        return session

    def get(self, game_id: str) -> GameSession | None:
        """Get a game session by ID.

        Args:
            game_id: Game session ID

        Returns:
            GameSession if found, None otherwise
        """
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Close and delete a game session.

        Args:
            game_id: Game session ID

        Returns:
            True if deleted, False if not found
        """
        session = self.sessions.pop(game_id, None)
        if session is None:
            return False
        session.close()
        logger.info(f"Deleted game {game_id}")
        return True

    def cleanup_all(self):
        """Close all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        for session in self.sessions.values():
            session.close()
        self.sessions.clear()
