"""FastAPI server for Questboard.

Provides an HTTP/WebSocket API so a UI can drive games: create a game,
read its state, submit actions for human seats, and watch snapshots stream
in while AI seats play.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from ..models.action import Action
from .schemas.requests import ActionRequest, CreateGameRequest
from .schemas.responses import ActionResponse, CreateGameResponse, GameStateResponse
from .session import GameConfig, GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    # Startup
    logger.info("Questboard server starting...")
    yield
    # Shutdown
    logger.info("Questboard server shutting down...")
    sessions.cleanup_all()


# Create FastAPI app
app = FastAPI(
    title="Questboard API",
    description="Web API for the Questboard turn-based board game",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Questboard",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new game (optionally replacing an existing one).

    Args:
        request: Game creation parameters

    Returns:
        Game ID, seed, seated players and initial state

    Example:
        POST /api/games
        {
          "humanPlayers": 1,
          "aiPlayers": 2,
          "playerNames": ["Aria"],
          "seed": 42
        }
    """
    config = GameConfig(
        human_players=request.humanPlayers,
        ai_players=request.aiPlayers,
        player_names=request.playerNames,
        seed=request.seed,
    )
    session = sessions.create_session(config, replace_id=request.replaceGameId)
    snapshot = session.snapshot()

    return CreateGameResponse(
        gameId=session.id,
        seed=session.seed,
        players=[
            {"id": p["id"], "name": p["name"], "isAi": p["is_ai"], "color": p["color"]}
            for p in snapshot["players"]
        ],
        state=snapshot,
    )


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current game state.

    Args:
        game_id: Game session ID

    Returns:
        Current game state snapshot
    """
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")

    snapshot = session.snapshot()
    return GameStateResponse(
        gameId=game_id,
        turnId=snapshot["turn_id"],
        phase=snapshot["phase"],
        winner=snapshot["winner"],
        state=snapshot,
    )


@app.post("/api/games/{game_id}/actions", response_model=ActionResponse)
async def submit_action(game_id: str, request: ActionRequest):
    """Submit one action for the current player.

    Illegal actions (wrong phase, unreachable tile, unknown item, not the
    caller's turn) are not errors: the response has ``accepted: false`` and
    the unchanged state.

    Example:
        POST /api/games/game-abc123/actions
        {"type": "select_tile", "position": 4, "playerId": "p1"}
    """
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")

    action = Action(
        type=request.type,
        position=request.position,
        item_id=request.itemId,
        slot=request.slot,
    )
    accepted = session.dispatch(action, player_id=request.playerId)
    if accepted:
        logger.info(f"Game {game_id}: {request.type} accepted (phase now {session.state.phase})")

    return ActionResponse(accepted=accepted, state=session.snapshot())


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session.

    Args:
        game_id: Game session ID

    Returns:
        Success status
    """
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    else:
        raise HTTPException(status_code=404, detail="Game not found")


# ============================================
# WEBSOCKET ENDPOINT
# ============================================


@app.websocket("/ws/games/{game_id}")
async def websocket_endpoint(websocket: WebSocket, game_id: str):
    """WebSocket connection for real-time game updates.

    Clients receive:
    - CONNECTED: Initial connection confirmation with the current state
    - GAME_STATE: A fresh snapshot after every change
    - PONG: Reply to a PING keepalive

    Args:
        websocket: WebSocket connection
        game_id: Game session ID
    """
    session = sessions.get(game_id)
    if not session:
        await websocket.close(code=1008, reason="Game not found")
        return

    await websocket.accept()
    session.add_connection(websocket)

    try:
        # Send initial connection confirmation
        await websocket.send_json(
            {
                "type": "CONNECTED",
                "gameId": game_id,
                "state": session.snapshot(),
            }
        )

        # Keep connection alive and handle client messages
        while True:
            data = await websocket.receive_json()

            # Handle ping/pong for keepalive
            if data.get("type") == "PING":
                await websocket.send_json({"type": "PONG"})

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected from game {game_id}")
    except Exception as e:
        logger.error(f"WebSocket error in game {game_id}: {e}", exc_info=True)
    finally:
        session.remove_connection(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
