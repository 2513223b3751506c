"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    turnId: int  # noqa: N815
    phase: str
    winner: str | None
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    seed: int
    players: list[dict]
    state: dict


class ActionResponse(BaseModel):
    """Response after submitting an action.

    A rejected action leaves the game untouched; ``state`` is then the
    unchanged snapshot.
    """

    accepted: bool
    state: dict
