"""Utility functions and constants for Questboard."""

from .constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    MAX_PATH_LENGTH,
    MIN_PATH_LENGTH,
    STARTING_GOLD,
    STARTING_HEALTH,
)
from .distance import manhattan_distance, neighbors
from .naming import IdSequence
from .rng import GameRNG

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "MAX_PATH_LENGTH",
    "MIN_PATH_LENGTH",
    "STARTING_GOLD",
    "STARTING_HEALTH",
    "manhattan_distance",
    "neighbors",
    "IdSequence",
    "GameRNG",
]
