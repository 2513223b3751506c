"""Identifier and display-name helpers.

Item, enemy and trap ids come from an ``IdSequence`` owned by the game
session rather than from wall-clock time, so that a seeded game produces
the same ids on every run.
"""

from collections import defaultdict

PLAYER_COLORS = ["#3B82F6", "#EF4444", "#10B981", "#F59E0B"]


class IdSequence:
    """Per-session counter producing unique, prefixed ids (e.g. "item-0007")."""

    def __init__(self):
        self._counters: dict[str, int] = defaultdict(int)

    def next(self, prefix: str) -> str:
        """Return the next id for the given prefix."""
        self._counters[prefix] += 1
        return f"{prefix}-{self._counters[prefix]:04d}"


def ai_player_name(index: int) -> str:
    """Display name for the AI opponent in seat ``index`` (1-based)."""
    return f"AI Player {index}"


def player_color(seat: int) -> str:
    """UI color for a seat, cycling through the palette."""
    return PLAYER_COLORS[seat % len(PLAYER_COLORS)]
