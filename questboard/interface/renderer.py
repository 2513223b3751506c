"""ASCII board rendering.

This module renders the board grid as ASCII art, showing the path, tile
kinds and where each player stands.
"""

from typing import List

from ..models.game_state import GameState
from ..models.player import Player, total_stats
from ..models.tile import Tile

TILE_CODES = {
    "start": "ST",
    "castle": "CA",
    "battle": "BT",
    "bonus": "BO",
    "trap": "TR",
    "normal": "::",
}


class BoardRenderer:
    """Renders the board and player summaries as plain text."""

    def render(self, state: GameState) -> str:
        """Render the board grid.

        Output format (2 chars per cell):
        .. .. .. CA .. .. .. .. .. ..
        .. :: BT :: .. .. .. .. .. ..
        ...
        P1 :: BO .. .. .. .. .. .. ..

        Legend:
        - '..' = off the path
        - 'ST' / 'CA' = start / castle
        - 'BT' = battle, 'BO' = bonus, 'TR' = armed trap, '::' = plain path
        - lowercase codes = branch tiles (off the main route)
        - 'P1' = player 1 stands here, 'P*' = several players share the tile

        Args:
            state: Game state to render

        Returns:
            Multi-line ASCII art string representing the board
        """
        width = max(tile.x for tile in state.board) + 1
        height = max(tile.y for tile in state.board) + 1
        grid = [[".."] * width for _ in range(height)]

        for tile in state.board:
            grid[tile.y][tile.x] = self._render_tile_cell(tile)

        path = sorted(
            (tile for tile in state.board if tile.path_index is not None),
            key=lambda tile: tile.path_index,
        )
        occupants: dict[int, List[Player]] = {}
        for player in state.players:
            occupants.setdefault(player.position, []).append(player)
        for position, players in occupants.items():
            tile = path[position]
            grid[tile.y][tile.x] = players[0].id.upper() if len(players) == 1 else "P*"

        return "\n".join(" ".join(row) for row in grid)

    def _render_tile_cell(self, tile: Tile) -> str:
        if not tile.is_path:
            return ".."
        code = TILE_CODES[tile.kind]
        # Branch tiles are on the path but have no index on the main route
        return code if tile.path_index is not None else code.lower()

    def render_with_coords(self, state: GameState) -> str:
        """Render the board with coordinate labels.

        Args:
            state: Game state to render

        Returns:
            Board with coordinate labels on edges
        """
        board_str = self.render(state)
        lines = board_str.split("\n")
        width = len(lines[0].split(" "))

        # Add column numbers at top
        header = "   " + " ".join(f"{i:2d}" for i in range(width))

        # Add row numbers
        numbered_lines = [f"{i:2d} {line}" for i, line in enumerate(lines)]

        return header + "\n" + "\n".join(numbered_lines)

    def render_players(self, state: GameState) -> str:
        """One status line per player, current player marked with '>'."""
        path_length = sum(1 for tile in state.board if tile.path_index is not None)
        lines = []
        for player in state.players:
            stats = total_stats(player)
            marker = ">" if player.id == state.current_player_id else " "
            kind = "AI" if player.is_ai else "Human"
            lines.append(
                f"{marker} {player.id.upper()} {player.name} ({kind}) "
                f"pos {player.position}/{path_length - 1} "
                f"HP {player.health}/{player.max_health} "
                f"ATK {stats.attack} DEF {stats.defense} SPD {stats.speed} "
                f"gold {player.gold} items {len(player.inventory)} "
                f"wins {player.stats.battles_won}"
            )
        return "\n".join(lines)
