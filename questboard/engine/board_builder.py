"""Board construction from a generated path layout."""

import logging
from typing import List, Union

from ..models.tile import Tile
from ..utils.constants import BATTLE_TILE_CHANCE, BOARD_HEIGHT, BOARD_WIDTH, BONUS_TILE_CHANCE
from ..utils.naming import IdSequence
from ..utils.rng import GameRNG
from .path_generator import Coordinate, PathLayout
from .rewards import spawn_enemy

logger = logging.getLogger(__name__)


def _roll_tile_kind(rng: GameRNG) -> str:
    """Draw the kind of an ordinary path tile: battle 40%, bonus 14%, else normal."""
    draw = rng.random()
    if draw < BATTLE_TILE_CHANCE:
        return "battle"
    if draw < BATTLE_TILE_CHANCE + BONUS_TILE_CHANCE:
        return "bonus"
    return "normal"


def build_board(
    rng: GameRNG,
    ids: IdSequence,
    layout: Union[PathLayout, List[Coordinate]],
    width: int = BOARD_WIDTH,
    height: int = BOARD_HEIGHT,
) -> List[Tile]:
    """Build one tile per grid cell, in row-major order.

    The first main-path cell becomes the start and the last one the castle.
    Every other path cell (main route or branch) draws battle, bonus or
    normal. Battle tiles get their own freshly spawned enemy carrying its
    own reward item.

    Args:
        rng: Random number generator
        ids: Id source for enemies and reward items
        layout: PathLayout, or a bare ordered list of main-path cells
        width: Grid width
        height: Grid height

    Returns:
        List of width * height tiles; tile id is y * width + x
    """
    if not isinstance(layout, PathLayout):
        layout = PathLayout(main=list(layout))

    path_index = {cell: index for index, cell in enumerate(layout.main)}
    branch_cells = layout.branch_cells
    last_index = len(layout.main) - 1

    tiles: List[Tile] = []
    for y in range(height):
        for x in range(width):
            cell = (x, y)
            index = path_index.get(cell)
            is_path = index is not None or cell in branch_cells

            if index == 0:
                kind = "start"
            elif index == last_index:
                kind = "castle"
            elif is_path:
                kind = _roll_tile_kind(rng)
            else:
                kind = "normal"

            enemy = spawn_enemy(rng, ids) if kind == "battle" else None
            tiles.append(
                Tile(
                    id=y * width + x,
                    x=x,
                    y=y,
                    kind=kind,
                    is_path=is_path,
                    path_index=index,
                    enemy=enemy,
                )
            )

    battles = sum(1 for tile in tiles if tile.kind == "battle")
    bonuses = sum(1 for tile in tiles if tile.kind == "bonus")
    logger.debug(
        f"Built {width}x{height} board: path {len(layout.main)} cells, "
        f"{len(layout.branches)} branches, {battles} battle, {bonuses} bonus"
    )
    return tiles


def ordered_path_tiles(board: List[Tile]) -> List[Tile]:
    """Main-route tiles sorted by path index (player positions index this list)."""
    return sorted(
        (tile for tile in board if tile.path_index is not None),
        key=lambda tile: tile.path_index,
    )


def available_positions(current: int, dice: int, path_length: int) -> List[int]:
    """Every path index within ``dice`` steps of ``current``, either direction.

    Args:
        current: Current path index
        dice: Dice value
        path_length: Number of main-route tiles

    Returns:
        Sorted legal destinations, excluding ``current``
    """
    low = max(0, current - dice)
    high = min(path_length - 1, current + dice)
    return [position for position in range(low, high + 1) if position != current]
