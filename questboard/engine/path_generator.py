"""Procedural path generation on the board grid.

The main route is a randomized self-avoiding walk from the bottom-left
corner. A path cell may only touch its predecessor and successor, so the
route never runs alongside itself and reads as a single trail on the board.

Algorithm:
1. Draw a target length in [min_length, max_length]
2. From the tail, try the four axis directions in random order
3. If no step is valid, pop the tail and remember it as a dead end
4. Stop at the target length; if the start itself runs out of moves, try a
   fresh walk and finally settle for the longest one seen
5. If the walk ends in the lower half of the board, extend it straight up

``generate_layout`` then grows optional side branches that leave the main
route and rejoin it further along.
"""

import logging
from dataclasses import dataclass, field

from ..utils.constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    BRANCH_COUNT_RANGE,
    BRANCH_LENGTH_RANGE,
    MAX_PATH_ATTEMPTS,
    MAX_PATH_LENGTH,
    MIN_PATH_LENGTH,
)
from ..utils.distance import manhattan_distance, neighbors
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)

Coordinate = tuple[int, int]


@dataclass
class Branch:
    """A side trail that forks off the main route and rejoins it later.

    Attributes:
        fork_index: Main-path index the branch leaves from
        rejoin_index: Furthest main-path index the branch touches
        cells: Branch cells in walk order (none of them on the main path)
    """

    fork_index: int
    rejoin_index: int
    cells: list[Coordinate]


@dataclass
class PathLayout:
    """Main route plus any accepted branches."""

    main: list[Coordinate]
    branches: list[Branch] = field(default_factory=list)

    @property
    def branch_cells(self) -> set[Coordinate]:
        return {cell for branch in self.branches for cell in branch.cells}

    @property
    def path_cells(self) -> set[Coordinate]:
        return set(self.main) | self.branch_cells


def _in_bounds(cell: Coordinate, width: int, height: int) -> bool:
    x, y = cell
    return 0 <= x < width and 0 <= y < height


def _is_valid_step(
    cell: Coordinate,
    tail: Coordinate,
    visited: set[Coordinate],
    dead_ends: set[Coordinate],
    width: int,
    height: int,
) -> bool:
    """Check whether the walk may extend from ``tail`` into ``cell``.

    The cell must be on the grid, unvisited, not a known dead end, and must
    not touch any visited cell except the tail it is stepping from.
    """
    if not _in_bounds(cell, width, height):
        return False
    if cell in visited or cell in dead_ends:
        return False
    for neighbour in neighbors(*cell):
        if neighbour != tail and neighbour in visited:
            return False
    return True


def _extend_upward(path: list[Coordinate], height: int, max_length: int) -> None:
    """Push the castle end toward the top row if the walk finished low.

    Only the no-revisit rule applies here; the extension may run alongside
    earlier path cells.
    """
    x, y = path[-1]
    if y <= height // 2:
        return

    visited = set(path)
    added = 0
    while y > 0 and len(path) < max_length:
        above = (x, y - 1)
        if above in visited:
            break
        path.append(above)
        visited.add(above)
        y -= 1
        added += 1

    if added:
        logger.debug(f"Extended path upward by {added} cells to end at {path[-1]}")


def _random_walk(
    rng: GameRNG,
    start: Coordinate,
    target_length: int,
    width: int,
    height: int,
) -> list[Coordinate]:
    """One depth-first walk attempt toward ``target_length`` cells.

    Returns the walk once it reaches the target, or the longest walk seen
    if the start itself runs out of moves.
    """
    path = [start]
    visited = {start}
    dead_ends: set[Coordinate] = set()
    best = list(path)

    while len(path) < target_length:
        tail = path[-1]
        directions = neighbors(*tail)
        rng.shuffle(directions)

        step = None
        for cell in directions:
            if _is_valid_step(cell, tail, visited, dead_ends, width, height):
                step = cell
                break

        if step is not None:
            path.append(step)
            visited.add(step)
            if len(path) > len(best):
                best = list(path)
            continue

        if len(path) == 1:
            return best

        dead_ends.add(path.pop())
        visited.discard(tail)

    return path


def generate_path(
    rng: GameRNG,
    width: int = BOARD_WIDTH,
    height: int = BOARD_HEIGHT,
    min_length: int = MIN_PATH_LENGTH,
    max_length: int = MAX_PATH_LENGTH,
) -> list[Coordinate]:
    """Generate the ordered main route from (0, height - 1).

    Never raises and never returns a disconnected path. Up to
    MAX_PATH_ATTEMPTS walks are tried; when none reaches the drawn target
    length, the longest one is used and a warning is logged.

    Args:
        rng: Random number generator
        width: Grid width
        height: Grid height
        min_length: Minimum target length
        max_length: Maximum target length (also caps the upward extension)

    Returns:
        List of (x, y) cells; consecutive cells are axis-adjacent
    """
    start = (0, height - 1)
    target_length = rng.randint(min_length, max_length)

    path: list[Coordinate] = []
    for attempt in range(1, MAX_PATH_ATTEMPTS + 1):
        walk = _random_walk(rng, start, target_length, width, height)
        if len(walk) > len(path):
            path = walk
        if len(path) >= target_length:
            break
        logger.debug(f"Walk attempt {attempt} stalled at {len(walk)} cells (target {target_length})")
    else:
        logger.warning(
            f"Path generation exhausted at {len(path)} cells (target {target_length}); "
            "using the longest walk found"
        )

    _extend_upward(path, height, max_length)
    return path


def _grow_branch(
    rng: GameRNG,
    origin: Coordinate,
    length: int,
    blocked: set[Coordinate],
    width: int,
    height: int,
) -> list[Coordinate]:
    """Random walk of up to ``length`` cells from ``origin`` avoiding ``blocked``."""
    cells: list[Coordinate] = []
    taken = set(blocked)
    current = origin

    while len(cells) < length:
        directions = neighbors(*current)
        rng.shuffle(directions)
        step = next(
            (cell for cell in directions if _in_bounds(cell, width, height) and cell not in taken),
            None,
        )
        if step is None:
            break
        cells.append(step)
        taken.add(step)
        current = step

    return cells


def _rejoin_index(cells: list[Coordinate], main: list[Coordinate], fork_index: int) -> int | None:
    """Furthest main-path index past the fork that a branch cell touches."""
    rejoin = None
    for index in range(fork_index + 1, len(main)):
        mx, my = main[index]
        if any(manhattan_distance(x, y, mx, my) == 1 for x, y in cells):
            rejoin = index
    return rejoin


def generate_layout(
    rng: GameRNG,
    width: int = BOARD_WIDTH,
    height: int = BOARD_HEIGHT,
    min_length: int = MIN_PATH_LENGTH,
    max_length: int = MAX_PATH_LENGTH,
) -> PathLayout:
    """Generate the main route and try to attach side branches.

    Each branch forks from a cell in the middle of the route and is a
    random walk that avoids the main route, earlier branches and itself.
    A branch that never comes back next to the route further along than
    its fork is dropped.

    Args:
        rng: Random number generator
        width: Grid width
        height: Grid height
        min_length: Minimum main route length
        max_length: Maximum main route length

    Returns:
        PathLayout with the main route and accepted branches
    """
    main = generate_path(rng, width, height, min_length, max_length)
    layout = PathLayout(main=main)

    if len(main) < 8:
        return layout

    attempts = rng.randint(*BRANCH_COUNT_RANGE)
    for _ in range(attempts):
        fork_index = rng.randint(len(main) // 4, len(main) // 2)
        length = rng.randint(*BRANCH_LENGTH_RANGE)
        blocked = set(main) | layout.branch_cells

        cells = _grow_branch(rng, main[fork_index], length, blocked, width, height)
        rejoin = _rejoin_index(cells, main, fork_index) if cells else None
        if rejoin is None:
            logger.debug(f"Dropped branch from path index {fork_index}: never rejoined the route")
            continue

        layout.branches.append(Branch(fork_index=fork_index, rejoin_index=rejoin, cells=cells))
        logger.debug(f"Added {len(cells)}-cell branch from index {fork_index} to {rejoin}")

    return layout
