"""Board tile data model."""

from dataclasses import dataclass
from typing import Optional

from .item import Enemy, Trap

TILE_KINDS = ("start", "normal", "battle", "bonus", "trap", "castle")


@dataclass
class Tile:
    """One cell of the board grid.

    Every grid cell gets a tile; only tiles with ``is_path`` set are part of
    the traversable route. Tiles on the main walk also carry ``path_index``,
    their position in the ordered route that player positions index into.
    """

    id: int  # y * width + x
    x: int
    y: int
    kind: str  # One of TILE_KINDS
    is_path: bool
    path_index: Optional[int] = None  # Order along the main walk (None off the walk)
    enemy: Optional[Enemy] = None  # Set on battle tiles
    trap: Optional[Trap] = None  # Set while a trap is armed

    def __post_init__(self):
        """Validate tile data after initialization."""
        if self.kind not in TILE_KINDS:
            raise ValueError(f"Invalid tile kind: {self.kind} (must be one of {TILE_KINDS})")
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Invalid coordinates: ({self.x}, {self.y}) (must be >= 0)")
        if self.path_index is not None and not self.is_path:
            raise ValueError("path_index set on a tile that is not part of the path")
        if self.kind in ("start", "castle") and self.path_index is None:
            raise ValueError(f"{self.kind} tile must lie on the main path")
