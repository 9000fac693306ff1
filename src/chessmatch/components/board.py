from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from chessmatch.components.tile import Tile

Position = Tuple[int, int]
Grid = Tuple[Tuple[Tile, ...], ...]


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable square snapshot of the grid.

    Every operation that changes the board returns a new ``Board``; callers own
    the single authoritative reference. Two boards compare equal when every
    cell's content (identity included) is equal.
    """

    grid: Grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tile]]) -> Board:
        size = len(rows)
        frozen: List[Tuple[Tile, ...]] = []
        for r, row in enumerate(rows):
            if len(row) != size:
                raise ValueError("Board must be square")
            cells = []
            for c, tile in enumerate(row):
                cells.append(tile.moved_to(r, c))
            frozen.append(tuple(cells))
        return cls(grid=tuple(frozen))

    @property
    def size(self) -> int:
        return len(self.grid)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def at(self, row: int, col: int) -> Tile | None:
        if not self.in_bounds(row, col):
            return None
        return self.grid[row][col]

    def tiles(self) -> Iterator[Tile]:
        """Yield every tile in row-major order."""
        for row in self.grid:
            yield from row

    def column(self, col: int) -> List[Tile]:
        return [self.grid[r][col] for r in range(self.size)]

    def to_rows(self) -> List[List[Tile]]:
        """Mutable copy of the grid for building the next snapshot."""
        return [list(row) for row in self.grid]

    def with_tiles(self, updates: Iterable[Tile]) -> Board:
        """Return a board with each update placed at its own row/col."""
        rows = self.to_rows()
        for tile in updates:
            rows[tile.row][tile.col] = tile
        return Board(grid=tuple(tuple(row) for row in rows))

    def find(self, tile_id: str) -> Tile | None:
        for tile in self.tiles():
            if tile.id == tile_id:
                return tile
        return None
