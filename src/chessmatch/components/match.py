from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from chessmatch.components.tile import PieceType, Tile


@dataclass(frozen=True, slots=True)
class Coordinate:
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class Move:
    """A proposed swap between two cells."""

    source: Coordinate
    target: Coordinate

    @classmethod
    def between(cls, src: Tuple[int, int], dst: Tuple[int, int]) -> Move:
        return cls(source=Coordinate(*src), target=Coordinate(*dst))

    @property
    def is_adjacent(self) -> bool:
        dr = abs(self.source.row - self.target.row)
        dc = abs(self.source.col - self.target.col)
        return dr + dc == 1


@dataclass(frozen=True, slots=True)
class Match:
    """One detected pattern: the piece type plus the tiles forming it, in scan order."""

    piece: PieceType
    tiles: Tuple[Tile, ...]

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def positions(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(tile.position for tile in self.tiles)
