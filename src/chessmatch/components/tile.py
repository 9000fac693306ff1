from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class PieceType(str, Enum):
    """Chess-themed piece kinds. Each kind matches by its own shape rule."""

    KNIGHT = "knight"
    ROOK = "rook"
    BISHOP = "bishop"
    PAWN = "pawn"


class ObstacleKind(str, Enum):
    ICE = "ice"
    CRATE = "crate"
    STONE = "stone"
    VINE = "vine"
    LOCK = "lock"
    COBWEB = "cobweb"
    FROZEN = "frozen"


class TokenKind(str, Enum):
    KING = "king"
    SHIELD = "shield"
    SWORD = "sword"


class SpecialKind(str, Enum):
    STRIPED = "striped"


class StripeDirection(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True, slots=True)
class Tile:
    """Content of a single board cell.

    A cell is empty (no piece, not an obstacle), an obstacle (with or without
    a piece inside), or a live piece cell. ``row``/``col`` always mirror the
    cell's position in the board that holds it. Empty cells carry no identity.
    """

    id: str | None
    row: int
    col: int
    piece: PieceType | None = None
    obstacle: ObstacleKind | None = None
    hits: int = 0
    special: SpecialKind | None = None
    direction: StripeDirection | None = None
    token: TokenKind | None = None
    reached_bottom: bool = False

    @property
    def is_obstacle(self) -> bool:
        return self.obstacle is not None

    @property
    def has_piece(self) -> bool:
        return self.piece is not None

    @property
    def is_empty(self) -> bool:
        return self.piece is None and self.obstacle is None

    @property
    def is_striped(self) -> bool:
        return self.special is SpecialKind.STRIPED and self.direction is not None

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)

    def moved_to(self, row: int, col: int) -> Tile:
        """Return this content relocated to ``(row, col)``, identity kept."""
        if row == self.row and col == self.col:
            return self
        return replace(self, row=row, col=col)


def empty_tile(row: int, col: int) -> Tile:
    return Tile(id=None, row=row, col=col)


def make_striped(tile: Tile, direction: StripeDirection) -> Tile:
    """Promote ``tile`` into a striped special tile, keeping its identity."""
    if tile.piece is None:
        raise ValueError("Cannot create special tile from tile without piece type")
    return replace(tile, special=SpecialKind.STRIPED, direction=direction)
