from __future__ import annotations

import random
from typing import Dict, Sequence, Tuple

from chessmatch.components.board import Board
from chessmatch.components.tile import ObstacleKind, PieceType, Tile, TokenKind, empty_tile
from chessmatch.components.tile_factory import TileFactory

LETTERS: Dict[str, PieceType] = {
    "K": PieceType.KNIGHT,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "P": PieceType.PAWN,
}

# No two equal pieces touch in any of the 8 directions, so nothing matches.
_EVEN_ROW = "KRBP"
_ODD_ROW = "BPKR"


def filler_rows(size: int = 6) -> list[str]:
    """Letter rows for a board with no match anywhere."""
    rows = []
    for r in range(size):
        pattern = _EVEN_ROW if r % 2 == 0 else _ODD_ROW
        rows.append("".join(pattern[c % 4] for c in range(size)))
    return rows


def with_cells(rows: Sequence[str], cells: Dict[Tuple[int, int], str]) -> list[str]:
    """Copy ``rows`` with single letters replaced at the given cells."""
    grid = [list(row) for row in rows]
    for (r, c), letter in cells.items():
        grid[r][c] = letter
    return ["".join(row) for row in grid]


def make_tile(row: int, col: int, letter: str) -> Tile:
    if letter == ".":
        return empty_tile(row, col)
    piece = LETTERS[letter]
    return Tile(id=f"{piece.value}-{row}-{col}", row=row, col=col, piece=piece)


def board_from_rows(
    rows: Sequence[str],
    *,
    obstacles: Dict[Tuple[int, int], Tuple[ObstacleKind, int]] | None = None,
    tokens: Dict[Tuple[int, int], TokenKind] | None = None,
) -> Board:
    """Build a board from letter rows (K, R, B, P, '.' for empty).

    ``obstacles`` turns cells into obstacles of the given kind and hit count,
    keeping whatever piece the letter put there; ``tokens`` marks carriers.
    """
    grid = [[make_tile(r, c, letter) for c, letter in enumerate(row)] for r, row in enumerate(rows)]
    for (r, c), (kind, hits) in (obstacles or {}).items():
        tile = grid[r][c]
        grid[r][c] = Tile(
            id=f"obstacle-{r}-{c}",
            row=r,
            col=c,
            piece=tile.piece,
            obstacle=kind,
            hits=hits,
        )
    for (r, c), kind in (tokens or {}).items():
        tile = grid[r][c]
        grid[r][c] = Tile(id=f"token-{r}-{c}", row=r, col=c, piece=tile.piece, token=kind)
    return Board.from_rows(grid)


def letters(board: Board) -> list[str]:
    """Inverse of ``board_from_rows`` for pieces; obstacles show as their piece letter."""
    inverse = {piece: letter for letter, piece in LETTERS.items()}
    return ["".join(inverse.get(tile.piece, ".") for tile in row) for row in board.grid]


def seeded_factory(seed: int = 0) -> TileFactory:
    return TileFactory(random.Random(seed))
