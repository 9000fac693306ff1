from __future__ import annotations

from typing import Iterator, Tuple

from chessmatch.components.board import Board
from chessmatch.components.match import Move
from chessmatch.components.tile import Tile
from chessmatch.systems.board_ops import apply_move
from chessmatch.systems.match_finder import find_all_patterns, find_first_pattern

SwapHint = Tuple[Tile, Tile]


def can_swap(tile: Tile | None, other: Tile | None) -> bool:
    """Both cells hold a piece and neither is an obstacle."""
    if tile is None or other is None:
        return False
    if tile.piece is None or other.piece is None:
        return False
    return not (tile.is_obstacle or other.is_obstacle)


def creates_match(swapped: Board, move: Move) -> bool:
    """True if ``swapped`` holds a match touching either cell of ``move``."""
    touched = {(move.source.row, move.source.col), (move.target.row, move.target.col)}
    return any(
        tile.position in touched
        for match in find_all_patterns(swapped)
        for tile in match.tiles
    )


def iter_candidate_swaps(board: Board) -> Iterator[Tuple[Tile, Tile]]:
    """Adjacent swappable pairs in row-major order, right neighbour before lower."""
    for row in range(board.size):
        for col in range(board.size):
            tile = board.grid[row][col]
            for neighbour in (board.at(row, col + 1), board.at(row + 1, col)):
                if can_swap(tile, neighbour):
                    yield tile, neighbour


def find_valid_swaps(board: Board) -> Iterator[Tuple[Tile, Tile]]:
    for tile, neighbour in iter_candidate_swaps(board):
        move = Move.between(tile.position, neighbour.position)
        if creates_match(apply_move(board, move), move):
            yield tile, neighbour


def has_valid_moves(board: Board) -> bool:
    return next(find_valid_swaps(board), None) is not None


def find_hint_swap(board: Board) -> SwapHint | None:
    """Suggest where to look next.

    If a match already sits on the board its first two tiles come back as a
    degenerate hint. Otherwise the first swap that creates a match touching
    one of the swapped cells is returned. ``None`` means the board should be
    reshuffled.
    """
    existing = find_first_pattern(board)
    if existing is not None and len(existing.tiles) >= 2:
        return existing.tiles[0], existing.tiles[1]
    return next(find_valid_swaps(board), None)
