from __future__ import annotations

import logging
from typing import List, Sequence

from chessmatch.components.board import Board
from chessmatch.components.tile import PieceType, Tile
from chessmatch.components.tile_factory import TileFactory
from chessmatch.constants import MAX_SHUFFLE_ATTEMPTS
from chessmatch.systems.board_ops import piece_pool
from chessmatch.systems.hints import has_valid_moves
from chessmatch.systems.match_finder import has_automatic_matches

logger = logging.getLogger(__name__)


def _is_shuffleable(tile: Tile) -> bool:
    return not tile.is_obstacle and tile.token is None


def shuffle_board(
    board: Board,
    factory: TileFactory,
    allowed: Sequence[PieceType] | None = None,
) -> Board:
    """Permute the free pieces across the free cells.

    Obstacles and token carriers stay where they are; moved tiles keep their
    identity. Any empty free cell receives a fresh piece, so the result has no
    empty cells outside obstacles.
    """
    pool = tuple(allowed) if allowed else piece_pool(board)
    cells = [tile for tile in board.tiles() if _is_shuffleable(tile)]
    pieces = factory.shuffled([tile for tile in cells if tile.has_piece])
    updates: List[Tile] = []
    for index, cell in enumerate(cells):
        if index < len(pieces):
            updates.append(pieces[index].moved_to(cell.row, cell.col))
        else:
            updates.append(factory.piece_tile(cell.row, cell.col, factory.random_piece(pool)))
    return board.with_tiles(updates)


def is_playable(board: Board) -> bool:
    """No match waiting to fire and at least one legal swap."""
    return not has_automatic_matches(board) and has_valid_moves(board)


def safe_shuffle(
    board: Board,
    factory: TileFactory,
    allowed: Sequence[PieceType] | None = None,
) -> Board:
    """Shuffle until the board is playable, falling back to one more plain shuffle."""
    current = board
    for _ in range(MAX_SHUFFLE_ATTEMPTS):
        shuffled = shuffle_board(current, factory, allowed)
        if is_playable(shuffled):
            return shuffled
        current = shuffled
    logger.warning("Shuffle capped after %d attempts; using last shuffle", MAX_SHUFFLE_ATTEMPTS)
    return shuffle_board(current, factory, allowed)
