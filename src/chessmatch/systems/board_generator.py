from __future__ import annotations

import logging
from typing import List, Sequence

from chessmatch.components.board import Board
from chessmatch.components.level import LevelConfig, ObstaclePlacement, TokenPlacement
from chessmatch.components.tile import PieceType, Tile, empty_tile
from chessmatch.components.tile_factory import TileFactory
from chessmatch.constants import (
    BOARD_SIZE,
    CLUSTER_CREATION_CHANCE,
    DEFAULT_ALLOWED_PIECES,
    DEFAULT_OBSTACLE_HITS,
    MAX_BOARD_GENERATION_ATTEMPTS,
    MAX_PLACEMENT_ATTEMPTS,
    PATTERN_CREATION_CHANCE,
)
from chessmatch.systems.shuffle import is_playable, shuffle_board
from chessmatch.systems.stabilization import run_stabilization

logger = logging.getLogger(__name__)

Rows = List[List[Tile]]

# Longest straight run the raw fill tolerates before resampling.
MAX_FILL_RUN = 3


def _piece_at(rows: Rows, row: int, col: int) -> PieceType | None:
    if 0 <= row < len(rows) and 0 <= col < len(rows):
        return rows[row][col].piece
    return None


def creates_long_run(rows: Rows, row: int, col: int, piece: PieceType) -> bool:
    """Would ``piece`` at (row, col) finish a run of four to the left or above?"""
    left = all(_piece_at(rows, row, col - k) is piece for k in range(1, MAX_FILL_RUN + 1))
    up = all(_piece_at(rows, row - k, col) is piece for k in range(1, MAX_FILL_RUN + 1))
    return left or up


def forms_pair(rows: Rows, row: int, col: int, piece: PieceType) -> bool:
    return _piece_at(rows, row, col - 1) is piece or _piece_at(rows, row - 1, col) is piece


def forms_diagonal_pair(rows: Rows, row: int, col: int, piece: PieceType) -> bool:
    return any(
        _piece_at(rows, row + d_row, col + d_col) is piece
        for d_row, d_col in ((-1, -1), (-1, 1), (1, -1), (1, 1))
    )


def forms_l_start(rows: Rows, row: int, col: int, piece: PieceType) -> bool:
    """A straight neighbour plus a perpendicular one, the first two legs of an L."""
    if _piece_at(rows, row, col - 1) is piece:
        return _piece_at(rows, row - 1, col) is piece or _piece_at(rows, row + 1, col) is piece
    if _piece_at(rows, row - 1, col) is piece:
        return _piece_at(rows, row, col + 1) is piece
    return False


def _cluster_piece(rows: Rows, row: int, col: int, allowed: Sequence[PieceType]) -> PieceType | None:
    if PieceType.KNIGHT in allowed and forms_l_start(rows, row, col, PieceType.KNIGHT):
        return PieceType.KNIGHT
    if PieceType.BISHOP in allowed and forms_diagonal_pair(rows, row, col, PieceType.BISHOP):
        return PieceType.BISHOP
    if PieceType.ROOK in allowed and forms_pair(rows, row, col, PieceType.ROOK):
        return PieceType.ROOK
    return None


def _neighbour_piece(rows: Rows, row: int, col: int, allowed: Sequence[PieceType]) -> PieceType | None:
    for piece in (_piece_at(rows, row, col - 1), _piece_at(rows, row - 1, col)):
        if piece is not None and piece in allowed:
            return piece
    return None


def choose_fill_piece(
    rows: Rows,
    row: int,
    col: int,
    allowed: Sequence[PieceType],
    factory: TileFactory,
) -> PieceType:
    """Pick the piece for an empty cell during the initial fill.

    Long straight runs are resampled away. Otherwise the pick leans toward
    knight L starts, bishop diagonals, rook pairs, or repeating a neighbour.
    """
    piece = factory.random_piece(allowed)
    roll = factory.rng.random()
    if creates_long_run(rows, row, col, piece):
        attempts = 0
        while creates_long_run(rows, row, col, piece) and attempts < MAX_PLACEMENT_ATTEMPTS:
            piece = factory.random_piece(allowed)
            attempts += 1
        return piece

    biased = None
    if roll < CLUSTER_CREATION_CHANCE:
        biased = _cluster_piece(rows, row, col, allowed)
    elif roll < PATTERN_CREATION_CHANCE and not forms_pair(rows, row, col, piece):
        biased = _neighbour_piece(rows, row, col, allowed)
    if biased is not None and not creates_long_run(rows, row, col, biased):
        return biased
    return piece


def fill_board(
    size: int,
    allowed: Sequence[PieceType],
    obstacles: Sequence[ObstaclePlacement] = (),
    tokens: Sequence[TokenPlacement] = (),
    factory: TileFactory | None = None,
) -> Board:
    """Lay out obstacles, then tokens, then biased random pieces. No settling."""
    if not allowed:
        raise ValueError("generate_board requires at least one allowed piece")
    factory = factory or TileFactory()
    rows: Rows = [[empty_tile(row, col) for col in range(size)] for row in range(size)]

    for placement in obstacles:
        if not (0 <= placement.row < size and 0 <= placement.col < size):
            logger.debug("Skipping obstacle outside the board at %s", (placement.row, placement.col))
            continue
        hits = placement.hits if placement.hits is not None else DEFAULT_OBSTACLE_HITS[placement.kind]
        rows[placement.row][placement.col] = factory.obstacle_tile(
            placement.row, placement.col, placement.kind, hits, allowed
        )

    for placement in tokens:
        if not (0 <= placement.row < size and 0 <= placement.col < size):
            continue
        if rows[placement.row][placement.col].is_obstacle:
            continue
        rows[placement.row][placement.col] = factory.token_tile(
            placement.row, placement.col, factory.random_piece(allowed), placement.kind
        )

    for row in range(size):
        for col in range(size):
            cell = rows[row][col]
            if cell.is_obstacle or cell.has_piece:
                continue
            piece = choose_fill_piece(rows, row, col, allowed, factory)
            rows[row][col] = factory.piece_tile(row, col, piece)

    return Board.from_rows(rows)


def generate_board(
    size: int = BOARD_SIZE,
    allowed: Sequence[PieceType] = DEFAULT_ALLOWED_PIECES,
    obstacles: Sequence[ObstaclePlacement] = (),
    tokens: Sequence[TokenPlacement] = (),
    factory: TileFactory | None = None,
) -> Board:
    """Build a settled starting board with no pending match and at least one legal move.

    Each attempt stabilizes the board and checks it; a failed attempt is
    shuffled and tried again. After the last attempt the final board is
    shuffled once more and returned as is.
    """
    factory = factory or TileFactory()
    allowed = tuple(allowed)
    board = fill_board(size, allowed, obstacles, tokens, factory)
    for attempt in range(MAX_BOARD_GENERATION_ATTEMPTS):
        board = run_stabilization(board, factory, allowed=allowed).board
        if is_playable(board):
            logger.debug("Generated playable board after %d attempt(s)", attempt + 1)
            return board
        board = shuffle_board(board, factory, allowed)
    logger.warning("Board generation capped after %d attempts; using fallback shuffle", MAX_BOARD_GENERATION_ATTEMPTS)
    return shuffle_board(board, factory, allowed)


def generate_level_board(level: LevelConfig, factory: TileFactory | None = None) -> Board:
    return generate_board(
        level.size,
        level.allowed_pieces,
        level.obstacles,
        level.tokens,
        factory,
    )
