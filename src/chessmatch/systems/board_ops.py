from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from chessmatch.components.board import Board, Position
from chessmatch.components.match import Match, Move
from chessmatch.components.tile import (
    PieceType,
    StripeDirection,
    Tile,
    empty_tile,
    make_striped,
)
from chessmatch.components.tile_factory import TileFactory
from chessmatch.constants import (
    DEFAULT_ALLOWED_PIECES,
    MAX_COLLAPSE_ITERATIONS,
    PATTERN_REFILL_CHANCE,
    REFILL_ITERATIONS_PER_ROW,
)

logger = logging.getLogger(__name__)

PROMOTION_SIZE = 4
PROMOTION_INDEX = 2


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    tile_id: str | None


@dataclass(slots=True)
class ClearReport:
    """What a clear did to the board, for scoring and presentation."""

    board: Board
    cleared: List[Position] = field(default_factory=list)
    promoted: List[Tile] = field(default_factory=list)
    obstacles_hit: List[Position] = field(default_factory=list)
    obstacles_destroyed: int = 0


# ---------------------------------------------------------------------------
# Swap
# ---------------------------------------------------------------------------

def apply_move(board: Board, move: Move) -> Board:
    """Swap the contents of the two cells named by ``move``.

    Returns ``board`` itself when either cell is out of bounds, both name the
    same cell, or either cell is an obstacle.
    """
    src, dst = move.source, move.target
    if not (board.in_bounds(src.row, src.col) and board.in_bounds(dst.row, dst.col)):
        return board
    if src == dst:
        return board
    a = board.grid[src.row][src.col]
    b = board.grid[dst.row][dst.col]
    if a.is_obstacle or b.is_obstacle:
        return board
    return board.with_tiles([b.moved_to(src.row, src.col), a.moved_to(dst.row, dst.col)])


def swap_positions(board: Board, src: Position, dst: Position) -> Board:
    return apply_move(board, Move.between(src, dst))


# ---------------------------------------------------------------------------
# Clear
# ---------------------------------------------------------------------------

def _row_positions(board: Board, row: int) -> List[Position]:
    return [(row, col) for col in range(board.size)]


def _col_positions(board: Board, col: int) -> List[Position]:
    return [(row, col) for row in range(board.size)]


def _stripe_positions(board: Board, tile: Tile) -> List[Position]:
    if tile.direction is StripeDirection.HORIZONTAL:
        return _row_positions(board, tile.row)
    return _col_positions(board, tile.col)


def _diagonal_positions(board: Board, tiles: Sequence[Tile]) -> List[Position]:
    first = tiles[0]
    major = first.row - first.col
    if all(t.row - t.col == major for t in tiles):
        return [(r, r - major) for r in range(board.size) if board.in_bounds(r, r - major)]
    minor = first.row + first.col
    return [(r, minor - r) for r in range(board.size) if board.in_bounds(r, minor - r)]


def _line_positions(board: Board, tiles: Sequence[Tile]) -> List[Position]:
    first = tiles[0]
    if all(t.row == first.row for t in tiles):
        return _row_positions(board, first.row)
    return _col_positions(board, first.col)


def stripe_direction_for(match: Match) -> StripeDirection:
    if match.piece is PieceType.ROOK:
        if match.tiles[0].row == match.tiles[1].row:
            return StripeDirection.HORIZONTAL
        return StripeDirection.VERTICAL
    # Diagonals span equal rows and columns, so bishops always stripe vertically.
    return StripeDirection.VERTICAL


def _is_promotion(match: Match) -> bool:
    return match.piece in (PieceType.ROOK, PieceType.BISHOP) and len(match.tiles) == PROMOTION_SIZE


def _match_targets(board: Board, match: Match) -> Tuple[Set[Position], Dict[Position, Tile]]:
    """Cells a single match removes, plus any cell it promotes instead."""
    current = [board.grid[t.row][t.col] for t in match.tiles]
    targets: Set[Position] = {t.position for t in current}
    promotions: Dict[Position, Tile] = {}

    if any(t.is_striped for t in current):
        # Activation takes over from any area effect or promotion.
        for tile in current:
            if tile.is_striped:
                targets.update(_stripe_positions(board, tile))
        return targets, promotions

    if _is_promotion(match):
        center = current[PROMOTION_INDEX]
        promotions[center.position] = make_striped(center, stripe_direction_for(match))
        targets.discard(center.position)
    elif match.piece is PieceType.ROOK and len(current) < PROMOTION_SIZE:
        targets.update(_line_positions(board, current))
    elif match.piece is PieceType.BISHOP:
        targets.update(_diagonal_positions(board, current))
    return targets, promotions


def clear_matches_with_report(board: Board, matches: Iterable[Match]) -> ClearReport:
    """Remove matched cells, applying each piece type's area effect.

    Obstacles holding a piece lose one hit instead of being cleared and turn
    into an ordinary cell (piece kept) when the counter reaches zero. Striped
    tiles caught by any target set fire their own row or column.
    """
    targets: Set[Position] = set()
    promotions: Dict[Position, Tile] = {}
    any_match = False
    for match in matches:
        any_match = True
        match_targets, match_promotions = _match_targets(board, match)
        targets |= match_targets
        promotions.update(match_promotions)
    if not any_match:
        return ClearReport(board=board)

    targets -= promotions.keys()
    pending = [pos for pos in targets if board.grid[pos[0]][pos[1]].is_striped]
    while pending:
        row, col = pending.pop()
        for pos in _stripe_positions(board, board.grid[row][col]):
            if pos in targets or pos in promotions:
                continue
            targets.add(pos)
            if board.grid[pos[0]][pos[1]].is_striped:
                pending.append(pos)

    report = ClearReport(board=board)
    updates: List[Tile] = list(promotions.values())
    report.promoted.extend(promotions.values())
    for row, col in sorted(targets):
        tile = board.grid[row][col]
        if tile.is_obstacle:
            report.obstacles_hit.append((row, col))
            # An obstacle without a piece is cleared outright, whatever its hits.
            remaining = tile.hits - 1 if tile.has_piece else 0
            if remaining > 0:
                updates.append(replace(tile, hits=remaining))
                continue
            report.obstacles_destroyed += 1
            if tile.has_piece:
                updates.append(replace(tile, obstacle=None, hits=0))
                continue
        if tile.id is not None or not tile.is_empty:
            report.cleared.append((row, col))
        updates.append(empty_tile(row, col))
    report.board = board.with_tiles(updates)
    return report


def clear_matches(board: Board, matches: Iterable[Match]) -> Board:
    return clear_matches_with_report(board, matches).board


# ---------------------------------------------------------------------------
# Gravity
# ---------------------------------------------------------------------------

def compute_gravity_moves(board: Board) -> List[GravityMove]:
    """One gravity pass as a list of per-tile moves.

    In each column pieces fall to the lowest free non-obstacle cells, passing
    over obstacles, which never move and are never occupied by a falling piece.
    """
    moves: List[GravityMove] = []
    size = board.size
    for col in range(size):
        slots: List[int] = []
        falling: List[Tile] = []
        for row in range(size - 1, -1, -1):
            tile = board.grid[row][col]
            if tile.is_obstacle:
                continue
            slots.append(row)
            if tile.has_piece:
                falling.append(tile)
        for tile, target_row in zip(falling, slots):
            if tile.row != target_row:
                moves.append(GravityMove(source=tile.position, target=(target_row, col), tile_id=tile.id))
    return moves


def apply_gravity(board: Board) -> Board:
    moves = compute_gravity_moves(board)
    if not moves:
        return board
    rows = board.to_rows()
    bottom = board.size - 1
    for move in moves:
        src_row, src_col = move.source
        rows[src_row][src_col] = empty_tile(src_row, src_col)
    for move in moves:
        src_row, src_col = move.source
        dst_row, dst_col = move.target
        tile = board.grid[src_row][src_col].moved_to(dst_row, dst_col)
        if tile.token is not None and dst_row == bottom and not tile.reached_bottom:
            tile = replace(tile, reached_bottom=True)
        rows[dst_row][dst_col] = tile
    return Board(grid=tuple(tuple(row) for row in rows))


def has_floating_tiles(board: Board) -> bool:
    """True while some empty cell has a falling piece directly above it."""
    for col in range(board.size):
        for row in range(board.size - 1, 0, -1):
            tile = board.grid[row][col]
            above = board.grid[row - 1][col]
            if tile.is_empty and not above.is_obstacle and above.has_piece:
                return True
    return False


def collapse_board_fully(board: Board) -> Board:
    current = board
    iterations = 0
    while has_floating_tiles(current) and iterations < MAX_COLLAPSE_ITERATIONS:
        current = apply_gravity(current)
        iterations += 1
    if iterations >= MAX_COLLAPSE_ITERATIONS:
        logger.warning("Collapse capped after %d gravity passes", iterations)
    return current


# ---------------------------------------------------------------------------
# Refill
# ---------------------------------------------------------------------------

def piece_pool(board: Board) -> Tuple[PieceType, ...]:
    """Piece types present on the board, in enum order; defaults when none are."""
    present = {tile.piece for tile in board.tiles() if tile.piece is not None}
    pool = tuple(piece for piece in PieceType if piece in present)
    return pool or DEFAULT_ALLOWED_PIECES


def count_empty_cells(board: Board) -> int:
    return sum(1 for tile in board.tiles() if tile.is_empty)


def _spawn_row(board: Board, col: int) -> int | None:
    """Topmost non-obstacle cell of ``col`` if it is empty."""
    for row in range(board.size):
        tile = board.grid[row][col]
        if tile.is_obstacle:
            continue
        return row if tile.is_empty else None
    return None


def refill_board(
    board: Board,
    factory: TileFactory,
    allowed: Sequence[PieceType] | None = None,
) -> Board:
    """Spawn pieces at the top of each column and let them fall until no empty cell remains.

    A spawned piece copies its left neighbour with a small fixed probability.
    If the iteration cap is reached the remaining empty cells are filled in place.
    """
    pool = tuple(allowed) if allowed else piece_pool(board)
    current = apply_gravity(board)
    limit = board.size * REFILL_ITERATIONS_PER_ROW
    iterations = 0
    while iterations < limit and count_empty_cells(current) > 0:
        spawned: List[Tile] = []
        rows = current.to_rows()
        for col in range(current.size):
            row = _spawn_row(current, col)
            if row is None:
                continue
            piece = factory.random_piece(pool)
            left = rows[row][col - 1] if col > 0 else None
            if left is not None and left.piece in pool and factory.chance(PATTERN_REFILL_CHANCE):
                piece = left.piece
            tile = factory.piece_tile(row, col, piece)
            rows[row][col] = tile
            spawned.append(tile)
        if not spawned:
            break
        current = apply_gravity(current.with_tiles(spawned))
        iterations += 1

    if count_empty_cells(current) > 0:
        logger.warning("Refill capped after %d iterations; filling remaining cells in place", iterations)
        fills = [
            factory.piece_tile(tile.row, tile.col, factory.random_piece(pool))
            for tile in current.tiles()
            if tile.is_empty
        ]
        current = current.with_tiles(fills)
    return current
