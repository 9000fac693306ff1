"""Board-wide pattern detection.

Scan order is fixed and doubles as the tie-break between overlapping
candidates: knights, rook rows, rook columns, bishop diagonals (down-right
family, then down-left family), then pawn 2x2 windows. Within a single scan a
tile belongs to at most one match; the first candidate to claim it wins, and
any later candidate that touches a claimed tile is skipped entirely.
"""
from __future__ import annotations

from typing import Callable, Iterator, List, Sequence, Set, Tuple

from chessmatch.components.board import Board, Position
from chessmatch.components.match import Match
from chessmatch.components.tile import PieceType, Tile
from chessmatch.systems.pattern_validator import validate_pattern
from chessmatch.systems.shapes import knight_shapes, shape_extent

Claimed = Callable[[Tile], bool]

MIN_LINE_LENGTH = 3


def is_usable(tile: Tile | None) -> bool:
    """A cell takes part in matching only while it holds a piece (obstacles included)."""
    return tile is not None and tile.piece is not None


def _runs(line: Sequence[Tile]) -> Iterator[List[Tile]]:
    """Yield maximal same-piece runs along ``line``.

    A run ends when the piece type changes or an unusable cell is reached.
    """
    run: List[Tile] = []
    for tile in line:
        if not is_usable(tile):
            if run:
                yield run
            run = []
            continue
        if run and tile.piece is not run[0].piece:
            yield run
            run = []
        run.append(tile)
    if run:
        yield run


def _diagonal_lines(board: Board) -> Iterator[List[Tile]]:
    size = board.size
    starts: List[Tuple[int, int, int, int]] = []
    starts.extend((0, col, 1, 1) for col in range(size))
    starts.extend((row, 0, 1, 1) for row in range(1, size))
    starts.extend((0, col, 1, -1) for col in range(size))
    starts.extend((row, size - 1, 1, -1) for row in range(1, size))
    for row, col, d_row, d_col in starts:
        line: List[Tile] = []
        while board.in_bounds(row, col):
            line.append(board.grid[row][col])
            row += d_row
            col += d_col
        yield line


def _knight_candidates(board: Board, claimed: Claimed) -> Iterator[List[Tile]]:
    size = board.size
    for shape in knight_shapes():
        max_row, max_col = shape_extent(shape)
        for base_row in range(size - max_row):
            for base_col in range(size - max_col):
                tiles = [board.grid[base_row + r][base_col + c] for r, c in shape]
                if any(t.piece is not PieceType.KNIGHT or claimed(t) for t in tiles):
                    continue
                yield tiles


def _line_candidates(
    lines: Iterator[Sequence[Tile]], piece: PieceType, claimed: Claimed
) -> Iterator[List[Tile]]:
    for line in lines:
        for run in _runs(line):
            if run[0].piece is not piece or len(run) < MIN_LINE_LENGTH:
                continue
            # A run touching an earlier match is dropped whole.
            if any(claimed(t) for t in run):
                continue
            yield run


def _pawn_candidates(board: Board, claimed: Claimed) -> Iterator[List[Tile]]:
    grid = board.grid
    for row in range(board.size - 1):
        for col in range(board.size - 1):
            cluster = [grid[row][col], grid[row][col + 1], grid[row + 1][col], grid[row + 1][col + 1]]
            if all(t.piece is PieceType.PAWN and not claimed(t) for t in cluster):
                yield cluster


def _candidates(board: Board, claimed: Claimed) -> Iterator[List[Tile]]:
    """Yield candidate tile groups in the canonical scan order.

    Generators are consumed lazily so claims made by the caller while
    iterating are visible to every later candidate.
    """
    yield from _knight_candidates(board, claimed)
    rows = (list(row) for row in board.grid)
    yield from _line_candidates(rows, PieceType.ROOK, claimed)
    cols = (board.column(col) for col in range(board.size))
    yield from _line_candidates(cols, PieceType.ROOK, claimed)
    yield from _line_candidates(_diagonal_lines(board), PieceType.BISHOP, claimed)
    yield from _pawn_candidates(board, claimed)


def find_all_patterns(board: Board) -> List[Match]:
    """Return every non-overlapping match on ``board`` in scan order."""
    used: Set[Position] = set()

    def claimed(tile: Tile) -> bool:
        return tile.position in used

    matches: List[Match] = []
    for tiles in _candidates(board, claimed):
        if not validate_pattern(tiles):
            continue
        matches.append(Match(piece=tiles[0].piece, tiles=tuple(tiles)))
        used.update(t.position for t in tiles)
    return matches


def find_first_pattern(board: Board) -> Match | None:
    """Return the first match in scan order without scanning the rest of the board."""
    for tiles in _candidates(board, lambda tile: False):
        if validate_pattern(tiles):
            return Match(piece=tiles[0].piece, tiles=tuple(tiles))
    return None


def has_automatic_matches(board: Board) -> bool:
    return find_first_pattern(board) is not None


def find_potential_pattern_tiles(board: Board, tile: Tile) -> Set[str]:
    """Ids of same-type, non-obstacle neighbours (8 directions) that could extend a pattern with ``tile``."""
    if tile.piece is None:
        return set()
    found: Set[str] = set()
    for d_row in (-1, 0, 1):
        for d_col in (-1, 0, 1):
            if d_row == 0 and d_col == 0:
                continue
            neighbour = board.at(tile.row + d_row, tile.col + d_col)
            if neighbour is None or neighbour.is_obstacle or neighbour.id is None:
                continue
            if neighbour.piece is tile.piece:
                found.add(neighbour.id)
    return found
