"""Resolution of a single player action, from the input board to the settled result.

Two kinds of action exist: swapping two adjacent cells so that a match forms,
and submitting a hand-picked group of tiles that already forms a pattern.
A rejected action leaves the board untouched and says why.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from chessmatch.components.board import Board, Position
from chessmatch.components.match import Match, Move
from chessmatch.components.tile import PieceType, Tile
from chessmatch.components.tile_factory import TileFactory
from chessmatch.systems.board_ops import (
    apply_move,
    clear_matches_with_report,
    collapse_board_fully,
    refill_board,
)
from chessmatch.systems.goal_tracker import count_obstacles
from chessmatch.systems.hints import can_swap, creates_match
from chessmatch.systems.pattern_validator import validate_pattern
from chessmatch.systems.scoring import ScoreCalculation, calculate_score
from chessmatch.systems.stabilization import StabilizationReport, empty_piece_counts, run_stabilization

logger = logging.getLogger(__name__)

LINE_PIECES = (PieceType.ROOK, PieceType.BISHOP)

REASON_NOT_ADJACENT = "tiles must be adjacent"
REASON_NOT_SWAPPABLE = "tiles cannot be swapped"
REASON_NO_MATCH = "swap does not create a match"
REASON_EMPTY_SELECTION = "selection is empty"
REASON_OUT_OF_BOUNDS = "selection leaves the board"
REASON_DUPLICATE = "selection repeats a tile"


@dataclass(slots=True)
class TurnResult:
    accepted: bool
    board: Board
    reason: str | None = None
    player_match: Match | None = None
    cascades: List[Match] = field(default_factory=list)
    rounds: List[Tuple[Match, ...]] = field(default_factory=list)
    cleared_by_piece: Dict[PieceType, int] = field(default_factory=empty_piece_counts)
    tiles_cleared: int = 0
    obstacles_cleared: int = 0
    longest_line: int = 0
    promoted: List[Tile] = field(default_factory=list)
    iterations: int = 0
    capped: bool = False
    shuffled: bool = False
    score: ScoreCalculation | None = None


def rejected(board: Board, reason: str) -> TurnResult:
    logger.debug("Rejected turn: %s", reason)
    return TurnResult(accepted=False, board=board, reason=reason)


def line_length(match: Match) -> int:
    """Length a match contributes to the long-line bonus; only rook and bishop lines count."""
    if match.piece in LINE_PIECES:
        return len(match.tiles)
    return 0


def longest_line(matches: Iterable[Match]) -> int:
    return max((line_length(match) for match in matches), default=0)


def _finish(
    before: Board,
    report: StabilizationReport,
    *,
    player_match: Match | None = None,
    promoted: Sequence[Tile] = (),
) -> TurnResult:
    """Fold a stabilization report into a turn result.

    A submitted selection becomes the first entry of the turn's match list, so
    its cascades are scored from index 1.
    """
    matches = list(report.cascades)
    rounds = list(report.rounds)
    cleared_by_piece = dict(report.cleared_by_piece)
    if player_match is not None:
        matches.insert(0, player_match)
        rounds.insert(0, (player_match,))
        cleared_by_piece[player_match.piece] += len(player_match.tiles)

    tiles_cleared = sum(len(match.tiles) for match in matches)
    obstacles_cleared = max(0, count_obstacles(before) - count_obstacles(report.board))
    longest = longest_line(matches)
    return TurnResult(
        accepted=True,
        board=report.board,
        player_match=player_match,
        cascades=matches,
        rounds=rounds,
        cleared_by_piece=cleared_by_piece,
        tiles_cleared=tiles_cleared,
        obstacles_cleared=obstacles_cleared,
        longest_line=longest,
        promoted=[*promoted, *report.promoted],
        iterations=report.iterations,
        capped=report.capped,
        shuffled=report.reshuffles > 0,
        score=calculate_score(tiles_cleared, matches, obstacles_cleared, longest),
    )


def resolve_swap(
    board: Board,
    move: Move,
    factory: TileFactory,
    *,
    allowed: Sequence[PieceType] | None = None,
) -> TurnResult:
    """Swap two adjacent cells and resolve every cascade that follows."""
    if not move.is_adjacent:
        return rejected(board, REASON_NOT_ADJACENT)
    src = board.at(move.source.row, move.source.col)
    dst = board.at(move.target.row, move.target.col)
    if not can_swap(src, dst):
        return rejected(board, REASON_NOT_SWAPPABLE)
    swapped = apply_move(board, move)
    if not creates_match(swapped, move):
        return rejected(board, REASON_NO_MATCH)

    report = run_stabilization(swapped, factory, allowed=allowed)
    return _finish(board, report)


def _selected_tiles(board: Board, positions: Sequence[Position]) -> Tuple[List[Tile], str | None]:
    tiles: List[Tile] = []
    seen = set()
    for row, col in positions:
        tile = board.at(row, col)
        if tile is None:
            return [], REASON_OUT_OF_BOUNDS
        if (row, col) in seen:
            return [], REASON_DUPLICATE
        seen.add((row, col))
        tiles.append(tile)
    return tiles, None


def resolve_selection(
    board: Board,
    positions: Sequence[Position],
    factory: TileFactory,
    *,
    allowed: Sequence[PieceType] | None = None,
) -> TurnResult:
    """Clear a hand-picked pattern, then settle and resolve the cascades it causes.

    Rook and bishop selections are ordered along their line first, so a
    four-tile line promotes an inner tile whatever order it was picked in.
    """
    if not positions:
        return rejected(board, REASON_EMPTY_SELECTION)
    tiles, problem = _selected_tiles(board, positions)
    if problem is not None:
        return rejected(board, problem)
    validation = validate_pattern(tiles)
    if not validation:
        return rejected(board, validation.reason or "invalid pattern")

    if tiles[0].piece in LINE_PIECES:
        tiles = sorted(tiles, key=lambda tile: tile.position)
    match = Match(piece=tiles[0].piece, tiles=tuple(tiles))
    cleared = clear_matches_with_report(board, [match])
    settled = refill_board(collapse_board_fully(cleared.board), factory, allowed)
    report = run_stabilization(settled, factory, allowed=allowed)
    return _finish(board, report, player_match=match, promoted=cleared.promoted)
