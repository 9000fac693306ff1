"""Cascade resolution as an explicit, bounded state machine.

    SCANNING --(no matches)--> DONE
    SCANNING --(matches)--> CLEARING --> SETTLING --> SCANNING

Every CLEARING -> SETTLING -> SCANNING cycle counts as one iteration. The
cascade cap bounds the total number of iterations for a whole run, reshuffle
re-runs included; hitting it ends the run early and is reported on the result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Sequence, Tuple

from chessmatch.components.board import Board
from chessmatch.components.match import Match
from chessmatch.components.tile import PieceType, Tile
from chessmatch.components.tile_factory import TileFactory
from chessmatch.constants import MAX_CASCADE_ITERATIONS, MAX_STABILIZATION_RESHUFFLES
from chessmatch.systems.board_ops import clear_matches_with_report, collapse_board_fully, refill_board
from chessmatch.systems.hints import has_valid_moves
from chessmatch.systems.match_finder import find_all_patterns, has_automatic_matches
from chessmatch.systems.shuffle import safe_shuffle

logger = logging.getLogger(__name__)


class StabilizationPhase(Enum):
    SCANNING = auto()
    CLEARING = auto()
    SETTLING = auto()
    DONE = auto()


def empty_piece_counts() -> Dict[PieceType, int]:
    return {piece: 0 for piece in PieceType}


@dataclass(slots=True)
class StabilizationReport:
    board: Board
    cascades: List[Match] = field(default_factory=list)
    cleared_by_piece: Dict[PieceType, int] = field(default_factory=empty_piece_counts)
    iterations: int = 0
    capped: bool = False
    rounds: List[Tuple[Match, ...]] = field(default_factory=list)
    promoted: List[Tile] = field(default_factory=list)
    obstacles_destroyed: int = 0
    reshuffles: int = 0

    @property
    def tiles_cleared(self) -> int:
        return sum(len(match.tiles) for match in self.cascades)


class StabilizationLoop:
    """Drives the match finder and board mutator one transition at a time."""

    def __init__(
        self,
        board: Board,
        factory: TileFactory,
        *,
        allowed: Sequence[PieceType] | None = None,
        max_iterations: int = MAX_CASCADE_ITERATIONS,
    ) -> None:
        self.factory = factory
        self.allowed = tuple(allowed) if allowed else None
        self.max_iterations = max_iterations
        self.phase = StabilizationPhase.SCANNING
        self.report = StabilizationReport(board=board)
        self._pending: List[Match] = []

    @property
    def board(self) -> Board:
        return self.report.board

    @property
    def done(self) -> bool:
        return self.phase is StabilizationPhase.DONE

    def restart(self, board: Board) -> None:
        """Resume scanning on a replacement board, keeping the iterations already spent."""
        self.report.board = board
        self.phase = StabilizationPhase.SCANNING

    def step(self) -> StabilizationPhase:
        if self.phase is StabilizationPhase.SCANNING:
            self._scan()
        elif self.phase is StabilizationPhase.CLEARING:
            self._clear()
        elif self.phase is StabilizationPhase.SETTLING:
            self._settle()
        return self.phase

    def run(self) -> StabilizationReport:
        while not self.done:
            self.step()
        return self.report

    def _scan(self) -> None:
        matches = find_all_patterns(self.board)
        if not matches:
            self.phase = StabilizationPhase.DONE
            return
        if self.report.iterations >= self.max_iterations:
            self.report.capped = True
            self.phase = StabilizationPhase.DONE
            logger.warning(
                "Cascade capped after %d iterations with %d matches pending",
                self.report.iterations,
                len(matches),
            )
            return
        self._pending = matches
        self.phase = StabilizationPhase.CLEARING

    def _clear(self) -> None:
        report = self.report
        for match in self._pending:
            report.cascades.append(match)
            report.cleared_by_piece[match.piece] += len(match.tiles)
        report.rounds.append(tuple(self._pending))
        cleared = clear_matches_with_report(self.board, self._pending)
        report.board = cleared.board
        report.promoted.extend(cleared.promoted)
        report.obstacles_destroyed += cleared.obstacles_destroyed
        self._pending = []
        self.phase = StabilizationPhase.SETTLING

    def _settle(self) -> None:
        collapsed = collapse_board_fully(self.board)
        self.report.board = refill_board(collapsed, self.factory, self.allowed)
        self.report.iterations += 1
        self.phase = StabilizationPhase.SCANNING


def run_stabilization(
    board: Board,
    factory: TileFactory | None = None,
    *,
    allowed: Sequence[PieceType] | None = None,
    max_iterations: int = MAX_CASCADE_ITERATIONS,
) -> StabilizationReport:
    """Resolve every cascade on ``board`` and leave it with at least one legal move.

    When the settled board has no legal move it is reshuffled; if the shuffle
    itself lines up matches the loop runs again on the shuffled board.
    """
    factory = factory or TileFactory()
    loop = StabilizationLoop(board, factory, allowed=allowed, max_iterations=max_iterations)
    report = loop.run()
    while not report.capped and not has_valid_moves(report.board):
        if report.reshuffles >= MAX_STABILIZATION_RESHUFFLES:
            logger.warning("No legal move after %d reshuffles", report.reshuffles)
            break
        shuffled = safe_shuffle(report.board, factory, allowed)
        report.reshuffles += 1
        if not has_automatic_matches(shuffled):
            report.board = shuffled
            continue
        loop.restart(shuffled)
        report = loop.run()
    return report
