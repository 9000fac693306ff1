import logging
from typing import Sequence, Tuple

from esper import World

from chessmatch.components.match import Move
from chessmatch.components.level_state import GameStatus
from chessmatch.events.bus import (
    EventBus,
    EVENT_SWAP_REQUEST,
    EVENT_SELECTION_SUBMIT,
    EVENT_MOVE_REJECTED,
    EVENT_MATCH_FOUND,
    EVENT_CASCADE_STEP,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_CAPPED,
    EVENT_BOARD_SHUFFLED,
    EVENT_BOARD_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_GOAL_PROGRESS,
    EVENT_LEVEL_WON,
    EVENT_LEVEL_LOST,
)
from chessmatch.systems.goal_tracker import (
    build_goal_progress,
    compute_goal_progress,
    compute_goal_target,
    is_goal_complete,
)
from chessmatch.systems.session_utils import (
    get_board_state,
    get_level_state,
    get_or_create_baseline,
    get_or_create_score_state,
    get_tile_factory,
)
from chessmatch.systems.turns import TurnResult, resolve_selection, resolve_swap

logger = logging.getLogger(__name__)

REASON_NOT_PLAYING = "level is not in play"
REASON_BUSY = "another move is resolving"


class MoveResolutionSystem:
    """Turns player input into settled boards, score, and level outcome.

    Logic:
      - On EVENT_SWAP_REQUEST / EVENT_SELECTION_SUBMIT: resolve the action
        against the session board with the pure turn functions.
      - Rejected actions emit EVENT_MOVE_REJECTED and cost no move.
      - Accepted actions replay the cascade as match/step events, replace the
        board, spend a move, add score and check the level goal.
    Only one action resolves at a time; input arriving while one is in
    flight (for example from a subscriber reacting to a resolution event) is
    rejected.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_SELECTION_SUBMIT, self.on_selection_submit)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get("src")
        dst = kwargs.get("dst")
        if src is None or dst is None:
            return
        self._resolve("swap", lambda board, factory, allowed: resolve_swap(
            board, Move.between(tuple(src), tuple(dst)), factory, allowed=allowed
        ))

    def on_selection_submit(self, sender, **kwargs):
        positions: Sequence[Tuple[int, int]] = [tuple(p) for p in kwargs.get("positions", [])]
        self._resolve("selection", lambda board, factory, allowed: resolve_selection(
            board, positions, factory, allowed=allowed
        ))

    def _resolve(self, kind: str, resolver) -> None:
        board_state = get_board_state(self.world)
        level_state = get_level_state(self.world)
        if board_state is None or level_state is None or not level_state.playing:
            self.event_bus.emit(EVENT_MOVE_REJECTED, reason=REASON_NOT_PLAYING, kind=kind)
            return
        if board_state.resolving:
            self.event_bus.emit(EVENT_MOVE_REJECTED, reason=REASON_BUSY, kind=kind)
            return

        board_state.resolving = True
        try:
            result: TurnResult = resolver(
                board_state.board,
                get_tile_factory(self.world),
                level_state.level.allowed_pieces,
            )
            if not result.accepted:
                self.event_bus.emit(EVENT_MOVE_REJECTED, reason=result.reason, kind=kind)
                return
            self._publish_cascade(result)
            board_state.board = result.board
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason=kind, board=result.board)
            level_state.moves_left = max(0, level_state.moves_left - 1)
            self._apply_score(result)
            self._update_status()
        finally:
            board_state.resolving = False

    def _publish_cascade(self, result: TurnResult) -> None:
        for depth, round_matches in enumerate(result.rounds, start=1):
            positions = set()
            for match in round_matches:
                self.event_bus.emit(
                    EVENT_MATCH_FOUND,
                    piece=match.piece,
                    positions=list(match.positions),
                    size=len(match.tiles),
                    depth=depth,
                )
                positions.update(match.positions)
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=sorted(positions))
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=len(result.rounds), tiles_cleared=result.tiles_cleared)
        if result.capped:
            logger.warning("Move resolution stopped at the cascade cap (%d iterations)", result.iterations)
            self.event_bus.emit(EVENT_CASCADE_CAPPED, iterations=result.iterations)
        if result.shuffled:
            self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason="no_moves")

    def _apply_score(self, result: TurnResult) -> None:
        score = get_or_create_score_state(self.world)
        for piece, count in result.cleared_by_piece.items():
            score.cleared_counts[piece] = score.cleared_counts.get(piece, 0) + count
        if result.score is None:
            return
        score.add(result.score)
        self.event_bus.emit(
            EVENT_SCORE_CHANGED,
            score=score.score,
            delta=result.score.total_score,
            calculation=result.score,
        )

    def _update_status(self) -> None:
        board_state = get_board_state(self.world)
        level_state = get_level_state(self.world)
        score = get_or_create_score_state(self.world)
        baseline = get_or_create_baseline(self.world)
        goal = level_state.level.goal

        progress = build_goal_progress(board_state.board, score.score, baseline.obstacles)
        target = compute_goal_target(goal)
        complete = is_goal_complete(goal, progress)
        self.event_bus.emit(
            EVENT_GOAL_PROGRESS,
            progress=min(compute_goal_progress(goal, progress), target),
            target=target,
            complete=complete,
        )
        if complete:
            level_state.status = GameStatus.WON
            self.event_bus.emit(
                EVENT_LEVEL_WON,
                level_id=level_state.level.id,
                score=score.score,
                moves_left=level_state.moves_left,
            )
        elif level_state.moves_left <= 0:
            level_state.status = GameStatus.LOST
            self.event_bus.emit(EVENT_LEVEL_LOST, level_id=level_state.level.id, score=score.score)
