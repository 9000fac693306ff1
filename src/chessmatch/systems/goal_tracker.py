"""Goal progress derived from the board and the cumulative score.

Nothing here is stored between moves: every figure is recomputed from the
current board against the counts captured when the level started.
"""
from __future__ import annotations

from typing import Dict, Mapping, assert_never

from chessmatch.components.board import Board
from chessmatch.components.goal import (
    ClearBoardGoal,
    ClearObstaclesGoal,
    CombinationGoal,
    DropTokensGoal,
    GoalProgress,
    LevelGoal,
    ScoreGoal,
)
from chessmatch.components.level import LevelConfig
from chessmatch.components.tile import ObstacleKind, TokenKind


def count_obstacles(board: Board, kind: ObstacleKind | None = None) -> int:
    return sum(
        1
        for tile in board.tiles()
        if tile.is_obstacle and (kind is None or tile.obstacle is kind)
    )


def count_tokens_dropped(board: Board, kind: TokenKind | None = None) -> int:
    """Tokens sitting in the bottom row or flagged as having reached it."""
    bottom = board.size - 1
    return sum(
        1
        for tile in board.tiles()
        if tile.token is not None
        and (kind is None or tile.token is kind)
        and (tile.row == bottom or tile.reached_bottom)
    )


def is_board_cleared(board: Board) -> bool:
    return all(tile.is_obstacle or tile.piece is None for tile in board.tiles())


def obstacle_counts(board: Board) -> Dict[ObstacleKind, int]:
    return {kind: count_obstacles(board, kind) for kind in ObstacleKind}


def initial_obstacle_counts(level: LevelConfig) -> Dict[ObstacleKind, int]:
    """Obstacles per kind a level starts with, ignoring placements off the board."""
    placed: Dict[tuple, ObstacleKind] = {}
    for placement in level.obstacles:
        if 0 <= placement.row < level.size and 0 <= placement.col < level.size:
            # A later placement on the same cell replaces the earlier one.
            placed[(placement.row, placement.col)] = placement.kind
    counts = {kind: 0 for kind in ObstacleKind}
    for kind in placed.values():
        counts[kind] += 1
    return counts


def initial_token_counts(level: LevelConfig) -> Dict[TokenKind, int]:
    counts = {kind: 0 for kind in TokenKind}
    blocked = {(placement.row, placement.col) for placement in level.obstacles}
    for placement in level.tokens:
        if not (0 <= placement.row < level.size and 0 <= placement.col < level.size):
            continue
        if (placement.row, placement.col) in blocked:
            continue
        counts[placement.kind] += 1
    return counts


def build_goal_progress(
    board: Board,
    score: int,
    initial_obstacles: Mapping[ObstacleKind, int],
) -> GoalProgress:
    current = obstacle_counts(board)
    return GoalProgress(
        score=score,
        obstacles_cleared={
            kind: max(0, initial_obstacles.get(kind, 0) - current[kind]) for kind in ObstacleKind
        },
        tokens_dropped={kind: count_tokens_dropped(board, kind) for kind in TokenKind},
        board_cleared=is_board_cleared(board),
    )


def compute_goal_target(goal: LevelGoal) -> int:
    if isinstance(goal, (ScoreGoal, ClearObstaclesGoal, DropTokensGoal)):
        return goal.target
    if isinstance(goal, ClearBoardGoal):
        return 1
    if isinstance(goal, CombinationGoal):
        return len(goal.goals)
    assert_never(goal)


def compute_goal_progress(goal: LevelGoal, progress: GoalProgress) -> int:
    if isinstance(goal, ScoreGoal):
        return progress.score
    if isinstance(goal, ClearObstaclesGoal):
        return progress.obstacles_cleared.get(goal.obstacle, 0)
    if isinstance(goal, DropTokensGoal):
        return progress.tokens_dropped.get(goal.token, 0)
    if isinstance(goal, ClearBoardGoal):
        return 1 if progress.board_cleared else 0
    if isinstance(goal, CombinationGoal):
        # Sub-goals count whole or not at all.
        return sum(1 for sub in goal.goals if is_goal_complete(sub, progress))
    assert_never(goal)


def is_goal_complete(goal: LevelGoal, progress: GoalProgress) -> bool:
    return compute_goal_progress(goal, progress) >= compute_goal_target(goal)
