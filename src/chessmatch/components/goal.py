from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple, Union

from chessmatch.components.tile import ObstacleKind, TokenKind


@dataclass(frozen=True, slots=True)
class ScoreGoal:
    target: int


@dataclass(frozen=True, slots=True)
class ClearObstaclesGoal:
    obstacle: ObstacleKind
    target: int


@dataclass(frozen=True, slots=True)
class DropTokensGoal:
    token: TokenKind
    target: int


@dataclass(frozen=True, slots=True)
class ClearBoardGoal:
    pass


@dataclass(frozen=True, slots=True)
class CombinationGoal:
    """All sub-goals must complete."""

    goals: Tuple["LevelGoal", ...]


LevelGoal = Union[ScoreGoal, ClearObstaclesGoal, DropTokensGoal, ClearBoardGoal, CombinationGoal]


@dataclass(slots=True)
class GoalProgress:
    """Snapshot derived from the board and cumulative score; never stored across moves."""

    score: int = 0
    obstacles_cleared: Dict[ObstacleKind, int] = field(default_factory=dict)
    tokens_dropped: Dict[TokenKind, int] = field(default_factory=dict)
    board_cleared: bool = False
