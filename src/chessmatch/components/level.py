from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from chessmatch.components.goal import LevelGoal, ScoreGoal
from chessmatch.components.tile import ObstacleKind, PieceType, TokenKind
from chessmatch.constants import BOARD_SIZE, DEFAULT_ALLOWED_PIECES


@dataclass(frozen=True, slots=True)
class ObstaclePlacement:
    kind: ObstacleKind
    row: int
    col: int
    hits: int | None = None  # None uses the kind's default


@dataclass(frozen=True, slots=True)
class TokenPlacement:
    kind: TokenKind
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Static description of a level as consumed by the engine."""

    id: int = 0
    title: str = ""
    size: int = BOARD_SIZE
    move_limit: int = 30
    allowed_pieces: Tuple[PieceType, ...] = DEFAULT_ALLOWED_PIECES
    goal: LevelGoal = field(default_factory=lambda: ScoreGoal(target=5000))
    obstacles: Tuple[ObstaclePlacement, ...] = ()
    tokens: Tuple[TokenPlacement, ...] = ()
