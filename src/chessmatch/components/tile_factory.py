from __future__ import annotations

import itertools
import random
from typing import Iterator, List, Sequence, TypeVar

from chessmatch.components.tile import ObstacleKind, PieceType, Tile, TokenKind

T = TypeVar("T")


class TileFactory:
    """Single source of randomness and tile identity for the engine.

    Every random piece choice and every fresh tile id flows through one
    factory, so a test can pass ``TileFactory(random.Random(seed))`` and
    assert exact boards and identities.
    """

    def __init__(self, rng: random.Random | None = None, *, first_id: int = 1) -> None:
        self.rng: random.Random = rng or random.Random()
        self._counter: Iterator[int] = itertools.count(first_id)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter)}"

    def random_piece(self, allowed: Sequence[PieceType]) -> PieceType:
        if not allowed:
            raise ValueError("random_piece requires at least one allowed piece")
        return allowed[self.rng.randrange(len(allowed))]

    def chance(self, probability: float) -> bool:
        return self.rng.random() < probability

    def shuffled(self, items: Sequence[T]) -> List[T]:
        result = list(items)
        self.rng.shuffle(result)
        return result

    def piece_tile(self, row: int, col: int, piece: PieceType) -> Tile:
        return Tile(id=self.next_id(piece.value), row=row, col=col, piece=piece)

    def obstacle_tile(
        self,
        row: int,
        col: int,
        kind: ObstacleKind,
        hits: int,
        allowed: Sequence[PieceType] = (),
    ) -> Tile:
        # Obstacles hold a piece when the level allows any.
        piece = self.random_piece(allowed) if allowed else None
        return Tile(
            id=self.next_id("obstacle"),
            row=row,
            col=col,
            piece=piece,
            obstacle=kind,
            hits=hits,
        )

    def token_tile(self, row: int, col: int, piece: PieceType, token: TokenKind) -> Tile:
        return Tile(
            id=self.next_id("token"),
            row=row,
            col=col,
            piece=piece,
            token=token,
            reached_bottom=False,
        )
