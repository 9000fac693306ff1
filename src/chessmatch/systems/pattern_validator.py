from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from chessmatch.components.tile import PieceType, Tile
from chessmatch.systems.shapes import KNIGHT_SHAPE_KEYS, normalize, shape_key


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a pattern check. ``reason`` is for diagnostics only."""

    is_valid: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.is_valid


VALID = ValidationResult(True)


def _unique_sorted(values: Sequence[int]) -> List[int]:
    return sorted(set(values))


def _is_consecutive(values: Sequence[int]) -> bool:
    return all(b - a == 1 for a, b in zip(values, values[1:]))


def is_knight_shape(tiles: Sequence[Tile]) -> bool:
    if len(tiles) != 4:
        return False
    return shape_key(normalize(t.position for t in tiles)) in KNIGHT_SHAPE_KEYS


def is_rook_shape(tiles: Sequence[Tile]) -> bool:
    if len(tiles) < 3:
        return False
    first = tiles[0]
    same_row = all(t.row == first.row for t in tiles)
    same_col = all(t.col == first.col for t in tiles)
    if same_row:
        values = _unique_sorted([t.col for t in tiles])
    elif same_col:
        values = _unique_sorted([t.row for t in tiles])
    else:
        return False
    return len(values) == len(tiles) and _is_consecutive(values)


def is_bishop_shape(tiles: Sequence[Tile]) -> bool:
    if len(tiles) < 3:
        return False
    major = tiles[0].row - tiles[0].col
    minor = tiles[0].row + tiles[0].col
    on_major = all(t.row - t.col == major for t in tiles)
    on_minor = all(t.row + t.col == minor for t in tiles)
    if not (on_major or on_minor):
        return False
    ordered = sorted(tiles, key=lambda t: (t.row, t.col))
    for prev, cur in zip(ordered, ordered[1:]):
        if abs(prev.row - cur.row) != 1 or abs(prev.col - cur.col) != 1:
            return False
    return True


def is_pawn_shape(tiles: Sequence[Tile]) -> bool:
    """Four tiles covering every corner of one 2x2 block."""
    if len(tiles) != 4:
        return False
    rows = _unique_sorted([t.row for t in tiles])
    cols = _unique_sorted([t.col for t in tiles])
    if len(rows) != 2 or len(cols) != 2:
        return False
    if not (_is_consecutive(rows) and _is_consecutive(cols)):
        return False
    expected = {(r, c) for r in rows for c in cols}
    return {t.position for t in tiles} == expected


def validate_pattern(tiles: Sequence[Tile]) -> ValidationResult:
    """Decide whether ``tiles`` form a legal pattern for their shared piece type."""
    if len(tiles) < 2:
        return ValidationResult(False, "needs at least 2 tiles")
    piece = tiles[0].piece
    if piece is None:
        return ValidationResult(False, "missing piece")
    if any(t.piece is not piece for t in tiles[1:]):
        return ValidationResult(False, "tiles must match piece type")

    if piece is PieceType.KNIGHT:
        return VALID if is_knight_shape(tiles) else ValidationResult(False, "invalid knight L shape")
    if piece is PieceType.ROOK:
        if is_rook_shape(tiles):
            return VALID
        return ValidationResult(False, "rook pattern must be straight and contiguous")
    if piece is PieceType.BISHOP:
        if is_bishop_shape(tiles):
            return VALID
        return ValidationResult(False, "bishop pattern must be diagonal and contiguous")
    if piece is PieceType.PAWN:
        if is_pawn_shape(tiles):
            return VALID
        return ValidationResult(False, "pawn pattern must be 4 tiles forming a 2x2 cluster")
    return ValidationResult(False, "unknown piece type")
