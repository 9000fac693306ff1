"""Canonical knight pattern geometry.

The knight pattern is a 4-cell L-tetromino. The catalog holds every distinct
rotation and mirror image, each normalized so its minimum row and column are 0.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, List, Tuple

Point = Tuple[int, int]
Shape = Tuple[Point, ...]

BASE_KNIGHT_SHAPE: Shape = ((0, 0), (1, 0), (2, 0), (2, 1))


def rotate_point(point: Point, turns: int) -> Point:
    row, col = point
    turns %= 4
    if turns == 1:
        return (col, -row)
    if turns == 2:
        return (-row, -col)
    if turns == 3:
        return (-col, row)
    return (row, col)


def normalize(points: Iterable[Point]) -> Shape:
    pts = list(points)
    min_row = min(r for r, _ in pts)
    min_col = min(c for _, c in pts)
    return tuple((r - min_row, c - min_col) for r, c in pts)


def mirror(points: Iterable[Point]) -> Shape:
    return tuple((r, -c) for r, c in points)


def shape_key(points: Iterable[Point]) -> FrozenSet[Point]:
    return frozenset(points)


def _build_knight_shapes() -> Tuple[Shape, ...]:
    shapes: List[Shape] = []
    seen: set[FrozenSet[Point]] = set()
    for turns in range(4):
        rotated = tuple(rotate_point(p, turns) for p in BASE_KNIGHT_SHAPE)
        for candidate in (normalize(rotated), normalize(mirror(rotated))):
            key = shape_key(candidate)
            if key in seen:
                continue
            seen.add(key)
            shapes.append(candidate)
    return tuple(shapes)


KNIGHT_SHAPES: Tuple[Shape, ...] = _build_knight_shapes()
KNIGHT_SHAPE_KEYS: FrozenSet[FrozenSet[Point]] = frozenset(shape_key(s) for s in KNIGHT_SHAPES)


def knight_shapes() -> Tuple[Shape, ...]:
    """Return the fixed list of normalized knight shapes (8 for an L-tetromino)."""
    return KNIGHT_SHAPES


def shape_extent(shape: Shape) -> Tuple[int, int]:
    """Return (max_row, max_col) of a normalized shape."""
    return max(r for r, _ in shape), max(c for _, c in shape)
