"""Score, stars and rewards for a resolved move.

``calculate_score`` is the authoritative batch form. ``calculate_match_score``
scores one match for live feedback; summing it over every match of a
resolution (cascade index = position in the cascade list) gives the batch
total minus the long-line bonus, which only the batch form computes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chessmatch.components.match import Match
from chessmatch.constants import (
    BASE_SCORE_PER_TILE,
    CASCADE_MULTIPLIER,
    COIN_DIVISOR,
    LONG_LINE_MULTIPLIER,
    LONG_LINE_THRESHOLD,
    OBSTACLE_BONUS,
    THREE_STAR_THRESHOLD,
    TWO_STAR_THRESHOLD,
    XP_DIVISOR,
)


@dataclass(frozen=True, slots=True)
class ScoreCalculation:
    base_score: int
    cascade_bonus: int
    total_score: int
    stars: int
    coins: int
    xp: int
    line_bonus: int = 0
    obstacle_bonus: int = 0


def cascade_multiplier(index: int) -> float:
    return 1 + index * CASCADE_MULTIPLIER


def _cascade_bonus(tiles: int, index: int) -> int:
    # The initial move (index 0) earns no cascade bonus.
    if index <= 0:
        return 0
    return int(round(tiles * BASE_SCORE_PER_TILE * cascade_multiplier(index)))


def line_bonus(longest_line: int) -> int:
    if longest_line < LONG_LINE_THRESHOLD:
        return 0
    return int(round(longest_line * BASE_SCORE_PER_TILE * (LONG_LINE_MULTIPLIER - 1)))


def stars_for(total: int) -> int:
    if total >= THREE_STAR_THRESHOLD:
        return 3
    if total >= TWO_STAR_THRESHOLD:
        return 2
    return 1


def calculate_score(
    tiles_cleared: int,
    cascades: Sequence[Match],
    obstacles_cleared: int = 0,
    longest_line: int = 0,
) -> ScoreCalculation:
    base = tiles_cleared * BASE_SCORE_PER_TILE
    cascade = sum(_cascade_bonus(len(match.tiles), index) for index, match in enumerate(cascades))
    lines = line_bonus(longest_line)
    obstacles = obstacles_cleared * OBSTACLE_BONUS
    total = base + cascade + lines + obstacles
    return ScoreCalculation(
        base_score=base,
        cascade_bonus=cascade,
        total_score=total,
        stars=stars_for(total),
        coins=total // COIN_DIVISOR,
        xp=total // XP_DIVISOR,
        line_bonus=lines,
        obstacle_bonus=obstacles,
    )


def calculate_match_score(match: Match, cascade_index: int, obstacles_cleared: int = 0) -> int:
    tiles = len(match.tiles)
    return (
        tiles * BASE_SCORE_PER_TILE
        + _cascade_bonus(tiles, cascade_index)
        + obstacles_cleared * OBSTACLE_BONUS
    )
