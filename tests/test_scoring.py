from chessmatch.components.match import Match
from chessmatch.systems.scoring import calculate_match_score, calculate_score
from tests.helpers import make_tile


def rook_match(length):
    return Match(piece=make_tile(0, 0, "R").piece, tiles=tuple(make_tile(0, c, "R") for c in range(length)))


def pawn_match():
    cells = ((0, 0), (0, 1), (1, 0), (1, 1))
    return Match(piece=make_tile(0, 0, "P").piece, tiles=tuple(make_tile(r, c, "P") for r, c in cells))


def test_three_rooks_score_one_star():
    calc = calculate_score(3, [], 0, 3)
    assert calc.base_score == 300
    assert calc.cascade_bonus == 0
    assert calc.total_score == 300
    assert calc.stars == 1
    assert calc.coins == 3
    assert calc.xp == 6


def test_cascade_bonus_grows_with_depth():
    matches = [rook_match(3), rook_match(3), rook_match(3)]
    calc = calculate_score(9, matches)
    # index 0 earns nothing; 300 * 2.5 + 300 * 4.0
    assert calc.cascade_bonus == 1950
    assert calc.total_score == 900 + 1950


def test_long_line_and_obstacle_bonuses():
    assert calculate_score(4, [], 0, 3).line_bonus == 0
    assert calculate_score(4, [], 0, 4).line_bonus == 80
    assert calculate_score(5, [], 0, 5).line_bonus == 100
    calc = calculate_score(3, [], 2, 0)
    assert calc.obstacle_bonus == 100
    assert calc.total_score == 400


def test_star_thresholds():
    assert calculate_score(4, []).stars == 1
    assert calculate_score(5, []).stars == 2
    assert calculate_score(10, []).stars == 3


def test_single_match_score():
    assert calculate_match_score(rook_match(3), 0) == 300
    assert calculate_match_score(rook_match(3), 1) == 300 + 750
    assert calculate_match_score(rook_match(3), 0, obstacles_cleared=1) == 350


def test_single_match_scores_sum_to_batch_without_line_bonus():
    matches = [rook_match(4), pawn_match()]
    batch = calculate_score(8, matches, obstacles_cleared=1, longest_line=4)
    live = calculate_match_score(matches[0], 0, 1) + calculate_match_score(matches[1], 1)
    assert live == batch.total_score - batch.line_bonus
