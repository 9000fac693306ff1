from collections import Counter

from chessmatch.components.tile import ObstacleKind, TokenKind
from chessmatch.systems.board_ops import count_empty_cells
from chessmatch.systems.shuffle import is_playable, safe_shuffle, shuffle_board
from tests.helpers import board_from_rows, filler_rows, seeded_factory, with_cells


def build_board():
    return board_from_rows(
        filler_rows(),
        obstacles={(0, 0): (ObstacleKind.STONE, 3), (4, 4): (ObstacleKind.ICE, 1)},
        tokens={(2, 3): TokenKind.SHIELD},
    )


def test_shuffle_keeps_obstacles_tokens_and_identities():
    board = build_board()
    shuffled = shuffle_board(board, seeded_factory(1))
    assert shuffled.grid[0][0] == board.grid[0][0]
    assert shuffled.grid[4][4] == board.grid[4][4]
    assert shuffled.grid[2][3] == board.grid[2][3]
    assert {t.id for t in shuffled.tiles()} == {t.id for t in board.tiles()}
    assert Counter(t.piece for t in shuffled.tiles()) == Counter(t.piece for t in board.tiles())
    for tile in shuffled.tiles():
        assert shuffled.grid[tile.row][tile.col] is tile


def test_shuffle_fills_empty_cells():
    board = board_from_rows(with_cells(filler_rows(), {(1, 1): ".", (5, 5): "."}))
    shuffled = shuffle_board(board, seeded_factory(2))
    assert count_empty_cells(shuffled) == 0


def test_safe_shuffle_yields_playable_board():
    shuffled = safe_shuffle(build_board(), seeded_factory(3))
    assert is_playable(shuffled)
    assert shuffled.grid[0][0].obstacle is ObstacleKind.STONE
