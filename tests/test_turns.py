from chessmatch.components.match import Move
from chessmatch.components.tile import ObstacleKind, PieceType
from chessmatch.systems.board_ops import count_empty_cells
from chessmatch.systems.turns import (
    REASON_DUPLICATE,
    REASON_EMPTY_SELECTION,
    REASON_NO_MATCH,
    REASON_NOT_ADJACENT,
    REASON_NOT_SWAPPABLE,
    REASON_OUT_OF_BOUNDS,
    resolve_selection,
    resolve_swap,
)
from tests.helpers import board_from_rows, filler_rows, seeded_factory, with_cells

SWAP_BOARD = [
    "RRB...",
    "..R...",
    "......",
    "......",
    "......",
    "......",
]


def test_swap_must_be_adjacent():
    board = board_from_rows(SWAP_BOARD)
    result = resolve_swap(board, Move.between((0, 0), (0, 2)), seeded_factory())
    assert not result.accepted
    assert result.reason == REASON_NOT_ADJACENT
    assert result.board is board


def test_swap_without_match_is_rejected_unchanged():
    board = board_from_rows(SWAP_BOARD)
    result = resolve_swap(board, Move.between((0, 1), (0, 2)), seeded_factory())
    assert not result.accepted
    assert result.reason == REASON_NO_MATCH
    assert result.board is board


def test_swap_with_obstacle_is_rejected():
    board = board_from_rows(SWAP_BOARD, obstacles={(1, 2): (ObstacleKind.ICE, 1)})
    result = resolve_swap(board, Move.between((0, 2), (1, 2)), seeded_factory())
    assert result.reason == REASON_NOT_SWAPPABLE


def test_matching_swap_resolves_and_scores():
    board = board_from_rows(SWAP_BOARD)
    result = resolve_swap(board, Move.between((0, 2), (1, 2)), seeded_factory(4))
    assert result.accepted
    assert result.cascades[0].piece is PieceType.ROOK
    assert result.cascades[0].positions == ((0, 0), (0, 1), (0, 2))
    assert result.player_match is None
    assert result.tiles_cleared >= 3
    assert result.score.base_score == result.tiles_cleared * 100
    assert result.score.total_score >= 300
    assert count_empty_cells(result.board) == 0


def test_selection_rejections():
    board = board_from_rows(filler_rows())
    factory = seeded_factory()
    assert resolve_selection(board, [], factory).reason == REASON_EMPTY_SELECTION
    assert resolve_selection(board, [(0, 0), (6, 0)], factory).reason == REASON_OUT_OF_BOUNDS
    assert resolve_selection(board, [(0, 1), (0, 1), (2, 1)], factory).reason == REASON_DUPLICATE
    invalid = resolve_selection(board, [(0, 1), (2, 1), (4, 1)], factory)
    assert not invalid.accepted
    assert invalid.reason == "rook pattern must be straight and contiguous"
    assert invalid.board is board


def test_pawn_selection_is_scored_as_the_first_match():
    rows = with_cells(filler_rows(), {(4, 4): "P", (4, 5): "P", (5, 4): "P", (5, 5): "P"})
    board = board_from_rows(rows)
    result = resolve_selection(board, [(4, 4), (4, 5), (5, 4), (5, 5)], seeded_factory(8))
    assert result.accepted
    assert result.player_match.piece is PieceType.PAWN
    assert result.cascades[0] is result.player_match
    assert result.rounds[0] == (result.player_match,)
    assert result.cleared_by_piece[PieceType.PAWN] >= 4
    assert result.tiles_cleared >= 4
    assert count_empty_cells(result.board) == 0


def test_four_rook_selection_promotes_an_inner_tile():
    rows = with_cells(["......"] * 6, {(5, 0): "R", (5, 1): "R", (5, 2): "R", (5, 3): "R"})
    board = board_from_rows(rows)
    result = resolve_selection(board, [(5, 3), (5, 0), (5, 2), (5, 1)], seeded_factory(5))
    assert result.accepted
    assert [tile.id for tile in result.promoted][0] == "rook-5-2"
    assert result.longest_line >= 4
