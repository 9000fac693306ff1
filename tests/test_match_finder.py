from chessmatch.components.tile import ObstacleKind, PieceType
from chessmatch.systems.match_finder import (
    find_all_patterns,
    find_first_pattern,
    find_potential_pattern_tiles,
    has_automatic_matches,
)
from tests.helpers import board_from_rows, filler_rows

ROOK_SCENARIO = [
    "KRBPKR",
    "BPKPBP",
    "KRRRKR",
    "BPKBBP",
    "KRBPKR",
    "BPKRBP",
]


def test_filler_board_has_no_patterns():
    board = board_from_rows(filler_rows())
    assert find_all_patterns(board) == []
    assert not has_automatic_matches(board)


def test_single_rook_run_is_the_only_match():
    board = board_from_rows(ROOK_SCENARIO)
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert matches[0].piece is PieceType.ROOK
    assert matches[0].positions == ((2, 1), (2, 2), (2, 3))


def test_long_rook_run_is_one_maximal_match():
    board = board_from_rows([
        "RRRRRR",
        "......",
        "......",
        "......",
        "......",
        "......",
    ])
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert len(matches[0]) == 6


def test_knight_l_shape_is_found():
    board = board_from_rows([
        "......",
        ".K....",
        ".K....",
        ".KK...",
        "......",
        "......",
    ])
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert matches[0].piece is PieceType.KNIGHT
    assert set(matches[0].positions) == {(1, 1), (2, 1), (3, 1), (3, 2)}


def test_bishop_anti_diagonal_is_found():
    board = board_from_rows([
        ".....B",
        "....B.",
        "...B..",
        "......",
        "......",
        "......",
    ])
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert matches[0].piece is PieceType.BISHOP
    assert matches[0].positions == ((0, 5), (1, 4), (2, 3))


def test_pawn_cluster_is_found():
    board = board_from_rows([
        "......",
        "......",
        "......",
        "......",
        "....PP",
        "....PP",
    ])
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert matches[0].piece is PieceType.PAWN


def test_rows_claim_tiles_before_columns():
    board = board_from_rows([
        ".R....",
        ".R....",
        "RRR...",
        ".R....",
        "......",
        "......",
    ])
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert matches[0].positions == ((2, 0), (2, 1), (2, 2))


def test_column_run_crossing_a_claimed_row_is_dropped_whole():
    board = board_from_rows([
        ".R....",
        ".R....",
        "RRR...",
        ".R....",
        ".R....",
        ".R....",
    ])
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert matches[0].positions == ((2, 0), (2, 1), (2, 2))
    # The unclaimed rows below the crossing do not form a match of their own.
    assert all((3, 1) not in m.positions for m in matches)


def test_disjoint_matches_are_all_returned_in_scan_order():
    board = board_from_rows([
        "RRR...",
        "......",
        "B.....",
        ".B..PP",
        "..B.PP",
        "......",
    ])
    pieces = [m.piece for m in find_all_patterns(board)]
    assert pieces == [PieceType.ROOK, PieceType.BISHOP, PieceType.PAWN]


def test_obstacle_holding_a_piece_takes_part_in_matches():
    board = board_from_rows(
        [
            "RRR...",
            "......",
            "......",
            "......",
            "......",
            "......",
        ],
        obstacles={(0, 0): (ObstacleKind.ICE, 1)},
    )
    matches = find_all_patterns(board)
    assert len(matches) == 1
    assert (0, 0) in matches[0].positions


def test_first_pattern_matches_full_scan_head():
    board = board_from_rows(ROOK_SCENARIO)
    first = find_first_pattern(board)
    assert first == find_all_patterns(board)[0]
    assert find_first_pattern(board_from_rows(filler_rows())) is None


def test_potential_pattern_tiles_are_same_piece_neighbours():
    board = board_from_rows(
        [
            "R.R...",
            ".R....",
            "RBR...",
            "......",
            "......",
            "......",
        ],
        obstacles={(2, 2): (ObstacleKind.CRATE, 2)},
    )
    centre = board.grid[1][1]
    found = find_potential_pattern_tiles(board, centre)
    assert found == {"rook-0-0", "rook-0-2", "rook-2-0"}
