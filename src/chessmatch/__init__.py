"""Chess-themed tile-matching puzzle engine.

The board engine is a set of pure functions over immutable ``Board``
snapshots; ``chessmatch.world`` wires them into an esper world driven by a
blinker event bus for a running level session.
"""
from chessmatch.components.board import Board
from chessmatch.components.match import Coordinate, Match, Move
from chessmatch.components.tile import PieceType, Tile
from chessmatch.components.tile_factory import TileFactory
from chessmatch.systems.board_generator import generate_board
from chessmatch.systems.board_ops import apply_move
from chessmatch.systems.goal_tracker import compute_goal_progress, compute_goal_target, is_goal_complete
from chessmatch.systems.hints import find_hint_swap
from chessmatch.systems.match_finder import find_all_patterns
from chessmatch.systems.scoring import ScoreCalculation, calculate_match_score, calculate_score
from chessmatch.systems.stabilization import StabilizationReport, run_stabilization

__all__ = [
    "Board",
    "Coordinate",
    "Match",
    "Move",
    "PieceType",
    "ScoreCalculation",
    "StabilizationReport",
    "Tile",
    "TileFactory",
    "apply_move",
    "calculate_match_score",
    "calculate_score",
    "compute_goal_progress",
    "compute_goal_target",
    "find_all_patterns",
    "find_hint_swap",
    "generate_board",
    "is_goal_complete",
    "run_stabilization",
]
