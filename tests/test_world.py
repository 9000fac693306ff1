import random

from chessmatch.components.board_state import BoardState
from chessmatch.components.level import LevelConfig, ObstaclePlacement
from chessmatch.components.level_state import GameStatus, LevelState
from chessmatch.components.progress_baseline import ProgressBaseline
from chessmatch.components.score_state import ScoreState
from chessmatch.components.tile import ObstacleKind
from chessmatch.events.bus import EventBus
from chessmatch.systems.match_finder import find_all_patterns
from chessmatch.systems.session_utils import get_session_entity
from chessmatch.world import create_world


def test_create_world_builds_one_session():
    level = LevelConfig(id=3, move_limit=12, obstacles=(ObstaclePlacement(ObstacleKind.CRATE, 2, 2),))
    world = create_world(EventBus(), level, rng=random.Random(1))
    session = get_session_entity(world)
    assert session is not None
    board = world.component_for_entity(session, BoardState).board
    assert find_all_patterns(board) == []
    assert board.grid[2][2].obstacle is ObstacleKind.CRATE
    level_state = world.component_for_entity(session, LevelState)
    assert level_state.moves_left == 12
    assert level_state.status is GameStatus.PLAYING
    assert world.component_for_entity(session, ScoreState).score == 0
    assert world.component_for_entity(session, ProgressBaseline).obstacles[ObstacleKind.CRATE] == 1


def test_same_rng_seed_gives_same_board():
    first = create_world(EventBus(), rng=random.Random(5))
    second = create_world(EventBus(), rng=random.Random(5))
    board_a = first.component_for_entity(get_session_entity(first), BoardState).board
    board_b = second.component_for_entity(get_session_entity(second), BoardState).board
    assert board_a == board_b
