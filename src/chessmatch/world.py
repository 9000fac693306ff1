import random

from esper import World

from chessmatch.components.board import Board
from chessmatch.components.board_state import BoardState
from chessmatch.components.level import LevelConfig
from chessmatch.components.level_state import LevelState
from chessmatch.components.progress_baseline import ProgressBaseline
from chessmatch.components.score_state import ScoreState
from chessmatch.components.tile_factory import TileFactory
from chessmatch.events.bus import EventBus, EVENT_LEVEL_STARTED
from chessmatch.systems.board_generator import generate_level_board
from chessmatch.systems.goal_tracker import initial_obstacle_counts, initial_token_counts
from chessmatch.systems.session_utils import get_session_entity


def start_level(
    world: World,
    level: LevelConfig,
    *,
    board: Board | None = None,
    event_bus: EventBus | None = None,
) -> int:
    """(Re)build the session entity for ``level`` and return it.

    A fresh board is generated through the world's tile factory unless one is
    supplied. Moves, score and the goal baseline all start over.
    """
    factory: TileFactory = getattr(world, "tile_factory")
    if board is None:
        board = generate_level_board(level, factory)
    baseline = ProgressBaseline(
        obstacles=initial_obstacle_counts(level),
        tokens=initial_token_counts(level),
    )
    session = get_session_entity(world)
    if session is not None:
        world.delete_entity(session, immediate=True)
    session = world.create_entity(
        BoardState(board=board),
        LevelState(level=level, moves_left=level.move_limit),
        ScoreState(),
        baseline,
    )
    if event_bus is not None:
        event_bus.emit(EVENT_LEVEL_STARTED, level_id=level.id, moves_left=level.move_limit)
    return session


def create_world(
    event_bus: EventBus,
    level: LevelConfig | None = None,
    *,
    board: Board | None = None,
    rng: random.Random | None = None,
    factory: TileFactory | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "tile_factory", factory or TileFactory(getattr(world, "random")))
    setattr(world, "event_bus", event_bus)

    start_level(world, level or LevelConfig(), board=board)
    return world
