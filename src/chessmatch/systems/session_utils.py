from esper import World

from chessmatch.components.board_state import BoardState
from chessmatch.components.level_state import LevelState
from chessmatch.components.progress_baseline import ProgressBaseline
from chessmatch.components.score_state import ScoreState
from chessmatch.components.tile_factory import TileFactory


def get_session_entity(world: World) -> int | None:
    """Return the entity carrying the level session, if one exists."""
    for ent, _ in world.get_component(BoardState):
        return ent
    return None


def get_board_state(world: World) -> BoardState | None:
    ent = get_session_entity(world)
    if ent is None:
        return None
    return world.component_for_entity(ent, BoardState)


def get_level_state(world: World) -> LevelState | None:
    ent = get_session_entity(world)
    if ent is None or not world.has_component(ent, LevelState):
        return None
    return world.component_for_entity(ent, LevelState)


def get_or_create_score_state(world: World) -> ScoreState:
    """Return the session ScoreState, attaching a fresh one if absent."""
    ent = get_session_entity(world)
    if ent is None:
        raise LookupError("No level session in world")
    if not world.has_component(ent, ScoreState):
        world.add_component(ent, ScoreState())
    return world.component_for_entity(ent, ScoreState)


def get_or_create_baseline(world: World) -> ProgressBaseline:
    ent = get_session_entity(world)
    if ent is None:
        raise LookupError("No level session in world")
    if not world.has_component(ent, ProgressBaseline):
        world.add_component(ent, ProgressBaseline())
    return world.component_for_entity(ent, ProgressBaseline)


def get_tile_factory(world: World) -> TileFactory:
    """The factory stored on the world by ``create_world``; created on first use otherwise."""
    factory = getattr(world, "tile_factory", None)
    if factory is None:
        factory = TileFactory(getattr(world, "random", None))
        setattr(world, "tile_factory", factory)
    return factory
