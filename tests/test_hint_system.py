import random

from chessmatch.components.level import LevelConfig
from chessmatch.events.bus import EventBus, EVENT_HINT_REQUEST, EVENT_HINT_FOUND, EVENT_BOARD_SHUFFLED
from chessmatch.systems.hint_system import HintSystem
from chessmatch.systems.session_utils import get_board_state
from chessmatch.world import create_world
from tests.helpers import board_from_rows

SWAP_BOARD = [
    "RRB...",
    "..R...",
    "......",
    "......",
    "......",
    "......",
]


def test_hint_request_publishes_swap_cells():
    bus = EventBus()
    world = create_world(bus, LevelConfig(), board=board_from_rows(SWAP_BOARD), rng=random.Random(0))
    HintSystem(world, bus)
    found = {}
    bus.subscribe(EVENT_HINT_FOUND, lambda sender, **kwargs: found.update(kwargs))
    bus.emit(EVENT_HINT_REQUEST)
    assert found["src"] == (0, 2)
    assert found["dst"] == (1, 2)
    assert found["related"] == []


def test_board_without_hint_is_reshuffled():
    rows = ["KR....", "......", "......", "......", "......", "......"]
    bus = EventBus()
    world = create_world(bus, LevelConfig(), board=board_from_rows(rows), rng=random.Random(0))
    HintSystem(world, bus)
    shuffled = []
    bus.subscribe(EVENT_BOARD_SHUFFLED, lambda sender, **kwargs: shuffled.append(kwargs))
    bus.emit(EVENT_HINT_REQUEST)
    assert shuffled == [{"reason": "no_hint"}]
    assert all(tile.piece is not None for tile in get_board_state(world).board.tiles())
