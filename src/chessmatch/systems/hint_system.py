from esper import World

from chessmatch.events.bus import (
    EventBus,
    EVENT_HINT_REQUEST,
    EVENT_HINT_FOUND,
    EVENT_BOARD_SHUFFLED,
    EVENT_BOARD_CHANGED,
)
from chessmatch.systems.hints import find_hint_swap
from chessmatch.systems.match_finder import find_potential_pattern_tiles
from chessmatch.systems.session_utils import get_board_state, get_level_state, get_tile_factory
from chessmatch.systems.shuffle import safe_shuffle


class HintSystem:
    """Answers hint requests for the session board.

    A found hint is published as EVENT_HINT_FOUND with both cells and the ids
    of neighbouring tiles that share the first tile's piece. With no hint at
    all the board is reshuffled instead.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_HINT_REQUEST, self.on_hint_request)

    def on_hint_request(self, sender, **kwargs):
        board_state = get_board_state(self.world)
        level_state = get_level_state(self.world)
        if board_state is None or level_state is None or not level_state.playing:
            return
        if board_state.resolving:
            return
        hint = find_hint_swap(board_state.board)
        if hint is not None:
            first, second = hint
            self.event_bus.emit(
                EVENT_HINT_FOUND,
                src=first.position,
                dst=second.position,
                related=sorted(find_potential_pattern_tiles(board_state.board, first)),
            )
            return
        board_state.board = safe_shuffle(
            board_state.board,
            get_tile_factory(self.world),
            level_state.level.allowed_pieces,
        )
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason="no_hint")
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="shuffle", board=board_state.board)
