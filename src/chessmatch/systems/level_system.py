from esper import World

from chessmatch.components.level import LevelConfig
from chessmatch.events.bus import EventBus, EVENT_LEVEL_RESTART, EVENT_BOARD_CHANGED
from chessmatch.systems.session_utils import get_board_state, get_level_state
from chessmatch.world import start_level


class LevelSystem:
    """Restarts the session on EVENT_LEVEL_RESTART, optionally with a different level."""
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_LEVEL_RESTART, self.on_level_restart)

    def on_level_restart(self, sender, **kwargs):
        level: LevelConfig | None = kwargs.get("level")
        if level is None:
            current = get_level_state(self.world)
            level = current.level if current is not None else LevelConfig()
        start_level(self.world, level, event_bus=self.event_bus)
        board_state = get_board_state(self.world)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="level_start", board=board_state.board)
