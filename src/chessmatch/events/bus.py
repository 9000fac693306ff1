from blinker import Signal
from typing import Dict


class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else holds alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# PLAYER INPUT
# ============================================================================
EVENT_SWAP_REQUEST = "swap_request"                # payload: src=(r,c), dst=(r,c)
EVENT_SELECTION_SUBMIT = "selection_submit"        # payload: positions=[(r,c),...]
EVENT_HINT_REQUEST = "hint_request"                # payload: none
EVENT_LEVEL_RESTART = "level_restart"              # payload: level=LevelConfig|None


# ============================================================================
# BOARD RESOLUTION
# ============================================================================
EVENT_MOVE_REJECTED = "move_rejected"              # payload: reason=str, kind=str ("swap"|"selection")
EVENT_MATCH_FOUND = "match_found"                  # payload: piece=PieceType, positions=[(r,c),...], size=int, depth=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, tiles_cleared=int
EVENT_CASCADE_CAPPED = "cascade_capped"            # payload: iterations=int
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: reason=str
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, board=Board


# ============================================================================
# HINTS
# ============================================================================
EVENT_HINT_FOUND = "hint_found"                    # payload: src=(r,c), dst=(r,c)


# ============================================================================
# SCORE & LEVEL FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, calculation=ScoreCalculation
EVENT_GOAL_PROGRESS = "goal_progress"              # payload: progress=int, target=int, complete=bool
EVENT_LEVEL_STARTED = "level_started"              # payload: level_id=int, moves_left=int
EVENT_LEVEL_WON = "level_won"                      # payload: level_id=int, score=int, moves_left=int
EVENT_LEVEL_LOST = "level_lost"                    # payload: level_id=int, score=int
