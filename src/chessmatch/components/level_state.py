"""Per-session level status: which level, how many moves remain, won or lost."""
from dataclasses import dataclass
from enum import Enum, auto

from chessmatch.components.level import LevelConfig


class GameStatus(Enum):
    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(slots=True)
class LevelState:
    level: LevelConfig
    moves_left: int
    status: GameStatus = GameStatus.PLAYING

    @property
    def playing(self) -> bool:
        return self.status is GameStatus.PLAYING
