from dataclasses import dataclass, field
from typing import Dict

from chessmatch.components.tile import ObstacleKind, TokenKind


@dataclass(slots=True)
class ProgressBaseline:
    """Obstacle and token counts captured when the level started."""
    obstacles: Dict[ObstacleKind, int] = field(default_factory=dict)
    tokens: Dict[TokenKind, int] = field(default_factory=dict)
