from dataclasses import dataclass, field
from typing import Dict, Optional

from chessmatch.components.tile import PieceType
from chessmatch.systems.scoring import ScoreCalculation


@dataclass(slots=True)
class ScoreState:
    """Cumulative rewards for the running level.

    stars/coins/xp accumulate the per-move values of every scored move;
    ``cleared_counts`` totals cleared tiles per piece type.
    """
    score: int = 0
    stars: int = 0
    coins: int = 0
    xp: int = 0
    last_calculation: Optional[ScoreCalculation] = None
    cleared_counts: Dict[PieceType, int] = field(default_factory=lambda: {piece: 0 for piece in PieceType})

    def add(self, calculation: ScoreCalculation) -> None:
        self.score += calculation.total_score
        self.stars += calculation.stars
        self.coins += calculation.coins
        self.xp += calculation.xp
        self.last_calculation = calculation
