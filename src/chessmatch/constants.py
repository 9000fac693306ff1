from chessmatch.components.tile import ObstacleKind, PieceType

BOARD_SIZE = 6  # default side length of the square grid

DEFAULT_ALLOWED_PIECES = (
    PieceType.KNIGHT,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.PAWN,
)

# Loop caps. Hitting one is reported, never raised.
MAX_CASCADE_ITERATIONS = 20
MAX_BOARD_GENERATION_ATTEMPTS = 10
MAX_SHUFFLE_ATTEMPTS = 20
MAX_STABILIZATION_RESHUFFLES = 2
MAX_COLLAPSE_ITERATIONS = 64
REFILL_ITERATIONS_PER_ROW = 2  # refill cap is board size * this

# Piece selection bias.
PATTERN_REFILL_CHANCE = 0.15     # refill repeats the left neighbour's piece
PATTERN_CREATION_CHANCE = 0.5    # generator copies a neighbour to form pairs
CLUSTER_CREATION_CHANCE = 0.3    # generator seeds L / diagonal / line starts
MAX_PLACEMENT_ATTEMPTS = 16      # rejection sampling against 4-in-a-row

# Scoring.
BASE_SCORE_PER_TILE = 100
CASCADE_MULTIPLIER = 1.5
LONG_LINE_MULTIPLIER = 1.2
LONG_LINE_THRESHOLD = 4
OBSTACLE_BONUS = 50
TWO_STAR_THRESHOLD = 500
THREE_STAR_THRESHOLD = 1000
COIN_DIVISOR = 100
XP_DIVISOR = 50

DEFAULT_OBSTACLE_HITS = {
    ObstacleKind.ICE: 1,
    ObstacleKind.CRATE: 2,
    ObstacleKind.STONE: 3,
    ObstacleKind.VINE: 1,
    ObstacleKind.LOCK: 2,
    ObstacleKind.COBWEB: 1,
    ObstacleKind.FROZEN: 2,
}
