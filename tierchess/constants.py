"""
Engine constants: piece values, score sentinels, piece-square tables and the
default values of every tunable heuristic.

Piece values use the conventional pawn-unit scale (1 pawn = 1.0) rather than
centipawns, so evaluation scores read directly as "pawns ahead". The
piece-square tables are written in centipawns and scaled down at evaluation
time (see EngineConfig.positional_scale), which keeps a single table entry
below the value of a pawn.

Anything that is a tuning knob rather than a rule of chess has its default
here and can be overridden through tierchess.config.EngineConfig.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (pawn units)
# ---------------------------------------------------------------------------
# The king has no trade value: losing it is expressed through checkmate
# detection, not through the material count.

PAWN_VALUE: int = 1
KNIGHT_VALUE: int = 3
BISHOP_VALUE: int = 3
ROOK_VALUE: int = 5
QUEEN_VALUE: int = 9
KING_VALUE: int = 0

PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Scores are from White's perspective. +CHECKMATE_SCORE means Black has been
# mated, -CHECKMATE_SCORE means White has been mated. Total material on the
# board never exceeds ~80 pawns, so the sentinel always dominates.

CHECKMATE_SCORE: float = 1000.0
DRAW_SCORE: float = 0.0

# Any score with an absolute value at or above this threshold is a mate score.
MATE_THRESHOLD: float = CHECKMATE_SCORE - 100

# ---------------------------------------------------------------------------
# Board geometry used by the move classifier
# ---------------------------------------------------------------------------

CENTER_SQUARES: frozenset[int] = frozenset({chess.D4, chess.E4, chess.D5, chess.E5})

DEVELOPING_PIECES: frozenset[int] = frozenset({chess.KNIGHT, chess.BISHOP})

# ---------------------------------------------------------------------------
# Piece-square tables (centipawns, White's point of view)
# ---------------------------------------------------------------------------
# Index 0 = a8, index 63 = h1 (visual board, rank 8 at top).
# White piece on python-chess square sq: use sq ^ 56 (flip rank).
# Black piece on square sq: use sq directly.

PAWN_TABLE: list[int] = [
     0,   0,   0,   0,   0,   0,   0,   0,
    50,  50,  50,  50,  50,  50,  50,  50,
    10,  10,  20,  30,  30,  20,  10,  10,
     5,   5,  10,  25,  25,  10,   5,   5,
     0,   0,   0,  20,  20,   0,   0,   0,
     5,  -5, -10,   0,   0, -10,  -5,   5,
     5,  10,  10, -20, -20,  10,  10,   5,
     0,   0,   0,   0,   0,   0,   0,   0,
]
KNIGHT_TABLE: list[int] = [
   -50, -40, -30, -30, -30, -30, -40, -50,
   -40, -20,   0,   0,   0,   0, -20, -40,
   -30,   0,  10,  15,  15,  10,   0, -30,
   -30,   5,  15,  20,  20,  15,   5, -30,
   -30,   0,  15,  20,  20,  15,   0, -30,
   -30,   5,  10,  15,  15,  10,   5, -30,
   -40, -20,   0,   5,   5,   0, -20, -40,
   -50, -40, -30, -30, -30, -30, -40, -50,
]
BISHOP_TABLE: list[int] = [
   -20, -10, -10, -10, -10, -10, -10, -20,
   -10,   0,   0,   0,   0,   0,   0, -10,
   -10,   0,   5,  10,  10,   5,   0, -10,
   -10,   5,   5,  10,  10,   5,   5, -10,
   -10,   0,  10,  10,  10,  10,   0, -10,
   -10,  10,  10,  10,  10,  10,  10, -10,
   -10,   5,   0,   0,   0,   0,   5, -10,
   -20, -10, -10, -10, -10, -10, -10, -20,
]
ROOK_TABLE: list[int] = [
     0,   0,   0,   0,   0,   0,   0,   0,
     5,  10,  10,  10,  10,  10,  10,   5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
    -5,   0,   0,   0,   0,   0,   0,  -5,
     0,   0,   0,   5,   5,   0,   0,   0,
]
QUEEN_TABLE: list[int] = [
   -20, -10, -10,  -5,  -5, -10, -10, -20,
   -10,   0,   0,   0,   0,   0,   0, -10,
   -10,   0,   5,   5,   5,   5,   0, -10,
    -5,   0,   5,   5,   5,   5,   0,  -5,
     0,   0,   5,   5,   5,   5,   0,  -5,
   -10,   5,   5,   5,   5,   5,   0, -10,
   -10,   0,   5,   0,   0,   0,   0, -10,
   -20, -10, -10,  -5,  -5, -10, -10, -20,
]
KING_TABLE: list[int] = [
   -30, -40, -40, -50, -50, -40, -40, -30,
   -30, -40, -40, -50, -50, -40, -40, -30,
   -30, -40, -40, -50, -50, -40, -40, -30,
   -30, -40, -40, -50, -50, -40, -40, -30,
   -20, -30, -30, -40, -40, -30, -30, -20,
   -10, -20, -20, -20, -20, -20, -20, -10,
    20,  20,   0,   0,   0,   0,  20,  20,
    20,  30,  10,   0,   0,  10,  30,  20,
]

PST: dict[int, list[int]] = {
    chess.PAWN:   PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
    chess.BISHOP: BISHOP_TABLE,
    chess.ROOK:   ROOK_TABLE,
    chess.QUEEN:  QUEEN_TABLE,
    chess.KING:   KING_TABLE,
}

# ---------------------------------------------------------------------------
# Evaluation weights (defaults for EngineConfig)
# ---------------------------------------------------------------------------

POSITIONAL_SCALE: float = 0.01   # centipawn table entry -> pawn units
MOBILITY_WEIGHT: float = 0.1     # per legal move of the side to move
CHECK_PENALTY: float = 0.5       # charged to the side currently in check

# Development bonuses only apply before this full-move number.
OPENING_MOVE_LIMIT: int = 10

# ---------------------------------------------------------------------------
# Difficulty tiers (defaults for EngineConfig)
# ---------------------------------------------------------------------------

EASY_RANDOM_PROBABILITY: float = 0.6
EASY_CAPTURE_PROBABILITY: float = 0.5

MEDIUM_BLUNDER_PROBABILITY: float = 0.2
MEDIUM_JITTER: float = 3.0

# Medium-tier move scoring weights.
MEDIUM_CAPTURE_WEIGHT: float = 10.0
MEDIUM_CHECK_BONUS: float = 5.0
MEDIUM_MATE_BONUS: float = 1000.0
MEDIUM_CENTER_BONUS: float = 3.0
MEDIUM_DEVELOPMENT_BONUS: float = 4.0
MEDIUM_HANGING_WEIGHT: float = 5.0

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# Depth is in plies. python-chess move generation is pure Python, so depth 2
# with a capped branching factor keeps the hard tier interactive; depth 3 is
# allowed but typically needs most of the time budget.

SEARCH_DEPTH: int = 2
MAX_SEARCH_DEPTH: int = 4

# Interior nodes look at no more than this many ordered moves. The root
# always searches every legal move.
BRANCHING_CAP: int = 12

# Wall-clock budget for the hard tier, checked between root moves.
TIME_BUDGET_MS: int = 750
