"""
Engine constants: piece values, sentinel scores and strength settings.

All tunable numbers live here so the rest of the engine never introduces
magic numbers. Changing any of them changes how the strength dial feels,
because noise is added on the same centipawn scale as these values.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 20_000  # Both kings are always on the board, so they cancel out

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
# Integer scores keep alpha-beta comparisons exact. The noise range
# (21 - level) is calibrated against this checkmate scale.

CHECKMATE_SCORE: int = 10_000
DRAW_SCORE: int = 0

# Applied against the side to move when it is in check.
CHECK_PENALTY: int = 50

# Search window bounds. Larger than any reachable evaluation.
INFINITY: int = 1_000_000

# ---------------------------------------------------------------------------
# Strength dial
# ---------------------------------------------------------------------------
# depth = min(MAX_SEARCH_DEPTH, level // LEVELS_PER_PLY + 1)
# noise = uniform [0, NOISE_BASE - level)

MIN_STRENGTH: int = 1
MAX_STRENGTH: int = 20
DEFAULT_STRENGTH: int = 5

MAX_SEARCH_DEPTH: int = 3
LEVELS_PER_PLY: int = 5
NOISE_BASE: int = 21

# Menu presets offered by the trainer, with their approximate Elo label.
STRENGTH_PRESETS: dict[int, str] = {
    1:  "Beginner (400)",
    3:  "Easy (800)",
    5:  "Medium (1200)",
    10: "Advanced (1600)",
    15: "Strong (2000)",
    20: "Maximum (2400+)",
}
