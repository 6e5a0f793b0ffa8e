"""
Blind chess engine package.

This package implements the move-selection engine of the blind chess trainer:
a shallow negamax search with alpha-beta pruning over a material evaluation,
with calibrated noise so one strength dial covers beginner to near-master play.
Legality, check and draw detection are delegated to python-chess.

Modules:
    constants — Piece values, sentinel scores and strength settings
    rules     — Adapter mapping the rules-oracle contract onto chess.Board
    evaluate  — Static position evaluation (material + check penalty)
    search    — Negamax search, root scoring and noisy move selection
    narration — Text descriptions of moves, game status and move history
"""

from blindchess.search import (
    OracleInconsistency,
    ScoredMove,
    clamp_strength,
    search_depth,
    select_move,
)

__all__ = [
    "OracleInconsistency",
    "ScoredMove",
    "clamp_strength",
    "search_depth",
    "select_move",
]
