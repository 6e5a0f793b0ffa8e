#!/usr/bin/env python3
"""
Benchmark: nodes searched and time per move at each search depth.

Runs the noise-free root search on a fixed set of positions at depths 1-3,
with and without alpha-beta pruning. Both runs must agree on every root
score; the node counts show how much work pruning saves.

Usage: python3 tools/bench.py
"""
import os
import sys
import time

# Make 'blindchess' importable when run from a source checkout.
REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from blindchess.constants import MAX_SEARCH_DEPTH
from blindchess.search import SearchState, score_root_moves

# Fixed forever, so numbers stay comparable between versions.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, depth: int, use_pruning: bool) -> dict:
    """Search one position at a fixed depth and return metrics."""
    board = chess.Board(fen)
    state = SearchState(use_pruning=use_pruning)
    start = time.perf_counter()
    scored = score_root_moves(board, depth, state)
    elapsed_ms = max(1, int((time.perf_counter() - start) * 1000))
    best = max(scored, key=lambda s: s.score)
    return {
        "label": label,
        "move": best.move.uci(),
        "score": best.score,
        "scores": [s.score for s in scored],
        "nodes": state.node_count,
        "time_ms": elapsed_ms,
    }


def main() -> None:
    """Run all positions at every depth and print a summary table."""
    print(f"Blind chess engine benchmark — {sys.executable}")
    print()
    print(
        f"{'Position':<13} {'Depth':>5} {'Move':<7} {'Score':>6} "
        f"{'AB nodes':>9} {'Full nodes':>10} {'AB ms':>7} {'Full ms':>8}"
    )
    print("-" * 72)

    for depth in range(1, MAX_SEARCH_DEPTH + 1):
        for label, fen in POSITIONS:
            pruned = run_position(label, fen, depth, use_pruning=True)
            full = run_position(label, fen, depth, use_pruning=False)
            if pruned["scores"] != full["scores"]:
                print(f"MISMATCH at {label} depth {depth}: pruning changed root scores")
            print(
                f"{label:<13} {depth:>5} {pruned['move']:<7} {pruned['score']:>6} "
                f"{pruned['nodes']:>9,} {full['nodes']:>10,} "
                f"{pruned['time_ms']:>7,} {full['time_ms']:>8,}"
            )
        print("-" * 72)


if __name__ == "__main__":
    main()
