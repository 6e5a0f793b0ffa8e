"""
Search entry point: negamax with alpha-beta pruning and noisy root selection.

The engine plays at a strength chosen by one integer dial, the level (1-20).
The level controls two things:

1. Search depth: depth = min(3, level // 5 + 1), so levels 1-4 look one ply
   ahead, 5-9 two plies, and 10-20 three plies.

2. Noise: each root move's exact score gets a uniform random bonus drawn from
   [0, 21 - level). At level 1 that is up to 20 centipawns, enough to blur
   small differences; at level 20 it is under one centipawn, so only exact
   ties are broken randomly. A weak level still plays the best move whenever
   it is clearly best.

The noise is applied at the root only. ``negamax`` and ``score_root_moves`` are
deterministic, which keeps them testable on their own; ``select_move`` layers
the randomness on top.

Board handling:
    The search works on the caller's board in place. Every move it makes is
    applied through ``rules.applied``, which takes the move back on exit even
    if an exception escapes, so the board is always returned in the state it
    was received. Moves are searched in python-chess generation order; that
    order is also the tie-break between equal final scores.
"""

import logging
import random
from dataclasses import dataclass

import chess

from blindchess import rules
from blindchess.constants import (
    INFINITY,
    LEVELS_PER_PLY,
    MAX_SEARCH_DEPTH,
    MAX_STRENGTH,
    MIN_STRENGTH,
    NOISE_BASE,
)
from blindchess.evaluate import evaluate
from blindchess.rules import OracleInconsistency

_log = logging.getLogger(__name__)

__all__ = [
    "OracleInconsistency",
    "ScoredMove",
    "SearchState",
    "clamp_strength",
    "negamax",
    "noise_range",
    "score_root_moves",
    "search_depth",
    "select_move",
]


@dataclass
class SearchState:
    """
    Mutable bookkeeping for a single search call.

    Attributes:
        node_count:  Number of negamax nodes visited. Used by the benchmark
                     and logged after every move selection.
        use_pruning: When False, alpha-beta cutoffs are skipped and the search
                     becomes plain negamax. The returned scores are identical
                     either way; only the node count changes.
    """

    node_count: int = 0
    use_pruning: bool = True


@dataclass(frozen=True)
class ScoredMove:
    """
    A candidate move with its search results.

    Attributes:
        move:        The move, as produced by python-chess.
        score:       Exact negamax score in centipawns from the mover's
                     perspective. Higher is better for the side choosing.
        final_score: ``score`` plus the random noise used for selection.
                     Equal to ``score`` when no noise was applied.
        depth:       Search depth in plies, counting the root move itself.
        nodes:       Negamax nodes visited to produce this result. Only set
                     by ``select_move``, where it covers the whole call.
    """

    move: chess.Move
    score: int
    final_score: float
    depth: int
    nodes: int = 0


# ---------------------------------------------------------------------------
# Strength dial
# ---------------------------------------------------------------------------


def clamp_strength(level: int) -> int:
    """Force *level* into the supported range [MIN_STRENGTH, MAX_STRENGTH]."""
    return max(MIN_STRENGTH, min(int(level), MAX_STRENGTH))


def _check_strength(level: int) -> None:
    if isinstance(level, bool) or not isinstance(level, int):
        raise TypeError(f"strength level must be an int, got {type(level).__name__}")
    if not MIN_STRENGTH <= level <= MAX_STRENGTH:
        raise ValueError(
            f"strength level must be in [{MIN_STRENGTH}, {MAX_STRENGTH}], got {level}"
        )


def search_depth(level: int) -> int:
    """
    Return the search depth in plies for a strength level.

    Example:
        >>> [search_depth(n) for n in (1, 4, 5, 9, 10, 20)]
        [1, 1, 2, 2, 3, 3]
    """
    return min(MAX_SEARCH_DEPTH, level // LEVELS_PER_PLY + 1)


def noise_range(level: int) -> int:
    """Return the width of the uniform noise added to root scores."""
    return NOISE_BASE - level


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def negamax(
    board: chess.Board,
    depth: int,
    alpha: int,
    beta: int,
    state: SearchState | None = None,
) -> int:
    """
    Negamax search with alpha-beta pruning.

    Negamax uses the zero-sum property of chess: a position's value for one
    side is the negation of its value for the other. Every node maximises,
    and each child's score is negated on the way back up. The [alpha, beta]
    window is negated and swapped for the child for the same reason.

    Args:
        board: Current position. Modified in place and restored on return.
        depth: Remaining plies. At 0 the static evaluation is returned.
        alpha: Lower bound of the window (score we can already guarantee).
        beta:  Upper bound of the window (score the opponent will allow).
        state: Optional bookkeeping (node counter, pruning switch).

    Returns:
        Score in centipawns from the perspective of the side to move.

    Raises:
        OracleInconsistency: The position is not game over but has no legal
            moves, or a move could not be taken back.
    """
    if state is None:
        state = SearchState()
    state.node_count += 1

    if depth == 0 or rules.is_game_over(board):
        return evaluate(board)

    moves = rules.legal_moves(board)
    if not moves:
        raise OracleInconsistency(
            f"position is not game over but has no legal moves: {board.fen()}"
        )

    best_score = -INFINITY
    for move in moves:
        with rules.applied(board, move):
            score = -negamax(board, depth - 1, -beta, -alpha, state)

        if score > best_score:
            best_score = score
        if score > alpha:
            alpha = score

        # Beta cutoff: the opponent already has a better option elsewhere and
        # will never allow this line.
        if state.use_pruning and alpha >= beta:
            break

    return best_score


def score_root_moves(
    board: chess.Board,
    depth: int,
    state: SearchState | None = None,
) -> list[ScoredMove]:
    """
    Score every legal root move with a full-window search, without noise.

    Each root move is searched independently with the window
    (-INFINITY, +INFINITY), so every returned score is exact rather than a
    bound.

    Args:
        board: Position to search. Restored before returning.
        depth: Total depth in plies, including the root move. Must be >= 1.
        state: Optional bookkeeping shared across all root moves.

    Returns:
        One ScoredMove per legal move, in python-chess generation order.
        Empty when the side to move has no legal moves.
    """
    if depth < 1:
        raise ValueError(f"depth must be >= 1, got {depth}")
    if state is None:
        state = SearchState()

    scored: list[ScoredMove] = []
    for move in rules.legal_moves(board):
        with rules.applied(board, move):
            score = -negamax(board, depth - 1, -INFINITY, INFINITY, state)
        scored.append(ScoredMove(move=move, score=score, final_score=score, depth=depth))
    return scored


def select_move(
    board: chess.Board,
    level: int,
    rng: random.Random | None = None,
) -> ScoredMove | None:
    """
    Choose a move for the side to move at the given strength level.

    Every legal move is scored by ``score_root_moves`` at the level's depth.
    Each score then gets its own uniform noise in [0, 21 - level), and the
    candidate with the strictly highest noisy score wins. On equal noisy
    scores the move generated first is kept.

    Args:
        board: The current position. Searched in place, returned unchanged.
        level: Strength level in [1, 20]. Callers taking user input should
               pass it through ``clamp_strength`` first.
        rng:   Random source for the noise. Defaults to the ``random``
               module's shared generator; pass a seeded ``random.Random``
               for reproducible play.

    Returns:
        The selected ScoredMove, or None when there is no legal move
        (checkmate or stalemate). None is a game-over signal, not an error.

    Raises:
        ValueError: *level* is outside [1, 20].
        OracleInconsistency: The rules oracle contradicted itself.
    """
    _check_strength(level)
    draw = rng.random if rng is not None else random.random

    if not rules.legal_moves(board):
        _log.debug("No legal moves in %s", board.fen())
        return None

    depth = search_depth(level)
    spread = noise_range(level)
    state = SearchState()

    candidates = score_root_moves(board, depth, state)
    best = candidates[0]
    best_final = float("-inf")
    for candidate in candidates:
        final_score = candidate.score + draw() * spread
        if final_score > best_final:
            best = candidate
            best_final = final_score

    result = ScoredMove(
        move=best.move,
        score=best.score,
        final_score=best_final,
        depth=depth,
        nodes=state.node_count,
    )
    _log.debug(
        "level=%d depth=%d move=%s score=%d final=%.2f nodes=%d",
        level,
        depth,
        result.move.uci(),
        result.score,
        result.final_score,
        result.nodes,
    )
    return result
