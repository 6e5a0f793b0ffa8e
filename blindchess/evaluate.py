"""
Static evaluation: material count with a penalty for being in check.

The search needs a number for every leaf position so it can compare moves.
This evaluation is intentionally simple. It counts material, recognises the
decisive outcomes (checkmate, draw), and nudges the score against a side
that is currently in check.

Two perspectives are involved:
- Absolute: positive favours White, negative favours Black. This is the
  natural frame for counting material and is what ``evaluate_absolute``
  returns.
- Side to move: positive means the side about to move is ahead. This is the
  negamax convention, and ``evaluate`` returns it by negating the absolute
  score when Black is to move.

A checkmated side to move therefore always gets -CHECKMATE_SCORE from
``evaluate``, whichever colour it is.
"""

import chess

from blindchess import rules
from blindchess.constants import (
    CHECK_PENALTY,
    CHECKMATE_SCORE,
    DRAW_SCORE,
    PIECE_VALUES,
)


def material_balance(board: chess.Board) -> int:
    """Sum of piece values, White pieces positive and Black pieces negative."""
    score = 0
    for piece in board.piece_map().values():
        value = PIECE_VALUES[piece.piece_type]
        score += value if piece.color == chess.WHITE else -value
    return score


def evaluate_absolute(board: chess.Board) -> int:
    """
    Centipawn evaluation from White's point of view.

    Args:
        board: The position to score. Not modified.

    Returns:
        -CHECKMATE_SCORE if White is mated, +CHECKMATE_SCORE if Black is
        mated, DRAW_SCORE for any draw, otherwise the material balance with
        CHECK_PENALTY charged to a side in check.
    """
    white_to_move = rules.side_to_move(board) == chess.WHITE

    if rules.is_checkmate(board):
        return -CHECKMATE_SCORE if white_to_move else CHECKMATE_SCORE
    if rules.is_draw(board):
        return DRAW_SCORE

    score = material_balance(board)

    if rules.in_check(board):
        score += -CHECK_PENALTY if white_to_move else CHECK_PENALTY

    return score


def evaluate(board: chess.Board) -> int:
    """
    Centipawn evaluation from the side to move's perspective.

    Pure function of the position: no randomness and no mutation.

    Example:
        >>> import chess
        >>> evaluate(chess.Board())
        0
    """
    score = evaluate_absolute(board)
    return score if rules.side_to_move(board) == chess.WHITE else -score
