"""
Rules oracle: the small set of board operations the engine relies on.

The engine never inspects move generation or board internals itself. Every
question it asks about a position goes through the functions below, which
map onto python-chess. Keeping the mapping in one place pins down exactly
which draws count as terminal for the search.

Draw semantics:
    A position is a draw when it is stalemate, has insufficient mating
    material, has gone a hundred half-moves without a capture or pawn move
    (fifty-move rule), or has occurred three times. The trainer ends the
    game on all of these, so the search scores them as draws too.
"""

from contextlib import contextmanager
from typing import Iterator

import chess


class OracleInconsistency(RuntimeError):
    """
    The rules oracle contradicted itself during a search.

    Raised when a position reported as non-terminal has no legal moves, or
    when a move the engine applied cannot be taken back. Either way the
    engine can no longer trust the board state, so it does not try to
    recover.
    """


def legal_moves(board: chess.Board) -> list[chess.Move]:
    """Return all legal moves for the side to move, in python-chess order."""
    return list(board.legal_moves)


def is_checkmate(board: chess.Board) -> bool:
    return board.is_checkmate()


def is_draw(board: chess.Board) -> bool:
    """
    Return True for stalemate, insufficient material, the fifty-move rule
    or threefold repetition.
    """
    return (
        board.is_stalemate()
        or board.is_insufficient_material()
        or board.is_fifty_moves()
        or board.is_repetition(3)
    )


def is_game_over(board: chess.Board) -> bool:
    return is_checkmate(board) or is_draw(board)


def side_to_move(board: chess.Board) -> chess.Color:
    return board.turn


def in_check(board: chess.Board) -> bool:
    return board.is_check()


def undo_move(board: chess.Board) -> chess.Move:
    """
    Take back the most recently applied move.

    Raises:
        OracleInconsistency: The board has no move to take back.
    """
    try:
        return board.pop()
    except IndexError as exc:
        raise OracleInconsistency("cannot undo: move stack is empty") from exc


@contextmanager
def applied(board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """
    Apply *move* for the duration of a ``with`` block.

    The move is always taken back on exit, including when the block raises,
    so the board returns to exactly the state it had on entry.

    Example:
        >>> b = chess.Board()
        >>> with applied(b, chess.Move.from_uci("e2e4")):
        ...     b.turn == chess.BLACK
        True
        >>> b == chess.Board()
        True
    """
    board.push(move)
    try:
        yield board
    finally:
        undo_move(board)
