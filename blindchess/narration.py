"""
Plain-text narration for playing without looking at the board.

The trainer announces every move, the game status and, on request, the whole
move history. This module produces those sentences; turning them into speech
is left to whatever front end displays them.
"""

import chess

from blindchess import rules

PIECE_NAMES: dict[int, str] = {
    chess.PAWN: "pawn",
    chess.KNIGHT: "knight",
    chess.BISHOP: "bishop",
    chess.ROOK: "rook",
    chess.QUEEN: "queen",
    chess.KING: "king",
}

# White pieces use the outlined glyphs, Black pieces the filled ones.
PIECE_GLYPHS: dict[str, str] = {
    "K": "♔", "Q": "♕", "R": "♖", "B": "♗", "N": "♘", "P": "♙",
    "k": "♚", "q": "♛", "r": "♜", "b": "♝", "n": "♞", "p": "♟",
}


def color_name(color: chess.Color) -> str:
    return "White" if color == chess.WHITE else "Black"


def describe_move(board: chess.Board, move: chess.Move) -> str:
    """
    Describe *move* as it would be announced, e.g. "White knight to f3".

    Must be called before the move is pushed, while the moving piece is still
    on its origin square.
    """
    piece = board.piece_at(move.from_square)
    if piece is None:
        return f"{color_name(board.turn)} piece to {chess.square_name(move.to_square)}"
    name = PIECE_NAMES.get(piece.piece_type, "piece")
    return f"{color_name(piece.color)} {name} to {chess.square_name(move.to_square)}"


def status_name(board: chess.Board) -> str:
    """Return one of "checkmate", "draw", "check" or "ongoing"."""
    if rules.is_checkmate(board):
        return "checkmate"
    if rules.is_draw(board):
        return "draw"
    if rules.in_check(board):
        return "check"
    return "ongoing"


def status_message(board: chess.Board) -> str:
    """Return the announcement for the current position, or "" if none."""
    status = status_name(board)
    if status == "checkmate":
        winner = color_name(not board.turn)
        return f"Checkmate! {winner} wins!"
    if status == "draw":
        return "Game drawn!"
    if status == "check":
        return "Check!"
    return ""


def read_moves(history: list[str]) -> str:
    """
    Read out a SAN move history.

    Example:
        >>> read_moves(["e4", "e5", "Nf3"])
        'Move history: 1. e4, e5. 2. Nf3'
    """
    if not history:
        return "No moves yet"

    text = "Move history: "
    for i in range(0, len(history), 2):
        text += f"{i // 2 + 1}. {history[i]}"
        if i + 1 < len(history):
            text += f", {history[i + 1]}. "
    return text


def san_history(board: chess.Board) -> list[str]:
    """Return the SAN of every move played on *board*, replayed from its root."""
    replay = board.root()
    sans = []
    for move in board.move_stack:
        sans.append(replay.san(move))
        replay.push(move)
    return sans


def render_board(board: chess.Board) -> str:
    """Render the position as an 8x8 glyph diagram, rank 8 at the top."""
    lines = []
    for rank in range(7, -1, -1):
        cells = []
        for file in range(8):
            piece = board.piece_at(chess.square(file, rank))
            cells.append(PIECE_GLYPHS[piece.symbol()] if piece else "·")
        lines.append(f"{rank + 1} " + " ".join(cells))
    lines.append("  " + " ".join("abcdefgh"))
    return "\n".join(lines)
