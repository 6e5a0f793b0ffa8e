"""
Console blind chess trainer.

Play a game against the engine by typing moves, with the board hidden or
shown. Every move is announced in words so the game can be followed without
looking, and the move history can be read back at any time.

Commands (one per line):
    <move>            A move in SAN (e4, Nf3, O-O, exd8=Q) or UCI (e2e4)
    undo              Take back the last move pair
    moves             Read the move history
    board             Print the board once, even when hidden
    hide / show       Hide or show the board after every move
    new               Start a new game
    level <1-20>      Set engine strength (clamped to the valid range)
    color white|black Choose a side; starts a new game
    help              List commands
    quit              Leave the trainer

Engine output goes to stdout; diagnostics go to stderr through logging so
they never mix with the game transcript.
"""

import argparse
import logging
import random
import sys
from typing import TextIO

import chess

from blindchess import narration
from blindchess.constants import DEFAULT_STRENGTH, STRENGTH_PRESETS
from blindchess.search import clamp_strength, select_move

_log = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands: <move> | undo | moves | board | hide | show | new | "
    "level <1-20> | color white|black | help | quit"
)


class TrainerHandler:
    """
    Stateful handler for one trainer session.

    Holds the game, the player's colour and the engine level. The command
    loop creates one instance and dispatches each input line to it.

    Attributes:
        board:        The game in progress. Its move stack is the history.
        player_color: The colour the human plays.
        level:        Engine strength, always within [1, 20].
        show_board:   Whether the diagram is printed after every move.
        rng:          Random source handed to the engine for its noise.
    """

    def __init__(
        self,
        level: int = DEFAULT_STRENGTH,
        player_color: chess.Color = chess.WHITE,
        show_board: bool = True,
        rng: random.Random | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.board: chess.Board = chess.Board()
        self.player_color: chess.Color = player_color
        self.level: int = clamp_strength(level)
        self.show_board: bool = show_board
        self.rng: random.Random = rng if rng is not None else random.Random()
        self.out: TextIO = out if out is not None else sys.stdout

    def _send(self, line: str) -> None:
        print(line, file=self.out, flush=True)

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_new(self) -> None:
        """Start a new game; the engine opens if the player has Black."""
        self.board = chess.Board()
        self._send("New game started")
        self._show()
        if self.board.turn != self.player_color:
            self.engine_move()

    def handle_move(self, text: str) -> bool:
        """
        Apply the player's move and let the engine reply.

        Returns:
            True if the move was accepted.
        """
        if self._game_over():
            self._send("The game is over. Type 'new' to play again.")
            return False
        if self.board.turn != self.player_color:
            self._send("It's not your turn!")
            return False

        move = self._parse_move(text)
        if move is None:
            self._send("Invalid move! Try again.")
            return False

        self._play(move)
        if not self._game_over():
            self.engine_move()
        return True

    def handle_undo(self) -> None:
        """
        Take back the last move, and one more if it is then the engine's turn.

        This normally removes the engine's reply together with the player's
        move, so the player is back on move. The browser trainer this replaces
        took the second move back only when it was already the player's turn,
        which left the engine on move after a plain undo.
        """
        if not self.board.move_stack:
            self._send("Nothing to undo")
            return
        self.board.pop()
        if self.board.move_stack and self.board.turn != self.player_color:
            self.board.pop()
        self._send("Move undone")
        self._show()

    def handle_help(self) -> None:
        self._send(HELP_TEXT)

    def handle_moves(self) -> None:
        self._send(narration.read_moves(narration.san_history(self.board)))

    def handle_board(self) -> None:
        self._send(narration.render_board(self.board))

    def handle_show(self, visible: bool) -> None:
        self.show_board = visible
        self._send("Board visible" if visible else "Board hidden")

    def handle_level(self, tokens: list[str]) -> None:
        """Set the engine level from ``level <n>``; out-of-range is clamped."""
        try:
            requested = int(tokens[0])
        except (IndexError, ValueError):
            self._send(f"Engine level is {self.level}. Presets: " + ", ".join(
                f"{n} {label}" for n, label in STRENGTH_PRESETS.items()
            ))
            return
        self.level = clamp_strength(requested)
        self._send(f"Engine level set to {self.level}")

    def handle_color(self, tokens: list[str]) -> None:
        """Switch sides and start a new game."""
        choice = tokens[0].lower() if tokens else ""
        if choice not in ("white", "black"):
            self._send("Choose 'color white' or 'color black'")
            return
        self.player_color = chess.WHITE if choice == "white" else chess.BLACK
        self._send(f"You play {choice}")
        self.handle_new()

    # -----------------------------------------------------------------------
    # Engine
    # -----------------------------------------------------------------------

    def engine_move(self) -> chess.Move | None:
        """Let the engine choose and play a move; returns it, or None."""
        result = select_move(self.board, self.level, self.rng)
        if result is None:
            _log.info("Engine has no legal move in %s", self.board.fen())
            return None
        _log.debug(
            "engine move=%s score=%d depth=%d nodes=%d",
            result.move.uci(),
            result.score,
            result.depth,
            result.nodes,
        )
        self._play(result.move)
        return result.move

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _parse_move(self, text: str) -> chess.Move | None:
        """
        Parse SAN first, then UCI; return None for anything illegal.

        Null moves ("--", "0000") parse without error but are not moves a
        player may make, so they are rejected too.
        """
        try:
            move = self.board.parse_san(text)
        except ValueError:
            try:
                move = chess.Move.from_uci(text)
            except ValueError:
                return None
        if not move or move not in self.board.legal_moves:
            return None
        return move

    def _play(self, move: chess.Move) -> None:
        """Push *move* and announce it along with any check/mate/draw."""
        announcement = narration.describe_move(self.board, move)
        san = self.board.san(move)
        self.board.push(move)
        self._send(f"{san}: {announcement}")
        message = narration.status_message(self.board)
        if message:
            self._send(message)
        self._show()

    def _game_over(self) -> bool:
        return narration.status_name(self.board) in ("checkmate", "draw")

    def _show(self) -> None:
        if self.show_board:
            self._send(narration.render_board(self.board))


def dispatch(handler: TrainerHandler, line: str) -> bool:
    """
    Run one input line against *handler*.

    Returns:
        False when the session should end, True otherwise.
    """
    tokens = line.split()
    if not tokens:
        return True
    command = tokens[0].lower()
    args = tokens[1:]

    if command == "quit":
        return False
    if command == "undo":
        handler.handle_undo()
    elif command == "moves":
        handler.handle_moves()
    elif command == "board":
        handler.handle_board()
    elif command == "hide":
        handler.handle_show(False)
    elif command == "show":
        handler.handle_show(True)
    elif command == "new":
        handler.handle_new()
    elif command == "level":
        handler.handle_level(args)
    elif command == "color":
        handler.handle_color(args)
    elif command == "help":
        handler.handle_help()
    else:
        handler.handle_move(tokens[0])
    return True


def run_trainer_loop(handler: TrainerHandler, stream: TextIO) -> None:
    """
    Main trainer loop: read lines from *stream* until "quit" or EOF.

    A failure inside one command is logged and the loop continues, so a bug
    in a single handler does not end the game.
    """
    handler.handle_new()
    for raw_line in stream:
        line = raw_line.strip()
        try:
            if not dispatch(handler, line):
                break
        except Exception:
            _log.exception("trainer: unhandled error for input %r", line)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Blind chess trainer")
    parser.add_argument("--level", type=int, default=DEFAULT_STRENGTH,
                        help="engine strength, 1-20 (default %(default)s)")
    parser.add_argument("--color", choices=("white", "black"), default="white",
                        help="side you play")
    parser.add_argument("--hide-board", action="store_true",
                        help="start with the board hidden")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed the engine's noise for reproducible games")
    parser.add_argument("--verbose", action="store_true",
                        help="log engine diagnostics to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = TrainerHandler(
        level=args.level,
        player_color=chess.WHITE if args.color == "white" else chess.BLACK,
        show_board=not args.hide_board,
        rng=random.Random(args.seed),
    )
    run_trainer_loop(handler, sys.stdin)


if __name__ == "__main__":
    main()
