"""
FastAPI web application for the blind chess engine.

Exposes the engine to a browser or speech front end:
    POST /api/move    engine move for a FEN position at a strength level
    POST /api/play    apply the player's move, then the engine's reply
    GET  /api/levels  strength presets for a level picker

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like engine search.
- Stateless per request: the client sends the full FEN each time; no server-
  side board state is kept between requests. Repetition draws therefore only
  count within a single request's search.
- Strength is clamped to [1, 20] on the way in, so the engine never sees an
  invalid level.
"""

import logging

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from blindchess import narration
from blindchess.constants import DEFAULT_STRENGTH, STRENGTH_PRESETS
from blindchess.search import ScoredMove, clamp_strength, search_depth, select_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Blind Chess", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Ask the engine to move.

    Fields:
        fen:   Full FEN string of the current position.
        level: Engine strength, clamped to [1, 20].
    """

    fen: str
    level: int = DEFAULT_STRENGTH

    @field_validator("level")
    @classmethod
    def clamp_level(cls, v: int) -> int:
        """Clamp level to the engine's supported range."""
        return clamp_strength(v)


class PlayRequest(MoveRequest):
    """
    Play the user's move, then ask the engine to reply.

    Fields:
        move: The player's move in SAN ("Nf3", "O-O") or UCI ("g1f3").
    """

    move: str


class MoveResponse(BaseModel):
    """
    One move that was played.

    Fields:
        move:      Move in UCI notation (e.g. "e2e4", "e7e8q").
        san:       Move in SAN, as it would be written in the score sheet.
        narration: Spoken description, e.g. "White pawn to e4".
        fen:       Board FEN after the move.
        status:    "checkmate", "draw", "check" or "ongoing" after the move.
        message:   Announcement for the status, e.g. "Check!", or "".
        score:     Engine score in centipawns from the mover's perspective
                   (engine moves only; 0 for player moves).
        depth:     Search depth used (engine moves only).
        nodes:     Nodes searched (engine moves only).
    """

    move: str
    san: str
    narration: str
    fen: str
    status: str
    message: str
    score: int = 0
    depth: int = 0
    nodes: int = 0


class PlayResponse(BaseModel):
    """
    Result of a player move and the engine's reply.

    Fields:
        player: The player's move.
        engine: The engine's reply, or None if the player's move ended the game.
        fen:    Board FEN after both moves.
        status: Game status after both moves.
    """

    player: MoveResponse
    engine: MoveResponse | None
    fen: str
    status: str


class LevelResponse(BaseModel):
    level: int
    label: str
    depth: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_board(fen: str) -> chess.Board:
    try:
        board = chess.Board(fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if narration.status_name(board) in ("checkmate", "draw"):
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {narration.status_message(board)}",
        )
    return board


def _play(board: chess.Board, move: chess.Move, result: ScoredMove | None = None) -> MoveResponse:
    """Push *move* onto *board* and describe it."""
    spoken = narration.describe_move(board, move)
    san = board.san(move)
    board.push(move)
    return MoveResponse(
        move=move.uci(),
        san=san,
        narration=spoken,
        fen=board.fen(),
        status=narration.status_name(board),
        message=narration.status_message(board),
        score=result.score if result else 0,
        depth=result.depth if result else 0,
        nodes=result.nodes if result else 0,
    )


def _engine_reply(board: chess.Board, level: int) -> MoveResponse:
    try:
        result = select_move(board, level)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", board.fen())
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s score=%d depth=%d nodes=%d level=%d fen=%s",
        result.move.uci(),
        result.score,
        result.depth,
        result.nodes,
        level,
        board.fen()[:40],
    )
    return _play(board, result.move, result)


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute and play the engine's move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: Engine failure.
    """
    board = _parse_board(request.fen)
    return _engine_reply(board, request.level)


@app.post("/api/play", response_model=PlayResponse)
def api_play(request: PlayRequest) -> PlayResponse:
    """
    Apply the player's move, then the engine's reply unless the game ended.

    Raises:
        HTTPException 400: Malformed FEN, game already over, or illegal move.
        HTTPException 500: Engine failure.
    """
    board = _parse_board(request.fen)

    try:
        move = board.parse_san(request.move)
    except ValueError:
        try:
            move = chess.Move.from_uci(request.move)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid move: {request.move}") from exc

    # parse_san accepts null moves ("--", "0000"); a player may not pass.
    if not move or move not in board.legal_moves:
        raise HTTPException(status_code=400, detail=f"Illegal move: {request.move}")

    player = _play(board, move)
    engine = None
    if player.status not in ("checkmate", "draw"):
        engine = _engine_reply(board, request.level)

    return PlayResponse(
        player=player,
        engine=engine,
        fen=board.fen(),
        status=narration.status_name(board),
    )


@app.get("/api/levels", response_model=list[LevelResponse])
def api_levels() -> list[LevelResponse]:
    """List the strength presets with their search depth."""
    return [
        LevelResponse(level=level, label=label, depth=search_depth(level))
        for level, label in STRENGTH_PRESETS.items()
    ]
