import random

import chess
import pytest

from blindchess.constants import CHECKMATE_SCORE, INFINITY
from blindchess.search import (
    OracleInconsistency,
    SearchState,
    clamp_strength,
    negamax,
    noise_range,
    score_root_moves,
    search_depth,
    select_move,
)

ONE_LEGAL_MOVE = "k7/8/8/8/8/7P/5q2/7K w - - 0 1"
MATE_IN_ONE = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
BACK_RANK_MATE = "R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
HANGING_QUEEN = "4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1"

POSITIONS = [
    chess.STARTING_FEN,
    "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
    "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1",
    HANGING_QUEEN,
    MATE_IN_ONE,
]


class ZeroNoise:
    """Random source that always draws 0.0, i.e. no noise at all."""

    def random(self) -> float:
        return 0.0


class LyingBoard(chess.Board):
    """A board whose rules never admit the game is over."""

    def is_checkmate(self) -> bool:
        return False

    def is_stalemate(self) -> bool:
        return False


# ---------------------------------------------------------------------------
# Strength dial
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "level,depth",
    [(1, 1), (4, 1), (5, 2), (9, 2), (10, 3), (14, 3), (15, 3), (20, 3)],
)
def test_search_depth(level, depth):
    assert search_depth(level) == depth


def test_search_depth_never_decreases():
    depths = [search_depth(level) for level in range(1, 21)]
    assert depths == sorted(depths)
    assert min(depths) >= 1
    assert max(depths) == 3


def test_noise_range_shrinks_with_level():
    assert noise_range(1) == 20
    assert noise_range(20) == 1
    assert all(noise_range(n) > noise_range(n + 1) for n in range(1, 20))


@pytest.mark.parametrize("raw,expected", [(-3, 1), (0, 1), (1, 1), (12, 12), (20, 20), (99, 20)])
def test_clamp_strength(raw, expected):
    assert clamp_strength(raw) == expected


@pytest.mark.parametrize("level", [0, 21, -1])
def test_select_move_rejects_out_of_range_level(level):
    board = chess.Board()
    with pytest.raises(ValueError):
        select_move(board, level)
    assert board == chess.Board()


# ---------------------------------------------------------------------------
# Negamax
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("fen", POSITIONS)
@pytest.mark.parametrize("depth", [1, 2, 3])
def test_pruning_does_not_change_the_score(fen, depth):
    board = chess.Board(fen)
    pruned = SearchState(use_pruning=True)
    full = SearchState(use_pruning=False)

    score_pruned = negamax(board, depth, -INFINITY, INFINITY, pruned)
    score_full = negamax(board, depth, -INFINITY, INFINITY, full)

    assert score_pruned == score_full
    assert pruned.node_count <= full.node_count
    assert board == chess.Board(fen)


def test_pruning_saves_nodes_from_the_start():
    board = chess.Board()
    pruned = SearchState()
    full = SearchState(use_pruning=False)
    negamax(board, 3, -INFINITY, INFINITY, pruned)
    negamax(board, 3, -INFINITY, INFINITY, full)
    assert pruned.node_count < full.node_count


def test_negamax_at_depth_zero_is_static_evaluation():
    board = chess.Board(HANGING_QUEEN)
    assert negamax(board, 0, -INFINITY, INFINITY) == -400


def test_negamax_sees_mate_in_one():
    board = chess.Board(MATE_IN_ONE)
    assert negamax(board, 1, -INFINITY, INFINITY) == CHECKMATE_SCORE


def test_negamax_on_mated_position_returns_mate_score():
    board = chess.Board(BACK_RANK_MATE)
    assert negamax(board, 3, -INFINITY, INFINITY) == -CHECKMATE_SCORE


def test_negamax_restores_board_and_history():
    board = chess.Board()
    board.push_uci("e2e4")
    board.push_uci("e7e5")
    before = board.fen()
    stack = list(board.move_stack)

    negamax(board, 3, -INFINITY, INFINITY)

    assert board.fen() == before
    assert board.move_stack == stack


def test_non_terminal_node_without_moves_is_an_inconsistency():
    board = LyingBoard(BACK_RANK_MATE)
    with pytest.raises(OracleInconsistency):
        negamax(board, 2, -INFINITY, INFINITY)


# ---------------------------------------------------------------------------
# Root scoring
# ---------------------------------------------------------------------------


def test_score_root_moves_keeps_generation_order():
    board = chess.Board()
    scored = score_root_moves(board, 1)
    assert [s.move for s in scored] == list(board.legal_moves)
    assert all(s.depth == 1 for s in scored)
    assert all(s.final_score == s.score for s in scored)


def test_score_root_moves_finds_the_capture():
    board = chess.Board(HANGING_QUEEN)
    scored = score_root_moves(board, 2)
    best = max(scored, key=lambda s: s.score)
    assert best.move.uci() == "d2d5"


def test_score_root_moves_rejects_zero_depth():
    with pytest.raises(ValueError):
        score_root_moves(chess.Board(), 0)


def test_score_root_moves_without_moves_is_empty():
    assert score_root_moves(chess.Board(STALEMATE), 2) == []


# ---------------------------------------------------------------------------
# Move selection
# ---------------------------------------------------------------------------


def test_start_position_at_full_strength():
    board = chess.Board()
    result = select_move(board, 20, random.Random(1))

    assert result is not None
    assert result.move in list(chess.Board().legal_moves)
    assert result.depth == 3
    assert result.nodes > 0
    assert board == chess.Board()
    assert not board.move_stack


@pytest.mark.parametrize("level", [1, 4, 5, 10, 20])
@pytest.mark.parametrize("seed", [0, 7, 42])
def test_single_legal_move_is_always_played(level, seed):
    board = chess.Board(ONE_LEGAL_MOVE)
    assert [m.uci() for m in board.legal_moves] == ["h3h4"]

    result = select_move(board, level, random.Random(seed))

    assert result is not None
    assert result.move.uci() == "h3h4"
    assert board.fen() == ONE_LEGAL_MOVE


@pytest.mark.parametrize("fen", [BACK_RANK_MATE, STALEMATE])
def test_no_legal_moves_returns_none(fen):
    board = chess.Board(fen)
    assert select_move(board, 10) is None
    assert board.fen() == fen


@pytest.mark.parametrize("level", [1, 5, 10, 20])
def test_mate_in_one_is_found_at_every_level(level):
    board = chess.Board(MATE_IN_ONE)
    result = select_move(board, level, random.Random(level))
    assert result is not None
    assert result.move.uci() == "a1a8"
    assert result.score == CHECKMATE_SCORE


def test_without_noise_first_best_move_wins():
    board = chess.Board()
    scored = score_root_moves(board, search_depth(10))
    best_score = max(s.score for s in scored)
    first_best = next(s.move for s in scored if s.score == best_score)

    result = select_move(board, 10, ZeroNoise())

    assert result is not None
    assert result.move == first_best
    assert result.final_score == result.score


@pytest.mark.parametrize("level", [1, 8, 15, 20])
def test_noise_is_bounded(level):
    board = chess.Board("r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4")
    result = select_move(board, level, random.Random(3))
    assert result is not None
    assert result.score <= result.final_score < result.score + noise_range(level)


def test_same_seed_same_move():
    board = chess.Board("r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4")
    first = select_move(board, 3, random.Random(99))
    second = select_move(board, 3, random.Random(99))
    assert first == second


def test_selected_move_is_always_legal():
    board = chess.Board("r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4")
    legal = set(board.legal_moves)
    rng = random.Random(5)
    for level in (1, 2, 3, 4, 6, 9):
        result = select_move(board, level, rng)
        assert result is not None
        assert result.move in legal


def test_board_is_restored_when_search_fails():
    board = LyingBoard(MATE_IN_ONE)
    with pytest.raises(OracleInconsistency):
        # Depth 2: after Ra8 the child is mated, but the lying board offers
        # no moves while claiming the game goes on.
        select_move(board, 5, ZeroNoise())
    assert board.fen() == MATE_IN_ONE
    assert not board.move_stack
