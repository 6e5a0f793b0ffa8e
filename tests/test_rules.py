import chess
import pytest

from blindchess import rules


def test_applied_takes_move_back():
    board = chess.Board()
    with rules.applied(board, chess.Move.from_uci("e2e4")):
        assert board.turn == chess.BLACK
        assert board.piece_at(chess.E4) is not None
    assert board == chess.Board()
    assert not board.move_stack


def test_applied_takes_move_back_on_error():
    board = chess.Board()
    with pytest.raises(KeyError):
        with rules.applied(board, chess.Move.from_uci("g1f3")):
            raise KeyError("boom")
    assert board == chess.Board()


def test_undo_on_empty_stack_is_an_oracle_inconsistency():
    with pytest.raises(rules.OracleInconsistency):
        rules.undo_move(chess.Board())


def test_fifty_move_rule_is_a_draw():
    board = chess.Board("4k3/8/8/8/8/8/4R3/4K3 w - - 100 80")
    assert rules.is_draw(board)
    assert rules.is_game_over(board)


def test_fifty_move_rule_waits_for_the_hundredth_half_move():
    board = chess.Board("4k3/8/8/8/8/8/4R3/4K3 w - - 99 80")
    assert not rules.is_draw(board)
    assert not rules.is_game_over(board)
    board.push_uci("e2d2")
    assert rules.is_draw(board)


def test_checkmate_is_game_over_but_not_draw():
    board = chess.Board("R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1")
    assert rules.is_checkmate(board)
    assert not rules.is_draw(board)
    assert rules.is_game_over(board)
    assert rules.legal_moves(board) == []


def test_start_position_is_not_over():
    board = chess.Board()
    assert not rules.is_game_over(board)
    assert len(rules.legal_moves(board)) == 20
    assert rules.side_to_move(board) == chess.WHITE
    assert not rules.in_check(board)
