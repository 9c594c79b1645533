import chess

from tierchess.analysis import summarize_game
from tierchess.constants import CHECKMATE_SCORE
from tierchess.engine import GameStatus

SCHOLARS_MATE = ["e2e4", "e7e5", "d1h5", "b8c6", "f1c4", "g8f6", "h5f7"]


def _play(moves: list[str]) -> chess.Board:
    board = chess.Board()
    for uci in moves:
        board.push_uci(uci)
    return board


def test_scholars_mate_summary() -> None:
    board = _play(SCHOLARS_MATE)
    fen = board.fen()

    summary = summarize_game(board)

    assert summary.plies == 7
    assert summary.captures == 1
    assert summary.checks == 1
    assert summary.status is GameStatus.CHECKMATE
    assert summary.evaluations[-1] == CHECKMATE_SCORE
    assert summary.classifications[-1].gives_checkmate
    assert summary.biggest_swing()[0] == 6
    assert board.fen() == fen


def test_empty_game() -> None:
    summary = summarize_game(chess.Board())
    assert summary.plies == 0
    assert summary.capture_ratio == 0.0
    assert summary.biggest_swing() is None
    assert summary.status is GameStatus.PLAYING
