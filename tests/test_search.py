import chess
import pytest

import tierchess.search
from tierchess.classify import is_hanging
from tierchess.config import EngineConfig
from tierchess.constants import MATE_THRESHOLD
from tierchess.search import order_moves, search, search_best_move

UNLIMITED = EngineConfig(time_budget_ms=None)

WHITE_MATE_IN_ONE = "k7/8/1K6/8/8/8/8/7R w - - 0 1"
BLACK_MATE_IN_ONE = "7r/8/8/8/8/1k6/8/K7 b - - 0 1"
WHITE_MATE_IN_TWO = "k7/8/2K5/8/8/8/8/7R w - - 0 1"
FREE_PAWN = "4k3/8/3p4/8/8/8/8/3QK3 w - - 0 1"
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def test_finds_mate_in_one_for_white() -> None:
    result = search(chess.Board(WHITE_MATE_IN_ONE), max_depth=2, config=UNLIMITED)
    assert result.move == chess.Move.from_uci("h1h8")
    assert result.score >= MATE_THRESHOLD
    assert result.completed


def test_finds_mate_in_one_for_black() -> None:
    result = search(chess.Board(BLACK_MATE_IN_ONE), max_depth=2, config=UNLIMITED)
    assert result.move == chess.Move.from_uci("h8h1")
    assert result.score <= -MATE_THRESHOLD


def test_finds_forced_mate_in_two() -> None:
    board = chess.Board(WHITE_MATE_IN_TWO)
    result = search(board, max_depth=3, config=UNLIMITED)
    assert result.score >= MATE_THRESHOLD

    # Every defence must allow a mate on the next move.
    board.push(result.move)
    for reply in list(board.legal_moves):
        board.push(reply)
        mates = []
        for move in list(board.legal_moves):
            board.push(move)
            mates.append(board.is_checkmate())
            board.pop()
        assert any(mates), f"no mate after {reply.uci()}"
        board.pop()


def test_returns_legal_move_and_leaves_board_untouched() -> None:
    board = chess.Board()
    board.push_uci("e2e4")
    fen = board.fen()

    move = search_best_move(board, max_depth=2, config=UNLIMITED)

    assert move in board.legal_moves
    assert board.fen() == fen
    assert len(board.move_stack) == 1


def test_no_legal_moves_returns_none() -> None:
    board = chess.Board("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
    result = search(board, max_depth=2, config=UNLIMITED)
    assert result.move is None
    assert result.nodes == 0


def test_rejects_depth_below_one() -> None:
    with pytest.raises(ValueError):
        search(chess.Board(), max_depth=0)


def test_cancelled_search_still_returns_a_legal_move() -> None:
    board = chess.Board()
    result = search(board, max_depth=3, config=UNLIMITED, is_cancelled=lambda: True)
    assert result.move in board.legal_moves
    assert not result.completed


def test_cancellation_between_root_moves_keeps_best_so_far() -> None:
    board = chess.Board(FREE_PAWN)
    calls = []

    def cancel_after_first() -> bool:
        calls.append(None)
        return len(calls) > 1

    result = search(board, max_depth=2, config=UNLIMITED, is_cancelled=cancel_after_first)
    # The capture is ordered first, so it is the only root move searched.
    assert result.move == chess.Move.from_uci("d1d6")
    assert not result.completed


def test_expired_time_budget_returns_best_root_move_so_far(monkeypatch) -> None:
    board = chess.Board(KIWIPETE)
    clock = iter([0.0, 0.0, 10.0])
    monkeypatch.setattr(tierchess.search.time, "monotonic", lambda: next(clock, 10.0))

    cfg = EngineConfig(search_depth=4, branching_cap=40, time_budget_ms=50)
    result = search(board, config=cfg)

    # Deadline set at 0.0, the first root move starts at 0.0, then time is up.
    assert not result.completed
    assert result.move in board.legal_moves
    assert result.move == order_moves(board, board.legal_moves)[0]


def test_generous_time_budget_completes() -> None:
    board = chess.Board(FREE_PAWN)
    result = search(board, max_depth=2, config=EngineConfig(time_budget_ms=30_000))
    assert result.completed


def test_root_moves_restrict_the_search() -> None:
    board = chess.Board(WHITE_MATE_IN_ONE)
    king_moves = [m for m in board.legal_moves if board.piece_type_at(m.from_square) == chess.KING]

    result = search(board, max_depth=2, config=UNLIMITED, root_moves=king_moves)

    assert result.move in king_moves
    assert result.completed


def test_captures_are_ordered_first() -> None:
    board = chess.Board(FREE_PAWN)
    ordered = order_moves(board, board.legal_moves)
    assert ordered[0] == chess.Move.from_uci("d1d6")
    assert sorted(m.uci() for m in ordered) == sorted(m.uci() for m in board.legal_moves)


def test_checks_ordered_before_quiet_moves() -> None:
    board = chess.Board("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    ordered = order_moves(board, board.legal_moves)
    assert board.gives_check(ordered[0])


def test_does_not_put_queen_en_prise() -> None:
    board = chess.Board(FREE_PAWN)
    move = search_best_move(board, max_depth=2, config=UNLIMITED)
    board.push(move)
    queen_square = next(iter(board.pieces(chess.QUEEN, chess.WHITE)))
    assert not is_hanging(board, queen_square)


def test_branching_cap_of_one_still_searches_every_root_move() -> None:
    board = chess.Board(WHITE_MATE_IN_ONE)
    result = search(board, max_depth=2, config=EngineConfig(branching_cap=1, time_budget_ms=None))
    assert result.move == chess.Move.from_uci("h1h8")
