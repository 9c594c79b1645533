import chess

from tierchess.classify import classify, classify_move, count_attackers, is_hanging


def _classify(fen: str, uci: str):
    return classify_move(chess.Board(fen), chess.Move.from_uci(uci))


def test_capture_records_victim_and_center() -> None:
    info = _classify("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1", "e4d5")
    assert info.is_capture
    assert info.captured_kind == chess.PAWN
    assert info.piece_kind == chess.PAWN
    assert info.controls_center
    assert not info.gives_check


def test_en_passant_counts_as_pawn_capture() -> None:
    info = _classify("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2", "e5d6")
    assert info.is_capture
    assert info.captured_kind == chess.PAWN


def test_quiet_move_is_not_a_capture() -> None:
    info = _classify(chess.STARTING_FEN, "e2e4")
    assert not info.is_capture
    assert info.captured_kind is None
    assert info.controls_center


def test_check_and_checkmate_flags() -> None:
    check = _classify("4k3/8/8/8/8/8/8/R3K3 w - - 0 1", "a1a8")
    assert check.gives_check
    assert not check.gives_checkmate

    mate = _classify("k7/8/1K6/8/8/8/8/7R w - - 0 1", "h1h8")
    assert mate.gives_check
    assert mate.gives_checkmate
    assert "checkmate" in mate.tags()
    assert "check" not in mate.tags()


def test_castle_and_promotion_flags() -> None:
    castle = _classify("4k3/8/8/8/8/8/8/4K2R w K - 0 1", "e1g1")
    assert castle.is_castle
    assert castle.piece_kind == chess.KING

    promo = _classify("4k3/P7/8/8/8/8/8/4K3 w - - 0 1", "a7a8q")
    assert promo.is_promotion
    assert promo.promotion_kind == chess.QUEEN
    assert "promotion" in promo.tags()


def test_development_only_counts_in_the_opening() -> None:
    early = _classify(chess.STARTING_FEN, "g1f3")
    assert early.develops_piece

    late = _classify("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 12", "g1f3")
    assert not late.develops_piece

    pawn = _classify(chess.STARTING_FEN, "d2d4")
    assert not pawn.develops_piece


def test_undefended_attacked_piece_is_hanging() -> None:
    board = chess.Board("4k3/8/3p4/4N3/8/8/8/4K3 w - - 0 1")
    assert is_hanging(board, chess.E5)


def test_defended_piece_attacked_only_by_heavier_piece_is_not_hanging() -> None:
    board = chess.Board("4k3/4r3/8/4N3/3P4/8/8/4K3 w - - 0 1")
    assert count_attackers(board, chess.BLACK, chess.E5) == 1
    assert count_attackers(board, chess.WHITE, chess.E5) == 1
    assert not is_hanging(board, chess.E5)


def test_outnumbered_by_cheap_attackers_is_hanging() -> None:
    board = chess.Board("4k3/8/3p1p2/4N3/3P4/8/8/4K3 w - - 0 1")
    assert count_attackers(board, chess.BLACK, chess.E5, max_value=3) == 2
    assert is_hanging(board, chess.E5)


def test_empty_squares_and_kings_never_hang() -> None:
    board = chess.Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    assert not is_hanging(board, chess.D4)
    assert not is_hanging(board, chess.E1)


def test_hangs_piece_flag_looks_at_destination() -> None:
    fen = "4k3/8/3p4/8/8/5N2/8/4K3 w - - 0 1"
    assert _classify(fen, "f3e5").hangs_piece
    assert not _classify(fen, "f3d4").hangs_piece


def test_classification_is_idempotent_and_pure() -> None:
    before = chess.Board("r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4")
    move = chess.Move.from_uci("f3e5")
    after = before.copy()
    after.push(move)
    fen_before, fen_after = before.fen(), after.fen()

    first = classify(before, move, after)
    second = classify(before, move, after)

    assert first == second
    assert before.fen() == fen_before
    assert after.fen() == fen_after
