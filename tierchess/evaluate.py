"""
Static position evaluation: material + piece-square tables + mobility + check.

Every score returned by this module is from White's perspective: positive
means White is better, negative means Black is better. The hard tier's
minimax search relies on that convention (White maximises, Black minimises);
code that wants a score for a particular side goes through score_for().

Score components, in order of magnitude:
    1. Checkmate / draw sentinels (±1000 / 0) short-circuit everything else.
    2. Material in pawn units (queen = 9).
    3. Piece-square bonuses, scaled so a single entry stays under a pawn.
    4. Mobility of the side to move.
    5. A small penalty for the side currently in check.
"""

import chess

from tierchess.config import DEFAULT_CONFIG, EngineConfig
from tierchess.constants import CHECKMATE_SCORE, DRAW_SCORE, PIECE_VALUES, PST


def is_draw(board: chess.Board) -> bool:
    """
    Draw by rule, excluding stalemate.

    Covers insufficient material, the fifty-move rule and threefold
    repetition. Only claims that are cheap to test are included: python-chess's
    can_claim_threefold_repetition() walks every legal move and is far too
    slow to call at search leaves.
    """
    return (
        board.is_insufficient_material()
        or board.halfmove_clock >= 100
        or board.is_repetition(3)
    )


def material_balance(board: chess.Board) -> int:
    """Material difference in pawn units, White minus Black."""
    score = 0
    for piece_type, value in PIECE_VALUES.items():
        score += value * len(board.pieces(piece_type, chess.WHITE))
        score -= value * len(board.pieces(piece_type, chess.BLACK))
    return score


def evaluate(board: chess.Board, config: EngineConfig | None = None) -> float:
    """
    Score a position from White's perspective.

    Args:
        board:  The position to score. Not modified.
        config: Evaluation weights; the defaults when omitted.

    Returns:
        -CHECKMATE_SCORE if White is mated, +CHECKMATE_SCORE if Black is
        mated, DRAW_SCORE for stalemate and rule draws, otherwise the sum of
        material, positional, mobility and check terms.

    Example:
        >>> import chess
        >>> evaluate(chess.Board())  # symmetric start, White to move
        2.0
    """
    cfg = config or DEFAULT_CONFIG

    # One move generation serves both terminal detection and mobility.
    mobility = board.legal_moves.count()
    in_check = board.is_check()

    if mobility == 0:
        if in_check:
            # The side to move is the side that has been mated.
            return -CHECKMATE_SCORE if board.turn == chess.WHITE else CHECKMATE_SCORE
        return DRAW_SCORE
    if is_draw(board):
        return DRAW_SCORE

    material = 0
    positional = 0
    for sq, piece in board.piece_map().items():
        table = PST[piece.piece_type]
        if piece.color == chess.WHITE:
            material += PIECE_VALUES[piece.piece_type]
            positional += table[sq ^ 56]
        else:
            material -= PIECE_VALUES[piece.piece_type]
            positional -= table[sq]

    side = 1 if board.turn == chess.WHITE else -1
    score = material + positional * cfg.positional_scale
    score += side * cfg.mobility_weight * mobility
    if in_check:
        score -= side * cfg.check_penalty
    return score


def score_for(color: chess.Color, board: chess.Board, config: EngineConfig | None = None) -> float:
    """Evaluation from the given side's perspective."""
    score = evaluate(board, config)
    return score if color == chess.WHITE else -score
