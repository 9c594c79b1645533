"""
Move classification: cheap tactical and positional labels for one move.

The labels feed the easy and medium tiers (capture preference, hanging-piece
avoidance, centre and development bonuses), the search's move ordering, and
any commentary layer built on top of the engine. Classification is advisory:
it never rejects a legal move.
"""

from dataclasses import dataclass

import chess

from tierchess.config import DEFAULT_CONFIG, EngineConfig
from tierchess.constants import CENTER_SQUARES, DEVELOPING_PIECES, PIECE_VALUES


@dataclass(frozen=True)
class MoveClassification:
    """
    Labels for a move played from a specific position.

    Attributes:
        piece_kind:      Type of the piece that moved.
        is_capture:      The move removes an enemy piece (en passant included).
        captured_kind:   Type of the captured piece, or None.
        gives_check:     The opponent is in check after the move.
        gives_checkmate: The opponent is checkmated after the move.
        is_castle:       The move is a castling move.
        is_promotion:    The move promotes a pawn.
        controls_center: The destination is d4, e4, d5 or e5.
        develops_piece:  A knight or bishop moved during the opening.
        hangs_piece:     The moved piece is hanging on its destination.
        promotion_kind:  Type the pawn promotes to, or None.
    """

    piece_kind: chess.PieceType
    is_capture: bool
    captured_kind: chess.PieceType | None
    gives_check: bool
    gives_checkmate: bool
    is_castle: bool
    is_promotion: bool
    controls_center: bool
    develops_piece: bool
    hangs_piece: bool
    promotion_kind: chess.PieceType | None = None

    def tags(self) -> tuple[str, ...]:
        """Short labels for the flags that are set, in a fixed order."""
        labels = []
        if self.is_capture:
            labels.append(f"capture:{chess.piece_symbol(self.captured_kind)}")
        if self.gives_checkmate:
            labels.append("checkmate")
        elif self.gives_check:
            labels.append("check")
        if self.is_castle:
            labels.append("castle")
        if self.is_promotion:
            labels.append("promotion")
        if self.controls_center:
            labels.append("center")
        if self.develops_piece:
            labels.append("development")
        if self.hangs_piece:
            labels.append("hanging")
        return tuple(labels)


def captured_piece_type(board: chess.Board, move: chess.Move) -> chess.PieceType | None:
    """Type of the piece `move` captures on `board`, or None for quiet moves."""
    if board.is_en_passant(move):
        return chess.PAWN
    victim = board.piece_at(move.to_square)
    if victim is None or victim.color == board.turn:
        return None
    return victim.piece_type


def count_attackers(board: chess.Board, color: chess.Color, square: chess.Square,
                    max_value: int | None = None) -> int:
    """Number of `color` pieces attacking `square`, optionally capped by value."""
    attackers = board.attackers(color, square)
    if max_value is None:
        return len(attackers)
    return sum(
        1 for sq in attackers
        if PIECE_VALUES[board.piece_type_at(sq)] <= max_value
    )


def is_hanging(board: chess.Board, square: chess.Square) -> bool:
    """
    Whether the piece on `square` can be won by the opponent.

    A piece is hanging when it is attacked and either has no defenders, or
    is attacked by more enemy pieces of lower-or-equal value than it has
    defenders. Pins and x-ray attacks are ignored. Empty squares and kings
    are never hanging.
    """
    piece = board.piece_at(square)
    if piece is None or piece.piece_type == chess.KING:
        return False

    enemy = not piece.color
    attackers = count_attackers(board, enemy, square)
    if attackers == 0:
        return False

    defenders = count_attackers(board, piece.color, square)
    if defenders == 0:
        return True

    value = PIECE_VALUES[piece.piece_type]
    return count_attackers(board, enemy, square, max_value=value) > defenders


def classify(before: chess.Board, move: chess.Move, after: chess.Board,
             config: EngineConfig | None = None) -> MoveClassification:
    """
    Classify `move`, played from `before` and resulting in `after`.

    Both boards are only read. The result depends on nothing but the three
    arguments (and the opening threshold in `config`), so classifying the
    same triple twice always yields equal results.
    """
    cfg = config or DEFAULT_CONFIG
    mover = before.piece_type_at(move.from_square)
    captured = captured_piece_type(before, move)
    gives_check = after.is_check()

    return MoveClassification(
        piece_kind=mover,
        is_capture=captured is not None,
        captured_kind=captured,
        gives_check=gives_check,
        gives_checkmate=gives_check and after.is_checkmate(),
        is_castle=before.is_castling(move),
        is_promotion=move.promotion is not None,
        controls_center=move.to_square in CENTER_SQUARES,
        develops_piece=(
            mover in DEVELOPING_PIECES
            and before.fullmove_number < cfg.opening_move_limit
        ),
        hangs_piece=is_hanging(after, move.to_square),
        promotion_kind=move.promotion,
    )


def classify_move(board: chess.Board, move: chess.Move,
                  config: EngineConfig | None = None) -> MoveClassification:
    """Apply `move` to a copy of `board` and classify it."""
    after = board.copy(stack=False)
    after.push(move)
    return classify(board, move, after, config)
