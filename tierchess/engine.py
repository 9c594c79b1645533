"""
Engine facade: the single entry point the surrounding application calls.

choose_move() validates the position, guards the terminal case, dispatches to
the requested difficulty tier and makes sure a fault inside a tier never
reaches the caller as anything other than a legal move.

The facade is stateless. Every call builds its own random source (unless one
is injected), its own search state and its own copy of the board, so calls
for different games can run concurrently on worker threads.
"""

import logging
import random
import time
from enum import Enum
from typing import Callable

import chess

from tierchess.config import DEFAULT_CONFIG, EngineConfig
from tierchess.errors import InvalidPositionError
from tierchess.evaluate import is_draw
from tierchess.selector import select

_log = logging.getLogger(__name__)


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "str | Difficulty") -> "Difficulty":
        """Case-insensitive lookup; raises ValueError for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {choices})") from None


class GameStatus(str, Enum):
    PLAYING = "playing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


def parse_position(position: "chess.Board | str") -> chess.Board:
    """
    Turn a board or FEN string into a board the engine can interrogate.

    Raises:
        InvalidPositionError: The FEN does not parse, or python-chess reports
                              the resulting board as invalid.
    """
    if isinstance(position, chess.Board):
        board = position
    else:
        try:
            board = chess.Board(position)
        except ValueError as exc:
            raise InvalidPositionError(f"Invalid FEN: {exc}") from exc

    status = board.status()
    if status != chess.STATUS_VALID:
        raise InvalidPositionError(f"Invalid position {board.fen()!r}: {status!r}")
    return board


def game_status(position: "chess.Board | str") -> GameStatus:
    """Whether the game is still on, and if not, how it ended."""
    board = parse_position(position)
    if board.is_checkmate():
        return GameStatus.CHECKMATE
    if board.is_stalemate():
        return GameStatus.STALEMATE
    if is_draw(board):
        return GameStatus.DRAW
    return GameStatus.PLAYING


def choose_move(
    position: "chess.Board | str",
    difficulty: "Difficulty | str",
    *,
    rng: random.Random | None = None,
    config: EngineConfig | None = None,
    is_cancelled: Callable[[], bool] | None = None,
) -> chess.Move | None:
    """
    Return the engine's move for the side to move.

    Args:
        position:     A chess.Board (left unmodified) or a FEN string.
        difficulty:   Difficulty or its name ("easy", "medium", "hard").
        rng:          Random source for the easy/medium tiers and fallbacks.
                      Pass a seeded random.Random for reproducible play.
        config:       Tuning; DEFAULT_CONFIG when omitted.
        is_cancelled: Polled between root moves of the hard-tier search.

    Returns:
        A move from the position's legal moves, or None when there are no
        legal moves. Callers normally check game_status() first; the None
        return is a guard, not the main way games end.

    Raises:
        InvalidPositionError: The position cannot be interrogated.
        ValueError:           The difficulty name is unknown.
    """
    board = parse_position(position)
    level = Difficulty.parse(difficulty)
    cfg = config or DEFAULT_CONFIG
    rng = rng or random.Random()

    legal_moves = list(board.legal_moves)
    if not legal_moves:
        _log.debug("No legal moves in %s", board.fen())
        return None

    start = time.monotonic()
    try:
        move = select(board, legal_moves, level.value, rng, cfg, is_cancelled)
    except Exception:
        # Gameplay continuity outranks search quality.
        _log.exception("%s move selection failed for FEN=%s; playing a random move",
                       level.value, board.fen())
        move = rng.choice(legal_moves)

    if move not in legal_moves:
        _log.error("%s tier returned illegal move %s for FEN=%s", level.value, move, board.fen())
        move = rng.choice(legal_moves)

    elapsed_ms = (time.monotonic() - start) * 1000
    _log.info("difficulty=%s move=%s time_ms=%.1f fen=%s",
              level.value, move.uci(), elapsed_ms, board.fen()[:40])
    return move
