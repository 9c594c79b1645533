"""
Difficulty tiers: pick one move from a non-empty list of legal moves.

    easy   - mostly random. Occasionally grabs a capture or avoids leaving the
             moved piece en prise, but blunders freely. That is the product
             requirement for a beginner opponent, not a defect.
    medium - one-ply heuristic scoring (captures, checks, mates, centre,
             development, hanging pieces) with random jitter, plus a fixed
             chance of playing a random move instead.
    hard   - bounded minimax search (tierchess.search).

All randomness comes from the `rng` argument, so a seeded random.Random makes
every tier reproducible.
"""

import random
from typing import Callable, Sequence

import chess

from tierchess.classify import MoveClassification, classify_move
from tierchess.config import DEFAULT_CONFIG, EngineConfig
from tierchess.constants import (
    MEDIUM_CAPTURE_WEIGHT,
    MEDIUM_CENTER_BONUS,
    MEDIUM_CHECK_BONUS,
    MEDIUM_DEVELOPMENT_BONUS,
    MEDIUM_HANGING_WEIGHT,
    MEDIUM_MATE_BONUS,
    PIECE_VALUES,
)
from tierchess.search import search_best_move


def select_easy(board: chess.Board, legal_moves: Sequence[chess.Move],
                rng: random.Random, config: EngineConfig) -> chess.Move:
    """Random move, else a random capture, else a move that leaves nothing hanging."""
    if rng.random() < config.easy_random_probability:
        return rng.choice(legal_moves)

    captures = [m for m in legal_moves if board.is_capture(m)]
    if captures and rng.random() < config.easy_capture_probability:
        return rng.choice(captures)

    safe = [m for m in legal_moves if not classify_move(board, m, config).hangs_piece]
    return rng.choice(safe) if safe else rng.choice(legal_moves)


def score_medium_move(classification: MoveClassification) -> float:
    """
    Deterministic part of the medium-tier score for one classified move.

    develops_piece is already restricted to the opening by the classifier.
    A hanging promotion is charged the value of the promoted piece, since
    that is what the opponent can take.
    """
    score = 0.0
    if classification.captured_kind is not None:
        score += MEDIUM_CAPTURE_WEIGHT * PIECE_VALUES[classification.captured_kind]
    if classification.gives_check:
        score += MEDIUM_CHECK_BONUS
    if classification.gives_checkmate:
        score += MEDIUM_MATE_BONUS
    if classification.controls_center:
        score += MEDIUM_CENTER_BONUS
    if classification.develops_piece:
        score += MEDIUM_DEVELOPMENT_BONUS
    if classification.hangs_piece:
        at_risk = classification.promotion_kind or classification.piece_kind
        score -= MEDIUM_HANGING_WEIGHT * PIECE_VALUES[at_risk]
    return score


def select_medium(board: chess.Board, legal_moves: Sequence[chess.Move],
                  rng: random.Random, config: EngineConfig) -> chess.Move:
    """Highest score_medium_move() plus jitter; ties go to the earlier move."""
    # Simulated human error: skip the evaluation entirely.
    if rng.random() < config.medium_blunder_probability:
        return rng.choice(legal_moves)

    best_move = legal_moves[0]
    best_score = -float("inf")
    for move in legal_moves:
        score = score_medium_move(classify_move(board, move, config))
        score += rng.uniform(0.0, config.medium_jitter)
        if score > best_score:
            best_move, best_score = move, score
    return best_move


def select_hard(board: chess.Board, legal_moves: Sequence[chess.Move],
                rng: random.Random, config: EngineConfig,
                is_cancelled: Callable[[], bool] | None = None) -> chess.Move:
    """Search result restricted to `legal_moves`; a random one if the search gives nothing."""
    move = search_best_move(board, config.search_depth, config, is_cancelled, legal_moves)
    if move is None or move not in legal_moves:
        return rng.choice(legal_moves)
    return move


def select(
    board: chess.Board,
    legal_moves: Sequence[chess.Move],
    difficulty: str,
    rng: random.Random | None = None,
    config: EngineConfig | None = None,
    is_cancelled: Callable[[], bool] | None = None,
) -> chess.Move:
    """
    Choose one of `legal_moves` according to `difficulty`.

    Args:
        board:        Position the moves belong to. Not modified.
        legal_moves:  Non-empty list of legal moves for `board`.
        difficulty:   "easy", "medium" or "hard" (a Difficulty works too).
        rng:          Random source; a fresh unseeded one when omitted.
        config:       Tier probabilities and search parameters.
        is_cancelled: Cancellation callable forwarded to the hard tier.

    Raises:
        ValueError: If `legal_moves` is empty or `difficulty` is unknown.
    """
    if not legal_moves:
        raise ValueError("select() needs at least one legal move")
    rng = rng or random.Random()
    cfg = config or DEFAULT_CONFIG

    if difficulty == "easy":
        return select_easy(board, legal_moves, rng, cfg)
    if difficulty == "medium":
        return select_medium(board, legal_moves, rng, cfg)
    if difficulty == "hard":
        return select_hard(board, legal_moves, rng, cfg, is_cancelled)
    raise ValueError(f"Unknown difficulty: {difficulty!r}")
