"""
Bounded search for the hard tier: minimax with alpha-beta pruning.

Scores come from tierchess.evaluate and are therefore always from White's
perspective, so this is classic two-sided minimax rather than negamax: White
nodes maximise, Black nodes minimise, and the [alpha, beta] window is passed
down unchanged (never negated).

Cost control, in order of importance:

1. Fixed depth. The default is 2 plies; python-chess move generation is pure
   Python, and every leaf evaluation generates the leaf's legal moves for the
   mobility term.

2. Move ordering. Mates and checks, then captures (MVV-LVA), then promotions
   are searched first so alpha-beta finds its cutoffs early.

3. Branching cap. Interior nodes only look at the first `branching_cap`
   ordered moves. This is an accuracy/performance trade-off: a quiet reply
   that ranks below the cap is invisible to the search. The root always
   searches every legal move.

4. Deadline. An optional wall-clock budget and a cancellation callable are
   checked between root moves. When either fires, the best root move found
   so far is returned, so an interrupted search still produces a legal move.

Nothing survives a call: the leaf cache and node counter live in a
SearchState created per search() invocation.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable

import chess
import chess.polyglot

from tierchess.classify import captured_piece_type
from tierchess.config import DEFAULT_CONFIG, EngineConfig
from tierchess.constants import MATE_THRESHOLD, PIECE_VALUES
from tierchess.evaluate import evaluate, is_draw

_log = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Outcome of one search.

    Attributes:
        move:      Best root move, or None when the root has no legal moves.
        score:     Minimax value of `move` from White's perspective.
        depth:     Depth searched, in plies.
        nodes:     Positions visited, root excluded.
        completed: False when the deadline or cancellation cut the root loop
                   short; `move` is then the best of the moves searched.
    """

    move: chess.Move | None
    score: float
    depth: int
    nodes: int
    completed: bool = True


@dataclass
class SearchState:
    """
    Per-call search bookkeeping. Never shared between searches.

    Attributes:
        config:       Evaluation and search parameters.
        deadline:     time.monotonic() value after which no new root move is
                      started, or None.
        is_cancelled: Optional callable polled between root moves.
        node_count:   Positions visited so far.
        eval_cache:   Leaf evaluations keyed by Zobrist hash.
    """

    config: EngineConfig
    deadline: float | None = None
    is_cancelled: Callable[[], bool] | None = None
    node_count: int = 0
    eval_cache: dict[int, float] = field(default_factory=dict)

    def should_stop(self) -> bool:
        if self.is_cancelled is not None and self.is_cancelled():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline


def order_moves(board: chess.Board, moves: Iterable[chess.Move]) -> list[chess.Move]:
    """
    Sort moves so the most forcing ones are searched first.

    Score formula (higher first):
        checks:     +5_000
        captures:   +10_000 + 10 * victim_value - attacker_value  (MVV-LVA)
        promotions: +1_000 + promoted_value
        quiet:      0

    sorted() is stable, so moves with equal scores keep the order python-chess
    generated them in.
    """

    def _score(move: chess.Move) -> int:
        score = 0
        victim = captured_piece_type(board, move)
        if victim is not None:
            attacker = board.piece_type_at(move.from_square)
            score += 10_000 + 10 * PIECE_VALUES[victim] - PIECE_VALUES[attacker]
        if board.gives_check(move):
            score += 5_000
        if move.promotion:
            score += 1_000 + PIECE_VALUES[move.promotion]
        return score

    return sorted(moves, key=_score, reverse=True)


def _leaf_score(board: chess.Board, ply: int, state: SearchState) -> float:
    """Static evaluation with mate scores shortened by distance from the root."""
    key = chess.polyglot.zobrist_hash(board)
    score = state.eval_cache.get(key)
    if score is None:
        score = evaluate(board, state.config)
        state.eval_cache[key] = score

    # A mate found nearer the root scores further from zero, so the search
    # prefers the fastest mate and the slowest defeat.
    if score >= MATE_THRESHOLD:
        return score - ply
    if score <= -MATE_THRESHOLD:
        return score + ply
    return score


def minimax(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    ply: int,
    state: SearchState,
) -> float:
    """
    Minimax value of `board` searched `depth` plies deep.

    Args:
        board: Position to search. Modified via push/pop and always restored
               before returning; callers pass a private copy.
        depth: Remaining plies. At 0 the position is evaluated statically.
        alpha: Best score White is already guaranteed elsewhere.
        beta:  Best score Black is already guaranteed elsewhere.
        ply:   Distance from the root, for mate-distance scoring.
        state: Per-search bookkeeping.

    Returns:
        Score from White's perspective. Fail-soft: when a cutoff happens the
        returned value is a bound, not the exact minimax value.
    """
    state.node_count += 1

    if depth == 0:
        return _leaf_score(board, ply, state)

    moves = list(board.legal_moves)
    if not moves or is_draw(board):
        return _leaf_score(board, ply, state)

    ordered = order_moves(board, moves)[: state.config.branching_cap]

    if board.turn == chess.WHITE:
        best = -math.inf
        for move in ordered:
            board.push(move)
            score = minimax(board, depth - 1, alpha, beta, ply + 1, state)
            board.pop()
            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best

    best = math.inf
    for move in ordered:
        board.push(move)
        score = minimax(board, depth - 1, alpha, beta, ply + 1, state)
        board.pop()
        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def search(
    board: chess.Board,
    max_depth: int | None = None,
    config: EngineConfig | None = None,
    is_cancelled: Callable[[], bool] | None = None,
    root_moves: Iterable[chess.Move] | None = None,
) -> SearchResult:
    """
    Search every root move and return the best one.

    Args:
        board:        Root position. Not modified; the search runs on a copy.
        max_depth:    Depth in plies, at least 1. Defaults to
                      config.search_depth.
        config:       Evaluation and search parameters.
        is_cancelled: Optional callable polled before each root move. When it
                      returns True, the best move found so far is returned.
        root_moves:   Legal moves to consider at the root. Defaults to every
                      legal move; replies below the root are never restricted.

    Returns:
        A SearchResult. `move` is None only when there are no root moves.

    Raises:
        ValueError: If max_depth is smaller than 1.
    """
    cfg = config or DEFAULT_CONFIG
    depth = cfg.search_depth if max_depth is None else max_depth
    if depth < 1:
        raise ValueError(f"search depth must be at least 1, got {depth}")

    root = board.copy()
    moves = list(root.legal_moves if root_moves is None else root_moves)
    if not moves:
        return SearchResult(move=None, score=evaluate(root, cfg), depth=0, nodes=0)

    deadline = None
    if cfg.time_budget_ms is not None:
        deadline = time.monotonic() + cfg.time_budget_ms / 1000
    state = SearchState(config=cfg, deadline=deadline, is_cancelled=is_cancelled)

    maximizing = root.turn == chess.WHITE
    ordered = order_moves(root, moves)

    best_move: chess.Move | None = None
    best_score = -math.inf if maximizing else math.inf
    alpha, beta = -math.inf, math.inf
    completed = True

    for index, move in enumerate(ordered):
        if state.should_stop():
            completed = False
            _log.warning(
                "Search stopped after %d/%d root moves (depth=%d, nodes=%d)",
                index,
                len(ordered),
                depth,
                state.node_count,
            )
            break

        root.push(move)
        score = minimax(root, depth - 1, alpha, beta, 1, state)
        root.pop()

        # Strict comparison: the first move reaching the best score wins ties.
        if maximizing and score > best_score:
            best_move, best_score = move, score
            alpha = max(alpha, score)
        elif not maximizing and score < best_score:
            best_move, best_score = move, score
            beta = min(beta, score)

    if best_move is None:
        # Stopped before any root move was searched.
        best_move = ordered[0]
        best_score = evaluate(root, cfg)

    _log.debug(
        "search depth=%d nodes=%d best=%s score=%.2f completed=%s",
        depth,
        state.node_count,
        best_move.uci(),
        best_score,
        completed,
    )
    return SearchResult(
        move=best_move,
        score=best_score,
        depth=depth,
        nodes=state.node_count,
        completed=completed,
    )


def search_best_move(
    board: chess.Board,
    max_depth: int | None = None,
    config: EngineConfig | None = None,
    is_cancelled: Callable[[], bool] | None = None,
    root_moves: Iterable[chess.Move] | None = None,
) -> chess.Move | None:
    """Best move for the side to move, or None if there are no root moves."""
    return search(board, max_depth, config, is_cancelled, root_moves).move
