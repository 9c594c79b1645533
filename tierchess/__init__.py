"""
Tiered chess move engine.

Plays against a human at three difficulty levels. Easy and medium pick moves
from one-ply heuristics with deliberate randomness; hard runs a shallow
minimax search with alpha-beta pruning. python-chess supplies the rules.

Modules:
    constants - Piece values, score sentinels, piece-square tables, defaults
    config    - EngineConfig (validated tuning) and environment loading
    errors    - Exceptions surfaced to callers
    evaluate  - Static evaluation from White's perspective
    classify  - Per-move tactical/positional labels, hanging-piece test
    search    - Minimax with alpha-beta, move ordering, branching cap
    selector  - Easy / medium / hard move selection
    engine    - choose_move() facade, Difficulty, game_status()
    analysis  - Post-game summaries
"""

from tierchess.analysis import GameSummary, summarize_game
from tierchess.classify import MoveClassification, classify, classify_move
from tierchess.config import EngineConfig, load_config
from tierchess.engine import Difficulty, GameStatus, choose_move, game_status
from tierchess.errors import InvalidPositionError
from tierchess.evaluate import evaluate, score_for

__all__ = [
    "Difficulty",
    "EngineConfig",
    "GameStatus",
    "GameSummary",
    "InvalidPositionError",
    "MoveClassification",
    "choose_move",
    "classify",
    "classify_move",
    "evaluate",
    "game_status",
    "load_config",
    "score_for",
    "summarize_game",
]
