"""
Post-game summaries built from the evaluator and the move classifier.

The numbers here back the commentary features of the surrounding application
(tactical vs positional game, checks, evaluation swings). Turning them into
prose is the caller's job.
"""

from dataclasses import dataclass, field

import chess

from tierchess.classify import MoveClassification, classify
from tierchess.config import EngineConfig
from tierchess.engine import GameStatus, game_status
from tierchess.evaluate import evaluate


@dataclass
class GameSummary:
    """
    Per-game counts and the evaluation after every ply.

    Attributes:
        plies:            Half-moves played.
        captures:         Capturing moves by either side.
        checks:           Checking moves by either side.
        status:           How the game stands after the last move.
        initial_evaluation: White-perspective score of the starting position.
        evaluations:      White-perspective score after each ply.
        classifications:  Classification of each move, in order.
    """

    plies: int = 0
    initial_evaluation: float = 0.0
    captures: int = 0
    checks: int = 0
    status: GameStatus = GameStatus.PLAYING
    evaluations: list[float] = field(default_factory=list)
    classifications: list[MoveClassification] = field(default_factory=list)

    @property
    def capture_ratio(self) -> float:
        return self.captures / self.plies if self.plies else 0.0

    def biggest_swing(self) -> tuple[int, float] | None:
        """(ply index, change in evaluation) of the largest single-ply swing."""
        if not self.evaluations:
            return None
        previous = self.initial_evaluation
        best: tuple[int, float] | None = None
        for index, score in enumerate(self.evaluations):
            delta = score - previous
            if best is None or abs(delta) > abs(best[1]):
                best = (index, delta)
            previous = score
        return best


def summarize_game(board: chess.Board, config: EngineConfig | None = None) -> GameSummary:
    """
    Replay `board`'s move stack from its root and summarise the game.

    The board itself is not modified.
    """
    replay = board.root()
    summary = GameSummary(initial_evaluation=evaluate(replay, config))
    for move in board.move_stack:
        before = replay.copy(stack=False)
        replay.push(move)
        info = classify(before, move, replay, config)
        summary.plies += 1
        summary.captures += info.is_capture
        summary.checks += info.gives_check
        summary.classifications.append(info)
        summary.evaluations.append(evaluate(replay, config))

    summary.status = game_status(replay)
    return summary
