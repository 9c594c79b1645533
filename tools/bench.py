#!/usr/bin/env python3
"""
Benchmark: time each difficulty tier on a fixed set of positions.

The interactive targets are well under a second for easy and medium and a
few hundred milliseconds for hard. Run after changing evaluation weights,
the search depth or the branching cap to see whether the tiers still fit.
Tuning can be supplied through TIERCHESS_* environment variables.

Usage: python3 tools/bench.py [--repeat N] [--seed S]
"""
import argparse
import random
import statistics
import time

import chess

from tierchess.config import load_config
from tierchess.engine import Difficulty, choose_move
from tierchess.search import search

# 10 standard positions spanning opening, middlegame, and endgame.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ("Sicilian",     "rnbqkbnr/pp1ppppp/8/2p5/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2"),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("London",       "rnbqkb1r/ppp1pppp/5n2/3p4/3P1B2/5N2/PPP1PPPP/RN1QKB1R b KQkq - 3 3"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Complex mid",  "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Pawn ending",  "6k1/ppp2ppp/8/3p4/3P4/8/PPP2PPP/6K1 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def time_tier(fen: str, difficulty: Difficulty, repeat: int, rng: random.Random) -> float:
    """Median milliseconds per choose_move() call over `repeat` runs."""
    config = load_config()
    board = chess.Board(fen)
    samples = []
    for _ in range(repeat):
        start = time.perf_counter()
        choose_move(board, difficulty, rng=rng, config=config)
        samples.append((time.perf_counter() - start) * 1000)
    return statistics.median(samples)


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--repeat", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    config = load_config()

    print(f"Tier benchmark: depth={config.search_depth} cap={config.branching_cap} "
          f"budget={config.time_budget_ms}ms")
    print()
    print(
        f"{'Position':<14} {'Easy':>8} {'Medium':>8} {'Hard':>8} "
        f"{'Nodes':>8} {'Best':<7}"
    )
    print("-" * 60)

    totals = {d: [] for d in Difficulty}
    for label, fen in POSITIONS:
        row = {d: time_tier(fen, d, args.repeat, rng) for d in Difficulty}
        for d, ms in row.items():
            totals[d].append(ms)
        result = search(chess.Board(fen), config=config)
        best = result.move.uci() if result.move else "(none)"
        print(
            f"{label:<14} {row[Difficulty.EASY]:>8.1f} {row[Difficulty.MEDIUM]:>8.1f} "
            f"{row[Difficulty.HARD]:>8.1f} {result.nodes:>8,} {best:<7}"
        )

    print("-" * 60)
    print(
        f"{'MEDIAN':<14} {statistics.median(totals[Difficulty.EASY]):>8.1f} "
        f"{statistics.median(totals[Difficulty.MEDIUM]):>8.1f} "
        f"{statistics.median(totals[Difficulty.HARD]):>8.1f}"
    )


if __name__ == "__main__":
    main()
