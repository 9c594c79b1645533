"""
UCI (Universal Chess Interface) protocol handler for the tiered engine.

The engine reads commands from stdin and writes responses to stdout. Every
output line is flushed immediately; GUIs read line by line and will hang on
buffered output.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, setoption, position, go, stop, quit
    Engine → GUI: id name, id author, option, uciok, readyok, info, bestmove

Options:
    Difficulty (combo: easy / medium / hard) selects the tier.
    Depth (spin: 1-4) overrides the hard-tier search depth.

Threading model:
    The UCI loop runs on the main thread and never blocks on a move choice.
    "go" spawns a daemon thread that calls choose_move(); "stop" sets a
    threading.Event that the hard-tier search polls between root moves, so
    a stopped search still answers with a legal move.

Critical rule: stdout carries only UCI responses. Logging goes to stderr.

Run with: python -m interface.uci
"""

import logging
import sys
import threading
import time

import chess

from tierchess.config import EngineConfig, configure_logging, load_config
from tierchess.constants import MAX_SEARCH_DEPTH
from tierchess.engine import Difficulty, choose_move

_log = logging.getLogger(__name__)

ENGINE_NAME = "TierChess"

# Hard-tier budget for "go infinite": the search still ends on its own once
# every root move is searched, so this only bounds the wait for "stop".
_INFINITE_BUDGET_MS = 30_000


def _send(line: str) -> None:
    """Write a line to stdout and flush immediately."""
    print(line, flush=True)


def _parse_go_params(tokens: list[str]) -> dict[str, int]:
    """Collect the integer-valued "name value" pairs of a "go" command."""
    params: dict[str, int] = {}
    i = 0
    while i < len(tokens) - 1:
        try:
            params[tokens[i]] = int(tokens[i + 1])
            i += 2
        except ValueError:
            i += 1
    return params


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board:         Current position, updated by "position" commands.
        difficulty:    Tier used by "go", set with "setoption name Difficulty".
        depth:         Hard-tier search depth, set with "setoption name Depth".
        search_thread: The thread choosing the current move, or None.
        stop_event:    Set to ask the running search to return early.
    """

    def __init__(self) -> None:
        self.config = load_config()
        self.board: chess.Board = chess.Board()
        self.difficulty: Difficulty = Difficulty.MEDIUM
        self.depth: int = self.config.search_depth
        self.search_thread: threading.Thread | None = None
        self.stop_event: threading.Event = threading.Event()

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine and advertise its options."""
        _send(f"id name {ENGINE_NAME}")
        _send("id author TierChess Project")
        _send(
            "option name Difficulty type combo default "
            f"{self.difficulty.value} var easy var medium var hard"
        )
        _send(
            f"option name Depth type spin default {self.depth} "
            f"min 1 max {MAX_SEARCH_DEPTH}"
        )
        _send("uciok")

    def handle_isready(self) -> None:
        """Answer the GUI's synchronisation ping."""
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """Stop any running search and reset to the starting position."""
        self._stop_search()
        self.board = chess.Board()

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Apply "setoption name <id> [value <x>]".

        Option names are case-insensitive and may contain spaces. Unknown
        options and invalid values are logged and ignored.
        """
        if "name" not in tokens:
            return
        name_idx = tokens.index("name") + 1
        if "value" in tokens:
            value_idx = tokens.index("value")
            name = " ".join(tokens[name_idx:value_idx]).lower()
            value = " ".join(tokens[value_idx + 1:])
        else:
            name = " ".join(tokens[name_idx:]).lower()
            value = ""

        if name == "difficulty":
            try:
                self.difficulty = Difficulty.parse(value)
            except ValueError as exc:
                _log.warning("uci: %s", exc)
        elif name == "depth":
            try:
                self.depth = max(1, min(int(value), MAX_SEARCH_DEPTH))
            except ValueError:
                _log.warning("uci: invalid Depth value %r", value)
        else:
            _log.info("uci: ignoring unknown option %r", name)

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos [moves e2e4 e7e5 ...]
            position fen <FEN> [moves e2e4 e7e5 ...]

        Illegal moves in the list stop the replay at the last legal one.
        """
        if not tokens:
            return

        if tokens[0] == "startpos":
            board = chess.Board()
            move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
        elif tokens[0] == "fen":
            if "moves" in tokens:
                moves_idx = tokens.index("moves")
                fen = " ".join(tokens[1:moves_idx])
                move_tokens = tokens[moves_idx + 1:]
            else:
                fen = " ".join(tokens[1:])
                move_tokens = []
            try:
                board = chess.Board(fen)
            except ValueError as exc:
                _log.warning("uci: invalid FEN %r: %s", fen, exc)
                return
        else:
            _log.warning("uci: unknown position type: %s", tokens[0])
            return

        for uci_move in move_tokens:
            try:
                move = chess.Move.from_uci(uci_move)
            except ValueError:
                move = None
            if move is None or move not in board.legal_moves:
                _log.warning("uci: illegal move in position command: %s", uci_move)
                break
            board.push(move)

        self.board = board

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start choosing a move on a background thread.

        The time control only matters to the hard tier, where it becomes the
        search's wall-clock budget, and "go depth N" overrides the Depth option
        for this search only. The board is copied so a following "position"
        command cannot race with the running search.
        """
        self._stop_search()

        time_limit_ms = self._parse_go_time(tokens)
        depth = self._parse_go_depth(tokens)
        # Revalidate so the budget is clamped like any other config value.
        config = EngineConfig.model_validate(
            {**self.config.model_dump(), "search_depth": depth, "time_budget_ms": time_limit_ms}
        )

        self.stop_event = threading.Event()
        stop_event = self.stop_event
        board_copy = self.board.copy()
        difficulty = self.difficulty

        def choose_and_reply() -> None:
            try:
                start = time.monotonic()
                move = choose_move(
                    board_copy,
                    difficulty,
                    config=config,
                    is_cancelled=stop_event.is_set,
                )
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

                if move is not None:
                    _send(f"info string difficulty {difficulty.value} time {elapsed_ms}")
                    _send(f"bestmove {move.uci()}")
                else:
                    _send("bestmove (none)")

            except Exception:
                _log.exception("uci: move selection failed")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=choose_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        """Cancel the running search; it still replies with a bestmove."""
        self._stop_search()

    def handle_quit(self) -> None:
        """Stop any running search and exit the process."""
        self._stop_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _stop_search(self) -> None:
        """
        Signal the current search thread to stop and wait for it to exit.

        The search only polls between root moves, so the join is bounded by
        one root subtree at the configured depth.
        """
        self.stop_event.set()
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join(timeout=5.0)
        self.search_thread = None

    def _parse_go_time(self, tokens: list[str]) -> int:
        """
        Extract the time budget in milliseconds from "go" command tokens.

        Supports:
            movetime <ms>
            wtime <ms> btime <ms> [winc <ms> binc <ms>]  - 1/40 of the
                remaining clock plus increment

        Anything else ("go infinite", "go depth 3") gets _INFINITE_BUDGET_MS.
        """
        params = _parse_go_params(tokens)

        if "movetime" in params:
            return params["movetime"]

        white = self.board.turn == chess.WHITE
        time_key = "wtime" if white else "btime"
        inc_key = "winc" if white else "binc"
        if time_key in params:
            return max(1, params[time_key] // 40 + params.get(inc_key, 0))

        return _INFINITE_BUDGET_MS

    def _parse_go_depth(self, tokens: list[str]) -> int:
        """Search depth from "go depth N", clamped to 1..MAX_SEARCH_DEPTH, else the Depth option."""
        params = _parse_go_params(tokens)
        if "depth" in params:
            return max(1, min(params["depth"], MAX_SEARCH_DEPTH))
        return self.depth


def run_uci_loop() -> None:
    """
    Main UCI protocol loop.

    Reads stdin until "quit" or EOF. A failure in one command handler is
    logged and the loop carries on; crashing loses the game.
    """
    configure_logging()
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # Unknown commands must be ignored per the UCI specification.
                _log.debug("uci: ignoring unknown command: %r", command)

        except Exception:
            _log.exception("uci: unhandled error for command %r", command)


if __name__ == "__main__":
    run_uci_loop()
