"""
Engine configuration: every tunable heuristic constant in one validated model.

The evaluation weights and tier probabilities are heuristics with no
derivation behind their exact magnitudes, so they are configuration rather
than code. EngineConfig is immutable; a caller who wants different tuning
builds a new instance (or uses model_copy(update=...)).

load_config() reads overrides from environment variables, which is how the
UCI entry point and the benchmark pick up tuning without code changes.
"""

import logging
import os
import sys

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tierchess import constants as C

_log = logging.getLogger(__name__)

ENV_PREFIX = "TIERCHESS_"


class EngineConfig(BaseModel):
    """
    Tuning knobs for evaluation, the difficulty tiers, and the search.

    Fields:
        positional_scale: Multiplier turning centipawn PST entries into pawn
                          units. 0.01 keeps any single entry below one pawn.
        mobility_weight:  Score per legal move of the side to move.
        check_penalty:    Score charged to the side that is in check.
        opening_move_limit: Full-move number below which developing a minor
                          piece counts as development.
        easy_random_probability: Chance the easy tier plays a random move.
        easy_capture_probability: Chance the easy tier, when not random,
                          grabs an available capture.
        medium_blunder_probability: Chance the medium tier skips scoring.
        medium_jitter:    Upper bound of the uniform noise added to each
                          medium-tier move score.
        search_depth:     Hard-tier search depth in plies.
        branching_cap:    Moves examined per interior search node.
        time_budget_ms:   Hard-tier wall-clock budget, or None for no limit.
    """

    model_config = ConfigDict(frozen=True)

    positional_scale: float = Field(default=C.POSITIONAL_SCALE, ge=0.0, le=0.01)
    mobility_weight: float = Field(default=C.MOBILITY_WEIGHT, ge=0.0)
    check_penalty: float = Field(default=C.CHECK_PENALTY, ge=0.0)
    opening_move_limit: int = Field(default=C.OPENING_MOVE_LIMIT, ge=1)

    easy_random_probability: float = Field(default=C.EASY_RANDOM_PROBABILITY, ge=0.0, le=1.0)
    easy_capture_probability: float = Field(default=C.EASY_CAPTURE_PROBABILITY, ge=0.0, le=1.0)

    medium_blunder_probability: float = Field(default=C.MEDIUM_BLUNDER_PROBABILITY, ge=0.0, le=1.0)
    medium_jitter: float = Field(default=C.MEDIUM_JITTER, ge=0.0)

    search_depth: int = Field(default=C.SEARCH_DEPTH, ge=1, le=C.MAX_SEARCH_DEPTH)
    branching_cap: int = Field(default=C.BRANCHING_CAP, ge=1)
    time_budget_ms: int | None = C.TIME_BUDGET_MS

    @field_validator("time_budget_ms")
    @classmethod
    def clamp_time_budget(cls, v: int | None) -> int | None:
        """Clamp the time budget to a range an interactive game can live with."""
        if v is None:
            return None
        return max(50, min(v, 30_000))


DEFAULT_CONFIG = EngineConfig()


def load_config(prefix: str = ENV_PREFIX) -> EngineConfig:
    """
    Build an EngineConfig from environment variables.

    Recognised keys (after the prefix): POSITIONAL_SCALE, MOBILITY_WEIGHT,
    CHECK_PENALTY, OPENING_MOVE_LIMIT, EASY_RANDOM_PROBABILITY,
    EASY_CAPTURE_PROBABILITY, MEDIUM_BLUNDER_PROBABILITY, MEDIUM_JITTER,
    SEARCH_DEPTH, BRANCHING_CAP, TIME_BUDGET_MS. TIME_BUDGET_MS=none disables
    the deadline. Values that do not parse, or that parse but fall outside a
    field's bounds, are ignored with a warning so a typo in the environment
    never stops the engine from starting.
    """

    def _get_env(key: str) -> str:
        return os.getenv(f"{prefix}{key}", "").strip()

    overrides: dict[str, object] = {}
    for name, field in EngineConfig.model_fields.items():
        raw = _get_env(name.upper())
        if not raw:
            continue
        if name == "time_budget_ms" and raw.lower() == "none":
            overrides[name] = None
            continue
        parse = int if field.annotation in (int, int | None) else float
        try:
            overrides[name] = parse(raw)
        except ValueError:
            _log.warning("Ignoring unparseable %s%s=%r", prefix, name.upper(), raw)

    try:
        return EngineConfig(**overrides)
    except ValidationError as exc:
        for name in {err["loc"][0] for err in exc.errors() if err["loc"]}:
            _log.warning(
                "Ignoring out-of-range %s%s=%r", prefix, str(name).upper(), overrides.pop(name, None)
            )
    return EngineConfig(**overrides)


def configure_logging(level: int | str | None = None) -> None:
    """
    Configure root logging to stderr.

    stderr is mandatory for the UCI entry point, where stdout carries the
    protocol. The level defaults to the LOG_LEVEL environment variable.
    """
    if level is None:
        level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.WARNING

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
