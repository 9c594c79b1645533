import pytest
from pydantic import ValidationError

from tierchess.config import DEFAULT_CONFIG, EngineConfig, load_config


def test_defaults() -> None:
    cfg = EngineConfig()
    assert cfg.search_depth == 2
    assert cfg.branching_cap == 12
    assert cfg.easy_random_probability == pytest.approx(0.6)
    assert cfg.medium_blunder_probability == pytest.approx(0.2)
    assert cfg.positional_scale == pytest.approx(0.01)
    assert cfg == DEFAULT_CONFIG


@pytest.mark.parametrize(
    "field, value",
    [
        ("easy_random_probability", 1.5),
        ("medium_blunder_probability", -0.1),
        ("search_depth", 0),
        ("search_depth", 9),
        ("branching_cap", 0),
        ("positional_scale", 0.5),
    ],
)
def test_rejects_out_of_range_values(field: str, value: float) -> None:
    with pytest.raises(ValidationError):
        EngineConfig(**{field: value})


def test_time_budget_is_clamped() -> None:
    assert EngineConfig(time_budget_ms=1).time_budget_ms == 50
    assert EngineConfig(time_budget_ms=10**9).time_budget_ms == 30_000
    assert EngineConfig(time_budget_ms=None).time_budget_ms is None


def test_config_is_immutable() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.search_depth = 3


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("TIERCHESS_SEARCH_DEPTH", "3")
    monkeypatch.setenv("TIERCHESS_EASY_RANDOM_PROBABILITY", "0.7")
    monkeypatch.setenv("TIERCHESS_TIME_BUDGET_MS", "none")

    cfg = load_config()

    assert cfg.search_depth == 3
    assert cfg.easy_random_probability == pytest.approx(0.7)
    assert cfg.time_budget_ms is None


def test_load_config_ignores_unparseable_values(monkeypatch, caplog) -> None:
    monkeypatch.setenv("TIERCHESS_BRANCHING_CAP", "lots")
    cfg = load_config()
    assert cfg.branching_cap == DEFAULT_CONFIG.branching_cap
    assert "TIERCHESS_BRANCHING_CAP" in caplog.text


def test_load_config_ignores_out_of_range_values(monkeypatch, caplog) -> None:
    monkeypatch.setenv("TIERCHESS_SEARCH_DEPTH", "5")
    monkeypatch.setenv("TIERCHESS_EASY_RANDOM_PROBABILITY", "1.5")
    monkeypatch.setenv("TIERCHESS_BRANCHING_CAP", "20")

    cfg = load_config()

    assert cfg.search_depth == DEFAULT_CONFIG.search_depth
    assert cfg.easy_random_probability == DEFAULT_CONFIG.easy_random_probability
    assert cfg.branching_cap == 20
    assert "TIERCHESS_SEARCH_DEPTH" in caplog.text
    assert "TIERCHESS_EASY_RANDOM_PROBABILITY" in caplog.text


def test_load_config_custom_prefix(monkeypatch) -> None:
    monkeypatch.setenv("BOT_MEDIUM_JITTER", "1.5")
    assert load_config(prefix="BOT_").medium_jitter == pytest.approx(1.5)
