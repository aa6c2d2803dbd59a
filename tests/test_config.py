"""Unit tests for synthesizer configuration."""

from pathlib import Path

import pytest

from markovtalk import ConfigError, SynthesizerConfig, TrainMode, list_train_modes


def test_defaults():
    """Defaults match the documented tunables."""
    cfg = SynthesizerConfig()
    assert cfg.state_size == 2
    assert cfg.attempts == 50
    assert cfg.max_overlap_ratio == 0.7
    assert cfg.max_overlap_total == 15
    assert cfg.model_path == Path("data") / "markov.json"
    assert cfg.train_mode is TrainMode.FULL
    assert cfg.history_limit is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"state_size": 0},
        {"attempts": 0},
        {"max_overlap_ratio": 1.5},
        {"max_overlap_total": -1},
        {"min_length": 10, "max_length": 10},
        {"max_words": 0},
        {"history_limit": 0},
        {"spell_distance": 0},
        {"train_mode": "sometimes"},
    ],
)
def test_invalid_values(kwargs):
    """Out-of-range values raise ConfigError."""
    with pytest.raises(ConfigError):
        SynthesizerConfig(**kwargs)


def test_train_mode_get_case_insensitive():
    """Mode names are case-insensitive."""
    assert TrainMode.get("Incremental") is TrainMode.INCREMENTAL
    assert TrainMode.get("FULL") is TrainMode.FULL
    assert list_train_modes() == ["full", "incremental"]


def test_train_mode_get_unknown():
    """Unknown names list the available modes."""
    with pytest.raises(ConfigError) as exc_info:
        TrainMode.get("never")
    assert exc_info.value.available == ["full", "incremental"]


def test_from_env():
    """MARKOVTALK_* variables override defaults."""
    cfg = SynthesizerConfig.from_env(
        {
            "MARKOVTALK_STATE_SIZE": "3",
            "MARKOVTALK_MODEL_PATH": "/tmp/model.json",
            "MARKOVTALK_ATTEMPTS": "10",
            "MARKOVTALK_MAX_WORDS": "0",
            "MARKOVTALK_HISTORY_LIMIT": "1000",
            "MARKOVTALK_TRAIN_MODE": "incremental",
        }
    )
    assert cfg.state_size == 3
    assert cfg.model_path == Path("/tmp/model.json")
    assert cfg.attempts == 10
    assert cfg.max_words is None
    assert cfg.history_limit == 1000
    assert cfg.train_mode is TrainMode.INCREMENTAL


def test_from_env_empty_keeps_defaults():
    """No variables means default config."""
    assert SynthesizerConfig.from_env({}) == SynthesizerConfig()


def test_from_env_bad_integer():
    """Non-integer values raise ConfigError."""
    with pytest.raises(ConfigError):
        SynthesizerConfig.from_env({"MARKOVTALK_STATE_SIZE": "two"})
