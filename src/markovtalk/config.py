"""Synthesizer configuration and environment overrides."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final

from .errors import ConfigError

ENV_PREFIX: Final[str] = "MARKOVTALK_"
DEFAULT_MODEL_PATH: Final[Path] = Path("data") / "markov.json"


class TrainMode(str, Enum):
    """
    How ``train()`` consumes the training history.

    ``FULL`` rebuilds over every indexed sentence on each call, so counts of
    older sentences grow with every call. ``INCREMENTAL`` only builds the
    sentences indexed since the previous call.
    """

    FULL = "full"
    INCREMENTAL = "incremental"

    @classmethod
    def get(cls, name: str) -> "TrainMode":
        """Get train mode by name (case-insensitive)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ConfigError(
                "unknown train mode",
                invalid_name=name,
                available=[mode.value for mode in cls],
            )


def list_train_modes() -> list[str]:
    """Return available train mode names."""
    return [mode.value for mode in TrainMode]


@dataclass(frozen=True)
class SynthesizerConfig:
    """
    Tunables for a :class:`~markovtalk.synthesizer.SentenceSynthesizer`.

    :param state_size: Number of tokens forming a chain state.
    :param model_path: JSON file used by ``load()`` and ``save()``.
    :param attempts: Walks tried per ``make_sentence()`` call.
    :param max_overlap_ratio: Share of a sentence allowed to match training text verbatim.
    :param max_overlap_total: Absolute cap on verbatim overlap, in words.
    :param min_length: Exclusive lower bound on sentence length, in characters.
    :param max_length: Exclusive upper bound on sentence length, in characters.
    :param max_words: Words per walk before it is abandoned; ``None`` disables the cap.
    :param history_limit: Sentences kept for training and overlap checks; ``None`` keeps all.
    :param train_mode: See :class:`TrainMode`.
    :param spell_distance: Maximum edit distance for correction candidates.
    """

    state_size: int = 2
    model_path: Path = field(default_factory=lambda: DEFAULT_MODEL_PATH)
    attempts: int = 50
    max_overlap_ratio: float = 0.7
    max_overlap_total: int = 15
    min_length: int = 5
    max_length: int = 500
    max_words: int | None = 200
    history_limit: int | None = None
    train_mode: TrainMode = TrainMode.FULL
    spell_distance: int = 1

    def __post_init__(self) -> None:
        if self.state_size < 1:
            raise ConfigError(f"state size must be at least 1, got {self.state_size}")
        if self.attempts < 1:
            raise ConfigError(f"attempts must be at least 1, got {self.attempts}")
        if not 0.0 <= self.max_overlap_ratio <= 1.0:
            raise ConfigError(
                f"max overlap ratio must be within [0, 1], got {self.max_overlap_ratio}"
            )
        if self.max_overlap_total < 0:
            raise ConfigError(
                f"max overlap total must be non-negative, got {self.max_overlap_total}"
            )
        if self.min_length >= self.max_length:
            raise ConfigError(
                f"min length ({self.min_length}) must be below max length ({self.max_length})"
            )
        if self.max_words is not None and self.max_words < 1:
            raise ConfigError(f"max words must be positive, got {self.max_words}")
        if self.history_limit is not None and self.history_limit < 1:
            raise ConfigError(
                f"history limit must be positive, got {self.history_limit}"
            )
        if self.spell_distance < 1:
            raise ConfigError(
                f"spell distance must be at least 1, got {self.spell_distance}"
            )
        # accept plain strings from callers
        object.__setattr__(self, "model_path", Path(self.model_path))
        if not isinstance(self.train_mode, TrainMode):
            object.__setattr__(self, "train_mode", TrainMode.get(self.train_mode))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SynthesizerConfig":
        """
        Build a config from ``MARKOVTALK_*`` environment variables.

        Unset variables keep their defaults. ``MARKOVTALK_MAX_WORDS=0`` disables
        the walk cap and ``MARKOVTALK_HISTORY_LIMIT=0`` keeps the full history.

        :raises ConfigError: If a variable does not parse.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        def _int(name: str) -> int | None:
            raw = env.get(ENV_PREFIX + name, "").strip()
            if not raw:
                return None
            try:
                return int(raw)
            except ValueError:
                raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")

        if (state_size := _int("STATE_SIZE")) is not None:
            kwargs["state_size"] = state_size
        if (attempts := _int("ATTEMPTS")) is not None:
            kwargs["attempts"] = attempts
        if (max_words := _int("MAX_WORDS")) is not None:
            kwargs["max_words"] = max_words or None
        if (history_limit := _int("HISTORY_LIMIT")) is not None:
            kwargs["history_limit"] = history_limit or None

        model_path = env.get(ENV_PREFIX + "MODEL_PATH", "").strip()
        if model_path:
            kwargs["model_path"] = Path(model_path)

        train_mode = env.get(ENV_PREFIX + "TRAIN_MODE", "").strip()
        if train_mode:
            kwargs["train_mode"] = TrainMode.get(train_mode)

        return cls(**kwargs)


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_MODEL_PATH",
    "TrainMode",
    "SynthesizerConfig",
    "list_train_modes",
]
