"""
N-gram Markov chain over word tokens.

The chain maps each state (a fixed-length window of preceding tokens) to the
tokens observed to follow it, with occurrence counts. Sequences are padded
with ``BEGIN`` sentinels and terminated with ``END`` so that walks know where
sentences start and stop.

The model is not thread-safe; owners must serialize writers.
"""

import json
import logging
import random
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Final

import regex as re

from .errors import (
    ConfigError,
    InvalidTokenError,
    ModelLoadError,
    ModelNotReadyError,
    ModelSaveError,
    StateNotFoundError,
    WalkLimitError,
)
from .types import State, Token, TokenSequence, TransitionTable, Transitions

BEGIN: Final[Token] = "__BEGIN__"
END: Final[Token] = "__END__"
SENTINELS: Final[frozenset[Token]] = frozenset({BEGIN, END})
# separator between tokens of a serialized state key
STATE_SEPARATOR: Final[str] = " "

_whitespace_re = re.compile(r"\s")

log = logging.getLogger(__name__)


def state_to_key(state: State) -> str:
    """Serialize a state into its persisted key form."""
    return STATE_SEPARATOR.join(state)


def key_to_state(key: str) -> State:
    """Parse a persisted key back into a state."""
    return tuple(key.split(STATE_SEPARATOR))


def _check_token(token: Token) -> None:
    """Reject tokens that would corrupt state serialization."""
    if not token:
        raise InvalidTokenError("token must not be empty", token=token)
    if _whitespace_re.search(token):
        raise InvalidTokenError("token must not contain whitespace", token=token)
    if token in SENTINELS:
        raise InvalidTokenError("token must not be a sentinel", token=token)


class NGramModel:
    """
    Transition-count table over token windows.

    Inspired by markovify's ``Chain``: build from token sequences, walk from the
    ``BEGIN`` state until ``END`` is drawn.

    :param state_size: Number of tokens forming a state.
    :param rng: Random source for walks; defaults to a fresh ``random.Random``.
    :raises ConfigError: If ``state_size`` is less than 1.
    """

    def __init__(self, state_size: int = 2, rng: random.Random | None = None) -> None:
        if state_size < 1:
            raise ConfigError(f"state size must be at least 1, got {state_size}")
        self.state_size = state_size
        self.rng = rng or random.Random()
        self._table: TransitionTable = {}
        self._ready = False

    @property
    def initial_state(self) -> State:
        return (BEGIN,) * self.state_size

    @property
    def is_ready(self) -> bool:
        """``True`` once ``build`` or ``load_model`` has run."""
        return self._ready

    @property
    def table(self) -> Mapping[State, Transitions]:
        """Read-only view of the transition table."""
        return MappingProxyType(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def build(self, sequences: Iterable[TokenSequence]) -> None:
        """
        Count transitions for every sequence, accumulating onto existing counts.

        Each sequence is padded as ``[BEGIN] * N + tokens + [END]`` and every
        window of ``N`` tokens is counted against the token that follows it.
        """
        n_sequences = 0
        for tokens in sequences:
            items = [*self.initial_state, *tokens, END]
            for i in range(len(tokens) + 1):
                state = tuple(items[i : i + self.state_size])
                follow = items[i + self.state_size]
                follows = self._table.setdefault(state, {})
                follows[follow] = follows.get(follow, 0) + 1
            n_sequences += 1

        self._ready = True
        log.debug(f"built {n_sequences} sequences into {len(self._table)} states")

    def _move(self, state: State, preferred: Token | None) -> Token:
        """Pick the token following ``state``."""
        follows = self._table.get(state)
        if not follows:
            raise StateNotFoundError("no transitions for state", state=state)

        # topic bias: take the preferred token whenever it is a candidate
        if preferred is not None and preferred in follows:
            return preferred

        # weighting by count is the same as sampling the flattened candidate list
        return self.rng.choices(list(follows), weights=list(follows.values()))[0]

    def generate(
        self,
        preferred_token: Token | None = None,
        max_words: int | None = None,
    ) -> list[Token]:
        """
        Walk the chain from the ``BEGIN`` state until ``END`` is drawn.

        The walk has no length bound of its own; a chain with reachable cycles
        may walk for a long time. Pass ``max_words`` to cap it.

        :param preferred_token: Token chosen whenever the current state offers it.
        :param max_words: Optional cap on the number of generated tokens.
        :returns: Generated tokens, sentinels excluded.
        :raises ModelNotReadyError: If the model was never built or loaded.
        :raises StateNotFoundError: If the walk reaches a state without transitions.
        :raises WalkLimitError: If the walk produces more than ``max_words`` tokens.
        """
        if not self._ready:
            raise ModelNotReadyError(
                f"{self.__class__.__name__} must be built or loaded before generating"
            )

        state = self.initial_state
        words: list[Token] = []

        while True:
            next_word = self._move(state, preferred_token)
            if next_word == END:
                return words

            if max_words is not None and len(words) >= max_words:
                raise WalkLimitError("walk exceeded word cap", max_words=max_words)

            words.append(next_word)
            state = (*state[1:], next_word)

    def vocabulary(self) -> set[Token]:
        """Return every token learned as a transition target, ``END`` excluded."""
        vocab: set[Token] = set()
        for follows in self._table.values():
            vocab.update(follows)
        vocab.discard(END)
        return vocab

    def merge_token(self, old_token: Token, new_token: Token) -> None:
        """
        Rewrite ``old_token`` into ``new_token`` everywhere in the table.

        States containing ``old_token`` are re-keyed with the token replaced at
        its exact positions, and their transitions are summed into the target
        state. ``old_token`` as a follow token has its count folded into
        ``new_token``'s. No count is lost or duplicated.

        No-op if ``old_token`` equals ``new_token`` or is not in the vocabulary.

        :raises InvalidTokenError: If either token is empty, contains
                                   whitespace or is a sentinel.
        """
        _check_token(old_token)
        _check_token(new_token)

        if old_token == new_token or old_token not in self.vocabulary():
            log.debug(f"nothing to merge for {old_token!r}")
            return

        affected = [
            state
            for state, follows in self._table.items()
            if old_token in state or old_token in follows
        ]

        for state in affected:
            follows = self._table.pop(state)
            target_state = tuple(new_token if tok == old_token else tok for tok in state)
            target = self._table.setdefault(target_state, {})
            for tok, count in follows.items():
                key = new_token if tok == old_token else tok
                target[key] = target.get(key, 0) + count

        log.info(f"merged {old_token!r} into {new_token!r} across {len(affected)} states")

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Return the table in its persisted form."""
        return {
            state_to_key(state): dict(follows) for state, follows in self._table.items()
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Mapping[str, int]],
        state_size: int = 2,
        rng: random.Random | None = None,
    ) -> "NGramModel":
        """
        Create a ready model from the persisted table form.

        :raises ModelLoadError: If ``data`` is not a valid table for ``state_size``.
        """
        model = cls(state_size, rng=rng)
        model._table = model._parse_table(data)
        model._ready = True
        return model

    def _parse_table(
        self, data: object, model_path: str | None = None
    ) -> TransitionTable:
        """Validate persisted table data and convert it to tuple-keyed form."""
        if not isinstance(data, Mapping):
            raise ModelLoadError(
                "model must be an object", model_path=model_path, reason=type(data).__name__
            )

        table: TransitionTable = {}
        for key, follows in data.items():
            state = key_to_state(key)
            if len(state) != self.state_size or not all(state):
                raise ModelLoadError(
                    f"state {key!r} does not have {self.state_size} tokens",
                    model_path=model_path,
                )
            if not isinstance(follows, Mapping):
                raise ModelLoadError(
                    f"transitions of state {key!r} must be an object",
                    model_path=model_path,
                )
            parsed: Transitions = {}
            for tok, count in follows.items():
                if not tok or _whitespace_re.search(tok):
                    raise ModelLoadError(
                        f"invalid follow token for {key!r}: {tok!r}",
                        model_path=model_path,
                    )
                # bool is an int subclass but never a valid count
                if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                    raise ModelLoadError(
                        f"invalid count for {key!r} -> {tok!r}: {count!r}",
                        model_path=model_path,
                    )
                parsed[tok] = count
            table[state] = parsed

        return table

    def load_model(self, path: str | Path) -> None:
        """
        Replace the table with one read from a JSON model file.

        The file is fully validated before the current table is replaced.

        :raises ModelLoadError: If the file is missing, unreadable or malformed.
        """
        path = Path(path)

        if not path.exists():
            raise ModelLoadError("model filepath does not exist", model_path=str(path))

        log.info(f"loading model from {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ModelLoadError(
                "failed to read model", model_path=str(path), reason=str(e)
            ) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ModelLoadError(
                "model is not valid UTF-8 JSON", model_path=str(path), reason=str(e)
            ) from e

        self._table = self._parse_table(data, model_path=str(path))
        self._ready = True

        log.info(f"model loaded successfully: {len(self._table)} states")

    def save_model(self, path: str | Path) -> None:
        """
        Write the table to a JSON model file, overwriting it.

        :raises ModelSaveError: If the file cannot be written.
        """
        path = Path(path)
        log.debug(f"saving {len(self._table)} states to {path}")

        try:
            # create directory if does not exist
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="\n") as f:
                json.dump(self.to_dict(), f, ensure_ascii=False)
        except OSError as e:
            raise ModelSaveError("failed to write model", model_path=str(path)) from e

        log.info(f"model saved to {path}")


__all__ = [
    "BEGIN",
    "END",
    "SENTINELS",
    "NGramModel",
    "state_to_key",
    "key_to_state",
]
