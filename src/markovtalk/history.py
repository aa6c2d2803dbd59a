"""Retained training sentences, used both for training and overlap checks."""

import logging
from collections import deque
from collections.abc import Iterator

from .types import TokenSequence

log = logging.getLogger(__name__)


class TrainingHistory:
    """
    Buffer of every token sequence indexed so far.

    With ``limit=None`` the buffer grows without bound for the lifetime of the
    process, which is a memory risk for long-running hosts. Passing a limit
    turns it into a ring buffer that drops the oldest sentences first.
    """

    def __init__(self, limit: int | None = None) -> None:
        self.limit = limit
        self._sequences: deque[TokenSequence] = deque(maxlen=limit)
        # sequences appended since the last take_untrained()
        self._untrained = 0
        self._joined: str | None = None

    def __len__(self) -> int:
        return len(self._sequences)

    def __iter__(self) -> Iterator[TokenSequence]:
        return iter(self._sequences)

    def append(self, sequence: TokenSequence) -> None:
        if self.limit is not None and len(self._sequences) == self.limit:
            log.debug(f"history full ({self.limit}), dropping oldest sentence")
        self._sequences.append(sequence)
        self._untrained = min(self._untrained + 1, len(self._sequences))
        self._joined = None

    def joined_text(self) -> str:
        """Return every retained sentence joined by single spaces."""
        if self._joined is None:
            self._joined = " ".join(" ".join(seq) for seq in self._sequences)
        return self._joined

    def take_untrained(self) -> list[TokenSequence]:
        """Return sequences appended since the previous call and mark them trained."""
        if self._untrained == 0:
            return []
        pending = list(self._sequences)[-self._untrained :]
        self._untrained = 0
        return pending

    def mark_trained(self) -> None:
        self._untrained = 0


__all__ = ["TrainingHistory"]
