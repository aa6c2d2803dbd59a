"""Reusable decorators for training utilities."""

import time
import functools
import logging
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable[..., int]) -> Callable[..., int]:
    """
    Log how long a training call took and how many sentences it counted.

    The wrapped callable must return the number of sentences trained on.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> int:
        start = time.perf_counter()
        n_sentences: int | None = None
        try:
            n_sentences = func(*args, **kwargs)
            return n_sentences
        # log even if training raised
        finally:
            elapsed = time.perf_counter() - start
            if n_sentences is None:
                log.info(f"{func.__qualname__} failed after {elapsed:.3f} s")
            else:
                rate = n_sentences / elapsed if elapsed > 0 else 0.0
                log.info(
                    f"{func.__qualname__}: {n_sentences} sentences in {elapsed:.3f} s "
                    f"({rate:.0f} sentences/s)"
                )

    return wrapper
