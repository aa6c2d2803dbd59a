"""Edit-distance based correction suggestions for vocabulary curation."""

from collections.abc import Iterable

from nltk.metrics.distance import edit_distance

from .types import Token

# matches per token, the token itself included; more is too ambiguous to act on
MAX_CANDIDATES = 3


def close_tokens(word: Token, vocabulary: list[Token], max_distance: int = 1) -> list[Token]:
    """
    Return the other tokens of ``vocabulary`` within ``max_distance`` edits of ``word``.

    Swapping two adjacent letters counts as a single edit, so ``teh`` is one
    edit away from ``the``.
    """
    return [
        other
        for other in vocabulary
        if other != word
        # length difference is a lower bound on the edit distance
        and abs(len(other) - len(word)) <= max_distance
        and edit_distance(word, other, transpositions=True) <= max_distance
    ]


def correction_candidates(
    vocabulary: Iterable[Token], max_distance: int = 1
) -> dict[Token, list[Token]]:
    """
    Map each token to the lexically close tokens it may be a misspelling of.

    A token is reported when it has at least one close token and at most
    ``MAX_CANDIDATES`` matches counting itself. Candidate lists are
    sorted and never contain the token itself.
    """
    words = sorted(set(vocabulary))
    res: dict[Token, list[Token]] = {}
    for word in words:
        candidates = close_tokens(word, words, max_distance)
        if candidates and len(candidates) + 1 <= MAX_CANDIDATES:
            res[word] = candidates
    return res


__all__ = ["MAX_CANDIDATES", "close_tokens", "correction_candidates"]
