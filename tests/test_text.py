"""Unit tests for normalization, sentence splitting and word tokenization."""

import pytest

from markovtalk.text import (
    contains_phrase,
    normalize,
    split_sentences,
    tokenize,
    tokenize_words,
)

PUNCTUATION = set('/"’.,?()!:;')

SAMPLES = [
    "",
    "   ",
    "Hello, World!",
    "  Héllo wörld...  ",
    "Ça va? (très bien)",
    "İstanbul",
    "it’s 3:15; ok/no",
    "question;",
    "naïve café résumé",
    "ÅNGSTRÖM",
    'say "what"',
]


# normalize
# ---------------------------------------------------------------------------


def test_normalize_lowercases_and_trims():
    """Text is lowercased and surrounding whitespace removed."""
    assert normalize("  Hello World  ") == "hello world"


def test_normalize_strips_punctuation():
    """Every character of the punctuation set is removed."""
    assert normalize('/"’.,?()!:;') == ""
    assert normalize("wait... what?!") == "wait what"
    assert normalize("it’s") == "its"


def test_normalize_strips_diacritics():
    """Combining marks are dropped after decomposition."""
    assert normalize("Héllo Wörld, ça") == "hello world ca"


@pytest.mark.parametrize("text", SAMPLES)
def test_normalize_is_idempotent(text):
    """Normalizing twice equals normalizing once."""
    once = normalize(text)
    assert normalize(once) == once


@pytest.mark.parametrize("text", SAMPLES)
def test_normalize_output_is_clean(text):
    """Output holds no punctuation from the set and no combining marks."""
    out = normalize(text)
    assert not PUNCTUATION & set(out)
    assert not any("\u0300" <= c <= "\u036f" for c in out)
    assert out == out.strip()


# split_sentences
# ---------------------------------------------------------------------------


def test_split_sentences_on_terminal_punctuation():
    """Sentences are split at periods, question and exclamation marks."""
    text = "Hello there. How are you? I am fine!"
    assert split_sentences(text) == ["Hello there.", "How are you?", "I am fine!"]


def test_split_sentences_without_terminal_punctuation():
    """Text without terminal punctuation is one sentence."""
    assert split_sentences("just one sentence") == ["just one sentence"]


def test_split_sentences_empty():
    """Blank text has no sentences."""
    assert split_sentences("") == []
    assert split_sentences("  \n ") == []


def test_split_sentences_is_deterministic():
    """Same input always yields the same split."""
    text = "One. Two! Three? Four."
    assert split_sentences(text) == split_sentences(text)


# tokenize_words / tokenize
# ---------------------------------------------------------------------------


def test_tokenize_words_delimiters():
    """Hyphens, apostrophes, commas and spaces delimit words."""
    assert tokenize_words("well-known rock'n'roll, baby") == [
        "well",
        "known",
        "rock",
        "n",
        "roll",
        "baby",
    ]


def test_tokenize_words_drops_empty_pieces():
    """Runs of delimiters do not yield empty words."""
    assert tokenize_words(" -a,, b- ") == ["a", "b"]


def test_tokenize_drops_pure_punctuation():
    """Pieces without word characters after normalization are discarded."""
    assert tokenize("Hello, world !!! ...") == ["hello", "world"]


def test_tokenize_never_yields_whitespace():
    """Tabs and newlines split words like spaces do."""
    assert tokenize("Tab\tseparated\nwords") == ["tab", "separated", "words"]


def test_tokenize_tokens_never_collide_with_sentinels():
    """Sentinel-looking words are lowercased and so never equal a sentinel."""
    assert tokenize("__BEGIN__ __END__") == ["__begin__", "__end__"]


# contains_phrase
# ---------------------------------------------------------------------------


def test_contains_phrase():
    """Contiguous runs match; scattered or empty phrases do not."""
    tokens = ["big", "bob", "likes", "cake"]
    assert contains_phrase(tokens, ["big", "bob"])
    assert contains_phrase(tokens, ["cake"])
    assert not contains_phrase(tokens, ["big", "cake"])
    assert not contains_phrase(tokens, [])
