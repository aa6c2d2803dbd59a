"""
Sentence segmentation, word splitting and token normalization.

Tokens produced here are the vocabulary of the chain: lowercase, free of the
punctuation set below, stripped of diacritics and never containing whitespace.
"""

import unicodedata
from typing import Final

import regex as re
from nltk.tokenize.punkt import PunktSentenceTokenizer

from .types import Token, TokenSequence

# ellipses first so "..." goes as a unit
PUNCTUATION_PATTERN: Final[str] = r"\.{2,5}|[/\"’.,?()!:;]"
COMBINING_MARKS_PATTERN: Final[str] = "[\u0300-\u036f]"
WORD_DELIMITER_PATTERN: Final[str] = r"[-'\s,]+"

_punctuation_re = re.compile(PUNCTUATION_PATTERN)
_combining_re = re.compile(COMBINING_MARKS_PATTERN)
_delimiter_re = re.compile(WORD_DELIMITER_PATTERN)
_word_char_re = re.compile(r"\w")

# untrained punkt: splits on terminal punctuation without any downloaded data
_sentence_tokenizer = PunktSentenceTokenizer()


def normalize(text: str) -> str:
    """
    Normalize text into its token form.

    Lowercases, decomposes (NFD) and drops combining diacritical marks, removes
    the punctuation set ``/ " ’ . , ? ( ) ! : ;`` and trims whitespace.
    Punctuation is removed after decomposition so that characters decomposing
    into punctuation (e.g. U+037E) are caught, which keeps the function
    idempotent.
    """
    text = unicodedata.normalize("NFD", text.lower())
    text = _combining_re.sub("", text)
    text = _punctuation_re.sub("", text)
    return text.strip()


def split_sentences(text: str) -> list[str]:
    """Split text into sentences at terminal punctuation."""
    if not text.strip():
        return []
    return [s for s in _sentence_tokenizer.tokenize(text) if s.strip()]


def tokenize_words(sentence: str) -> list[str]:
    """Split a raw sentence on hyphens, apostrophes, commas and whitespace."""
    return [piece for piece in _delimiter_re.split(sentence) if piece]


def tokenize(sentence: str) -> TokenSequence:
    """
    Turn a raw sentence into a sequence of normalized tokens.

    Pieces without any word character after normalization (pure punctuation)
    are discarded.
    """
    tokens = [normalize(piece) for piece in tokenize_words(sentence)]
    return [tok for tok in tokens if _word_char_re.search(tok)]


def contains_phrase(tokens: list[Token], phrase: list[Token]) -> bool:
    """Return ``True`` if ``phrase`` occurs as a contiguous run inside ``tokens``."""
    n = len(phrase)
    if n == 0 or n > len(tokens):
        return False
    return any(tokens[i : i + n] == phrase for i in range(len(tokens) - n + 1))


__all__ = [
    "normalize",
    "split_sentences",
    "tokenize_words",
    "tokenize",
    "contains_phrase",
]
