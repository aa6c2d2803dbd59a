"""markovtalk: n-gram Markov sentence generation for chat bots."""

from .chain import BEGIN, END, NGramModel
from .config import SynthesizerConfig, TrainMode, list_train_modes
from .errors import (
    ConfigError,
    InvalidTokenError,
    MarkovTalkError,
    ModelLoadError,
    ModelNotReadyError,
    ModelSaveError,
    StateNotFoundError,
    WalkLimitError,
)
from .ingest import ingest_message
from .synthesizer import SentenceSynthesizer, is_novel
from .text import normalize, split_sentences, tokenize, tokenize_words

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("markovtalk")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "BEGIN",
    "END",
    "NGramModel",
    "SentenceSynthesizer",
    "SynthesizerConfig",
    "TrainMode",
    "MarkovTalkError",
    "ModelNotReadyError",
    "StateNotFoundError",
    "WalkLimitError",
    "ModelLoadError",
    "ModelSaveError",
    "InvalidTokenError",
    "ConfigError",
    "normalize",
    "split_sentences",
    "tokenize",
    "tokenize_words",
    "is_novel",
    "ingest_message",
    "list_train_modes",
]
