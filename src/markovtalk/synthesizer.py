"""
Sentence synthesis on top of the n-gram chain.

:class:`SentenceSynthesizer` indexes raw text into a training history, trains
the chain from it, and generates sentences that do not copy the history
verbatim. It is the surface consumed by chat integrations.
"""

import logging
import math
import random
import threading

import regex as re
from typing_extensions import deprecated

from . import spelling
from ._decorators import measure_time
from .chain import NGramModel
from .config import SynthesizerConfig, TrainMode
from .errors import InvalidTokenError, StateNotFoundError, WalkLimitError
from .history import TrainingHistory
from .text import contains_phrase, normalize, split_sentences, tokenize
from .types import AliasGroups, Token, TokenSequence

log = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def is_novel(
    words: list[Token],
    corpus_text: str,
    max_overlap_ratio: float = 0.7,
    max_overlap_total: int = 15,
) -> bool:
    """
    Return ``False`` if ``words`` reproduces too long a run of the corpus.

    The allowed overlap is ``max_overlap_ratio`` of the sentence length,
    capped at ``max_overlap_total`` words. Every window one word longer than
    that is searched verbatim in ``corpus_text``; any hit rejects the sentence.
    An empty sentence is always rejected.
    """
    overlap_ratio = _round_half_up(max_overlap_ratio * len(words))
    overlap_max = min(max_overlap_total, overlap_ratio)
    window = overlap_max + 1
    n_windows = max(len(words) - overlap_max, 1)

    for i in range(n_windows):
        gram = " ".join(words[i : i + window])
        if gram in corpus_text:
            return False
    return True


class SentenceSynthesizer:
    """
    Owns a :class:`NGramModel` and the history it is trained from.

    Every public method holds one re-entrant lock, so a host processing several
    conversations can share an instance across threads. The model is global,
    not partitioned per conversation.

    :param config: Tunables; defaults to :class:`SynthesizerConfig`.
    :param rng: Random source passed to the model.
    """

    def __init__(
        self,
        config: SynthesizerConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or SynthesizerConfig()
        self.model = NGramModel(self.config.state_size, rng=rng)
        self.history = TrainingHistory(self.config.history_limit)
        self._lock = threading.RLock()

    # Indexing
    # ---------------------------------------------------------------------------

    def index(self, corpus: str, alias_groups: AliasGroups | None = None) -> None:
        """Split ``corpus`` into sentences and index each one."""
        with self._lock:
            for sentence in split_sentences(corpus):
                self.index_sentence(sentence, alias_groups)

    def index_sentence(
        self, sentence: str, alias_groups: AliasGroups | None = None
    ) -> None:
        """
        Tokenize one sentence and queue it for training.

        For every alias group with a name present in the sentence, one extra
        sentence per other name of the group is queued, with the found name
        replaced textually in ``sentence``.
        """
        tokens = tokenize(sentence)
        if not tokens:
            return

        with self._lock:
            self.history.append(tokens)
            for variant in self._alias_variants(sentence, tokens, alias_groups or []):
                self.history.append(variant)

    def _alias_variants(
        self, sentence: str, tokens: TokenSequence, alias_groups: AliasGroups
    ) -> list[TokenSequence]:
        variants: list[TokenSequence] = []
        for group in alias_groups:
            found_index = next(
                (
                    i
                    for i, name in enumerate(group)
                    if contains_phrase(tokens, tokenize(name))
                ),
                None,
            )
            if found_index is None:
                continue

            found = group[found_index]
            name_re = re.compile(rf"(?<!\w){re.escape(found)}(?!\w)", re.IGNORECASE)
            if not name_re.search(sentence):
                # matched only after normalization, e.g. through diacritics
                log.debug(f"alias {found!r} not found verbatim, skipping group")
                continue

            for i, other in enumerate(group):
                if i == found_index:
                    continue
                variant = tokenize(name_re.sub(lambda _: other, sentence))
                if variant:
                    variants.append(variant)
        return variants

    # Training and persistence
    # ---------------------------------------------------------------------------

    @measure_time
    def train(self) -> int:
        """
        Build the model from the training history.

        In ``TrainMode.FULL`` the whole history is counted again on every call,
        so sentences indexed earlier gain weight with each call. In
        ``TrainMode.INCREMENTAL`` only sentences indexed since the last call
        are counted. The history itself is kept in both modes.

        :returns: Number of sentences counted by this call.
        """
        with self._lock:
            if self.config.train_mode is TrainMode.INCREMENTAL:
                sequences = self.history.take_untrained()
            else:
                sequences = list(self.history)
                self.history.mark_trained()

            self.model.build(sequences)
            log.info(
                f"trained on {len(sequences)} sentences ({self.config.train_mode.value}), "
                f"{len(self.model)} states"
            )
            return len(sequences)

    def load(self, missing_ok: bool = False) -> None:
        """
        Load the model from ``config.model_path``.

        :param missing_ok: Keep the current (possibly empty) model instead of
                           raising when the file does not exist.
        :raises ModelLoadError: If the file is missing, unreadable or malformed.
        """
        path = self.config.model_path
        with self._lock:
            if missing_ok and not path.exists():
                log.warning(f"no model at {path}, starting with an empty model")
                return
            self.model.load_model(path)

    def save(self) -> None:
        """Write the model to ``config.model_path``."""
        with self._lock:
            self.model.save_model(self.config.model_path)

    # Generation
    # ---------------------------------------------------------------------------

    def make_sentence(
        self,
        topic: str | None = None,
        min_length: int | None = None,
        max_length: int | None = None,
        max_attempts: int | None = None,
    ) -> str | None:
        """
        Generate a sentence that does not copy the training history.

        Walks are retried up to ``max_attempts`` times. The first novel
        sentence whose length lies strictly between ``min_length`` and
        ``max_length`` characters is returned; otherwise the last novel
        sentence found, or ``None`` if there was none.

        :param topic: Word the walk takes whenever it is offered.
        :raises ModelNotReadyError: If the model was never trained or loaded.
        """
        cfg = self.config
        min_length = cfg.min_length if min_length is None else min_length
        max_length = cfg.max_length if max_length is None else max_length
        max_attempts = cfg.attempts if max_attempts is None else max_attempts
        preferred = normalize(topic) if topic else None

        with self._lock:
            corpus_text = self.history.joined_text()
            sentence: str | None = None

            for attempt in range(max_attempts):
                try:
                    words = self.model.generate(preferred or None, max_words=cfg.max_words)
                except (StateNotFoundError, WalkLimitError) as e:
                    log.warning(f"attempt {attempt + 1}/{max_attempts} abandoned: {e}")
                    continue

                if not is_novel(
                    words, corpus_text, cfg.max_overlap_ratio, cfg.max_overlap_total
                ):
                    continue

                sentence = " ".join(words)
                if min_length < len(sentence) < max_length:
                    return sentence

            if sentence is None:
                log.debug(f"no novel sentence after {max_attempts} attempts")
            return sentence

    # Vocabulary
    # ---------------------------------------------------------------------------

    def vocabulary(self) -> set[Token]:
        with self._lock:
            return self.model.vocabulary()

    def tokenize(self, sentence: str) -> TokenSequence:
        return tokenize(sentence)

    def correction_candidates(
        self, max_distance: int | None = None
    ) -> dict[Token, list[Token]]:
        """
        Suggest merges for likely misspellings in the vocabulary.

        Feed accepted suggestions to :meth:`replace_word`; nothing is merged
        automatically.
        """
        distance = self.config.spell_distance if max_distance is None else max_distance
        return spelling.correction_candidates(self.vocabulary(), distance)

    def replace_word(self, old_word: str, new_word: str) -> None:
        """
        Merge ``old_word`` into ``new_word`` in the model.

        :raises InvalidTokenError: If either word is empty after normalization
                                   or normalizes to more than one token.
        """
        old_token, new_token = normalize(old_word), normalize(new_word)
        if not old_token:
            raise InvalidTokenError("word is empty after normalization", token=old_word)
        if not new_token:
            raise InvalidTokenError("word is empty after normalization", token=new_word)

        with self._lock:
            self.model.merge_token(old_token, new_token)

    @deprecated("Use `vocabulary()` instead.")
    def get_words(self) -> set[Token]:
        return self.vocabulary()

    @deprecated("Use `correction_candidates()` instead.")
    def get_spell_check(self) -> dict[Token, list[Token]]:
        return self.correction_candidates()


__all__ = ["SentenceSynthesizer", "is_novel"]
