"""Turn raw chat messages into indexed training sentences."""

import logging
from typing import TYPE_CHECKING

import regex as re

from .types import AliasGroups

if TYPE_CHECKING:
    from .synthesizer import SentenceSynthesizer

log = logging.getLogger(__name__)

_link_re = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}"
)
# a line break, with any terminal punctuation already ending the line
_line_break_re = re.compile(r"([.?!])?[ \t]*(?:\r?\n|\r)")
# a period followed by more text means several sentences
_multi_sentence_re = re.compile(r"\.[\w\W]+")


def is_link(text: str) -> bool:
    """Return ``True`` if the message starts with an http(s) URL."""
    return _link_re.match(text) is not None


def prepare_message(text: str) -> str:
    """Turn line breaks into sentence breaks."""
    message = _line_break_re.sub(lambda m: f"{m.group(1) or '.'} ", text)
    return message.strip()


def ingest_message(
    synth: "SentenceSynthesizer",
    text: str,
    alias_groups: AliasGroups | None = None,
) -> bool:
    """
    Index a chat message into ``synth``.

    Links are ignored. Multi-sentence messages are split into sentences,
    anything else is indexed as one sentence. Training is left to the caller.

    :returns: ``False`` if the message was ignored.
    """
    if is_link(text):
        log.debug("ignoring link message")
        return False

    message = prepare_message(text)
    if _multi_sentence_re.search(message):
        if not message.endswith("."):
            message = f"{message}."
        synth.index(message, alias_groups)
    else:
        synth.index_sentence(message, alias_groups)
    return True


__all__ = ["is_link", "prepare_message", "ingest_message"]
