"""Unit tests for chat message ingestion."""

import pytest

from markovtalk import SentenceSynthesizer, SynthesizerConfig, ingest_message
from markovtalk.ingest import is_link, prepare_message


@pytest.fixture
def synth(tmp_path):
    """Return an empty synthesizer."""
    return SentenceSynthesizer(SynthesizerConfig(model_path=tmp_path / "markov.json"))


def test_is_link():
    """Messages starting with a URL are links."""
    assert is_link("https://example.com/page")
    assert is_link("http://www.example.org")
    assert not is_link("see https://example.com")


def test_prepare_message_turns_line_breaks_into_stops():
    """Line breaks become sentence breaks without doubling punctuation."""
    assert prepare_message("hello there\nhow are you") == "hello there. how are you"
    assert prepare_message("first one.\r\nsecond") == "first one. second"
    assert prepare_message("trailing\n") == "trailing."
    assert prepare_message("really?\nyes") == "really? yes"


def test_prepare_message_keeps_inline_punctuation():
    """Punctuation away from line breaks is left as written."""
    assert prepare_message("wait... what") == "wait... what"
    assert prepare_message("no. way") == "no. way"
    assert prepare_message("wait...\nwhat") == "wait... what"


def test_ingest_ignores_links(synth):
    """Links are not indexed."""
    assert not ingest_message(synth, "https://example.com/some/page")
    assert len(synth.history) == 0


def test_ingest_single_sentence(synth):
    """A one-line message is indexed as one sentence."""
    assert ingest_message(synth, "Bob likes cake", [["Bob", "Robert"]])
    assert list(synth.history) == [["bob", "likes", "cake"], ["robert", "likes", "cake"]]


def test_ingest_multi_line(synth):
    """Each line of a message is its own sentence."""
    assert ingest_message(synth, "hello there\nhow are you")
    assert list(synth.history) == [["hello", "there"], ["how", "are", "you"]]


def test_ingest_multi_sentence(synth):
    """Messages with several sentences are split."""
    assert ingest_message(synth, "I like cake. You like pie")
    assert list(synth.history) == [["i", "like", "cake"], ["you", "like", "pie"]]
