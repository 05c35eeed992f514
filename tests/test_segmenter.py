"""Unit tests for smicap.codec.segmenter."""

from __future__ import annotations

import pytest

from smicap.codec.segmenter import line_duration_ms, segment_story, split_sentences, wrap_sentence
from smicap.config.schema import CaptionConfig
from smicap.models import TimedLine

_STORY = "Hello world. This is a short test sentence that is definitely longer than thirty characters."


class TestSplitSentences:
    def test_splits_after_terminal_punctuation(self) -> None:
        assert split_sentences("Hello world. How are you? Fine!") == [
            "Hello world.",
            "How are you?",
            "Fine!",
        ]

    def test_splits_on_newline_runs(self) -> None:
        assert split_sentences("Line one\n\n\nLine two") == ["Line one", "Line two"]

    def test_punctuation_without_whitespace_does_not_split(self) -> None:
        """'3.14' has no whitespace after the dot, so it stays in one sentence."""
        assert split_sentences("Pi is 3.14 roughly") == ["Pi is 3.14 roughly"]

    def test_empty_and_whitespace_only(self) -> None:
        assert split_sentences("") == []
        assert split_sentences("   \n\n  \t ") == []

    def test_pieces_are_trimmed(self) -> None:
        assert split_sentences("  First.   Second.  ") == ["First.", "Second."]


class TestWrapSentence:
    def test_greedy_wrap_at_thirty(self) -> None:
        sentence = "This is a short test sentence that is definitely longer than thirty characters."
        assert wrap_sentence(sentence, 30) == [
            "This is a short test sentence",
            "that is definitely longer than",
            "thirty characters.",
        ]

    def test_line_exactly_at_limit_is_kept(self) -> None:
        """'that is definitely longer than' is exactly 30 characters."""
        lines = wrap_sentence("that is definitely longer than", 30)
        assert lines == ["that is definitely longer than"]
        assert len(lines[0]) == 30

    def test_long_word_is_not_broken(self) -> None:
        word = "supercalifragilisticexpialidocious"
        assert wrap_sentence(f"a {word} b", 10) == ["a", word, "b"]

    def test_collapses_internal_whitespace(self) -> None:
        assert wrap_sentence("one   two\tthree", 30) == ["one two three"]


class TestLineDuration:
    def test_clamped_to_minimum(self) -> None:
        """'Hi.' -> 3 * 120 = 360 ms, raised to the 1500 ms floor."""
        assert line_duration_ms("Hi.", CaptionConfig()) == 1500

    def test_clamped_to_maximum(self) -> None:
        """60 chars * 120 = 7200 ms, capped at 7000 ms."""
        assert line_duration_ms("x" * 60, CaptionConfig()) == 7000

    def test_proportional_inside_bounds(self) -> None:
        assert line_duration_ms("x" * 29, CaptionConfig()) == 3480

    def test_zero_ms_per_char_gives_minimum(self) -> None:
        assert line_duration_ms("anything at all", CaptionConfig(ms_per_char=0)) == 1500


class TestSegmentStory:
    def test_concrete_story(self) -> None:
        lines = segment_story(_STORY)
        assert lines == [
            TimedLine("Hello world.", 1500),
            TimedLine("This is a short test sentence", 3480),
            TimedLine("that is definitely longer than", 3600),
            TimedLine("thirty characters.", 2160),
        ]

    def test_lines_within_width(self) -> None:
        for line in segment_story(_STORY):
            assert 0 < len(line.text) <= 30

    def test_empty_story_yields_no_lines(self) -> None:
        assert segment_story("") == []
        assert segment_story("  \n \n ") == []

    def test_sentence_boundary_seals_partial_line(self) -> None:
        """A short sentence is never merged with the start of the next one."""
        lines = segment_story("Hi. Yo.", CaptionConfig(chars_per_line_limit=80))
        assert [line.text for line in lines] == ["Hi.", "Yo."]

    def test_order_follows_source(self) -> None:
        lines = segment_story("Alpha beta.\nGamma delta!\nEpsilon?")
        assert [line.text for line in lines] == ["Alpha beta.", "Gamma delta!", "Epsilon?"]

    @pytest.mark.parametrize("min_ms,max_ms,ms_per_char", [
        (1500, 7000, 120),
        (100, 200, 50),
        (1000, 1000, 10),
        (1, 100000, 0),
    ])
    def test_durations_within_bounds(self, min_ms: int, max_ms: int, ms_per_char: int) -> None:
        config = CaptionConfig(min_duration_ms=min_ms, max_duration_ms=max_ms, ms_per_char=ms_per_char)
        text = _STORY + " A much longer closing sentence keeps going and going until it wraps a few times over."
        for line in segment_story(text, config):
            assert min_ms <= line.duration_ms <= max_ms
