"""Story text segmentation into width-bounded, timed caption lines.

Sentences are split after ``.``, ``?`` or ``!`` followed by whitespace, or on
runs of newlines.  Each sentence is then greedily word-wrapped to
``chars_per_line_limit``; a single word longer than the limit stays whole on
its own line.  Durations are a character-count estimate, clamped to the
configured minimum and maximum.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from smicap.config.schema import CaptionConfig
from smicap.models import TimedLine

logger = logging.getLogger(__name__)

_SENTENCE_BREAK_RE = re.compile(r"(?<=[.?!])\s+|\n+")


def split_sentences(story_text: str) -> list[str]:
    """Return the trimmed, non-empty sentence units of *story_text* in order."""
    pieces = _SENTENCE_BREAK_RE.split(story_text.strip())
    return [p.strip() for p in pieces if p.strip()]


def line_duration_ms(text: str, config: CaptionConfig) -> int:
    """Estimate how long *text* stays on screen, clamped to the config bounds."""
    estimate = len(text) * config.ms_per_char
    return max(config.min_duration_ms, min(config.max_duration_ms, estimate))


def wrap_sentence(sentence: str, chars_per_line_limit: int) -> list[str]:
    """Greedy word-wrap; never breaks inside a word."""
    lines: list[str] = []
    current = ""
    for word in sentence.split():
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= chars_per_line_limit:
            current += " " + word
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def segment_story(story_text: str, config: Optional[CaptionConfig] = None) -> list[TimedLine]:
    """Split *story_text* into :class:`TimedLine` objects in source order.

    Parameters
    ----------
    story_text:
        Raw narrative text.  Empty or whitespace-only text is valid and
        yields an empty list.
    config:
        Tuning parameters; defaults to ``CaptionConfig()``.

    Returns
    -------
    list[TimedLine]
        One entry per display line, each at most ``chars_per_line_limit``
        characters unless it is a single over-long word.
    """
    config = config or CaptionConfig()

    timed_lines = [
        TimedLine(text=line, duration_ms=line_duration_ms(line, config))
        for sentence in split_sentences(story_text)
        for line in wrap_sentence(sentence, config.chars_per_line_limit)
    ]

    if not timed_lines:
        logger.warning("segment_story: no content to convert to captions")
    else:
        logger.debug("segment_story: %d lines from %d characters", len(timed_lines), len(story_text))
    return timed_lines
