"""End-to-end story processing: segment, encode, and decode in one call."""
from __future__ import annotations

import logging
from typing import Optional

from smicap.codec import decode_document, encode_lines, segment_story
from smicap.config.schema import CaptionConfig
from smicap.export import displayable_segments
from smicap.models import CaptionSegment

logger = logging.getLogger(__name__)


def story_to_document(story_text: str, config: Optional[CaptionConfig] = None) -> str:
    """Segment *story_text* and encode it as a SAMI document."""
    config = config or CaptionConfig()
    return encode_lines(segment_story(story_text, config), config)


def story_to_segments(story_text: str, config: Optional[CaptionConfig] = None) -> list[CaptionSegment]:
    """Return the displayable caption segments for *story_text*.

    The story goes through the full document round trip so callers see
    exactly what a player reading the SAMI file would show.
    """
    all_segments = decode_document(story_to_document(story_text, config))
    segments = displayable_segments(all_segments)
    logger.debug("story_to_segments: kept %d of %d segments", len(segments), len(all_segments))
    return segments
