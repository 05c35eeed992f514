"""Consumer-side helpers for decoded caption segments.

The decoder returns every SYNC event, clearing events included.  Consumers
keep only segments that have text and a known end time; this module applies
that filter and converts the result to plain records or to other subtitle
formats via pysubs2.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path

import pysubs2

from smicap.errors import CaptionFileError
from smicap.models import CaptionSegment
from smicap.storage import write_document

logger = logging.getLogger(__name__)

# Output extension -> pysubs2 format identifier
EXPORT_FORMATS: dict[str, str] = {
    ".srt": "srt",
    ".vtt": "vtt",
    ".ass": "ass",
    ".ssa": "ssa",
}
_PLAIN_TEXT_FORMATS = {"srt", "vtt"}


def displayable_segments(segments: Iterable[CaptionSegment]) -> list[CaptionSegment]:
    """Drop clearing events and the open-ended last segment."""
    return [s for s in segments if s.is_displayable]


def segments_to_records(segments: Iterable[CaptionSegment]) -> list[dict]:
    return [asdict(s) for s in segments]


def segments_to_subtitles(segments: Iterable[CaptionSegment]) -> pysubs2.SSAFile:
    """Build a pysubs2 subtitle file from the displayable *segments*."""
    subs = pysubs2.SSAFile()
    for segment in displayable_segments(segments):
        event = pysubs2.SSAEvent(start=segment.start_ms, end=segment.end_ms)
        event.plaintext = segment.text
        subs.append(event)
    return subs


def export_segments(segments: Iterable[CaptionSegment], output_path: Path) -> int:
    """Write displayable *segments* to *output_path*, format chosen by extension.

    Returns
    -------
    int
        Number of subtitle events written.

    Raises
    ------
    CaptionFileError
        If the extension is not one of :data:`EXPORT_FORMATS` or the file
        cannot be written.
    """
    format_ = EXPORT_FORMATS.get(output_path.suffix.lower())
    if format_ is None:
        raise CaptionFileError(
            output_path,
            f"Unsupported export format '{output_path.suffix}'. "
            f"Supported: {', '.join(sorted(EXPORT_FORMATS))}",
        )

    subs = segments_to_subtitles(segments)
    # Text comes in through .plaintext, so braces are literal, not ASS override tags.
    options = {"keep_ssa_tags": True} if format_ in _PLAIN_TEXT_FORMATS else {}
    write_document(output_path, subs.to_string(format_, **options))

    logger.info("export: wrote %d events to %s (%s)", len(subs), output_path.name, format_)
    return len(subs)
