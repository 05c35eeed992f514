"""SAMI caption decoder.

Parses a SAMI document into :class:`CaptionSegment` objects.  The decoder
knows nothing about lines or buffers: it sees a flat stream of SYNC events,
sorts them by start time and derives each segment's end from its successor.

The parser is lenient about structure (``<P>`` may be missing or carry extra
attributes, closing tags may be absent at the tail) but strict about
timestamps: a SYNC without an integer ``Start`` raises
:class:`~smicap.errors.CaptionParseError`.
"""

from __future__ import annotations

import logging
import re

from smicap.errors import CaptionParseError
from smicap.models import CaptionSegment

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL

_BODY_RE = re.compile(r"<BODY\b[^>]*>(.*?)(?:</BODY\s*>|\Z)", _FLAGS)
# Payload runs until </SYNC>, the next <SYNC, or the end of the body.
_SYNC_RE = re.compile(r"(<SYNC\b[^>]*>)(.*?)(?=</SYNC\s*>|<SYNC\b|\Z)", _FLAGS)
_START_ATTR_RE = re.compile(r"\bStart\s*=\s*[\"']?([^\s\"'>]*)", _FLAGS)
_BR_RE = re.compile(r"<br\s*/?>", _FLAGS)
_TAG_RE = re.compile(r"<[^>]+>")
_DIGITS_RE = re.compile(r"[0-9]+")
_ENTITY_RE = re.compile(r"&(amp|lt|gt|nbsp);")

_ENTITIES = {"amp": "&", "lt": "<", "gt": ">", "nbsp": " "}


def clean_payload(html: str) -> str:
    """Convert a raw SYNC payload to plain text.

    ``<br>`` becomes a newline, remaining tags (``<P>`` included) are
    dropped, and the four supported entities are decoded in a single pass
    so that ``&amp;lt;`` yields the literal ``&lt;``.  Tags are stripped
    before entities are decoded, so escaped ``<`` and ``>`` survive.
    """
    text = _BR_RE.sub("\n", html)
    text = _TAG_RE.sub("", text)
    text = _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(1)], text)
    return text.strip()


def _parse_start(index: int, tag: str) -> int:
    match = _START_ATTR_RE.search(tag)
    if match is None:
        raise CaptionParseError(index, tag, "SYNC tag has no Start attribute")
    value = match.group(1)
    if not _DIGITS_RE.fullmatch(value):
        raise CaptionParseError(index, tag, f"Start={value!r} is not a non-negative integer")
    return int(value)


def extract_sync_events(document: str) -> list[tuple[int, str]]:
    """Return ``(start_ms, cleaned_text)`` pairs in document order.

    Raises
    ------
    CaptionParseError
        If a SYNC tag has a missing or non-integer ``Start`` attribute.
    """
    body_match = _BODY_RE.search(document)
    if body_match is None:
        logger.warning("decode: no <BODY> section found")
        return []

    events: list[tuple[int, str]] = []
    for index, match in enumerate(_SYNC_RE.finditer(body_match.group(1))):
        tag, payload = match.group(1), match.group(2)
        events.append((_parse_start(index, tag), clean_payload(payload)))
    return events


def decode_document(document: str) -> list[CaptionSegment]:
    """Parse *document* into segments ordered by start time.

    Parameters
    ----------
    document:
        Full SAMI document text.

    Returns
    -------
    list[CaptionSegment]
        One segment per SYNC event, clearing events included.  Each
        segment ends where the next one starts; the last has
        ``end_ms`` and ``duration_ms`` set to ``None``.  Empty when the
        document has no body or no SYNC events.
    """
    events = extract_sync_events(document)
    if not events:
        logger.warning("decode: no SYNC events in document")
        return []

    # sorted() is stable: equal start times keep document order
    events = sorted(events, key=lambda e: e[0])

    segments: list[CaptionSegment] = []
    for i, (start_ms, text) in enumerate(events):
        end_ms = events[i + 1][0] if i + 1 < len(events) else None
        segments.append(
            CaptionSegment(
                start_ms=start_ms,
                end_ms=end_ms,
                duration_ms=end_ms - start_ms if end_ms is not None else None,
                text=text,
            )
        )

    logger.debug("decode: %d segments", len(segments))
    return segments
