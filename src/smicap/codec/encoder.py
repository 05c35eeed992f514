"""SAMI caption encoder.

Turns a sequence of :class:`TimedLine` into a SAMI document in one forward
pass.  Every line produces exactly two SYNC events: a content event showing
the cumulative visible-line buffer, and a clearing event (``&nbsp;``) placed
in the gap before the next line starts.

Timing
------
The first line starts at ``gap_between_syncs_ms``, never at zero.  For a line
ending at ``end``, the next line starts at ``end + gap`` and the clearing
event sits at ``next_start - gap // 2``, so that::

    start < end < clear < next_start

The last line is cleared at ``end + 1``.

Visible-line buffer
-------------------
Up to ``cumulative_lines_limit`` lines are shown together, joined with
``<br>``.  When the buffer is full it is emptied before the next line is
added: the screen resets to a single line instead of scrolling.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from smicap.config.schema import CaptionConfig
from smicap.models import BLANK_PAYLOAD, CaptionEvent, TimedLine

logger = logging.getLogger(__name__)

LINE_BREAK = "<br>"


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``; ampersand first so entities are not re-escaped."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def clear_time_ms(end_ms: int, gap_ms: int, is_last: bool) -> int:
    """Timestamp of the clearing SYNC that follows a line ending at *end_ms*."""
    if is_last:
        return end_ms + 1

    next_start = end_ms + gap_ms
    offset = gap_ms // 2 if gap_ms > 1 else 1
    clear = max(end_ms + 1, next_start - offset)
    if clear >= next_start:
        clear = next_start - 1
    if clear <= end_ms:
        clear = end_ms + 1
    return clear


def plan_events(lines: Sequence[TimedLine], config: Optional[CaptionConfig] = None) -> list[CaptionEvent]:
    """Compute the ordered SYNC events for *lines* without rendering markup."""
    config = config or CaptionConfig()
    gap_ms = config.gap_between_syncs_ms

    events: list[CaptionEvent] = []
    visible: list[str] = []
    current_ms = gap_ms

    for i, line in enumerate(lines):
        if len(visible) >= config.cumulative_lines_limit:
            visible = []
        visible.append(escape_text(line.text))

        start_ms = current_ms
        end_ms = start_ms + line.duration_ms
        events.append(CaptionEvent(start_ms=start_ms, payload=LINE_BREAK.join(visible)))

        is_last = i == len(lines) - 1
        events.append(CaptionEvent(start_ms=clear_time_ms(end_ms, gap_ms, is_last), payload=BLANK_PAYLOAD))

        current_ms = end_ms + gap_ms

    logger.debug("plan_events: %d lines -> %d SYNC events", len(lines), len(events))
    return events


def render_document(events: Iterable[CaptionEvent], config: Optional[CaptionConfig] = None) -> str:
    """Render *events* as a complete SAMI document."""
    config = config or CaptionConfig()
    css_class = config.css_class

    parts = [
        "<SAMI>\n",
        "<HEAD>\n",
        f"<TITLE>{escape_text(config.title)}</TITLE>\n",
        '<STYLE TYPE="text/css">\n',
        "<!--\n",
        "P { font-family: Arial, sans-serif; text-align: center; }\n",
        f".{css_class} {{ Name: {css_class}; lang: {config.language}; SAMIType: CC; }}\n",
        "-->\n",
        "</STYLE>\n",
        "</HEAD>\n",
        "<BODY>\n",
    ]
    parts.extend(
        f"<SYNC Start={event.start_ms}><P Class={css_class}>{event.payload}</P></SYNC>\n"
        for event in events
    )
    parts.append("</BODY>\n</SAMI>\n")
    return "".join(parts)


def encode_lines(lines: Sequence[TimedLine], config: Optional[CaptionConfig] = None) -> str:
    """Encode *lines* into a SAMI document.

    An empty *lines* sequence yields a document with an empty ``<BODY>``,
    which decodes to no segments.
    """
    config = config or CaptionConfig()
    if not lines:
        logger.warning("encode_lines: nothing to caption, writing an empty body")
    return render_document(plan_events(lines, config), config)
