from dataclasses import dataclass
from typing import Optional

BLANK_PAYLOAD = "&nbsp;"


@dataclass(frozen=True)
class TimedLine:
    """A width-bounded caption line paired with its estimated display time."""

    text: str           # Non-empty, already wrapped to chars_per_line_limit
    duration_ms: int    # Clamped to [min_duration_ms, max_duration_ms]

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValueError("TimedLine text must not be empty")
        # The encoder needs start < end for every line.
        if self.duration_ms < 1:
            raise ValueError(f"TimedLine duration_ms must be >= 1, got {self.duration_ms}")


@dataclass(frozen=True)
class CaptionEvent:
    """A single SYNC point emitted by the encoder, content or clearing."""

    start_ms: int
    payload: str        # Escaped lines joined with <br>, or BLANK_PAYLOAD

    @property
    def is_blank(self) -> bool:
        return self.payload == BLANK_PAYLOAD


@dataclass
class CaptionSegment:
    """A decoded caption time range with its cleaned text."""

    start_ms: int
    end_ms: Optional[int]       # Start of the next segment; None for the last one
    duration_ms: Optional[int]  # end_ms - start_ms, None when end_ms is None
    text: str                   # Entity-decoded, tag-stripped, trimmed

    @property
    def is_displayable(self) -> bool:
        return self.end_ms is not None and bool(self.text.strip())
