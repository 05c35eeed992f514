"""Unit tests for smicap.export.

Exported files are re-read with pysubs2 to check what a player would load.
"""

from __future__ import annotations

from pathlib import Path

import pysubs2
import pytest

from smicap.errors import CaptionFileError
from smicap.export import (
    displayable_segments,
    export_segments,
    segments_to_records,
    segments_to_subtitles,
)
from smicap.models import CaptionSegment

_SEGMENTS = [
    CaptionSegment(200, 1800, 1600, "Hello world."),
    CaptionSegment(1800, 1900, 100, ""),
    CaptionSegment(1900, 5480, 3580, "Hello world.\nSecond line"),
    CaptionSegment(5480, None, None, ""),
]


class TestDisplayableSegments:
    def test_drops_blank_and_open_ended(self) -> None:
        assert [s.start_ms for s in displayable_segments(_SEGMENTS)] == [200, 1900]

    def test_open_ended_text_segment_dropped(self) -> None:
        segments = [CaptionSegment(0, None, None, "dangling")]
        assert displayable_segments(segments) == []

    def test_whitespace_text_dropped(self) -> None:
        segments = [CaptionSegment(0, 10, 10, "  \n ")]
        assert displayable_segments(segments) == []


class TestSegmentsToRecords:
    def test_record_fields(self) -> None:
        records = segments_to_records(_SEGMENTS[:1])
        assert records == [
            {"start_ms": 200, "end_ms": 1800, "duration_ms": 1600, "text": "Hello world."}
        ]

    def test_none_preserved(self) -> None:
        assert segments_to_records(_SEGMENTS[-1:])[0]["end_ms"] is None


class TestSegmentsToSubtitles:
    def test_only_displayable_events(self) -> None:
        subs = segments_to_subtitles(_SEGMENTS)
        assert len(subs) == 2
        assert subs[0].start == 200
        assert subs[0].end == 1800

    def test_multiline_text_preserved(self) -> None:
        subs = segments_to_subtitles(_SEGMENTS)
        assert subs[1].plaintext == "Hello world.\nSecond line"


class TestExportSegments:
    def test_export_srt(self, tmp_path: Path) -> None:
        p = tmp_path / "out.srt"
        count = export_segments(_SEGMENTS, p)

        assert count == 2
        loaded = pysubs2.load(str(p), encoding="utf-8")
        assert len(loaded) == 2
        assert loaded[0].start == 200
        assert loaded[0].end == 1800
        assert loaded[0].plaintext == "Hello world."

    def test_export_vtt(self, tmp_path: Path) -> None:
        p = tmp_path / "out.vtt"
        export_segments(_SEGMENTS, p)
        assert p.read_text(encoding="utf-8").startswith("WEBVTT")

    @pytest.mark.parametrize("suffix", [".srt", ".vtt"])
    def test_braces_kept_as_text(self, tmp_path: Path, suffix: str) -> None:
        """'{curly}' in caption text is literal, not an ASS override tag."""
        p = tmp_path / f"out{suffix}"
        segments = [
            CaptionSegment(0, 1000, 1000, "Use {curly} braces"),
            CaptionSegment(1000, 2000, 1000, "Two\nlines"),
        ]
        export_segments(segments, p)

        written = p.read_text(encoding="utf-8")
        assert "Use {curly} braces" in written
        assert "Two\nlines" in written

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        with pytest.raises(CaptionFileError):
            export_segments(_SEGMENTS, tmp_path / "out.docx")
        assert not (tmp_path / "out.docx").exists()
