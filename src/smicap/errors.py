from pathlib import Path


class SmicapError(Exception):
    """Base class for all smicap errors."""


class CaptionParseError(SmicapError):
    def __init__(self, event_index: int, tag: str, detail: str) -> None:
        super().__init__(
            f"Cannot parse SYNC event #{event_index}: {tag}\n"
            f"  Cause: {detail}\n"
            f"  Check: Does every <SYNC> tag carry an integer Start=<milliseconds> attribute?\n"
            f"  Tip: A malformed timestamp means the document is corrupt; regenerate it with `smicap encode`."
        )
        self.event_index = event_index
        self.tag = tag
        self.detail = detail


class CaptionConfigError(SmicapError):
    def __init__(self, source: str, detail: str) -> None:
        super().__init__(
            f"Invalid caption configuration from '{source}'.\n"
            f"  Cause: {detail}\n"
            f"  Check: Is min_duration_ms <= max_duration_ms and cumulative_lines_limit >= 1?\n"
            f"  Tip: Omit a field to fall back to its default value."
        )
        self.source = source
        self.detail = detail


class CaptionFileError(SmicapError):
    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(
            f"Cannot access caption file '{path.name}'.\n"
            f"  Cause: {detail}\n"
            f"  Check: Does the file exist and is it UTF-8 text?"
        )
        self.path = path
        self.detail = detail
