"""smicap CLI entry point.

Wraps the caption codec behind four commands:

- ``encode``  story text -> SAMI document
- ``decode``  SAMI document -> segment table or JSON
- ``export``  SAMI document -> SRT / VTT / ASS via pysubs2
- ``preview`` story text -> segment table, nothing written

Every typed error is rendered as a Rich panel with exit code 1.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from smicap.codec import decode_document, encode_lines, segment_story
from smicap.config.loader import load_config, override_config
from smicap.config.schema import CaptionConfig
from smicap.errors import SmicapError
from smicap.export import EXPORT_FORMATS, displayable_segments, export_segments, segments_to_records
from smicap.models import CaptionSegment
from smicap.pipeline import story_to_segments
from smicap.storage import read_text_file, write_document

app = typer.Typer(
    name="smicap",
    help="smicap: turn story text into timed SAMI captions and back.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

# Valid input formats
_VALID_STORY_EXTS = {".txt", ".md"}
_VALID_DOCUMENT_EXTS = {".smi", ".sami"}

ConfigOpt = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", dir_okay=False, resolve_path=True, help="Caption config JSON file."),
]
TitleOpt = Annotated[Optional[str], typer.Option("--title", help="Document <TITLE> text.")]
CharsOpt = Annotated[Optional[int], typer.Option("--chars-per-line", help="Max characters per caption line.")]
MinDurationOpt = Annotated[Optional[int], typer.Option("--min-duration", help="Minimum display time per line (ms).")]
MaxDurationOpt = Annotated[Optional[int], typer.Option("--max-duration", help="Maximum display time per line (ms).")]
MsPerCharOpt = Annotated[Optional[int], typer.Option("--ms-per-char", help="Display time per character (ms).")]
GapOpt = Annotated[Optional[int], typer.Option("--gap", help="Gap between consecutive captions (ms).")]
LinesOpt = Annotated[Optional[int], typer.Option("--lines", help="Lines shown together before the screen resets.")]


@app.callback()
def _configure_logging(
    verbose: Annotated[bool, typer.Option("--verbose", help="Show debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _input_error(message: str) -> NoReturn:
    err_console.print(Panel(message, title="[red]Input Error[/red]", border_style="red"))
    raise typer.Exit(1)


def _validate_input(path: Path, valid_exts: set[str], kind: str) -> None:
    """Extension check first, then existence, so wrong formats never reach the filesystem."""
    if path.suffix.lower() not in valid_exts:
        _input_error(
            f"Unsupported {kind} format: [bold]{escape(path.suffix or path.name)}[/bold]\n"
            f"Supported formats: {', '.join(sorted(valid_exts))}"
        )
    if not path.exists():
        _input_error(
            f"File not found: [bold]{escape(str(path))}[/bold]\n"
            f"Check that the path is correct and the file is accessible."
        )


def _resolve_config(config_path: Optional[Path], **overrides) -> CaptionConfig:
    base = load_config(config_path) if config_path is not None else None
    return override_config(base, **overrides)


def _print_segments(segments: list[CaptionSegment], title: str) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start (ms)", justify="right")
    table.add_column("End (ms)", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Text")
    for i, segment in enumerate(segments, start=1):
        table.add_row(
            str(i),
            str(segment.start_ms),
            "-" if segment.end_ms is None else str(segment.end_ms),
            "-" if segment.duration_ms is None else str(segment.duration_ms),
            escape(segment.text),
        )
    console.print(table)


def _pipeline_error(e: SmicapError) -> NoReturn:
    err_console.print(Panel(escape(str(e)), title="[red]Caption Error[/red]", border_style="red"))
    raise typer.Exit(1)


@app.command()
def encode(
    story: Annotated[Path, typer.Argument(dir_okay=False, resolve_path=True, help="Story text file (TXT or MD).")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", dir_okay=False, resolve_path=True, help="Output .smi path (default: next to the story)."),
    ] = None,
    config: ConfigOpt = None,
    title: TitleOpt = None,
    chars_per_line: CharsOpt = None,
    min_duration: MinDurationOpt = None,
    max_duration: MaxDurationOpt = None,
    ms_per_char: MsPerCharOpt = None,
    gap: GapOpt = None,
    lines: LinesOpt = None,
) -> None:
    """Encode a story text file into a SAMI caption document."""
    _validate_input(story, _VALID_STORY_EXTS, "story")
    output = output or story.with_suffix(".smi")
    if output.suffix.lower() not in _VALID_DOCUMENT_EXTS:
        _input_error(
            f"Unsupported output format: [bold]{escape(output.suffix or output.name)}[/bold]\n"
            f"Supported formats: {', '.join(sorted(_VALID_DOCUMENT_EXTS))}"
        )

    try:
        caption_config = _resolve_config(
            config,
            title=title,
            chars_per_line_limit=chars_per_line,
            min_duration_ms=min_duration,
            max_duration_ms=max_duration,
            ms_per_char=ms_per_char,
            gap_between_syncs_ms=gap,
            cumulative_lines_limit=lines,
        )
        timed_lines = segment_story(read_text_file(story), caption_config)
        write_document(output, encode_lines(timed_lines, caption_config))
    except SmicapError as e:
        _pipeline_error(e)

    if not timed_lines:
        console.print(f"[yellow]Warning:[/] No content to caption, wrote an empty document to [dim]{escape(output.name)}[/dim]")
        return
    console.print(Panel(
        f"[bold green]Encoded {len(timed_lines)} caption lines[/bold green]\n\n"
        f"  SYNC events: {len(timed_lines) * 2}\n"
        f"  Output:      [dim]{escape(str(output))}[/dim]",
        title="[green]Captions Ready[/green]",
        border_style="green",
    ))


@app.command()
def decode(
    document: Annotated[Path, typer.Argument(dir_okay=False, resolve_path=True, help="SAMI document (.smi).")],
    json_output: Annotated[bool, typer.Option("--json", help="Print segments as JSON instead of a table.")] = False,
    include_blank: Annotated[bool, typer.Option("--all", help="Include clearing events and the open-ended last segment.")] = False,
) -> None:
    """Decode a SAMI document into timed caption segments."""
    _validate_input(document, _VALID_DOCUMENT_EXTS, "caption document")

    try:
        segments = decode_document(read_text_file(document))
    except SmicapError as e:
        _pipeline_error(e)

    if not include_blank:
        segments = displayable_segments(segments)

    if json_output:
        typer.echo(json.dumps(segments_to_records(segments), ensure_ascii=False, indent=2))
    else:
        _print_segments(segments, title=document.name)


@app.command()
def export(
    document: Annotated[Path, typer.Argument(dir_okay=False, resolve_path=True, help="SAMI document (.smi).")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", dir_okay=False, resolve_path=True, help="Output subtitle file (.srt, .vtt, .ass, .ssa)."),
    ],
) -> None:
    """Convert a SAMI document into another subtitle format."""
    _validate_input(document, _VALID_DOCUMENT_EXTS, "caption document")
    if output.suffix.lower() not in EXPORT_FORMATS:
        _input_error(
            f"Unsupported output format: [bold]{escape(output.suffix or output.name)}[/bold]\n"
            f"Supported formats: {', '.join(sorted(EXPORT_FORMATS))}"
        )

    try:
        count = export_segments(decode_document(read_text_file(document)), output)
    except SmicapError as e:
        _pipeline_error(e)

    console.print(f"[green]Exported {count} captions to [dim]{escape(output.name)}[/dim]")


@app.command()
def preview(
    story: Annotated[Path, typer.Argument(dir_okay=False, resolve_path=True, help="Story text file (TXT or MD).")],
    config: ConfigOpt = None,
    chars_per_line: CharsOpt = None,
    min_duration: MinDurationOpt = None,
    max_duration: MaxDurationOpt = None,
    ms_per_char: MsPerCharOpt = None,
    gap: GapOpt = None,
    lines: LinesOpt = None,
) -> None:
    """Show the captions a story would produce without writing any file."""
    _validate_input(story, _VALID_STORY_EXTS, "story")

    try:
        caption_config = _resolve_config(
            config,
            chars_per_line_limit=chars_per_line,
            min_duration_ms=min_duration,
            max_duration_ms=max_duration,
            ms_per_char=ms_per_char,
            gap_between_syncs_ms=gap,
            cumulative_lines_limit=lines,
        )
        segments = story_to_segments(read_text_file(story), caption_config)
    except SmicapError as e:
        _pipeline_error(e)

    _print_segments(segments, title=story.name)
