from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_TITLE = "Generated Subtitle"
DEFAULT_CSS_CLASS = "KRCC"
DEFAULT_LANGUAGE = "ko-KR"


class CaptionConfig(BaseModel):
    """Tuning parameters shared by the segmenter and the encoder.

    Every tunable lives here; components receive an instance explicitly and
    never consult module-level defaults of their own.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    chars_per_line_limit: int = Field(default=30, ge=1, description="Max characters per line, spaces included")
    min_duration_ms: int = Field(default=1500, ge=1, description="Shortest display time for one line")
    max_duration_ms: int = Field(default=7000, ge=1, description="Longest display time for one line")
    ms_per_char: int = Field(default=120, ge=0, description="Display time allotted per character")
    # Below 2 the clearing SYNC can no longer sit strictly between two lines.
    gap_between_syncs_ms: int = Field(default=200, ge=2, description="Gap between one line's end and the next start")
    cumulative_lines_limit: int = Field(default=4, ge=1, description="Lines shown together before the screen resets")

    title: str = DEFAULT_TITLE
    css_class: str = Field(default=DEFAULT_CSS_CLASS, pattern=r"^[A-Za-z][A-Za-z0-9_-]*$")
    language: str = Field(default=DEFAULT_LANGUAGE, pattern=r"^[A-Za-z]{2,3}(-[A-Za-z0-9]+)*$")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def durations_ordered(self) -> "CaptionConfig":
        if self.min_duration_ms > self.max_duration_ms:
            raise ValueError(
                f"min_duration_ms ({self.min_duration_ms}) must be <= max_duration_ms ({self.max_duration_ms})"
            )
        return self
