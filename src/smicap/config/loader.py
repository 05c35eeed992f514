from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from smicap.config.schema import CaptionConfig
from smicap.errors import CaptionConfigError


def _summarize(e: ValidationError) -> str:
    return "; ".join(
        f"{' -> '.join(str(x) for x in err['loc']) or 'config'}: {err['msg']}"
        for err in e.errors()
    )


def load_config(path: Path) -> CaptionConfig:
    """Load and validate a caption config JSON file. Raises CaptionConfigError on failure."""
    try:
        return CaptionConfig.model_validate_json(
            path.read_text(encoding="utf-8")
        )
    except ValidationError as e:
        raise CaptionConfigError(str(path), f"Schema validation failed: {_summarize(e)}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CaptionConfigError(str(path), str(e)) from e


def override_config(base: Optional[CaptionConfig] = None, **overrides: Any) -> CaptionConfig:
    """Return *base* with every non-None override applied, revalidated as a whole."""
    data = (base or CaptionConfig()).model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return CaptionConfig.model_validate(data)
    except ValidationError as e:
        raise CaptionConfigError("<overrides>", f"Schema validation failed: {_summarize(e)}") from e
