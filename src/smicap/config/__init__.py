"""Caption tuning configuration: pydantic schema and JSON loader."""
from smicap.config.schema import CaptionConfig
from smicap.config.loader import load_config, override_config

__all__ = [
    "CaptionConfig",
    "load_config",
    "override_config",
]
