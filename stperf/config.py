"""Profiler configuration with environment and file overrides.

Precedence (highest to lowest):
1. Explicit overrides
2. Environment variables (``STPERF_*``)
3. JSON config file
4. Defaults
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .format import FORMATS
from .perf_logging import get_logger

logger = get_logger()

ENV_VARS = {
    "enabled": "STPERF_ENABLED",
    "format": "STPERF_FORMAT",
    "decimals": "STPERF_DECIMALS",
    "log_level": "STPERF_LOG_LEVEL",
    "log_format": "STPERF_LOG_FORMAT",
    "log_file": "STPERF_LOG_FILE",
}


class ProfilerConfig(BaseModel):
    """Runtime settings for recording and reporting."""

    enabled: bool = Field(default=True, description="Record scopes at all")
    format: str = Field(default="streamlined", description="Report glyph preset")
    decimals: int = Field(
        default=0, ge=0, le=9, description="Decimals on the ms/loop figure"
    )
    log_level: str = Field(default="INFO", description="Console log level")
    log_format: str = Field(default="text", description="Log format: text or json")
    log_file: Path | None = Field(
        default=None, description="Rotating log file receiving DEBUG records"
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        name = v.strip().lower()
        if name not in FORMATS:
            raise ValueError(
                f"unknown format {v!r}, expected one of {', '.join(FORMATS)}"
            )
        return name

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log level {v!r}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in {"text", "json"}:
            raise ValueError(f"invalid log format {v!r}, expected text or json")
        return v


def _load_file(config_file: Path) -> dict[str, Any]:
    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Config file not found: {config_file}", config_file=str(config_file)
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {e}", config_file=str(config_file)
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a JSON object", config_file=str(config_file)
        )
    return data


def load_config(config_file: Path | None = None, **overrides: Any) -> ProfilerConfig:
    """Load configuration from all sources.

    Args:
        config_file: Optional JSON file with ``ProfilerConfig`` fields.
        **overrides: Explicit field values, applied last.

    Returns:
        Validated configuration.

    Raises:
        ConfigurationError: If the file or any value is invalid.
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        file_settings = _load_file(Path(config_file))
        config_dict.update(file_settings)
        logger.debug(f"Loaded {len(file_settings)} settings from {config_file}")

    env_count = 0
    for key, env_var in ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is not None:
            config_dict[key] = value
            env_count += 1
    if env_count > 0:
        logger.debug(f"Applied {env_count} environment variables")

    config_dict.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ProfilerConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid profiler configuration: {e.errors()[0]['msg']}",
            config_file=str(config_file) if config_file else None,
        ) from e
