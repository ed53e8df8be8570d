"""Configuration loading and validation for termtop.

Settings are merged in this order (later overrides earlier):
1. Defaults declared on the models below
2. A YAML config file, if one is given or found
3. Overrides passed on the command line
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
import yaml

DEFAULT_CONFIG_PATH = Path("~/.config/termtop/config.yaml")


class ConfigError(Exception):
    """A config file could not be parsed or holds invalid values."""

    def __init__(self, message: str, *, file_path: str | None = None) -> None:
        self.message = message
        self.file_path = file_path
        super().__init__(f"Error in {file_path}: {message}" if file_path else message)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    file: str = "~/.termtop/termtop.log"


class Settings(BaseModel):
    """Runtime settings for a termtop session."""

    model_config = ConfigDict(extra="forbid")

    interval: float = Field(default=2.0, ge=0.1, le=3600)
    list_limit: int = Field(default=15, ge=1)
    top_default: int = Field(default=15, ge=1)
    color: bool = True
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_config_path(config_path: str | Path | None = None) -> Path | None:
    """Resolve the config file to read.

    An explicit path must exist. Without one, the default location is used
    when a file is present there.

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.is_file() else None


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load and validate settings.

    Args:
        config_path: Optional custom config file path
        overrides: Optional dict of command-line overrides; None values are ignored

    Raises:
        FileNotFoundError: If a custom config path doesn't exist
        ConfigError: If the file is not valid YAML or holds invalid values
    """
    data: dict[str, Any] = {}
    path = get_config_path(config_path)
    if path is not None:
        try:
            loaded = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {e}", file_path=str(path)) from e
        if not isinstance(loaded, dict):
            raise ConfigError("Top level must be a mapping", file_path=str(path))
        data = loaded

    if overrides:
        data = deep_merge(data, {key: value for key, value in overrides.items() if value is not None})

    try:
        return Settings.model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigError(problems, file_path=str(path) if path else None) from e
