"""Configuration management for the prog task tracker."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

import click
import yaml

from .errors import ConfigError


logger = logging.getLogger(__name__)

APP_NAME = "prog"
TASKS_FILENAME = "tasks.json"
CONFIG_FILENAME = "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConfigModel:
    """Runtime preferences, read from an optional YAML file."""

    # Explicit task file; None means the per-user app directory
    tasks_file: Optional[str] = None

    log_level: str = "WARNING"
    no_color: bool = False

    def __post_init__(self):
        if self.tasks_file is not None:
            self.tasks_file = str(Path(str(self.tasks_file)).expanduser())

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level '{self.log_level}', expected one of {', '.join(LOG_LEVELS)}"
            )

        if not isinstance(self.no_color, bool):
            raise ConfigError(f"no_color must be true or false, got {self.no_color!r}")

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "tasks_file": self.tasks_file,
            "log_level": self.log_level,
            "no_color": self.no_color,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping of settings")

        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            logger.warning("Ignoring unknown config key: %s", key)

        return cls(**{key: value for key, value in data.items() if key in known})


def get_app_dir() -> Path:
    """Per-user application directory for the current platform."""
    return Path(click.get_app_dir(APP_NAME))


def default_config_path() -> Path:
    return get_app_dir() / CONFIG_FILENAME


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigModel:
    """Load configuration from file, or defaults if there is none.

    An explicit config_path must exist; the default location is optional.

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    explicit = config_path is not None
    path = Path(config_path).expanduser() if explicit else default_config_path()

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return ConfigModel()

    try:
        with open(path, "r", encoding="utf-8") as f:
            yaml_content = f.read()
    except OSError as e:
        raise ConfigError(f"Failed to read config from {path}: {e}") from e

    config = ConfigModel.from_yaml(yaml_content)
    logger.debug("Loaded configuration from %s", path)
    return config


def resolve_tasks_path(
    config: Optional[ConfigModel] = None,
    override: Optional[Union[str, Path]] = None,
) -> Path:
    """Work out where the task file lives. Never raises.

    Order: explicit override, the config's tasks_file, the app directory
    (created if missing), the current directory, and finally a bare
    relative path.
    """
    if override:
        return Path(override).expanduser()

    if config is not None and config.tasks_file:
        return Path(config.tasks_file)

    try:
        data_dir = get_app_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir / TASKS_FILENAME
    except (OSError, RuntimeError) as e:
        logger.warning("Could not use app data directory (%s), falling back to current directory", e)

    try:
        return Path.cwd() / TASKS_FILENAME
    except OSError as e:
        logger.warning("Could not resolve current directory (%s)", e)

    return Path(TASKS_FILENAME)
