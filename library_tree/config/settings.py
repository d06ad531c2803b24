"""Configuration for the library-tree CLI.

Configuration is read from a YAML file and validated before use. A
typical file looks like:

    modules:
      - myapp.models
      - myapp.services
    logging:
      level: warn
      format: text
    render:
      format: text
      sort: true
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from library_tree.utils.logging import LEVEL_MAP
from library_tree.utils.result import ConfigError, Err, Ok, Result

DEFAULT_CONFIG_FILE = "library-tree.yaml"

LOG_FORMATS = ("json", "text")
RENDER_FORMATS = ("text", "json")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class RenderConfig:
    """Forest output settings."""

    format: str = "text"
    sort: bool = False


@dataclass
class TrackerConfig:
    """
    Complete CLI configuration.

    ``modules`` lists dotted module paths to import before reading the
    registry, so that their classes get a chance to register.
    """

    modules: list[str] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> Result["TrackerConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        if not isinstance(data, dict):
            return Err(ConfigError(
                field="yaml",
                message="Top level of the configuration must be a mapping",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["TrackerConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        modules = data.get("modules") or []
        if isinstance(modules, str):
            modules = [modules]
        if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
            return Err(ConfigError(
                field="modules",
                message="Must be a list of dotted module paths",
            ))

        logging_data = data.get("logging") or {}
        render_data = data.get("render") or {}
        for name, section in (("logging", logging_data), ("render", render_data)):
            if not isinstance(section, dict):
                return Err(ConfigError(
                    field=name,
                    message=f"Must be a mapping, got {type(section).__name__}",
                ))

        sort = render_data.get("sort", False)
        if not isinstance(sort, bool):
            return Err(ConfigError(
                field="render.sort",
                message=f"Must be true or false, got {sort!r}",
            ))

        config = cls(
            modules=list(modules),
            logging=LoggingConfig(
                level=str(logging_data.get("level", "info")),
                format=str(logging_data.get("format", "json")),
            ),
            render=RenderConfig(
                format=str(render_data.get("format", "text")),
                sort=sort,
            ),
        )

        validation_result = config.validate()
        if validation_result.is_err():
            return Err(validation_result.unwrap_err())

        return Ok(config)

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if self.logging.level.lower() not in LEVEL_MAP:
            return Err(ConfigError(
                field="logging.level",
                message=f"Must be one of {sorted(LEVEL_MAP)}, got {self.logging.level!r}",
            ))
        if self.logging.format not in LOG_FORMATS:
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be one of {list(LOG_FORMATS)}, got {self.logging.format!r}",
            ))
        if self.render.format not in RENDER_FORMATS:
            return Err(ConfigError(
                field="render.format",
                message=f"Must be one of {list(RENDER_FORMATS)}, got {self.render.format!r}",
            ))

        return Ok(None)


def load_config(path: Optional[Path] = None) -> Result[TrackerConfig, ConfigError]:
    """
    Load configuration from the given file or the default location.

    An explicit path must exist. Without one, ./library-tree.yaml is used
    when present and the built-in defaults otherwise.

    Args:
        path: Configuration file (optional)

    Returns:
        Result with loaded config or error
    """
    if path is not None:
        return TrackerConfig.from_yaml(Path(path))

    default_path = Path(DEFAULT_CONFIG_FILE)
    if default_path.exists():
        return TrackerConfig.from_yaml(default_path)

    return Ok(TrackerConfig())
