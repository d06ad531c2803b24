"""Configuration module for library-tree."""

from library_tree.config.settings import (
    LoggingConfig,
    RenderConfig,
    TrackerConfig,
    load_config,
)

__all__ = ["LoggingConfig", "RenderConfig", "TrackerConfig", "load_config"]
