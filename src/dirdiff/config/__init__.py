"""Configuration loading, schema, and defaults."""

from dirdiff.config.loader import ConfigError, load_config
from dirdiff.config.schema import DirDiffConfig

__all__ = [
    "ConfigError",
    "DirDiffConfig",
    "load_config",
]
